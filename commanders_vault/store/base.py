"""Table-scoped store interface the views talk to."""

from abc import ABC, abstractmethod
from typing import Any

from commanders_vault.models.card import Card
from commanders_vault.models.collection import UserCard
from commanders_vault.models.deck import Deck, DeckCard


class CardStore(ABC):
    """
    Reads and writes the four hosted tables.

    Every method raises PersistenceError when the store rejects the request.
    Deck operations take the acting user's id and never touch another
    user's decks, whatever the backend.
    Joined rows (a UserCard's card, a Deck's commander, a DeckCard's card)
    are populated by the list methods only; insert methods return the bare row.
    """

    @abstractmethod
    async def list_user_cards(self, user_id: str) -> list[UserCard]:
        """Ownership rows for a user, each with its Card"""

    @abstractmethod
    async def insert_card(self, fields: dict[str, Any]) -> Card:
        """Create a card definition and return it"""

    @abstractmethod
    async def insert_user_card(self, user_id: str, card_id: str, quantity: int = 1) -> UserCard:
        """Link a card to a user's collection"""

    @abstractmethod
    async def list_decks(self, user_id: str) -> list[Deck]:
        """A user's decks with their commanders, newest first"""

    @abstractmethod
    async def insert_deck(self, user_id: str, name: str, description: str = "") -> Deck:
        """Create a deck with no commander"""

    @abstractmethod
    async def delete_deck(self, user_id: str, deck_id: str) -> None:
        """Delete one of the user's decks; its cards go with it. Fails if nothing matched"""

    @abstractmethod
    async def list_deck_cards(self, user_id: str, deck_id: str) -> list[DeckCard]:
        """Cards in one of the user's decks, each with its Card"""

    @abstractmethod
    async def insert_deck_card(
        self, user_id: str, deck_id: str, card_id: str, quantity: int = 1
    ) -> DeckCard:
        """Add a card row to one of the user's decks"""

    @abstractmethod
    async def delete_deck_card(self, user_id: str, deck_card_id: str) -> None:
        """Remove a card row from one of the user's decks. Fails if nothing matched"""

    @abstractmethod
    async def ping(self) -> bool:
        """True if the store answered a trivial request"""
