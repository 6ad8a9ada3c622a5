"""
Deck builder view.

Lists the user's decks, shows the cards of the selected deck, and keeps
every deck at or under the 100 cards a Commander deck must hold.

Completeness of the selected deck:

    EMPTY (0 cards) -> INCOMPLETE (1..99, warning) -> COMPLETE (100, success)

Adding a card is refused at 100, so a deck can only leave COMPLETE by
having a card removed.
"""

import asyncio
import logging
from enum import Enum

from commanders_vault.models.card import Card
from commanders_vault.models.deck import (
    Completeness,
    Deck,
    DeckCard,
    banner_for,
    can_add_card,
    completeness,
    deck_total,
)
from commanders_vault.models.failure import (
    DeckFullError,
    FailureKind,
    KnownError,
    NotAuthenticatedError,
    PersistenceError,
)
from commanders_vault.views.base import View
from commanders_vault.views.session import SessionProvider

logger = logging.getLogger(__name__)


class DeckBuilderMode(str, Enum):
    IDLE = "idle"
    CREATING_DECK = "creating_deck"
    ADDING_CARD = "adding_card"


class DeckBuilderView(View):
    """State and actions of the decks tab."""

    def __init__(self, session: SessionProvider) -> None:
        super().__init__()
        self.session = session
        self.decks: list[Deck] = []
        self.selected_deck_id: str | None = None
        self.deck_cards: list[DeckCard] = []
        self.available_cards: list[Card] = []
        self.loading = True
        self.mode = DeckBuilderMode.IDLE
        # Serialises adds so the 100-card check holds for concurrent requests
        self._add_lock = asyncio.Lock()

    async def on_mount(self) -> None:
        await self.load_decks()
        await self.load_available_cards()

    # --- Derived state ---

    @property
    def selected_deck(self) -> Deck | None:
        for deck in self.decks:
            if deck.id == self.selected_deck_id:
                return deck
        return None

    @property
    def card_count(self) -> int:
        return deck_total(self.deck_cards)

    @property
    def completeness(self) -> Completeness:
        return completeness(self.card_count)

    @property
    def banner(self) -> str | None:
        return banner_for(self.card_count)

    @property
    def can_add_cards(self) -> bool:
        return self.selected_deck_id is not None and can_add_card(self.card_count)

    def _user_id(self) -> str:
        user = self.session.user
        if user is None:
            raise NotAuthenticatedError()
        return user.id

    # --- Loads (failures keep previous state) ---

    async def load_decks(self) -> None:
        user = self.session.user
        generation = self._begin("decks")
        try:
            if user is None:
                return
            decks = await self.session.store().list_decks(user.id)
        except (PersistenceError, NotAuthenticatedError) as e:
            logger.warning("load_decks_failed", extra={"error": str(e)})
        else:
            if self._is_current("decks", generation):
                self.decks = decks
        finally:
            if self.mounted:
                self.loading = False

    async def load_deck_cards(self) -> None:
        """Reload the cards of the selected deck."""
        deck_id = self.selected_deck_id
        if deck_id is None:
            return

        generation = self._begin("deck_cards")
        try:
            deck_cards = await self.session.store().list_deck_cards(self._user_id(), deck_id)
        except (PersistenceError, NotAuthenticatedError) as e:
            logger.warning("load_deck_cards_failed", extra={"deck_id": deck_id, "error": str(e)})
            return

        # Selection may have moved on while the request was in flight
        if self._is_current("deck_cards", generation) and self.selected_deck_id == deck_id:
            self.deck_cards = deck_cards

    async def load_available_cards(self) -> None:
        """Reload the pool of owned cards that can be added to a deck."""
        user = self.session.user
        if user is None:
            return

        generation = self._begin("available")
        try:
            user_cards = await self.session.store().list_user_cards(user.id)
        except (PersistenceError, NotAuthenticatedError) as e:
            logger.warning("load_available_cards_failed", extra={"error": str(e)})
            return

        if self._is_current("available", generation):
            self.available_cards = [uc.card for uc in user_cards if uc.card is not None]

    # --- Selection and dialogs ---

    async def select_deck(self, deck_id: str) -> Deck:
        """
        Select a deck and load its cards.

        Raises:
            KnownError: If the deck is not in the user's list
        """
        deck = self._require_deck(deck_id)
        if self.selected_deck_id != deck_id:
            self.selected_deck_id = deck_id
            self.deck_cards = []
        await self.load_deck_cards()
        return deck

    def open_create_deck(self) -> None:
        self.mode = DeckBuilderMode.CREATING_DECK

    def open_add_card(self) -> None:
        """Open the card picker; only possible while the selected deck has room."""
        if not self.can_add_cards:
            return
        self.mode = DeckBuilderMode.ADDING_CARD

    def close_dialog(self) -> None:
        self.mode = DeckBuilderMode.IDLE

    # --- Mutations ---

    async def create_deck(self, name: str) -> Deck | None:
        """
        Create an empty deck and put it at the top of the list.

        The selection is left alone. Returns None (state unchanged) if the
        store rejected the insert.
        """
        user = self.session.user
        if user is None:
            raise NotAuthenticatedError()

        try:
            deck = await self.session.store().insert_deck(user.id, name, description="")
        except PersistenceError as e:
            logger.warning("create_deck_failed", extra={"error": e.message})
            return None

        logger.info("deck_created", extra={"deck_id": deck.id, "user_id": user.id})
        if self.mounted:
            self.decks = [deck, *self.decks]
            self.mode = DeckBuilderMode.IDLE
        return deck

    def _require_deck(self, deck_id: str) -> Deck:
        deck = next((d for d in self.decks if d.id == deck_id), None)
        if deck is None:
            raise KnownError(
                kind=FailureKind.NOT_FOUND,
                message=f"Deck '{deck_id}' not found",
                status_code=404,
            )
        return deck

    async def delete_deck(self, deck_id: str) -> bool:
        """
        Delete one of the listed decks.

        If it was selected, the selection and its cards are cleared too.
        Returns False (state unchanged) if the store rejected the delete.

        Raises:
            KnownError: If the deck is not in the user's list
        """
        self._require_deck(deck_id)
        try:
            await self.session.store().delete_deck(self._user_id(), deck_id)
        except PersistenceError as e:
            logger.warning("delete_deck_failed", extra={"deck_id": deck_id, "error": e.message})
            return False

        logger.info("deck_deleted", extra={"deck_id": deck_id})
        if self.mounted:
            self.decks = [d for d in self.decks if d.id != deck_id]
            if self.selected_deck_id == deck_id:
                self.selected_deck_id = None
                self.deck_cards = []
                self.mode = DeckBuilderMode.IDLE
        return True

    async def add_card_to_deck(self, card_id: str, deck_id: str | None = None) -> DeckCard:
        """
        Add one copy of a card to a deck (the selected one by default).

        Adds run one at a time, and the new row counts towards the total
        even if the reload after the insert fails.

        Raises:
            DeckFullError: The deck already holds 100 cards; nothing is written
            PersistenceError: The store rejected the insert; the picker stays open
            KnownError: No deck is selected
        """
        async with self._add_lock:
            if deck_id is not None and deck_id != self.selected_deck_id:
                await self.select_deck(deck_id)

            target = self.selected_deck_id
            if target is None:
                raise KnownError(
                    kind=FailureKind.INVALID_INPUT,
                    message="Select a deck before adding cards",
                )

            total = self.card_count
            if not can_add_card(total):
                raise DeckFullError(total)

            try:
                deck_card = await self.session.store().insert_deck_card(
                    self._user_id(), target, card_id, quantity=1
                )
            except PersistenceError as e:
                raise PersistenceError(f"Error: {e.message}", detail=e.detail) from e

            if self.selected_deck_id == target and all(
                dc.id != deck_card.id for dc in self.deck_cards
            ):
                self.deck_cards = [*self.deck_cards, deck_card]
            await self.load_deck_cards()
            if self.mounted:
                self.mode = DeckBuilderMode.IDLE
            return deck_card

    async def remove_card_from_deck(self, deck_card_id: str) -> bool:
        """
        Remove a card row from the selected deck. Returns False if the store refused.

        Raises:
            KnownError: If the row is not in the selected deck
        """
        if all(dc.id != deck_card_id for dc in self.deck_cards):
            raise KnownError(
                kind=FailureKind.NOT_FOUND,
                message=f"Deck card '{deck_card_id}' not found",
                status_code=404,
            )

        try:
            await self.session.store().delete_deck_card(self._user_id(), deck_card_id)
        except PersistenceError as e:
            logger.warning(
                "remove_deck_card_failed",
                extra={"deck_card_id": deck_card_id, "error": e.message},
            )
            return False

        await self.load_deck_cards()
        return True
