"""
Collection view.

Lists the cards the signed-in user owns, filters them by name in memory,
and lets the user type in a new card definition that is created and added
to their collection in one step.
"""

import logging
from enum import Enum

from commanders_vault.models.card import Card, ColorBucket, color_bucket
from commanders_vault.models.collection import CardDraft, UserCard, filter_by_name
from commanders_vault.models.failure import NotAuthenticatedError, PersistenceError
from commanders_vault.views.base import View
from commanders_vault.views.session import SessionProvider

logger = logging.getLogger(__name__)


class CollectionMode(str, Enum):
    BROWSING = "browsing"
    ADDING_CARD = "adding_card"


class CollectionView(View):
    """State and actions of the collection tab."""

    def __init__(self, session: SessionProvider) -> None:
        super().__init__()
        self.session = session
        self.user_cards: list[UserCard] = []
        self.loading = True
        self.mode = CollectionMode.BROWSING
        self.draft = CardDraft()
        self.search_term = ""

    async def on_mount(self) -> None:
        await self.load_cards()

    @property
    def filtered_cards(self) -> list[UserCard]:
        """Owned cards whose name contains the search term, ignoring case."""
        return filter_by_name(self.user_cards, self.search_term)

    def search(self, term: str) -> list[UserCard]:
        self.search_term = term
        return self.filtered_cards

    @staticmethod
    def color_bucket(colors: list[str] | None) -> ColorBucket:
        return color_bucket(colors)

    async def load_cards(self) -> None:
        """
        Replace the list with the user's cards.

        Failures keep the previous list and are only logged.
        """
        user = self.session.user
        generation = self._begin("cards")
        try:
            if user is None:
                return
            rows = await self.session.store().list_user_cards(user.id)
        except (PersistenceError, NotAuthenticatedError) as e:
            logger.warning("load_cards_failed", extra={"error": str(e)})
        else:
            if self._is_current("cards", generation):
                self.user_cards = rows
        finally:
            if self.mounted:
                self.loading = False

    def open_add_card(self) -> None:
        self.mode = CollectionMode.ADDING_CARD

    def cancel_add_card(self) -> None:
        self.mode = CollectionMode.BROWSING

    async def create_card(self, draft: CardDraft | None = None) -> Card:
        """
        Create a card definition and add one copy to the user's collection.

        The form stays open with its contents intact if either step fails,
        and the collection link is never attempted when the card insert fails.

        Raises:
            PersistenceError: Naming the step that failed
            NotAuthenticatedError: If nobody is signed in
        """
        if draft is not None:
            self.draft = draft
        self.mode = CollectionMode.ADDING_CARD

        user = self.session.user
        if user is None:
            raise NotAuthenticatedError()
        store = self.session.store()

        try:
            card = await store.insert_card(self.draft.to_row())
        except PersistenceError as e:
            raise PersistenceError(f"Error creating card: {e.message}", detail=e.detail) from e

        try:
            await store.insert_user_card(user.id, card.id, quantity=1)
        except PersistenceError as e:
            raise PersistenceError(
                f"Error adding to collection: {e.message}", detail=e.detail
            ) from e

        logger.info("card_added", extra={"card_id": card.id, "user_id": user.id})

        if self.mounted:
            self.mode = CollectionMode.BROWSING
            self.draft = CardDraft()
            await self.load_cards()
        return card
