"""CardStore backed by the hosted table REST interface."""

import logging
from collections.abc import Callable
from typing import Any

import httpx
from supabase import AsyncClient, PostgrestAPIError

from commanders_vault.hosted.client import connect, error_message
from commanders_vault.models.card import Card
from commanders_vault.models.collection import UserCard
from commanders_vault.models.deck import Deck, DeckCard
from commanders_vault.models.failure import PersistenceError
from commanders_vault.store.base import CardStore

logger = logging.getLogger(__name__)

# Row plus the Card it references
_WITH_CARD = "*,cards(*)"

# Deck card row plus its Card, kept only if the owning deck belongs to the filter
_DECK_CARD_OWNED = "*,cards(*),decks!inner(user_id)"

# Matches no row; used to probe the store cheaply
_NIL_ID = "00000000-0000-0000-0000-000000000000"


class RestStore(CardStore):
    """
    Store that sends every operation to the REST interface.

    The client is created on first use and carries the signed-in user's
    access token so the service's row-level policies apply. Deck operations
    filter on the owner as well.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        access_token: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.url = url
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self._client: AsyncClient | None = None

    async def client(self) -> AsyncClient:
        if self._client is None:
            self._client = await connect(
                self.url, self.api_key, access_token=self.access_token, timeout=self.timeout
            )
        return self._client

    async def _rows(self, table: str, build: Callable[[Any], Any]) -> list[dict[str, Any]]:
        """
        Run one request against `table`.

        Raises:
            PersistenceError: If the service rejected the request or was unreachable
        """
        client = await self.client()
        try:
            response = await build(client.table(table)).execute()
        except PostgrestAPIError as e:
            logger.warning("store_request_rejected", extra={"table": table, "code": e.code})
            raise PersistenceError(error_message(e), detail=e.code) from e
        except httpx.HTTPError as e:
            logger.warning("store_request_failed", extra={"table": table, "error": str(e)})
            raise PersistenceError(str(e) or type(e).__name__) from e
        return list(response.data or [])

    async def _insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        rows = await self._rows(table, lambda q: q.insert(row))
        if not rows:
            raise PersistenceError(f"Insert into '{table}' returned no row")
        return rows[0]

    async def list_user_cards(self, user_id: str) -> list[UserCard]:
        rows = await self._rows(
            "user_cards", lambda q: q.select(_WITH_CARD).eq("user_id", user_id)
        )
        return [UserCard.from_row(row) for row in rows]

    async def insert_card(self, fields: dict[str, Any]) -> Card:
        return Card.from_row(await self._insert("cards", fields))

    async def insert_user_card(self, user_id: str, card_id: str, quantity: int = 1) -> UserCard:
        row = await self._insert(
            "user_cards", {"user_id": user_id, "card_id": card_id, "quantity": quantity}
        )
        return UserCard.from_row(row)

    async def list_decks(self, user_id: str) -> list[Deck]:
        rows = await self._rows(
            "decks",
            lambda q: q.select(_WITH_CARD).eq("user_id", user_id).order("created_at", desc=True),
        )
        return [Deck.from_row(row) for row in rows]

    async def insert_deck(self, user_id: str, name: str, description: str = "") -> Deck:
        row = await self._insert(
            "decks", {"user_id": user_id, "name": name, "description": description}
        )
        return Deck.from_row(row)

    async def delete_deck(self, user_id: str, deck_id: str) -> None:
        deleted = await self._rows(
            "decks", lambda q: q.delete().eq("id", deck_id).eq("user_id", user_id)
        )
        if not deleted:
            raise PersistenceError(f"Deck {deck_id} not found")

    async def list_deck_cards(self, user_id: str, deck_id: str) -> list[DeckCard]:
        rows = await self._rows(
            "deck_cards",
            lambda q: q.select(_DECK_CARD_OWNED)
            .eq("deck_id", deck_id)
            .eq("decks.user_id", user_id),
        )
        return [DeckCard.from_row(row) for row in rows]

    async def insert_deck_card(
        self, user_id: str, deck_id: str, card_id: str, quantity: int = 1
    ) -> DeckCard:
        owned = await self._rows(
            "decks", lambda q: q.select("id").eq("id", deck_id).eq("user_id", user_id)
        )
        if not owned:
            raise PersistenceError(f"Deck {deck_id} not found")

        row = await self._insert(
            "deck_cards", {"deck_id": deck_id, "card_id": card_id, "quantity": quantity}
        )
        return DeckCard.from_row(row)

    async def delete_deck_card(self, user_id: str, deck_card_id: str) -> None:
        owned = await self._rows(
            "deck_cards",
            lambda q: q.select("id,decks!inner(user_id)")
            .eq("id", deck_card_id)
            .eq("decks.user_id", user_id),
        )
        if not owned:
            raise PersistenceError(f"Deck card {deck_card_id} not found")

        await self._rows("deck_cards", lambda q: q.delete().eq("id", deck_card_id))

    async def ping(self) -> bool:
        try:
            await self._rows("cards", lambda q: q.select("id").eq("id", _NIL_ID))
        except PersistenceError:
            return False
        return True
