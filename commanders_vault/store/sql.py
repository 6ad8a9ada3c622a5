"""CardStore backed by a direct SQLAlchemy connection to the hosted Postgres."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from commanders_vault.db import operations as ops
from commanders_vault.models.card import Card
from commanders_vault.models.collection import UserCard
from commanders_vault.models.deck import Deck, DeckCard
from commanders_vault.models.failure import PersistenceError
from commanders_vault.store.base import CardStore

logger = logging.getLogger(__name__)


class SqlStore(CardStore):
    """
    Store that runs every operation in its own session and transaction.

    A direct connection bypasses the service's row-level policies, so every
    user-scoped query filters on user_id explicitly.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.warning("store_transaction_failed", extra={"error": str(e)})
                raise PersistenceError(str(e.orig) if getattr(e, "orig", None) else str(e)) from e

    async def list_user_cards(self, user_id: str) -> list[UserCard]:
        async with self._session() as session:
            rows = await ops.get_user_cards(session, user_id)
            return [ops.user_card_to_model(row) for row in rows]

    async def insert_card(self, fields: dict[str, Any]) -> Card:
        async with self._session() as session:
            card = await ops.create_card(session, fields)
            return ops.card_to_model(card)

    async def insert_user_card(self, user_id: str, card_id: str, quantity: int = 1) -> UserCard:
        async with self._session() as session:
            if await ops.get_card(session, card_id) is None:
                raise PersistenceError(f"Card {card_id} does not exist")
            user_card = await ops.create_user_card(session, user_id, card_id, quantity)
            return ops.user_card_to_model(user_card)

    async def list_decks(self, user_id: str) -> list[Deck]:
        async with self._session() as session:
            rows = await ops.get_decks(session, user_id)
            return [ops.deck_to_model(row) for row in rows]

    async def insert_deck(self, user_id: str, name: str, description: str = "") -> Deck:
        async with self._session() as session:
            deck = await ops.create_deck(session, user_id, name, description)
            return ops.deck_to_model(deck)

    async def delete_deck(self, user_id: str, deck_id: str) -> None:
        async with self._session() as session:
            if not await ops.delete_deck(session, deck_id, user_id):
                raise PersistenceError(f"Deck {deck_id} not found")

    async def list_deck_cards(self, user_id: str, deck_id: str) -> list[DeckCard]:
        async with self._session() as session:
            rows = await ops.get_deck_cards(session, deck_id, user_id)
            return [ops.deck_card_to_model(row) for row in rows]

    async def insert_deck_card(
        self, user_id: str, deck_id: str, card_id: str, quantity: int = 1
    ) -> DeckCard:
        async with self._session() as session:
            if await ops.get_deck(session, deck_id, user_id) is None:
                raise PersistenceError(f"Deck {deck_id} does not exist")
            if await ops.get_card(session, card_id) is None:
                raise PersistenceError(f"Card {card_id} does not exist")
            deck_card = await ops.create_deck_card(session, deck_id, card_id, quantity)
            return ops.deck_card_to_model(deck_card)

    async def delete_deck_card(self, user_id: str, deck_card_id: str) -> None:
        async with self._session() as session:
            if not await ops.delete_deck_card(session, deck_card_id, user_id):
                raise PersistenceError(f"Deck card {deck_card_id} not found")

    async def ping(self) -> bool:
        try:
            async with self._session() as session:
                await session.execute(text("SELECT 1"))
        except PersistenceError:
            return False
        return True
