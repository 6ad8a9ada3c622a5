"""
Database CRUD operations.

Provides async functions for reading, inserting and deleting rows in the
four hosted tables over a direct SQLAlchemy connection.
"""

from typing import Any

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from commanders_vault.models.card import Card
from commanders_vault.models.collection import UserCard
from commanders_vault.models.db import CardDB, DeckCardDB, DeckDB, UserCardDB
from commanders_vault.models.deck import Deck, DeckCard

# Card fields a caller may set on insert; id and created_at are assigned here
_CARD_FIELDS = frozenset(
    {
        "name",
        "mana_cost",
        "type_line",
        "oracle_text",
        "colors",
        "color_identity",
        "power",
        "toughness",
        "rarity",
        "set_code",
        "image_url",
        "is_legendary",
    }
)

# --- Card Operations ---


async def create_card(session: AsyncSession, fields: dict[str, Any]) -> CardDB:
    """
    Insert a card definition.

    Unknown keys in `fields` are ignored.
    """
    card = CardDB(**{k: v for k, v in fields.items() if k in _CARD_FIELDS})
    session.add(card)
    await session.flush()
    return card


async def get_card(session: AsyncSession, card_id: str) -> CardDB | None:
    result = await session.execute(select(CardDB).where(CardDB.id == card_id))
    return result.scalar_one_or_none()


def card_to_model(card: CardDB) -> Card:
    """Convert a database card to a domain model."""
    return Card.from_row(card.to_row())


# --- Collection Operations ---


async def get_user_cards(session: AsyncSession, user_id: str) -> list[UserCardDB]:
    """Get every ownership row for a user, with its card loaded."""
    result = await session.execute(
        select(UserCardDB)
        .where(UserCardDB.user_id == user_id)
        .options(selectinload(UserCardDB.card))
    )
    return list(result.scalars().all())


async def create_user_card(
    session: AsyncSession, user_id: str, card_id: str, quantity: int = 1
) -> UserCardDB:
    """
    Record that a user owns copies of a card.

    Always inserts a new row, even if the user already owns this card.
    """
    user_card = UserCardDB(user_id=user_id, card_id=card_id, quantity=quantity)
    session.add(user_card)
    await session.flush()
    return user_card


def user_card_to_model(user_card: UserCardDB) -> UserCard:
    """Convert a database ownership row to a domain model."""
    joined = _loaded(user_card, "card")
    return UserCard(
        id=user_card.id,
        user_id=user_card.user_id,
        card_id=user_card.card_id,
        quantity=user_card.quantity,
        created_at=user_card.created_at.isoformat() if user_card.created_at else None,
        card=card_to_model(joined) if joined is not None else None,
    )


# --- Deck Operations ---


async def get_decks(session: AsyncSession, user_id: str) -> list[DeckDB]:
    """Get a user's decks, newest first, with commanders loaded."""
    result = await session.execute(
        select(DeckDB)
        .where(DeckDB.user_id == user_id)
        .options(selectinload(DeckDB.commander))
        .order_by(DeckDB.created_at.desc())
    )
    return list(result.scalars().all())


async def get_deck(session: AsyncSession, deck_id: str, user_id: str) -> DeckDB | None:
    """Get one of a user's decks with its cards loaded; None if missing or not theirs."""
    result = await session.execute(
        select(DeckDB)
        .where(DeckDB.id == deck_id, DeckDB.user_id == user_id)
        .options(selectinload(DeckDB.cards))
    )
    return result.scalar_one_or_none()


async def create_deck(
    session: AsyncSession, user_id: str, name: str, description: str = ""
) -> DeckDB:
    """Create a deck with no commander."""
    deck = DeckDB(user_id=user_id, name=name, description=description)
    session.add(deck)
    await session.flush()
    return deck


async def delete_deck(session: AsyncSession, deck_id: str, user_id: str) -> bool:
    """
    Delete one of a user's decks and all of its cards.

    Returns True if deleted, False if not found or owned by someone else.
    """
    # Cards must be loaded for the ORM cascade to see them
    deck = await get_deck(session, deck_id, user_id)
    if not deck:
        return False

    await session.delete(deck)
    await session.flush()
    return True


def deck_to_model(deck: DeckDB) -> Deck:
    """Convert a database deck to a domain model."""
    commander = _loaded(deck, "commander")
    return Deck(
        id=deck.id,
        user_id=deck.user_id,
        name=deck.name,
        commander_id=deck.commander_id,
        description=deck.description,
        color_identity=deck.color_identity,
        created_at=deck.created_at.isoformat() if deck.created_at else None,
        updated_at=deck.updated_at.isoformat() if deck.updated_at else None,
        commander=card_to_model(commander) if commander is not None else None,
    )


# --- Deck Card Operations ---


async def get_deck_cards(session: AsyncSession, deck_id: str, user_id: str) -> list[DeckCardDB]:
    """Get every card row of one of a user's decks, with its card loaded."""
    result = await session.execute(
        select(DeckCardDB)
        .join(DeckDB, DeckCardDB.deck_id == DeckDB.id)
        .where(DeckCardDB.deck_id == deck_id, DeckDB.user_id == user_id)
        .options(selectinload(DeckCardDB.card))
    )
    return list(result.scalars().all())


async def create_deck_card(
    session: AsyncSession, deck_id: str, card_id: str, quantity: int = 1
) -> DeckCardDB:
    deck_card = DeckCardDB(deck_id=deck_id, card_id=card_id, quantity=quantity)
    session.add(deck_card)
    await session.flush()
    return deck_card


async def delete_deck_card(session: AsyncSession, deck_card_id: str, user_id: str) -> bool:
    """
    Remove a card row from one of a user's decks.

    Returns True if deleted, False if not found or owned by someone else.
    """
    result = await session.execute(
        select(DeckCardDB)
        .join(DeckDB, DeckCardDB.deck_id == DeckDB.id)
        .where(DeckCardDB.id == deck_card_id, DeckDB.user_id == user_id)
    )
    deck_card = result.scalar_one_or_none()
    if not deck_card:
        return False

    await session.delete(deck_card)
    await session.flush()
    return True


def deck_card_to_model(deck_card: DeckCardDB) -> DeckCard:
    """Convert a database deck card to a domain model."""
    card = _loaded(deck_card, "card")
    return DeckCard(
        id=deck_card.id,
        deck_id=deck_card.deck_id,
        card_id=deck_card.card_id,
        quantity=deck_card.quantity,
        category=deck_card.category,
        created_at=deck_card.created_at.isoformat() if deck_card.created_at else None,
        card=card_to_model(card) if card is not None else None,
    )


def _loaded(obj: Any, relationship_name: str) -> Any:
    """Value of a relationship if it was eagerly loaded, else None (never lazy loads)."""
    if relationship_name in inspect(obj).unloaded:
        return None
    return getattr(obj, relationship_name)
