from dataclasses import dataclass
from enum import Enum
from typing import Any

from commanders_vault.models.card import Card, as_timestamp, embedded_card

# A Commander deck is exactly this many cards, commander included
COMMANDER_DECK_SIZE = 100


class Completeness(str, Enum):
    """Where a deck stands against the 100-card rule."""

    EMPTY = "empty"
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"


INCOMPLETE_BANNER = "Commander decks require exactly 100 cards"
COMPLETE_BANNER = "Deck is complete and ready to play!"


@dataclass
class Deck:
    """
    A user's Commander deck.

    Attributes:
        commander_id: Card leading the deck, if one has been chosen
        commander: The joined commander Card (None when unset)
    """

    id: str
    user_id: str
    name: str
    commander_id: str | None = None
    description: str | None = None
    color_identity: list[str] | None = None
    created_at: str | None = None
    updated_at: str | None = None
    commander: Card | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Deck":
        """Build a Deck from a `decks` row with optional `cards(*)` join on the commander."""
        commander_id = row.get("commander_id")
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            name=row.get("name") or "",
            commander_id=str(commander_id) if commander_id is not None else None,
            description=row.get("description"),
            color_identity=row.get("color_identity"),
            created_at=as_timestamp(row.get("created_at")),
            updated_at=as_timestamp(row.get("updated_at")),
            commander=embedded_card(row),
        )


@dataclass
class DeckCard:
    """
    A card's membership in a deck.

    `category` (lands, ramp, removal, ...) is stored but nothing reads or
    writes it yet.
    """

    id: str
    deck_id: str
    card_id: str
    quantity: int = 1
    category: str | None = None
    created_at: str | None = None
    card: Card | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DeckCard":
        return cls(
            id=str(row["id"]),
            deck_id=str(row["deck_id"]),
            card_id=str(row["card_id"]),
            quantity=int(row.get("quantity") or 0),
            category=row.get("category"),
            created_at=as_timestamp(row.get("created_at")),
            card=embedded_card(row),
        )


def deck_total(deck_cards: list[DeckCard]) -> int:
    """Total cards in a deck, counting every copy."""
    return sum(dc.quantity for dc in deck_cards)


def completeness(total: int) -> Completeness:
    if total == COMMANDER_DECK_SIZE:
        return Completeness.COMPLETE
    if total == 0:
        return Completeness.EMPTY
    return Completeness.INCOMPLETE


def banner_for(total: int) -> str | None:
    """Message shown above the deck list, or None when the deck is empty."""
    state = completeness(total)
    if state is Completeness.COMPLETE:
        return COMPLETE_BANNER
    if state is Completeness.INCOMPLETE:
        return INCOMPLETE_BANNER
    return None


def can_add_card(total: int) -> bool:
    return total < COMMANDER_DECK_SIZE
