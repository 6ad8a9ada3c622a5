from dataclasses import dataclass, field
from typing import Any

from commanders_vault.models.card import Card, as_timestamp, embedded_card


@dataclass
class CardDraft:
    """
    Fields of a card being typed into the "add card" form.

    Only these fields are sent when the card is created; everything else
    on the new Card row stays empty.
    """

    name: str = ""
    type_line: str = ""
    mana_cost: str = ""
    colors: list[str] = field(default_factory=list)
    color_identity: list[str] = field(default_factory=list)
    is_legendary: bool = False

    def to_row(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type_line": self.type_line,
            "mana_cost": self.mana_cost,
            "colors": list(self.colors),
            "color_identity": list(self.color_identity),
            "is_legendary": self.is_legendary,
        }


@dataclass
class UserCard:
    """
    One user's ownership of some copies of a card.

    The same card can appear in several rows for one user; rows are
    never merged.
    """

    id: str
    user_id: str
    card_id: str
    quantity: int = 1
    created_at: str | None = None
    card: Card | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "UserCard":
        """Build a UserCard from a `user_cards` row with optional `cards(*)` join."""
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            card_id=str(row["card_id"]),
            quantity=int(row.get("quantity") or 1),
            created_at=as_timestamp(row.get("created_at")),
            card=embedded_card(row),
        )


def filter_by_name(user_cards: list[UserCard], search_term: str) -> list[UserCard]:
    """Case-insensitive substring match on card name. Rows without a card never match."""
    needle = search_term.lower()
    return [uc for uc in user_cards if uc.card is not None and needle in uc.card.name.lower()]
