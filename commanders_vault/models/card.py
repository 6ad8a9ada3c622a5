from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ColorBucket(str, Enum):
    """Presentation color a card is drawn with in the collection grid."""

    WHITE = "white"
    BLUE = "blue"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    COLORLESS = "colorless"


# Order matters - first match wins
_BUCKET_PRECEDENCE: tuple[tuple[str, ColorBucket], ...] = (
    ("W", ColorBucket.WHITE),
    ("U", ColorBucket.BLUE),
    ("B", ColorBucket.BLACK),
    ("R", ColorBucket.RED),
    ("G", ColorBucket.GREEN),
)


def color_bucket(colors: list[str] | None) -> ColorBucket:
    """
    Pick the display color for a card.

    Checks W, U, B, R, G in that order and returns the first one present.
    Cards with no colors (or only unknown symbols) are colorless.
    """
    if not colors:
        return ColorBucket.COLORLESS

    for symbol, bucket in _BUCKET_PRECEDENCE:
        if symbol in colors:
            return bucket

    return ColorBucket.COLORLESS


@dataclass
class Card:
    """
    A card definition, shared by every user.

    Attributes:
        id: Store-assigned identifier
        name: Card name as printed
        mana_cost: Mana cost in brace notation (e.g., "{2}{U}{U}")
        type_line: Full type line (e.g., "Legendary Creature - Human Wizard")
        colors: Single-letter color codes (W, U, B, R, G)
        color_identity: Color codes for deck-building identity
        is_legendary: Whether the card can lead a Commander deck
    """

    id: str
    name: str
    mana_cost: str | None = None
    type_line: str | None = None
    oracle_text: str | None = None
    colors: list[str] = field(default_factory=list)
    color_identity: list[str] = field(default_factory=list)
    power: str | None = None
    toughness: str | None = None
    rarity: str | None = None
    set_code: str | None = None
    image_url: str | None = None
    is_legendary: bool = False
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Card":
        """Build a Card from a `cards` table row."""
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            mana_cost=row.get("mana_cost"),
            type_line=row.get("type_line"),
            oracle_text=row.get("oracle_text"),
            colors=list(row.get("colors") or []),
            color_identity=list(row.get("color_identity") or []),
            power=row.get("power"),
            toughness=row.get("toughness"),
            rarity=row.get("rarity"),
            set_code=row.get("set_code"),
            image_url=row.get("image_url"),
            is_legendary=bool(row.get("is_legendary") or False),
            created_at=as_timestamp(row.get("created_at")),
        )

    @property
    def bucket(self) -> ColorBucket:
        return color_bucket(self.colors)


def embedded_card(row: dict[str, Any]) -> Card | None:
    """Extract the joined `cards` object from a row, if the join matched."""
    joined = row.get("cards")
    if not joined:
        return None
    return Card.from_row(joined)


def as_timestamp(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return value.isoformat()
