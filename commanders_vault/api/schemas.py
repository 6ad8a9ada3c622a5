"""Response models shared by the routers."""

from pydantic import BaseModel, ConfigDict, Field

from commanders_vault.models.card import ColorBucket


class CardOut(BaseModel):
    """A card definition as shown in any list."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    mana_cost: str | None = None
    type_line: str | None = None
    oracle_text: str | None = None
    colors: list[str] = Field(default_factory=list)
    color_identity: list[str] = Field(default_factory=list)
    power: str | None = None
    toughness: str | None = None
    rarity: str | None = None
    set_code: str | None = None
    image_url: str | None = None
    is_legendary: bool = False
    created_at: str | None = None
    bucket: ColorBucket = Field(
        default=ColorBucket.COLORLESS,
        description="Presentation color: first of W, U, B, R, G present, else colorless",
    )


class UserCardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    card_id: str
    quantity: int
    created_at: str | None = None
    card: CardOut | None = None


class DeckOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    commander_id: str | None = None
    description: str | None = None
    color_identity: list[str] | None = None
    created_at: str | None = None
    updated_at: str | None = None
    commander: CardOut | None = None


class DeckCardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    deck_id: str
    card_id: str
    quantity: int
    category: str | None = None
    created_at: str | None = None
    card: CardOut | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str | None = None


__all__ = [
    "CardOut",
    "DeckCardOut",
    "DeckOut",
    "UserCardOut",
    "UserOut",
]
