from commanders_vault.models.card import Card, ColorBucket, color_bucket
from commanders_vault.models.collection import CardDraft, UserCard, filter_by_name
from commanders_vault.models.deck import (
    COMMANDER_DECK_SIZE,
    Completeness,
    Deck,
    DeckCard,
    banner_for,
    can_add_card,
    completeness,
    deck_total,
)
from commanders_vault.models.failure import (
    ApiResponse,
    AuthError,
    ConfigurationError,
    DeckFullError,
    FailureDetail,
    FailureKind,
    KnownError,
    NotAuthenticatedError,
    OutcomeType,
    PersistenceError,
)
from commanders_vault.models.user import AuthSession, User

__all__ = [
    "COMMANDER_DECK_SIZE",
    "ApiResponse",
    "AuthError",
    "AuthSession",
    "Card",
    "CardDraft",
    "ColorBucket",
    "Completeness",
    "ConfigurationError",
    "Deck",
    "DeckCard",
    "DeckFullError",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "NotAuthenticatedError",
    "OutcomeType",
    "PersistenceError",
    "User",
    "UserCard",
    "banner_for",
    "can_add_card",
    "color_bucket",
    "completeness",
    "deck_total",
    "filter_by_name",
]
