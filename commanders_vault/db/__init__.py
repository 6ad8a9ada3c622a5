from commanders_vault.db.database import (
    dispose_db,
    get_engine,
    get_session_factory,
    init_db,
)
from commanders_vault.db.operations import (
    card_to_model,
    create_card,
    create_deck,
    create_deck_card,
    create_user_card,
    deck_card_to_model,
    deck_to_model,
    delete_deck,
    delete_deck_card,
    get_card,
    get_deck,
    get_deck_cards,
    get_decks,
    get_user_cards,
    user_card_to_model,
)

__all__ = [
    "card_to_model",
    "create_card",
    "create_deck",
    "create_deck_card",
    "create_user_card",
    "deck_card_to_model",
    "deck_to_model",
    "delete_deck",
    "delete_deck_card",
    "dispose_db",
    "get_card",
    "get_deck",
    "get_deck_cards",
    "get_decks",
    "get_engine",
    "get_session_factory",
    "get_user_cards",
    "init_db",
    "user_card_to_model",
]
