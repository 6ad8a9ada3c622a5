from commanders_vault.api.assistant import router as assistant_router
from commanders_vault.api.auth import router as auth_router
from commanders_vault.api.collection import router as collection_router
from commanders_vault.api.decks import router as decks_router
from commanders_vault.api.health import router as health_router
from commanders_vault.api.shell import router as shell_router

__all__ = [
    "assistant_router",
    "auth_router",
    "collection_router",
    "decks_router",
    "health_router",
    "shell_router",
]
