"""
Table-scoped stores.

`build_store()` picks the backend: a direct SQLAlchemy connection when
DATABASE_URL is configured, the hosted REST interface otherwise.
"""

from commanders_vault.config import Settings
from commanders_vault.db.database import get_session_factory
from commanders_vault.store.base import CardStore
from commanders_vault.store.rest import RestStore
from commanders_vault.store.sql import SqlStore


def build_store(settings: Settings, access_token: str | None = None) -> CardStore:
    """Create a store acting as the identity behind `access_token`."""
    if settings.database_url:
        return SqlStore(get_session_factory())

    return RestStore(
        settings.supabase_url,
        settings.supabase_anon_key,
        access_token=access_token,
        timeout=settings.request_timeout,
    )


__all__ = [
    "CardStore",
    "RestStore",
    "SqlStore",
    "build_store",
]
