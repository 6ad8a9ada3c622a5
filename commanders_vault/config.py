from functools import lru_cache

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from commanders_vault.models.failure import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Commander's Vault"
    debug: bool = False
    log_level: str = "INFO"

    # Hosted backend (REST query interface + auth). Both are required.
    supabase_url: str
    supabase_anon_key: str

    # Optional direct connection to the same hosted Postgres.
    # When unset, all table access goes through the REST interface.
    database_url: str | None = None

    # Seconds before an outbound request to the hosted backend gives up
    request_timeout: float = 30.0

    # Seconds the scripted assistant waits before replying
    assistant_reply_delay: float = 1.0

    # Seconds a signed-in browser may stay silent before its server state is dropped
    session_idle_ttl: float = 3600.0


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once per process.

    Raises:
        ConfigurationError: If the service URL or the public API key is missing.
    """
    try:
        settings = Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"Missing backend configuration: {', '.join(missing)}"
        ) from e

    if not settings.supabase_url or not settings.supabase_anon_key:
        raise ConfigurationError("Missing backend configuration: supabase_url, supabase_anon_key")

    return settings
