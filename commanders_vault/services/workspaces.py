"""
Per-browser-session state held by the server.

Each signed-in browser gets one Shell (and through it, one SessionProvider
and one active view). Shells are keyed by the access token the browser
sends back as a bearer token. A shell that goes unused for longer than the
idle TTL is closed and forgotten; its browser must sign in again or restore
the session.
"""

import logging
import time
from collections.abc import Callable
from functools import lru_cache

from commanders_vault.config import Settings, get_settings
from commanders_vault.store import build_store
from commanders_vault.hosted.auth import AuthClient
from commanders_vault.views.session import SessionProvider, StoreFactory
from commanders_vault.views.shell import Shell

logger = logging.getLogger(__name__)


class WorkspaceRegistry:
    """Creates shells and finds them again by access token."""

    def __init__(
        self,
        auth_client: AuthClient,
        store_factory: StoreFactory,
        assistant_reply_delay: float = 1.0,
        idle_ttl: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.auth_client = auth_client
        self.store_factory = store_factory
        self.assistant_reply_delay = assistant_reply_delay
        self.idle_ttl = idle_ttl
        self.clock = clock
        self._shells: dict[str, Shell] = {}
        self._last_seen: dict[str, float] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "WorkspaceRegistry":
        return cls(
            auth_client=AuthClient(
                settings.supabase_url,
                settings.supabase_anon_key,
                timeout=settings.request_timeout,
            ),
            store_factory=lambda token: build_store(settings, token),
            assistant_reply_delay=settings.assistant_reply_delay,
            idle_ttl=settings.session_idle_ttl,
        )

    def new_shell(self) -> Shell:
        """A shell with nobody signed in yet."""
        provider = SessionProvider(self.auth_client, self.store_factory)
        return Shell(provider, assistant_reply_delay=self.assistant_reply_delay)

    def register(self, shell: Shell) -> str:
        """
        Remember a signed-in shell.

        Raises:
            ValueError: If the shell has no session
        """
        token = shell.session.access_token
        if token is None:
            raise ValueError("Only signed-in shells can be registered")
        self.evict_idle()
        self._shells[token] = shell
        self._last_seen[token] = self.clock()
        return token

    def get(self, access_token: str) -> Shell | None:
        """Find a live shell and mark it as used."""
        self.evict_idle()
        shell = self._shells.get(access_token)
        if shell is not None:
            self._last_seen[access_token] = self.clock()
        return shell

    def discard(self, access_token: str) -> None:
        self._last_seen.pop(access_token, None)
        shell = self._shells.pop(access_token, None)
        if shell is not None:
            shell.close()

    def evict_idle(self) -> int:
        """Close every shell unused for longer than the idle TTL. Returns how many."""
        cutoff = self.clock() - self.idle_ttl
        expired = [token for token, seen in self._last_seen.items() if seen < cutoff]
        for token in expired:
            self.discard(token)
        if expired:
            logger.info("idle_shells_evicted", extra={"count": len(expired)})
        return len(expired)

    def __len__(self) -> int:
        return len(self._shells)


@lru_cache
def get_registry() -> WorkspaceRegistry:
    """FastAPI dependency returning the process-wide registry."""
    return WorkspaceRegistry.from_settings(get_settings())
