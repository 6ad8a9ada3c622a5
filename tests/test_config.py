"""Tests for settings loading and the workspace registry."""

import pytest

from commanders_vault.config import get_settings
from commanders_vault.models.failure import ConfigurationError
from commanders_vault.services.workspaces import WorkspaceRegistry
from commanders_vault.store.rest import RestStore
from commanders_vault.store.sql import SqlStore
from tests.stubs import StubAuthClient


class TestSettings:
    def test_loads_from_environment(self) -> None:
        settings = get_settings()

        assert settings.supabase_url == "https://vault.example.supabase.co"
        assert settings.database_url is None
        assert settings.assistant_reply_delay == 1.0
        assert settings.session_idle_ttl == 3600.0

    def test_missing_url_is_fatal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SUPABASE_URL")
        get_settings.cache_clear()

        with pytest.raises(ConfigurationError, match="supabase_url"):
            get_settings()

    def test_empty_key_is_fatal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPABASE_ANON_KEY", "")
        get_settings.cache_clear()

        with pytest.raises(ConfigurationError):
            get_settings()


class TestWorkspaceRegistry:
    def test_from_settings_uses_rest_store(self) -> None:
        registry = WorkspaceRegistry.from_settings(get_settings())

        store = registry.store_factory("user-jwt")

        assert isinstance(store, RestStore)
        assert store.access_token == "user-jwt"

    def test_only_signed_in_shells_register(self, registry: WorkspaceRegistry) -> None:
        shell = registry.new_shell()

        with pytest.raises(ValueError):
            registry.register(shell)

    async def test_discard_closes_shell(self, registry: WorkspaceRegistry) -> None:
        shell = registry.new_shell()
        shell.auth_screen.toggle_mode()
        assert await shell.auth_screen.submit("jace@example.com", "counterspell")
        token = registry.register(shell)

        registry.discard(token)
        registry.discard(token)

        assert registry.get(token) is None
        assert len(registry) == 0


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestIdleEviction:
    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock()

    @pytest.fixture
    def registry(
        self, auth_client: StubAuthClient, store: SqlStore, clock: FakeClock
    ) -> WorkspaceRegistry:
        return WorkspaceRegistry(
            auth_client,  # type: ignore[arg-type]
            lambda _token: store,
            assistant_reply_delay=0.01,
            idle_ttl=60.0,
            clock=clock,
        )

    async def signed_in_shell(self, registry: WorkspaceRegistry, email: str) -> str:
        shell = registry.new_shell()
        shell.auth_screen.toggle_mode()
        assert await shell.auth_screen.submit(email, "counterspell")
        return registry.register(shell)

    async def test_idle_shell_is_closed_and_dropped(
        self, registry: WorkspaceRegistry, clock: FakeClock
    ) -> None:
        token = await self.signed_in_shell(registry, "jace@example.com")
        shell = registry.get(token)
        assert shell is not None
        closed = []
        shell.close = lambda: closed.append(token)  # type: ignore[method-assign]

        clock.now = 61.0

        assert registry.get(token) is None
        assert closed == [token]
        assert len(registry) == 0

    async def test_use_keeps_shell_alive(
        self, registry: WorkspaceRegistry, clock: FakeClock
    ) -> None:
        token = await self.signed_in_shell(registry, "jace@example.com")

        clock.now = 45.0
        assert registry.get(token) is not None
        clock.now = 90.0

        assert registry.get(token) is not None

    async def test_registering_sweeps_abandoned_shells(
        self, registry: WorkspaceRegistry, clock: FakeClock
    ) -> None:
        """Shells nobody asks for again are still evicted."""
        abandoned = await self.signed_in_shell(registry, "jace@example.com")
        clock.now = 120.0

        active = await self.signed_in_shell(registry, "liliana@example.com")

        assert len(registry) == 1
        assert registry.get(active) is not None
        assert registry.get(abandoned) is None
