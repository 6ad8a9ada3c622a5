"""Tests for top-level navigation."""

from commanders_vault.models.user import User
from commanders_vault.store.sql import SqlStore
from commanders_vault.views.assistant import AssistantView
from commanders_vault.views.collection import CollectionView
from commanders_vault.views.deck_builder import DeckBuilderView
from commanders_vault.views.session import SessionProvider
from commanders_vault.views.shell import Screen, Shell, Tab
from tests.stubs import StubAuthClient


class TestScreens:
    async def test_signed_out_shows_auth(self, provider: SessionProvider) -> None:
        shell = Shell(provider)

        assert shell.screen is Screen.AUTH
        assert shell.view is None
        assert shell.user_email is None

    async def test_loading_while_restoring(self, store: SqlStore) -> None:
        screens: list[Screen] = []

        class RecordingAuth(StubAuthClient):
            async def get_user(self, access_token: str) -> User | None:
                screens.append(shell.screen)
                return None

        provider = SessionProvider(RecordingAuth(), lambda _t: store)  # type: ignore[arg-type]
        shell = Shell(provider)

        await provider.restore("some-token")

        assert screens == [Screen.LOADING]
        assert shell.screen is Screen.AUTH

    async def test_sign_in_mounts_collection(
        self, provider: SessionProvider, auth_client: StubAuthClient
    ) -> None:
        shell = Shell(provider)
        await auth_client.sign_up("nissa@example.com", "worldsoul")

        await provider.sign_in("nissa@example.com", "worldsoul")

        assert shell.screen is Screen.APP
        assert shell.user_email == "nissa@example.com"
        assert isinstance(shell.view, CollectionView)
        assert shell.view.mounted

    async def test_sign_out_tears_down(self, provider: SessionProvider, signed_in: User) -> None:
        shell = Shell(provider)
        await shell.switch_tab(Tab.DECKS)
        view = shell.view

        await provider.sign_out()

        assert shell.screen is Screen.AUTH
        assert shell.view is None
        assert view is not None and not view.mounted


class TestTabs:
    async def test_switch_builds_fresh_views(
        self, provider: SessionProvider, signed_in: User
    ) -> None:
        shell = Shell(provider)

        decks = await shell.switch_tab(Tab.DECKS)
        assistant = await shell.switch_tab(Tab.ASSISTANT)

        assert isinstance(decks, DeckBuilderView)
        assert not decks.mounted
        assert isinstance(assistant, AssistantView)
        assert shell.active_tab is Tab.ASSISTANT

    async def test_transcript_resets_on_return(
        self, provider: SessionProvider, signed_in: User
    ) -> None:
        shell = Shell(provider)
        first = await shell.switch_tab(Tab.ASSISTANT)
        assert isinstance(first, AssistantView)
        first.messages.clear()

        await shell.switch_tab(Tab.COLLECTION)
        second = await shell.switch_tab(Tab.ASSISTANT)

        assert isinstance(second, AssistantView)
        assert len(second.messages) == 1

    async def test_open_reuses_current_view(
        self, provider: SessionProvider, signed_in: User
    ) -> None:
        shell = Shell(provider)
        first = await shell.open(Tab.DECKS)

        assert await shell.open(Tab.DECKS) is first

    async def test_tab_remembered_while_signed_out(
        self, provider: SessionProvider, auth_client: StubAuthClient
    ) -> None:
        shell = Shell(provider)

        assert await shell.switch_tab(Tab.DECKS) is None

        await auth_client.sign_up("nissa@example.com", "worldsoul")
        await provider.sign_in("nissa@example.com", "worldsoul")
        assert isinstance(shell.view, DeckBuilderView)

    async def test_close_stops_listening(
        self, provider: SessionProvider, signed_in: User
    ) -> None:
        shell = Shell(provider)
        await shell.open(Tab.COLLECTION)

        shell.close()
        await provider.sign_out()
        await provider.sign_in("jace@example.com", "counterspell")

        assert shell.view is None
