"""
Top-level shell: which screen is visible and which tab is open.

While the session is being resolved the shell shows a loading screen;
without an identity it shows the auth screen; otherwise it shows the active
tab. Switching tabs tears down the old view and mounts a fresh one, so each
view re-fetches on mount and the assistant transcript starts over.
"""

import logging
from enum import Enum

from commanders_vault.models.user import User
from commanders_vault.views.assistant import DEFAULT_REPLY_DELAY, AssistantView
from commanders_vault.views.auth_screen import AuthScreen
from commanders_vault.views.base import View
from commanders_vault.views.collection import CollectionView
from commanders_vault.views.deck_builder import DeckBuilderView
from commanders_vault.views.session import SessionProvider

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    LOADING = "loading"
    AUTH = "auth"
    APP = "app"


class Tab(str, Enum):
    COLLECTION = "collection"
    DECKS = "decks"
    ASSISTANT = "ai"


class Shell:
    """Navigation for one signed-in (or signing-in) browser session."""

    def __init__(
        self,
        session: SessionProvider,
        assistant_reply_delay: float = DEFAULT_REPLY_DELAY,
    ) -> None:
        self.session = session
        self.auth_screen = AuthScreen(session)
        self.assistant_reply_delay = assistant_reply_delay
        self.active_tab = Tab.COLLECTION
        self.view: View | None = None
        self._unsubscribe = session.subscribe(self._on_identity_change)

    @property
    def screen(self) -> Screen:
        if self.session.loading:
            return Screen.LOADING
        if self.session.user is None:
            return Screen.AUTH
        return Screen.APP

    @property
    def user_email(self) -> str | None:
        user = self.session.user
        return user.email if user else None

    def _build_view(self, tab: Tab) -> View:
        if tab is Tab.COLLECTION:
            return CollectionView(self.session)
        if tab is Tab.DECKS:
            return DeckBuilderView(self.session)
        return AssistantView(reply_delay=self.assistant_reply_delay)

    def _teardown(self) -> None:
        if self.view is not None:
            self.view.unmount()
            self.view = None

    async def _on_identity_change(self, user: User | None) -> None:
        self._teardown()
        if user is not None:
            await self._mount(self.active_tab)

    async def _mount(self, tab: Tab) -> View:
        self._teardown()
        self.active_tab = tab
        view = self._build_view(tab)
        self.view = view
        await view.mount()
        return view

    async def switch_tab(self, tab: Tab) -> View | None:
        """
        Show another tab.

        Does nothing but remember the tab while nobody is signed in.
        """
        if self.screen is not Screen.APP:
            self.active_tab = tab
            return None

        logger.debug("tab_switched", extra={"tab": tab.value})
        return await self._mount(tab)

    async def open(self, tab: Tab) -> View | None:
        """Return the view for `tab`, switching to it first if needed."""
        if self.view is not None and self.active_tab is tab:
            return self.view
        return await self.switch_tab(tab)

    def close(self) -> None:
        """Forget this shell: stop listening and tear down the active view."""
        self._unsubscribe()
        self._teardown()
