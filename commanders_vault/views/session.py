"""
Session and identity provider.

One SessionProvider exists per browser session. It is passed explicitly to
every view that needs the current identity; views that care about identity
changes subscribe to it.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable

from commanders_vault.models.failure import AuthError, NotAuthenticatedError
from commanders_vault.models.user import AuthSession, User
from commanders_vault.store.base import CardStore
from commanders_vault.hosted.auth import AuthClient

logger = logging.getLogger(__name__)

IdentityListener = Callable[[User | None], Awaitable[None] | None]
StoreFactory = Callable[[str | None], CardStore]


class SessionProvider:
    """
    Tracks who is signed in.

    Attributes:
        loading: True only while `restore()` resolves a stored session
    """

    def __init__(self, auth_client: AuthClient, store_factory: StoreFactory) -> None:
        self._auth = auth_client
        self._store_factory = store_factory
        self._session: AuthSession | None = None
        self._listeners: list[IdentityListener] = []
        self.loading = False

    @property
    def user(self) -> User | None:
        return self._session.user if self._session else None

    @property
    def access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """
        Call `listener` with the new user (or None) on every identity change.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _set_session(self, session: AuthSession | None) -> None:
        before = self.user
        self._session = session
        after = self.user

        if (before.id if before else None) == (after.id if after else None):
            return

        logger.info(
            "identity_changed",
            extra={"user_id": after.id if after else None},
        )
        for listener in list(self._listeners):
            result = listener(after)
            if inspect.isawaitable(result):
                await result

    async def restore(self, access_token: str | None) -> User | None:
        """
        Resolve a stored session at startup.

        An invalid or expired token resolves to no identity.

        Raises:
            AuthError: If the auth service could not be reached
        """
        self.loading = True
        try:
            if not access_token:
                await self._set_session(None)
                return None

            user = await self._auth.get_user(access_token)
            if user is None:
                await self._set_session(None)
                return None

            await self._set_session(AuthSession(access_token=access_token, user=user))
            return user
        finally:
            self.loading = False

    async def sign_up(self, email: str, password: str) -> User | None:
        """
        Register a new identity and sign in as it when the service allows.

        Returns:
            The new user, or None if the address must be confirmed first

        Raises:
            AuthError: Duplicate email, weak password, or network failure
        """
        session = await self._auth.sign_up(email, password)
        if session is None:
            logger.info("sign_up_pending_confirmation")
            return None

        await self._set_session(session)
        return session.user

    async def sign_in(self, email: str, password: str) -> User:
        """
        Authenticate an existing identity.

        Raises:
            AuthError: Bad credentials or network failure
        """
        session = await self._auth.sign_in_with_password(email, password)
        await self._set_session(session)
        return session.user

    async def sign_out(self) -> None:
        """End the session. Safe to call when already signed out."""
        if self._session is None:
            return

        token = self._session.access_token
        try:
            await self._auth.sign_out(token)
        except AuthError as e:
            # The local session ends regardless; the token expires on its own
            logger.warning("remote_sign_out_failed", extra={"error": e.message})

        await self._set_session(None)

    def store(self) -> CardStore:
        """
        A store acting as the current identity.

        Raises:
            NotAuthenticatedError: If nobody is signed in
        """
        if self._session is None:
            raise NotAuthenticatedError()
        return self._store_factory(self._session.access_token)
