"""
Email/password auth against the hosted backend.

Wraps the supabase auth client. Every failure, whether rejected credentials
or an unreachable service, is raised as AuthError so the sign-in screen has
one thing to catch.
"""

import logging
from typing import Any

from supabase import AsyncClient, AuthApiError, AuthRetryableError
from supabase import AuthError as HostedAuthError

from commanders_vault.hosted.client import connect
from commanders_vault.models.failure import AuthError
from commanders_vault.models.user import AuthSession, User

logger = logging.getLogger(__name__)

UNREACHABLE = "Could not reach the sign-in service"


class AuthClient:
    """Client for sign-up, sign-in, sign-out and session lookup."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    async def _client(self) -> AsyncClient:
        return await connect(self.base_url, self.api_key, timeout=self.timeout)

    async def sign_up(self, email: str, password: str) -> AuthSession | None:
        """
        Register a new account.

        Returns:
            The new session, or None when the service requires the address
            to be confirmed before the first sign-in

        Raises:
            AuthError: Duplicate email, weak password, or network failure
        """
        client = await self._client()
        try:
            response = await client.auth.sign_up({"email": email, "password": password})
        except HostedAuthError as e:
            raise _auth_error(e, "sign_up") from e

        if response.session is None or response.user is None:
            return None
        return _session(response.session, response.user)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """
        Authenticate an existing account.

        Raises:
            AuthError: Bad credentials or network failure
        """
        client = await self._client()
        try:
            response = await client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except HostedAuthError as e:
            raise _auth_error(e, "sign_in") from e

        if response.session is None or response.user is None:
            raise AuthError("Sign-in returned no session")
        return _session(response.session, response.user)

    async def sign_out(self, access_token: str) -> None:
        """Revoke a session on the service."""
        client = await self._client()
        try:
            await client.auth.admin.sign_out(access_token)
        except AuthApiError as e:
            # Already revoked or expired
            if e.status in (401, 403, 404):
                return
            raise _auth_error(e, "sign_out") from e
        except HostedAuthError as e:
            raise _auth_error(e, "sign_out") from e

    async def get_user(self, access_token: str) -> User | None:
        """
        Look up the identity behind a token.

        Returns:
            The user, or None when the token is invalid or expired

        Raises:
            AuthError: If the service could not be reached
        """
        client = await self._client()
        try:
            response = await client.auth.get_user(access_token)
        except AuthApiError as e:
            if e.status in (401, 403):
                return None
            raise _auth_error(e, "get_user") from e
        except HostedAuthError as e:
            raise _auth_error(e, "get_user") from e

        if response is None or response.user is None:
            return None
        return User(id=str(response.user.id), email=response.user.email)


def _session(session: Any, user: Any) -> AuthSession:
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user=User(id=str(user.id), email=user.email),
    )


def _auth_error(error: HostedAuthError, operation: str) -> AuthError:
    status = getattr(error, "status", None)
    logger.warning(
        "auth_request_failed",
        extra={"operation": operation, "status": status, "error": error.message},
    )
    if isinstance(error, AuthRetryableError):
        return AuthError(UNREACHABLE, detail=error.message)
    return AuthError(error.message or "An error occurred", detail=f"HTTP {status}")
