"""Test doubles shared across test modules."""

import uuid

from commanders_vault.models.failure import AuthError
from commanders_vault.models.user import AuthSession, User


class StubAuthClient:
    """In-memory stand-in for AuthClient with the same coroutine methods."""

    def __init__(self, confirm_email: bool = False) -> None:
        self.confirm_email = confirm_email
        self.accounts: dict[str, tuple[str, User]] = {}
        self.tokens: dict[str, User] = {}
        self.sign_out_calls = 0
        self.fail_sign_out = False

    def _issue(self, user: User) -> AuthSession:
        token = f"token-{uuid.uuid4()}"
        self.tokens[token] = user
        return AuthSession(access_token=token, user=user)

    async def sign_up(self, email: str, password: str) -> AuthSession | None:
        if email in self.accounts:
            raise AuthError("User already registered")
        if len(password) < 6:
            raise AuthError("Password should be at least 6 characters")
        user = User(id=str(uuid.uuid4()), email=email)
        self.accounts[email] = (password, user)
        if self.confirm_email:
            return None
        return self._issue(user)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthError("Invalid login credentials")
        return self._issue(account[1])

    async def sign_out(self, access_token: str) -> None:
        self.sign_out_calls += 1
        if self.fail_sign_out:
            raise AuthError("Could not reach the sign-in service")
        self.tokens.pop(access_token, None)

    async def get_user(self, access_token: str) -> User | None:
        return self.tokens.get(access_token)
