from enum import Enum

from commanders_vault.models.failure import AuthError
from commanders_vault.views.session import SessionProvider


class AuthMode(str, Enum):
    SIGN_IN = "sign_in"
    SIGN_UP = "sign_up"


class AuthScreen:
    """
    Sign-in / sign-up form.

    Errors are kept on the screen for the user to read and retry; they are
    never raised out of `submit()`.
    """

    def __init__(self, session: SessionProvider) -> None:
        self.session = session
        self.mode = AuthMode.SIGN_IN
        self.error: str | None = None
        self.submitting = False

    def toggle_mode(self) -> AuthMode:
        self.mode = AuthMode.SIGN_UP if self.mode is AuthMode.SIGN_IN else AuthMode.SIGN_IN
        return self.mode

    async def submit(self, email: str, password: str) -> bool:
        """
        Sign in or sign up, depending on the mode.

        Returns:
            True if the call succeeded (for sign-up, even when the account
            still needs confirming before a session exists)
        """
        self.error = None
        self.submitting = True
        try:
            if self.mode is AuthMode.SIGN_UP:
                await self.session.sign_up(email, password)
            else:
                await self.session.sign_in(email, password)
        except AuthError as e:
            self.error = e.message or "An error occurred"
            return False
        finally:
            self.submitting = False
        return True
