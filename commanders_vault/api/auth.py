"""
Auth API endpoints.

Sign-in and sign-up create a server-side shell for the browser and hand
back the access token that identifies it on later requests.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from commanders_vault.api.deps import RegistryDep, get_access_token
from commanders_vault.api.schemas import UserOut
from commanders_vault.api.shell import ShellResponse, shell_response
from commanders_vault.models.failure import AuthError, NotAuthenticatedError
from commanders_vault.services.workspaces import WorkspaceRegistry
from commanders_vault.views.auth_screen import AuthMode
from commanders_vault.views.shell import Shell

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class CredentialsRequest(BaseModel):
    email: str = Field(..., min_length=1, examples=["planeswalker@magic.com"])
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Result of a sign-in, sign-up or session restore."""

    access_token: str | None = Field(
        default=None,
        description="Bearer token for later requests; None until the account is confirmed",
    )
    user: UserOut | None = None
    shell: ShellResponse
    message: str = ""


class SignOutResponse(BaseModel):
    signed_out: bool


def _auth_response(shell: Shell, token: str | None, message: str = "") -> AuthResponse:
    user = shell.session.user
    return AuthResponse(
        access_token=token,
        user=UserOut.model_validate(user) if user else None,
        shell=shell_response(shell),
        message=message,
    )


async def _submit(
    registry: WorkspaceRegistry, request: CredentialsRequest, mode: AuthMode
) -> tuple[Shell, str | None]:
    shell = registry.new_shell()
    if shell.auth_screen.mode is not mode:
        shell.auth_screen.toggle_mode()

    if not await shell.auth_screen.submit(request.email, request.password):
        error = shell.auth_screen.error or "An error occurred"
        shell.close()
        # A rejected sign-up is bad input; a rejected sign-in is bad credentials
        raise AuthError(error, status_code=400 if mode is AuthMode.SIGN_UP else 401)

    if shell.session.user is None:
        shell.close()
        return shell, None

    return shell, registry.register(shell)


@router.post("/sign-in", response_model=AuthResponse)
async def sign_in(request: CredentialsRequest, registry: RegistryDep) -> AuthResponse:
    """Sign in with email and password."""
    shell, token = await _submit(registry, request, AuthMode.SIGN_IN)
    return _auth_response(shell, token)


@router.post("/sign-up", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(request: CredentialsRequest, registry: RegistryDep) -> AuthResponse:
    """
    Create an account.

    When the service requires the address to be confirmed, no token is
    returned and the browser stays on the auth screen.
    """
    shell, token = await _submit(registry, request, AuthMode.SIGN_UP)
    if token is None:
        return _auth_response(shell, None, message="Check your email to confirm your account.")
    return _auth_response(shell, token)


@router.post("/sign-out", response_model=SignOutResponse)
async def sign_out(
    access_token: Annotated[str, Depends(get_access_token)],
    registry: RegistryDep,
) -> SignOutResponse:
    """End the session. Signing out twice is not an error."""
    shell = registry.get(access_token)
    if shell is not None:
        await shell.session.sign_out()
        registry.discard(access_token)
    return SignOutResponse(signed_out=True)


@router.get("/session", response_model=AuthResponse)
async def restore_session(
    access_token: Annotated[str, Depends(get_access_token)],
    registry: RegistryDep,
) -> AuthResponse:
    """
    Resolve a token the browser kept from an earlier visit.

    Returns 401 if the token is no longer valid.
    """
    shell = registry.get(access_token)
    if shell is not None and shell.session.user is not None:
        return _auth_response(shell, access_token)

    shell = registry.new_shell()
    user = await shell.session.restore(access_token)
    if user is None:
        shell.close()
        raise NotAuthenticatedError("Session expired. Sign in again.")

    registry.register(shell)
    logger.info("session_restored", extra={"user_id": user.id})
    return _auth_response(shell, access_token)
