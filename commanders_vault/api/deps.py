"""Dependencies that turn a bearer token into the caller's Shell."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from commanders_vault.models.failure import NotAuthenticatedError
from commanders_vault.services.workspaces import WorkspaceRegistry, get_registry
from commanders_vault.views.shell import Shell

bearer_scheme = HTTPBearer(auto_error=False)


async def get_access_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    if credentials is None or not credentials.credentials:
        raise NotAuthenticatedError()
    return credentials.credentials


async def get_shell(
    access_token: Annotated[str, Depends(get_access_token)],
    registry: Annotated[WorkspaceRegistry, Depends(get_registry)],
) -> Shell:
    """
    The shell signed in with this token.

    Raises:
        NotAuthenticatedError: Unknown token, or the session has ended
    """
    shell = registry.get(access_token)
    if shell is None or shell.session.user is None:
        raise NotAuthenticatedError("Session not found. Sign in again.")
    return shell


ShellDep = Annotated[Shell, Depends(get_shell)]
RegistryDep = Annotated[WorkspaceRegistry, Depends(get_registry)]
