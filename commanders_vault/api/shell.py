"""
Shell API endpoints.

Reports which screen the browser should show and switches tabs.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from commanders_vault.api.deps import ShellDep
from commanders_vault.api.schemas import UserOut
from commanders_vault.views.shell import Screen, Shell, Tab

router = APIRouter(prefix="/shell", tags=["shell"])


class ShellResponse(BaseModel):
    """Top-level navigation state."""

    screen: Screen
    active_tab: Tab
    user: UserOut | None = None


class TabRequest(BaseModel):
    tab: Tab = Field(..., description="Tab to show: collection, decks or ai")


def shell_response(shell: Shell) -> ShellResponse:
    user = shell.session.user
    return ShellResponse(
        screen=shell.screen,
        active_tab=shell.active_tab,
        user=UserOut.model_validate(user) if user else None,
    )


@router.get("", response_model=ShellResponse)
async def get_shell_state(shell: ShellDep) -> ShellResponse:
    return shell_response(shell)


@router.put("/tab", response_model=ShellResponse)
async def switch_tab(request: TabRequest, shell: ShellDep) -> ShellResponse:
    """
    Show another tab.

    The previous tab's view is torn down and the new one is mounted fresh,
    which re-fetches its data.
    """
    await shell.switch_tab(request.tab)
    return shell_response(shell)
