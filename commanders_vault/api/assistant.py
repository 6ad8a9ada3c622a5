"""
Assistant API endpoints.

The reply is scheduled in the background; the browser polls
`GET /assistant` until `waiting` is false.
"""

from typing import Literal, cast

from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, Field

from commanders_vault.api.deps import ShellDep
from commanders_vault.views.assistant import AssistantView
from commanders_vault.views.shell import Shell, Tab

router = APIRouter(prefix="/assistant", tags=["assistant"])


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    role: Literal["user", "assistant"]
    content: str


class AssistantResponse(BaseModel):
    messages: list[MessageOut]
    waiting: bool
    accepted: bool = Field(
        default=True,
        description="False when the message was blank or a reply was still pending",
    )


class MessageRequest(BaseModel):
    content: str = Field(..., examples=["How many lands should I run?"])


async def _assistant_view(shell: Shell) -> AssistantView:
    return cast(AssistantView, await shell.open(Tab.ASSISTANT))


def assistant_response(view: AssistantView, accepted: bool = True) -> AssistantResponse:
    return AssistantResponse(
        messages=[MessageOut.model_validate(m) for m in view.messages],
        waiting=view.waiting,
        accepted=accepted,
    )


@router.get("", response_model=AssistantResponse)
async def get_transcript(shell: ShellDep) -> AssistantResponse:
    view = await _assistant_view(shell)
    return assistant_response(view)


@router.post("/messages", response_model=AssistantResponse, status_code=status.HTTP_202_ACCEPTED)
async def send_message(request: MessageRequest, shell: ShellDep) -> AssistantResponse:
    """
    Send a message to the assistant.

    The user's message is in the returned transcript; the reply arrives
    about a second later.
    """
    view = await _assistant_view(shell)
    task = view.submit(request.content)
    return assistant_response(view, accepted=task is not None)
