"""Tests for the scripted assistant."""

import asyncio
import random

import pytest

from commanders_vault.views.assistant import CANNED_REPLIES, WELCOME_MESSAGE, AssistantView


@pytest.fixture
async def assistant() -> AssistantView:
    view = AssistantView(reply_delay=0.01, rng=random.Random(7))
    await view.mount()
    return view


class TestAssistant:
    def test_starts_with_welcome(self) -> None:
        view = AssistantView()

        assert len(view.messages) == 1
        assert view.messages[0].role == "assistant"
        assert view.messages[0].content == WELCOME_MESSAGE
        assert view.waiting is False

    async def test_reply_after_delay(self, assistant: AssistantView) -> None:
        task = assistant.submit("How many lands?")

        assert task is not None
        assert assistant.waiting is True
        assert [m.role for m in assistant.messages] == ["assistant", "user"]

        reply = await task

        assert reply.content in CANNED_REPLIES
        assert assistant.messages[-1] == reply
        assert assistant.waiting is False

    async def test_seeded_choice_is_reproducible(self) -> None:
        expected = random.Random(3).choice(CANNED_REPLIES)
        view = AssistantView(reply_delay=0, rng=random.Random(3))

        reply = await view.submit("Suggest a commander")  # type: ignore[misc]

        assert reply.content == expected

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    async def test_blank_input_ignored(self, assistant: AssistantView, text: str) -> None:
        assert assistant.submit(text) is None
        assert len(assistant.messages) == 1

    async def test_ignored_while_waiting(self, assistant: AssistantView) -> None:
        task = assistant.submit("First")

        assert assistant.submit("Second") is None

        await task
        assert [m.content for m in assistant.messages if m.role == "user"] == ["First"]

    async def test_input_cleared_on_submit(self, assistant: AssistantView) -> None:
        assistant.input = "Draft text"

        task = assistant.submit()

        assert assistant.input == ""
        assert assistant.messages[-1].content == "Draft text"
        await task

    async def test_unmount_cancels_pending_reply(self) -> None:
        view = AssistantView(reply_delay=10)
        await view.mount()
        task = view.submit("Anyone there?")
        assert task is not None

        view.unmount()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert len(view.messages) == 2
        assert view.waiting is False
