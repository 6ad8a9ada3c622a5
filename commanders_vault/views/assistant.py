"""
Scripted deck-building assistant.

Not an AI: every question gets one of four pre-written answers, picked at
random after a short pause. Nothing leaves the process and the transcript
is lost when the view is torn down.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Literal

from commanders_vault.views.base import View

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Welcome, Planeswalker! I'm your AI deck building assistant. I can help you with:\n\n"
    "• Suggesting cards for your Commander deck\n"
    "• Explaining color identity and deck synergies\n"
    "• Recommending card ratios (lands, ramp, removal, etc.)\n"
    "• Analyzing your deck's strategy\n\n"
    "What would you like to know about building your Commander deck?"
)

CANNED_REPLIES: tuple[str, ...] = (
    "Great question! For Commander decks, I recommend:\n\n"
    "• 36-38 lands for consistent mana\n"
    "• 10-12 ramp spells (Sol Ring, mana rocks, land ramp)\n"
    "• 8-10 card draw effects\n"
    "• 5-7 removal spells\n"
    "• 30-35 cards for your main strategy\n\n"
    "Adjust based on your commander's mana cost and strategy!",
    "Color identity is crucial in Commander! Your deck can only include cards with mana "
    "symbols that appear on your commander. For example:\n\n"
    "• A Atraxa deck (WUBG) can include all colors except red\n"
    "• Basic lands can go in any deck\n"
    "• Colorless cards work in any deck\n\n"
    "Make sure all lands can produce colors in your identity!",
    "Building around your commander is key! Consider:\n\n"
    "• What does your commander do best?\n"
    "• What cards amplify that strategy?\n"
    "• Include protection for your commander\n"
    "• Add ways to recast if removed\n"
    "• Build redundancy for key effects\n\n"
    "Your commander should be the centerpiece, but not the only win condition!",
    "For a balanced mana curve, aim for:\n\n"
    "• CMC 1-2: 8-12 cards (ramp, removal)\n"
    "• CMC 3-4: 15-20 cards (your engine)\n"
    "• CMC 5-6: 10-15 cards (big plays)\n"
    "• CMC 7+: 5-8 cards (finishers)\n\n"
    "Lower curves are faster, higher curves need more ramp!",
)

DEFAULT_REPLY_DELAY = 1.0


@dataclass(frozen=True, slots=True)
class Message:
    """One line of the transcript."""

    role: Literal["user", "assistant"]
    content: str


class AssistantView(View):
    """
    Transcript plus a single pending reply at most.

    Attributes:
        messages: Append-only transcript, seeded with the welcome message
        waiting: True between a submission and its reply
    """

    def __init__(
        self,
        reply_delay: float = DEFAULT_REPLY_DELAY,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        self.reply_delay = reply_delay
        self._rng = rng or random.Random()
        self.messages: list[Message] = [Message(role="assistant", content=WELCOME_MESSAGE)]
        self.input = ""
        self.waiting = False
        self._pending: asyncio.Task[Message] | None = None

    def submit(self, text: str | None = None) -> "asyncio.Task[Message] | None":
        """
        Send a message.

        Blank input, or any input while a reply is pending, is ignored.

        Returns:
            The task that will append the reply, or None if ignored
        """
        if text is not None:
            self.input = text
        if not self.input.strip() or self.waiting:
            return None

        self.messages.append(Message(role="user", content=self.input))
        self.input = ""
        self.waiting = True
        self._pending = asyncio.create_task(self._reply())
        return self._pending

    async def _reply(self) -> Message:
        try:
            await asyncio.sleep(self.reply_delay)
            reply = Message(role="assistant", content=self._rng.choice(CANNED_REPLIES))
            self.messages.append(reply)
            return reply
        finally:
            self.waiting = False
            self._pending = None

    def on_unmount(self) -> None:
        if self._pending is not None and not self._pending.done():
            logger.debug("pending_reply_cancelled")
            self._pending.cancel()
