"""
Lifecycle shared by every screen.

A view is mounted when its tab is shown and unmounted when the user leaves
it. Loads started before an unmount, or superseded by a newer load of the
same kind, must not touch state when they finally return; `_begin()` and
`_is_current()` implement that check.
"""

import logging

logger = logging.getLogger(__name__)


class View:
    """Base class for the tab views."""

    def __init__(self) -> None:
        self.mounted = False
        self._generations: dict[str, int] = {}

    async def mount(self) -> None:
        """Show the view and run its initial loads."""
        self.mounted = True
        await self.on_mount()

    def unmount(self) -> None:
        """Tear the view down; responses still in flight are discarded."""
        self.mounted = False
        self.on_unmount()

    async def on_mount(self) -> None:
        pass

    def on_unmount(self) -> None:
        pass

    def _begin(self, kind: str) -> int:
        generation = self._generations.get(kind, 0) + 1
        self._generations[kind] = generation
        return generation

    def _is_current(self, kind: str, generation: int) -> bool:
        if not self.mounted:
            logger.debug("stale_response_dropped", extra={"kind": kind, "reason": "unmounted"})
            return False
        if self._generations.get(kind) != generation:
            logger.debug("stale_response_dropped", extra={"kind": kind, "reason": "superseded"})
            return False
        return True
