"""
Per-client registry of open list screens.

Each client token owns at most one ListScreen. Clients that vanish without
an unmount event (closed tab, dropped socket) are evicted once they have
been idle longer than the idle timeout, and the least recently used screen
is closed when the registry is full.
"""

import time
from collections import OrderedDict
from typing import Callable

from freight_ui.engine.screen import ListScreen
from freight_ui.lib import logs

LOG = logs.logger(__file__)


class ScreenRegistry:
    """
    Bounded LRU map of client token to ListScreen.

    Attributes:
        max_screens: Most screens kept open at once.
        idle_seconds: Seconds of inactivity after which a screen is closed.
    """

    def __init__(
        self,
        max_screens: int = 256,
        idle_seconds: float = 1800.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_screens = max(max_screens, 1)
        self.idle_seconds = idle_seconds
        self._clock = clock
        self._screens: OrderedDict[str, tuple[float, ListScreen]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._screens)

    def __contains__(self, token: str) -> bool:
        return token in self._screens

    def get(self, token: str) -> ListScreen | None:
        """Return the client's screen and mark it as used."""
        entry = self._screens.get(token)
        if entry is None:
            return None
        self._screens[token] = (self._clock(), entry[1])
        self._screens.move_to_end(token)
        return entry[1]

    async def open(
        self,
        token: str,
        resource_name: str,
        factory: Callable[[str], ListScreen],
    ) -> tuple[ListScreen, bool]:
        """
        Return the client's screen for a resource, creating it if needed.

        A screen for another resource is closed and replaced.

        Returns:
            The screen and whether it was newly created.
        """
        await self.sweep()
        screen = self.get(token)
        if screen is not None and screen.resource.name == resource_name:
            return screen, False
        if screen is not None:
            await self.close(token)
        screen = factory(resource_name)
        self._screens[token] = (self._clock(), screen)
        while len(self._screens) > self.max_screens:
            oldest, (_, evicted) = self._screens.popitem(last=False)
            LOG.info("Evicted screen for client %s (registry full)", oldest)
            await evicted.close()
        return screen, True

    async def close(self, token: str) -> None:
        entry = self._screens.pop(token, None)
        if entry is not None:
            await entry[1].close()

    async def sweep(self) -> int:
        """
        Close every screen idle longer than idle_seconds.

        Returns:
            Number of screens closed.
        """
        now = self._clock()
        expired = [
            token
            for token, (used, _) in self._screens.items()
            if now - used > self.idle_seconds
        ]
        for token in expired:
            LOG.info("Evicted idle screen for client %s", token)
            await self.close(token)
        return len(expired)

    async def close_all(self) -> None:
        for token in list(self._screens):
            await self.close(token)
