"""
Trailing-edge debounce of filter criteria.

DebouncedQuery turns a rapidly changing FilterCriteria (one update per
keystroke) into a stable committed value. Each update cancels the pending
commit task and schedules a new one; a value is committed only after a full
quiet period with no further update.
"""

import asyncio
import inspect
from typing import Awaitable, Callable

from freight_ui.lib import logs
from freight_ui.models.filters import FilterCriteria

LOG = logs.logger(__file__)

CommitCallback = Callable[[FilterCriteria], Awaitable[None] | None]


class DebouncedQuery:
    """
    Debounces FilterCriteria updates into committed snapshots.

    Attributes:
        delay: Quiet period in seconds before an update is committed.
    """

    def __init__(
        self,
        initial: FilterCriteria | None = None,
        on_commit: CommitCallback | None = None,
        delay: float = 0.5,
    ) -> None:
        self.delay = delay
        self._on_commit = on_commit
        self._committed = initial or FilterCriteria()
        self._latest = self._committed
        self._task: asyncio.Task | None = None

    @property
    def committed(self) -> FilterCriteria:
        """The last committed criteria."""
        return self._committed

    @property
    def latest(self) -> FilterCriteria:
        """The most recent raw update, committed or not."""
        return self._latest

    @property
    def pending(self) -> bool:
        """True while a commit is scheduled."""
        return self._task is not None and not self._task.done()

    def update(self, criteria: FilterCriteria) -> None:
        """
        Record a raw update and restart the quiet period.

        Must be called from a running event loop.
        """
        self._latest = criteria
        self.cancel()
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._commit_later(criteria))

    def cancel(self) -> None:
        """Drop the pending commit, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def flush(self) -> bool:
        """
        Commit the pending update immediately.

        Returns:
            True if a pending update was committed, False if nothing was pending.
        """
        if not self.pending:
            return False
        self.cancel()
        await self._commit(self._latest)
        return True

    async def wait(self) -> bool:
        """
        Wait for the pending commit.

        Returns:
            True if it committed, False if nothing was pending or it was
            superseded or cancelled before committing.
        """
        task = self._task
        if task is None:
            return False
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
            return False
        return not task.cancelled()

    async def _commit_later(self, criteria: FilterCriteria) -> None:
        await asyncio.sleep(self.delay)
        await self._commit(criteria)

    async def _commit(self, criteria: FilterCriteria) -> None:
        self._committed = criteria
        LOG.debug("Committed filters %s: %s", criteria.key(), criteria.to_params())
        if self._on_commit is not None:
            result = self._on_commit(criteria)
            if inspect.isawaitable(result):
                await result
