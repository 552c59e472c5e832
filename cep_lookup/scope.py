"""Deadline-bound cancellation scope shared by the tasks of one race."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Set

from cep_lookup.exceptions import RequestCancelledError

logger = logging.getLogger(__name__)

# Cancelled tasks are not awaited by the coordinator; hold a reference until
# they finish unwinding so the loop does not garbage collect them mid-flight.
_abandoned_tasks: Set["asyncio.Task[None]"] = set()


def abandoned_task_count() -> int:
    return sum(1 for task in _abandoned_tasks if not task.done())


class CancellationScope:
    """
    Advisory cancellation signal plus the tasks it governs.

    ``cancel`` sets the signal and requests cancellation of every attached task
    that is still running, without waiting for them. Must be created inside a
    running event loop.
    """

    def __init__(self, deadline_seconds: float):
        self._loop = asyncio.get_running_loop()
        self._started_at = self._loop.time()
        self._deadline_at = self._started_at + deadline_seconds
        self._cancelled = False
        self._tasks: Set["asyncio.Task[None]"] = set()
        self.reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def expired(self) -> bool:
        return self._loop.time() >= self._deadline_at

    def remaining(self) -> float:
        return max(0.0, self._deadline_at - self._loop.time())

    def elapsed(self) -> float:
        return self._loop.time() - self._started_at

    def attach(self, task: "asyncio.Task[None]") -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def cancel(self, reason: str) -> int:
        """Signal cancellation and abandon running tasks. Returns how many were abandoned."""
        if self.cancelled:
            return 0
        self.reason = reason
        self._cancelled = True

        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
            _abandoned_tasks.add(task)
            task.add_done_callback(_abandoned_tasks.discard)
        if pending:
            logger.debug(f"Scope cancelled ({reason}), abandoned {len(pending)} task(s)")
        return len(pending)

    def raise_if_cancelled(self, provider_id: Optional[str] = None) -> None:
        if self.cancelled:
            raise RequestCancelledError(
                f"Lookup cancelled: {self.reason or 'cancelled'}", provider=provider_id
            )
