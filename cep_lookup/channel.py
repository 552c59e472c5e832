"""Multi-producer, single-consumer handoff of outcomes to the coordinator."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from cep_lookup.models import Outcome

logger = logging.getLogger(__name__)


class ResultChannel:
    """
    Bounded queue of outcomes, sized so producers never wait on the consumer.

    ``push`` never blocks. Once the consumer calls ``close`` (after the race
    is decided) further pushes are dropped and counted.
    """

    def __init__(self, capacity: int):
        self.capacity = max(1, capacity)
        self._queue: "asyncio.Queue[Outcome]" = asyncio.Queue(maxsize=self.capacity)
        self._closed = False
        self.pushed = 0
        self.dropped = 0

    def push(self, outcome: Outcome) -> bool:
        if self._closed:
            self.dropped += 1
            logger.debug(f"Dropped late outcome from {outcome.provider_id}")
            return False
        try:
            self._queue.put_nowait(outcome)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                f"Result channel full (capacity={self.capacity}), dropped outcome from {outcome.provider_id}"
            )
            return False
        self.pushed += 1
        return True

    async def receive(self) -> Outcome:
        """Next outcome in completion order; waits until one is pushed."""
        return await self._queue.get()

    def try_receive(self) -> Optional[Outcome]:
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    def close(self) -> None:
        self._closed = True
