"""First-success-wins race across postal-code providers."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Iterable, List, Optional

from cep_lookup.adapters import ProviderAdapter, get_adapters
from cep_lookup.channel import ResultChannel
from cep_lookup.constants import INPUT_PROVIDER_ID
from cep_lookup.exceptions import UnknownProviderError, ValidationError
from cep_lookup.executors import run_adapter_into_channel
from cep_lookup.metrics import log_provider_result, log_race_complete, log_race_start
from cep_lookup.models import Failure, RaceResult, Success
from cep_lookup.observability.logging import correlation_id_context, get_correlation_id
from cep_lookup.scope import CancellationScope, abandoned_task_count
from cep_lookup.settings import LookupSettings, load_settings
from cep_lookup.transport import HttpxTransport, Transport
from cep_lookup.validation import normalize_lookup_key, validate_deadline

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


class RaceCoordinator:
    """
    Dispatches every adapter concurrently and returns the first success.

    ``resolve`` never raises for input, configuration or provider problems: a
    RaceResult without a winner carries the failures (and ``timed_out`` when
    the deadline fired first). An unknown provider in the configured list is
    reported like an invalid key. Losing tasks are cancelled and abandoned,
    not awaited, so the call returns as soon as the race is decided.
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        adapters: Optional[Iterable[ProviderAdapter]] = None,
        *,
        deadline_seconds: Optional[float] = None,
        settings: Optional[LookupSettings] = None,
    ):
        self.settings = settings or load_settings()
        self.transport = transport or HttpxTransport(
            timeout_seconds=self.settings.request_timeout_seconds
        )
        # None means the configured providers, built on first resolve
        self.adapters: Optional[List[ProviderAdapter]] = list(adapters) if adapters is not None else None
        self.deadline_seconds = (
            deadline_seconds if deadline_seconds is not None else self.settings.deadline_seconds
        )

    async def resolve(
        self,
        key: Any,
        adapters: Optional[Iterable[ProviderAdapter]] = None,
        deadline: Optional[float] = None,
    ) -> RaceResult:
        """
        Race ``adapters`` (default: the coordinator's) for ``key``.

        Args:
            key: postal code, with or without separators
            adapters: providers to race for this call only
            deadline: seconds for the whole race, measured from this call
        """
        if get_correlation_id() is None:
            with correlation_id_context():
                return await self._resolve(key, adapters, deadline)
        return await self._resolve(key, adapters, deadline)

    def _select_adapters(self, adapters: Optional[Iterable[ProviderAdapter]]) -> List[ProviderAdapter]:
        if adapters is not None:
            return list(adapters)
        if self.adapters is None:
            self.adapters = get_adapters(settings=self.settings)
        return list(self.adapters)

    async def _resolve(
        self,
        key: Any,
        adapters: Optional[Iterable[ProviderAdapter]],
        deadline: Optional[float],
    ) -> RaceResult:
        started = time.monotonic()
        try:
            selected = self._select_adapters(adapters)
            lookup_key = normalize_lookup_key(key)
            deadline_seconds = validate_deadline(
                self.deadline_seconds if deadline is None else deadline
            )
        except (ValidationError, UnknownProviderError) as e:
            logger.info(f"Rejected lookup {key!r}: {e.message}")
            result = RaceResult(
                lookup_key="" if key is None else str(key),
                failures=[
                    Failure(
                        provider_id=INPUT_PROVIDER_ID,
                        error_kind=e.error_kind,
                        message=e.message,
                    )
                ],
                dispatched=0,
                elapsed_ms=_elapsed_ms(started),
            )
            log_race_complete(result)
            return result

        provider_ids = [adapter.provider_id for adapter in selected]
        log_race_start(lookup_key, provider_ids, deadline_seconds)

        scope = CancellationScope(deadline_seconds)
        channel = ResultChannel(capacity=len(selected))
        for adapter in selected:
            task = asyncio.create_task(
                run_adapter_into_channel(adapter, lookup_key, self.transport, scope, channel),
                name=f"cep-lookup:{adapter.provider_id}",
            )
            scope.attach(task)

        winner: Optional[Success] = None
        failures: List[Failure] = []
        timed_out = False
        try:
            while len(failures) < len(selected):
                # Outcomes already delivered count even if the deadline just passed
                outcome = channel.try_receive()
                if outcome is None:
                    if scope.expired:
                        timed_out = True
                        break
                    try:
                        outcome = await asyncio.wait_for(channel.receive(), timeout=scope.remaining())
                    except asyncio.TimeoutError:
                        timed_out = True
                        break

                log_provider_result(outcome)
                if isinstance(outcome, Success):
                    winner = outcome
                    break
                failures.append(outcome)
        finally:
            channel.close()
            if winner is not None:
                reason = f"winner:{winner.provider_id}"
            elif timed_out:
                reason = "deadline"
            else:
                reason = "finished"
            abandoned = scope.cancel(reason)
            logger.debug(
                f"Race decided ({reason}) after {scope.elapsed():.3f}s: "
                f"{channel.pushed} outcome(s) delivered, {abandoned} task(s) abandoned, "
                f"{abandoned_task_count()} still unwinding"
            )

        result = RaceResult(
            lookup_key=lookup_key,
            providers=provider_ids,
            winner=winner,
            failures=[] if winner is not None else failures,
            timed_out=timed_out,
            dispatched=len(selected),
            elapsed_ms=_elapsed_ms(started),
        )
        log_race_complete(result)
        return result


async def resolve(
    key: Any,
    adapters: Optional[Iterable[ProviderAdapter]] = None,
    deadline: Optional[float] = None,
    *,
    transport: Optional[Transport] = None,
    settings: Optional[LookupSettings] = None,
) -> RaceResult:
    """One-off race with default adapters and transport."""
    coordinator = RaceCoordinator(transport, adapters, settings=settings)
    return await coordinator.resolve(key, deadline=deadline)
