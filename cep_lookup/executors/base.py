"""Adapter executors: one adapter invocation to exactly one Outcome."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Optional

from cep_lookup.exceptions import CepLookupError
from cep_lookup.models import Failure, LookupKey, Outcome, Success

if TYPE_CHECKING:
    from cep_lookup.adapters import ProviderAdapter
    from cep_lookup.channel import ResultChannel
    from cep_lookup.scope import CancellationScope
    from cep_lookup.transport import Transport

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


async def run_adapter_with_status(
    adapter: "ProviderAdapter",
    key: LookupKey,
    transport: "Transport",
    scope: Optional["CancellationScope"] = None,
) -> Outcome:
    """
    Build, send and normalize one provider request.

    Every provider error becomes a Failure; ``asyncio.CancelledError`` is
    left to propagate so a cancelled task produces no outcome.
    """
    provider_id = adapter.provider_id
    started = time.monotonic()
    try:
        request = adapter.build_request(key)
        response = await transport.send(request, scope)
        address = adapter.normalize(response)
    except CepLookupError as e:
        logger.info(f"[{provider_id}] {e.error_kind}: {e.message}")
        return Failure(
            provider_id=provider_id,
            error_kind=e.error_kind,
            message=e.message,
            elapsed_ms=_elapsed_ms(started),
            status_code=getattr(e, "status_code", None),
        )
    except Exception as e:
        logger.exception(f"[{provider_id}] Adapter raised an unexpected error")
        return Failure(
            provider_id=provider_id,
            error_kind="internal_error",
            message=f"{type(e).__name__}: {str(e)[:200]}",
            elapsed_ms=_elapsed_ms(started),
        )

    elapsed_ms = _elapsed_ms(started)
    logger.debug(f"[{provider_id}] Normalized address in {elapsed_ms}ms")
    return Success(provider_id=provider_id, address=address, elapsed_ms=elapsed_ms)


async def run_adapter_into_channel(
    adapter: "ProviderAdapter",
    key: LookupKey,
    transport: "Transport",
    scope: "CancellationScope",
    channel: "ResultChannel",
) -> None:
    """Task body used by the coordinator: run the adapter, hand the outcome over."""
    outcome = await run_adapter_with_status(adapter, key, transport, scope)
    channel.push(outcome)
