"""Race observability metrics.

Structured log events plus the prometheus series in
``cep_lookup.observability.metrics``:
- race_start: providers dispatched for a lookup
- provider_complete: one per outcome drained by the coordinator
- race_complete: winner / exhausted / timeout / invalid, with latency
"""

import logging
from typing import List

from cep_lookup.models import Failure, Outcome, RaceResult, Success
from cep_lookup.observability.metrics import (
    provider_duration_seconds,
    provider_outcomes_total,
    race_duration_seconds,
    races_total,
)

logger = logging.getLogger("cep_lookup.metrics")


def race_label(result: RaceResult) -> str:
    if result.winner is not None:
        return "winner"
    if result.timed_out:
        return "timeout"
    if result.dispatched == 0 and any(f.error_kind == "validation_error" for f in result.failures):
        return "invalid"
    return "exhausted"


def log_race_start(lookup_key: str, providers: List[str], deadline_seconds: float):
    """Log race start."""
    logger.info(
        "Race started",
        extra={
            "event": "race_start",
            "lookup_key": lookup_key,
            "providers_requested": providers,
            "deadline_ms": round(deadline_seconds * 1000),
        },
    )


def log_provider_result(outcome: Outcome):
    """Log and count one drained outcome."""
    if isinstance(outcome, Success):
        status = "ok"
        message = None
    else:
        status = outcome.error_kind
        message = outcome.message

    provider_outcomes_total.labels(provider=outcome.provider_id, status=status).inc()
    provider_duration_seconds.labels(provider=outcome.provider_id, status=status).observe(
        outcome.elapsed_ms / 1000
    )
    logger.info(
        f"Provider {outcome.provider_id} completed",
        extra={
            "event": "provider_complete",
            "provider_id": outcome.provider_id,
            "status": status,
            "latency_ms": outcome.elapsed_ms,
            "error_message": message,
        },
    )


def log_race_complete(result: RaceResult):
    """Log the race outcome; level depends on whether anyone answered."""
    label = race_label(result)
    races_total.labels(result=label).inc()
    race_duration_seconds.observe(result.elapsed_ms / 1000)

    failures: List[Failure] = result.failures
    log_data = {
        "event": "race_complete",
        "lookup_key": result.lookup_key,
        "result": label,
        "winner": result.winner.provider_id if result.winner else None,
        "dispatched": result.dispatched,
        "failures": [
            {"id": f.provider_id, "kind": f.error_kind, "latency_ms": f.elapsed_ms}
            for f in failures
        ],
        "timed_out": result.timed_out,
        "latency_ms": result.elapsed_ms,
    }

    if label == "winner":
        logger.info("Race won", extra=log_data)
    elif label == "invalid":
        logger.warning("Race rejected - invalid input", extra=log_data)
    elif label == "timeout":
        logger.error("Race failed - deadline exceeded", extra=log_data)
    else:
        logger.error("Race failed - all providers failed", extra=log_data)
