"""
Observability for the lookup race.

Provides:
- Log setup with correlation IDs (text or JSON)
- Prometheus metrics
"""

from .logging import (
    correlation_id_context,
    get_correlation_id,
    setup_logging,
)
from .metrics import (
    metrics_registry,
    provider_duration_seconds,
    provider_outcomes_total,
    race_duration_seconds,
    races_total,
)

__all__ = [
    "setup_logging",
    "correlation_id_context",
    "get_correlation_id",
    "metrics_registry",
    "provider_duration_seconds",
    "provider_outcomes_total",
    "race_duration_seconds",
    "races_total",
]
