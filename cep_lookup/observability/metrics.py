"""
Prometheus metrics for the lookup race.

Series are registered in the default registry; an embedding application
exposes them with its own prometheus endpoint.
"""

from prometheus_client import REGISTRY, Counter, Histogram

metrics_registry = REGISTRY

provider_duration_seconds = Histogram(
    "cep_lookup_provider_duration_seconds",
    "Time from dispatch to outcome for a single provider",
    ["provider", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=metrics_registry,
)

provider_outcomes_total = Counter(
    "cep_lookup_provider_outcomes_total",
    "Provider outcomes observed by the race",
    ["provider", "status"],  # status: ok or an error kind
    registry=metrics_registry,
)

races_total = Counter(
    "cep_lookup_races_total",
    "Completed races",
    ["result"],  # winner, exhausted, timeout, invalid
    registry=metrics_registry,
)

race_duration_seconds = Histogram(
    "cep_lookup_race_duration_seconds",
    "End-to-end race duration",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=metrics_registry,
)
