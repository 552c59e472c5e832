"""Adapter executors for the lookup race."""

from cep_lookup.executors.base import run_adapter_into_channel, run_adapter_with_status

__all__ = [
    "run_adapter_into_channel",
    "run_adapter_with_status",
]
