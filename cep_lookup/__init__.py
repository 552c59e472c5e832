"""Postal-code lookup that races several providers and keeps the first answer."""

from .models import (
    Failure,
    NormalizedAddress,
    Outcome,
    ProviderStatusSnapshot,
    RaceResult,
    RequestSpec,
    Success,
    TransportResponse,
)
from .exceptions import (
    CepLookupError,
    NormalizationError,
    RequestCancelledError,
    TransportError,
    UnknownProviderError,
    UpstreamStatusError,
    ValidationError,
)
from .adapters import BrasilAPIAdapter, ProviderAdapter, ViaCEPAdapter, available_provider_ids, get_adapters
from .channel import ResultChannel
from .coordinator import RaceCoordinator, resolve
from .scope import CancellationScope
from .settings import LookupSettings, load_settings
from .transport import HttpxTransport, Transport
from .validation import normalize_lookup_key

__version__ = "0.1.0"

__all__ = [
    "BrasilAPIAdapter",
    "CancellationScope",
    "CepLookupError",
    "Failure",
    "HttpxTransport",
    "LookupSettings",
    "NormalizationError",
    "NormalizedAddress",
    "Outcome",
    "ProviderAdapter",
    "ProviderStatusSnapshot",
    "RaceCoordinator",
    "RaceResult",
    "RequestCancelledError",
    "RequestSpec",
    "ResultChannel",
    "Success",
    "Transport",
    "TransportError",
    "TransportResponse",
    "UnknownProviderError",
    "UpstreamStatusError",
    "ValidationError",
    "ViaCEPAdapter",
    "available_provider_ids",
    "get_adapters",
    "load_settings",
    "normalize_lookup_key",
    "resolve",
]
