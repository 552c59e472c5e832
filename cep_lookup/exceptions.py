"""
Exception hierarchy for the postal-code lookup race.

Exceptions are raised by validation, transports and adapters, and are turned
into ``Failure`` outcomes by the executor. ``RaceCoordinator.resolve`` never
lets them escape.

Exception Hierarchy:
    CepLookupError (base)
    ├── ValidationError
    ├── UnknownProviderError
    ├── TransportError
    │   ├── RequestCancelledError
    │   └── UpstreamStatusError
    └── NormalizationError

Usage:
    from cep_lookup.exceptions import NormalizationError

    raise NormalizationError("Missing field 'uf'", provider="viacep")
"""

from typing import Any, Dict, Optional


class CepLookupError(Exception):
    """
    Base exception for all lookup errors.

    Attributes:
        message: Human-readable error message
        detail: Optional dict with additional error context
        error_kind: Tag used when the error is recorded as a Failure
    """

    error_kind = "internal_error"

    def __init__(self, message: str, *, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(CepLookupError):
    """
    Raised when the lookup key or the race parameters are invalid.

    Examples:
        raise ValidationError("Postal code must have 8 digits")
        raise ValidationError("Deadline must be positive", detail={"deadline": 0})
    """

    error_kind = "validation_error"


class UnknownProviderError(CepLookupError):
    """Raised when a provider id is not registered."""

    error_kind = "validation_error"

    def __init__(self, provider_id: str, *, detail: Optional[Dict[str, Any]] = None):
        super().__init__(f"Unknown provider: {provider_id}", detail=detail)
        self.provider_id = provider_id


class ProviderError(CepLookupError):
    """
    Base for errors attributed to a single provider.

    ``provider`` is folded into ``detail`` the same way for every subclass.
    """

    def __init__(
        self,
        message: str,
        *,
        detail: Optional[Dict[str, Any]] = None,
        provider: Optional[str] = None,
    ):
        if provider and detail is None:
            detail = {"provider": provider}
        elif provider and detail:
            detail["provider"] = provider

        super().__init__(message, detail=detail)
        self.provider = provider


class TransportError(ProviderError):
    """
    Raised when the request could not be completed at the network level.

    Examples:
        raise TransportError("Connection refused", provider="viacep")
    """

    error_kind = "transport_error"


class RequestCancelledError(TransportError):
    """Raised when the race was already cancelled before the request went out."""

    error_kind = "cancelled"


class UpstreamStatusError(TransportError):
    """
    Raised by an adapter when the provider answered with a non-2xx status.

    Examples:
        raise UpstreamStatusError(500, provider="brasilapi")
    """

    def __init__(
        self,
        status_code: int,
        *,
        detail: Optional[Dict[str, Any]] = None,
        provider: Optional[str] = None,
    ):
        if detail is None:
            detail = {"status_code": status_code}
        else:
            detail["status_code"] = status_code
        label = provider or "provider"
        super().__init__(f"{label} returned status {status_code}", detail=detail, provider=provider)
        self.status_code = status_code


class NormalizationError(ProviderError):
    """
    Raised when a provider payload cannot be mapped to a NormalizedAddress.

    Examples:
        raise NormalizationError("Invalid JSON body", provider="brasilapi")
        raise NormalizationError("Missing field", detail={"field": "city"})
    """

    error_kind = "normalization_error"
