"""Typed models for the lookup race."""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ErrorKind = Literal[
    "validation_error",
    "transport_error",
    "normalization_error",
    "cancelled",
    "internal_error",
]
ProviderStatus = Literal["ok", "error", "timeout", "cancelled"]

# Normalized 8-digit postal code, validated before dispatch
LookupKey = str


class RequestSpec(BaseModel):
    """Provider-specific request built by an adapter and sent by a transport."""

    model_config = ConfigDict(frozen=True)

    provider_id: str
    url: str
    method: str = "GET"
    params: Dict[str, str] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)


class TransportResponse(BaseModel):
    """Raw answer from a provider. Non-2xx statuses are not errors at this level."""

    status_code: int
    body: bytes = b""
    headers: Dict[str, str] = Field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class NormalizedAddress(BaseModel):
    """Common address schema. Absent fields are empty strings, never None."""

    model_config = ConfigDict(frozen=True)

    postal_code: str = ""
    region: str = ""
    city: str = ""
    district: str = ""
    street: str = ""

    @field_validator("postal_code", "region", "city", "district", "street", mode="before")
    @classmethod
    def _blank_if_missing(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    provider_id: str
    address: NormalizedAddress
    elapsed_ms: int = 0


class Failure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    provider_id: str
    error_kind: ErrorKind
    message: str = ""
    elapsed_ms: int = 0
    status_code: Optional[int] = None


Outcome = Annotated[Union[Success, Failure], Field(discriminator="kind")]


class ProviderStatusSnapshot(BaseModel):
    provider_id: str
    status: ProviderStatus
    latency_ms: Optional[int] = None
    message: Optional[str] = None


class RaceResult(BaseModel):
    """Final answer of one race: a winner, or every failure seen before the end."""

    lookup_key: str
    providers: List[str] = Field(default_factory=list)
    winner: Optional[Success] = None
    failures: List[Failure] = Field(default_factory=list)
    timed_out: bool = False
    dispatched: int = 0
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.winner is not None

    def failure_for(self, provider_id: str) -> Optional[Failure]:
        for failure in self.failures:
            if failure.provider_id == provider_id:
                return failure
        return None

    def provider_statuses(self) -> List[ProviderStatusSnapshot]:
        """One snapshot per dispatched provider, in dispatch order."""
        statuses: List[ProviderStatusSnapshot] = []
        for provider_id in self.providers:
            if self.winner is not None and self.winner.provider_id == provider_id:
                statuses.append(
                    ProviderStatusSnapshot(
                        provider_id=provider_id, status="ok", latency_ms=self.winner.elapsed_ms
                    )
                )
                continue
            failure = self.failure_for(provider_id)
            if failure is not None:
                statuses.append(
                    ProviderStatusSnapshot(
                        provider_id=provider_id,
                        status="cancelled" if failure.error_kind == "cancelled" else "error",
                        latency_ms=failure.elapsed_ms,
                        message=failure.message,
                    )
                )
            elif self.timed_out:
                statuses.append(
                    ProviderStatusSnapshot(
                        provider_id=provider_id, status="timeout", message="Deadline exceeded"
                    )
                )
            else:
                statuses.append(ProviderStatusSnapshot(provider_id=provider_id, status="cancelled"))
        return statuses
