import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pytest

from cep_lookup.adapters import ProviderAdapter
from cep_lookup.models import NormalizedAddress, RequestSpec, TransportResponse
from cep_lookup.normalizers import require_fields
from cep_lookup.observability.logging import get_correlation_id


BRASILAPI_PAYLOAD = {
    "cep": "29330000",
    "state": "ES",
    "city": "Cachoeiro de Itapemirim",
    "neighborhood": "",
    "street": "",
    "service": "open-cep",
}

VIACEP_PAYLOAD = {
    "cep": "29330-000",
    "logradouro": "",
    "complemento": "",
    "bairro": "",
    "localidade": "Cachoeiro de Itapemirim",
    "uf": "ES",
    "ibge": "3201209",
    "gia": "",
    "ddd": "28",
    "siafi": "5623",
}


def json_body(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")


@dataclass
class ScriptedRoute:
    """Canned behaviour for one provider: wait ``delay`` then answer or raise."""

    delay: float = 0.0
    status_code: int = 200
    body: bytes = b""
    error: Optional[Exception] = None


class ScriptedTransport:
    """Transport double keyed by provider_id; records what happened to each request."""

    def __init__(self, routes: Dict[str, ScriptedRoute]):
        self.routes = routes
        self.requests: List[RequestSpec] = []
        self.completed: List[str] = []
        self.cancelled: List[str] = []

    async def send(self, request: RequestSpec, scope=None) -> TransportResponse:
        self.requests.append(request)
        if scope is not None:
            scope.raise_if_cancelled(request.provider_id)
        route = self.routes[request.provider_id]
        try:
            if route.delay:
                await asyncio.sleep(route.delay)
        except asyncio.CancelledError:
            self.cancelled.append(request.provider_id)
            raise
        if route.error is not None:
            raise route.error
        self.completed.append(request.provider_id)
        return TransportResponse(status_code=route.status_code, body=route.body)


class StaticAdapter(ProviderAdapter):
    """Adapter for an imaginary provider whose payload already uses the common field names."""

    def __init__(self, provider_id: str):
        super().__init__(f"https://{provider_id}.example")
        self.provider_id = provider_id
        self.seen_correlation_ids: List[Optional[str]] = []

    def build_request(self, key: str) -> RequestSpec:
        self.seen_correlation_ids.append(get_correlation_id())
        return RequestSpec(provider_id=self.provider_id, url=f"{self.base_url}/{key}")

    def normalize_payload(self, payload: Dict[str, Any]) -> NormalizedAddress:
        require_fields(payload, ("postal_code", "region"), self.provider_id)
        return NormalizedAddress(**payload)


def static_body(region: str = "ES", postal_code: str = "29330000") -> bytes:
    return json_body({"postal_code": postal_code, "region": region, "city": "Cachoeiro de Itapemirim"})


@pytest.fixture
def brasilapi_body() -> bytes:
    return json_body(BRASILAPI_PAYLOAD)


@pytest.fixture
def viacep_body() -> bytes:
    return json_body(VIACEP_PAYLOAD)


@pytest.fixture
def make_transport():
    def _make(**routes: ScriptedRoute) -> ScriptedTransport:
        return ScriptedTransport(routes)

    return _make
