"""BrasilAPI adapter (https://brasilapi.com.br/docs#tag/CEP)."""

from __future__ import annotations

from typing import Any, Dict

from cep_lookup.adapters.base import ProviderAdapter
from cep_lookup.constants import BRASILAPI, DEFAULT_BRASILAPI_BASE_URL
from cep_lookup.models import LookupKey, NormalizedAddress, RequestSpec
from cep_lookup.normalizers import normalize_brasilapi_payload


class BrasilAPIAdapter(ProviderAdapter):
    provider_id = BRASILAPI

    def __init__(self, base_url: str = DEFAULT_BRASILAPI_BASE_URL):
        super().__init__(base_url)

    def build_request(self, key: LookupKey) -> RequestSpec:
        return RequestSpec(
            provider_id=self.provider_id,
            url=f"{self.base_url}/api/cep/v1/{key}",
            headers={"Accept": "application/json"},
        )

    def normalize_payload(self, payload: Dict[str, Any]) -> NormalizedAddress:
        return normalize_brasilapi_payload(payload)
