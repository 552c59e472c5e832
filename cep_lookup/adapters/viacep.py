"""ViaCEP adapter (https://viacep.com.br)."""

from __future__ import annotations

from typing import Any, Dict

from cep_lookup.adapters.base import ProviderAdapter
from cep_lookup.constants import DEFAULT_VIACEP_BASE_URL, VIACEP
from cep_lookup.models import LookupKey, NormalizedAddress, RequestSpec
from cep_lookup.normalizers import normalize_viacep_payload


class ViaCEPAdapter(ProviderAdapter):
    provider_id = VIACEP

    def __init__(self, base_url: str = DEFAULT_VIACEP_BASE_URL):
        super().__init__(base_url)

    def build_request(self, key: LookupKey) -> RequestSpec:
        return RequestSpec(
            provider_id=self.provider_id,
            url=f"{self.base_url}/ws/{key}/json/",
            headers={"Accept": "application/json"},
        )

    def normalize_payload(self, payload: Dict[str, Any]) -> NormalizedAddress:
        return normalize_viacep_payload(payload)
