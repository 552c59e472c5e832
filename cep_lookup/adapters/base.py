"""Provider adapter contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from cep_lookup.exceptions import UpstreamStatusError
from cep_lookup.models import LookupKey, NormalizedAddress, RequestSpec, TransportResponse
from cep_lookup.normalizers import decode_json_object


class ProviderAdapter(ABC):
    """
    Builds the request for one provider and maps its answer to the common schema.

    Adapters are stateless and do no I/O; the transport sends the request.
    ``normalize`` raises ``UpstreamStatusError`` for non-2xx answers and
    ``NormalizationError`` for payloads it cannot map.
    """

    provider_id: str

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    @abstractmethod
    def build_request(self, key: LookupKey) -> RequestSpec:
        pass

    @abstractmethod
    def normalize_payload(self, payload: Dict[str, Any]) -> NormalizedAddress:
        pass

    def normalize(self, response: TransportResponse) -> NormalizedAddress:
        if not response.is_success:
            raise UpstreamStatusError(response.status_code, provider=self.provider_id)
        payload = decode_json_object(response.body, self.provider_id)
        return self.normalize_payload(payload)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url!r})"
