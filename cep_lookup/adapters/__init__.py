"""Provider adapter registry."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from cep_lookup.adapters.base import ProviderAdapter
from cep_lookup.adapters.brasilapi import BrasilAPIAdapter
from cep_lookup.adapters.viacep import ViaCEPAdapter
from cep_lookup.constants import BRASILAPI, VIACEP
from cep_lookup.exceptions import UnknownProviderError
from cep_lookup.settings import LookupSettings


ADAPTER_FACTORIES: Dict[str, Callable[[LookupSettings], ProviderAdapter]] = {
    BRASILAPI: lambda settings: BrasilAPIAdapter(settings.brasilapi_base_url),
    VIACEP: lambda settings: ViaCEPAdapter(settings.viacep_base_url),
}


def available_provider_ids() -> List[str]:
    return list(ADAPTER_FACTORIES.keys())


def get_adapters(
    provider_ids: Optional[Iterable[str]] = None,
    settings: Optional[LookupSettings] = None,
) -> List[ProviderAdapter]:
    """
    Build adapters for ``provider_ids`` (defaults to ``settings.providers``).

    Duplicate ids are collapsed, order is preserved.

    Raises:
        UnknownProviderError: if an id is not registered
    """
    settings = settings or LookupSettings()
    ids = settings.providers if provider_ids is None else provider_ids

    adapters: List[ProviderAdapter] = []
    seen = set()
    for raw_id in ids:
        provider_id = str(raw_id).strip().lower()
        if not provider_id or provider_id in seen:
            continue
        factory = ADAPTER_FACTORIES.get(provider_id)
        if factory is None:
            raise UnknownProviderError(provider_id)
        seen.add(provider_id)
        adapters.append(factory(settings))
    return adapters


__all__ = [
    "ADAPTER_FACTORIES",
    "BrasilAPIAdapter",
    "ProviderAdapter",
    "ViaCEPAdapter",
    "available_provider_ids",
    "get_adapters",
]
