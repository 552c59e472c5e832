"""BrasilAPI CEP v1 payload normalizer."""

from __future__ import annotations

from typing import Any, Dict

from cep_lookup.constants import BRASILAPI
from cep_lookup.models import NormalizedAddress
from cep_lookup.normalizers.base import digits_only, require_fields

MANDATORY_FIELDS = ("cep", "state", "city")


def normalize_brasilapi_payload(payload: Dict[str, Any]) -> NormalizedAddress:
    """
    Map a BrasilAPI answer to a NormalizedAddress.

    Example payload::

        {"cep": "29330000", "state": "ES", "city": "Cachoeiro de Itapemirim",
         "neighborhood": "", "street": "", "service": "open-cep"}
    """
    require_fields(payload, MANDATORY_FIELDS, BRASILAPI)
    return NormalizedAddress(
        postal_code=digits_only(payload["cep"]),
        region=payload["state"],
        city=payload["city"],
        district=payload.get("neighborhood"),
        street=payload.get("street"),
    )
