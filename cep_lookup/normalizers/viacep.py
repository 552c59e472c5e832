"""ViaCEP payload normalizer."""

from __future__ import annotations

from typing import Any, Dict

from cep_lookup.constants import VIACEP
from cep_lookup.exceptions import NormalizationError
from cep_lookup.models import NormalizedAddress
from cep_lookup.normalizers.base import digits_only, require_fields

MANDATORY_FIELDS = ("cep", "uf", "localidade")


def normalize_viacep_payload(payload: Dict[str, Any]) -> NormalizedAddress:
    # Unknown postal codes come back as 200 {"erro": true}
    if payload.get("erro") in (True, "true"):
        raise NormalizationError("Postal code not found", provider=VIACEP)

    require_fields(payload, MANDATORY_FIELDS, VIACEP)
    return NormalizedAddress(
        postal_code=digits_only(payload["cep"]),
        region=payload["uf"],
        city=payload["localidade"],
        district=payload.get("bairro"),
        street=payload.get("logradouro"),
    )
