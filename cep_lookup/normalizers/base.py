"""Helpers shared by the provider normalizers."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable

from cep_lookup.exceptions import NormalizationError


def decode_json_object(body: bytes, provider_id: str) -> Dict[str, Any]:
    """Decode a response body that must be a JSON object."""
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, ValueError) as e:
        raise NormalizationError(f"Invalid JSON body: {e}", provider=provider_id) from e
    if not isinstance(payload, dict):
        raise NormalizationError(
            f"Expected a JSON object, got {type(payload).__name__}", provider=provider_id
        )
    return payload


def require_fields(payload: Dict[str, Any], fields: Iterable[str], provider_id: str) -> None:
    for name in fields:
        value = payload.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise NormalizationError(
                f"Missing field '{name}'", detail={"field": name}, provider=provider_id
            )


def digits_only(value: Any) -> str:
    return "".join(ch for ch in str(value) if ch.isdigit())
