"""Provider payload normalizers."""

from cep_lookup.normalizers.base import decode_json_object, digits_only, require_fields
from cep_lookup.normalizers.brasilapi import normalize_brasilapi_payload
from cep_lookup.normalizers.viacep import normalize_viacep_payload

__all__ = [
    "decode_json_object",
    "digits_only",
    "require_fields",
    "normalize_brasilapi_payload",
    "normalize_viacep_payload",
]
