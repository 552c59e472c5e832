"""Input validation performed before any provider is dispatched."""

from __future__ import annotations

import math
import re
from typing import Any

from cep_lookup.constants import MIN_POSTAL_CODE, POSTAL_CODE_LENGTH
from cep_lookup.exceptions import ValidationError
from cep_lookup.models import LookupKey

_SEPARATORS = re.compile(r"[\s.\-]")
_DIGITS = re.compile(rf"^[0-9]{{{POSTAL_CODE_LENGTH}}}$")


def normalize_lookup_key(raw: Any) -> LookupKey:
    """
    Normalize a postal code to its 8-digit form.

    Accepts ``"29330-000"``, ``"29.330-000"`` or ``"29330000"``.

    Raises:
        ValidationError: if the value is empty, not 8 digits, or below the
            first assigned postal code.
    """
    if not isinstance(raw, str):
        raise ValidationError("Postal code must be a string", detail={"value": repr(raw)})

    cleaned = _SEPARATORS.sub("", raw.strip())
    if not cleaned:
        raise ValidationError("Postal code is empty")
    if not _DIGITS.match(cleaned):
        raise ValidationError(
            f"Postal code must have exactly {POSTAL_CODE_LENGTH} digits",
            detail={"value": raw},
        )
    if int(cleaned) < MIN_POSTAL_CODE:
        raise ValidationError("Postal code is out of the assigned range", detail={"value": raw})
    return cleaned


def validate_deadline(deadline_seconds: Any) -> float:
    try:
        value = float(deadline_seconds)
    except (TypeError, ValueError):
        raise ValidationError("Deadline must be a number", detail={"deadline": repr(deadline_seconds)}) from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Deadline must be positive", detail={"deadline": value})
    return value
