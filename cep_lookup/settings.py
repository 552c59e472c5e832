"""Environment-driven configuration.

Environment variables:
- CEP_LOOKUP_DEADLINE_SECONDS: race deadline (default 1.0)
- CEP_LOOKUP_REQUEST_TIMEOUT_SECONDS: per-request httpx timeout (default 5.0)
- CEP_LOOKUP_PROVIDERS: comma separated provider ids (default brasilapi,viacep)
- BRASILAPI_BASE_URL / VIACEP_BASE_URL: provider endpoints

The CLI loads a ``.env`` file before reading these; library callers pass their
own values or rely on the process environment.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from cep_lookup.constants import (
    DEFAULT_BRASILAPI_BASE_URL,
    DEFAULT_DEADLINE_SECONDS,
    DEFAULT_PROVIDERS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_VIACEP_BASE_URL,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupSettings:
    deadline_seconds: float = DEFAULT_DEADLINE_SECONDS
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    providers: Tuple[str, ...] = field(default=DEFAULT_PROVIDERS)
    brasilapi_base_url: str = DEFAULT_BRASILAPI_BASE_URL
    viacep_base_url: str = DEFAULT_VIACEP_BASE_URL


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a number, using {default}")
        return default
    if not math.isfinite(value) or value <= 0:
        logger.warning(f"Ignoring {name}={raw!r}: must be positive, using {default}")
        return default
    return value


def _env_list(env: Mapping[str, str], name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = env.get(name) or ""
    items = tuple(item.strip().lower() for item in raw.split(",") if item.strip())
    return items or default


def load_settings(env: Optional[Mapping[str, str]] = None) -> LookupSettings:
    """Build settings from ``env`` (defaults to ``os.environ``)."""
    env = os.environ if env is None else env
    return LookupSettings(
        deadline_seconds=_env_float(env, "CEP_LOOKUP_DEADLINE_SECONDS", DEFAULT_DEADLINE_SECONDS),
        request_timeout_seconds=_env_float(
            env, "CEP_LOOKUP_REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS
        ),
        providers=_env_list(env, "CEP_LOOKUP_PROVIDERS", DEFAULT_PROVIDERS),
        brasilapi_base_url=(env.get("BRASILAPI_BASE_URL") or DEFAULT_BRASILAPI_BASE_URL).rstrip("/"),
        viacep_base_url=(env.get("VIACEP_BASE_URL") or DEFAULT_VIACEP_BASE_URL).rstrip("/"),
    )
