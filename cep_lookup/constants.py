"""Shared constants for the lookup package."""

BRASILAPI = "brasilapi"
VIACEP = "viacep"

DEFAULT_PROVIDERS = (BRASILAPI, VIACEP)

DEFAULT_BRASILAPI_BASE_URL = "https://brasilapi.com.br"
DEFAULT_VIACEP_BASE_URL = "https://viacep.com.br"

# The whole race, not a single provider
DEFAULT_DEADLINE_SECONDS = 1.0
DEFAULT_REQUEST_TIMEOUT_SECONDS = 5.0

POSTAL_CODE_LENGTH = 8
# Lowest assigned CEP (São Paulo, 01000-000)
MIN_POSTAL_CODE = 1000000

# provider_id used for failures recorded before any dispatch
INPUT_PROVIDER_ID = "input"

EXIT_OK = 0
EXIT_NO_WINNER = 1
EXIT_TIMED_OUT = 3
