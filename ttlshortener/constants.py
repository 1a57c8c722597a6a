import string
from enum import StrEnum


class TTL:
    """TTL durations."""

    DEFAULT_MINUTES = 30  # Default link lifetime when the caller omits one


class Shortcode:
    """Shortcode shape."""

    ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
    GENERATED_LENGTH = 6
    MAX_CUSTOM_LENGTH = 10
    PATTERN = rf'^[A-Za-z0-9]{{1,{MAX_CUSTOM_LENGTH}}}$'


class Batch:
    """Presentation layer limits."""

    MAX_SIZE = 5  # Max link entries per submission


# Path segments which are never looked up as shortcodes
RESERVED_PATHS = frozenset({'', 'statistics'})

# Allowed URL scheme prefixes (case-sensitive)
URL_PREFIXES = ('http://', 'https://')

DEFAULT_BASE_URL = 'http://localhost:3000'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        PROJECT_ROOT = 'PROJECT_ROOT'
        LOG_LEVEL = 'LOG_LEVEL'
        BASE_URL = 'BASE_URL'
        CONFIG_PATH = 'SHORTENER_CONFIG'


# Event codes
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
RESERVED_PATH = 'RESERVED_PATH'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
BATCH_TOO_LARGE = 'BATCH_TOO_LARGE'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
