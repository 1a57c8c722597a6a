from ttlshortener.utils.config import RegistryConfig, app_env, project_root, load_config
from ttlshortener.utils.helpers import (
    is_expired,
    base_url,
    get_short_url,
    guarantee_500_response,
)
from ttlshortener.utils.shortener import generate_shortcode
from ttlshortener.utils.validators import validate_url, validate_ttl, validate_shortcode
from ttlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'RegistryConfig',
    'app_env',
    'project_root',
    'load_config',
    'is_expired',
    'base_url',
    'get_short_url',
    'guarantee_500_response',
    'validate_url',
    'validate_ttl',
    'validate_shortcode',
    'initialize_logging',
]
