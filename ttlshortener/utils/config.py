"""Utility functions for application configuration management.

Registry settings live in a small YAML document. The document is looked up
in this order:

    1. the `path` argument of `load_config()`
    2. the file named by `SHORTENER_CONFIG`
    3. `<project root>/config/<APP_ENV>.yaml`, e.g.:

        config/
        ├── local.yaml
        └── prod.yaml

When none of them exist the built-in defaults are used. A document looks like:

    default_ttl_minutes: 30
    shortcode_length: 6
    max_generation_attempts: 1000
    max_batch_size: 5

Every key is optional.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    load_config(path: str | Path | None = None) -> RegistryConfig
        Load and validate the registry configuration.

Example:
    >>> from ttlshortener.utils.config import load_config
    >>> config = load_config()
    >>> config.default_ttl_minutes
    30
"""

import os
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from ttlshortener.constants import ENV, TTL, Shortcode, Batch
from ttlshortener.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)


def check_shortcode_length(length: int) -> int:
    """Ensure a generated shortcode length fits the 1-10 character shortcode format."""
    if not isinstance(length, int) or isinstance(length, bool) or length <= 0:
        raise BadConfigurationError(f"'shortcode_length' must be a positive integer (given value: {length!r}).")
    if length > Shortcode.MAX_CUSTOM_LENGTH:
        raise BadConfigurationError(f"'shortcode_length' must not exceed {Shortcode.MAX_CUSTOM_LENGTH} (given value: {length}).")
    return length


@dataclass(frozen=True)
class RegistryConfig:
    """Validated registry settings.

    Attributes:
        default_ttl_minutes (int):
            TTL applied when a caller omits one.
        shortcode_length (int):
            Length of generated shortcodes.
        max_generation_attempts (int | None):
            Cap on random draws per create() call. None means unbounded.
        max_batch_size (int):
            Max entries accepted per shorten request.
    """

    default_ttl_minutes: int = TTL.DEFAULT_MINUTES
    shortcode_length: int = Shortcode.GENERATED_LENGTH
    max_generation_attempts: int | None = None
    max_batch_size: int = Batch.MAX_SIZE

    def __post_init__(self):
        for name in ('default_ttl_minutes', 'max_batch_size'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise BadConfigurationError(f"'{name}' must be a positive integer (given value: {value!r}).")

        attempts = self.max_generation_attempts
        if attempts is not None and (not isinstance(attempts, int) or isinstance(attempts, bool) or attempts <= 0):
            raise BadConfigurationError(f"'max_generation_attempts' must be a positive integer or null (given value: {attempts!r}).")

        check_shortcode_length(self.shortcode_length)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'prod'
        >>> app_env()
        'prod'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Reads `PROJECT_ROOT`. Falls back to the current working directory.

    Returns:
        Path:
            Absolute path to the project root directory.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.getcwd()))


def _config_path(path: str | Path | None) -> Path | None:
    if path is not None:
        return Path(path)

    env_path = os.environ.get(ENV.App.CONFIG_PATH)
    if env_path:
        return Path(env_path)

    default_path = project_root() / 'config' / f'{app_env()}.yaml'
    return default_path if default_path.is_file() else None


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open('r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    return data or {}


def load_config(path: str | Path | None = None) -> RegistryConfig:
    """Load the registry configuration

    Args:
        path (str | Path | None):
            Explicit YAML file to read. See the module docstring for the
            lookup order when omitted.

    Returns:
        RegistryConfig: Validated settings (defaults when no file is found).

    Raises:
        FileNotFoundError:
            If an explicitly requested file doesn't exist.
        BadConfigurationError:
            If the document is not a mapping, holds unknown keys or invalid values.

    Example:
        >>> config = load_config('config/prod.yaml')
        >>> config.max_batch_size
        5
    """
    config_path = _config_path(path)
    if config_path is None:
        logger.debug('No configuration file found. Using defaults.', extra={'appEnv': app_env()})
        return RegistryConfig()

    try:
        document = _load_yaml(config_path)
    except yaml.YAMLError as e:
        raise BadConfigurationError(f"Can't parse configuration file {config_path}.") from e

    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration file {config_path} must contain a mapping.')

    known = {f.name for f in fields(RegistryConfig)}
    unknown = sorted(set(document) - known)
    if unknown:
        unknown_list = ', '.join(f"'{key}'" for key in unknown)
        raise BadConfigurationError(f'Unknown configuration keys in {config_path}: {unknown_list}')

    logger.debug('Loaded configuration file.', extra={'configPath': str(config_path)})
    return RegistryConfig(**document)
