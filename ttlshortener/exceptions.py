class ShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortener_error'


class ValidationError(ShortenerError):
    """Base exception for rejected caller input."""

    error_code = 'validation:validation_error'


class InvalidUrlError(ValidationError):
    """Raised when a URL doesn't start with http:// or https://."""

    error_code = 'validation:invalid_url'


class InvalidTtlError(ValidationError):
    """Raised when a TTL is not a positive integer."""

    error_code = 'validation:invalid_ttl'


class InvalidShortcodeError(ValidationError):
    """Raised when a custom shortcode is not 1-10 alphanumeric characters."""

    error_code = 'validation:invalid_shortcode'


class RegistryError(ShortenerError):
    """Base exception for shortcode registry failures."""

    error_code = 'registry:registry_error'


class ShortcodeCollisionError(RegistryError):
    """Raised when a custom shortcode is already held by an active link."""

    error_code = 'registry:shortcode_collision'


class GenerationExhaustedError(RegistryError):
    """Raised when random shortcode generation runs out of attempts."""

    error_code = 'registry:generation_exhausted'


class ConfigurationError(ShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
