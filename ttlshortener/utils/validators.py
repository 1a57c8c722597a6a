"""Input validation for link creation.

Each validator returns the accepted value unchanged or raises the matching
ValidationError subclass. None of them normalize their input.

Functions:
    validate_url(url) -> str
    validate_ttl(ttl_minutes) -> int
    validate_shortcode(code) -> str
"""

import re
from typing import Any

from ttlshortener.constants import Shortcode, URL_PREFIXES
from ttlshortener.exceptions import InvalidUrlError, InvalidTtlError, InvalidShortcodeError


_SHORTCODE_RE = re.compile(Shortcode.PATTERN)


def validate_url(url: Any) -> str:
    """Accept URLs starting with http:// or https:// (case-sensitive prefix check only).

    Example:
        >>> validate_url('https://example.com')
        'https://example.com'
        >>> validate_url('ftp://example.com')
        Traceback (most recent call last):
            ...
        ttlshortener.exceptions.InvalidUrlError: URL must start with http:// or https:// (given value: 'ftp://example.com').
    """
    if not isinstance(url, str) or not url.startswith(URL_PREFIXES):
        raise InvalidUrlError(f'URL must start with http:// or https:// (given value: {url!r}).')
    return url


def validate_ttl(ttl_minutes: Any) -> int:
    """Accept positive integers only. Floats, strings and booleans are rejected."""
    if not isinstance(ttl_minutes, int) or isinstance(ttl_minutes, bool):
        raise InvalidTtlError(f'Validity must be a positive integer (given type: {type(ttl_minutes)}).')
    if ttl_minutes <= 0:
        raise InvalidTtlError(f'Validity must be a positive integer (given value: {ttl_minutes}).')
    return ttl_minutes


def validate_shortcode(code: Any) -> str:
    """Accept 1-10 characters from [A-Za-z0-9], exact match."""
    if not isinstance(code, str) or _SHORTCODE_RE.fullmatch(code) is None:
        raise InvalidShortcodeError(
            f'Shortcode must be alphanumeric and 1-{Shortcode.MAX_CUSTOM_LENGTH} characters (given value: {code!r}).'
        )
    return code
