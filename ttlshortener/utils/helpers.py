"""Helper utilities shared by the registry and its handlers.

Functions:
    is_expired(record, now=None) -> bool
        True once the current time has passed the record's expiry
    base_url() -> str
        Public base URL short links are served from
    get_short_url(shortcode) -> str
        Get string representation of short URL for a given shortcode
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler errors into HTTP 500 responses

Example:
    >>> from ttlshortener.utils.helpers import get_short_url
    >>> get_short_url('abc123')
    'http://localhost:3000/abc123'

    >>> os.environ['BASE_URL'] = 'https://sho.rt/'
    >>> get_short_url('abc123')
    'https://sho.rt/abc123'
"""

import os
import json
import logging
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from ttlshortener.constants import ENV, DEFAULT_BASE_URL, UNKNOWN_INTERNAL_SERVER_ERROR
from ttlshortener.models import LinkRecordModel
from ttlshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def is_expired(record: LinkRecordModel, now: datetime | None = None) -> bool:
    """Check whether a link record has expired

    A record is active up to and including its expiry instant. It counts as
    expired only once now > expires_at.

    Args:
        record (LinkRecordModel):
            Record to check.
        now (datetime | None):
            Reference time. Read once from the system clock when omitted.

    Returns:
        bool: True if now > record.expires_at, False otherwise.
    """
    if now is None:
        now = datetime.now(UTC)
    return now > record.expires_at


def base_url() -> str:
    """Return the public base URL short links are served from

    Reads `BASE_URL`, falling back to http://localhost:3000 for local runs.

    Returns:
        str: Base URL without a trailing slash.
    """
    return os.environ.get(ENV.App.BASE_URL, DEFAULT_BASE_URL).rstrip('/')


def get_short_url(shortcode: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode

    Returns:
        str: short url string representation
    """
    return f'{base_url()}/{shortcode}'


def guarantee_500_response(handler: Callable[..., dict]) -> Callable[..., dict]:
    """Decorator: respond with HTTP 500 instead of raising from a handler

    When running locally the original exception is re-raised so it shows up
    with its full traceback during development.

    Args:
        handler (Callable[..., dict]):
            Handler returning an HTTP response dict.

    Returns:
        Callable[..., dict]: Wrapped handler.
    """

    @functools.wraps(handler)
    def wrapper(*args, **kwargs) -> dict:
        try:
            return handler(*args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled error in handler. Responding with 500.', extra={'handler': handler.__name__})
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
