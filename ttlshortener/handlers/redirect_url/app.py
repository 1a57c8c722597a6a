import logging
from typing import Any

from ttlshortener.constants import (
    RESERVED_PATHS,
    MISSING_SHORTCODE,
    RESERVED_PATH,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
)
from ttlshortener.dao.base import LinkBaseDAO
from ttlshortener.handlers.responses import response_302, response_400, response_404
from ttlshortener.utils.helpers import get_short_url, guarantee_500_response


logger = logging.getLogger(__name__)


def path_segment(event: dict[str, Any]) -> str | None:
    """Extract the requested shortcode from an event

    Prefers the `shortcode` path parameter. Falls back to the raw `path`
    with its leading slash removed.

    Returns:
        str | None: Path segment, None if the event carries no path at all.

    Example:
        >>> path_segment({'path': '/abc123'})
        'abc123'
        >>> path_segment({'path': '/'})
        ''
    """
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is not None:
        return shortcode

    path = event.get('path')
    if path is None:
        return None
    return path[1:] if path.startswith('/') else path


@guarantee_500_response
def handler(event: dict[str, Any], registry: LinkBaseDAO) -> dict:
    """Redirect a short link request to its original URL

    This handler follows this procedure to redirect:
    - Step 1: Extract the path segment from the request
    - Step 2: Refuse reserved paths (root and statistics page)
    - Step 3: Resolve the shortcode and count the visit atomically
    - Step 4: Redirect client to the original URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: original URL
        400: Bad client request
            message: missing path in request
        404: Not found
            message: unknown or expired shortcode, or a reserved path
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (dict):
            Request event carrying `pathParameters.shortcode` or `path`.
        registry (LinkBaseDAO):
            Registry to resolve shortcodes against.

    Returns:
        dict:
            Response including statusCode, headers, and body.

    Example:
        >>> response = handler({'path': '/abc123'}, registry)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract shortcode from request's path
    shortcode = path_segment(event)
    if shortcode is None:
        logger.info(
            'Missing path in request. Responding with 400.',
            extra={'event': MISSING_SHORTCODE},
        )
        return response_400(message='missing shortcode in path', error_code=MISSING_SHORTCODE)

    # 2- Reserved paths are never shortcodes
    if shortcode in RESERVED_PATHS:
        logger.debug('Reserved path requested. Responding with 404.', extra={'path': f'/{shortcode}', 'event': RESERVED_PATH})
        return response_404(message=f"'/{shortcode}' is not a short link", error_code=RESERVED_PATH)

    # 3- Resolve and count the visit
    link = registry.resolve_and_click(shortcode)
    if link is None:
        logger.info(
            'Short link not found or expired. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(
            message=f"short url {get_short_url(shortcode)} doesn't exist or has expired",
            error_code=SHORT_URL_NOT_FOUND,
        )

    # 4- Redirect client to original URL
    logger.info(
        'Redirecting client to original URL. Responding with 302.',
        extra={'shortcode': shortcode, 'clicks': link.clicks, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=link.original_url)
