import json
import logging
from typing import Any

from ttlshortener.constants import Batch, INVALID_REQUEST_BODY, BATCH_TOO_LARGE
from ttlshortener.dao.base import LinkBaseDAO
from ttlshortener.exceptions import (
    ShortenerError,
    ValidationError,
    ShortcodeCollisionError,
    GenerationExhaustedError,
)
from ttlshortener.handlers.responses import json_response, response_400, response_409, response_503
from ttlshortener.utils.helpers import get_short_url, guarantee_500_response


logger = logging.getLogger(__name__)


def _clean(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _is_blank(entry: dict[str, Any]) -> bool:
    url = entry.get('url')
    return url is None or (isinstance(url, str) and not url.strip())


def _create(entry: Any, registry: LinkBaseDAO) -> dict[str, Any]:
    """Create one link from a request entry and return its JSON view."""
    if not isinstance(entry, dict):
        raise ValidationError('Entry must be a JSON object.')

    custom_code = _clean(entry.get('customCode'))
    link = registry.create(
        _clean(entry.get('url')),
        entry.get('ttlMinutes'),
        None if custom_code == '' else custom_code,
    )
    return {**link.to_dict(), 'shortUrl': get_short_url(link.shortcode)}


def _single(entry: dict[str, Any], registry: LinkBaseDAO) -> dict:
    try:
        link = _create(entry, registry)
    except ValidationError as e:
        return response_400(message=str(e), error_code=e.error_code)
    except ShortcodeCollisionError as e:
        return response_409(message=str(e), error_code=e.error_code)
    except GenerationExhaustedError as e:
        return response_503(message=str(e), error_code=e.error_code)

    return json_response(201, {'message': f"Successfully shortened {link['originalUrl']} to {link['shortUrl']}", 'link': link})


def _batch(entries: list[Any], registry: LinkBaseDAO) -> dict:
    results = []
    for index, entry in enumerate(entries):
        if isinstance(entry, dict) and _is_blank(entry):
            results.append({'index': index, 'status': 'skipped'})
            continue

        # Every entry stands alone: a failure never undoes or blocks its siblings
        try:
            link = _create(entry, registry)
        except ShortenerError as e:
            logger.info('Link entry rejected.', extra={'index': index, 'errorCode': e.error_code})
            results.append({'index': index, 'status': 'error', 'errorCode': e.error_code, 'message': str(e)})
        else:
            results.append({'index': index, 'status': 'created', 'link': link})

    created = sum(1 for result in results if result['status'] == 'created')
    failed = sum(1 for result in results if result['status'] == 'error')
    logger.info('Processed link batch.', extra={'createdCount': created, 'failedCount': failed, 'entries': len(entries)})
    return json_response(200, {'results': results, 'created': created, 'failed': failed})


@guarantee_500_response
def handler(event: dict[str, Any], registry: LinkBaseDAO, max_batch_size: int = Batch.MAX_SIZE) -> dict:
    """Shorten one URL, or a batch of up to `max_batch_size` URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Parse the JSON request body
    - Step 2: Tell a single entry from a batch ({"links": [...]})
    - Step 3: Create each link independently in the registry
    - Step 4: Respond with the created link(s) or per-entry errors

    Request body:
        single: {"url": str, "ttlMinutes"?: int, "customCode"?: str}
        batch:  {"links": [<single>, ...]}

    HTTP responses:
        201: Single link created
            link: created link with its shortUrl
        200: Batch processed
            results: one result per entry, in request order, with status
                     'created', 'error' (plus errorCode and message) or
                     'skipped' (blank url)
            created / failed: counts
        400: Bad client request
            message: invalid JSON body, too many entries, or invalid link input
        409: Conflict
            message: custom shortcode already in use
        503: Service unavailable
            message: couldn't generate a unique shortcode

    Args:
        event (dict):
            Request event with a JSON string `body`.
        registry (LinkBaseDAO):
            Registry to create links in.
        max_batch_size (int):
            Max entries per batch. Defaults to 5.

    Returns:
        dict:
            Response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = handler(event, registry)
        >>> response['statusCode']
        201
    """
    # 1- Parse request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        return response_400(message='invalid JSON body', error_code=INVALID_REQUEST_BODY)
    if not isinstance(request_body, dict):
        return response_400(message='JSON body must be an object', error_code=INVALID_REQUEST_BODY)

    # 2- Single entry
    if 'links' not in request_body:
        return _single(request_body, registry)

    # 3- Batch of entries
    entries = request_body['links']
    if not isinstance(entries, list):
        return response_400(message="'links' must be a list", error_code=INVALID_REQUEST_BODY)
    if len(entries) > max_batch_size:
        return response_400(message=f'at most {max_batch_size} links per request', error_code=BATCH_TOO_LARGE)

    return _batch(entries, registry)
