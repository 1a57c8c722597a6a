import logging
from typing import Any

from ttlshortener.dao.base import LinkBaseDAO
from ttlshortener.handlers.responses import json_response
from ttlshortener.utils.helpers import get_short_url, guarantee_500_response


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: dict[str, Any], registry: LinkBaseDAO) -> dict:
    """List active short links with their statistics

    The listing and every total come from one registry snapshot, so they
    always agree with each other.

    HTTP responses:
        200: Active links
            links: active links in creation order, each with its `shortUrl`
            totalLinks: number of active links
            totalClicks: clicks summed over active links
            storedLinks: every stored link, expired ones included

    Example:
        >>> response = handler({}, registry)
        >>> json.loads(response['body'])['totalLinks']
        2
    """
    active, stats = registry.snapshot()
    links = [{**link.to_dict(), 'shortUrl': get_short_url(link.shortcode)} for link in active]

    logger.debug('Listing active short links.', extra={'totalLinks': len(links)})
    return json_response(
        200,
        {
            'links': links,
            'totalLinks': stats.total_links,
            'totalClicks': stats.total_clicks,
            'storedLinks': stats.stored_links,
        },
    )
