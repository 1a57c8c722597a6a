from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any


def _isoformat(moment: datetime) -> str:
    return moment.astimezone(UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass(frozen=True)
class LinkRecordModel:
    """Represent a single time-bounded short link.

    Attributes:
        id (str):
            Opaque unique identifier assigned at creation. Never reused.
        original_url (str):
            Destination URL. Always starts with http:// or https://.
        shortcode (str):
            1-10 alphanumeric characters identifying the link.
        created_at (datetime):
            Creation time (UTC).
        expires_at (datetime):
            created_at + TTL. The link stops resolving once now > expires_at.
        clicks (int):
            Number of recorded visits. Only the registry bumps it, by storing
            a replaced copy of the record.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime(2025, 10, 15, tzinfo=UTC)
        >>> link = LinkRecordModel(
        ...     id='4f1c0d8e',
        ...     original_url='https://example.com/article/123',
        ...     shortcode='abc123',
        ...     created_at=now,
        ...     expires_at=now + timedelta(minutes=30),
        ... )
        >>> link.clicks
        0
        >>> link.to_dict()['expiresAt']
        '2025-10-15T00:30:00.000Z'
    """

    id: str
    original_url: str
    shortcode: str
    created_at: datetime
    expires_at: datetime
    clicks: int = 0

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable view of the record (camelCase keys, ISO-8601 timestamps)."""
        return {
            'id': self.id,
            'shortcode': self.shortcode,
            'originalUrl': self.original_url,
            'createdAt': _isoformat(self.created_at),
            'expiresAt': _isoformat(self.expires_at),
            'clicks': self.clicks,
        }


# fmt: off
@dataclass(frozen=True)
class RegistryStats:
    total_links: int   # Active links
    total_clicks: int  # Clicks summed over active links
    stored_links: int  # Every stored link, expired ones included
# fmt: on
