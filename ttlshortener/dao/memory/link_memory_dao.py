"""In-memory short link registry

This module provides the process-local implementation of LinkBaseDAO. It owns
every LinkRecordModel for the lifetime of the process; nothing is persisted.

Responsibilities:
    - Validate input and append new links;
    - Draw random shortcodes until one doesn't collide with an active link;
    - Hide expired links from lookups, listings and uniqueness checks;
    - Count clicks;
    - Serialize all of the above behind one re-entrant lock.

Classes:
    LinkMemoryDAO:
        Thread-safe in-memory registry of short links.

Example:
    >>> from ttlshortener.dao import LinkMemoryDAO

    >>> registry = LinkMemoryDAO()
    >>> link = registry.create('https://example.com', 30)
    >>> len(link.shortcode)
    6
    >>> registry.resolve(link.shortcode) == link
    True
    >>> registry.record_click(link.shortcode)
    1
    >>> [l.shortcode for l in registry.list_active()] == [link.shortcode]
    True

NOTE:
    - Expired links are soft-deleted: they stay in the store (see all_records())
      and are never compacted. Memory grows with the number of links created
      over the process lifetime.
"""

import uuid
import logging
import threading
import dataclasses
from datetime import datetime, timedelta, UTC
from collections.abc import Callable, Iterator

from beartype import beartype

from ttlshortener.constants import TTL, Shortcode
from ttlshortener.dao.base import LinkBaseDAO
from ttlshortener.dao.memory.helpers import synchronized
from ttlshortener.exceptions import ShortcodeCollisionError, GenerationExhaustedError, ValidationError
from ttlshortener.models import LinkRecordModel, RegistryStats
from ttlshortener.utils.config import RegistryConfig, check_shortcode_length
from ttlshortener.utils.helpers import is_expired
from ttlshortener.utils.shortener import generate_shortcode
from ttlshortener.utils.validators import validate_url, validate_ttl, validate_shortcode


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LinkMemoryDAO(LinkBaseDAO):
    """In-memory registry of short links

    Links are kept in an append-only list. A side index maps each shortcode to
    the positions of every link ever issued with it, so lookups don't scan
    the whole store.

    Attributes:
        default_ttl_minutes (int):
            TTL applied by create() when the caller passes None.
        shortcode_length (int):
            Length of generated shortcodes.
        max_generation_attempts (int | None):
            Cap on random draws per create() call. None means unbounded.

    Methods:
        See LinkBaseDAO.

    Example:
        >>> registry = LinkMemoryDAO(max_generation_attempts=100)
        >>> registry.create('https://example.com', 1, 'XYZ999').shortcode
        'XYZ999'
        >>> registry.create('https://example.org', 1, 'XYZ999')
        Traceback (most recent call last):
            ...
        ttlshortener.exceptions.ShortcodeCollisionError: Shortcode 'XYZ999' already exists.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        default_ttl_minutes: int = TTL.DEFAULT_MINUTES,
        shortcode_length: int = Shortcode.GENERATED_LENGTH,
        max_generation_attempts: int | None = None,
        shortcode_factory: Callable[[int], str] = generate_shortcode,
    ):
        """Initialize an empty registry

        Args:
            clock (Callable[[], datetime] | None):
                Returns the current tz-aware time. Defaults to datetime.now(UTC).

            default_ttl_minutes (int):
                TTL for create() calls without one. Defaults to 30.

            shortcode_length (int):
                Length of generated shortcodes. Defaults to 6.

            max_generation_attempts (int | None):
                Max random draws per create() call. Defaults to None (unbounded).

            shortcode_factory (Callable[[int], str]):
                Draws one candidate shortcode of the given length.

        Raises:
            InvalidTtlError: If `default_ttl_minutes` isn't a positive integer.
            BadConfigurationError: If `shortcode_length` isn't within 1-10.
        """
        self.clock = clock or _utcnow
        self.default_ttl_minutes = validate_ttl(default_ttl_minutes)
        self.shortcode_length = check_shortcode_length(shortcode_length)
        self.max_generation_attempts = max_generation_attempts
        self.shortcode_factory = shortcode_factory

        self._lock = threading.RLock()
        self._records: list[LinkRecordModel] = []
        self._positions: dict[str, list[int]] = {}

    @classmethod
    def from_config(cls, config: RegistryConfig, **kwargs) -> 'LinkMemoryDAO':
        """Build a registry from loaded configuration."""
        return cls(
            default_ttl_minutes=config.default_ttl_minutes,
            shortcode_length=config.shortcode_length,
            max_generation_attempts=config.max_generation_attempts,
            **kwargs,
        )

    @synchronized
    def create(self, original_url: str, ttl_minutes: int | None = None, custom_code: str | None = None) -> LinkRecordModel:
        """Validate input and store a new short link

        Validation runs in this order and fully precedes mutation:
        URL, TTL, custom code format, custom code collision. Shortcode
        generation and the append happen under the same lock acquisition as
        the collision check, so two concurrent calls can never claim the same
        shortcode.

        Args:
            original_url (str):
                Destination URL. Must start with http:// or https://.
            ttl_minutes (int | None):
                Positive lifetime in minutes. None applies `default_ttl_minutes`.
            custom_code (str | None):
                Requested shortcode. None or '' draws a random one.

        Returns:
            LinkRecordModel: snapshot of the stored link.

        Raises:
            InvalidUrlError, InvalidTtlError, InvalidShortcodeError:
                On invalid input.
            ShortcodeCollisionError:
                If the custom code is held by an active link.
            GenerationExhaustedError:
                If `max_generation_attempts` random draws all collided.

        Example:
            >>> link = registry.create('https://example.com', 30)
            >>> link.expires_at - link.created_at
            datetime.timedelta(seconds=1800)
        """
        if ttl_minutes is None:
            ttl_minutes = self.default_ttl_minutes

        logger.debug(
            'Creating short link.',
            extra={'originalUrl': original_url, 'ttlMinutes': ttl_minutes, 'customCode': custom_code},
        )

        has_custom_code = custom_code not in (None, '')

        try:
            validate_url(original_url)
            validate_ttl(ttl_minutes)
            if has_custom_code:
                validate_shortcode(custom_code)
        except ValidationError as e:
            logger.warning(
                'Rejected short link input.',
                extra={'errorCode': e.error_code, 'reason': str(e), 'customCode': custom_code},
            )
            raise

        now = self.clock()

        if has_custom_code:
            if self._active(custom_code, now) is not None:
                logger.warning('Shortcode collision.', extra={'customCode': custom_code})
                raise ShortcodeCollisionError(f"Shortcode '{custom_code}' already exists.")
            shortcode = custom_code
        else:
            shortcode = self._generate_unique(now)

        record = LinkRecordModel(
            id=uuid.uuid4().hex,
            original_url=original_url,
            shortcode=shortcode,
            created_at=now,
            expires_at=now + timedelta(minutes=ttl_minutes),
        )
        self._positions.setdefault(shortcode, []).append(len(self._records))
        self._records.append(record)

        logger.info(
            'Short link created.',
            extra={'linkId': record.id, 'shortcode': shortcode, 'originalUrl': original_url, 'ttlMinutes': ttl_minutes},
        )
        return record

    @synchronized
    @beartype
    def resolve(self, code: str) -> LinkRecordModel | None:
        """Return the active link holding `code`

        An expired match is treated exactly like no match.

        Args:
            code (str): Shortcode to look up (exact, case-sensitive).

        Returns:
            LinkRecordModel | None: The active link, None if not found or expired.
        """
        record = self._active(code, self.clock())
        if record is None:
            logger.debug('No active link for shortcode.', extra={'shortcode': code})
        return record

    @synchronized
    @beartype
    def record_click(self, code: str) -> int | None:
        """Count one visit on the active link holding `code`

        A miss is a no-op, not an error.

        Args:
            code (str): Shortcode of the visited link.

        Returns:
            int | None: New click count, None if no active link matched.

        Example:
            >>> registry.record_click('ABC123')
            1
            >>> registry.record_click('ABC123')
            2
            >>> registry.record_click('unknown') is None
            True
        """
        record = self._click(code, self.clock())
        return None if record is None else record.clicks

    @synchronized
    @beartype
    def resolve_and_click(self, code: str) -> LinkRecordModel | None:
        """Resolve `code` and count the visit in one critical section

        Returns:
            LinkRecordModel | None: The link with its updated click count, None on a miss.
        """
        return self._click(code, self.clock())

    @synchronized
    def list_active(self) -> Iterator[LinkRecordModel]:
        """Snapshot of active links

        The snapshot is taken under the lock when this method is called, so
        later mutations don't show up in it.

        Returns:
            Iterator[LinkRecordModel]: Active links in insertion order. Single pass.
        """
        now = self.clock()
        snapshot = tuple(record for record in self._records if not is_expired(record, now))
        return iter(snapshot)

    @synchronized
    def all_records(self) -> tuple[LinkRecordModel, ...]:
        """Snapshot of every stored link, expired ones included, in insertion order."""
        return tuple(self._records)

    @synchronized
    def stats(self) -> RegistryStats:
        return self.snapshot()[1]

    @synchronized
    def snapshot(self) -> tuple[tuple[LinkRecordModel, ...], RegistryStats]:
        """Active links and their statistics, read under one lock acquisition

        Returns:
            tuple: Active links in insertion order, and RegistryStats computed from them.
        """
        now = self.clock()
        active = tuple(record for record in self._records if not is_expired(record, now))
        stats = RegistryStats(
            total_links=len(active),
            total_clicks=sum(record.clicks for record in active),
            stored_links=len(self._records),
        )
        return active, stats

    def _active_position(self, code: str, now: datetime) -> int | None:
        # Newest first, at most one of them is active
        for position in reversed(self._positions.get(code, ())):
            if not is_expired(self._records[position], now):
                return position
        return None

    def _active(self, code: str, now: datetime) -> LinkRecordModel | None:
        position = self._active_position(code, now)
        return None if position is None else self._records[position]

    def _click(self, code: str, now: datetime) -> LinkRecordModel | None:
        position = self._active_position(code, now)
        if position is None:
            logger.debug('Click ignored: no active link for shortcode.', extra={'shortcode': code})
            return None

        record = self._records[position]
        record = dataclasses.replace(record, clicks=record.clicks + 1)
        self._records[position] = record

        logger.info('Click recorded.', extra={'shortcode': code, 'clicks': record.clicks})
        return record

    def _generate_unique(self, now: datetime) -> str:
        attempts = 0
        while True:
            if self.max_generation_attempts is not None and attempts >= self.max_generation_attempts:
                logger.error('Shortcode generation exhausted.', extra={'attempts': attempts})
                raise GenerationExhaustedError(f"Couldn't generate a unique shortcode after {attempts} attempts.")

            candidate = self.shortcode_factory(self.shortcode_length)
            attempts += 1
            if self._active_position(candidate, now) is None:
                return candidate

            logger.debug('Generated shortcode collides with an active link. Retrying.', extra={'shortcode': candidate})
