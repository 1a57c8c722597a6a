"""Abstract base class for short link registries.

This class establishes the contract collaborators (the shorten, redirect and
statistics handlers) rely on, regardless of where link records are kept.

Responsibilities:
    - Create links from validated input, enforcing shortcode uniqueness among
      active links.
    - Resolve shortcodes to active links only.
    - Account clicks.
    - Expose snapshot views of active (and, for auditing, all) links.

Example:
    Typical usage with a storage-specific implementation:

        >>> from ttlshortener.dao import LinkMemoryDAO

        >>> registry = LinkMemoryDAO()
        >>> link = registry.create('https://example.com/blog/article-123', 30, 'blog123')
        >>> registry.resolve('blog123').original_url
        'https://example.com/blog/article-123'
        >>> registry.record_click('blog123')
        1
        >>> registry.resolve('nope') is None
        True
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from ttlshortener.models import LinkRecordModel, RegistryStats


class LinkBaseDAO(ABC):
    """Interface for short link registries.

    Methods:
        create(original_url: str, ttl_minutes: int | None, custom_code: str | None) -> LinkRecordModel:
            Validate input and store a new link.
            Raises InvalidUrlError, InvalidTtlError, InvalidShortcodeError,
            ShortcodeCollisionError or GenerationExhaustedError. Nothing is
            stored when any of them is raised.

        resolve(code: str) -> LinkRecordModel | None:
            Return the active link holding `code`, None otherwise.

        record_click(code: str) -> int | None:
            Count one visit on the active link holding `code`.
            Returns the new click count, None if no active link matched.

        resolve_and_click(code: str) -> LinkRecordModel | None:
            resolve() followed by record_click() as one atomic step.

        list_active() -> Iterator[LinkRecordModel]:
            Snapshot of active links in insertion order.

        all_records() -> tuple[LinkRecordModel, ...]:
            Snapshot of every stored link, expired ones included.

        stats() -> RegistryStats:
            Active link count, their click total and the stored link count.

        snapshot() -> tuple[tuple[LinkRecordModel, ...], RegistryStats]:
            Active links and their stats, taken together atomically.

    NOTE:
        - Links expire by time comparison only. Expired links stay stored but
          are invisible to every method except all_records() and stats().
    """

    @abstractmethod
    def create(self, original_url: str, ttl_minutes: int | None = None, custom_code: str | None = None) -> LinkRecordModel:
        """Create a new short link.

        Args:
            original_url (str):
                Destination URL. Must start with http:// or https://.

            ttl_minutes (int | None):
                Positive lifetime in minutes. None applies the registry default.

            custom_code (str | None):
                Requested shortcode. None (or '') draws a random one.

        Returns:
            LinkRecordModel: snapshot of the stored link.

        Raises:
            InvalidUrlError:
                If the URL lacks an http:// or https:// prefix.

            InvalidTtlError:
                If the TTL is not a positive integer.

            InvalidShortcodeError:
                If the custom code is not 1-10 alphanumeric characters.

            ShortcodeCollisionError:
                If the custom code is held by an active link.

            GenerationExhaustedError:
                If random generation hits its attempt cap.
        """
        pass

    @abstractmethod
    def resolve(self, code: str) -> LinkRecordModel | None:
        """Return the active link for `code`, or None (unknown or expired)."""
        pass

    @abstractmethod
    def record_click(self, code: str) -> int | None:
        """Increment the active link's click counter by exactly one.

        Returns:
            int | None: New click count, None when no active link matched.
        """
        pass

    @abstractmethod
    def resolve_and_click(self, code: str) -> LinkRecordModel | None:
        pass

    @abstractmethod
    def list_active(self) -> Iterator[LinkRecordModel]:
        pass

    @abstractmethod
    def all_records(self) -> tuple[LinkRecordModel, ...]:
        pass

    @abstractmethod
    def stats(self) -> RegistryStats:
        pass

    @abstractmethod
    def snapshot(self) -> tuple[tuple[LinkRecordModel, ...], RegistryStats]:
        pass
