"""Locale-keyed cache of formatter objects.

Building a formatter loads CLDR data and compiles patterns, so each unique
(family, locale, options) combination is constructed once and reused for the
lifetime of the cache.

Architecture:
    - FormatterCache: common storage, statistics and key layout
    - LocalFormatterCache: unsynchronized, for a bundle confined to one thread
    - SharedFormatterCache: lock-guarded, for bundles used from many threads

Cache Key Structure:
    (family, locale_code, options)
    - family: FormatterFamily (decimal, date, plural_cardinal, ...)
    - locale_code: str as given to the bundle
    - options: hashable tuple specific to the family

Thread Safety:
    SharedFormatterCache checks under the lock, constructs outside it, and
    inserts under the lock only if no other thread got there first. Every
    caller observes the first inserted instance; a losing construction is
    discarded.

Python 3.13+.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable
from enum import StrEnum
from threading import Lock
from typing import cast

__all__ = [
    "FormatterCache",
    "FormatterFamily",
    "FormatterKey",
    "LocalFormatterCache",
    "SharedFormatterCache",
]

logger = logging.getLogger(__name__)


class FormatterFamily(StrEnum):
    """Kinds of cached formatter objects."""

    DECIMAL = "decimal"
    DATE = "date"
    TIME = "time"
    DATE_TIME = "date_time"
    ZONED_DATE_TIME = "zoned_date_time"
    TIME_ZONE = "time_zone"
    PLURAL_CARDINAL = "plural_cardinal"
    PLURAL_ORDINAL = "plural_ordinal"


type FormatterKey = tuple[FormatterFamily, str, Hashable]


class FormatterCache(ABC):
    """Lookup-or-construct storage for formatter objects.

    Factories may raise; nothing is cached for a failed construction.
    """

    __slots__ = ("_entries", "_hits", "_misses")

    def __init__(self) -> None:
        self._entries: dict[FormatterKey, object] = {}
        self._hits = 0
        self._misses = 0

    @abstractmethod
    def get_or_create[T](self, key: FormatterKey, factory: Callable[[], T]) -> T:
        """Return the cached formatter for ``key``, building it on first use.

        Args:
            key: (family, locale_code, options)
            factory: Zero-argument constructor for the formatter

        Returns:
            The formatter every caller observes for this key
        """

    @property
    def is_shared(self) -> bool:
        """True if the cache may be used from several threads at once."""
        return False

    def clear(self) -> None:
        """Drop all formatters and reset statistics."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - size (int): Number of cached formatters
            - hits (int): Lookups served from the cache
            - misses (int): Lookups that required construction
        """
        return {"size": len(self._entries), "hits": self._hits, "misses": self._misses}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self._entries)})"

    @staticmethod
    def _log_construction(key: FormatterKey) -> None:
        family, locale_code, options = key
        logger.debug("Constructed %s formatter for '%s' %r", family, locale_code, options)


class LocalFormatterCache(FormatterCache):
    """Single-owner cache with no synchronization."""

    __slots__ = ()

    def get_or_create[T](self, key: FormatterKey, factory: Callable[[], T]) -> T:
        try:
            formatter = self._entries[key]
        except KeyError:
            pass
        else:
            self._hits += 1
            return cast(T, formatter)

        self._misses += 1
        created = factory()
        self._entries[key] = created
        self._log_construction(key)
        return created


class SharedFormatterCache(FormatterCache):
    """Cache safe for concurrent use by multiple threads."""

    __slots__ = ("_lock",)

    def __init__(self) -> None:
        super().__init__()
        self._lock = Lock()

    @property
    def is_shared(self) -> bool:
        return True

    def get_or_create[T](self, key: FormatterKey, factory: Callable[[], T]) -> T:
        with self._lock:
            if key in self._entries:
                self._hits += 1
                return cast(T, self._entries[key])
            self._misses += 1

        # Construct outside the lock; CLDR loading can be slow.
        created = factory()

        # Double-check: another thread may have inserted while we built ours
        with self._lock:
            if key in self._entries:
                return cast(T, self._entries[key])
            self._entries[key] = created

        self._log_construction(key)
        return created

    def clear(self) -> None:
        with self._lock:
            super().clear()

    def get_stats(self) -> dict[str, int]:
        with self._lock:
            return super().get_stats()
