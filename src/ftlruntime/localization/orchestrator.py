"""Multi-locale orchestration with fallback chains.

FluentLocalization owns one FluentBundle per locale and formats each message
with the first bundle, in locale order, that defines it. Bundles are built
lazily: a locale's resources are loaded the first time a lookup reaches it,
so fallback locales that are never needed are never read from disk.

All bundles share one formatter cache, so number, date and plural data for a
locale is constructed once per localization object.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from ftlruntime.diagnostics import ErrorTemplate, FluentError, FluentReferenceError
from ftlruntime.negotiation import NegotiationStrategy, negotiate_languages
from ftlruntime.runtime.bundle import FluentBundle
from ftlruntime.runtime.cache import FormatterCache, LocalFormatterCache, SharedFormatterCache
from ftlruntime.runtime.functions import create_default_registry
from ftlruntime.runtime.resource import FluentResource
from ftlruntime.runtime.value_types import FluentFunction

from .loading import LoadStatus, LoadSummary, ResourceLoader, ResourceLoadResult

__all__ = ["FluentLocalization", "FormattedMessage"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FormattedMessage:
    """A message's formatted value and attributes.

    Attributes:
        value: Formatted value, or None for attribute-only messages
        attributes: Formatted attributes by name, in source order
    """

    value: str | None
    attributes: Mapping[str, str] = field(default_factory=dict)


class FluentLocalization:
    """Multi-locale message formatting with fallback chains.

    Architecture:
    - FluentBundle: formatting for one primary locale
    - FluentLocalization: fallback across N bundles, one per locale

    Example:
        >>> loader = PathResourceLoader("locales/{locale}/{res_id}")
        >>> l10n = FluentLocalization(["pl", "en-US"], ["main.ftl"], loader)
        >>> value, errors = l10n.format_value("welcome", {"name": "Anna"})
        # Tries 'pl' first, falls back to 'en-US' if the message is missing

    Thread Safety:
        With concurrent=True bundle construction is serialized and bundles
        share a SharedFormatterCache; formatting itself needs no lock.
    """

    __slots__ = (
        "_bundles",
        "_concurrent",
        "_formatter_cache",
        "_functions",
        "_load_results",
        "_loader",
        "_locales",
        "_lock",
        "_resource_ids",
        "_use_isolating",
    )

    def __init__(
        self,
        locales: Iterable[str],
        resource_ids: Iterable[str],
        loader: ResourceLoader,
        *,
        use_isolating: bool = True,
        concurrent: bool = False,
        functions: Mapping[str, FluentFunction] | None = None,
    ) -> None:
        """Initialize multi-locale localization.

        Args:
            locales: Locale codes in fallback order (e.g., ['pl', 'en-US'])
            resource_ids: FTL resources every locale loads (e.g., ['main.ftl'])
            loader: Source of FTL text per (locale, resource id)
            use_isolating: Wrap placeables in Unicode bidi isolation marks
            concurrent: Allow use from several threads at once
            functions: Custom FTL functions registered on every bundle

        Raises:
            ValueError: If locales is empty, a locale code is malformed or a
                custom function name is not an FTL identifier
            FluentDuplicateFunctionError: If a custom function shadows NUMBER or DATETIME
        """
        # dict.fromkeys() removes duplicates while maintaining insertion order
        self._locales: tuple[str, ...] = tuple(dict.fromkeys(locales))
        if not self._locales:
            msg = "At least one locale is required"
            raise ValueError(msg)

        # Fail fast: a bad locale must not surface later from format_value()
        for locale in self._locales:
            FluentBundle._validate_locale_format(locale)

        self._resource_ids: tuple[str, ...] = tuple(resource_ids)
        self._loader = loader
        self._use_isolating = use_isolating
        self._concurrent = concurrent
        self._functions = create_default_registry()
        for name, func in (functions or {}).items():
            self._functions.register(name, func)
        self._formatter_cache: FormatterCache = (
            SharedFormatterCache() if concurrent else LocalFormatterCache()
        )
        self._bundles: dict[str, FluentBundle] = {}
        self._load_results: list[ResourceLoadResult] = []
        self._lock: threading.Lock | None = threading.Lock() if concurrent else None

    @classmethod
    def negotiated(
        cls,
        requested: Iterable[str],
        available: Iterable[str],
        resource_ids: Iterable[str],
        loader: ResourceLoader,
        *,
        default_locale: str | None = None,
        strategy: NegotiationStrategy = NegotiationStrategy.FILTERING,
        use_isolating: bool = True,
        concurrent: bool = False,
        functions: Mapping[str, FluentFunction] | None = None,
    ) -> FluentLocalization:
        """Build a localization whose locale chain comes from negotiation.

        Raises:
            ValueError: If negotiation selects no locale at all
        """
        locales = negotiate_languages(requested, available, default_locale, strategy)
        return cls(
            locales,
            resource_ids,
            loader,
            use_isolating=use_isolating,
            concurrent=concurrent,
            functions=functions,
        )

    @property
    def locales(self) -> tuple[str, ...]:
        """Locale codes in fallback order (read-only)."""
        return self._locales

    @property
    def resource_ids(self) -> tuple[str, ...]:
        return self._resource_ids

    @property
    def formatter_cache(self) -> FormatterCache:
        """Formatter cache shared by all bundles."""
        return self._formatter_cache

    def __repr__(self) -> str:
        return (
            f"FluentLocalization(locales={self._locales!r}, "
            f"resource_ids={self._resource_ids!r}, "
            f"bundles={len(self._bundles)})"
        )

    def _get_or_create_bundle(self, locale: str) -> FluentBundle:
        """Get existing bundle or build it on first use.

        In concurrent mode this uses double-checked locking: the dict read is
        lock-free for the common already-built case.
        """
        bundle = self._bundles.get(locale)
        if bundle is not None:
            return bundle
        if self._lock is None:
            bundle = self._build_bundle(locale)
            self._bundles[locale] = bundle
            return bundle
        with self._lock:
            bundle = self._bundles.get(locale)
            if bundle is None:
                bundle = self._build_bundle(locale)
                self._bundles[locale] = bundle
            return bundle

    def _build_bundle(self, locale: str) -> FluentBundle:
        bundle = FluentBundle(
            locale,
            use_isolating=self._use_isolating,
            concurrent=self._concurrent,
            formatter_cache=self._formatter_cache,
            functions=self._functions,
        )
        for resource_id in self._resource_ids:
            self._load_results.append(self._load_single_resource(bundle, locale, resource_id))
        return bundle

    def _load_single_resource(
        self, bundle: FluentBundle, locale: str, resource_id: str
    ) -> ResourceLoadResult:
        """Load one resource into a bundle and record the outcome."""
        try:
            source = self._loader.load(locale, resource_id)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load %s for %s: %s", resource_id, locale, e)
            return ResourceLoadResult(locale, resource_id, LoadStatus.ERROR, error=e)

        if source is None:
            logger.debug("No %s for locale %s", resource_id, locale)
            return ResourceLoadResult(locale, resource_id, LoadStatus.NOT_FOUND)

        resource = FluentResource(source, source_path=f"{locale}/{resource_id}")
        bundle.add_resource(resource)
        return ResourceLoadResult(
            locale, resource_id, LoadStatus.SUCCESS, syntax_errors=resource.errors
        )

    def bundles(self) -> Iterator[FluentBundle]:
        """Lazy iterator yielding bundles in fallback order.

        Bundles are built as the iteration reaches them.
        """
        yield from (self._get_or_create_bundle(locale) for locale in self._locales)

    def get_load_summary(self) -> LoadSummary:
        """Results of every resource load attempted so far.

        Only locales whose bundles have been built appear.
        """
        return LoadSummary(tuple(self._load_results))

    def _find_bundle(self, message_id: str) -> FluentBundle | None:
        for bundle in self.bundles():
            if bundle.has_message(message_id):
                if bundle.locale != self._locales[0]:
                    logger.warning(
                        "Message '%s' served from fallback locale %s", message_id, bundle.locale
                    )
                return bundle
        return None

    def _not_found(self, message_id: str) -> FluentError:
        logger.warning("Message '%s' not found in any locale", message_id)
        return FluentReferenceError(ErrorTemplate.message_not_found(message_id, self._locales))

    def has_message(self, message_id: str) -> bool:
        """Check if message exists in any locale."""
        return any(bundle.has_message(message_id) for bundle in self.bundles())

    def format_value(
        self, message_id: str, args: Mapping[str, object] | None = None
    ) -> tuple[str | None, tuple[FluentError, ...]]:
        """Format a message value with the fallback chain.

        The first bundle that defines the message formats it, even when
        formatting reports errors; later locales are not consulted.

        Args:
            message_id: Message identifier (e.g., 'welcome')
            args: Message arguments for variable interpolation

        Returns:
            Tuple of (formatted_value, errors). The value is None when no
            locale defines the message.
        """
        bundle = self._find_bundle(message_id)
        if bundle is None:
            return (None, (self._not_found(message_id),))
        return bundle.format_value(message_id, args)

    def format_message(
        self, message_id: str, args: Mapping[str, object] | None = None
    ) -> tuple[FormattedMessage | None, tuple[FluentError, ...]]:
        """Format a message value and all its attributes.

        Returns:
            Tuple of (message, errors); message is None when no locale
            defines the id.
        """
        bundle = self._find_bundle(message_id)
        message = bundle.get_message(message_id) if bundle is not None else None
        if bundle is None or message is None:
            return (None, (self._not_found(message_id),))

        errors: list[FluentError] = []

        value: str | None = None
        if message.value is not None:
            value, value_errors = bundle.format_value(message_id, args)
            errors.extend(value_errors)

        attributes: dict[str, str] = {}
        for attribute in message.attributes:
            text, attribute_errors = bundle.format_value(
                message_id, args, attribute=attribute.id.name
            )
            attributes[attribute.id.name] = text
            errors.extend(attribute_errors)

        return (FormattedMessage(value, attributes), tuple(errors))
