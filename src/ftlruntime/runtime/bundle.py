"""FluentBundle - per-locale message table and formatting entry point.

Python 3.13+. External dependencies: Babel (CLDR locale data), fluent.syntax (FTL AST).
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence

from fluent.syntax import ast

from ftlruntime.constants import FALLBACK_MISSING_MESSAGE
from ftlruntime.diagnostics import (
    ErrorTemplate,
    FluentDuplicateEntryError,
    FluentError,
    FluentReferenceError,
)

from .cache import FormatterCache, LocalFormatterCache, SharedFormatterCache
from .function_bridge import FunctionRegistry
from .functions import create_default_registry
from .resolver import FluentResolver, ValueFormatter
from .resource import FluentResource
from .value_types import FluentFunction

__all__ = ["FluentBundle"]

logger = logging.getLogger(__name__)

# Resolved text in debug logs is truncated to keep logs manageable.
_LOG_TRUNCATE_DEBUG: int = 50


class FluentBundle:
    """Fluent message bundle for one locale fallback list.

    The first locale is the primary locale: numbers, dates and plural rules
    are formatted with it. Results are ``(result, errors)`` tuples; formatting
    never raises for bad data.

    Thread Safety:
        format_pattern() and format_value() only read the bundle and are safe
        for concurrent callers once resources and functions are added.

        With concurrent=True the bundle uses a SharedFormatterCache and
        serializes add_resource() and add_function() with an internal lock.
        The default (concurrent=False) uses a LocalFormatterCache with no
        synchronization.

    Examples:
        >>> bundle = FluentBundle("lv-LV", use_isolating=False)
        >>> bundle.add_resource(FluentResource('''
        ... hello = Sveiki, pasaule!
        ... welcome = Laipni lūdzam, { $name }!
        ... '''))
        ()
        >>> bundle.format_value("hello")
        ('Sveiki, pasaule!', ())
        >>> bundle.format_value("welcome", {"name": "Jānis"})
        ('Laipni lūdzam, Jānis!', ())
    """

    __slots__ = (
        "_concurrent",
        "_formatter",
        "_formatter_cache",
        "_function_registry",
        "_locales",
        "_lock",
        "_messages",
        "_terms",
        "_transform",
        "_use_isolating",
    )

    @staticmethod
    def _validate_locale_format(locale: str) -> None:
        """Validate locale code format.

        Raises:
            ValueError: If locale code is empty or has invalid format
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)

        if not locale.replace("_", "").replace("-", "").isalnum():
            msg = f"Invalid locale code format: '{locale}'"
            raise ValueError(msg)

    def __init__(
        self,
        locales: str | Sequence[str],
        *,
        use_isolating: bool = True,
        transform: Callable[[str], str] | None = None,
        formatter: ValueFormatter | None = None,
        concurrent: bool = False,
        formatter_cache: FormatterCache | None = None,
        functions: FunctionRegistry | None = None,
    ) -> None:
        """Initialize bundle.

        Args:
            locales: Locale code, or fallback list whose first entry is primary
            use_isolating: Wrap placeables in Unicode bidi isolation marks
            transform: Applied to string values (not text elements) before output
            formatter: Custom value formatter consulted before the built-in
                rendering; a non-None result wins
            concurrent: Use a thread-safe formatter cache and lock mutations
            formatter_cache: Explicit cache, e.g. shared between bundles
            functions: Template registry; the bundle works on its own copy.
                Defaults to the built-in NUMBER and DATETIME

        Raises:
            ValueError: If no locale is given or a locale code is malformed
        """
        locale_list = (locales,) if isinstance(locales, str) else tuple(locales)
        if not locale_list:
            msg = "FluentBundle needs at least one locale"
            raise ValueError(msg)
        for locale in locale_list:
            self._validate_locale_format(locale)

        self._locales = locale_list
        self._use_isolating = use_isolating
        self._transform = transform
        self._formatter = formatter
        self._concurrent = concurrent
        self._lock: threading.RLock | None = threading.RLock() if concurrent else None
        self._messages: dict[str, ast.Message] = {}
        self._terms: dict[str, ast.Term] = {}
        self._function_registry: FunctionRegistry = (
            functions.copy() if functions is not None else create_default_registry()
        )

        if formatter_cache is not None:
            self._formatter_cache = formatter_cache
        elif concurrent:
            self._formatter_cache = SharedFormatterCache()
        else:
            self._formatter_cache = LocalFormatterCache()

        logger.info(
            "FluentBundle initialized for locales: %s (use_isolating=%s, concurrent=%s)",
            ", ".join(locale_list),
            use_isolating,
            concurrent,
        )

    @property
    def locales(self) -> tuple[str, ...]:
        """Locale fallback list (read-only)."""
        return self._locales

    @property
    def locale(self) -> str:
        """Primary locale code (read-only).

        Example:
            >>> FluentBundle(["lv-LV", "en-US"]).locale
            'lv-LV'
        """
        return self._locales[0]

    @property
    def use_isolating(self) -> bool:
        """Whether Unicode bidi isolation is enabled (read-only)."""
        return self._use_isolating

    @property
    def concurrent(self) -> bool:
        return self._concurrent

    @property
    def formatter_cache(self) -> FormatterCache:
        """Formatter cache used by this bundle."""
        return self._formatter_cache

    @property
    def functions(self) -> FunctionRegistry:
        """Registered FTL functions."""
        return self._function_registry

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(FluentBundle("lv-LV"))
            "FluentBundle(locale='lv-LV', messages=0, terms=0)"
        """
        return (
            f"FluentBundle(locale={self.locale!r}, "
            f"messages={len(self._messages)}, "
            f"terms={len(self._terms)})"
        )

    def add_resource(
        self, resource: FluentResource | ast.Resource, /
    ) -> tuple[FluentError, ...]:
        """Add the messages and terms of a resource.

        A message or term whose id is already in the bundle replaces the
        existing entry; each replacement is reported as a
        FluentDuplicateEntryError. Syntax errors were logged when the
        resource was parsed; junk entries are skipped.

        Args:
            resource: Parsed FluentResource or fluent.syntax Resource [positional-only]

        Returns:
            Tuple of FluentDuplicateEntryError, empty when all ids were new
        """
        if isinstance(resource, ast.Resource):
            resource = FluentResource.from_ast(resource)

        if self._lock is not None:
            with self._lock:
                return self._add_resource_impl(resource)
        return self._add_resource_impl(resource)

    def _add_resource_impl(self, resource: FluentResource) -> tuple[FluentError, ...]:
        """Internal implementation of add_resource (no locking)."""
        errors: list[FluentError] = []
        replaced: ast.Message | ast.Term | None
        term_count = 0
        for entry in resource.entries:
            match entry:
                case ast.Term():
                    term_count += 1
                    key = f"-{entry.id.name}"
                    replaced = self._terms.get(entry.id.name)
                    self._terms[entry.id.name] = entry
                case ast.Message():
                    key = entry.id.name
                    replaced = self._messages.get(entry.id.name)
                    self._messages[entry.id.name] = entry
            if replaced is not None:
                logger.warning("Duplicate entry '%s' overrides the earlier definition", key)
                errors.append(
                    FluentDuplicateEntryError(ErrorTemplate.duplicate_entry(key), entry_id=key)
                )

        logger.info(
            "Added resource: %d messages, %d terms, %d junk entries",
            len(resource.entries) - term_count,
            term_count,
            len(resource.errors),
        )
        return tuple(errors)

    def get_message(self, message_id: str) -> ast.Message | None:
        return self._messages.get(message_id)

    def get_term(self, term_id: str) -> ast.Term | None:
        """Term by id, written without the leading ``-``."""
        return self._terms.get(term_id)

    def has_message(self, message_id: str) -> bool:
        """Check if message exists.

        Terms are not messages: ``has_message("-brand")`` is always False.
        """
        return message_id in self._messages

    def message_ids(self) -> list[str]:
        """Ids of all messages, in insertion order."""
        return list(self._messages)

    def add_function(self, name: str, func: FluentFunction) -> None:
        """Register a custom function callable from FTL.

        Example:
            >>> bundle = FluentBundle("en-US")
            >>> bundle.add_function("UPPER", lambda positional, named: str(positional[0]).upper())

        Raises:
            ValueError: If name is not an uppercase FTL identifier
            FluentDuplicateFunctionError: If name is already registered
        """
        if self._lock is not None:
            with self._lock:
                self._function_registry.register(name, func)
        else:
            self._function_registry.register(name, func)
        logger.debug("Added custom function: %s", name)

    def _resolver(self) -> FluentResolver:
        return FluentResolver(
            self.locale,
            self._messages,
            self._terms,
            function_registry=self._function_registry,
            formatter_cache=self._formatter_cache,
            use_isolating=self._use_isolating,
            transform=self._transform,
            formatter=self._formatter,
        )

    def format_pattern(
        self,
        pattern: ast.Pattern,
        args: Mapping[str, object] | None = None,
    ) -> tuple[str, tuple[FluentError, ...]]:
        """Format a message value or attribute pattern.

        Args:
            pattern: Pattern from get_message() (value or attribute)
            args: Variable arguments; native Python values are converted

        Returns:
            Tuple of (formatted_string, errors)
            - formatted_string: Best-effort output with fallback tokens
            - errors: Tuple of errors encountered during resolution (immutable)
        """
        return self._format(pattern, args, None)

    def _format(
        self,
        pattern: ast.Pattern,
        args: Mapping[str, object] | None,
        entry_key: str | None,
    ) -> tuple[str, tuple[FluentError, ...]]:
        result, errors = self._resolver().resolve(pattern, args, entry_key=entry_key)
        if errors:
            logger.debug("Pattern resolved with %d error(s)", len(errors))
            for err in errors:
                logger.debug("  - %s: %s", type(err).__name__, err)
        return (result, errors)

    def format_value(
        self,
        message_id: str,
        args: Mapping[str, object] | None = None,
        *,
        attribute: str | None = None,
    ) -> tuple[str, tuple[FluentError, ...]]:
        """Look up a message and format its value or one of its attributes.

        Missing messages, attributes and values render as ``{id}`` or
        ``{id.attr}`` with a diagnostic.

        Example:
            >>> bundle = FluentBundle("en-US")
            >>> _ = bundle.add_resource(FluentResource("welcome = Hello, { $name }!"))
            >>> result, _ = bundle.format_value("welcome", {"name": "Alice"})
            >>> result == "Hello, \\u2068Alice\\u2069!"
            True
        """
        key = f"{message_id}.{attribute}" if attribute else message_id
        fallback = FALLBACK_MISSING_MESSAGE.format(id=key)

        message = self._messages.get(message_id)
        if message is None:
            logger.warning("Message '%s' not found", message_id)
            error = FluentReferenceError(ErrorTemplate.message_not_found(message_id, self._locales))
            return (fallback, (error,))

        if attribute:
            pattern = next((a.value for a in message.attributes if a.id.name == attribute), None)
            if pattern is None:
                error = FluentReferenceError(ErrorTemplate.unknown_attribute(message_id, attribute))
                return (fallback, (error,))
        elif message.value is None:
            return (fallback, (FluentReferenceError(ErrorTemplate.message_no_value(message_id)),))
        else:
            pattern = message.value

        result, errors = self._format(pattern, args, key)
        if not errors:
            logger.debug("Resolved message '%s': %s", key, result[:_LOG_TRUNCATE_DEBUG])
        return (result, errors)
