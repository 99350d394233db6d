"""Pattern resolver for Fluent messages.

Walks fluent.syntax AST patterns and produces final strings. Resolution
never raises for data problems: every error is recorded on the
ResolutionContext and the offending placeable renders as a readable
fallback token (``{$name}``, ``{msg}``, ``{-term}``, ``{FUNC()}``).

Python 3.13+. Depends on fluent.syntax for the AST.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation

from fluent.syntax import ast

from ftlruntime.constants import (
    FALLBACK_FUNCTION_ERROR,
    FALLBACK_INVALID,
    FALLBACK_MISSING_MESSAGE,
    FALLBACK_MISSING_TERM,
    FALLBACK_MISSING_VARIABLE,
    FSI,
    PDI,
)
from ftlruntime.diagnostics import (
    ErrorTemplate,
    FluentCyclicReferenceError,
    FluentError,
    FluentFormatterError,
    FluentReferenceError,
    FluentResolutionError,
)

from .cache import FormatterCache
from .dates import FluentDateTime
from .function_bridge import FunctionRegistry
from .number import FluentNumber
from .plural_rules import select_plural_category
from .resolution_context import ResolutionContext
from .value_types import FluentArgs, FluentErrorValue, FluentNone, FluentValue

__all__ = ["FluentResolver", "ValueFormatter"]

logger = logging.getLogger(__name__)

type ValueFormatter = Callable[[FluentValue, str], str | None]

# Placeables whose text is already localized are never isolated.
_UNISOLATED = (ast.MessageReference, ast.TermReference, ast.StringLiteral)
# These resolve to pattern output whose own values already went through the hooks.
_PATTERN_OUTPUT = (ast.MessageReference, ast.TermReference, ast.SelectExpression)


class _Fallback(Exception):
    """Internal signal: abandon a placeable and render ``token`` instead.

    The error has already been recorded on the context.
    """

    def __init__(self, token: str) -> None:
        super().__init__(token)
        self.token = token


class FluentResolver:
    """Resolves Fluent patterns against a bundle's entries.

    Immutable after construction; per-call state lives in ResolutionContext,
    so one resolver can serve concurrent callers.

    Attributes:
        locale: Primary locale code used for numbers, dates and plurals
        messages: Message table keyed by id
        terms: Term table keyed by id (without ``-``)
        function_registry: Functions callable from FTL
        formatter_cache: Cache for decimal, date and plural formatters
        use_isolating: Wrap interpolated values in Unicode bidi marks
    """

    __slots__ = (
        "formatter",
        "formatter_cache",
        "function_registry",
        "locale",
        "messages",
        "terms",
        "transform",
        "use_isolating",
    )

    def __init__(
        self,
        locale: str,
        messages: Mapping[str, ast.Message],
        terms: Mapping[str, ast.Term],
        *,
        function_registry: FunctionRegistry,
        formatter_cache: FormatterCache,
        use_isolating: bool = True,
        transform: Callable[[str], str] | None = None,
        formatter: ValueFormatter | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            locale: Locale code for plural rules and formatting
            messages: Message registry
            terms: Term registry
            function_registry: Function registry (keyword-only)
            formatter_cache: Formatter cache shared with the bundle (keyword-only)
            use_isolating: Wrap interpolated values in FSI/PDI (keyword-only)
            transform: Applied to string values before output (keyword-only)
            formatter: Custom value formatter consulted first (keyword-only)
        """
        self.locale = locale
        self.messages = messages
        self.terms = terms
        self.function_registry = function_registry
        self.formatter_cache = formatter_cache
        self.use_isolating = use_isolating
        self.transform = transform
        self.formatter = formatter

    def resolve(
        self,
        pattern: ast.Pattern,
        args: Mapping[str, object] | None = None,
        *,
        entry_key: str | None = None,
    ) -> tuple[str, tuple[FluentError, ...]]:
        """Resolve a pattern to its final string.

        Args:
            pattern: Message value or attribute pattern
            args: Variable arguments (native values are converted)
            entry_key: Key of the entry that owns the pattern (``id`` or
                ``id.attr``); seeds cycle detection so a reference back to
                it renders as that entry's fallback

        Returns:
            Tuple of (formatted_string, errors). The string is always
            produced; errors lists everything that went wrong, in order.
        """
        context = ResolutionContext()
        if entry_key is not None:
            context.push(entry_key)
        result = self._resolve_pattern(pattern, FluentArgs.coerce(args), context)
        return (result, tuple(context.errors))

    def _resolve_pattern(
        self,
        pattern: ast.Pattern,
        args: FluentArgs,
        context: ResolutionContext,
    ) -> str:
        """Resolve pattern by walking elements."""
        elements = pattern.elements
        parts: list[str] = []

        for element in elements:
            match element:
                case ast.TextElement():
                    parts.append(element.value)
                case ast.Placeable():
                    try:
                        value = self._resolve_expression(element.expression, args, context)
                    except _Fallback as fallback:
                        parts.append(fallback.token)
                        continue
                    if _produces_pattern_output(element.expression):
                        text = str(value)
                    else:
                        text = self._stringify(value, context)
                    if self._isolates(elements, element):
                        parts.append(f"{FSI}{text}{PDI}")
                    else:
                        parts.append(text)

        return "".join(parts)

    def _isolates(self, elements: Sequence[ast.PatternElement], placeable: ast.Placeable) -> bool:
        if not self.use_isolating or len(elements) < 2:
            return False
        expression = placeable.expression
        if isinstance(expression, _UNISOLATED):
            return False
        # "Hello { $name }" reads naturally without marks.
        return not (len(elements) == 2 and isinstance(expression, ast.VariableReference))

    def _resolve_expression(
        self,
        expr: ast.BaseNode,
        args: FluentArgs,
        context: ResolutionContext,
    ) -> FluentValue:
        """Resolve expression to value.

        Raises:
            _Fallback: The expression failed; its error is on the context
        """
        match expr:
            case ast.StringLiteral():
                return str(expr.parse()["value"])
            case ast.NumberLiteral():
                return FluentNumber.from_literal(expr.value)
            case ast.VariableReference():
                return self._resolve_variable_reference(expr, args, context)
            case ast.MessageReference():
                return self._resolve_message_reference(expr, args, context)
            case ast.TermReference():
                return self._resolve_term_reference(expr, args, context)
            case ast.FunctionReference():
                return self._resolve_function_call(expr, args, context)
            case ast.SelectExpression():
                return self._resolve_select_expression(expr, args, context)
            case ast.Placeable():
                with _nesting(context, FALLBACK_INVALID):
                    return self._resolve_expression(expr.expression, args, context)
            case _:
                logger.debug("Unsupported expression node %s", type(expr).__name__)
                raise _Fallback(FALLBACK_INVALID)

    def _resolve_variable_reference(
        self,
        expr: ast.VariableReference,
        args: FluentArgs,
        context: ResolutionContext,
    ) -> FluentValue:
        """Resolve variable reference from args."""
        name = expr.id.name
        if name not in args:
            context.add_error(
                FluentReferenceError(ErrorTemplate.unknown_variable(name, context.path))
            )
            raise _Fallback(FALLBACK_MISSING_VARIABLE.format(name=name))
        return args[name]

    def _resolve_message_reference(
        self,
        expr: ast.MessageReference,
        args: FluentArgs,
        context: ResolutionContext,
    ) -> FluentValue:
        """Resolve message reference in the caller's argument scope."""
        msg_id = expr.id.name
        attribute = expr.attribute.name if expr.attribute else None
        key = f"{msg_id}.{attribute}" if attribute else msg_id
        token = FALLBACK_MISSING_MESSAGE.format(id=key)

        message = self.messages.get(msg_id)
        if message is None:
            context.add_error(
                FluentReferenceError(ErrorTemplate.unknown_message(msg_id, context.path))
            )
            raise _Fallback(token)

        if attribute:
            pattern = _find_attribute(message.attributes, attribute)
            if pattern is None:
                context.add_error(
                    FluentReferenceError(
                        ErrorTemplate.unknown_attribute(msg_id, attribute, context.path)
                    )
                )
                raise _Fallback(token)
        elif message.value is None:
            context.add_error(FluentReferenceError(ErrorTemplate.message_no_value(msg_id)))
            raise _Fallback(token)
        else:
            pattern = message.value

        return self._descend(key, pattern, args, context, token)

    def _resolve_term_reference(
        self,
        expr: ast.TermReference,
        args: FluentArgs,
        context: ResolutionContext,
    ) -> FluentValue:
        """Resolve term reference with its call arguments as local scope."""
        term_id = expr.id.name
        attribute = expr.attribute.name if expr.attribute else None
        key = f"-{term_id}.{attribute}" if attribute else f"-{term_id}"
        token = FALLBACK_MISSING_TERM.format(name=key[1:])

        term = self.terms.get(term_id)
        if term is None:
            context.add_error(
                FluentReferenceError(ErrorTemplate.unknown_term(term_id, context.path))
            )
            raise _Fallback(token)

        if attribute:
            pattern = _find_attribute(term.attributes, attribute)
            if pattern is None:
                context.add_error(
                    FluentReferenceError(
                        ErrorTemplate.unknown_attribute(f"-{term_id}", attribute, context.path)
                    )
                )
                raise _Fallback(token)
        else:
            pattern = term.value

        # Positional arguments have no meaning for terms and are dropped.
        local_args: dict[str, FluentValue] = {}
        if expr.arguments is not None:
            for named in expr.arguments.named:
                local_args[named.name.name] = self._resolve_argument(named.value, args, context)

        return self._descend(key, pattern, FluentArgs(local_args), context, token)

    def _descend(
        self,
        key: str,
        pattern: ast.Pattern,
        args: FluentArgs,
        context: ResolutionContext,
        token: str,
    ) -> str:
        """Resolve a referenced entry's pattern with cycle and depth checks."""
        if context.contains(key):
            cycle_path = context.get_cycle_path(key)
            context.add_error(
                FluentCyclicReferenceError(ErrorTemplate.cyclic_reference(cycle_path))
            )
            raise _Fallback(token)

        with _nesting(context, token):
            context.push(key)
            try:
                return self._resolve_pattern(pattern, args, context)
            finally:
                context.pop()

    def _resolve_argument(
        self,
        expr: ast.BaseNode,
        args: FluentArgs,
        context: ResolutionContext,
    ) -> FluentValue:
        """Resolve a call argument; failures become FluentErrorValue."""
        try:
            return self._resolve_expression(expr, args, context)
        except _Fallback:
            return FluentErrorValue()

    def _resolve_function_call(
        self,
        func_ref: ast.FunctionReference,
        args: FluentArgs,
        context: ResolutionContext,
    ) -> FluentValue:
        """Resolve function call.

        Positional arguments that fail resolve to FluentErrorValue so the
        function still runs and can decide what an error input means.
        """
        func_name = func_ref.id.name
        token = FALLBACK_FUNCTION_ERROR.format(name=func_name)

        positional = [
            self._resolve_argument(arg, args, context) for arg in func_ref.arguments.positional
        ]
        named = FluentArgs(
            (arg.name.name, self._resolve_argument(arg.value, args, context))
            for arg in func_ref.arguments.named
        )

        try:
            return self.function_registry.call(func_name, positional, named)
        except (FluentReferenceError, FluentResolutionError) as e:
            context.add_error(e)
            raise _Fallback(token) from e

    def _resolve_select_expression(
        self,
        expr: ast.SelectExpression,
        args: FluentArgs,
        context: ResolutionContext,
    ) -> str:
        """Resolve select expression by matching variant.

        Variants are scanned in declaration order and the first match wins:
            1. Number selector against a number key: numeric equality
            2. Number selector against an identifier: CLDR plural category
            3. String selector against an identifier: string equality
        Then the default variant, then the first variant.
        """
        selector = self._resolve_argument(expr.selector, args, context)
        variants = expr.variants

        if not variants:
            context.add_error(FluentResolutionError(ErrorTemplate.no_variants()))
            raise _Fallback(FALLBACK_INVALID)

        variant = self._match_variant(variants, selector, context)
        if variant is None:
            variant = next((v for v in variants if v.default), None)
        if variant is None:
            context.add_error(FluentResolutionError(ErrorTemplate.missing_default_variant()))
            variant = variants[0]

        with _nesting(context, FALLBACK_INVALID):
            return self._resolve_pattern(variant.value, args, context)

    def _match_variant(
        self,
        variants: Sequence[ast.Variant],
        selector: FluentValue,
        context: ResolutionContext,
    ) -> ast.Variant | None:
        match selector:
            case FluentNumber():
                category: str | None = None
                for variant in variants:
                    match variant.key:
                        case ast.NumberLiteral(value=key_text):
                            if _numbers_equal(selector, key_text):
                                return variant
                        case ast.Identifier(name=key_name):
                            if category is None:
                                category = self._plural_category(selector, context)
                            if key_name == category:
                                return variant
            case str():
                for variant in variants:
                    match variant.key:
                        case ast.Identifier(name=key_name) if key_name == selector:
                            return variant
        return None

    def _plural_category(self, number: FluentNumber, context: ResolutionContext) -> str:
        """CLDR category, or "" (matches nothing) when plural data is unavailable."""
        try:
            return select_plural_category(number, self.locale, self.formatter_cache)
        except FluentFormatterError as e:
            context.add_error(e)
            return ""

    def _stringify(self, value: FluentValue, context: ResolutionContext) -> str:
        """Format FluentValue to string for final output."""
        if self.formatter is not None:
            custom = self.formatter(value, self.locale)
            if custom is not None:
                return custom

        match value:
            case str():
                return self.transform(value) if self.transform is not None else value
            case FluentNumber() | FluentDateTime():
                try:
                    return value.as_string(self.locale, self.formatter_cache)
                except FluentFormatterError as e:
                    context.add_error(e)
                    return str(value)
            case FluentNone() | FluentErrorValue():
                return ""


@contextmanager
def _nesting(context: ResolutionContext, token: str) -> Iterator[None]:
    """One level of nesting; TooManyPlaceables becomes a fallback."""
    if context.depth >= context.max_depth:
        context.add_error(
            FluentResolutionError(
                ErrorTemplate.too_many_placeables(context.max_depth, context.path)
            )
        )
        raise _Fallback(token)
    with context.nested():
        yield


def _produces_pattern_output(expr: ast.BaseNode) -> bool:
    while isinstance(expr, ast.Placeable):
        expr = expr.expression
    return isinstance(expr, _PATTERN_OUTPUT)


def _find_attribute(attributes: Sequence[ast.Attribute], name: str) -> ast.Pattern | None:
    for attribute in attributes:
        if attribute.id.name == name:
            return attribute.value
    return None


def _numbers_equal(number: FluentNumber, key_text: str) -> bool:
    try:
        return number.to_decimal() == Decimal(key_text)
    except InvalidOperation:
        return False
