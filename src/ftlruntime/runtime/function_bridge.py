"""Function registry bridging FTL calls to Python callables.

FTL call sites such as ``{ NUMBER($x, minimumFractionDigits: 2) }`` reach the
registered callable as ``func(positional, named)``: a sequence of resolved
positional FluentValues and a FluentArgs of named options. Option names keep
their FTL spelling; each function interprets its own vocabulary.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Iterator, Sequence

from ftlruntime.diagnostics import (
    ErrorTemplate,
    FluentDuplicateFunctionError,
    FluentReferenceError,
    FluentResolutionError,
)

from .value_types import FluentArgs, FluentFunction, FluentValue, to_fluent_value

__all__ = ["FunctionRegistry"]

# FTL function identifiers: uppercase letters, digits, "_" and "-"
_FUNCTION_NAME = re.compile(r"[A-Z][A-Z0-9_-]*")


class FunctionRegistry:
    """Name to callable table for FTL functions.

    Supports dict-like introspection:
        - __iter__: Iterate over function names
        - __len__: Count registered functions
        - __contains__: Check if function exists (supports 'in' operator)

    Example:
        >>> registry = FunctionRegistry()
        >>> registry.register("UPPER", lambda positional, named: str(positional[0]).upper())
        >>> "UPPER" in registry
        True
        >>> len(registry)
        1
    """

    __slots__ = ("_functions",)

    def __init__(self) -> None:
        """Initialize empty function registry."""
        self._functions: dict[str, FluentFunction] = {}

    def register(self, name: str, func: FluentFunction) -> None:
        """Register a callable under an FTL function name.

        Args:
            name: Uppercase FTL name (e.g., "NUMBER")
            func: Callable taking (positional, named)

        Raises:
            ValueError: If name is not a valid FTL function identifier
            FluentDuplicateFunctionError: If name is already registered; the
                existing function is kept
        """
        if not _FUNCTION_NAME.fullmatch(name):
            msg = f"Invalid function name '{name}': expected uppercase identifier like 'NUMBER'"
            raise ValueError(msg)
        if name in self._functions:
            raise FluentDuplicateFunctionError(
                ErrorTemplate.duplicate_function(name), function_name=name
            )
        self._functions[name] = func

    def call(
        self,
        name: str,
        positional: Sequence[FluentValue],
        named: FluentArgs,
    ) -> FluentValue:
        """Call a registered function with resolved FTL arguments.

        Args:
            name: Function name from FTL (e.g., "NUMBER")
            positional: Positional arguments
            named: Named arguments

        Returns:
            Function result converted to a FluentValue

        Raises:
            FluentReferenceError: If function not found
            FluentResolutionError: If the function raised TypeError or ValueError
        """
        func = self._functions.get(name)
        if func is None:
            raise FluentReferenceError(ErrorTemplate.unknown_function(name))

        # Only TypeError/ValueError signal bad arguments. Anything else is a bug
        # in the function and propagates.
        try:
            result = func(positional, named)
        except (TypeError, ValueError) as e:
            raise FluentResolutionError(ErrorTemplate.function_failed(name, str(e))) from e
        return to_fluent_value(result)

    def get(self, name: str) -> FluentFunction | None:
        """Registered callable, or None."""
        return self._functions.get(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(FunctionRegistry())
            'FunctionRegistry(functions=0)'
        """
        return f"FunctionRegistry(functions={len(self._functions)})"

    def copy(self) -> "FunctionRegistry":
        """Create a shallow copy of this registry.

        Registering on the copy does not affect the original.
        """
        new_registry = FunctionRegistry()
        new_registry._functions = self._functions.copy()
        return new_registry
