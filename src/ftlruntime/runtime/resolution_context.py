"""Per-call resolution state for Fluent message resolution.

Thread Safety:
    A ResolutionContext is created for every format_pattern() call and never
    shared, so concurrent resolutions against one bundle need no locking.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from ftlruntime.constants import MAX_DEPTH
from ftlruntime.diagnostics import ErrorTemplate, FluentError, FluentResolutionError

__all__ = ["ResolutionContext"]


@dataclass(slots=True)
class ResolutionContext:
    """Explicit context for one resolution.

    Uses both a list (ordered path for error messages) and a set (O(1)
    membership) for cycle detection.

    Attributes:
        errors: Diagnostics collected so far, in resolution order
        stack: Entry keys being resolved (``msg``, ``msg.attr``, ``-term``)
        max_depth: Maximum nesting of references, placeables and variants
        depth: Current nesting depth
    """

    errors: list[FluentError] = field(default_factory=list)
    stack: list[str] = field(default_factory=list)
    _seen: set[str] = field(default_factory=set)
    max_depth: int = MAX_DEPTH
    depth: int = 0

    def add_error(self, error: FluentError) -> None:
        self.errors.append(error)

    def push(self, key: str) -> None:
        """Push entry key onto resolution stack."""
        self.stack.append(key)
        self._seen.add(key)

    def pop(self) -> str:
        """Pop entry key from resolution stack."""
        key = self.stack.pop()
        self._seen.discard(key)
        return key

    def contains(self, key: str) -> bool:
        """Check if key is in resolution stack (cycle detection)."""
        return key in self._seen

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self.stack)

    def get_cycle_path(self, key: str) -> tuple[str, ...]:
        """Get the cycle path for error reporting."""
        return (*self.stack, key)

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Guard one level of nesting.

        Raises:
            FluentResolutionError: If the maximum depth would be exceeded
        """
        if self.depth >= self.max_depth:
            diagnostic = ErrorTemplate.too_many_placeables(self.max_depth, self.path)
            raise FluentResolutionError(diagnostic)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1
