"""Parsed FTL resources.

FluentResource wraps fluent.syntax's parser: it keeps the message and term
entries of one FTL source and turns Junk into FluentSyntaxError diagnostics.
Comments carry no runtime meaning and are dropped.

Python 3.13+. Depends on fluent.syntax.
"""

from __future__ import annotations

import logging

from fluent.syntax import FluentParser, ast

from ftlruntime.diagnostics import ErrorTemplate, FluentSyntaxError

__all__ = ["FluentResource"]

logger = logging.getLogger(__name__)

# Junk content in warnings is truncated to keep logs readable.
_LOG_TRUNCATE_WARNING: int = 100


class FluentResource:
    """Messages and terms of one FTL source.

    Attributes:
        entries: Message and Term nodes, in source order
        errors: One FluentSyntaxError per Junk entry

    Example:
        >>> resource = FluentResource("hello = Hello\\n-brand = Firefox\\n")
        >>> [entry.id.name for entry in resource.entries]
        ['hello', 'brand']
        >>> resource.errors
        ()
    """

    __slots__ = ("entries", "errors", "source_path")

    def __init__(self, source: str, *, source_path: str | None = None) -> None:
        """Parse FTL source.

        Args:
            source: FTL file content
            source_path: Where the source came from, for log messages only
        """
        self.source_path = source_path
        entries, errors = self._collect(FluentParser(with_spans=False).parse(source))
        self.entries: tuple[ast.Message | ast.Term, ...] = entries
        self.errors: tuple[FluentSyntaxError, ...] = errors

    @classmethod
    def from_ast(cls, resource: ast.Resource, *, source_path: str | None = None) -> FluentResource:
        """Wrap an already parsed fluent.syntax Resource."""
        instance = cls.__new__(cls)
        instance.source_path = source_path
        instance.entries, instance.errors = instance._collect(resource)
        return instance

    def _collect(
        self, resource: ast.Resource
    ) -> tuple[tuple[ast.Message | ast.Term, ...], tuple[FluentSyntaxError, ...]]:
        entries: list[ast.Message | ast.Term] = []
        errors: list[FluentSyntaxError] = []
        for entry in resource.body:
            match entry:
                case ast.Message() | ast.Term():
                    entries.append(entry)
                case ast.Junk():
                    annotations = tuple(annotation.message for annotation in entry.annotations)
                    errors.append(
                        FluentSyntaxError(ErrorTemplate.parse_junk(entry.content, annotations))
                    )
                    # repr() escapes control characters in untrusted content.
                    logger.warning(
                        "Syntax error in %s: %s",
                        self.source_path or "<string>",
                        repr(entry.content[:_LOG_TRUNCATE_WARNING]),
                    )
        return tuple(entries), tuple(errors)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"FluentResource(entries={len(self.entries)}, errors={len(self.errors)})"
