"""Resource loading infrastructure for FluentLocalization.

Provides the protocol for FTL resource loaders, a filesystem implementation
with path-traversal checks, and result records for load attempts.

Components:
    ResourceLoader - Protocol for loading FTL resources (structural typing)
    PathResourceLoader - Disk-based loader using a path template
    LoadStatus - Outcome of one load attempt
    ResourceLoadResult - Immutable result of a single resource load attempt
    LoadSummary - Immutable aggregate of all load results

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from ftlruntime.diagnostics import FluentSyntaxError

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "ResourceLoader",
    # Concrete loader
    "PathResourceLoader",
    # Load result types
    "LoadStatus",
    "ResourceLoadResult",
    "LoadSummary",
]


class ResourceLoader(Protocol):
    """Protocol for loading FTL resources for specific locales.

    This is a Protocol (structural typing) rather than ABC so that any
    object with a matching load() method can be used.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, sources: dict[tuple[str, str], str]) -> None:
        ...         self.sources = sources
        ...     def load(self, locale: str, resource_id: str) -> str | None:
        ...         return self.sources.get((locale, resource_id))
    """

    def load(self, locale: str, resource_id: str) -> str | None:
        """Load FTL source for a locale.

        Args:
            locale: Locale code (e.g., 'en-US', 'pl')
            resource_id: Resource identifier (e.g., 'main.ftl')

        Returns:
            FTL source, or None if this locale has no such resource

        Raises:
            OSError: If the resource exists but cannot be read
            ValueError: If the identifiers are unsafe or malformed
        """
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(frozen=True, slots=True)
class PathResourceLoader:
    """File system resource loader using a path template.

    The template contains ``{locale}`` and usually ``{res_id}``; when it has
    no ``{res_id}`` the resource id is appended as a file name.

    Security:
        Locale codes containing path separators or ".." are rejected.
        Resource IDs containing ".." or absolute paths are rejected.
        All resolved paths are validated against a fixed root directory.

    Example:
        >>> loader = PathResourceLoader("locales/{locale}/{res_id}")
        >>> loader.describe_path("pl", "main.ftl")
        'locales/pl/main.ftl'

    Attributes:
        path_template: Template with {locale} and optional {res_id} placeholders
        root_dir: Fixed root directory for path traversal validation.
                  Defaults to the static prefix of path_template.
    """

    path_template: str
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory and validate template.

        Raises:
            ValueError: If path_template does not contain {locale}
        """
        if "{locale}" not in self.path_template:
            msg = (
                f"path_template must contain '{{locale}}' placeholder for locale substitution, "
                f"got: '{self.path_template}'"
            )
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            # "locales/{locale}/{res_id}" -> "locales"
            static_prefix = self.path_template.split("{", 1)[0].rstrip("/\\")
            resolved = Path(static_prefix).resolve() if static_prefix else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_locale(locale: str) -> None:
        """Validate locale code for path traversal attacks.

        Raises:
            ValueError: If locale contains unsafe path components
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    @staticmethod
    def _validate_resource_id(resource_id: str) -> None:
        """Validate resource_id for path traversal attacks and whitespace.

        Raises:
            ValueError: If resource_id contains unsafe path components or
                       leading/trailing whitespace
        """
        if resource_id.strip() != resource_id:
            msg = f"Resource ID contains leading/trailing whitespace: {resource_id!r}"
            raise ValueError(msg)
        if Path(resource_id).is_absolute() or resource_id.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in resource_id: '{resource_id}'"
            raise ValueError(msg)
        if ".." in resource_id:
            msg = f"Path traversal sequences not allowed in resource_id: '{resource_id}'"
            raise ValueError(msg)

    def describe_path(self, locale: str, resource_id: str) -> str:
        """Template with placeholders substituted, for diagnostics."""
        # replace() rather than format(): other braces in the template stay literal
        path = self.path_template.replace("{locale}", locale)
        if "{res_id}" in path:
            return path.replace("{res_id}", resource_id)
        return f"{path.rstrip('/')}/{resource_id}"

    def load(self, locale: str, resource_id: str) -> str | None:
        """Load FTL file from disk.

        Returns:
            FTL source, or None if the file does not exist

        Raises:
            ValueError: If locale or resource_id would escape the root directory
            OSError: If the file exists but cannot be read
        """
        self._validate_locale(locale)
        self._validate_resource_id(resource_id)

        full_path = Path(self.describe_path(locale, resource_id)).resolve()
        if not full_path.is_relative_to(self._resolved_root):
            msg = (
                f"Path traversal detected: resolved path escapes root directory. "
                f"locale='{locale}', resource_id='{resource_id}'"
            )
            raise ValueError(msg)

        try:
            return full_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None


class LoadStatus(StrEnum):
    """Outcome of one resource load attempt."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of loading a single FTL resource.

    Attributes:
        locale: Locale code for this resource
        resource_id: Resource identifier (e.g., 'main.ftl')
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR, None otherwise
        syntax_errors: One error per Junk entry in the parsed source
    """

    locale: str
    resource_id: str
    status: LoadStatus
    error: Exception | None = None
    syntax_errors: tuple[FluentSyntaxError, ...] = ()

    @property
    def is_success(self) -> bool:
        return self.status == LoadStatus.SUCCESS

    @property
    def has_junk(self) -> bool:
        """Check if resource had unparseable content (Junk entries)."""
        return len(self.syntax_errors) > 0


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of resource load results.

    Example:
        >>> summary = LoadSummary((ResourceLoadResult("pl", "main.ftl", LoadStatus.NOT_FOUND),))
        >>> summary.not_found, summary.all_successful
        (1, False)
    """

    results: tuple[ResourceLoadResult, ...]

    def __repr__(self) -> str:
        return (
            f"LoadSummary(total={len(self.results)}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    def _count(self, status: LoadStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return self._count(LoadStatus.SUCCESS)

    @property
    def not_found(self) -> int:
        """Number of resources not found."""
        return self._count(LoadStatus.NOT_FOUND)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return self._count(LoadStatus.ERROR)

    @property
    def junk_count(self) -> int:
        """Total number of Junk entries across all resources."""
        return sum(len(r.syntax_errors) for r in self.results)

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.status == LoadStatus.ERROR)

    def get_by_locale(self, locale: str) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.locale == locale)

    @property
    def all_successful(self) -> bool:
        """True if every attempted resource was found and read.

        Resources with Junk entries still count as successful.
        """
        return self.errors == 0 and self.not_found == 0
