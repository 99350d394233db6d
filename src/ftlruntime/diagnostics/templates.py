"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. No f-strings in exception
    constructors; every diagnostic the runtime produces is documented by a
    factory below.
    """

    _DOCS_BASE = "https://projectfluent.org/fluent/guide"

    @staticmethod
    def unknown_variable(name: str, resolution_path: tuple[str, ...] | None = None) -> Diagnostic:
        """Variable reference not provided in the arguments.

        Args:
            name: Variable name without the ``$`` sigil
            resolution_path: Entry keys being resolved

        Returns:
            Diagnostic for UNKNOWN_VARIABLE
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_VARIABLE,
            message=f"Unknown variable: ${name}",
            hint=f"Pass '{name}' in the arguments of the formatting call",
            help_url=f"{ErrorTemplate._DOCS_BASE}/variables.html",
            resolution_path=resolution_path,
        )

    @staticmethod
    def unknown_message(
        message_id: str, resolution_path: tuple[str, ...] | None = None
    ) -> Diagnostic:
        """Message reference not found in bundle.

        Args:
            message_id: The message identifier that was not found
            resolution_path: Entry keys being resolved

        Returns:
            Diagnostic for UNKNOWN_MESSAGE
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_MESSAGE,
            message=f"Unknown message: '{message_id}'",
            hint="Check that the message is defined in the loaded resources",
            help_url=f"{ErrorTemplate._DOCS_BASE}/messages.html",
            resolution_path=resolution_path,
        )

    @staticmethod
    def unknown_term(term_id: str, resolution_path: tuple[str, ...] | None = None) -> Diagnostic:
        """Term reference not found in bundle.

        Returns:
            Diagnostic for UNKNOWN_TERM
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_TERM,
            message=f"Unknown term: '-{term_id}'",
            hint="Check that the term is defined in the loaded resources",
            help_url=f"{ErrorTemplate._DOCS_BASE}/terms.html",
            resolution_path=resolution_path,
        )

    @staticmethod
    def unknown_attribute(
        entry_key: str,
        attribute: str,
        resolution_path: tuple[str, ...] | None = None,
    ) -> Diagnostic:
        """Attribute missing on an existing message or term.

        Args:
            entry_key: Message id, or term id prefixed with ``-``
            attribute: The attribute name that was not found
            resolution_path: Entry keys being resolved

        Returns:
            Diagnostic for UNKNOWN_ATTRIBUTE
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_ATTRIBUTE,
            message=f"Unknown attribute: '{entry_key}.{attribute}'",
            hint=f"Check that '{entry_key}' has an attribute '.{attribute}'",
            help_url=f"{ErrorTemplate._DOCS_BASE}/attributes.html",
            resolution_path=resolution_path,
        )

    @staticmethod
    def message_no_value(message_id: str) -> Diagnostic:
        """Message referenced for its value but only defines attributes.

        Returns:
            Diagnostic for MESSAGE_NO_VALUE
        """
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NO_VALUE,
            message=f"Message '{message_id}' has no value",
            hint=f"Reference one of the attributes of '{message_id}' instead",
            help_url=f"{ErrorTemplate._DOCS_BASE}/attributes.html",
        )

    @staticmethod
    def message_not_found(message_id: str, locales: tuple[str, ...]) -> Diagnostic:
        """Message missing from every bundle of a fallback chain.

        Args:
            message_id: The message identifier that was requested
            locales: Locales that were searched, in order

        Returns:
            Diagnostic for MESSAGE_NOT_FOUND
        """
        searched = ", ".join(locales) if locales else "<none>"
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=f"Message '{message_id}' not found in any locale ({searched})",
            hint="Add the message to at least the last locale of the fallback chain",
            help_url=f"{ErrorTemplate._DOCS_BASE}/messages.html",
        )

    @staticmethod
    def unknown_function(function_name: str) -> Diagnostic:
        """Function not found in registry.

        Returns:
            Diagnostic for UNKNOWN_FUNCTION
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_FUNCTION,
            message=f"Unknown function: {function_name}()",
            hint="Built-in functions: NUMBER, DATETIME. Register custom ones with add_function().",
            help_url=f"{ErrorTemplate._DOCS_BASE}/functions.html",
            function_name=function_name,
        )

    @staticmethod
    def function_failed(function_name: str, error_msg: str) -> Diagnostic:
        """Function raised while being called.

        Args:
            function_name: The function that failed
            error_msg: The error message from the function

        Returns:
            Diagnostic for FUNCTION_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.FUNCTION_FAILED,
            message=f"Function '{function_name}' failed: {error_msg}",
            hint="Check the function arguments and their types",
            help_url=f"{ErrorTemplate._DOCS_BASE}/functions.html",
            function_name=function_name,
        )

    @staticmethod
    def cyclic_reference(resolution_path: tuple[str, ...]) -> Diagnostic:
        """Entry re-entered while it was still being resolved.

        Args:
            resolution_path: Entry keys forming the cycle, repeated key last

        Returns:
            Diagnostic for CYCLIC_REFERENCE
        """
        cycle = " -> ".join(resolution_path)
        return Diagnostic(
            code=DiagnosticCode.CYCLIC_REFERENCE,
            message=f"Cyclic reference: {cycle}",
            hint="Break the cycle by removing one of the references",
            help_url=f"{ErrorTemplate._DOCS_BASE}/references.html",
            resolution_path=resolution_path,
        )

    @staticmethod
    def too_many_placeables(
        max_depth: int, resolution_path: tuple[str, ...] | None = None
    ) -> Diagnostic:
        """Resolution depth limit exceeded.

        Args:
            max_depth: The configured depth limit
            resolution_path: Entry keys being resolved

        Returns:
            Diagnostic for TOO_MANY_PLACEABLES
        """
        return Diagnostic(
            code=DiagnosticCode.TOO_MANY_PLACEABLES,
            message=f"Too many placeables: resolution depth exceeded {max_depth}",
            hint="Reduce the nesting of references and placeables",
            resolution_path=resolution_path,
        )

    @staticmethod
    def missing_default_variant() -> Diagnostic:
        """Select expression without a variant flagged as default.

        Returns:
            Diagnostic for MISSING_DEFAULT_VARIANT
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_DEFAULT_VARIANT,
            message="Select expression has no default variant; using the first variant",
            hint="Mark one variant as default with '*'",
            help_url=f"{ErrorTemplate._DOCS_BASE}/selectors.html",
        )

    @staticmethod
    def no_variants() -> Diagnostic:
        """Select expression without variants.

        Returns:
            Diagnostic for NO_VARIANTS
        """
        return Diagnostic(
            code=DiagnosticCode.NO_VARIANTS,
            message="Select expression has no variants",
            help_url=f"{ErrorTemplate._DOCS_BASE}/selectors.html",
        )

    @staticmethod
    def parse_junk(content: str, annotations: tuple[str, ...]) -> Diagnostic:
        """Parser produced a Junk entry.

        Args:
            content: The unparsed source text
            annotations: Parser error messages attached to the junk

        Returns:
            Diagnostic for PARSE_JUNK
        """
        preview = content.strip().splitlines()[0] if content.strip() else ""
        reason = "; ".join(annotations) if annotations else "unparsable entry"
        return Diagnostic(
            code=DiagnosticCode.PARSE_JUNK,
            message=f"Syntax error: {reason} near '{preview[:50]}'",
            hint="Fix the FTL syntax; the entry is skipped",
            help_url=f"{ErrorTemplate._DOCS_BASE}/",
        )

    @staticmethod
    def duplicate_entry(entry_key: str) -> Diagnostic:
        """Resource redefined an existing message or term.

        Args:
            entry_key: Message id, or term id prefixed with ``-``

        Returns:
            Diagnostic for DUPLICATE_ENTRY_ID
        """
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_ENTRY_ID,
            message=f"Duplicate entry '{entry_key}': the newer definition replaces the older one",
            hint="Rename one of the entries or remove the duplicate",
            severity="warning",
        )

    @staticmethod
    def duplicate_function(function_name: str) -> Diagnostic:
        """Function name already registered.

        Returns:
            Diagnostic for DUPLICATE_FUNCTION_NAME
        """
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_FUNCTION_NAME,
            message=f"Function '{function_name}' is already registered",
            hint="Register each function name once per bundle",
            help_url=f"{ErrorTemplate._DOCS_BASE}/functions.html",
            function_name=function_name,
        )

    @staticmethod
    def formatter_construction_failed(locale_code: str, family: str, reason: str) -> Diagnostic:
        """Locale data needed by a formatter could not be loaded.

        Args:
            locale_code: The locale the formatter was built for
            family: Formatter family (decimal, date, plural_cardinal, ...)
            reason: Underlying error message

        Returns:
            Diagnostic for FORMATTER_CONSTRUCTION_FAILURE
        """
        return Diagnostic(
            code=DiagnosticCode.FORMATTER_CONSTRUCTION_FAILURE,
            message=f"Cannot build {family} formatter for locale '{locale_code}': {reason}",
            hint="Check that the locale is supported by the installed Babel CLDR data",
            locale_code=locale_code,
        )
