"""Language tags for locale negotiation.

LanguageTag holds the subtags negotiation compares: language, script,
region and variant. Tags are parsed with Babel, accepting both BCP-47
(``sr-Latn-RS``) and POSIX (``sr_Latn_RS``) spellings.

Python 3.13+. Depends on Babel for tag parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from babel.core import parse_locale

__all__ = ["LanguageTag"]


@dataclass(frozen=True, slots=True)
class LanguageTag:
    """Parsed language tag with case-normalized subtags.

    Attributes:
        language: Lowercase language subtag ("en")
        script: Title-case script subtag ("Latn"), or None
        region: Uppercase region subtag ("US"), or None
        variant: Uppercase variant subtag ("POSIX"), or None
    """

    language: str
    script: str | None = None
    region: str | None = None
    variant: str | None = None

    @classmethod
    def parse(cls, tag: str) -> LanguageTag:
        """Parse a locale tag.

        Example:
            >>> LanguageTag.parse("zh_hant_tw")
            LanguageTag(language='zh', script='Hant', region='TW', variant=None)

        Raises:
            ValueError: If the tag is not a well-formed locale identifier
        """
        parts = parse_locale(tag.replace("_", "-"), sep="-")
        language, region, script, variant = parts[:4]
        return cls(language, script, region, variant)

    def without_region(self) -> LanguageTag:
        return replace(self, region=None)

    def without_variant(self) -> LanguageTag:
        return replace(self, variant=None)

    def matches(self, other: LanguageTag, *, self_as_range: bool, other_as_range: bool) -> bool:
        """Compare subtag by subtag.

        A side used as a range matches any value where its own subtag is
        missing: ``en`` as a range matches ``en-US`` and ``en-Latn-GB``.
        """
        return (
            self.language == other.language
            and _subtag_matches(self.script, other.script, self_as_range, other_as_range)
            and _subtag_matches(self.region, other.region, self_as_range, other_as_range)
            and _subtag_matches(self.variant, other.variant, self_as_range, other_as_range)
        )

    def __str__(self) -> str:
        return "-".join(
            part for part in (self.language, self.script, self.region, self.variant) if part
        )


def _subtag_matches(
    mine: str | None, theirs: str | None, self_as_range: bool, other_as_range: bool
) -> bool:
    if self_as_range and mine is None:
        return True
    if other_as_range and theirs is None:
        return True
    return mine == theirs
