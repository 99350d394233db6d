"""HTTP Accept-Language header parsing.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging

__all__ = ["parse_accepted_languages"]

logger = logging.getLogger(__name__)


def parse_accepted_languages(header: str) -> list[str]:
    """Language tags from an Accept-Language header, most preferred first.

    Entries are ordered by quality value; equal qualities keep header order.
    The wildcard ``*``, entries with ``q=0`` and entries whose quality is
    malformed or outside 0..1 (including ``nan`` and ``inf``) are dropped.

    Examples:
        >>> parse_accepted_languages("fr-CH, fr;q=0.9, en;q=0.8, de;q=0.7, *;q=0.5")
        ['fr-CH', 'fr', 'en', 'de']
        >>> parse_accepted_languages("en;q=0.5, pl")
        ['pl', 'en']
    """
    weighted: list[tuple[float, int, str]] = []
    for position, part in enumerate(header.split(",")):
        tag, *params = (piece.strip() for piece in part.split(";"))
        if not tag or tag == "*":
            continue

        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() != "q":
                continue
            try:
                quality = float(value)
            except ValueError:
                quality = -1.0
        # NaN fails both comparisons
        if not 0.0 < quality <= 1.0:
            if quality != 0.0:
                logger.debug("Ignoring Accept-Language entry with bad quality: %r", part)
            continue

        weighted.append((-quality, position, tag))

    return [tag for _, _, tag in sorted(weighted)]
