"""
belegdaten.numbers
~~~~~~~~~~~~~~~~~~
Locale-aware parsing of the numeric part of an amount.

Invoices print numbers in either the English ("1,234.56") or the German
("1.234,56") convention and the currency symbol does not tell which.  The
parser therefore tries several conventions in a fixed order and returns the
first one that accepts the string:

1. the ambient locale of the process (``LC_NUMERIC`` / ``LANG``), if any
2. English
3. German

Parsing is done by babel in strict mode, so misplaced grouping separators
are rejected rather than silently dropped ("19,99" is *not* 1999 in English).
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from babel import Locale, UnknownLocaleError
from babel.core import default_locale
from babel.numbers import NumberFormatError, parse_decimal

from .exceptions import ParseError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

ENGLISH = "en"
GERMAN = "de"

# German invoices frequently group thousands with a (no-break) space.
_SPACE_BETWEEN_DIGITS = re.compile(r"(?<=\d)[ \u00a0\u202f](?=\d)")


def ambient_locale() -> Optional[Locale]:
    """Return the process locale for number formatting, or ``None`` if unset or unknown."""
    name = default_locale("LC_NUMERIC")
    if not name:
        return None
    try:
        return Locale.parse(name)
    except (UnknownLocaleError, ValueError) as exc:
        logger.debug("Ignoring unusable ambient locale %r: %s", name, exc)
        return None


class NumberParser:
    """
    Parse numeric strings into ``Decimal`` by trying locale conventions in turn.

    Args:
        locales: Explicit conventions to try, in order.  Defaults to the
                 ambient locale followed by English and German.
    """

    def __init__(self, locales: Optional[Iterable[str | Locale]] = None) -> None:
        if locales is None:
            candidates: list = [ambient_locale(), ENGLISH, GERMAN]
        else:
            candidates = list(locales)

        resolved: list[Locale] = []
        for candidate in candidates:
            if candidate is None:
                continue
            loc = Locale.parse(candidate)
            if str(loc) not in (str(r) for r in resolved):
                resolved.append(loc)
        self.locales: Tuple[Locale, ...] = tuple(resolved)

    def parse(self, text: str) -> Decimal:
        """
        Return the value of *text* under the first convention that accepts it.

        Raises:
            ParseError: if no configured convention can interpret *text*.
        """
        stripped = text.strip()
        last_error: Optional[NumberFormatError] = None

        for loc in self.locales:
            candidate = stripped
            if loc.language == GERMAN:
                candidate = _SPACE_BETWEEN_DIGITS.sub("", candidate)
            try:
                return parse_decimal(candidate, locale=loc, strict=True)
            except NumberFormatError as exc:
                last_error = exc

        raise ParseError(
            f"Could not parse {text!r} as a number",
            text=text,
            cause=last_error,
        )
