"""
belegdaten.patterns
~~~~~~~~~~~~~~~~~~~
Regular-expression helpers shared by the extractors.

Python's :mod:`re` has no ``\\p{..}`` Unicode property escapes, but the
default currency pattern (``\\p{Sc}|EUR``) relies on one.  Patterns are
therefore run through :func:`expand_unicode_categories` before they are
compiled, which replaces every ``\\p{Xx}`` with an explicit character class.

:func:`check_pattern` validates a pattern without that expansion, which
scans the whole code point range and is left to the first compilation.
Compiled patterns are cached process-wide and never mutated afterwards, so
they can be shared freely between threads.
"""

from __future__ import annotations

import logging
import re
import sys
import unicodedata
from functools import lru_cache
from typing import Iterable, List, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

_CATEGORY_ESCAPE = re.compile(r"\\p\{([A-Z][a-z]?)\}")

# Unicode general categories, as reported by unicodedata.category()
UNICODE_CATEGORIES = frozenset(
    "Lu Ll Lt Lm Lo Mn Mc Me Nd Nl No Pc Pd Ps Pe Pi Pf Po "
    "Sm Sc Sk So Zs Zl Zp Cc Cf Cs Co Cn L M N P S Z C".split()
)


@lru_cache(maxsize=None)
def unicode_category_class(category: str) -> str:
    """
    Return a regex character class matching every code point in *category*.

    One-letter categories (``"S"``) match all of their sub-categories
    (``"Sc"``, ``"Sk"``, ``"Sm"``, ``"So"``).
    """
    chars = [
        chr(cp)
        for cp in range(sys.maxunicode + 1)
        if unicodedata.category(chr(cp)).startswith(category)
    ]
    if not chars:
        raise ConfigurationError(f"Unknown Unicode category: {category!r}")
    logger.debug("Built character class for \\p{%s} (%d code points)", category, len(chars))
    return "[" + "".join(re.escape(c) for c in chars) + "]"


def expand_unicode_categories(pattern: str) -> str:
    """Replace ``\\p{Xx}`` escapes (outside character classes) with explicit classes."""
    return _CATEGORY_ESCAPE.sub(lambda m: unicode_category_class(m.group(1)), pattern)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str, flags: int = 0) -> re.Pattern:
    """
    Compile *pattern* once and cache the result.

    Raises:
        ConfigurationError: if the pattern is not a valid regular expression.
    """
    try:
        return re.compile(expand_unicode_categories(pattern), flags)
    except re.error as exc:
        raise ConfigurationError(f"Invalid regular expression: {pattern!r}", cause=exc) from exc


def check_pattern(pattern: str) -> None:
    """
    Validate *pattern* without building any Unicode character class.

    Category names are checked against the known general categories and
    each escape is stood in for by a one-character class, so the syntax
    check costs no more than compiling the pattern itself.

    Raises:
        ConfigurationError: on an unknown category or invalid syntax.
    """
    def placeholder(match: re.Match) -> str:
        if match.group(1) not in UNICODE_CATEGORIES:
            raise ConfigurationError(f"Unknown Unicode category: {match.group(1)!r}")
        return "[a]"

    try:
        re.compile(_CATEGORY_ESCAPE.sub(placeholder, pattern))
    except re.error as exc:
        raise ConfigurationError(f"Invalid regular expression: {pattern!r}", cause=exc) from exc


def split_lines(text_or_lines: Union[str, Iterable[str]]) -> List[str]:
    """Accept either a whole text or its lines and return the lines."""
    if isinstance(text_or_lines, str):
        return text_or_lines.split("\n")
    return list(text_or_lines)
