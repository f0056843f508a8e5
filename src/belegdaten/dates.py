"""
belegdaten.dates
~~~~~~~~~~~~~~~~
Date extraction for invoice text.

Three numeric layouts are recognised, separated by ``.``, ``/``, ``-`` or a
space:  DD.MM.YYYY, MM/DD/YYYY and YYYY-MM-DD.  Many strings match more
than one layout ("05.06.2024" is valid as day-month and month-day), so every
layout is applied to the whole document and the one that explains the most
dates wins; on a tie the earlier layout in the list above is preferred.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Tuple, Union

from .models import DateData, DatePartsPosition
from .patterns import split_lines

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DAY = r"([012][0-9]|3[01]|[1-9])"
MONTH = r"(1[012]|0?[1-9])"
YEAR = r"(19|20)?\d\d"
SEPARATOR = r"[./ -]"
BOUNDARY = r"\b"

DAY_MONTH_YEAR_PATTERN = re.compile(f"{BOUNDARY}{DAY}{SEPARATOR}{MONTH}{SEPARATOR}{YEAR}{BOUNDARY}")
DAY_MONTH_YEAR_POSITION = DatePartsPosition(1, 2, 3)

MONTH_DAY_YEAR_PATTERN = re.compile(f"{BOUNDARY}{MONTH}{SEPARATOR}{DAY}{SEPARATOR}{YEAR}{BOUNDARY}")
MONTH_DAY_YEAR_POSITION = DatePartsPosition(2, 1, 3)

YEAR_MONTH_DAY_PATTERN = re.compile(f"{BOUNDARY}{YEAR}{SEPARATOR}{MONTH}{SEPARATOR}{DAY}{BOUNDARY}")
YEAR_MONTH_DAY_POSITION = DatePartsPosition(3, 2, 1)

DATE_LAYOUTS: Tuple[Tuple[re.Pattern, DatePartsPosition], ...] = (
    (DAY_MONTH_YEAR_PATTERN, DAY_MONTH_YEAR_POSITION),
    (MONTH_DAY_YEAR_PATTERN, MONTH_DAY_YEAR_POSITION),
    (YEAR_MONTH_DAY_PATTERN, YEAR_MONTH_DAY_POSITION),
)

_SEPARATORS = re.compile(SEPARATOR)


def _expand_year(year: int, digits: int) -> int:
    """Two-digit years are interpreted as 2000+ if < 50, else 1900+."""
    if digits > 2:
        return year
    return 2000 + year if year < 50 else 1900 + year


class DateExtractor:
    """Finds dates in line-oriented text and normalises their part order."""

    def extract_dates(self, lines: Union[str, Iterable[str]]) -> List[DateData]:
        lines = split_lines(lines)

        candidates = [
            self._find_dates(lines, pattern, position)
            for pattern, position in DATE_LAYOUTS
        ]
        return max(candidates, key=len)

    def _find_dates(
        self,
        lines:    List[str],
        pattern:  re.Pattern,
        position: DatePartsPosition,
    ) -> List[DateData]:
        dates: List[DateData] = []
        for line in lines:
            for match in pattern.finditer(line):
                date = self._to_date(line, match.group(), position)
                if date is not None:
                    dates.append(date)
        return dates

    def _to_date(self, line: str, date_string: str, position: DatePartsPosition) -> DateData | None:
        parts = _SEPARATORS.split(date_string)
        if len(parts) != 3:
            return None

        try:
            day = int(parts[position.day_position - 1])
            month = int(parts[position.month_position - 1])
            year_part = parts[position.year_position - 1]
            year = _expand_year(int(year_part), len(year_part))
        except ValueError:
            logger.warning("Could not map date string %r to a date", date_string, exc_info=True)
            return None

        return DateData(day=day, month=month, year=year, raw_text=date_string, source_line=line)
