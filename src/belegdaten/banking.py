"""
belegdaten.banking
~~~~~~~~~~~~~~~~~~
IBAN and BIC extraction.

IBANs carry a checksum (ISO 13616, mod 97), so every candidate is verified
and false positives are rare.  BICs have no checksum and look like any other
all-caps word ("RECHNUNG" has the right shape), so they are only accepted on
lines that mention BIC or SWIFT.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Union

from .models import StringSearchResult
from .patterns import split_lines

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

IBAN_PATTERN = re.compile(r"\b[A-Z]{2}\d{2}(?: ?[A-Z0-9]{4}){2,7}(?: ?[A-Z0-9]{1,4})?\b")
IBAN_MIN_LENGTH = 15
IBAN_MAX_LENGTH = 34

BIC_PATTERN = re.compile(r"\b[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}(?:[A-Z0-9]{3})?\b")
BIC_KEYWORDS = re.compile(r"\b(?:BIC|SWIFT)", re.IGNORECASE)


def is_valid_iban(iban: str) -> bool:
    """Check length and the mod-97 checksum of a compact (space-free) IBAN."""
    if not IBAN_MIN_LENGTH <= len(iban) <= IBAN_MAX_LENGTH:
        return False
    rearranged = iban[4:] + iban[:4]
    digits = "".join(str(int(c, 36)) for c in rearranged)
    return int(digits) % 97 == 1


class IbanExtractor:
    """Finds checksum-valid IBANs, written compact or in groups of four."""

    def extract_ibans(self, lines: Union[str, Iterable[str]]) -> List[StringSearchResult]:
        results: List[StringSearchResult] = []
        seen = set()

        for line in split_lines(lines):
            for match in IBAN_PATTERN.finditer(line):
                raw = self._checked_prefix(match.group())
                if raw is None:
                    logger.debug("Discarding IBAN candidate %r: checksum mismatch", match.group())
                    continue
                iban = raw.replace(" ", "")
                if iban in seen:
                    continue
                seen.add(iban)
                results.append(StringSearchResult(value=iban, raw_text=raw, source_line=line))

        return results

    @staticmethod
    def _checked_prefix(raw: str) -> Optional[str]:
        """
        Return the longest space-separated prefix of *raw* that is a valid
        IBAN.  A grouped IBAN followed by a short word ("... 7034 BIC") is
        matched together with that word, which breaks the checksum.
        """
        groups = raw.split(" ")
        for end in range(len(groups), 0, -1):
            candidate = " ".join(groups[:end])
            compact = candidate.replace(" ", "")
            if len(compact) < IBAN_MIN_LENGTH:
                break
            if is_valid_iban(compact):
                return candidate
        return None


class BicExtractor:
    """Finds BICs on lines labelled with BIC or SWIFT."""

    def extract_bics(self, lines: Union[str, Iterable[str]]) -> List[StringSearchResult]:
        results: List[StringSearchResult] = []
        seen = set()

        for line in split_lines(lines):
            keyword = BIC_KEYWORDS.search(line)
            if keyword is None:
                continue
            for match in BIC_PATTERN.finditer(line, keyword.end()):
                bic = match.group()
                if bic in seen:
                    continue
                seen.add(bic)
                results.append(StringSearchResult(value=bic, raw_text=bic, source_line=line))

        return results
