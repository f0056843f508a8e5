"""
belegdaten.amounts
~~~~~~~~~~~~~~~~~~
Finds amounts of money and percentages in line-oriented invoice text.

An amount is a decimal number directly next to a currency symbol, with
nothing but whitespace in between, in either order::

    19,99 €        number before symbol
    € 19.99        symbol before number
    EUR 1234,56    the literal "EUR" counts as a symbol

A currency symbol without an adjacent number is ignored.  Percentages use
the same adjacency rules with a literal ``%`` and are restricted to the
range a VAT rate can plausibly take.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import AbstractSet, Dict, Iterable, List, Optional, Union

from .config import Config, cfg
from .exceptions import ParseError
from .models import AmountOfMoney
from .numbers import NumberParser
from .patterns import compile_pattern, split_lines

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

PERCENT_SYMBOL_PATTERN = "%"


class AmountExtractor:
    """
    Regex-driven extraction of ``AmountOfMoney`` values.

    Args:
        currency_symbol_pattern: Overrides ``Config.currency_symbol_pattern``.
        decimal_number_pattern:  Overrides ``Config.decimal_number_pattern``.
        number_parser:           Parser for the numeric part.
        config:                  Config instance (defaults to the module singleton).

    Raises:
        ConfigurationError: if either pattern does not compile.
    """

    def __init__(
        self,
        currency_symbol_pattern: Optional[str] = None,
        decimal_number_pattern:  Optional[str] = None,
        number_parser:           Optional[NumberParser] = None,
        config:                  Optional[Config] = None,
    ) -> None:
        config = config or cfg
        self.currency_symbol_pattern = currency_symbol_pattern or config.currency_symbol_pattern
        self.decimal_number_pattern  = decimal_number_pattern or config.decimal_number_pattern
        self.number_parser           = number_parser or NumberParser()
        self.min_percentage          = Decimal(str(config.min_percentage))
        self.max_percentage          = Decimal(str(config.max_percentage))

        self._currency_symbol = compile_pattern(self.currency_symbol_pattern, re.IGNORECASE)
        self._percent_symbol  = compile_pattern(PERCENT_SYMBOL_PATTERN)
        compile_pattern(self.decimal_number_pattern)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def extract_amounts_of_money(self, lines: Union[str, Iterable[str]]) -> AbstractSet[AmountOfMoney]:
        """
        Return every distinct amount of money found in *lines*.

        Amounts equal in value, symbol and raw text are reported once,
        even if they occur on several lines.  The result is a set view
        that iterates in reading order of first occurrence.
        """
        amounts: Dict[AmountOfMoney, None] = {}
        for line in split_lines(lines):
            for amount in self._extract_from_line(line, self._currency_symbol):
                amounts.setdefault(amount)
        return amounts.keys()

    def extract_percentages(self, lines: Union[str, Iterable[str]]) -> List[AmountOfMoney]:
        """Return plausible VAT-rate percentages in order of first occurrence."""
        percentages: List[AmountOfMoney] = []
        for line in split_lines(lines):
            for percentage in self._extract_from_line(line, self._percent_symbol):
                if not self.min_percentage <= percentage.value <= self.max_percentage:
                    logger.debug("Discarding implausible percentage %r", percentage.raw_text)
                    continue
                if percentage not in percentages:
                    percentages.append(percentage)
        return percentages

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _extract_from_line(self, line: str, symbol_pattern: re.Pattern) -> List[AmountOfMoney]:
        amounts: List[AmountOfMoney] = []
        window_start = 0

        for symbol_match in symbol_pattern.finditer(line):
            amount = self._extract_amount(line, symbol_match, window_start)
            if amount is not None:
                amounts.append(amount)
            # never look back into text that belongs to an earlier symbol
            window_start = symbol_match.end()

        return amounts

    def _extract_amount(
        self,
        line:         str,
        symbol_match: re.Match,
        window_start: int,
    ) -> Optional[AmountOfMoney]:
        symbol = symbol_match.group()

        before = self._number_before_symbol(symbol).search(line, window_start, symbol_match.end())
        if before is not None:
            return self._to_amount(before, symbol, line)

        after = self._number_after_symbol(symbol).match(line, symbol_match.start())
        if after is not None:
            return self._to_amount(after, symbol, line)

        return None

    def _to_amount(self, match: re.Match, symbol: str, line: str) -> Optional[AmountOfMoney]:
        try:
            value = self.number_parser.parse(match.group("number"))
        except ParseError as exc:
            logger.debug("Discarding amount candidate %r: %s", match.group(), exc)
            return None
        return AmountOfMoney(value=value, symbol=symbol, raw_text=match.group(), source_line=line)

    # ------------------------------------------------------------------
    # Pattern construction
    # ------------------------------------------------------------------

    def _number_before_symbol(self, symbol: str) -> re.Pattern:
        return compile_pattern(
            rf"(?P<number>{self.decimal_number_pattern})\s*{re.escape(symbol)}\Z",
            re.IGNORECASE,
        )

    def _number_after_symbol(self, symbol: str) -> re.Pattern:
        return compile_pattern(
            rf"{re.escape(symbol)}\s*(?P<number>{self.decimal_number_pattern})",
            re.IGNORECASE,
        )
