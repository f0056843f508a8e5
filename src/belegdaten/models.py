"""
belegdaten.models
~~~~~~~~~~~~~~~~~
Value objects produced by the extractors.

Key design decisions
--------------------
* Every model is a frozen dataclass.  Extractors hand out references to
  the same ``AmountOfMoney`` instances all the way up to ``Invoice``; no
  stage copies or mutates them.

* Monetary values are ``Decimal`` rather than ``float`` so that the
  ``total == net + vat`` check in the categorizer is exact.

* ``AmountOfMoney`` equality ignores ``source_line``.  The same amount
  printed on two lines ("19,99 €" in the item list and again in the
  summary) collapses to a single set element.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AmountOfMoney:
    """
    A number found next to a currency (or percent) symbol.

    ``raw_text`` is the full matched substring, e.g. ``"19,99 €"``;
    ``source_line`` is the line it was found in, kept for diagnostics.
    """

    value:       Decimal
    symbol:      str
    raw_text:    str
    source_line: str = field(default="", compare=False)

    def to_dict(self) -> dict:
        return {
            "value":       float(self.value),
            "symbol":      self.symbol,
            "raw_text":    self.raw_text,
            "source_line": self.source_line,
        }


@dataclass(frozen=True)
class TotalNetAndVatAmount:
    """
    Result of classifying the amounts of one document.

    When both ``net`` and ``vat`` are set, ``total.value == net.value + vat.value``.
    A result with only ``total`` set is a low-confidence fallback.
    """

    total: AmountOfMoney
    net:   Optional[AmountOfMoney] = None
    vat:   Optional[AmountOfMoney] = None

    @property
    def is_complete(self) -> bool:
        return self.net is not None and self.vat is not None


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatePartsPosition:
    """1-based positions of day, month and year within a matched date string."""

    day_position:   int
    month_position: int
    year_position:  int


@dataclass(frozen=True)
class DateData:
    """A calendar date as written on the document. Not checked for validity."""

    day:         int
    month:       int
    year:        int
    raw_text:    str
    source_line: str = field(default="", compare=False)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_dict(self) -> dict:
        return {
            "day":      self.day,
            "month":    self.month,
            "year":     self.year,
            "raw_text": self.raw_text,
        }


# ---------------------------------------------------------------------------
# Free-form search results (IBAN, BIC)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StringSearchResult:
    """A normalised match (``value``) plus the text it came from."""

    value:       str
    raw_text:    str
    source_line: str = field(default="", compare=False)

    def to_dict(self) -> dict:
        return {"value": self.value, "raw_text": self.raw_text}


# ---------------------------------------------------------------------------
# Invoice
# ---------------------------------------------------------------------------

def _amount_dict(amount: Optional[AmountOfMoney]) -> Optional[dict]:
    return amount.to_dict() if amount is not None else None


@dataclass(frozen=True)
class Invoice:
    """
    Final result returned by ``InvoiceDataExtractor.extract_invoice_data()``.

    ``total_amount`` is always set.  ``net_amount`` and ``vat_amount`` are
    either both set (and add up to the total) or both ``None``.
    """

    total_amount: AmountOfMoney
    net_amount:   Optional[AmountOfMoney] = None
    vat_amount:   Optional[AmountOfMoney] = None
    vat_rate:     Optional[AmountOfMoney] = None
    dates:        Tuple[DateData, ...] = ()
    ibans:        Tuple[StringSearchResult, ...] = ()
    bics:         Tuple[StringSearchResult, ...] = ()

    def to_dict(self) -> dict:
        return {
            "total_amount": _amount_dict(self.total_amount),
            "net_amount":   _amount_dict(self.net_amount),
            "vat_amount":   _amount_dict(self.vat_amount),
            "vat_rate":     _amount_dict(self.vat_rate),
            "dates":        [d.to_dict() for d in self.dates],
            "ibans":        [i.to_dict() for i in self.ibans],
            "bics":         [b.to_dict() for b in self.bics],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
