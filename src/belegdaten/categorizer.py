"""
belegdaten.categorizer
~~~~~~~~~~~~~~~~~~~~~~
Decides which of the amounts on a document is the total, the net amount and
the VAT amount.

The only signal used is arithmetic: the three amounts must satisfy
``total == net + vat``.  Amounts are tried largest first, so the winning
triple has the largest possible total and, for that total, the largest
possible net amount.  Without such a triple the largest amount is reported
as the total on its own.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from .config import Config, cfg
from .models import AmountOfMoney, TotalNetAndVatAmount

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

_CENT = Decimal("0.01")
_HUNDRED = Decimal(100)


class AmountCategorizer:
    """
    Classifies extracted amounts and picks the VAT rate.

    Args:
        max_amounts: Upper bound on the number of amounts searched.  The
                     search is cubic, so large price lists are cut down to
                     their biggest values.  Defaults to ``Config.max_amounts``.
        config:      Config instance (defaults to the module singleton).
    """

    def __init__(self, max_amounts: Optional[int] = None, config: Optional[Config] = None) -> None:
        config = config or cfg
        self.max_amounts = max_amounts if max_amounts is not None else config.max_amounts

    def find_total_net_and_vat_amount(
        self,
        amounts: Iterable[AmountOfMoney],
    ) -> Optional[TotalNetAndVatAmount]:
        """
        Return the first consistent (total, net, VAT) triple, or the largest
        amount alone if there is none.  Returns ``None`` for no amounts.

        Amounts of equal value keep the order in which *amounts* yields
        them, so pass an ordered collection for reproducible ties.
        """
        distinct = list(dict.fromkeys(amounts))
        if not distinct:
            return None

        amounts_sorted = sorted(distinct, key=lambda a: a.value, reverse=True)
        if len(amounts_sorted) > self.max_amounts:
            logger.warning(
                "Found %d amounts, only the largest %d are considered.",
                len(amounts_sorted), self.max_amounts,
            )
            amounts_sorted = amounts_sorted[: self.max_amounts]

        count = len(amounts_sorted)
        for total_index in range(count):
            potential_total = amounts_sorted[total_index]

            for net_index in range(total_index + 1, count - 1):
                potential_net = amounts_sorted[net_index]

                for vat_index in range(net_index + 1, count):
                    potential_vat = amounts_sorted[vat_index]

                    if potential_total.value == potential_net.value + potential_vat.value:
                        return TotalNetAndVatAmount(potential_total, potential_net, potential_vat)

        logger.debug("No total = net + VAT triple among %d amounts.", count)
        return TotalNetAndVatAmount(amounts_sorted[0], None, None)

    def find_value_added_tax_rate(
        self,
        percentages: Sequence[AmountOfMoney],
        amounts:     Optional[TotalNetAndVatAmount] = None,
    ) -> Optional[AmountOfMoney]:
        """
        Pick the VAT rate among the percentages found on a document.

        With several candidates and a complete *amounts* triple, the first
        rate that reproduces the VAT amount from the net amount wins.
        Otherwise the first candidate is returned.
        """
        if not percentages:
            return None
        if len(percentages) == 1:
            return percentages[0]

        if amounts is not None and amounts.is_complete:
            for percentage in percentages:
                if _vat_for(amounts.net.value, percentage.value) == amounts.vat.value:
                    return percentage

        return percentages[0]


def _vat_for(net: Decimal, rate: Decimal) -> Decimal:
    return (net * rate / _HUNDRED).quantize(_CENT, rounding=ROUND_HALF_UP)
