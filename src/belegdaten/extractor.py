"""
belegdaten.extractor
~~~~~~~~~~~~~~~~~~~~
Main entry point for invoice data extraction.

Pipeline:
  1. Split the text into lines (if a single string was passed)
  2. AmountExtractor: every amount of money and every percentage
  3. AmountCategorizer: total / net / VAT triple and the VAT rate
  4. DateExtractor, IbanExtractor, BicExtractor: supporting fields
  5. Assemble the immutable ``Invoice``

A document without any amount of money is an expected input, not an error:
``extract_invoice_data`` returns ``None`` for it.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from .amounts import AmountExtractor
from .banking import BicExtractor, IbanExtractor
from .categorizer import AmountCategorizer
from .config import Config
from .dates import DateExtractor
from .models import Invoice
from .patterns import split_lines

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class InvoiceDataExtractor:
    """
    Turns the text dump of an invoice into an ``Invoice``.

    Instances keep no per-document state and may be shared between threads.

    Args:
        config:            Optional Config instance (reads .env by default).
        amount_extractor:  Replaces the default ``AmountExtractor``.
        amount_categorizer: Replaces the default ``AmountCategorizer``.
        date_extractor:    Replaces the default ``DateExtractor``.
        iban_extractor:    Replaces the default ``IbanExtractor``.
        bic_extractor:     Replaces the default ``BicExtractor``.
    """

    def __init__(
        self,
        config:             Optional[Config] = None,
        amount_extractor:   Optional[AmountExtractor] = None,
        amount_categorizer: Optional[AmountCategorizer] = None,
        date_extractor:     Optional[DateExtractor] = None,
        iban_extractor:     Optional[IbanExtractor] = None,
        bic_extractor:      Optional[BicExtractor] = None,
    ) -> None:
        self.config             = config or Config()
        self.amount_extractor   = amount_extractor or AmountExtractor(config=self.config)
        self.amount_categorizer = amount_categorizer or AmountCategorizer(config=self.config)
        self.date_extractor     = date_extractor or DateExtractor()
        self.iban_extractor     = iban_extractor or IbanExtractor()
        self.bic_extractor      = bic_extractor or BicExtractor()

    def extract_invoice_data(self, text: Union[str, Iterable[str]]) -> Optional[Invoice]:
        """
        Extract amounts, VAT rate, dates and bank details from *text*.

        Args:
            text: The whole document as one string, or its lines.

        Returns the ``Invoice``, or ``None`` if the text contains no amount
        of money at all.
        """
        lines = split_lines(text)

        amounts = self.amount_extractor.extract_amounts_of_money(lines)
        categorized = self.amount_categorizer.find_total_net_and_vat_amount(amounts)
        if categorized is None:
            logger.info("No amounts of money found in %d lines.", len(lines))
            return None

        percentages = self.amount_extractor.extract_percentages(lines)
        vat_rate = self.amount_categorizer.find_value_added_tax_rate(percentages, categorized)

        logger.debug(
            "Categorized %d amounts: total=%s net=%s vat=%s rate=%s",
            len(amounts),
            categorized.total.raw_text,
            categorized.net.raw_text if categorized.net else None,
            categorized.vat.raw_text if categorized.vat else None,
            vat_rate.raw_text if vat_rate else None,
        )

        return Invoice(
            total_amount=categorized.total,
            net_amount=categorized.net,
            vat_amount=categorized.vat,
            vat_rate=vat_rate,
            dates=tuple(self.date_extractor.extract_dates(lines)),
            ibans=tuple(self.iban_extractor.extract_ibans(lines)),
            bics=tuple(self.bic_extractor.extract_bics(lines)),
        )
