"""
belegdaten
~~~~~~~~~~
Extracts total, net and VAT amounts from the text of invoices.

Typical usage::

    from belegdaten import InvoiceDataExtractor

    extractor = InvoiceDataExtractor()
    invoice = extractor.extract_invoice_data(text)

    if invoice is not None:
        print(invoice.total_amount.value, invoice.vat_rate)
    else:
        print("No invoice data found.")
"""

from .amounts import AmountExtractor
from .banking import BicExtractor, IbanExtractor
from .categorizer import AmountCategorizer
from .config import Config, cfg
from .dates import DateExtractor
from .exceptions import BelegdatenError, ConfigurationError, ParseError
from .extractor import InvoiceDataExtractor
from .models import (
    AmountOfMoney,
    DateData,
    DatePartsPosition,
    Invoice,
    StringSearchResult,
    TotalNetAndVatAmount,
)
from .numbers import NumberParser

__all__ = [
    # Core extractor
    "InvoiceDataExtractor",
    # Building blocks
    "AmountExtractor",
    "AmountCategorizer",
    "NumberParser",
    "DateExtractor",
    "IbanExtractor",
    "BicExtractor",
    # Configuration
    "Config",
    "cfg",
    # Models
    "AmountOfMoney",
    "TotalNetAndVatAmount",
    "Invoice",
    "DateData",
    "DatePartsPosition",
    "StringSearchResult",
    # Exceptions
    "BelegdatenError",
    "ParseError",
    "ConfigurationError",
]
