"""
tests/conftest.py
~~~~~~~~~~~~~~~~~
Shared pytest fixtures for the belegdaten test suite.
"""

from __future__ import annotations

import pytest

from belegdaten.amounts import AmountExtractor
from belegdaten.categorizer import AmountCategorizer
from belegdaten.config import Config
from belegdaten.extractor import InvoiceDataExtractor
from belegdaten.numbers import NumberParser


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config() -> Config:
    return Config(_env_file=None)  # type: ignore[call-arg]


# ---------------------------------------------------------------------------
# Components, pinned to English/German so results do not depend on $LANG
# ---------------------------------------------------------------------------

@pytest.fixture
def number_parser() -> NumberParser:
    return NumberParser(locales=["en", "de"])


@pytest.fixture
def amount_extractor(default_config, number_parser) -> AmountExtractor:
    return AmountExtractor(number_parser=number_parser, config=default_config)


@pytest.fixture
def categorizer(default_config) -> AmountCategorizer:
    return AmountCategorizer(config=default_config)


@pytest.fixture
def invoice_extractor(default_config, amount_extractor) -> InvoiceDataExtractor:
    return InvoiceDataExtractor(config=default_config, amount_extractor=amount_extractor)


# ---------------------------------------------------------------------------
# Text fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def german_invoice_text() -> str:
    return """
Bürobedarf GmbH
Musterstraße 1
10115 Berlin

Rechnungsdatum: 15.03.2024
Rechnungsnummer: RE-2024-001

Druckerpapier A4   2x  6,50 €   13,00 €
Kugelschreiber     5x  0,99 €    4,95 €

Nettobetrag                     17,95 €
MwSt. 19%                        3,41 €
Gesamtbetrag                    21,36 €

IBAN: DE89 3704 0044 0532 0130 00
BIC: COBADEFFXXX
Zahlbar innerhalb von 14 Tagen ohne Abzug.
""".strip()
