"""
tests/test_amounts.py
~~~~~~~~~~~~~~~~~~~~~
Tests for belegdaten.amounts: adjacency rules, deduplication, percentage
range filtering and pattern overrides.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from belegdaten.amounts import AmountExtractor
from belegdaten.exceptions import ConfigurationError
from belegdaten.models import AmountOfMoney


# ---------------------------------------------------------------------------
# extract_amounts_of_money
# ---------------------------------------------------------------------------

class TestAmountsOfMoney:
    def test_number_before_symbol(self, amount_extractor):
        amounts = amount_extractor.extract_amounts_of_money(["Summe 19,99 €"])
        assert amounts == {AmountOfMoney(Decimal("19.99"), "€", "19,99 €")}

    def test_symbol_before_number(self, amount_extractor):
        amounts = amount_extractor.extract_amounts_of_money(["Total € 19.99"])
        assert amounts == {AmountOfMoney(Decimal("19.99"), "€", "€ 19.99")}

    def test_both_conventions_yield_same_value(self, amount_extractor):
        german = next(iter(amount_extractor.extract_amounts_of_money(["19,99 €"])))
        english = next(iter(amount_extractor.extract_amounts_of_money(["€ 19.99"])))
        assert german.value == english.value == Decimal("19.99")

    def test_eur_token_case_insensitive(self, amount_extractor):
        amounts = amount_extractor.extract_amounts_of_money(["Betrag: 100 eur"])
        (amount,) = amounts
        assert amount.value == Decimal("100")
        assert amount.symbol == "eur"
        assert amount.raw_text == "100 eur"

    def test_eur_prefix_without_space(self, amount_extractor):
        (amount,) = amount_extractor.extract_amounts_of_money(["EUR1234,56"])
        assert amount.value == Decimal("1234.56")

    @pytest.mark.parametrize("line,symbol", [
        ("$ 5.00", "$"),
        ("£12.50", "£"),
        ("300 ¥", "¥"),
    ])
    def test_other_currency_signs(self, amount_extractor, line, symbol):
        (amount,) = amount_extractor.extract_amounts_of_money([line])
        assert amount.symbol == symbol

    def test_symbol_without_number_ignored(self, amount_extractor):
        assert amount_extractor.extract_amounts_of_money(["Alle Preise in €"]) == set()

    def test_number_separated_by_text_ignored(self, amount_extractor):
        assert amount_extractor.extract_amounts_of_money(["12 Stück à €"]) == set()

    def test_several_amounts_on_one_line(self, amount_extractor):
        amounts = amount_extractor.extract_amounts_of_money(["2x  6,50 €   13,00 €"])
        assert {a.value for a in amounts} == {Decimal("6.50"), Decimal("13.00")}

    def test_source_line_retained(self, amount_extractor):
        line = "Gesamtbetrag 21,36 €"
        (amount,) = amount_extractor.extract_amounts_of_money([line])
        assert amount.source_line == line

    def test_same_amount_on_two_lines_counted_once(self, amount_extractor):
        lines = ["Artikel 19,99 €", "Summe 19,99 €"]
        assert len(amount_extractor.extract_amounts_of_money(lines)) == 1

    def test_iterates_in_reading_order(self, amount_extractor):
        lines = ["Gesamt 119,00 €", "Zu zahlen 119,00 EUR", "Netto 100,00 €", "Gesamt 119,00 €"]
        amounts = amount_extractor.extract_amounts_of_money(lines)
        assert [a.raw_text for a in amounts] == ["119,00 €", "119,00 EUR", "100,00 €"]

    def test_overlapping_currency_cues_not_double_counted(self, amount_extractor):
        amounts = amount_extractor.extract_amounts_of_money(
            ["Amount due: 50.00 USD-equivalent €50.00"]
        )
        assert amounts == {AmountOfMoney(Decimal("50.00"), "€", "€50.00")}

    def test_accepts_whole_text(self, amount_extractor):
        amounts = amount_extractor.extract_amounts_of_money("A 1,00 €\nB 2,00 €")
        assert {a.value for a in amounts} == {Decimal("1.00"), Decimal("2.00")}

    def test_empty_input(self, amount_extractor):
        assert amount_extractor.extract_amounts_of_money([]) == set()
        assert amount_extractor.extract_amounts_of_money("") == set()

    def test_no_amounts(self, amount_extractor):
        assert amount_extractor.extract_amounts_of_money(["Random text with no amounts"]) == set()


# ---------------------------------------------------------------------------
# Pattern overrides
# ---------------------------------------------------------------------------

class TestPatternOverrides:
    def test_custom_currency_pattern(self, default_config, number_parser):
        extractor = AmountExtractor(
            currency_symbol_pattern="CHF",
            number_parser=number_parser,
            config=default_config,
        )
        (amount,) = extractor.extract_amounts_of_money(["Total CHF 12.50 (€ 13,00)"])
        assert amount.symbol == "CHF"
        assert amount.value == Decimal("12.50")

    def test_unparseable_candidate_discarded(self, default_config, number_parser):
        extractor = AmountExtractor(
            decimal_number_pattern=r"[\d,.]+",
            number_parser=number_parser,
            config=default_config,
        )
        amounts = extractor.extract_amounts_of_money(["1,2,3 €", "4,00 €"])
        assert {a.value for a in amounts} == {Decimal("4.00")}

    def test_invalid_pattern_rejected_at_construction(self, default_config):
        with pytest.raises(ConfigurationError):
            AmountExtractor(currency_symbol_pattern="(€", config=default_config)

    def test_defaults_taken_from_config(self, default_config):
        extractor = AmountExtractor(config=default_config)
        assert extractor.currency_symbol_pattern == default_config.currency_symbol_pattern
        assert extractor.decimal_number_pattern == default_config.decimal_number_pattern


# ---------------------------------------------------------------------------
# extract_percentages
# ---------------------------------------------------------------------------

class TestPercentages:
    def test_plain_percentage(self, amount_extractor):
        line = "MwSt. 19%"
        assert amount_extractor.extract_percentages([line]) == [
            AmountOfMoney(19.0, "%", "19%", line)
        ]

    def test_space_before_percent_sign(self, amount_extractor):
        (rate,) = amount_extractor.extract_percentages(["USt 7 %"])
        assert rate.value == Decimal("7")
        assert rate.raw_text == "7 %"

    def test_decimal_comma_rate(self, amount_extractor):
        (rate,) = amount_extractor.extract_percentages(["MwSt 5,5%"])
        assert rate.value == Decimal("5.5")

    def test_out_of_range_discarded(self, amount_extractor):
        assert amount_extractor.extract_percentages(["Rabatt 150%"]) == []

    def test_bounds_inclusive(self, amount_extractor):
        values = [p.value for p in amount_extractor.extract_percentages(["0% und 100%"])]
        assert values == [Decimal("0"), Decimal("100")]

    def test_order_of_occurrence(self, amount_extractor):
        rates = amount_extractor.extract_percentages(["7% ermäßigt", "19% regulär"])
        assert [r.value for r in rates] == [Decimal("7"), Decimal("19")]

    def test_repeated_percentage_reported_once(self, amount_extractor):
        rates = amount_extractor.extract_percentages(["19% MwSt", "enthält 19% MwSt"])
        assert len(rates) == 1

    def test_configured_range(self, number_parser):
        from belegdaten.config import Config

        config = Config(_env_file=None, min_percentage=5, max_percentage=25)  # type: ignore[call-arg]
        extractor = AmountExtractor(number_parser=number_parser, config=config)
        rates = extractor.extract_percentages(["2% Skonto, 19% MwSt, 30% Rabatt"])
        assert [r.value for r in rates] == [Decimal("19")]
