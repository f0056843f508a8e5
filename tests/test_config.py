"""
tests/test_config.py
~~~~~~~~~~~~~~~~~~~~
Tests for belegdaten.config: validation, defaults and env-var overrides.
"""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from belegdaten.config import (
    DEFAULT_CURRENCY_SYMBOL_PATTERN, DEFAULT_DECIMAL_NUMBER_PATTERN, Config, cfg,
)


def make_config(**kwargs) -> Config:
    return Config(_env_file=None, **kwargs)  # type: ignore[call-arg]


class TestDefaults:
    def test_currency_pattern_default(self, default_config):
        assert default_config.currency_symbol_pattern == DEFAULT_CURRENCY_SYMBOL_PATTERN == r"\p{Sc}|EUR"

    def test_decimal_pattern_default(self, default_config):
        assert default_config.decimal_number_pattern == DEFAULT_DECIMAL_NUMBER_PATTERN

    def test_max_amounts_default(self, default_config):
        assert default_config.max_amounts == 50

    def test_percentage_range_default(self, default_config):
        assert (default_config.min_percentage, default_config.max_percentage) == (0.0, 100.0)

    def test_log_level_default(self, default_config):
        assert default_config.log_level == "WARNING"
        assert default_config.get_log_level() == logging.WARNING

    def test_module_singleton(self):
        assert isinstance(cfg, Config)


class TestValidation:
    def test_invalid_currency_pattern(self):
        with pytest.raises(ValidationError):
            make_config(currency_symbol_pattern="[€")

    def test_invalid_decimal_pattern(self):
        with pytest.raises(ValidationError):
            make_config(decimal_number_pattern="\\d+(")

    def test_unknown_unicode_category(self):
        with pytest.raises(ValidationError):
            make_config(currency_symbol_pattern=r"\p{Qq}")

    def test_pattern_validation_builds_no_character_class(self, mocker):
        expand = mocker.patch("belegdaten.patterns.unicode_category_class")
        config = make_config(currency_symbol_pattern=r"\p{Sm}|\p{Sc}|CHF")
        assert config.currency_symbol_pattern == r"\p{Sm}|\p{Sc}|CHF"
        expand.assert_not_called()

    def test_empty_pattern(self):
        with pytest.raises(ValidationError):
            make_config(currency_symbol_pattern="")

    def test_max_amounts_minimum(self):
        with pytest.raises(ValidationError):
            make_config(max_amounts=2)

    def test_max_amounts_maximum(self):
        with pytest.raises(ValidationError):
            make_config(max_amounts=5000)

    def test_max_percentage_above_100(self):
        with pytest.raises(ValidationError):
            make_config(max_percentage=150)

    def test_inverted_percentage_range(self):
        with pytest.raises(ValidationError):
            make_config(min_percentage=30, max_percentage=20)

    def test_log_level_normalised(self):
        assert make_config(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            make_config(log_level="chatty")


class TestEnvOverrides:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("BELEGDATEN_MAX_AMOUNTS", "12")
        assert make_config().max_amounts == 12

    def test_env_pattern(self, monkeypatch):
        monkeypatch.setenv("BELEGDATEN_CURRENCY_SYMBOL_PATTERN", "CHF|EUR")
        assert make_config().currency_symbol_pattern == "CHF|EUR"

    def test_case_insensitive_env(self, monkeypatch):
        monkeypatch.setenv("belegdaten_log_level", "info")
        assert make_config().log_level == "INFO"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("BELEGDATEN_MAX_AMOUNTS=7\n", encoding="utf-8")
        assert Config(_env_file=env_file).max_amounts == 7  # type: ignore[call-arg]
