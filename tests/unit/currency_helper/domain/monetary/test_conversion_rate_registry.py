from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from currency_helper.domain.monetary.conversion_rate_registry import ConversionRateRegistry


def test_set_rates_stores_forward_rates_as_decimal():
    registry = ConversionRateRegistry()
    registry.set_rates("EUR", {"USD": 1.11, "Bitcoin": "0.0047"})

    assert registry.lookup("EUR", "USD") == Decimal("1.11")
    assert registry.lookup("EUR", "Bitcoin") == Decimal("0.0047")
    assert registry.has_rate("EUR", "USD")


def test_set_rates_derives_reciprocal_rates():
    registry = ConversionRateRegistry()
    registry.set_rates("EUR", {"USD": 2, "GBP": 4})

    assert registry.lookup("USD", "EUR") == Decimal("0.5")
    assert registry.lookup("GBP", "EUR") == Decimal("0.25")


def test_lookup_of_unknown_pair_returns_none():
    registry = ConversionRateRegistry()
    registry.set_rates("EUR", {"USD": 2})

    assert registry.lookup("EUR", "RUR") is None
    assert registry.lookup("RUR", "EUR") is None
    assert not registry.has_rate("USD", "GBP")


def test_zero_rate_is_stored_without_reciprocal():
    registry = ConversionRateRegistry()
    registry.set_rates("EUR", {"XYZ": 0})

    assert registry.lookup("EUR", "XYZ") == Decimal("0")
    assert registry.lookup("XYZ", "EUR") is None
    assert "XYZ" not in registry.base_currencies


def test_set_rates_replaces_forward_table_of_base():
    registry = ConversionRateRegistry()
    registry.set_rates("EUR", {"USD": 2})
    registry.set_rates("EUR", {"GBP": 4})

    assert registry.rates_for("EUR") == {"GBP": Decimal("4")}
    # Reciprocal derived from the first call stays in place
    assert registry.lookup("USD", "EUR") == Decimal("0.5")


def test_reciprocal_rates_accumulate_in_destination_table():
    registry = ConversionRateRegistry()
    registry.set_rates("USD", {"JPY": 150})
    registry.set_rates("EUR", {"USD": 2})
    registry.set_rates("GBP", {"USD": 4})

    assert registry.rates_for("USD") == {
        "JPY": Decimal("150"),
        "EUR": Decimal("0.5"),
        "GBP": Decimal("0.25"),
    }


def test_configuring_destination_as_base_drops_its_reciprocals():
    registry = ConversionRateRegistry()
    registry.set_rates("EUR", {"USD": 2})
    registry.set_rates("USD", {"GBP": 4})

    assert registry.lookup("USD", "EUR") is None
    assert registry.lookup("EUR", "USD") == Decimal("2")


def test_set_rates_copies_the_given_mapping():
    registry = ConversionRateRegistry()
    rates = {"USD": 2}
    registry.set_rates("EUR", rates)

    rates["GBP"] = 4
    assert registry.lookup("EUR", "GBP") is None


def test_rates_for_returns_copy():
    registry = ConversionRateRegistry()
    registry.set_rates("EUR", {"USD": 2})

    registry.rates_for("EUR")["GBP"] = Decimal("4")
    assert registry.lookup("EUR", "GBP") is None
    assert registry.rates_for("RUR") == {}


def test_currencies_are_case_sensitive():
    registry = ConversionRateRegistry()
    registry.set_rates("EUR", {"USD": 2})

    assert registry.lookup("eur", "usd") is None


def test_negative_rate_raises():
    registry = ConversionRateRegistry()

    with pytest.raises(ValueError, match="negative"):
        registry.set_rates("EUR", {"USD": -1})

    assert registry.base_currencies == []


def test_unparseable_rate_raises():
    with pytest.raises(ValueError, match="cannot be converted to Decimal"):
        ConversionRateRegistry().set_rates("EUR", {"USD": "abc"})


def test_non_string_base_currency_raises():
    with pytest.raises(TypeError):
        ConversionRateRegistry().set_rates(978, {"USD": 2})


def test_clear_removes_all_rates():
    registry = ConversionRateRegistry()
    registry.set_rates("EUR", {"USD": 2})
    registry.clear()

    assert registry.base_currencies == []
    assert registry.lookup("EUR", "USD") is None


def test_set_rates_logs_configuration(caplog):
    registry = ConversionRateRegistry()

    with caplog.at_level(logging.INFO, logger="currency_helper.domain.monetary.conversion_rate_registry"):
        registry.set_rates("EUR", {"USD": 2, "GBP": 4})

    assert "Configured 2 conversion rate(s) for base currency 'EUR'" in caplog.text
