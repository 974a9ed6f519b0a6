"""Tests for voltage parsing and formatting."""

from decimal import Decimal
from fractions import Fraction

import pytest

from power_domains.units import (
    UnitValue,
    format_unit_value,
    is_number,
    parse_unit_value,
    parse_voltage,
)


class TestParseUnitValue:
    """Tests for parse_unit_value."""

    @pytest.mark.parametrize(
        "text,value,unit",
        [
            ("5V", 5.0, "V"),
            ("1.8", 1.8, ""),
            ("950mV", 0.95, "V"),
            ("-0.3V", -0.3, "V"),
            ("3.3 volts", 3.3, "V"),
            ("500mA", 0.5, "A"),
            ("2W", 2.0, "W"),
        ],
    )
    def test_parses(self, text, value, unit):
        parsed = parse_unit_value(text)
        assert parsed.value == pytest.approx(value)
        assert parsed.unit == unit

    def test_prefix_recorded(self):
        parsed = parse_unit_value("950mV")
        assert parsed.prefix == "m"
        assert str(parsed) == "950mV"

    def test_prefix_rounding(self):
        assert parse_unit_value("1100mV").value == 1.1

    def test_unknown_unit(self):
        with pytest.raises(ValueError, match="Unknown unit"):
            parse_unit_value("3.3ohm")

    def test_garbage(self):
        with pytest.raises(ValueError, match="Cannot parse"):
            parse_unit_value("about 3 volts")

    def test_equality(self):
        assert parse_unit_value("1V") == parse_unit_value("1000mV")
        assert parse_unit_value("1V") != parse_unit_value("1A")
        assert parse_unit_value("1V") != 1.0
        assert isinstance(parse_unit_value("1V"), UnitValue)


class TestParseVoltage:
    """Tests for parse_voltage."""

    @pytest.mark.parametrize(
        "value,expected",
        [(1.1, 1.1), (0, 0.0), ("1.1V", 1.1), ("950mV", 0.95), ("1.2", 1.2)],
    )
    def test_accepts(self, value, expected):
        assert parse_voltage(value) == pytest.approx(expected)

    def test_returns_float(self):
        assert isinstance(parse_voltage(3), float)

    def test_decimal_and_fraction(self):
        assert parse_voltage(Decimal("1.1")) == 1.1
        assert parse_voltage(Fraction(9, 5)) == 1.8

    @pytest.mark.parametrize("value", ["500mA", True, None, [1.1], "fast"])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            parse_voltage(value)


class TestFormatUnitValue:
    """Tests for format_unit_value."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.95, "950mV"),
            (1.0, "1V"),
            (1.05, "1.05V"),
            (1.5, "1.5V"),
            (3.3, "3.3V"),
            (0, "0V"),
            (-0.3, "-300mV"),
            (1500.0, "1.5kV"),
        ],
    )
    def test_format(self, value, expected):
        assert format_unit_value(value, "V") == expected

    def test_precision(self):
        assert format_unit_value(1.2345, "V", precision=2) == "1.2V"
        assert format_unit_value(1.2345, "V", precision=5) == "1.2345V"

    def test_other_units(self):
        assert format_unit_value(0.5, "A") == "500mA"

    @pytest.mark.parametrize(
        "value,expected",
        [(float("inf"), "infV"), (float("-inf"), "-infV"), (float("nan"), "nanV")],
    )
    def test_non_finite(self, value, expected):
        assert format_unit_value(value, "V") == expected

    @pytest.mark.parametrize(
        "value,expected",
        [(0.9995, "1V"), (0.99949, "999mV"), (999.95, "1kV"), (-0.0009999, "-1mV")],
    )
    def test_rounding_into_next_prefix(self, value, expected):
        assert format_unit_value(value, "V") == expected

    def test_decimal_input(self):
        assert format_unit_value(Decimal("0.95"), "V") == "950mV"
        assert format_unit_value(Fraction(3, 2), "V") == "1.5V"


class TestIsNumber:
    @pytest.mark.parametrize("value", [1, 1.1, float("nan"), Decimal("1.1"), Fraction(11, 10)])
    def test_real_numbers(self, value):
        assert is_number(value)

    @pytest.mark.parametrize("value", [True, False, 1j, "1.1", None, [1.1]])
    def test_everything_else(self, value):
        assert not is_number(value)
