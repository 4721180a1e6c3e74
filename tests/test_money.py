"""Tests for exact decimal numbers and multi-currency amounts."""

import pytest

from ledgerit.domain.errors import ParseError
from ledgerit.domain.money import INT64_MAX, INT64_MIN, Amount, Number


class TestNumberParse:
    """Tests for Number.parse."""

    @pytest.mark.parametrize(
        "text, value, n_decimals",
        [
            ("12", 12, 0),
            ("-12", -12, 0),
            ("12.50", 125, 1),
            ("3,2", 32, 1),
            ("0.00400", 4, 3),
            ("-0.5", -5, 1),
            ("+7.25", 725, 2),
            ("100.000", 100, 0),
            ("0", 0, 0),
            ("-0.00", 0, 0),
        ],
    )
    def test_parse_valid(self, text, value, n_decimals):
        """Test parsing produces the canonical value/scale pair."""
        assert Number.parse(text) == Number(value, n_decimals)

    @pytest.mark.parametrize("text", ["", "abc", "1.2.3", "1,2,3", "1.2a", ".5", "1 000", "--1"])
    def test_parse_invalid(self, text):
        """Test malformed literals raise ParseError."""
        with pytest.raises(ParseError):
            Number.parse(text)

    def test_comma_wins_over_dot(self):
        """A comma is the separator whenever present, so '1.000,5' is rejected."""
        with pytest.raises(ParseError):
            Number.parse("1.000,5")

    @pytest.mark.parametrize(
        "text", [str(INT64_MAX + 1), "-99999999999999999999", "922337203685477580.8", "99999999999999999999,5"]
    )
    def test_parse_out_of_range(self, text):
        """Test literals outside 64 bits are parse errors."""
        with pytest.raises(ParseError):
            Number.parse(text)

    def test_parse_extremes(self):
        """Test the 64-bit limits themselves parse."""
        assert Number.parse(str(INT64_MAX)) == Number(INT64_MAX, 0)
        assert Number.parse(str(INT64_MIN)) == Number(INT64_MIN, 0)

    def test_add_overflow(self):
        """Test arithmetic past 64 bits raises OverflowError."""
        with pytest.raises(OverflowError):
            Number(INT64_MAX, 0) + Number(1, 0)


class TestNumberArithmetic:
    """Tests for Number arithmetic and formatting."""

    def test_add_aligns_scales(self):
        assert Number.parse("1.5") + Number.parse("0.25") == Number(175, 2)

    def test_add_canonicalizes(self):
        assert Number.parse("0.5") + Number.parse("0.5") == Number(1, 0)

    def test_sub_and_neg(self):
        assert Number.parse("10") - Number.parse("2.5") == Number(75, 1)
        assert -Number(5, 1) == Number(-5, 1)

    def test_structural_equality(self):
        """Numbers built directly keep their scale."""
        assert Number(10, 1) != Number(1, 0)
        assert Number.canonical(10, 1) == Number(1, 0)

    def test_negative_scale_rejected(self):
        with pytest.raises(ValueError):
            Number(1, -1)

    @pytest.mark.parametrize(
        "number, expected",
        [
            (Number(0, 0), "0.00"),
            (Number(125, 1), "12.50"),
            (Number(-123450, 2), "-1,234.50"),
            (Number(4, 3), "0.004"),
            (Number(-5, 1), "-0.50"),
            (Number(1000000, 0), "1,000,000.00"),
        ],
    )
    def test_str(self, number, expected):
        assert str(number) == expected


class TestAmount:
    """Tests for Amount."""

    def test_parse_single_currency(self):
        amount = Amount.parse("12.50 EUR")
        assert amount.currencies() == ["EUR"]
        assert amount.in_currency("EUR") == Number(125, 1)

    def test_parse_multiple_currencies(self):
        amount = Amount.parse("-132 SEK, 15.3 USD")
        assert amount.items() == [("SEK", Number(-132, 0)), ("USD", Number(153, 1))]

    def test_parse_drops_zero_entries(self):
        amount = Amount.parse("0 EUR, 5 SEK")
        assert "EUR" not in amount
        assert amount == Amount.parse("5 SEK")

    def test_parse_all_zero_is_zero(self):
        assert Amount.parse("0.00 EUR").is_zero()

    @pytest.mark.parametrize(
        "text",
        ["", "12", "EUR", "12 EUR SEK", "12  EUR", "1 EUR,2 SEK", "x EUR", "1 EUR, 2 EUR", "0 EUR, 0 EUR"],
    )
    def test_parse_invalid(self, text):
        with pytest.raises(ParseError):
            Amount.parse(text)

    def test_in_currency_missing_is_zero(self):
        assert Amount.parse("5 EUR").in_currency("SEK") == Number()

    def test_add_merges_currencies(self):
        total = Amount.parse("5 EUR") + Amount.parse("3 SEK, 2.5 EUR")
        assert total == Amount.parse("7.5 EUR, 3 SEK")

    def test_add_prunes_zeros(self):
        total = Amount.parse("5 EUR, 1 SEK") + Amount.parse("-5 EUR")
        assert total.currencies() == ["SEK"]

    def test_sub_to_zero(self):
        amount = Amount.parse("5 EUR, 1 SEK")
        assert (amount - amount).is_zero()
        assert not (amount - amount)

    def test_neg(self):
        assert -Amount.parse("5 EUR, -1 SEK") == Amount.parse("-5 EUR, 1 SEK")

    def test_equality_ignores_construction_order(self):
        a = Amount({"EUR": Number(1, 0), "SEK": Number(2, 0)})
        b = Amount({"SEK": Number(2, 0), "EUR": Number(1, 0)})
        assert a == b
        assert hash(a) == hash(b)

    def test_constructor_prunes_zero(self):
        assert Amount({"EUR": Number(0, 2)}) == Amount()

    def test_str(self):
        assert str(Amount.parse("800 EUR, -1200 SEK")) == "800.00 EUR, -1,200.00 SEK"
        assert str(Amount()) == "0.00"

    def test_iteration_sorted(self):
        amount = Amount.parse("1 USD, 2 EUR, 3 SEK")
        assert list(amount) == ["EUR", "SEK", "USD"]
        assert len(amount) == 3
