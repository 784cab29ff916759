"""
Amount Conversion Unit Tests

Tests display <-> base-unit conversion without network dependencies.
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from token_toolkit.types.amount import (
    to_base_units,
    from_base_units,
    lamports_to_sol,
    U64_MAX,
)
from token_toolkit.errors import InvalidNumberFormat, AmountTooLarge


class TestToBaseUnits:
    """Tests for to_base_units"""

    def test_zero(self):
        assert to_base_units("0", 9) == 0

    def test_one_whole_token(self):
        assert to_base_units("1", 9) == 1_000_000_000

    def test_truncates_excess_fraction(self):
        """Extra fractional digits are dropped, never rounded"""
        assert to_base_units("1.23456789", 6) == 1_234_567
        assert to_base_units("0.9999999", 6) == 999_999

    def test_pads_short_fraction(self):
        assert to_base_units("1.5", 9) == 1_500_000_000
        assert to_base_units(".5", 2) == 50
        assert to_base_units("5.", 2) == 500

    def test_zero_decimals(self):
        assert to_base_units("42.9", 0) == 42

    def test_strips_grouping_and_whitespace(self):
        assert to_base_units("  1,234.5 ", 2) == 123_450

    def test_empty_is_zero(self):
        assert to_base_units("", 9) == 0
        assert to_base_units(".", 9) == 0

    def test_numeric_inputs(self):
        assert to_base_units(2, 6) == 2_000_000
        assert to_base_units(0.1, 9) == 100_000_000
        assert to_base_units(Decimal("3.14159"), 3) == 3_141

    def test_small_float_is_not_scientific(self):
        """1e-07 must be read positionally, not rejected"""
        assert to_base_units(1e-7, 9) == 100

    def test_rejects_letters(self):
        with pytest.raises(InvalidNumberFormat):
            to_base_units("abc", 9)

    def test_rejects_multiple_points(self):
        with pytest.raises(InvalidNumberFormat):
            to_base_units("1.2.3", 9)

    def test_rejects_negative(self):
        """Negative amounts are an explicit error, not clamped"""
        with pytest.raises(InvalidNumberFormat):
            to_base_units("-1", 9)
        with pytest.raises(InvalidNumberFormat):
            to_base_units(-1, 9)

    def test_rejects_non_finite(self):
        with pytest.raises(InvalidNumberFormat):
            to_base_units(float("inf"), 9)
        with pytest.raises(InvalidNumberFormat):
            to_base_units(float("nan"), 9)

    def test_rejects_non_ascii_digits(self):
        with pytest.raises(InvalidNumberFormat):
            to_base_units("١٢٣", 0)

    def test_rejects_bool_and_none(self):
        with pytest.raises(InvalidNumberFormat):
            to_base_units(True, 9)
        with pytest.raises(InvalidNumberFormat):
            to_base_units(None, 9)

    def test_rejects_bad_decimals(self):
        with pytest.raises(InvalidNumberFormat):
            to_base_units("1", -1)
        with pytest.raises(InvalidNumberFormat):
            to_base_units("1", 1.5)

    def test_u64_ceiling(self):
        assert to_base_units(str(U64_MAX), 0) == U64_MAX
        with pytest.raises(AmountTooLarge) as exc_info:
            to_base_units(str(U64_MAX + 1), 0)
        assert exc_info.value.limit == U64_MAX

    def test_too_large_after_scaling(self):
        with pytest.raises(AmountTooLarge):
            to_base_units("18446744074", 9)

    def test_leading_zeros(self):
        assert to_base_units("000.001", 3) == 1


class TestFromBaseUnits:
    """Tests for from_base_units"""

    def test_whole_amount_has_no_fraction(self):
        assert from_base_units(2_000_000, 6) == "2"

    def test_strips_trailing_zeros(self):
        assert from_base_units(1_500_000_000, 9) == "1.5"

    def test_small_amount(self):
        assert from_base_units(1, 9) == "0.000000001"

    def test_zero(self):
        assert from_base_units(0, 9) == "0"

    def test_zero_decimals(self):
        assert from_base_units(123, 0) == "123"

    def test_rejects_negative(self):
        with pytest.raises(InvalidNumberFormat):
            from_base_units(-1, 9)

    def test_lamports_to_sol(self):
        assert lamports_to_sol(1_000_000_000) == "1"
        assert lamports_to_sol(2_500_000) == "0.0025"


class TestTruncationProperty:
    """from_base_units(to_base_units(s, d), d) is s truncated to d digits"""

    @pytest.mark.parametrize("display,decimals,expected", [
        ("1.23456789", 6, "1.234567"),
        ("0.10", 9, "0.1"),
        ("100", 2, "100"),
        ("7.999", 0, "7"),
        ("0.0000001", 6, "0"),
        ("1,000.050", 3, "1000.05"),
    ])
    def test_truncated_display(self, display, decimals, expected):
        assert from_base_units(to_base_units(display, decimals), decimals) == expected
