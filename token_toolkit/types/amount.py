"""
Amount conversion between display amounts and integer base units

Works on the decimal string directly so no binary floating point is
involved. Fractional digits beyond the token precision are truncated,
never rounded up.
"""

import math
import re
from decimal import Decimal
from typing import Union

from ..errors import InvalidNumberFormat, AmountTooLarge


# SPL token amounts are u64
U64_MAX = 2 ** 64 - 1

# Largest precision where one whole token still fits in a u64
MAX_DECIMALS = 19

SOL_DECIMALS = 9

_AMOUNT_RE = re.compile(r"^[0-9]*(?:\.[0-9]*)?$")

DisplayAmount = Union[str, int, float, Decimal]


def _check_decimals(decimals: int) -> int:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidNumberFormat.bad_decimals(decimals)
    return decimals


def _normalize(display: DisplayAmount) -> str:
    """Render input as a plain positional string"""
    if display is None or isinstance(display, bool):
        raise InvalidNumberFormat.bad_amount(display)

    if isinstance(display, str):
        return display.replace(",", "").strip()

    if isinstance(display, float) and not math.isfinite(display):
        raise InvalidNumberFormat.bad_amount(display)

    if isinstance(display, (int, float, Decimal)):
        # str() of a float is its shortest round-trip repr; format 'f' avoids exponents
        value = Decimal(str(display)) if isinstance(display, float) else Decimal(display)
        if not value.is_finite():
            raise InvalidNumberFormat.bad_amount(display)
        return format(value, "f")

    raise InvalidNumberFormat.bad_amount(display)


def to_base_units(display: DisplayAmount, decimals: int) -> int:
    """
    Convert a display amount to integer base units

    Args:
        display: User-entered amount, e.g. "1,234.5" or 0.25
        decimals: Token precision

    Returns:
        Amount in the token's smallest unit

    Raises:
        InvalidNumberFormat: Input is not an unsigned decimal, or decimals is invalid
        AmountTooLarge: Result does not fit a u64

    Examples:
        to_base_units("1", 9)            -> 1_000_000_000
        to_base_units("1.23456789", 6)   -> 1_234_567
    """
    decimals = _check_decimals(decimals)
    cleaned = _normalize(display)

    if not _AMOUNT_RE.match(cleaned):
        raise InvalidNumberFormat.bad_amount(display)

    integer_part, _, fraction_part = cleaned.partition(".")
    fraction_part = (fraction_part + "0" * decimals)[:decimals]

    digits = (integer_part + fraction_part).lstrip("0") or "0"
    amount = int(digits)

    if amount > U64_MAX:
        raise AmountTooLarge.exceeds(amount, U64_MAX)
    return amount


def from_base_units(amount: int, decimals: int) -> str:
    """
    Format base units as a minimal decimal string

    Trailing fractional zeros and a bare decimal point are stripped,
    so whole amounts render without a fractional part.

    Examples:
        from_base_units(1_500_000_000, 9) -> "1.5"
        from_base_units(2_000_000, 6)     -> "2"
    """
    decimals = _check_decimals(decimals)
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidNumberFormat.bad_amount(amount)

    whole, fraction = divmod(amount, 10 ** decimals)
    if decimals == 0:
        return str(whole)

    rendered = f"{whole}.{fraction:0{decimals}d}"
    return rendered.rstrip("0").rstrip(".")


def lamports_to_sol(lamports: int) -> str:
    """Format lamports as SOL"""
    return from_base_units(lamports, SOL_DECIMALS)
