"""Fixed-point helpers for converting raw chain units into display amounts.

All monetary values are handled as :class:`decimal.Decimal` and rendered as
plain decimal strings; binary floating point is never involved.
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from typing import Union

# Minimum number of significant digits used for intermediate arithmetic
MIN_PRECISION = 28

RawAmount = Union[int, str, Decimal]


def _parse(value: RawAmount, name: str) -> Decimal:
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"'{value}' is not a valid {name}")
    if not parsed.is_finite():
        raise ValueError(f"'{value}' is not a valid {name}")
    return parsed


def to_decimal(raw: RawAmount, decimals: int, display_precision: int = 6) -> str:
    """Convert a raw integer amount (wei, lamports, nanoTON...) to a decimal string.
    
    The result is truncated toward zero, never rounded.
    
    Args:
        raw: Raw amount as an integer or numeric string
        decimals: Decimal exponent of the unit (18 for ETH, 9 for SOL and TON)
        display_precision: Number of fractional digits to keep
        
    Returns:
        Plain decimal string, e.g. ``"1.500000"``
        
    Raises:
        ValueError: If the amount is not numeric or the exponents are negative
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    if display_precision < 0:
        raise ValueError(f"display_precision must be non-negative, got {display_precision}")
    
    amount = _parse(raw, "raw amount")
    
    with localcontext() as ctx:
        # Room for the whole integer part plus the displayed fraction
        ctx.prec = max(MIN_PRECISION, amount.adjusted() + 1 + display_precision + 2)
        ctx.rounding = ROUND_DOWN
        value = amount.scaleb(-decimals)
        quantum = Decimal(1).scaleb(-display_precision)
        truncated = value.quantize(quantum, rounding=ROUND_DOWN)
    
    text = format(truncated, "f")
    if text.startswith("-") and Decimal(text) == 0:
        text = text[1:]
    return text


def has_changed(previous: RawAmount, current: RawAmount, threshold: RawAmount = "0") -> bool:
    """Return True if ``current`` differs from ``previous`` by more than ``threshold``.
    
    A difference exactly equal to the threshold is not a change.
    """
    prev_value = _parse(previous, "balance")
    curr_value = _parse(current, "balance")
    limit = _parse(threshold, "threshold")
    
    with localcontext() as ctx:
        # Exact subtraction needs every digit between both magnitudes
        top = max(prev_value.adjusted(), curr_value.adjusted())
        bottom = min(prev_value.as_tuple().exponent, curr_value.as_tuple().exponent)
        ctx.prec = max(MIN_PRECISION, top - bottom + 2)
        diff = abs(curr_value - prev_value)
    return diff > limit
