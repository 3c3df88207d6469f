"""
Decimal Utilities
admission/scoring/utils.py

Precision-safe decimal math for scoring calculations.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

Number = Union[int, float, str, Decimal]

CONTRIBUTION_PLACES = Decimal("0.0001")
SCORE_PLACES = Decimal("0.01")


def quantize(value: Decimal, exp: Decimal = SCORE_PLACES) -> Decimal:
    """Round half-up to the given exponent."""
    return value.quantize(exp, rounding=ROUND_HALF_UP)


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    """Sum Decimals starting from Decimal('0') so empty input stays a Decimal."""
    return sum(values, Decimal("0"))
