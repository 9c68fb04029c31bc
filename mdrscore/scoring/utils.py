"""Decimal and matching utilities for reproducible score arithmetic.

All MDR score calculations use Decimal arithmetic so that identical inputs
always produce identical, auditable outputs.
"""
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import List


def to_decimal(value: float, places: int = 4) -> Decimal:
    """Convert a number to Decimal with explicit precision and ROUND_HALF_UP rounding.

    Args:
        value: Numeric value to convert.
        places: Number of decimal places to quantize to.

    Returns:
        Decimal with the specified precision.
    """
    if isinstance(value, Decimal):
        return value.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP)
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places,
        rounding=ROUND_HALF_UP,
    )


def round_score(value: Decimal, places: int = 2) -> Decimal:
    """Round a Decimal half-up to ``places`` decimal places (2 for published scores)."""
    return value.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP)


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal(0),
    max_val: Decimal = Decimal(100),
) -> Decimal:
    """Clamp a Decimal value to [min_val, max_val].

    Args:
        value: Value to clamp.
        min_val: Lower bound (default 0).
        max_val: Upper bound (default 100).

    Returns:
        Clamped Decimal.
    """
    return max(min_val, min(max_val, value))


def weighted_mean(values: List[Decimal], weights: List[Decimal]) -> Decimal:
    """Calculate the weighted sum of Decimal values.

    Args:
        values: List of sub-scores.
        weights: Corresponding weights (should sum to 1.0).

    Returns:
        Weighted mean, quantized to 4 decimal places.

    Raises:
        ValueError: If lengths differ.
    """
    if len(values) != len(weights):
        raise ValueError("Values and weights must have the same length")
    if not values:
        return Decimal(0)
    total = sum(v * w for v, w in zip(values, weights))
    return total.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)


def contains_phrase(text: str, phrase: str) -> bool:
    """True if ``phrase`` occurs in ``text`` as whole words ("obe" is not in "robert")."""
    if not phrase:
        return False
    return re.search(rf"(?<!\w){re.escape(phrase)}(?!\w)", text) is not None
