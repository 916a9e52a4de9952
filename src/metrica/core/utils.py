"""
metrica.core.utils
==================

Numeric and formatting helpers shared by dimension vectors and quantities.

Amounts are ``decimal.Decimal`` values evaluated in the ambient decimal
context; conversion factors are exact ``fractions.Fraction`` values and are
only turned into decimals when applied to an amount.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import TYPE_CHECKING, Iterable, Union

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from metrica.core.vector import VectorComponent

Number = Union[int, float, Decimal, Fraction]

PRODUCT_SEPARATOR = "⋅"


def to_decimal(value: "Number | str") -> Decimal:
    """Coerce a scalar into a finite ``Decimal``.

    Floats go through ``repr`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a valid amount")
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, int):
        d = Decimal(value)
    elif isinstance(value, float):
        d = Decimal(repr(value))
    elif isinstance(value, Fraction):
        d = Decimal(value.numerator) / Decimal(value.denominator)
    elif isinstance(value, str):
        try:
            d = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {value!r}") from None
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")

    if not d.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return d


def normalize_decimal(d: Decimal) -> Decimal:
    """Collapse representational noise: trailing zeros, ``-0`` and ``0E-7``."""
    if d.is_zero():
        return Decimal(0)
    return d.normalize()


def scale_decimal(amount: Decimal, factor: Fraction) -> Decimal:
    """Multiply a decimal amount by an exact rational factor."""
    if factor == 1:
        return amount
    if factor.denominator == 1:
        return amount * factor.numerator
    return amount * factor.numerator / factor.denominator


def fraction_to_decimal(f: Fraction) -> Decimal:
    return Decimal(f.numerator) / Decimal(f.denominator)


def format_decimal(d: Decimal) -> str:
    """Plain positional notation, never scientific."""
    return format(normalize_decimal(d), "f")


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _format_term(component: "VectorComponent", exponent: int) -> str:
    symbol = f"{component.prefix.abbreviation}{component.unit.abbreviation}"
    if exponent == 1:
        return symbol
    return f"{symbol}^{exponent}"


def format_components(components: Iterable["VectorComponent"]) -> str:
    """
    Render components as ``numerator/denominator``.

    Positive exponents form the numerator joined by "⋅"; negative ones form
    the denominator with their sign flipped. An empty numerator is "1".
    """
    numerator: list[str] = []
    denominator: list[str] = []
    for c in components:
        if c.exponent > 0:
            numerator.append(_format_term(c, c.exponent))
        elif c.exponent < 0:
            denominator.append(_format_term(c, -c.exponent))

    text = PRODUCT_SEPARATOR.join(numerator) if numerator else "1"
    if denominator:
        text = f"{text}/{PRODUCT_SEPARATOR.join(denominator)}"
    return text


__all__ = [
    "Number",
    "PRODUCT_SEPARATOR",
    "to_decimal",
    "normalize_decimal",
    "scale_decimal",
    "fraction_to_decimal",
    "format_decimal",
    "trunc_div",
    "format_components",
]
