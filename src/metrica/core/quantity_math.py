"""
metrica.core.quantity_math
==========================

Math helpers over quantities that enforce dimensional preconditions.

Trigonometric functions take an angle in any angle unit and return a
dimensionless quantity; the inverse functions take a dimensionless quantity
and return radians. Rounding helpers work on the displayed amount and keep the
displayed units.
"""

from __future__ import annotations

import math
from decimal import ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_EVEN, Decimal
from typing import Callable

from metrica.core.quantity import Quantity
from metrica.errors import DimensionMismatchError, IncongruentUnitsError
from metrica.units.catalog import PI_TEXT

# dimensionless
PI = Quantity(PI_TEXT)
E = Quantity("2.7182818284590452353602874713526624977572470937000")


def _to_decimal(x: float) -> Decimal:
    return Decimal(repr(x))


def _radians(q: Quantity, fn: str) -> float:
    rad = Quantity(1, "rad", registry=q.registry)
    if not q.is_congruent(rad):
        raise DimensionMismatchError(f"{fn}() needs an angle, got '{q.units or '1'}'")
    return float(q.convert("rad").amount)


def _dimensionless(q: Quantity, fn: str) -> float:
    if not q.is_dimensionless:
        raise DimensionMismatchError(f"{fn}() needs a dimensionless quantity, got '{q.units}'")
    return float(q.amount)


def _trig(fn: Callable[[float], float], name: str) -> Callable[[Quantity], Quantity]:
    def wrapper(q: Quantity) -> Quantity:
        return Quantity(_to_decimal(fn(_radians(q, name))), registry=q.registry)

    wrapper.__name__ = name
    wrapper.__doc__ = f"{name} of an angle; returns a dimensionless quantity."
    return wrapper


def _inverse_trig(fn: Callable[[float], float], name: str) -> Callable[[Quantity], Quantity]:
    def wrapper(q: Quantity) -> Quantity:
        return Quantity(_to_decimal(fn(_dimensionless(q, name))), "rad", registry=q.registry)

    wrapper.__name__ = name
    wrapper.__doc__ = f"{name} of a dimensionless quantity; returns radians."
    return wrapper


sin = _trig(math.sin, "sin")
cos = _trig(math.cos, "cos")
tan = _trig(math.tan, "tan")
sinh = _trig(math.sinh, "sinh")
cosh = _trig(math.cosh, "cosh")
tanh = _trig(math.tanh, "tanh")

asin = _inverse_trig(math.asin, "asin")
acos = _inverse_trig(math.acos, "acos")
atan = _inverse_trig(math.atan, "atan")


def abs_(q: Quantity) -> Quantity:
    return abs(q)


def sign(q: Quantity) -> int:
    """-1, 0 or 1 according to the sign of the amount."""
    return (q.amount > 0) - (q.amount < 0)


def ceiling(q: Quantity) -> Quantity:
    return q.with_amount(q.amount.to_integral_value(rounding=ROUND_CEILING))


def floor(q: Quantity) -> Quantity:
    return q.with_amount(q.amount.to_integral_value(rounding=ROUND_FLOOR))


def truncate(q: Quantity) -> Quantity:
    return q.with_amount(q.amount.to_integral_value(rounding=ROUND_DOWN))


def round_(q: Quantity, digits: int = 0, rounding: str = ROUND_HALF_EVEN) -> Quantity:
    """Round the displayed amount to ``digits`` places (banker's rounding by default)."""
    exponent = Decimal(1).scaleb(-digits)
    return q.with_amount(q.amount.quantize(exponent, rounding=rounding))


def pow_(q: Quantity, n: int) -> Quantity:
    return q.pow(n)


def _require_congruent(a: Quantity, b: Quantity, fn: str) -> None:
    if not a.is_congruent(b):
        raise IncongruentUnitsError(a.units or "1", b.units or "1", fn)


def min_(a: Quantity, b: Quantity) -> Quantity:
    """The smaller of two congruent quantities, in its own units; ``a`` on ties."""
    _require_congruent(a, b, "min")
    return a if a <= b else b


def max_(a: Quantity, b: Quantity) -> Quantity:
    """The larger of two congruent quantities, in its own units; ``a`` on ties."""
    _require_congruent(a, b, "max")
    return a if a >= b else b


__all__ = [
    "PI",
    "E",
    "sin",
    "cos",
    "tan",
    "sinh",
    "cosh",
    "tanh",
    "asin",
    "acos",
    "atan",
    "abs_",
    "sign",
    "ceiling",
    "floor",
    "truncate",
    "round_",
    "pow_",
    "min_",
    "max_",
]
