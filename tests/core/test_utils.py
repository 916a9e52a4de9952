from decimal import Decimal
from fractions import Fraction

import pytest

from metrica.core.unit import NO_PREFIX
from metrica.core.utils import (
    format_components,
    format_decimal,
    normalize_decimal,
    scale_decimal,
    to_decimal,
    trunc_div,
)
from metrica.core.vector import VectorComponent
from metrica.units.catalog import METER, SECOND
from metrica.units.prefixes import KILO


@pytest.mark.parametrize("a, b, expected", [(5, 2, 2), (-5, 2, -2), (5, -2, -2), (-5, -2, 2), (1, 2, 0), (-1, 2, 0)])
def test_trunc_div_rounds_toward_zero(a, b, expected):
    assert trunc_div(a, b) == expected

def test_to_decimal_variants():
    assert to_decimal(3) == Decimal(3)
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(Fraction(1, 4)) == Decimal("0.25")
    assert to_decimal(" 2.50 ") == Decimal("2.50")

@pytest.mark.parametrize("bad", ["abc", "NaN", "Infinity", float("inf")])
def test_to_decimal_rejects_non_finite_and_garbage(bad):
    with pytest.raises(ValueError):
        to_decimal(bad)

def test_to_decimal_rejects_bool_and_objects():
    with pytest.raises(TypeError):
        to_decimal(True)
    with pytest.raises(TypeError):
        to_decimal(object())

def test_normalize_decimal():
    assert str(normalize_decimal(Decimal("56.000"))) == "56"
    assert str(normalize_decimal(Decimal("-0.000"))) == "0"
    assert str(normalize_decimal(Decimal("0E-7"))) == "0"

def test_format_decimal_never_uses_exponents():
    assert format_decimal(Decimal("1E+3")) == "1000"
    assert format_decimal(Decimal("1.2300E-5")) == "0.0000123"

def test_scale_decimal_exact_fraction():
    assert scale_decimal(Decimal("4.557"), Fraction(3429, 3125)) == Decimal("5.00030496")
    assert scale_decimal(Decimal(2), Fraction(1)) == 2

def test_format_components():
    comps = [
        VectorComponent(KILO, METER, 2),
        VectorComponent(NO_PREFIX, SECOND, -1),
    ]
    assert format_components(comps) == "km^2/s"
    assert format_components([VectorComponent(NO_PREFIX, SECOND, -2)]) == "1/s^2"
    assert format_components([]) == "1"
