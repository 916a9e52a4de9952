# tests/units/test_parser.py
from decimal import Decimal
from fractions import Fraction

import pytest

from metrica.core.unit import NO_PREFIX
from metrica.errors import UnitParseError
from metrica.units.catalog import GRAM, METER, SECOND
from metrica.units.parser import (
    _compile_unit_expr,
    _UnitExprParser,
    parse_unit_expr,
    split_quantity,
    try_parse_unit_expr,
)
from metrica.units.prefixes import KILO


# --------------------------
# Parsing-only unit tests
# --------------------------

def test_parse_simple_name():
    assert _UnitExprParser("m").parse() == (("m", 1, 0),)

def test_parse_numerator_and_denominator():
    plan = _UnitExprParser("kg*m/s^2").parse()
    assert plan == (("kg", 1, 0), ("m", 1, 0), ("s", -2, 1))

def test_parse_signed_exponents():
    assert _UnitExprParser("m^+3").parse() == (("m", 3, 0),)
    assert _UnitExprParser("s^-2").parse() == (("s", -2, 0),)
    # a negative exponent in the denominator flips back to positive
    assert _UnitExprParser("1/s^-1").parse() == (("s", 1, 1),)

def test_parse_ignores_whitespace():
    assert _UnitExprParser("  kg *  m  /  s ^ 2 ").parse() == (
        ("kg", 1, 0), ("m", 1, 0), ("s", -2, 1),
    )

@pytest.mark.parametrize("sep", ["*", "⋅", "·"])
def test_parse_accepts_all_separators(sep):
    assert _UnitExprParser(f"N{sep}m").parse() == (("N", 1, 0), ("m", 1, 0))

@pytest.mark.parametrize("text", ["", "   ", "1"])
def test_parse_dimensionless(text):
    assert _UnitExprParser(text).parse() == ()

def test_parse_reciprocal():
    assert _UnitExprParser("1/s").parse() == (("s", -1, 1),)

@pytest.mark.parametrize(
    "text",
    ["m/s/s", "m^2^3", "m^x", "m^1.5", "m^", "/s", "m/", "m*", "*m", "m**2"],
)
def test_parse_malformed_raises(text):
    with pytest.raises(ValueError):
        _UnitExprParser(text).parse()


# --------------------------
# Plan cache
# --------------------------

def test_compile_unit_expr_is_cached():
    _compile_unit_expr.cache_clear()
    first = _compile_unit_expr("kg*m/s^2")
    second = _compile_unit_expr("kg*m/s^2")
    assert first is second
    assert _compile_unit_expr.cache_info().hits == 1


# --------------------------
# Evaluation against a registry
# --------------------------

def test_parse_unit_expr_resolves_prefixes(ureg):
    (c,) = parse_unit_expr("km", ureg)
    assert c.prefix is KILO
    assert c.unit is METER
    assert c.exponent == 1

def test_parse_unit_expr_uses_default_registry():
    comps = parse_unit_expr("g/s^2")
    assert [(c.prefix, c.unit, c.exponent) for c in comps] == [
        (NO_PREFIX, GRAM, 1),
        (NO_PREFIX, SECOND, -2),
    ]

def test_parse_unit_expr_keeps_derived_units(ureg):
    (c,) = parse_unit_expr("kN", ureg)
    assert c.unit is ureg.resolve("N")
    assert c.prefix is KILO

def test_unknown_unit():
    with pytest.raises(UnitParseError, match="unknown unit 'furlong'"):
        parse_unit_expr("furlong/s")

def test_syntax_errors_become_unit_parse_errors():
    with pytest.raises(UnitParseError) as e:
        parse_unit_expr("m/s/s")
    assert e.value.text == "m/s/s"
    assert isinstance(e.value, ValueError)

def test_duplicate_dimension_in_one_group():
    with pytest.raises(UnitParseError):
        parse_unit_expr("g*lb")
    with pytest.raises(UnitParseError):
        parse_unit_expr("1/m*ft")

def test_same_dimension_across_groups_is_allowed():
    comps = parse_unit_expr("m/m")
    assert [c.exponent for c in comps] == [1, -1]

def test_parse_uses_the_given_registry(fresh_registry):
    from metrica.core.dimensions import TIME
    from metrica.core.unit import SimpleUnit

    fortnight = SimpleUnit("fortnight", "ftn", TIME, SECOND, Fraction(1, 1209600))
    fresh_registry.register_unit(fortnight)
    assert parse_unit_expr("ftn", fresh_registry)[0].unit is fortnight
    assert try_parse_unit_expr("ftn") is None

def test_try_parse_unit_expr():
    assert try_parse_unit_expr("m/s^2") is not None
    assert try_parse_unit_expr("m/s/s") is None
    assert try_parse_unit_expr("nope") is None


# --------------------------
# Quantity text
# --------------------------

def test_split_quantity():
    assert split_quantity("9.81 m/s^2") == (Decimal("9.81"), "m/s^2")
    assert split_quantity("  -3e2   kg * m ") == (Decimal("-3e2"), "kg * m")
    assert split_quantity("42") == (Decimal(42), "")

@pytest.mark.parametrize("text", ["", "   ", "abc m", "1.2.3 m", "nan m", "inf s"])
def test_split_quantity_rejects_bad_amounts(text):
    with pytest.raises(UnitParseError):
        split_quantity(text)

def test_split_quantity_requires_text():
    with pytest.raises(TypeError):
        split_quantity(5)
