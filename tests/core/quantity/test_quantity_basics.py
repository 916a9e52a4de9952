from decimal import Decimal

import pytest

from metrica.core.quantity import Quantity, parse_quantity, try_parse_quantity
from metrica.errors import UnitParseError


# -------------------------------
# Construction & parsing
# -------------------------------

def test_parse_amount_and_units():
    q = Quantity("9.81 m/s^2")
    assert q.amount == Decimal("9.81")
    assert q.units == "m/s^2"

def test_amount_and_units_given_separately():
    q = Quantity(5, "m")
    assert str(q) == "5 m"
    assert Quantity("2.5", "km").amount == Decimal("2.5")

def test_dimensionless():
    q = Quantity("5")
    assert q.units == ""
    assert q.is_dimensionless
    assert str(q) == "5"
    assert str(Quantity(3)) == "3"

def test_float_amount_uses_shortest_repr():
    assert Quantity(0.1, "m").amount == Decimal("0.1")

@pytest.mark.parametrize("text", ["56 g", "1 kg⋅m/s^2", "3 m^2/s", "12 N", "0.5 kN⋅m", "7 1/s"])
def test_round_trip(text):
    q = Quantity(text)
    assert str(q) == text
    assert str(Quantity(str(q))) == text

def test_output_normalizes_separators_and_exponents():
    assert str(Quantity("2 kg * m / s^2")) == "2 kg⋅m/s^2"
    assert str(Quantity("4 m^1")) == "4 m"

def test_trailing_zeros_are_normalized():
    assert str(Quantity("56.000 g")) == "56 g"
    assert str(Quantity("1e3 m")) == "1000 m"
    assert str(Quantity("-0.0 m")) == "0 m"

def test_parse_and_try_parse():
    assert Quantity.parse("56 g") == Quantity("56 g")
    assert parse_quantity("56 g") == Quantity("56 g")
    assert try_parse_quantity("56 g") == Quantity("56 g")

@pytest.mark.parametrize("text", ["g", "56 notreal", "", "5 g*lb", "5 m/s/s", "5 m^x", "NaN m", "5 /s"])
def test_invalid_text(text):
    assert Quantity.try_parse(text) is None
    with pytest.raises(UnitParseError):
        Quantity.parse(text)

def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        Quantity("56 notreal")

def test_micro_spellings():
    assert Quantity("3 us") == Quantity("3 µs")
    assert Quantity("3 μs") == Quantity("3 µs")


# -------------------------------
# Accessors
# -------------------------------

def test_base_representation_keeps_derived_units_aside():
    q = Quantity("5 kN")
    assert q.base_amount == Decimal(5000)
    assert str(q.base_vector) == "kg⋅m/s^2"
    assert [c.unit.abbreviation for c in q.derived_units] == ["N"]
    assert str(q) == "5 kN"

def test_derived_prefix_with_exponent():
    q = Quantity("2 kN^2")
    assert q.base_amount == Decimal(2000000)
    assert str(q) == "2 kN^2"

def test_is_congruent():
    assert Quantity("1 N").is_congruent(Quantity("3 kg*m/s^2"))
    assert not Quantity("1 N").is_congruent(Quantity("3 kg"))

def test_with_amount_keeps_display_units():
    q = Quantity("5 kN").with_amount(7)
    assert str(q) == "7 kN"
    assert q.base_amount == 7000

def test_copy_is_equal_but_distinct():
    q = Quantity("5 kN")
    c = q.copy()
    assert c == q and c is not q
    assert str(c) == "5 kN"

def test_quantities_are_unhashable():
    with pytest.raises(TypeError):
        hash(Quantity("1 m"))


# -------------------------------
# Formatting
# -------------------------------

def test_repr_matches_display():
    assert repr(Quantity("56 g")) == "56 g"

def test_format_spec_applies_to_amount():
    assert f"{Quantity('3.14159 m'):.2f}" == "3.14 m"
    assert f"{Quantity('3.14159'):.1f}" == "3.1"
    assert f"{Quantity('3 m')}" == "3 m"
