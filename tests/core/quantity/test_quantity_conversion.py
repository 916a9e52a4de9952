from decimal import Decimal

import pytest

from metrica.core.quantity import Quantity, convert_amount
from metrica.errors import IncongruentUnitsError, UnitParseError


# -------------------------------
# Quantity.convert
# -------------------------------

def test_celsius_to_fahrenheit():
    q = Quantity("37 C").convert("F")
    assert q.amount == Decimal("98.6")
    assert q.units == "F"

def test_compound_offset_units_use_scale_only():
    q = Quantity("45 C/m").convert("F/ft")
    assert q.amount == Decimal("24.6888")
    assert q.units == "F/ft"

def test_prefix_change():
    assert str(Quantity("5 km").convert("m")) == "5000 m"
    assert str(Quantity("1500 g").to("kg")) == "1.5 kg"

def test_convert_into_derived_unit():
    q = Quantity("10 mph").convert("kts")
    assert abs(q.amount - Decimal("8.689762419")) < Decimal("1e-9")
    assert q.units == "kts"

def test_convert_out_of_derived_unit():
    assert str(Quantity("3 kN").convert("kg*m/s^2")) == "3000 kg⋅m/s^2"

def test_convert_between_derived_units():
    q = Quantity("1 lbf").convert("N")
    assert abs(q.amount - Decimal("4.4482")) < Decimal("0.0001")
    assert q.units == "N"

def test_convert_round_trip():
    back = Quantity("5 km").convert("mi").convert("km")
    assert back.units == "km"
    assert abs(back.amount - 5) < Decimal("1e-20")

def test_convert_incongruent():
    with pytest.raises(IncongruentUnitsError):
        Quantity("5 s").convert("g")

def test_convert_unparsable():
    with pytest.raises(UnitParseError):
        Quantity("5 s").convert("nope")

def test_angles():
    q = Quantity("180 deg").convert("turn")
    assert q.amount == Decimal("0.5")
    assert str(Quantity("1 quad").convert("deg")) == "90 deg"

def test_data_storage():
    assert str(Quantity("1 KiB").convert("b")) == "8192 b"
    assert str(Quantity("1 kB").convert("B")) == "1000 B"


# -------------------------------
# convert_amount
# -------------------------------

def test_convert_amount():
    assert convert_amount(5, "km", "m") == 5000
    assert convert_amount(Decimal(37), "C", "F") == Decimal("98.6")

@pytest.mark.parametrize("src, dst", [("", "m"), ("m", "  ")])
def test_convert_amount_blank_units(src, dst):
    with pytest.raises(ValueError):
        convert_amount(1, src, dst)

def test_convert_amount_single_problem_raised_directly():
    with pytest.raises(UnitParseError):
        convert_amount(1, "nope", "m")
    with pytest.raises(UnitParseError):
        convert_amount(1, "m", "nope")
    with pytest.raises(IncongruentUnitsError):
        convert_amount(1, "m", "s")

def test_convert_amount_aggregates_problems():
    with pytest.raises(ExceptionGroup) as info:
        convert_amount(1, "nope", "nada")
    assert len(info.value.exceptions) == 2
    assert all(isinstance(e, UnitParseError) for e in info.value.exceptions)
