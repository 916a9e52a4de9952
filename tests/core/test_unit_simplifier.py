from fractions import Fraction

import pytest

from metrica.core.unit import NO_PREFIX
from metrica.core.unit_simplifier import apply_derived_units, merge_derived_units
from metrica.core.vector import DimensionVector, VectorComponent
from metrica.units.prefixes import KILO

V = DimensionVector.parse


@pytest.fixture
def derived(ureg):
    def _get(abbrev, prefix=NO_PREFIX, exponent=1):
        return VectorComponent(prefix, ureg.resolve(abbrev), exponent)
    return _get


def _render(components):
    from metrica.core.utils import format_components
    return format_components(components)


def test_single_derived_unit_is_extracted(derived):
    display, factor = apply_derived_units(V("kg*m/s^2"), [derived("N")])
    assert _render(display) == "N"
    assert factor == 1

def test_prefixed_derived_unit_scales_the_amount(derived):
    display, factor = apply_derived_units(V("kg*m/s^2"), [derived("N", KILO)])
    assert _render(display) == "kN"
    assert factor == Fraction(1, 1000)

def test_two_derived_units_in_parse_order(derived):
    n = derived("N").unit
    v = derived("V").unit
    base, _ = n.base_vector.multiply(v.base_vector)
    display, factor = apply_derived_units(base, [derived("N"), derived("V")])
    assert _render(display) == "N⋅V"
    assert factor == 1

def test_fit_takes_every_whole_copy(derived):
    # kg^2*m^2/s^4 holds two newtons; one intended N is enough to pull both
    display, factor = apply_derived_units(V("kg^2*m^2/s^4"), [derived("N")])
    assert _render(display) == "N^2"
    assert factor == 1

def test_fit_is_the_smallest_ratio(derived):
    display, _ = apply_derived_units(V("kg^2*m^3/s^5*A"), [derived("N"), derived("V")])
    assert _render(display) == "N^2⋅m/s⋅A"

def test_whole_multiples_are_extracted(derived):
    display, _ = apply_derived_units(V("kg^2*m^2/s^4"), [derived("N", exponent=2)])
    assert _render(display) == "N^2"

def test_mixed_signs_skip_the_derived_unit(derived):
    base = V("kg*m*s^2")
    display, factor = apply_derived_units(base, [derived("N")])
    assert _render(display) == "kg⋅m⋅s^2"
    assert factor == 1

def test_missing_component_skips_the_derived_unit(derived):
    display, _ = apply_derived_units(V("kg/s^2"), [derived("N")])
    assert _render(display) == "kg/s^2"

def test_different_prefix_does_not_match(derived):
    # N is defined over kg; grams do not count as a match
    display, _ = apply_derived_units(V("g*m/s^2"), [derived("N")])
    assert _render(display) == "g⋅m/s^2"

def test_inverse_case_records_negative_exponent(derived):
    display, factor = apply_derived_units(V("s"), [derived("Hz")])
    assert _render(display) == "1/Hz"
    assert factor == 1

def test_leftover_simple_units_are_appended(derived):
    display, _ = apply_derived_units(V("kg*m^2/s^2"), [derived("N")])
    assert _render(display) == "N⋅m"

def test_no_intended_units_returns_base(derived):
    display, factor = apply_derived_units(V("m/s"), [])
    assert _render(display) == "m/s"
    assert factor == 1


# -------------------------------
# Merging intended units
# -------------------------------

def test_merge_sums_exponents(derived):
    merged = merge_derived_units([derived("N")], [derived("N"), derived("V")])
    assert [(c.unit.abbreviation, c.exponent) for c in merged] == [("N", 2), ("V", 1)]

def test_merge_drops_cancelled_units(derived):
    assert merge_derived_units([derived("N")], [derived("N", exponent=-1)]) == ()

def test_merge_keeps_first_prefix(derived):
    (c,) = merge_derived_units([derived("N", KILO)], [derived("N")])
    assert c.prefix is KILO and c.exponent == 2
