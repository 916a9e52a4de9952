"""
metrica.units.catalog
=====================

Built-in dimensions, simple units and derived units.

Each simple unit is defined relative to a parent on the same dimension; the
scale is the amount of the unit per 1 of its parent. Derived units are built
once here over those simple units, so every registry shares the same
instances; each keeps the expression that spells its base vector.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

from metrica.core.dimensions import (
    AMOUNT,
    ANGLE,
    BASE_DIMENSIONS,
    CURRENT,
    DATA_STORAGE,
    LENGTH,
    LUMINOUS,
    MASS,
    TEMPERATURE,
    TIME,
)
from metrica.core.unit import NO_PREFIX, DerivedUnit, OffsetUnit, SimpleUnit
from metrica.core.vector import DimensionVector, VectorComponent
from metrica.units.prefixes import KILO

# 50 significant digits; the turn is the only irrational scale in the catalog.
PI_TEXT = "3.1415926535897932384626433832795028841971693993751"

DIMENSIONS = BASE_DIMENSIONS

# --- roots -------------------------------------------------------------------
METER = SimpleUnit("meter", "m", LENGTH)
GRAM = SimpleUnit("gram", "g", MASS)
SECOND = SimpleUnit("second", "s", TIME)
AMPERE = SimpleUnit("ampere", "A", CURRENT)
KELVIN = SimpleUnit("kelvin", "K", TEMPERATURE)
MOLE = SimpleUnit("mole", "mol", AMOUNT)
CANDELA = SimpleUnit("candela", "cd", LUMINOUS)
RADIAN = SimpleUnit("radian", "rad", ANGLE)
BYTE = SimpleUnit("byte", "B", DATA_STORAGE)

# --- temperature -------------------------------------------------------------
RANKINE = SimpleUnit("rankine", "R", TEMPERATURE, KELVIN, Fraction(9, 5))
CELSIUS = OffsetUnit("celsius", "C", TEMPERATURE, KELVIN, 1, offset=Decimal("273.15"))
FAHRENHEIT = OffsetUnit("fahrenheit", "F", TEMPERATURE, RANKINE, 1, offset=Decimal("459.67"))

# --- length ------------------------------------------------------------------
YARD = SimpleUnit("yard", "yd", LENGTH, METER, Fraction(1250, 381) / 3)
FOOT = SimpleUnit("foot", "ft", LENGTH, YARD, 3)
INCH = SimpleUnit("inch", "in", LENGTH, FOOT, 12)
THOU = SimpleUnit("thou", "mil", LENGTH, INCH, 1000)
MILE = SimpleUnit("mile", "mi", LENGTH, YARD, Fraction(1, 1760))
NAUTICAL_MILE = SimpleUnit("nautical mile", "NM", LENGTH, METER, Fraction(1, 1852))
SMOOT = SimpleUnit("smoot", "sm", LENGTH, METER, 1 / Fraction("1.702"))

# --- mass --------------------------------------------------------------------
POUND = SimpleUnit("pound", "lb", MASS, GRAM, 1 / Fraction("453.59237"))
OUNCE = SimpleUnit("ounce", "oz", MASS, POUND, 16)
SLUG = SimpleUnit("slug", "slug", MASS, POUND, 1 / Fraction("32.1740"))

# --- time --------------------------------------------------------------------
HOUR = SimpleUnit("hour", "hr", TIME, SECOND, Fraction(1, 3600))

# --- angle -------------------------------------------------------------------
TURN = SimpleUnit("turn", "turn", ANGLE, RADIAN, 1 / (2 * Fraction(PI_TEXT)))
DEGREE = SimpleUnit("degree", "deg", ANGLE, TURN, 360)
GRAD = SimpleUnit("grad", "grad", ANGLE, TURN, 400)
QUADRANT = SimpleUnit("quadrant", "quad", ANGLE, TURN, 4)

# --- data storage ------------------------------------------------------------
BIT = SimpleUnit("bit", "b", DATA_STORAGE, BYTE, 8)
NIBBLE = SimpleUnit("nibble", "nib", DATA_STORAGE, BYTE, 2)

# Parents always come before their children.
SIMPLE_UNITS: tuple[SimpleUnit, ...] = (
    METER, GRAM, SECOND, AMPERE, KELVIN, MOLE, CANDELA, RADIAN, BYTE,
    RANKINE, CELSIUS, FAHRENHEIT,
    YARD, FOOT, INCH, THOU, MILE, NAUTICAL_MILE, SMOOT,
    POUND, OUNCE, SLUG,
    HOUR,
    TURN, DEGREE, GRAD, QUADRANT,
    BIT, NIBBLE,
)


# --- derived -----------------------------------------------------------------
def _derived(name: str, abbreviation: str, expression: str, *terms) -> DerivedUnit:
    """Build a derived unit from ``(prefix, unit, exponent)`` terms spelled by ``expression``."""
    vector = DimensionVector.create(VectorComponent(p, u, e) for p, u, e in terms)
    return DerivedUnit(name, abbreviation, vector, expression)


_KG = (KILO, GRAM)

FEET_PER_SECOND = _derived(
    "feet per second", "fps", "ft / s",
    (NO_PREFIX, FOOT, 1), (NO_PREFIX, SECOND, -1),
)
HERTZ = _derived("hertz", "Hz", "1 / s", (NO_PREFIX, SECOND, -1))
KNOT = _derived(
    "knot", "kts", "NM / hr",
    (NO_PREFIX, NAUTICAL_MILE, 1), (NO_PREFIX, HOUR, -1),
)
MILES_PER_HOUR = _derived(
    "miles per hour", "mph", "mi / hr",
    (NO_PREFIX, MILE, 1), (NO_PREFIX, HOUR, -1),
)
NEWTON = _derived(
    "newton", "N", "kg * m / s^2",
    (*_KG, 1), (NO_PREFIX, METER, 1), (NO_PREFIX, SECOND, -2),
)
JOULE = _derived(
    "joule", "J", "kg * m^2 / s^2",
    (*_KG, 1), (NO_PREFIX, METER, 2), (NO_PREFIX, SECOND, -2),
)
WATT = _derived(
    "watt", "W", "kg * m^2 / s^3",
    (*_KG, 1), (NO_PREFIX, METER, 2), (NO_PREFIX, SECOND, -3),
)
VOLT = _derived(
    "volt", "V", "kg * m^2 / s^3 * A",
    (*_KG, 1), (NO_PREFIX, METER, 2), (NO_PREFIX, SECOND, -3), (NO_PREFIX, AMPERE, -1),
)
OHM = _derived(
    "ohm", "Ω", "kg * m^2 / s^3 * A^2",
    (*_KG, 1), (NO_PREFIX, METER, 2), (NO_PREFIX, SECOND, -3), (NO_PREFIX, AMPERE, -2),
)
PASCAL = _derived(
    "pascal", "Pa", "kg / m * s^2",
    (*_KG, 1), (NO_PREFIX, METER, -1), (NO_PREFIX, SECOND, -2),
)
POUND_FORCE = _derived(
    "pound-force", "lbf", "slug * ft / s^2",
    (NO_PREFIX, SLUG, 1), (NO_PREFIX, FOOT, 1), (NO_PREFIX, SECOND, -2),
)

DERIVED_UNITS: tuple[DerivedUnit, ...] = (
    FEET_PER_SECOND, HERTZ, KNOT, MILES_PER_HOUR,
    NEWTON, JOULE, WATT, VOLT, OHM, PASCAL, POUND_FORCE,
)

__all__ = ["DIMENSIONS", "SIMPLE_UNITS", "DERIVED_UNITS", "PI_TEXT"]
