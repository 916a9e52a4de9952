"""
metrica.core.quantity
=====================

Defines the `Quantity` value type: an exact decimal amount attached to a
compound unit expression.

A quantity stores its amount against a *base vector* made only of simple
units (prefixes kept as written), plus the derived units the user asked for
(N, V, mph...). The display amount and unit string are recomputed from those
whenever a new quantity is built.

The module provides:
- Parsing of "<amount> <units>" text and explicit construction.
- Conversion between congruent unit expressions, offset aware for single
  units such as Celsius and Fahrenheit.
- Arithmetic (+, -, *, /, **) and ordering with automatic unit conversion.
- `convert_amount` for one-off numeric conversions between unit strings.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING, Iterable

from metrica.core.conversion import convert_with_offset
from metrica.core.unit import DerivedUnit
from metrica.core.unit_simplifier import apply_derived_units, merge_derived_units
from metrica.core.utils import (
    Number,
    format_components,
    format_decimal,
    normalize_decimal,
    scale_decimal,
    to_decimal,
)
from metrica.core.vector import DimensionVector, VectorComponent
from metrica.errors import DivideByZeroError, IncongruentUnitsError, UnitParseError
from metrica.units.parser import parse_unit_expr, split_quantity

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from metrica.units.registry import UnitsRegistry

_SCALAR_TYPES = (int, float, Decimal, Fraction)


def _is_scalar(value: object) -> bool:
    return isinstance(value, _SCALAR_TYPES) and not isinstance(value, bool)


def _get_default_registry() -> "UnitsRegistry":
    from metrica.units.registry import DEFAULT_REGISTRY

    return DEFAULT_REGISTRY


def _flatten(
    components: Iterable[VectorComponent],
) -> tuple[DimensionVector, Fraction, tuple[VectorComponent, ...]]:
    """
    Expand parsed components into a simple-unit base vector.

    Returns the base vector, the factor that turns an amount in the parsed
    units into an amount in the base vector, and the derived units that were
    named.
    """
    vector = DimensionVector.ZERO
    factor = Fraction(1)
    derived: list[VectorComponent] = []
    simple: list[VectorComponent] = []

    for c in components:
        if c.exponent == 0:
            continue
        if isinstance(c.unit, DerivedUnit):
            derived.append(c)
            factor *= c.prefix.scale ** c.exponent
            vector, f = vector.multiply(c.unit.base_vector.pow(c.exponent))
            factor *= f
        else:
            simple.append(c)

    for c in simple:
        vector, f = vector.multiply(DimensionVector((c,)))
        factor *= f

    return vector, factor, merge_derived_units(derived, ())


def _invert_derived(derived: Iterable[VectorComponent]) -> tuple[VectorComponent, ...]:
    return tuple(c.with_exponent(-c.exponent) for c in derived)


class Quantity:
    """
    A physical quantity: an exact decimal amount in a compound unit.

    Quantities are immutable; every operation returns a new instance.

    Parameters
    ----------
    amount : int | float | Decimal | Fraction | str
        Numeric amount. When ``units`` is omitted and ``amount`` is a string,
        the whole string is parsed as "<amount> <units>".
    units : str, optional
        Unit expression such as ``"m/s^2"`` or ``"kN*m"``.
    registry : UnitsRegistry, optional
        Registry used to resolve abbreviations. Defaults to
        ``metrica.units.registry.DEFAULT_REGISTRY``.

    Raises
    ------
    UnitParseError
        If the amount or the unit expression cannot be parsed.

    Examples
    --------
    >>> Quantity("9.81 m/s^2") * Quantity("1 hr")
    35316 m/s
    >>> Quantity(37, "C").convert("F")
    98.6 F
    """

    __slots__ = (
        "_base_amount",
        "_base_vector",
        "_derived",
        "_registry",
        "_amount",
        "_components",
        "_display_factor",
    )

    def __init__(
        self,
        amount: "Number | str" = 0,
        units: str | None = None,
        registry: "UnitsRegistry | None" = None,
    ) -> None:
        reg = registry if registry is not None else _get_default_registry()

        if units is None:
            if isinstance(amount, str):
                amount, units = split_quantity(amount)
            else:
                units = ""

        try:
            value = to_decimal(amount)
        except ValueError as e:
            raise UnitParseError(str(amount), str(e)) from None

        vector, factor, derived = _flatten(parse_unit_expr(units, reg))
        self._init_parts(scale_decimal(value, factor), vector, derived, reg)

    def _init_parts(
        self,
        base_amount: Decimal,
        base_vector: DimensionVector,
        derived: tuple[VectorComponent, ...],
        registry: "UnitsRegistry",
    ) -> None:
        self._base_amount = normalize_decimal(base_amount)
        self._base_vector = base_vector
        self._derived = derived
        self._registry = registry
        components, factor = apply_derived_units(base_vector, derived)
        self._components = components
        self._display_factor = factor
        self._amount = normalize_decimal(scale_decimal(self._base_amount, factor))

    @classmethod
    def _from_base(
        cls,
        base_amount: Decimal,
        base_vector: DimensionVector,
        derived: tuple[VectorComponent, ...],
        registry: "UnitsRegistry",
    ) -> Quantity:
        obj = cls.__new__(cls)
        obj._init_parts(base_amount, base_vector, derived, registry)
        return obj

    def _with_base(self, base_amount: Decimal) -> Quantity:
        return Quantity._from_base(base_amount, self._base_vector, self._derived, self._registry)

    def _dimensionless(self, value: "Number") -> Quantity:
        return Quantity._from_base(to_decimal(value), DimensionVector.ZERO, (), self._registry)

    # ------------------------------------------------------------------ parsing
    @classmethod
    def parse(cls, text: str, registry: "UnitsRegistry | None" = None) -> Quantity:
        """Parse "<amount> <units>"; raises ``UnitParseError`` on bad input."""
        amount, units = split_quantity(text)
        return cls(amount, units, registry)

    @classmethod
    def try_parse(cls, text: str, registry: "UnitsRegistry | None" = None) -> Quantity | None:
        """Parse "<amount> <units>"; returns ``None`` on bad input."""
        try:
            return cls.parse(text, registry)
        except UnitParseError:
            return None

    # --------------------------------------------------------------- accessors
    @property
    def amount(self) -> Decimal:
        """Amount expressed in the display units."""
        return self._amount

    @property
    def units(self) -> str:
        """Display unit string; empty for dimensionless quantities."""
        text = format_components(self._components)
        return "" if text == "1" else text

    @property
    def base_amount(self) -> Decimal:
        return self._base_amount

    @property
    def base_vector(self) -> DimensionVector:
        return self._base_vector

    @property
    def derived_units(self) -> tuple[VectorComponent, ...]:
        return self._derived

    @property
    def display_components(self) -> tuple[VectorComponent, ...]:
        return self._components

    @property
    def registry(self) -> "UnitsRegistry":
        return self._registry

    @property
    def is_dimensionless(self) -> bool:
        return self._base_vector.is_dimensionless

    def is_congruent(self, other: "Quantity | DimensionVector") -> bool:
        vector = other._base_vector if isinstance(other, Quantity) else other
        return self._base_vector.is_congruent(vector)

    def with_amount(self, amount: "Number") -> Quantity:
        """A quantity in the same display units with a different amount."""
        base = scale_decimal(to_decimal(amount), 1 / self._display_factor)
        return self._with_base(base)

    def copy(self) -> Quantity:
        return Quantity._from_base(
            self._base_amount, self._base_vector, self._derived, self._registry
        )

    # -------------------------------------------------------------- conversion
    def convert(self, units: str) -> Quantity:
        """
        Express this quantity in ``units``.

        Single units raised to the first power convert with their offsets
        (``"10 C"`` -> ``"50 F"``); anything compound converts by scale only.

        Raises
        ------
        UnitParseError
            If ``units`` cannot be parsed.
        IncongruentUnitsError
            If ``units`` does not measure the same dimensions.
        """
        target, _factor, derived = _flatten(parse_unit_expr(units, self._registry))
        if not self._base_vector.is_congruent(target):
            raise IncongruentUnitsError(self.units or "1", units, "convert")

        src = self._base_vector.single_unit()
        dst = target.single_unit()
        if src is not None and dst is not None:
            amount = convert_with_offset(
                self._base_amount, src.unit, src.prefix, dst.unit, dst.prefix
            )
        else:
            amount = scale_decimal(self._base_amount, target.convert(self._base_vector))
        return Quantity._from_base(amount, target, derived, self._registry)

    def to(self, units: str) -> Quantity:
        return self.convert(units)

    def _require_congruent(self, other: Quantity, operation: str) -> None:
        if not self._base_vector.is_congruent(other._base_vector):
            raise IncongruentUnitsError(self.units or "1", other.units or "1", operation)

    def _coerce(self, other: object) -> Quantity:
        if isinstance(other, Quantity):
            return other
        if _is_scalar(other):
            return self._dimensionless(other)
        raise TypeError(f"Expected a Quantity or a number, got {type(other).__name__}")

    def _express(self, other: Quantity) -> Decimal:
        """``other``'s base amount expressed in this quantity's base vector."""
        src = other._base_vector.single_unit()
        dst = self._base_vector.single_unit()
        if src is not None and dst is not None:
            return convert_with_offset(
                other._base_amount, src.unit, src.prefix, dst.unit, dst.prefix
            )
        return scale_decimal(other._base_amount, self._base_vector.convert(other._base_vector))

    # -------------------------------------------------------------- arithmetic
    def add(self, other: "Quantity | Number") -> Quantity:
        other = self._coerce(other)
        self._require_congruent(other, "add")
        f = self._base_vector.convert(other._base_vector)
        return self._with_base(self._base_amount + scale_decimal(other._base_amount, f))

    def subtract(self, other: "Quantity | Number") -> Quantity:
        other = self._coerce(other)
        self._require_congruent(other, "subtract")
        f = self._base_vector.convert(other._base_vector)
        return self._with_base(self._base_amount - scale_decimal(other._base_amount, f))

    def multiply(self, other: "Quantity | Number") -> Quantity:
        if not isinstance(other, Quantity):
            return self._with_base(self._base_amount * to_decimal(other))

        vector, f = self._base_vector.multiply(other._base_vector)
        amount = self._base_amount * scale_decimal(other._base_amount, f)
        derived = merge_derived_units(self._derived, other._derived)
        return Quantity._from_base(amount, vector, derived, self._registry)

    def divide(self, other: "Quantity | Number") -> Quantity:
        """
        Divide by another quantity or a scalar.

        Raises
        ------
        DivideByZeroError
            If the divisor's amount is exactly zero.
        """
        if not isinstance(other, Quantity):
            divisor = to_decimal(other)
            if divisor.is_zero():
                raise DivideByZeroError(f"Cannot divide {self} by zero")
            return self._with_base(self._base_amount / divisor)

        if other._base_amount.is_zero():
            raise DivideByZeroError(f"Cannot divide {self} by {other}")
        vector, f = self._base_vector.divide(other._base_vector)
        amount = self._base_amount / scale_decimal(other._base_amount, 1 / f)
        derived = merge_derived_units(self._derived, _invert_derived(other._derived))
        return Quantity._from_base(amount, vector, derived, self._registry)

    def pow(self, n: int) -> Quantity:
        """Raise to an integer power; ``x.pow(0)`` is the dimensionless 1."""
        if not isinstance(n, int) or isinstance(n, bool):
            raise TypeError(f"Exponent must be an int, got {type(n).__name__}")
        if n == 0:
            return self._dimensionless(1)

        if n > 0:
            result = self
            for _ in range(n - 1):
                result = result.multiply(self)
            return result

        result = self._dimensionless(1).divide(self)
        for _ in range(-n - 1):
            result = result.divide(self)
        return result

    def __add__(self, other: object) -> Quantity:
        if not (isinstance(other, Quantity) or _is_scalar(other)):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: object) -> Quantity:
        if not _is_scalar(other):
            return NotImplemented
        return self._dimensionless(other).add(self)

    def __sub__(self, other: object) -> Quantity:
        if not (isinstance(other, Quantity) or _is_scalar(other)):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: object) -> Quantity:
        if not _is_scalar(other):
            return NotImplemented
        return self._dimensionless(other).subtract(self)

    def __mul__(self, other: object) -> Quantity:
        if not (isinstance(other, Quantity) or _is_scalar(other)):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: object) -> Quantity:
        # allows 3 * (2 m) -> 6 m
        if not _is_scalar(other):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> Quantity:
        if not (isinstance(other, Quantity) or _is_scalar(other)):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other: object) -> Quantity:
        # scalar / quantity -> quantity with the inverse units
        if not _is_scalar(other):
            return NotImplemented
        return self._dimensionless(other).divide(self)

    def __pow__(self, n: int) -> Quantity:
        return self.pow(n)

    def __neg__(self) -> Quantity:
        return self._with_base(-self._base_amount)

    def __pos__(self) -> Quantity:
        return self

    def __abs__(self) -> Quantity:
        return self._with_base(abs(self._base_amount))

    # -------------------------------------------------------------- comparison
    def compare(self, other: "Quantity | Number") -> int:
        """
        Three-way comparison: -1, 0 or 1.

        Raises
        ------
        IncongruentUnitsError
            If the quantities do not measure the same dimensions.
        """
        other = self._coerce(other)
        self._require_congruent(other, "compare")
        theirs = self._express(other)
        return (self._base_amount > theirs) - (self._base_amount < theirs)

    def equals(self, other: object) -> bool:
        """Equality that never raises: incongruent or foreign values are unequal."""
        if not isinstance(other, Quantity):
            return False
        if not self._base_vector.is_congruent(other._base_vector):
            return False
        return self.compare(other) == 0

    def compare_with_tolerance(self, other: Quantity, tolerance: Quantity) -> int:
        """
        Compare ``other`` against the band ``[self - tolerance, self + tolerance]``.

        Returns 0 when ``other`` lies inside the band, 1 when it lies below the
        lower bound and -1 when it lies above the upper bound.
        """
        other = self._coerce(other)
        tolerance = self._coerce(tolerance)
        self._require_congruent(other, "compare")
        self._require_congruent(tolerance, "compare")

        lower = self.subtract(tolerance)
        upper = self.add(tolerance)
        if other.compare(lower) < 0:
            return 1
        if other.compare(upper) > 0:
            return -1
        return 0

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    def __ne__(self, other: object) -> bool:
        return not self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: object) -> bool:
        if not (isinstance(other, Quantity) or _is_scalar(other)):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not (isinstance(other, Quantity) or _is_scalar(other)):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not (isinstance(other, Quantity) or _is_scalar(other)):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not (isinstance(other, Quantity) or _is_scalar(other)):
            return NotImplemented
        return self.compare(other) >= 0

    # -------------------------------------------------------------- formatting
    def __str__(self) -> str:
        return f"{format_decimal(self._amount)} {self.units}".strip()

    def __repr__(self) -> str:
        return str(self)

    def __format__(self, spec: str) -> str:
        """
        Format the amount with ``spec`` and append the display units.

        >>> f"{Quantity('3.14159 m'):.2f}"
        '3.14 m'
        """
        if not spec:
            return str(self)
        return f"{format(self._amount, spec)} {self.units}".strip()


def parse_quantity(text: str, registry: "UnitsRegistry | None" = None) -> Quantity:
    return Quantity.parse(text, registry)


def try_parse_quantity(text: str, registry: "UnitsRegistry | None" = None) -> Quantity | None:
    return Quantity.try_parse(text, registry)


def convert_amount(
    amount: "Number | str",
    from_units: str,
    to_units: str,
    registry: "UnitsRegistry | None" = None,
) -> Decimal:
    """
    Convert a bare amount between two unit expressions.

    Both expressions and their congruency are checked independently; a single
    problem is raised as is, several are raised together as an
    ``ExceptionGroup``.

    Raises
    ------
    ValueError
        If either unit expression is blank.
    UnitParseError, IncongruentUnitsError, ExceptionGroup
        As described above.
    """
    if from_units is None or not from_units.strip():
        raise ValueError("from_units must not be blank")
    if to_units is None or not to_units.strip():
        raise ValueError("to_units must not be blank")

    reg = registry if registry is not None else _get_default_registry()
    errors: list[Exception] = []

    source: Quantity | None = None
    target: DimensionVector | None = None
    try:
        source = Quantity(amount, from_units, reg)
    except UnitParseError as e:
        errors.append(e)
    try:
        target, _factor, _derived = _flatten(parse_unit_expr(to_units, reg))
    except UnitParseError as e:
        errors.append(e)

    if source is not None and target is not None and not source.is_congruent(target):
        errors.append(IncongruentUnitsError(from_units, to_units, "convert"))

    if len(errors) == 1:
        raise errors[0]
    if errors:
        raise ExceptionGroup(f"Cannot convert {from_units!r} to {to_units!r}", errors)
    assert source is not None
    return source.convert(to_units).amount


__all__ = [
    "Quantity",
    "parse_quantity",
    "try_parse_quantity",
    "convert_amount",
]
