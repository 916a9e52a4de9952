"""
metrica.core.vector
===================

Dimension vectors: immutable maps from dimension to ``(prefix, unit,
exponent)``.

A vector never stores a zero exponent and holds at most one component per
dimension. Arithmetic returns a new vector together with the exact factor
needed to express the right-hand operand's amount in the left-hand
operand's units.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING, ClassVar, Iterable, Iterator, Mapping, Union

from metrica.core.conversion import convert as convert_units
from metrica.core.unit import DerivedUnit, Prefix, Unit
from metrica.core.utils import format_components
from metrica.errors import IncongruentUnitsError, UnitParseError

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from metrica.core.dimensions import Dimension
    from metrica.units.registry import UnitsRegistry

DimensionKey = Union["Dimension", DerivedUnit]


@dataclass(frozen=True, slots=True)
class VectorComponent:
    """One ``prefix``+``unit`` raised to an integer ``exponent``."""

    prefix: Prefix
    unit: Unit
    exponent: int

    @property
    def dimension(self) -> DimensionKey:
        return self.unit.dimension

    def with_exponent(self, exponent: int) -> VectorComponent:
        return VectorComponent(self.prefix, self.unit, exponent)

    def __str__(self) -> str:
        return format_components((self,))


class DimensionVector:
    """
    Immutable product of unit powers, keyed by dimension.

    Components keep the order in which their dimension first appeared, which
    is also the display order.
    """

    __slots__ = ("_components",)

    ZERO: ClassVar[DimensionVector]

    def __init__(self, components: Iterable[VectorComponent] = ()) -> None:
        comps: dict[DimensionKey, VectorComponent] = {}
        for c in components:
            if c.exponent == 0:
                continue
            if c.dimension in comps:
                raise ValueError(f"Duplicate dimension {c.dimension} in vector")
            comps[c.dimension] = c
        self._components: Mapping[DimensionKey, VectorComponent] = comps

    @classmethod
    def create(cls, components: Iterable[VectorComponent]) -> DimensionVector:
        return cls(components)

    @classmethod
    def _from_dict(cls, comps: dict[DimensionKey, VectorComponent]) -> DimensionVector:
        obj = cls.__new__(cls)
        obj._components = comps
        return obj

    # ------------------------------------------------------------------ parsing
    @classmethod
    def parse(cls, text: str, registry: "UnitsRegistry | None" = None) -> DimensionVector:
        """Parse a unit expression made only of simple units.

        Raises ``UnitParseError`` on malformed text or on derived units.
        """
        from metrica.units.parser import parse_unit_expr

        components = parse_unit_expr(text, registry)
        for c in components:
            if isinstance(c.unit, DerivedUnit):
                raise UnitParseError(text, f"derived unit '{c.unit.abbreviation}' is not allowed here")
        try:
            return cls(components)
        except ValueError as e:
            raise UnitParseError(text, str(e)) from None

    @classmethod
    def try_parse(cls, text: str, registry: "UnitsRegistry | None" = None) -> DimensionVector | None:
        try:
            return cls.parse(text, registry)
        except UnitParseError:
            return None

    # ---------------------------------------------------------------- accessors
    @property
    def components(self) -> tuple[VectorComponent, ...]:
        return tuple(self._components.values())

    @property
    def is_dimensionless(self) -> bool:
        return not self._components

    def get(self, dimension: DimensionKey) -> VectorComponent | None:
        return self._components.get(dimension)

    def __iter__(self) -> Iterator[VectorComponent]:
        return iter(self._components.values())

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, dimension: object) -> bool:
        return dimension in self._components

    # ---------------------------------------------------------------- algebra
    def multiply(self, other: DimensionVector) -> tuple[DimensionVector, Fraction]:
        """
        Return ``(self * other, factor)``.

        Where ``other`` uses a different unit or prefix for a dimension already
        present in ``self``, ``self``'s choice wins and ``factor`` converts an
        amount expressed in ``other`` accordingly.
        """
        factor = Fraction(1)
        comps = dict(self._components)
        for dim, theirs in other._components.items():
            mine = comps.get(dim)
            if mine is None:
                comps[dim] = theirs
                continue

            if mine.unit is not theirs.unit:
                factor *= convert_units(theirs.unit, mine.unit) ** theirs.exponent
            if mine.prefix is not theirs.prefix:
                factor *= (theirs.prefix.scale / mine.prefix.scale) ** theirs.exponent

            exponent = mine.exponent + theirs.exponent
            if exponent == 0:
                del comps[dim]
            else:
                comps[dim] = mine.with_exponent(exponent)
        return DimensionVector._from_dict(comps), factor

    def divide(self, other: DimensionVector) -> tuple[DimensionVector, Fraction]:
        return self.multiply(other.invert())

    def invert(self) -> DimensionVector:
        return DimensionVector._from_dict(
            {dim: c.with_exponent(-c.exponent) for dim, c in self._components.items()}
        )

    def pow(self, n: int) -> DimensionVector:
        """Raise every exponent to the ``n``-th power (``n`` integral)."""
        if not isinstance(n, int) or isinstance(n, bool):
            raise TypeError(f"Exponent must be an int, got {type(n).__name__}")
        if n == 0:
            return DimensionVector.ZERO
        base = self.invert() if n < 0 else self
        result = base
        for _ in range(abs(n) - 1):
            result, _factor = result.multiply(base)
        return result

    def __pow__(self, n: int) -> DimensionVector:
        return self.pow(n)

    def is_congruent(self, other: DimensionVector) -> bool:
        """Same dimensions with the same exponents; units and prefixes may differ."""
        if self._components.keys() != other._components.keys():
            return False
        return all(
            c.exponent == other._components[dim].exponent
            for dim, c in self._components.items()
        )

    def convert(self, other: DimensionVector) -> Fraction:
        """Factor that expresses an amount in ``other``'s units in ``self``'s units."""
        if not self.is_congruent(other):
            raise IncongruentUnitsError(other, self, "convert")

        factor = Fraction(1)
        for dim, mine in self._components.items():
            theirs = other._components[dim]
            if mine.unit is not theirs.unit:
                factor *= convert_units(theirs.unit, mine.unit) ** mine.exponent
            if mine.prefix is not theirs.prefix:
                factor *= (theirs.prefix.scale / mine.prefix.scale) ** mine.exponent
        return factor

    # ------------------------------------------------------------------ dunder
    def single_unit(self) -> VectorComponent | None:
        """The lone component when this vector is one unit to the first power."""
        if len(self._components) != 1:
            return None
        (c,) = self._components.values()
        return c if c.exponent == 1 else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DimensionVector):
            return NotImplemented
        return self._components == other._components

    def __hash__(self) -> int:
        return hash(frozenset(self._components.values()))

    def __str__(self) -> str:
        return format_components(self._components.values())

    def __repr__(self) -> str:
        return f"DimensionVector({str(self)!r})"


DimensionVector.ZERO = DimensionVector()

__all__ = ["VectorComponent", "DimensionVector"]
