from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING, Protocol, Union, runtime_checkable

from metrica.core.dimensions import Dimension

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from metrica.core.vector import DimensionVector


ScaleLike = Union[int, str, Decimal, Fraction]


def _as_scale(value: ScaleLike, what: str) -> Fraction:
    if isinstance(value, float):
        raise TypeError(f"{what} must be exact (int, str, Decimal or Fraction), got float")
    scale = Fraction(value)
    if scale <= 0:
        raise ValueError(f"{what} must be positive, got {value!r}")
    return scale


@dataclass(frozen=True, slots=True, eq=False)
class Prefix:
    """A multiplicative scale applied in front of a unit (kilo, milli, kibi...)."""

    name: str
    abbreviation: str
    scale: Fraction

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", _as_scale(self.scale, "prefix scale"))

    def __repr__(self) -> str:
        return f"Prefix({self.name!r}, {self.abbreviation!r}, {self.scale})"


NO_PREFIX = Prefix("", "", Fraction(1))


@runtime_checkable
class Offset(Protocol):
    """Capability of units whose zero point differs from their parent's."""

    offset: Decimal

    def offset_to_relative(self, x: Decimal) -> Decimal: ...
    def offset_from_relative(self, x: Decimal) -> Decimal: ...


@dataclass(frozen=True, slots=True, eq=False)
class SimpleUnit:
    """
    A named, linear scale within a single dimension.

    Attributes
    ----------
    name : str
        Unique, human readable name ("meter", "foot").
    abbreviation : str
        Symbol used in unit expressions ("m", "ft").
    dimension : Dimension
        Axis this unit measures.
    parent : SimpleUnit | None
        Unit this one is defined relative to. ``None`` marks the root of a
        dimension tree.
    scale : Fraction
        Amount of this unit per 1 of ``parent`` (1 for a root).
    """

    name: str
    abbreviation: str
    dimension: Dimension
    parent: SimpleUnit | None = None
    scale: Fraction = Fraction(1)

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", _as_scale(self.scale, "unit scale"))
        if self.parent is not None and self.parent.dimension is not self.dimension:
            raise ValueError(
                f"{self.name} ({self.dimension}) cannot be relative to "
                f"{self.parent.name} ({self.parent.dimension})"
            )

    @property
    def relative_to(self) -> SimpleUnit:
        """Parent unit; a root unit is relative to itself."""
        return self if self.parent is None else self.parent

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.abbreviation!r})"

    def __str__(self) -> str:
        return self.abbreviation


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class OffsetUnit(SimpleUnit):
    """A simple unit whose zero sits ``offset`` units away from its parent's zero."""

    offset: Decimal = field(default=Decimal(0))

    def __post_init__(self) -> None:
        super(OffsetUnit, self).__post_init__()
        if self.parent is None:
            raise ValueError(f"offset unit {self.name} needs a parent unit")
        object.__setattr__(self, "offset", Decimal(self.offset))

    def offset_to_relative(self, x: Decimal) -> Decimal:
        return x + self.offset

    def offset_from_relative(self, x: Decimal) -> Decimal:
        return x - self.offset


@dataclass(frozen=True, slots=True, eq=False)
class DerivedUnit:
    """
    A named unit defined by a dimension vector over simple units (N, Hz, mph).

    A derived unit is also its own dimension, so it never shares a vector slot
    with a simple unit.
    """

    name: str
    abbreviation: str
    base_vector: DimensionVector
    expression: str = ""

    @property
    def dimension(self) -> DerivedUnit:
        return self

    def __repr__(self) -> str:
        return f"DerivedUnit({self.name!r}, {self.abbreviation!r}, {str(self.base_vector)!r})"

    def __str__(self) -> str:
        return self.abbreviation


Unit = Union[SimpleUnit, DerivedUnit]

__all__ = [
    "Prefix",
    "NO_PREFIX",
    "Offset",
    "SimpleUnit",
    "OffsetUnit",
    "DerivedUnit",
    "Unit",
]
