# metrica.core.dimensions

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, eq=False)
class Dimension:
    """
    An independent physical axis (length, mass, time, ...).

    Dimensions are singletons: two dimensions are the same axis only if they
    are the same object. Derived units act as their own dimension and are not
    instances of this class.
    """

    name: str

    def __repr__(self) -> str:
        return f"Dimension({self.name!r})"

    def __str__(self) -> str:
        return self.name


LENGTH = Dimension("length")
MASS = Dimension("mass")
TIME = Dimension("time")
CURRENT = Dimension("current")
TEMPERATURE = Dimension("temperature")
AMOUNT = Dimension("amount of substance")
LUMINOUS = Dimension("luminous intensity")
ANGLE = Dimension("angle")
DATA_STORAGE = Dimension("data storage")

BASE_DIMENSIONS: tuple[Dimension, ...] = (
    LENGTH,
    MASS,
    TIME,
    CURRENT,
    TEMPERATURE,
    AMOUNT,
    LUMINOUS,
    ANGLE,
    DATA_STORAGE,
)

__all__ = [
    "Dimension",
    "LENGTH",
    "MASS",
    "TIME",
    "CURRENT",
    "TEMPERATURE",
    "AMOUNT",
    "LUMINOUS",
    "ANGLE",
    "DATA_STORAGE",
    "BASE_DIMENSIONS",
]
