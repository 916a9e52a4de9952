"""
metrica.errors
==============

Exception hierarchy shared by every metrica subsystem.

Each error also derives from the closest built-in exception so that callers
written against plain ``ValueError``/``TypeError`` keep working.
"""

from __future__ import annotations


class MetricaError(Exception):
    """Base class for all metrica errors."""


class UnitParseError(MetricaError, ValueError):
    """A quantity or unit expression could not be parsed."""

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        self.reason = reason
        msg = f"Cannot parse {text!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class RegistrationError(MetricaError, TypeError):
    """An object of the wrong kind was registered or resolved."""


class UnknownUnitError(RegistrationError, KeyError):
    """A name could not be resolved by the registry."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class NoConversionPathError(MetricaError, ValueError):
    """Two units do not share a common ancestor."""

    def __init__(self, from_unit: object, to_unit: object) -> None:
        self.from_unit = from_unit
        self.to_unit = to_unit
        super().__init__(f"No conversion path between {from_unit} and {to_unit}")


class IncongruentUnitsError(MetricaError, TypeError):
    """Two dimension vectors do not share the same dimensions and exponents."""

    def __init__(self, left: object, right: object, operation: str = "combine") -> None:
        self.left = left
        self.right = right
        self.operation = operation
        super().__init__(
            f"Cannot {operation} incongruent units: '{left}' and '{right}'"
        )


class DivideByZeroError(MetricaError, ZeroDivisionError):
    """A quantity was divided by an exactly-zero amount."""


class DimensionMismatchError(MetricaError, ValueError):
    """A math helper received a quantity of the wrong shape."""


__all__ = [
    "MetricaError",
    "UnitParseError",
    "RegistrationError",
    "UnknownUnitError",
    "NoConversionPathError",
    "IncongruentUnitsError",
    "DivideByZeroError",
    "DimensionMismatchError",
]
