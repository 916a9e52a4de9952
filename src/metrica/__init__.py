"""
Metrica: exact, unit-safe arithmetic on physical quantities.

Quantities pair a decimal amount with a compound unit expression ("9.81 m/s^2",
"5 kN*m"). Arithmetic converts units automatically, refuses to mix
incompatible dimensions and keeps derived units such as N, V or mph in the
displayed result.

This module exposes a minimal, stable public API. Heavy subsystems (the units
registry and everything that needs it) are imported lazily to avoid
import-time side effects and circular imports.
"""

from importlib import metadata as _metadata
from pathlib import Path as _Path
from typing import Any

from metrica.errors import (
    DimensionMismatchError,
    DivideByZeroError,
    IncongruentUnitsError,
    MetricaError,
    NoConversionPathError,
    RegistrationError,
    UnitParseError,
    UnknownUnitError,
)

__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("metrica")
except _metadata.PackageNotFoundError:
    import tomllib
    with open(_Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

_LAZY = {
    "Quantity": "metrica.core.quantity",
    "parse_quantity": "metrica.core.quantity",
    "try_parse_quantity": "metrica.core.quantity",
    "convert_amount": "metrica.core.quantity",
    "DimensionVector": "metrica.core.vector",
    "UnitsRegistry": "metrica.units.registry",
    "DEFAULT_REGISTRY": "metrica.units.registry",
}

# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__",
    "__license__",
    "u",
    *_LAZY,
    "MetricaError",
    "UnitParseError",
    "RegistrationError",
    "UnknownUnitError",
    "NoConversionPathError",
    "IncongruentUnitsError",
    "DivideByZeroError",
    "DimensionMismatchError",
]


def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. 'u' is a unit namespace over the default registry
    (``5 * u.km``); the other public names import their module on first use.
    """
    if name == "u":
        from metrica.units.registry import DEFAULT_REGISTRY
        return DEFAULT_REGISTRY.as_namespace()
    module = _LAZY.get(name)
    if module is not None:
        from importlib import import_module
        return getattr(import_module(module), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))
