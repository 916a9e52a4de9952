"""
metrica.units.registry
======================

Thread-safe registry of dimensions, prefixes and units.

- Resolves names or descriptor instances to the registered singleton.
- Keeps an abbreviation cache covering every prefix/unit pairing, so a token
  such as "km" resolves to ``(kilo, meter)`` in one dictionary lookup.
- Extends the cache incrementally when plugin units or prefixes are added.
- Normalizes user spelling (Unicode NFC, Greek mu, ASCII ``u`` for micro,
  ``ohm`` for ``Ω``).

A process-wide ``DEFAULT_REGISTRY`` is bootstrapped from
``metrica.units.catalog`` on first import, in dependency order: dimensions,
prefixes, simple units, then derived units.
"""
from __future__ import annotations

import logging
import re
import threading
import unicodedata
from typing import Dict, Iterator, Optional, Tuple, Union

from metrica.core.dimensions import Dimension
from metrica.core.unit import NO_PREFIX, DerivedUnit, Prefix, SimpleUnit, Unit
from metrica.errors import RegistrationError, UnitParseError, UnknownUnitError

logger = logging.getLogger(__name__)

Descriptor = Union[Dimension, Prefix, SimpleUnit, DerivedUnit]

# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------
_OHM_RE = re.compile(r"(?i)ohm")
_GREEK_MU = "μ"
_MICRO_SIGN = "µ"


def normalize_symbol(s: str) -> str:
    """Normalize a user-provided unit token.

    Rules:
    - Strip surrounding whitespace.
    - Unicode normalize to NFC (this also folds the Ohm sign into Greek omega).
    - Greek small mu becomes the micro sign used by the prefix table.
    - Any spelling of 'ohm' becomes 'Ω'.
    """
    if not s:
        return s

    s = unicodedata.normalize("NFC", s.strip())
    s = s.replace(_GREEK_MU, _MICRO_SIGN)
    return _OHM_RE.sub("Ω", s)


# ---------------------------------------------------------------------------
# Units registry
# ---------------------------------------------------------------------------
class UnitsRegistry:
    """Registry of dimensions, prefixes and units with an abbreviation cache.

    This registry does *not* parse compound expressions (like "m/s^2"); that
    is the job of ``metrica.units.parser``, which only asks the registry for
    single tokens through ``lookup``.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._dimensions: Dict[str, Dimension] = {}
        self._prefixes: Dict[str, Prefix] = {}
        self._units: Dict[str, Unit] = {}
        self._cache: Dict[str, Tuple[Prefix, Unit]] = {}
        self.register_prefix(NO_PREFIX)

    def __contains__(self, symbol: str) -> bool:
        return self.has(symbol)

    # -------------------------- registration -------------------------------
    def register(self, obj: Descriptor, replace: bool = False) -> None:
        """Register any descriptor, dispatching on its kind."""
        if isinstance(obj, Dimension):
            self.register_dimension(obj, replace)
        elif isinstance(obj, Prefix):
            self.register_prefix(obj, replace)
        elif isinstance(obj, (SimpleUnit, DerivedUnit)):
            self.register_unit(obj, replace)
        else:
            raise RegistrationError(
                f"Cannot register {obj!r}: expected a Dimension, Prefix, SimpleUnit or DerivedUnit"
            )

    def register_dimension(self, dim: Dimension, replace: bool = False) -> None:
        if not isinstance(dim, Dimension):
            raise RegistrationError(f"Cannot register {dim!r} as a dimension")
        with self._lock:
            self._check_conflict(self._dimensions, dim.name, dim, "dimension", replace)
            self._dimensions[dim.name] = dim

    def register_prefix(self, prefix: Prefix, replace: bool = False) -> None:
        if not isinstance(prefix, Prefix):
            raise RegistrationError(f"Cannot register {prefix!r} as a prefix")
        with self._lock:
            if self._check_conflict(self._prefixes, prefix.name, prefix, "prefix", replace):
                return
            self._prefixes[prefix.name] = prefix
            for unit in self._units.values():
                self._cache_pair(prefix, unit)
        logger.debug("registered prefix %r", prefix.name)

    def register_unit(self, unit: Unit, replace: bool = False) -> None:
        if not isinstance(unit, (SimpleUnit, DerivedUnit)):
            raise RegistrationError(f"Cannot register {unit!r} as a unit")
        with self._lock:
            if self._check_conflict(self._units, unit.name, unit, "unit", replace):
                return
            if isinstance(unit, SimpleUnit):
                self.resolve_dimension(unit.dimension)
                if unit.parent is not None:
                    self.resolve(unit.parent)
            else:
                for c in unit.base_vector:
                    self.resolve_prefix(c.prefix)
                    self.resolve(c.unit)
            self._units[unit.name] = unit
            for prefix in self._prefixes.values():
                self._cache_pair(prefix, unit)
        logger.debug("registered unit %r (%s)", unit.name, unit.abbreviation)

    def register_derived(
        self, name: str, abbreviation: str, expression: str, replace: bool = False
    ) -> DerivedUnit:
        """Define and register a derived unit from an expression over simple units."""
        from metrica.core.vector import DimensionVector

        try:
            base_vector = DimensionVector.parse(expression, self)
        except UnitParseError as e:
            raise RegistrationError(
                f"Cannot register derived unit '{name}': {e}"
            ) from e
        unit = DerivedUnit(name, abbreviation, base_vector, expression)
        self.register_unit(unit, replace)
        return self._units[name]

    # -------------------------- resolution ---------------------------------
    def resolve(self, unit: Union[str, Unit]) -> Unit:
        """Return the registered unit for a name, abbreviation or descriptor."""
        if isinstance(unit, str):
            with self._lock:
                found = self._units.get(unit)
                if found is not None:
                    return found
            pair = self.lookup(unit)
            if pair is not None and pair[0] is NO_PREFIX:
                return pair[1]
            raise UnknownUnitError(f"Unknown unit: {unit}")
        if not isinstance(unit, (SimpleUnit, DerivedUnit)):
            raise RegistrationError(f"{unit!r} is not a unit")
        return self._resolve_instance(self._units, unit, self.register_unit)

    def resolve_prefix(self, prefix: Union[str, Prefix]) -> Prefix:
        if isinstance(prefix, str):
            with self._lock:
                found = self._prefixes.get(prefix)
                if found is None:
                    found = next(
                        (p for p in self._prefixes.values() if p.abbreviation == prefix), None
                    )
            if found is None:
                raise UnknownUnitError(f"Unknown prefix: {prefix}")
            return found
        if not isinstance(prefix, Prefix):
            raise RegistrationError(f"{prefix!r} is not a prefix")
        return self._resolve_instance(self._prefixes, prefix, self.register_prefix)

    def resolve_dimension(self, dim: Union[str, Dimension]) -> Dimension:
        if isinstance(dim, str):
            with self._lock:
                found = self._dimensions.get(dim)
            if found is None:
                raise UnknownUnitError(f"Unknown dimension: {dim}")
            return found
        if not isinstance(dim, Dimension):
            raise RegistrationError(f"{dim!r} is not a dimension")
        return self._resolve_instance(self._dimensions, dim, self.register_dimension)

    def lookup(self, symbol: str) -> Optional[Tuple[Prefix, Unit]]:
        """Find the ``(prefix, unit)`` pair spelled by ``symbol``; ``None`` if unknown."""
        sym = normalize_symbol(symbol)
        pair = self._cache.get(sym)
        if pair is None and sym.startswith("u"):
            # ASCII 'u' as a stand-in for micro
            pair = self._cache.get(_MICRO_SIGN + sym[1:])
        return pair

    def has(self, symbol: str) -> bool:
        return self.lookup(symbol) is not None

    # -------------------------- iteration ----------------------------------
    def all_units(self) -> Iterator[Unit]:
        with self._lock:
            return iter(list(self._units.values()))

    def all_prefixes(self) -> Iterator[Prefix]:
        with self._lock:
            return iter(list(self._prefixes.values()))

    def all_dimensions(self) -> Iterator[Dimension]:
        with self._lock:
            return iter(list(self._dimensions.values()))

    def symbols(self) -> list[str]:
        with self._lock:
            return list(self._cache)

    def as_namespace(self) -> UnitNamespace:
        return UnitNamespace(self)

    # ------------------------- internals -----------------------------------
    def _check_conflict(self, table: dict, key: str, obj: object, kind: str, replace: bool) -> bool:
        """True if ``obj`` is already registered; raise on a clashing name."""
        existing = table.get(key)
        if existing is obj:
            return True
        if existing is not None and not replace:
            raise RegistrationError(
                f"Cannot register {kind} '{key}': a different {kind} with this name already exists."
            )
        return False

    def _resolve_instance(self, table: dict, obj, register):
        with self._lock:
            existing = table.get(obj.name)
            if existing is obj:
                return obj
            register(obj)
            return obj

    def _cache_pair(self, prefix: Prefix, unit: Unit) -> None:
        key = normalize_symbol(prefix.abbreviation + unit.abbreviation)
        existing = self._cache.get(key)
        # a bare unit abbreviation always beats a prefixed spelling
        if existing is not None and (existing[0] is NO_PREFIX or prefix is not NO_PREFIX):
            if existing != (prefix, unit):
                logger.debug(
                    "abbreviation %r already maps to %s%s; skipping %s%s",
                    key, existing[0].name, existing[1].name, prefix.name, unit.name,
                )
            return
        self._cache[key] = (prefix, unit)


class UnitNamespace:
    """Attribute and call access to unit tokens: ``u.km``, ``u("m/s^2")``.

    Each access returns a quantity of exactly 1 in the requested units, so
    ``5 * u.km`` reads naturally.
    """

    def __init__(self, reg: "UnitsRegistry") -> None:
        self._reg = reg

    def __contains__(self, spec: str) -> bool:
        return self._reg.has(spec)

    def __call__(self, spec: str):
        from metrica.core.quantity import Quantity

        return Quantity(1, spec, registry=self._reg)

    def __getattr__(self, name: str):
        if name.startswith("_") or not self._reg.has(name):
            raise AttributeError(name)
        return self(name)

    def __dir__(self) -> list[str]:
        """List all available unit symbols for autocomplete."""
        base_dir = set(super().__dir__())
        return sorted(base_dir | {s for s in self._reg.symbols() if s.isidentifier()})



# ---------------------------------------------------------------------------
# Bootstrap a registry from the built-in catalog
# ---------------------------------------------------------------------------

def bootstrap_registry() -> UnitsRegistry:
    from metrica.units.catalog import DERIVED_UNITS, DIMENSIONS, SIMPLE_UNITS
    from metrica.units.prefixes import PREFIXES

    reg = UnitsRegistry()
    for dim in DIMENSIONS:
        reg.register_dimension(dim)
    for prefix in PREFIXES:
        reg.register_prefix(prefix)
    for unit in SIMPLE_UNITS:
        reg.register_unit(unit)
    for unit in DERIVED_UNITS:
        reg.register_unit(unit)

    logger.debug(
        "bootstrapped registry: %d dimensions, %d prefixes, %d units, %d symbols",
        len(reg._dimensions), len(reg._prefixes), len(reg._units), len(reg._cache),
    )
    return reg


# Public, shared default registry
DEFAULT_REGISTRY: UnitsRegistry = bootstrap_registry()


__all__ = [
    "UnitsRegistry",
    "UnitNamespace",
    "DEFAULT_REGISTRY",
    "bootstrap_registry",
    "normalize_symbol",
]
