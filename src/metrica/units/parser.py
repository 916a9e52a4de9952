"""
metrica.units.parser
====================

Parser for quantity text ("9.81 m/s^2") and unit expressions ("kg*m/s^2").

Grammar::

    quantity   := amount [ws unit_expr]
    unit_expr  := group ['/' group]
    group      := '1' | term (('*' | '⋅' | '·') term)*
    term       := [prefix]unit ['^' signed_int]

Terms in the denominator group have their exponent negated. Prefix and unit
are not split apart: the whole token is looked up in the registry's
abbreviation cache.
"""
from __future__ import annotations

import logging
import re
from decimal import Decimal
from functools import lru_cache
from typing import TYPE_CHECKING, Optional, Tuple

from metrica.core.utils import to_decimal
from metrica.core.vector import VectorComponent
from metrica.errors import UnitParseError

if TYPE_CHECKING:
    from metrica.units.registry import UnitsRegistry

logger = logging.getLogger(__name__)

# --- Plan ------------------------------------------------------------------
# A compiled unit expression is a flat tuple of terms:
#   (abbreviation, exponent, group)   group 0 = numerator, 1 = denominator
# Exponents of denominator terms are already negated.
Term = Tuple[str, int, int]
Plan = Tuple[Term, ...]

_SEPARATORS_RE = re.compile(r"[*⋅·]")
_EXPONENT_RE = re.compile(r"[+-]?\d+")


# ---------------- Parser that builds a PLAN (no registry lookups!) ----------------
class _UnitExprParser:
    """Splits a unit expression into (abbreviation, exponent, group) terms."""

    def __init__(self, text: str):
        self.s = text

    def parse(self) -> Plan:
        text = self.s.strip()
        if not text:
            return ()

        groups = text.split("/")
        if len(groups) > 2:
            raise ValueError("only one '/' is allowed")

        terms: list[Term] = []
        for index, group in enumerate(groups):
            sign = -1 if index else 1
            for abbrev, exp in self._parse_group(group):
                terms.append((abbrev, sign * exp, index))
        return tuple(terms)

    def _parse_group(self, group: str) -> list[tuple[str, int]]:
        group = group.strip()
        if group == "1":
            return []
        if not group:
            raise ValueError("empty unit group")
        return [self._parse_term(t) for t in _SEPARATORS_RE.split(group)]

    def _parse_term(self, term: str) -> tuple[str, int]:
        pieces = term.split("^")
        if len(pieces) > 2:
            raise ValueError(f"more than one '^' in {term.strip()!r}")

        abbrev = pieces[0].strip()
        if not abbrev:
            raise ValueError("empty unit term")

        if len(pieces) == 1:
            return abbrev, 1
        exp_text = pieces[1].strip()
        if not _EXPONENT_RE.fullmatch(exp_text):
            raise ValueError(f"exponent {exp_text!r} is not an integer")
        return abbrev, int(exp_text)


# ---------------- Public API with caching-safe compilation ----------------
# Cache the *compiled plan* only. Safe across registries because there's no bound objects inside.
@lru_cache(maxsize=4096)
def _compile_unit_expr(expr: str) -> Plan:
    return _UnitExprParser(expr).parse()


def _eval_plan(plan: Plan, expr: str, reg: "UnitsRegistry") -> tuple[VectorComponent, ...]:
    components: list[VectorComponent] = []
    seen: list[set] = [set(), set()]
    for abbrev, exponent, group in plan:
        pair = reg.lookup(abbrev)
        if pair is None:
            raise UnitParseError(expr, f"unknown unit '{abbrev}'")
        prefix, unit = pair
        dim = unit.dimension
        if dim in seen[group]:
            raise UnitParseError(expr, f"dimension {dim} appears twice in one group")
        seen[group].add(dim)
        components.append(VectorComponent(prefix, unit, exponent))
    return tuple(components)


def _default_registry() -> "UnitsRegistry":
    from metrica.units.registry import DEFAULT_REGISTRY

    return DEFAULT_REGISTRY


def parse_unit_expr(expr: str, reg: "UnitsRegistry | None" = None) -> tuple[VectorComponent, ...]:
    """
    Parse a unit expression like 'kg*m/s^2' into vector components.

    Caching-safety:
      * A syntax plan is cached keyed by `expr` only (no registry state).
      * Abbreviations are resolved against the *provided* `reg` at call time.

    Components may name both simple and derived units; zero exponents are kept
    and dropped later by ``DimensionVector``.

    Raises:
      UnitParseError on any syntax error, unknown abbreviation, or a dimension
      repeated within the numerator or within the denominator.
    """
    try:
        plan = _compile_unit_expr(expr)
    except ValueError as e:
        logger.debug("rejected unit expression %r: %s", expr, e)
        raise UnitParseError(expr, str(e)) from None
    return _eval_plan(plan, expr, reg if reg is not None else _default_registry())


def try_parse_unit_expr(
    expr: str, reg: "UnitsRegistry | None" = None
) -> Optional[tuple[VectorComponent, ...]]:
    """Like ``parse_unit_expr`` but returns ``None`` instead of raising."""
    try:
        return parse_unit_expr(expr, reg)
    except UnitParseError:
        return None


def split_quantity(text: str) -> tuple[Decimal, str]:
    """Split '<amount> <unit expr>' into a decimal amount and the unit text."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    parts = text.strip().split(None, 1)
    if not parts:
        raise UnitParseError(text, "empty quantity")
    try:
        amount = to_decimal(parts[0])
    except ValueError:
        raise UnitParseError(text, f"invalid amount {parts[0]!r}") from None
    return amount, parts[1] if len(parts) > 1 else ""


__all__ = [
    "parse_unit_expr",
    "try_parse_unit_expr",
    "split_quantity",
]
