"""
metrica.core.unit_simplifier
============================

Re-composes derived-unit names (N, V, mph, Hz...) from a flattened base
vector for display.

Quantities only store simple units. The derived units a user wrote are kept
on the side and, whenever a quantity is shown, whole copies of each derived
unit's base vector are pulled back out of the simple units, in the order the
derived units were written.

The decomposition is greedy: a later derived unit only sees what earlier ones
left behind, so results that could be spelled with two overlapping derived
units surface only one of them.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Iterable

from metrica.core.unit import DerivedUnit
from metrica.core.utils import trunc_div
from metrica.core.vector import DimensionVector, VectorComponent


def _fit_ratios(working: DimensionVector, derived: DerivedUnit) -> list[int]:
    ratios: list[int] = []
    for c in derived.base_vector:
        match = working.get(c.dimension)
        if match is None or match.unit is not c.unit or match.prefix is not c.prefix:
            ratios.append(0)
        else:
            ratios.append(trunc_div(match.exponent, c.exponent))
    return ratios


def apply_derived_units(
    base_vector: DimensionVector,
    derived_units: Iterable[VectorComponent],
) -> tuple[tuple[VectorComponent, ...], Fraction]:
    """
    Pull the intended derived units out of ``base_vector``.

    Returns the display components (derived units first, then the remaining
    simple units) and the factor that converts an amount in ``base_vector``
    into an amount in those display components.
    """
    working = base_vector
    factor = Fraction(1)
    display: list[VectorComponent] = []

    for intended in derived_units:
        derived = intended.unit
        if not isinstance(derived, DerivedUnit):
            continue

        ratios = _fit_ratios(working, derived)
        if not ratios:
            continue

        fit = min(abs(r) for r in ratios)
        if fit < 1:
            continue

        if all(r > 0 for r in ratios):
            dividing = True
        elif all(r < 0 for r in ratios):
            dividing = False
        else:
            continue

        operand = derived.base_vector.pow(fit)
        prefix_value = intended.prefix.scale ** fit
        if dividing:
            working, f = working.divide(operand)
            factor *= f / prefix_value
            display.append(VectorComponent(intended.prefix, derived, fit))
        else:
            working, f = working.multiply(operand)
            factor *= f * prefix_value
            display.append(VectorComponent(intended.prefix, derived, -fit))

    display.extend(working)
    return tuple(display), factor


def merge_derived_units(
    left: Iterable[VectorComponent],
    right: Iterable[VectorComponent],
) -> tuple[VectorComponent, ...]:
    """
    Combine two intended derived-unit lists.

    Entries for the same derived unit have their exponents summed (keeping the
    first prefix seen); entries that cancel out are dropped.
    """
    merged: dict[DerivedUnit, VectorComponent] = {}
    for c in (*left, *right):
        seen = merged.get(c.unit)
        if seen is None:
            merged[c.unit] = c
        else:
            merged[c.unit] = seen.with_exponent(seen.exponent + c.exponent)
    return tuple(c for c in merged.values() if c.exponent != 0)


__all__ = ["apply_derived_units", "merge_derived_units"]
