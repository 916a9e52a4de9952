"""
metrica.core.conversion
=======================

Scale factors between simple units.

Simple units form one tree per dimension: every unit points at the unit it is
defined relative to and the root points at nothing. Converting between two
units walks both ancestry chains up to their nearest common ancestor.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

from metrica.core.unit import NO_PREFIX, Offset, Prefix, Unit
from metrica.core.utils import scale_decimal
from metrica.errors import NoConversionPathError


def base_path(unit: Unit) -> list[Unit]:
    """Return ``[unit, parent, grandparent, ..., root]``."""
    path = [unit]
    parent = getattr(unit, "parent", None)
    while parent is not None:
        path.append(parent)
        parent = parent.parent
    return path


def _index_of(path: list[Unit], unit: Unit) -> int:
    for i, candidate in enumerate(path):
        if candidate is unit:
            return i
    return -1


def convert(from_unit: Unit, to_unit: Unit) -> Fraction:
    """
    Factor that turns an amount in ``from_unit`` into an amount in ``to_unit``.

    Raises
    ------
    NoConversionPathError
        If the two units share no ancestor.
    """
    if from_unit is to_unit:
        return Fraction(1)

    from_path = base_path(from_unit)
    to_path = base_path(to_unit)

    i_from = i_to = -1
    for i, candidate in enumerate(from_path):
        j = _index_of(to_path, candidate)
        if j >= 0:
            i_from, i_to = i, j
            break
    else:
        raise NoConversionPathError(from_unit, to_unit)

    factor = Fraction(1)
    for i in range(max(i_from, i_to)):
        to_scale = to_path[i].scale if i < i_to else 1
        from_scale = from_path[i].scale if i < i_from else 1
        factor *= Fraction(to_scale) / Fraction(from_scale)
    return factor


def convert_with_offset(
    amount: Decimal,
    from_unit: Unit,
    from_prefix: Prefix,
    to_unit: Unit,
    to_prefix: Prefix,
) -> Decimal:
    """
    Convert an absolute amount between two single units, honouring offsets.

    Only valid when both sides are one unit raised to the first power;
    offsets do not distribute over products or powers.
    """
    value = amount
    if from_prefix is not NO_PREFIX:
        value = scale_decimal(value, from_prefix.scale)
    if isinstance(from_unit, Offset):
        value = from_unit.offset_to_relative(value)
    value = scale_decimal(value, convert(from_unit, to_unit))
    if isinstance(to_unit, Offset):
        value = to_unit.offset_from_relative(value)
    if to_prefix is not NO_PREFIX:
        value = scale_decimal(value, 1 / to_prefix.scale)
    return value


__all__ = ["base_path", "convert", "convert_with_offset"]
