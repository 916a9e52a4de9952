# metrica.units.prefixes

from __future__ import annotations

from fractions import Fraction

from metrica.core.unit import NO_PREFIX, Prefix

# SI decimal prefixes, largest first.
SI_PREFIXES: tuple[Prefix, ...] = (
    Prefix("yotta", "Y", 10**24),
    Prefix("zetta", "Z", 10**21),
    Prefix("exa",   "E", 10**18),
    Prefix("peta",  "P", 10**15),
    Prefix("tera",  "T", 10**12),
    Prefix("giga",  "G", 10**9),
    Prefix("mega",  "M", 10**6),
    Prefix("kilo",  "k", 10**3),
    Prefix("hecto", "h", 10**2),
    Prefix("deca",  "da", 10),
    Prefix("deci",  "d", Fraction(1, 10)),
    Prefix("centi", "c", Fraction(1, 10**2)),
    Prefix("milli", "m", Fraction(1, 10**3)),
    Prefix("micro", "µ", Fraction(1, 10**6)),
    Prefix("nano",  "n", Fraction(1, 10**9)),
    Prefix("pico",  "p", Fraction(1, 10**12)),
    Prefix("femto", "f", Fraction(1, 10**15)),
    Prefix("atto",  "a", Fraction(1, 10**18)),
    Prefix("zepto", "z", Fraction(1, 10**21)),
    Prefix("yocto", "y", Fraction(1, 10**24)),
)

# IEC binary prefixes (exact powers of 1024).
BINARY_PREFIXES: tuple[Prefix, ...] = (
    Prefix("yobi", "Yi", 1024**8),
    Prefix("zebi", "Zi", 1024**7),
    Prefix("exbi", "Ei", 1024**6),
    Prefix("pebi", "Pi", 1024**5),
    Prefix("tebi", "Ti", 1024**4),
    Prefix("gibi", "Gi", 1024**3),
    Prefix("mebi", "Mi", 1024**2),
    Prefix("kibi", "Ki", 1024),
)

PREFIXES: tuple[Prefix, ...] = SI_PREFIXES + BINARY_PREFIXES

KILO = SI_PREFIXES[7]
MILLI = SI_PREFIXES[12]

__all__ = ["NO_PREFIX", "SI_PREFIXES", "BINARY_PREFIXES", "PREFIXES", "KILO", "MILLI"]
