"""Parse and format byte counts and rates with kilo/mega/giga/tera suffixes."""

from __future__ import annotations

import re

KILO_UNIT = 1024.0
MEGA_UNIT = 1024.0 * 1024.0
GIGA_UNIT = 1024.0 * 1024.0 * 1024.0
TERA_UNIT = 1024.0 * 1024.0 * 1024.0 * 1024.0

KILO_RATE_UNIT = 1000.0
MEGA_RATE_UNIT = 1000.0 * 1000.0
GIGA_RATE_UNIT = 1000.0 * 1000.0 * 1000.0
TERA_RATE_UNIT = 1000.0 * 1000.0 * 1000.0 * 1000.0

_BINARY_SUFFIXES = {"k": KILO_UNIT, "m": MEGA_UNIT, "g": GIGA_UNIT, "t": TERA_UNIT}
_DECIMAL_SUFFIXES = {
    "k": KILO_RATE_UNIT,
    "m": MEGA_RATE_UNIT,
    "g": GIGA_RATE_UNIT,
    "t": TERA_RATE_UNIT,
}

# Leading number as accepted by a scanf-style float conversion.
_NUMBER = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_CONVERSION_BYTES = (
    1.0,
    1.0 / 1024,
    1.0 / 1024 / 1024,
    1.0 / 1024 / 1024 / 1024,
    1.0 / 1024 / 1024 / 1024 / 1024,
)
_CONVERSION_BITS = (
    1.0,
    1.0 / 1000,
    1.0 / 1000 / 1000,
    1.0 / 1000 / 1000 / 1000,
    1.0 / 1000 / 1000 / 1000 / 1000,
)
_LABEL_BYTE = ("Byte", "KByte", "MByte", "GByte", "TByte")
_LABEL_BIT = ("bit", "Kbit", "Mbit", "Gbit", "Tbit")
_FIXED_CONVERSIONS = "BKMGT"
_TERA_CONV = len(_FIXED_CONVERSIONS) - 1


def _scan(s: str) -> tuple[float, str]:
    """Split *s* into its leading number and the character right after it."""
    match = _NUMBER.match(s)
    if match is None:
        raise ValueError(f"invalid number: {s!r}")
    end = match.end()
    return float(match.group(1)), s[end:end + 1]


def _scaled(s: str, table: dict[str, float]) -> float:
    number, suffix = _scan(s)
    return number * table.get(suffix.lower(), 1.0)


def unit_atof(s: str) -> float:
    """Parse a number with an optional binary (1024-based) K/M/G/T suffix."""
    return _scaled(s, _BINARY_SUFFIXES)


def unit_atof_rate(s: str) -> float:
    """Parse a number with an optional decimal (1000-based) K/M/G/T suffix."""
    return _scaled(s, _DECIMAL_SUFFIXES)


def unit_atoi(s: str) -> int:
    """Parse like :func:`unit_atof` and truncate the result to an integer."""
    return int(unit_atof(s))


def format_units(value: float, fmt: str) -> str:
    """Format a byte count as bytes or bits with a unit label.

    Upper-case formats ``B K M G T A`` give bytes, lower-case ``b k m g t a``
    give bits; ``A``/``a`` (or any other character) picks the unit adaptively.
    """
    if len(fmt) != 1:
        raise ValueError(f"format must be a single character, got {fmt!r}")
    as_bytes = fmt.isupper()
    if not as_bytes:
        value *= 8

    selector = fmt.upper()
    if selector in _FIXED_CONVERSIONS:
        conv = _FIXED_CONVERSIONS.index(selector)
    else:
        base = 1024.0 if as_bytes else 1000.0
        conv = 0
        remaining = value
        while remaining >= base and conv < _TERA_CONV:
            remaining /= base
            conv += 1

    if as_bytes:
        value *= _CONVERSION_BYTES[conv]
        label = _LABEL_BYTE[conv]
    else:
        value *= _CONVERSION_BITS[conv]
        label = _LABEL_BIT[conv]

    # Keep the number within four places.
    if value < 9.995:
        return f"{value:4.2f} {label}"
    if value < 99.95:
        return f"{value:4.1f} {label}"
    return f"{value:4.0f} {label}"