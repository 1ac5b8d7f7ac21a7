"""Small helpers shared by the repositories."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

CENTS = Decimal("0.01")


def contains_pattern(fragment: str) -> str:
    """Build a ``LIKE`` pattern matching ``fragment`` anywhere in a value.

    ``%``, ``_`` and the escape character itself are escaped, so the
    pattern must be used with ``ESCAPE '\\'``.  Lower‑casing is left to
    SQL (``LOWER(?)``) so both sides fold case the same way.
    """
    escaped = (
        fragment.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    return f"%{escaped}%"


def placeholders(values: Sequence) -> str:
    """Return ``?, ?, ...`` with one marker per value."""
    return ", ".join("?" for _ in values)


def to_decimal(value) -> Optional[Decimal]:
    """Convert a numeric column value to a two‑place ``Decimal``."""
    if value is None:
        return None
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
