"""
Shared utilities for data ingestion: line splitting, header cleaning,
numeric coercion of human-edited spreadsheet cells.
"""

import math
import re
from typing import Any

from ..config import FIELD_DELIMITER

# Anything that is not a digit, a decimal point or a minus sign is noise
# (currency symbols, thousands separators, unit suffixes, whitespace).
_NOISE_RE = re.compile(r"[^\d.\-]")
# Longest leading numeric prefix: "12.5.1" -> "12.5", "-3" -> "-3", ".5" -> ".5"
_NUMBER_PREFIX_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def coerce_number(val: Any) -> float | None:
    """Coerce a spreadsheet cell to float, returning None when it is not numeric.

    Formatting noise is stripped first, so "$ 1,200.50" -> 1200.5 and
    "42 members" -> 42.0. Only a minus sign in leading position survives;
    a minus sign anywhere else ends the number ("12-5" -> 12.0).
    Blank cells, text labels and non-finite values give None.
    """
    if val is None:
        return None
    if isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        f = float(val)
        return f if math.isfinite(f) else None

    cleaned = _NOISE_RE.sub("", str(val))
    match = _NUMBER_PREFIX_RE.match(cleaned)
    if match is None:
        return None
    try:
        f = float(match.group(0))
    except ValueError:
        return None
    return f if math.isfinite(f) else None


def split_lines(text: str) -> list[str]:
    """Split raw CSV text on line breaks after trimming the whole document."""
    return text.strip().splitlines()


def split_cells(line: str, delimiter: str = FIELD_DELIMITER) -> list[str]:
    """Naive split on the delimiter: quoted delimiters are not honoured."""
    return [cell.strip() for cell in line.split(delimiter)]


def is_blank_line(line: str) -> bool:
    """True for empty or whitespace-only lines.

    Delimiter-only lines (",,") are not blank: they are rows whose cells
    are all empty, and still count as one record each.
    """
    return not line.strip()


def clean_header(cells: list[str]) -> tuple[str, ...]:
    """Trim header cells and strip a UTF-8 BOM from the first one."""
    headers = [c.strip() for c in cells]
    if headers:
        headers[0] = headers[0].lstrip("\ufeff").strip()
    return tuple(headers)


def coerce_or_zero(val: Any) -> float:
    """coerce_number() with failures counted as 0, for chart placement."""
    value = coerce_number(val)
    return 0.0 if value is None else value
