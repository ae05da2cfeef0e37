from __future__ import annotations

import math
import re
from typing import Any

from ..models.cell import Cell, CellKind

__all__ = [
    "parse_number_br",
]

_LETTERS = re.compile(r"[a-zA-Z]+")
_NON_NUMERIC = re.compile(r"[^0-9.,-]")
_WHITESPACE = re.compile(r"\s+")


def parse_number_br(value: Any) -> float | None:
    """Parse a Brazilian-locale number that may carry a unit suffix.

    Unit letters are stripped ("12kg" -> 12). When both separators appear the
    period is a thousands separator and the comma the decimal point
    ("1.234,56" -> 1234.56); a lone comma is a decimal point; a lone period is
    left as is. Anything unparseable or non-finite yields None.
    """
    cell = Cell.of(value)
    if cell.kind is CellKind.EMPTY or cell.kind is CellKind.TEMPORAL:
        return None
    if cell.kind is CellKind.NUMBER:
        number = float(cell.value)
        return number if math.isfinite(number) else None

    text = _LETTERS.sub(" ", cell.value.strip())
    text = _NON_NUMERIC.sub(" ", text)
    text = _WHITESPACE.sub("", text)
    if not text:
        return None
    if "," in text and "." in text:
        text = text.replace(".", "").replace(",", ".", 1)
    elif "," in text:
        text = text.replace(",", ".", 1)
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
