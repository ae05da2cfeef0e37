from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RowData model for the production spreadsheet importer.

RowData represents a single data row exactly as read from the worksheet:
original header label -> raw cell value. Header normalization happens later,
inside the column resolver.
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """One worksheet row after reading, before any normalization.

    row_number is the 1-based worksheet row the values were read from
    (header row + 1 = first data row).
    """
    row_number: int  # Worksheet row number (1-based)
    values: dict[str, Any]  # Original header label -> raw cell value
