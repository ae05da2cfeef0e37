from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any

import pandas as pd

"""Cell variant model for raw spreadsheet values.

The spreadsheet reader hands back cells of mixed shape (None, NaN, numbers,
strings, datetimes). Every parser first classifies the raw value into a Cell
and then dispatches on its kind, so the accepted shapes are listed in one place.
"""

__all__ = [
    "Cell",
    "CellKind",
]


class CellKind(Enum):
    """Kinds of raw cell values.

    - EMPTY: None, NaN, NaT or the empty string
    - NUMBER: finite or non-finite real number (bool excluded)
    - TEXT: any other value, coerced with str()
    - TEMPORAL: datetime / date / time / timedelta (pandas Timestamp included)
    """
    EMPTY = "empty"
    NUMBER = "number"
    TEXT = "text"
    TEMPORAL = "temporal"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    value: Any = None

    @staticmethod
    def of(value: Any) -> Cell:
        """Classify a raw cell value. Already-classified cells pass through."""
        if isinstance(value, Cell):
            return value
        if value is None or value is pd.NaT:
            return Cell(CellKind.EMPTY)
        if isinstance(value, (datetime, date, time, timedelta)):
            return Cell(CellKind.TEMPORAL, value)
        if isinstance(value, bool):
            return Cell(CellKind.TEXT, str(value))
        if isinstance(value, numbers.Real):
            if isinstance(value, float) and math.isnan(value):
                return Cell(CellKind.EMPTY)
            return Cell(CellKind.NUMBER, value)
        text = str(value)
        if text == "":
            return Cell(CellKind.EMPTY)
        return Cell(CellKind.TEXT, text)

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY
