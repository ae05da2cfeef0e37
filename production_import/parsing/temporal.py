from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta
from typing import Any

import pandas as pd

from ..models.cell import Cell, CellKind
from .numeric import parse_number_br

"""Date / time parsing for spreadsheet cells.

Numeric cells follow the spreadsheet serial conventions:
- dates are whole days counted from 1899-12-30
- times are fractions of a 24 hour day (0.5 == 12:00)

Duration columns (worked hours, production hours, stoppage minutes) go through
the same day-fraction rule as clock times, so a duration cell holding 0.5 means
12 hours.
"""

__all__ = [
    "span_hours",
    "time_to_hours",
    "time_to_minutes",
    "to_date_str",
    "to_hhmm",
]

SERIAL_EPOCH = date(1899, 12, 30)
MAX_SERIAL = 2958465  # 9999-12-31
MINUTES_PER_DAY = 24 * 60

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
# text dates must carry a year: a four digit run or three separated numbers
_DATE_TEXT = re.compile(r"\d{4}|\d+\s*[/.-]\s*\d+\s*[/.-]\s*\d+")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _leading_int(part: str) -> int | None:
    """Integer prefix of a clock component ('07' -> 7, '' -> 0, 'ab' -> None)."""
    if not part.strip():
        return 0
    m = _LEADING_INT.match(part)
    return int(m.group(1)) if m else None


def _clock_parts(text: str) -> tuple[int, int] | None:
    parts = text.strip().split(":")
    hours = _leading_int(parts[0])
    minutes = _leading_int(parts[1]) if len(parts) > 1 else 0
    if hours is None or minutes is None:
        return None
    return hours, minutes


def _format_minutes(total_minutes: int) -> str:
    hh = (total_minutes // 60) % 24
    mm = total_minutes % 60
    return f"{hh:02d}:{mm:02d}"


def to_date_str(value: Any, *, dayfirst: bool = True) -> str | None:
    """Calendar date of a cell as YYYY-MM-DD, or None.

    Clock-only values (time, timedelta, "07:00") carry no date and yield None.
    Text is tried as ISO 8601 first; `dayfirst` only applies to other layouts
    such as 01/03/2024.
    """
    cell = Cell.of(value)
    if cell.kind is CellKind.TEMPORAL:
        if isinstance(cell.value, (datetime, date)):
            return cell.value.strftime("%Y-%m-%d")
        return None
    if cell.kind is CellKind.NUMBER:
        serial = float(cell.value)
        if not math.isfinite(serial) or serial < 1 or serial > MAX_SERIAL:
            return None
        day = SERIAL_EPOCH + timedelta(days=math.floor(serial))
        return day.strftime("%Y-%m-%d")
    if cell.kind is CellKind.TEXT:
        text = cell.value.strip()
        if not _DATE_TEXT.search(text):
            return None
        try:
            # ISO text is never read day-first
            ts = pd.to_datetime(text, format="ISO8601", errors="coerce")
            if pd.isna(ts):
                ts = pd.to_datetime(text, errors="coerce", dayfirst=dayfirst)
        except (ValueError, TypeError, OverflowError):
            return None
        if pd.isna(ts):
            return None
        return ts.strftime("%Y-%m-%d")
    return None


def to_hhmm(value: Any) -> str | None:
    """Clock time of a cell as zero-padded 24h HH:MM, or None.

    Examples:
        >>> to_hhmm(0.5)
        '12:00'
        >>> to_hhmm("7:5")
        '07:05'
    """
    cell = Cell.of(value)
    if cell.kind is CellKind.TEMPORAL:
        v = cell.value
        if isinstance(v, timedelta):
            return _format_minutes(_round_half_up(v.total_seconds() / 60))
        if isinstance(v, (datetime, time)):
            return f"{v.hour:02d}:{v.minute:02d}"
        return "00:00"  # plain date: midnight
    if cell.kind is CellKind.NUMBER:
        fraction = float(cell.value)
        if not math.isfinite(fraction):
            return None
        return _format_minutes(_round_half_up(fraction * MINUTES_PER_DAY))
    if cell.kind is CellKind.TEXT and ":" in cell.value:
        parts = _clock_parts(cell.value)
        if parts is None:
            return None
        return f"{parts[0]:02d}:{parts[1]:02d}"
    return None


def time_to_hours(value: Any) -> float | None:
    """Decimal hours held by a time or duration cell, rounded to 4 places.

    Text without ':' is read as a plain number of hours ("7,5" -> 7.5).
    """
    cell = Cell.of(value)
    if cell.kind is CellKind.TEMPORAL:
        v = cell.value
        if isinstance(v, timedelta):
            return round(v.total_seconds() / 3600, 4)
        if isinstance(v, (datetime, time)):
            return round(v.hour + v.minute / 60, 4)
        return 0.0
    if cell.kind is CellKind.NUMBER:
        fraction = float(cell.value)
        if not math.isfinite(fraction):
            return None
        return round(fraction * 24, 4)
    if cell.kind is CellKind.TEXT:
        if ":" in cell.value:
            parts = _clock_parts(cell.value)
            if parts is None:
                return None
            return round(parts[0] + parts[1] / 60, 4)
        number = parse_number_br(cell.value)
        return round(number, 4) if number is not None else None
    return None


def time_to_minutes(value: Any) -> int | None:
    """Whole minutes held by a time or duration cell ("01:30" -> 90)."""
    hours = time_to_hours(value)
    if hours is None:
        return None
    return _round_half_up(hours * 60)


def span_hours(start: str | None, end: str | None) -> float | None:
    """Hours between two HH:MM clock times, wrapping past midnight."""
    if start is None or end is None:
        return None
    start_h, start_m = (int(p) for p in start.split(":"))
    end_h, end_m = (int(p) for p in end.split(":"))
    minutes = (end_h * 60 + end_m) - (start_h * 60 + start_m)
    if minutes < 0:
        minutes += MINUTES_PER_DAY
    return round(minutes / 60, 4)
