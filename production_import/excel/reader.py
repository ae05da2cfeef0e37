from __future__ import annotations

import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.cell import Cell
from ..models.row_data import RowData

"""Workbook reader.

The worksheet is read raw (header=None) with pandas so that cell types survive
untouched: datetimes stay datetimes, time-formatted cells come back as
datetime.time, numbers stay numbers. The configured header row supplies the
labels; every following non-blank row becomes a RowData.
"""

__all__ = [
    "ImportSourceError",
    "SheetData",
    "read_sheet",
    "read_workbook",
    "split_header",
]


class ImportSourceError(Exception):
    """Raised when the input workbook is missing, unreadable or lacks a header row."""


@dataclass
class SheetData:
    sheet_name: str
    header: list[Any]  # original labels, sheet order (blank cells as None)
    rows: list[RowData]


def read_sheet(path: Path, sheet: str | int | None = None) -> tuple[str, pd.DataFrame]:
    """Read one worksheet without header interpretation.

    Parameters
    ----------
    path: workbook path
    sheet: sheet name or 0-based index (None = first sheet)
    """
    if not path.exists():
        raise ImportSourceError(f"input file not found: {path}")
    try:
        xls = pd.ExcelFile(path)
    except (ValueError, OSError, zipfile.BadZipFile) as e:
        raise ImportSourceError(f"cannot read workbook {path}: {e}") from e
    names = [str(n) for n in xls.sheet_names]
    if not names:
        raise ImportSourceError(f"workbook has no sheets: {path}")
    if sheet is None:
        name = names[0]
    elif isinstance(sheet, int):
        if sheet < 0 or sheet >= len(names):
            raise ImportSourceError(f"sheet index {sheet} out of range (sheets={names})")
        name = names[sheet]
    else:
        if sheet not in names:
            raise ImportSourceError(f"sheet '{sheet}' not found (sheets={names})")
        name = sheet
    df = xls.parse(name, header=None)
    return name, df


def split_header(df: pd.DataFrame, sheet_name: str, header_row: int = 1) -> SheetData:
    """Use worksheet row `header_row` (1-based) as labels, later rows as data.

    Steps:
    1. Validate the header row exists
    2. Extract labels (blank cells kept as None so column positions survive)
    3. Build one RowData per data row, skipping rows whose cells are all blank
    """
    if header_row < 1 or df.shape[0] < header_row:
        raise ImportSourceError(f"sheet '{sheet_name}' lacks header row {header_row}")
    header: list[Any] = []
    for label in df.iloc[header_row - 1].tolist():
        header.append(None if Cell.of(label).is_empty else label)

    rows: list[RowData] = []
    data_part = df.iloc[header_row:]
    for offset, (_, raw) in enumerate(data_part.iterrows()):
        if raw.isna().all():
            continue
        values: dict[str, Any] = {}
        for label, val in zip(header, raw.tolist(), strict=False):
            if label is None:
                continue
            values[str(label)] = None if Cell.of(val).is_empty else val
        rows.append(RowData(row_number=header_row + offset + 1, values=values))
    return SheetData(sheet_name=sheet_name, header=header, rows=rows)


def read_workbook(path: Path, sheet: str | int | None = None, header_row: int = 1) -> SheetData:
    """Read a workbook into header labels plus data rows."""
    name, df = read_sheet(path, sheet)
    return split_header(df, name, header_row)
