"""Workbook input and JSON output."""

from .reader import ImportSourceError, SheetData, read_workbook
from .writer import write_records

__all__ = [
    "ImportSourceError",
    "SheetData",
    "read_workbook",
    "write_records",
]
