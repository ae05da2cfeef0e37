"""Import services: column resolution, record building, pipeline and reporting."""

from .column_resolver import ColumnBinding, ColumnResolver
from .pipeline import import_workbook, run_pipeline
from .record_builder import build_record
from .summary import render_completion_lines, render_summary_line

__all__ = [
    "ColumnBinding",
    "ColumnResolver",
    "build_record",
    "import_workbook",
    "render_completion_lines",
    "render_summary_line",
    "run_pipeline",
]
