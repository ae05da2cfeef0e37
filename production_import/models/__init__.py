"""Domain models for the production spreadsheet importer.

This package contains the model classes shared by the parsers, the column
resolver, the record builder and the pipeline driver.
"""

from .cell import Cell, CellKind
from .config_models import ImportConfig
from .error_record import ErrorRecord
from .production_record import ProductionRecord, new_record_id
from .row_data import RowData
from .run_statistics import PipelineResult, RunStatistics

__all__ = [
    # Configuration models
    "ImportConfig",
    # Input models
    "Cell",
    "CellKind",
    "RowData",
    # Output models
    "ProductionRecord",
    "new_record_id",
    "PipelineResult",
    "RunStatistics",
    "ErrorRecord",
]
