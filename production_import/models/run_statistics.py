from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .production_record import ProductionRecord

"""Run statistics and pipeline result models.

RunStatistics is created at run start, mutated once per row by the record
builder / pipeline, and read once at the end for the completion summary.
"""

__all__ = [
    "PipelineResult",
    "RunStatistics",
]


@dataclass
class RunStatistics:
    """Counters accumulated across a single import run."""
    rows_read: int = 0  # data rows handed to the pipeline
    records_emitted: int = 0  # rows that produced a record
    computed_from_ton_per_hour: int = 0  # tonnage derived as TON/HR x hours
    without_tonnage: int = 0  # records left with tonnage = None
    tonnage_key: str | None = None  # normalized column finally used for tonnage

    @property
    def skipped_rows(self) -> int:
        """Rows dropped because no date could be resolved."""
        return self.rows_read - self.records_emitted


@dataclass(frozen=True)
class PipelineResult:
    """Output of one pipeline run: records in source order plus statistics."""
    records: list[ProductionRecord]
    statistics: RunStatistics
    header_map: dict[str, Any] = field(default_factory=dict)  # normalized -> original

    def to_list(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self.records]
