from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from production_import.models.error_record import ErrorRecord

"""Issue log for row-level problems that do not stop an import.

Issues are collected in memory while the rows are processed and written once
at the end of the run, one JSON object per line, to
`<issue_log_dir>/issues-YYYYMMDD-HHMMSS.log` (UTC). A clean run writes no file.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Collects ErrorRecords for one run; flush() appends them as JSON Lines."""

    def __init__(self, logs_dir: Path | str | None = None) -> None:
        self._logs_dir = LOGS_DIR if logs_dir is None else Path(logs_dir)
        self._pending: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        """Log file of this run; the directory is created on first use."""
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            name = f"issues-{datetime.now(UTC).strftime(TIMESTAMP_FMT)}.log"
            self._file_path = self._logs_dir / name
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    @property
    def records(self) -> list[ErrorRecord]:
        """Copy of the records not yet flushed."""
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Write pending records and return the file, or None if there were none."""
        if not self._pending:
            return None
        lines = "".join(r.to_json_line() + "\n" for r in self._pending)
        with self.file_path.open("a", encoding="utf-8") as f:
            f.write(lines)
        self._pending.clear()
        return self.file_path
