from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""Issue records written to the JSON Lines issue log.

An issue points an operator back to a worksheet row that was skipped or that
produced a record without tonnage. row=-1 is used for sheet-level issues.
"""

__all__ = [
    "ErrorRecord",
    "ROW_SKIPPED_NO_DATE",
    "TONNAGE_UNRESOLVED",
]

# Issue types (UPPER_SNAKE_CASE)
ROW_SKIPPED_NO_DATE = "ROW_SKIPPED_NO_DATE"
TONNAGE_UNRESOLVED = "TONNAGE_UNRESOLVED"


@dataclass(frozen=True)
class ErrorRecord:
    """One issue-log line; the key set is fixed."""
    timestamp: str  # UTC, ISO8601 with 'Z'
    file: str  # workbook file name
    sheet: str
    row: int  # 1-based worksheet row, -1 when not tied to a row
    error_type: str
    message: str

    @staticmethod
    def create(file: str, sheet: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Build a record stamped with the current UTC time."""
        stamp = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(stamp, file, sheet, row, error_type, message)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
