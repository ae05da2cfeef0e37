from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from ..models.production_record import ProductionRecord

"""JSON output for imported records (UTF-8, indented, non-ASCII preserved)."""

__all__ = [
    "write_records",
]


def write_records(records: Iterable[ProductionRecord], path: Path) -> Path:
    """Write records as one JSON array, in the given order."""
    payload = [r.to_dict() for r in records]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return path
