from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields
from typing import Any

"""ProductionRecord model: the output unit of the importer.

One record represents one shift / equipment / date production entry. Fields
reserved for enrichment by the dashboard (user_id, group_id, moisture, operator,
tph_target, tph_delta, grade, stops_json) are always emitted empty.
"""

__all__ = [
    "ProductionRecord",
    "new_record_id",
]

DEFAULT_ID_PREFIX = "imp_"


def new_record_id(prefix: str = DEFAULT_ID_PREFIX) -> str:
    """Return a fresh identifier: prefix + first 12 hex chars of a UUID4."""
    return prefix + uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class ProductionRecord:
    """Canonical production entry built from exactly one worksheet row.

    Invariants:
        tph is set only when hours > 0 and tonnage is known.
        tph_operational is set only when op_hours > 0 and tonnage is known.
        date is always set (rows without a date are never turned into records).
    """
    id: str
    date: str  # YYYY-MM-DD
    user_id: str | None = None
    group_id: str | None = None
    start: str | None = None  # HH:MM
    end: str | None = None  # HH:MM
    shift: str | None = None
    stage: str | None = None
    equipment: str | None = None
    tonnage: float | None = None
    moisture: float | None = None
    operator: str | None = None
    notes: str | None = None
    hours: float | None = None  # worked hours
    tph: float | None = None
    downtime_min: int | None = None
    downtime_cause: str | None = None
    op_hours: float | None = None  # operational hours
    tph_operational: float | None = None
    tph_target: float | None = None
    tph_delta: float | None = None
    grade: str | None = None
    stops_json: list[Any] = field(default_factory=list)

    # Output key order of the JSON document consumed by the dashboard
    OUTPUT_FIELDS = (
        "id", "user_id", "group_id", "date", "start", "end", "shift", "stage",
        "equipment", "tonnage", "moisture", "operator", "notes", "hours", "tph",
        "downtime_min", "downtime_cause", "op_hours", "tph_operational",
        "tph_target", "tph_delta", "grade", "stops_json",
    )

    def to_dict(self) -> dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        return {name: data[name] for name in self.OUTPUT_FIELDS}
