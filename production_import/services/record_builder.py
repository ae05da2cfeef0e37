from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..models.cell import Cell
from ..models.config_models import ImportConfig
from ..models.production_record import ProductionRecord, new_record_id
from ..models.run_statistics import RunStatistics
from ..parsing.numeric import parse_number_br
from ..parsing.temporal import span_hours, time_to_hours, time_to_minutes, to_date_str, to_hhmm
from ..parsing.text import cell_text, map_shift, map_stage
from .column_resolver import ColumnResolver

"""Record builder: one normalized worksheet row -> one ProductionRecord.

No step raises for a malformed cell. Parsers degrade to None and derived
metrics are left out when one of their inputs is missing. The only reason a
row produces no record is an unresolvable date.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "build_record",
    "derive_downtime",
    "derive_op_hours",
    "rate",
]


def derive_downtime(worked_hours: float | None, production_hours: float | None) -> int | None:
    """Stoppage minutes implied by worked vs production hours, clamped at 0."""
    if worked_hours is None or production_hours is None:
        return None
    return max(round((worked_hours - production_hours) * 60), 0)


def derive_op_hours(
    worked_hours: float | None,
    production_hours: float | None,
    downtime_min: int | None,
) -> float | None:
    """Operational hours: production hours, else worked hours minus downtime."""
    if production_hours is not None:
        return production_hours
    if worked_hours is not None and downtime_min is not None:
        return worked_hours - downtime_min / 60
    return None


def rate(tonnage: float | None, hours: float | None) -> float | None:
    """Tonnes per hour rounded to 2 places; None unless hours > 0."""
    if tonnage is None or hours is None or hours <= 0:
        return None
    return round(tonnage / hours, 2)


def _resolve_tonnage(
    row: Mapping[str, Any],
    resolver: ColumnResolver,
    statistics: RunStatistics,
    base_hours: float | None,
) -> float | None:
    tonnage = None
    key = resolver.tonnage_key(row)
    if key is not None and not Cell.of(row.get(key)).is_empty:
        tonnage = parse_number_br(row[key])
        resolver.pin_tonnage(key)

    if tonnage is None:
        ton_per_hour = parse_number_br(resolver.ton_per_hour_value(row))
        if ton_per_hour is not None and base_hours is not None:
            tonnage = round(ton_per_hour * base_hours, 2)
            statistics.computed_from_ton_per_hour += 1
            logger.debug("tonnage derived ton_per_hour=%s hours=%s tonnage=%s", ton_per_hour, base_hours, tonnage)

    if tonnage is None:
        statistics.without_tonnage += 1
    return tonnage


def build_record(
    row: Mapping[str, Any],
    resolver: ColumnResolver,
    statistics: RunStatistics,
    config: ImportConfig | None = None,
) -> ProductionRecord | None:
    """Assemble a ProductionRecord from a row keyed by normalized header.

    Returns None (row skipped) when neither DATA INICIO nor DATA FIM holds a
    date. Tonnage fallbacks are counted on statistics.
    """
    config = config or ImportConfig()

    date = to_date_str(resolver.lookup(row, "date_start"), dayfirst=config.dayfirst) or to_date_str(
        resolver.lookup(row, "date_end"), dayfirst=config.dayfirst
    )
    if date is None:
        return None

    start = to_hhmm(resolver.lookup(row, "start"))
    end = to_hhmm(resolver.lookup(row, "end"))

    worked_hours = time_to_hours(resolver.lookup(row, "worked_hours"))
    if worked_hours is None:
        worked_hours = span_hours(start, end)
    production_hours = time_to_hours(resolver.lookup(row, "production_hours"))

    downtime_min = time_to_minutes(resolver.lookup(row, "downtime_minutes"))
    if downtime_min is None:
        downtime_min = derive_downtime(worked_hours, production_hours)

    stage = map_stage(resolver.lookup(row, "stage"), default=config.default_stage)
    equipment = cell_text(resolver.lookup(row, "equipment"))
    shift = map_shift(resolver.lookup(row, "shift"))
    cause = cell_text(resolver.lookup(row, "cause"))

    base_hours = production_hours if production_hours is not None else worked_hours
    tonnage = _resolve_tonnage(row, resolver, statistics, base_hours)

    op_hours = derive_op_hours(worked_hours, production_hours, downtime_min)

    return ProductionRecord(
        id=new_record_id(config.id_prefix),
        date=date,
        start=start,
        end=end,
        shift=shift,
        stage=stage,
        equipment=equipment.upper() if equipment else None,
        tonnage=tonnage,
        notes=cause,
        hours=worked_hours,
        tph=rate(tonnage, worked_hours),
        downtime_min=downtime_min,
        downtime_cause=cause,
        op_hours=op_hours,
        tph_operational=rate(tonnage, op_hours),
    )
