from __future__ import annotations

from ..models.run_statistics import RunStatistics

"""Summary rendering for the end of an import run.

The SUMMARY line is whitespace-delimited key=value pairs so it can be grepped
and parsed; the completion lines are the human-readable counterpart.
"""

NO_TONNAGE_COLUMN = "(none - tonnage may have been derived from TON/HR x hours)"


def render_summary_line(statistics: RunStatistics) -> str:
    """Render the SUMMARY line for a finished run.

    Format:
    SUMMARY records={n} rows={rows} skipped={skipped} tonnage_column={key|-}
    from_ton_per_hour={k} without_tonnage={m}

    Spaces inside the tonnage column key are replaced by '_'.

    Examples:
        >>> stats = RunStatistics(rows_read=3, records_emitted=2, tonnage_key="QTD TON")
        >>> render_summary_line(stats)
        'SUMMARY records=2 rows=3 skipped=1 tonnage_column=QTD_TON from_ton_per_hour=0 without_tonnage=0'
    """
    column = statistics.tonnage_key.replace(" ", "_") if statistics.tonnage_key else "-"
    return (
        f"SUMMARY records={statistics.records_emitted} "
        f"rows={statistics.rows_read} "
        f"skipped={statistics.skipped_rows} "
        f"tonnage_column={column} "
        f"from_ton_per_hour={statistics.computed_from_ton_per_hour} "
        f"without_tonnage={statistics.without_tonnage}"
    )


def render_completion_lines(statistics: RunStatistics, output_path: str) -> list[str]:
    """Human-readable completion report (one log line per entry)."""
    return [
        f"wrote {statistics.records_emitted} records to {output_path}",
        f"tonnage column used: {statistics.tonnage_key or NO_TONNAGE_COLUMN}",
        f"tonnage derived from TON/HR x hours: {statistics.computed_from_ton_per_hour}",
        f"rows without tonnage: {statistics.without_tonnage}",
    ]
