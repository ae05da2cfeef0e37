from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..excel.reader import read_workbook
from ..excel.writer import write_records
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import ImportConfig
from ..models.error_record import ROW_SKIPPED_NO_DATE, TONNAGE_UNRESOLVED, ErrorRecord
from ..models.production_record import ProductionRecord
from ..models.row_data import RowData
from ..models.run_statistics import PipelineResult, RunStatistics
from .column_resolver import ColumnResolver, normalize_row
from .progress import ProgressTracker
from .record_builder import build_record

"""Pipeline driver for the production spreadsheet importer.

Reads every row, builds one record per row with a resolvable date, keeps
source order, accumulates run statistics and records row-level issues. The
column resolver (and its pinned tonnage column) lives for exactly one run.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "import_workbook",
    "run_pipeline",
]


def _log_header_map(resolver: ColumnResolver) -> None:
    logger.info("headers detected (normalized -> original):")
    for normalized, original in resolver.describe():
        logger.info("  %s -> %s", normalized, original)


def run_pipeline(
    header: Sequence[Any],
    rows: Sequence[RowData],
    config: ImportConfig | None = None,
    *,
    verbose: bool = False,
    issue_log: ErrorLogBuffer | None = None,
    source_name: str = "",
    sheet_name: str = "",
) -> PipelineResult:
    """Turn worksheet rows into ProductionRecords.

    Args:
        header: Original header labels in sheet order
        rows: Data rows in sheet order
        config: Import configuration (defaults when None)
        verbose: Log the header normalization map before processing
        issue_log: Buffer receiving row-level issues (skipped rows, missing tonnage)
        source_name: Workbook name used in issue records
        sheet_name: Sheet name used in issue records

    Returns:
        PipelineResult with records in source order and the run statistics
    """
    config = config or ImportConfig()
    resolver = ColumnResolver(
        header,
        field_aliases=config.field_aliases,
        tonnage_labels=config.tonnage_labels,
    )
    if verbose:
        _log_header_map(resolver)

    statistics = RunStatistics()
    records: list[ProductionRecord] = []

    with ProgressTracker(len(rows), description="Importing rows") as progress:
        for row in rows:
            statistics.rows_read += 1
            normalized = normalize_row(row.values)
            without_before = statistics.without_tonnage
            record = build_record(normalized, resolver, statistics, config)
            progress.advance()
            if record is None:
                logger.debug("row=%d skipped: no date", row.row_number)
                if issue_log is not None:
                    issue_log.append(ErrorRecord.create(
                        file=source_name,
                        sheet=sheet_name,
                        row=row.row_number,
                        error_type=ROW_SKIPPED_NO_DATE,
                        message="neither DATA INICIO nor DATA FIM holds a date",
                    ))
                continue
            records.append(record)
            statistics.records_emitted += 1
            if issue_log is not None and statistics.without_tonnage > without_before:
                issue_log.append(ErrorRecord.create(
                    file=source_name,
                    sheet=sheet_name,
                    row=row.row_number,
                    error_type=TONNAGE_UNRESOLVED,
                    message="no tonnage column value and no TON/HR x hours fallback",
                ))
            progress.set_postfix(records=statistics.records_emitted)

    statistics.tonnage_key = resolver.binding.tonnage_key
    return PipelineResult(records=records, statistics=statistics, header_map=resolver.header_map)


def import_workbook(
    input_path: Path,
    config: ImportConfig | None = None,
    *,
    output_path: Path | None = None,
    verbose: bool = False,
) -> PipelineResult:
    """Read a workbook, run the pipeline and write the JSON output.

    Raises:
        ImportSourceError: input missing or unreadable (nothing is written)
        OSError: output file cannot be written
    """
    config = config or ImportConfig()
    sheet = read_workbook(input_path, sheet=config.sheet, header_row=config.header_row)
    logger.debug("sheet=%s header=%s rows=%d", sheet.sheet_name, sheet.header, len(sheet.rows))

    issue_log = ErrorLogBuffer(config.issue_log_dir)
    result = run_pipeline(
        sheet.header,
        sheet.rows,
        config,
        verbose=verbose,
        issue_log=issue_log,
        source_name=input_path.name,
        sheet_name=sheet.sheet_name,
    )

    target = output_path or Path(config.output_path)
    write_records(result.records, target)

    try:
        issues_path = issue_log.flush()
    except OSError as e:
        # Issue log is diagnostic only; the import itself already succeeded
        logger.warning("could not write issue log: %s", e)
    else:
        if issues_path is not None:
            logger.info("row issues logged to %s", issues_path)
    return result
