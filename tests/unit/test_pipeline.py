from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

import pytest

from production_import.excel.reader import ImportSourceError
from production_import.logging.error_log import ErrorLogBuffer
from production_import.models.config_models import ImportConfig
from production_import.models.error_record import ROW_SKIPPED_NO_DATE, TONNAGE_UNRESOLVED
from production_import.models.row_data import RowData
from production_import.services.pipeline import import_workbook, run_pipeline


HEADER = ["Data Início", "Equipamento", "Horas de Trabalho", "Qtd Ton"]


def _rows(*values: list) -> list[RowData]:
    return [RowData(row_number=i + 2, values=dict(zip(HEADER, v))) for i, v in enumerate(values)]


def test_run_pipeline_keeps_source_order_and_counts():
    rows = _rows(
        [datetime(2024, 3, 1), "M1", "12:00", 600],
        [None, "M2", "12:00", 100],
        [datetime(2024, 3, 2), "M3", "12:00", None],
        [datetime(2024, 3, 3), "M4", "12:00", "1.200,00"],
    )

    result = run_pipeline(HEADER, rows)

    assert [r.equipment for r in result.records] == ["M1", "M3", "M4"]
    assert [r.tonnage for r in result.records] == [600.0, None, 1200.0]
    stats = result.statistics
    assert stats.rows_read == 4
    assert stats.records_emitted == 3
    assert stats.skipped_rows == 1
    assert stats.without_tonnage == 1
    assert stats.computed_from_ton_per_hour == 0
    assert stats.tonnage_key == "QTD TON"
    assert result.header_map["QTD TON"] == "Qtd Ton"


def test_run_pipeline_empty_rows():
    result = run_pipeline(HEADER, [])
    assert result.records == []
    assert result.statistics.rows_read == 0
    assert result.statistics.tonnage_key is None
    assert result.to_list() == []


def test_run_pipeline_records_row_issues():
    rows = _rows(
        [None, "M1", "12:00", 600],
        [datetime(2024, 3, 2), "M2", "12:00", None],
    )
    issue_log = ErrorLogBuffer()

    run_pipeline(HEADER, rows, issue_log=issue_log, source_name="p.xlsx", sheet_name="S")

    issues = issue_log.records
    assert [(i.row, i.error_type) for i in issues] == [(2, ROW_SKIPPED_NO_DATE), (3, TONNAGE_UNRESOLVED)]
    assert all(i.file == "p.xlsx" and i.sheet == "S" for i in issues)


def test_run_pipeline_verbose_logs_header_map(caplog):
    with caplog.at_level(logging.INFO, logger="production_import"):
        run_pipeline(HEADER, [], verbose=True)
    assert "headers detected (normalized -> original):" in caplog.text
    assert "DATA INICIO -> Data Início" in caplog.text


def test_run_pipeline_verbose_does_not_change_records():
    rows = _rows([datetime(2024, 3, 1), "M1", "12:00", 600])
    quiet = run_pipeline(HEADER, rows).to_list()
    loud = run_pipeline(HEADER, rows, verbose=True).to_list()
    for a, b in zip(quiet, loud):
        a.pop("id")
        b.pop("id")
    assert quiet == loud


def test_run_pipeline_uses_config_aliases():
    header = ["Data Início", "Máquina", "Peso Líquido"]
    rows = [RowData(2, {"Data Início": datetime(2024, 3, 1), "Máquina": "m9", "Peso Líquido": "12,5"})]
    config = ImportConfig(field_aliases={"equipment": ["MAQUINA"]}, tonnage_labels=["PESO LIQUIDO"])

    result = run_pipeline(header, rows, config)

    assert result.records[0].equipment == "M9"
    assert result.records[0].tonnage == 12.5
    assert result.statistics.tonnage_key == "PESO LIQUIDO"


def test_import_workbook_writes_json(temp_workdir: Path, make_workbook, sample_rows):
    src = make_workbook(temp_workdir / "data" / "producao.xlsx", sample_rows)
    out = temp_workdir / "out" / "entries.json"

    result = import_workbook(src, ImportConfig(issue_log_dir=str(temp_workdir / "logs")), output_path=out)

    entries = json.loads(out.read_text(encoding="utf-8"))
    assert entries == result.to_list()
    assert len(entries) == 1
    issue_files = list((temp_workdir / "logs").glob("issues-*.log"))
    assert len(issue_files) == 1


def test_import_workbook_missing_input_writes_nothing(temp_workdir: Path):
    out = temp_workdir / "out.json"
    with pytest.raises(ImportSourceError):
        import_workbook(temp_workdir / "nope.xlsx", output_path=out)
    assert not out.exists()


def test_run_pipeline_reads_iso_text_dates_as_written():
    rows = _rows(["2024-03-01", "M1", "12:00", 10], ["2024-03-12", "M2", "12:00", 20])

    result = run_pipeline(HEADER, rows)

    assert [r.date for r in result.records] == ["2024-03-01", "2024-03-12"]


def test_run_pipeline_skips_clock_text_in_date_column():
    rows = _rows(["07:00", "M1", "12:00", 10])

    result = run_pipeline(HEADER, rows)

    assert result.records == []
    assert result.statistics.rows_read == 1
    assert result.statistics.skipped_rows == 1
