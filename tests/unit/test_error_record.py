from __future__ import annotations

import json

from production_import.models.error_record import ROW_SKIPPED_NO_DATE, TONNAGE_UNRESOLVED, ErrorRecord

"""Unit tests for ErrorRecord model."""

KEYS = {"timestamp", "file", "sheet", "row", "error_type", "message"}


def test_error_record_row_minus_one_support():
    """row=-1 marks sheet-level issues."""
    rec = ErrorRecord.create(
        file="producao.xlsx",
        sheet="Planilha1",
        row=-1,
        error_type="SHEET_LEVEL",
        message="header row is empty"
    )

    assert rec.row == -1
    data = json.loads(rec.to_json_line())
    assert data["row"] == -1
    assert data["file"] == "producao.xlsx"
    assert data["sheet"] == "Planilha1"
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == KEYS


def test_error_record_row_skipped():
    rec = ErrorRecord.create(
        file="producao.xlsx",
        sheet="Planilha1",
        row=42,
        error_type=ROW_SKIPPED_NO_DATE,
        message="neither DATA INICIO nor DATA FIM holds a date"
    )

    data = json.loads(rec.to_json_line())
    assert data["row"] == 42
    assert data["error_type"] == "ROW_SKIPPED_NO_DATE"


def test_error_record_keeps_non_ascii_text():
    rec = ErrorRecord.create("produção.xlsx", "Março", 5, TONNAGE_UNRESOLVED, "sem tonelagem")
    line = rec.to_json_line()
    assert "produção.xlsx" in line
    assert json.loads(line)["sheet"] == "Março"
