from __future__ import annotations

import re
from pathlib import Path

from production_import.cli import main as cli_main

"""SUMMARY line format contract.

The last line of every successful run is a SUMMARY line of key=value pairs,
parsed by operators' scripts.
"""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+records=([0-9]+)\s+rows=([0-9]+)\s+skipped=([0-9]+)\s+"
    r"tonnage_column=(\S+)\s+from_ton_per_hour=([0-9]+)\s+without_tonnage=([0-9]+)$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY records=2 rows=3 skipped=1 tonnage_column=QTD_TON "
        "from_ton_per_hour=0 without_tonnage=0"
    )
    assert SUMMARY_PATTERN.match(line), "SUMMARY line should match contract regex"


def test_summary_pattern_rejects_missing_fields():
    assert not SUMMARY_PATTERN.match("SUMMARY records=2 rows=3")


def test_cli_summary_is_last_line(write_config, temp_workdir: Path, make_workbook, sample_rows, capsys):
    make_workbook(temp_workdir / "data" / "producao.xlsx", sample_rows)

    code = cli_main([])

    lines = capsys.readouterr().out.strip().splitlines()
    assert code == 0
    m = SUMMARY_PATTERN.match(lines[-1])
    assert m, f"last line should be SUMMARY: {lines[-1]}"
    assert m.groups() == ("1", "2", "1", "QTD_TON", "0", "0")


def test_cli_summary_without_tonnage_column(write_config, temp_workdir: Path, make_workbook, capsys):
    make_workbook(temp_workdir / "data" / "producao.xlsx", [
        ["Data Início", "Equipamento"],
        ["01/03/2024", "M1"],
    ])

    code = cli_main([])

    out = capsys.readouterr().out
    assert code == 0
    last = out.strip().splitlines()[-1]
    assert last == (
        "SUMMARY records=1 rows=1 skipped=0 tonnage_column=- from_ton_per_hour=0 without_tonnage=1"
    )
    assert "INFO tonnage column used: (none - tonnage may have been derived from TON/HR x hours)" in out
