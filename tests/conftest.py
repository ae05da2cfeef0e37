# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Callable

import pandas as pd
import pytest

from production_import.logging.init import reset_logging


HEADER = [
    "Data Início", "Data Fim", "Início", "Fim", "Equipamento", "Grupo", "Turno",
    "Horas de Trabalho", "Horas de Produção", "Qtd Ton", "Motivo",
]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("IMPORT_CONFIG", raising=False)
        monkeypatch.delenv("IMPORT_OUTPUT", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """input_path: ./data/producao.xlsx
output_path: ./out/entries.json
header_row: 1
dayfirst: true
id_prefix: imp_
default_stage: Moagem
field_aliases:
  equipment: [MAQUINA]
tonnage_labels: [PESO LIQUIDO]
issue_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_rows() -> list[list[object]]:
    """Header plus one importable row and one row without any date."""
    return [
        HEADER,
        ["01/03/2024", None, "07:00", "19:00", "moinho 1", "Moagem", "diurno", None, "10", 500, None],
        [None, None, "19:00", "07:00", "moinho 1", "Moagem", "noturno", None, "10", 400, None],
    ]


@pytest.fixture()
def make_workbook() -> Callable[..., Path]:
    """Build a real .xlsx (openpyxl) from a list of rows; first row is the header."""
    def _make(path: Path, rows: list[list[object]], sheet_name: str = "Planilha1") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
        return path
    return _make
