from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclass for the production spreadsheet importer.

Separate from the YAML loader in production_import/config/loader.py so the
pipeline can be driven from tests without touching the filesystem.
"""

__all__ = [
    "ImportConfig",
]


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for one import run.

    Every key is optional in the YAML file; the defaults below reproduce the
    behaviour of a run without any config file.
    """
    input_path: str = "PARA IMPORTAR.xlsx"  # Workbook read when no CLI argument is given
    output_path: str = "import_entries.json"  # JSON array written at the end of the run
    sheet: str | int | None = None  # Sheet name or 0-based index (None = first sheet)
    header_row: int = 1  # 1-based worksheet row holding the column labels
    dayfirst: bool = True  # Text dates like 01/03/2024 are read day-first
    id_prefix: str = "imp_"
    default_stage: str = "Moagem"  # Stage used when the GRUPO cell is empty
    field_aliases: dict[str, list[str]] = field(default_factory=dict)  # Extra labels per field
    tonnage_labels: list[str] = field(default_factory=list)  # Extra exact tonnage labels (lowest priority)
    issue_log_dir: str = "logs"
