from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..models.cell import Cell
from ..parsing.text import normalize_key

"""Column resolution: which worksheet column holds which semantic field.

Label tables are plain data so the lookup order can be inspected and tested
field by field. Tonnage is resolved through an ordered priority list with a
regex fallback; once a row yields a tonnage value through some column, that
column is pinned for the rest of the run.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ColumnBinding",
    "ColumnResolver",
    "FIELD_LABELS",
    "TONNAGE_LABELS",
    "build_header_map",
    "find_tonnage_key",
    "normalize_row",
]

# Semantic field -> accepted header labels, checked in order (first non-empty value wins)
FIELD_LABELS: dict[str, tuple[str, ...]] = {
    "date_start": ("DATA INICIO",),
    "date_end": ("DATA FIM",),
    "start": ("INICIO",),
    "end": ("FIM",),
    "worked_hours": ("HORAS DE TRABALHO",),
    "production_hours": ("HORAS DE PRODUCAO", "HORAS DE PRODUÇÃO"),
    "downtime_minutes": ("PARADAS MINUTOS",),
    "stage": ("GRUPO",),
    "shift": ("TURNO",),
    "equipment": ("EQUIPAMENTO",),
    "cause": ("MOTIVO",),
}

TONNAGE_LABELS: tuple[str, ...] = (
    "QTD TON",
    "QTD T",
    "QTD (TON)",
    "TONELADAS",
    "TONELADA",
    "TON",
    "QTD_TON",
    "QTDTON",
    "QTD (T)",
    "PRODUCAO T",
    "PRODUCAO (T)",
    "PRODUCAO TON",
    "TOTAL TON",
    "TOTAL (T)",
)

TONNAGE_FUZZY = re.compile(r"QTD.*TON|TONELAD|PRODUCAO.*T")
TON_PER_HOUR_HEADER = re.compile(
    r"(^|[^A-Z])TON/?HR([^A-Z]|$)|(^|[^A-Z])T/?H([^A-Z]|$)|TONELADAS POR HORA|TON POR HORA"
)
TON_PER_HOUR_FUZZY = re.compile(r"TON/?HR|T/?H|TON POR HORA|TONELADAS POR HORA")


def _dedupe(labels: Iterable[str]) -> tuple[str, ...]:
    seen: list[str] = []
    for label in labels:
        key = normalize_key(label)
        if key and key not in seen:
            seen.append(key)
    return tuple(seen)


def build_header_map(header: Sequence[Any]) -> dict[str, Any]:
    """Normalized label -> original label, in sheet order (blank headers skipped)."""
    header_map: dict[str, Any] = {}
    for label in header:
        if Cell.of(label).is_empty:
            continue
        key = normalize_key(label)
        if key:
            header_map[key] = label
    return header_map


def normalize_row(values: Mapping[Any, Any]) -> dict[str, Any]:
    """Re-key a raw row by normalized header label (later duplicates win)."""
    return {normalize_key(k): v for k, v in values.items()}


def find_tonnage_key(row: Mapping[str, Any], priority: Sequence[str] = TONNAGE_LABELS) -> str | None:
    """Exact labels in priority order first, then the fuzzy pattern over row keys."""
    for key in priority:
        if key in row:
            return key
    for key in row:
        if TONNAGE_FUZZY.search(key):
            return key
    return None


@dataclass
class ColumnBinding:
    """Per-run column binding shared across rows.

    tonnage_key is set at most once; ton_per_hour_key is computed from the
    header row when the resolver is created.
    """
    tonnage_key: str | None = None
    ton_per_hour_key: str | None = None


class ColumnResolver:
    """Resolves semantic fields against normalized rows for one import run."""

    def __init__(
        self,
        header: Sequence[Any],
        *,
        field_aliases: Mapping[str, Sequence[str]] | None = None,
        tonnage_labels: Sequence[str] | None = None,
    ) -> None:
        self.header_map = build_header_map(header)
        self.field_labels: dict[str, tuple[str, ...]] = {}
        for name, labels in FIELD_LABELS.items():
            extra = (field_aliases or {}).get(name, ())
            self.field_labels[name] = _dedupe([*labels, *extra])
        self.tonnage_priority = _dedupe([*TONNAGE_LABELS, *(tonnage_labels or ())])
        self.binding = ColumnBinding(ton_per_hour_key=self._find_ton_per_hour_header())
        logger.debug(
            "resolver header_keys=%d ton_per_hour_key=%s",
            len(self.header_map),
            self.binding.ton_per_hour_key,
        )

    def _find_ton_per_hour_header(self) -> str | None:
        for key in self.header_map:
            if TON_PER_HOUR_HEADER.search(key):
                return key
        return None

    def lookup(self, row: Mapping[str, Any], field: str) -> Any:
        """First non-empty value among the labels declared for field (None if none)."""
        for key in self.field_labels[field]:
            value = row.get(key)
            if not Cell.of(value).is_empty:
                return value
        return None

    def tonnage_key(self, row: Mapping[str, Any]) -> str | None:
        """Pinned tonnage column if bound, otherwise this row's best candidate."""
        if self.binding.tonnage_key is not None:
            return self.binding.tonnage_key
        return find_tonnage_key(row, self.tonnage_priority)

    def pin_tonnage(self, key: str) -> None:
        if self.binding.tonnage_key is None:
            logger.debug("tonnage column pinned: %s", key)
            self.binding.tonnage_key = key

    def ton_per_hour_value(self, row: Mapping[str, Any]) -> Any:
        """TON/HR cell of the row: header-level column first, then a fuzzy row search."""
        key = self.binding.ton_per_hour_key
        if key is not None and not Cell.of(row.get(key)).is_empty:
            return row[key]
        for candidate in row:
            if TON_PER_HOUR_FUZZY.search(candidate):
                return row[candidate]
        return None

    def describe(self) -> list[tuple[str, Any]]:
        """(normalized, original) header pairs for diagnostics."""
        return list(self.header_map.items())
