from __future__ import annotations

import re
import unicodedata
from typing import Any

from ..models.cell import Cell, CellKind

"""Text normalization for header labels and categorical cell values.

normalize_key is applied both to raw headers and to keys that are already
normalized, so it must be idempotent: the output only contains ASCII upper-case
letters, digits, '_', single spaces and the symbols / ( ) % -.
"""

__all__ = [
    "cell_text",
    "map_shift",
    "map_stage",
    "normalize_key",
    "strip_accents",
]

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
# ASCII classes: anything outside [A-Za-z0-9_], ASCII whitespace and /()%- becomes a space
_FOREIGN_CHARS = re.compile(r"[^\w\s/()%-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+", re.ASCII)

STAGE_NAMES = {
    "BRITAGEM": "Britagem",
    "MOAGEM": "Moagem",
}
SHIFT_NAMES = {
    "DIURNO": "Diurno",
    "NOTURNO": "Noturno",
}


def strip_accents(text: str) -> str:
    """Decompose (NFD) and drop combining diacritical marks U+0300-U+036F."""
    return _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", text))


def normalize_key(value: Any) -> str:
    """Canonical form of a header label or categorical value.

    Examples:
        >>> normalize_key("Horas de Produção")
        'HORAS DE PRODUCAO'
        >>> normalize_key("  Qtd. (ton) ")
        'QTD (TON)'
        >>> normalize_key(None)
        ''
    """
    if value is None:
        return ""
    text = str(value).strip()
    if not text:
        return ""
    text = strip_accents(text).upper()
    text = _FOREIGN_CHARS.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def _title(key: str) -> str:
    return key[0] + key[1:].lower()


def map_stage(value: Any, default: str = "Moagem") -> str:
    """Map a GRUPO cell to a stage name; empty cells fall back to default."""
    key = normalize_key(value)
    if key in STAGE_NAMES:
        return STAGE_NAMES[key]
    return _title(key) if key else default


def map_shift(value: Any) -> str | None:
    """Map a TURNO cell to a shift name; empty cells stay None."""
    key = normalize_key(value)
    if key in SHIFT_NAMES:
        return SHIFT_NAMES[key]
    return _title(key) if key else None


def cell_text(value: Any) -> str | None:
    """Trimmed text of a free-text cell (equipment, cause), None when blank."""
    cell = Cell.of(value)
    if cell.kind is CellKind.EMPTY:
        return None
    if cell.kind is CellKind.NUMBER and float(cell.value).is_integer():
        # readers hand back 101.0 for an equipment code typed as 101
        text = str(int(cell.value))
    else:
        text = str(cell.value)
    text = text.strip()
    return text or None
