"""Cell-level parsers: text normalization, locale numbers, dates and times."""

from .numeric import parse_number_br
from .temporal import span_hours, time_to_hours, time_to_minutes, to_date_str, to_hhmm
from .text import cell_text, map_shift, map_stage, normalize_key

__all__ = [
    "cell_text",
    "map_shift",
    "map_stage",
    "normalize_key",
    "parse_number_br",
    "span_hours",
    "time_to_hours",
    "time_to_minutes",
    "to_date_str",
    "to_hhmm",
]
