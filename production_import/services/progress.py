from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress bar for an import run.

A bar is drawn only when stdout is a terminal. Redirected or CI output gets
plain log lines and no ANSI control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """One tqdm bar per run, ticked once per worksheet row.

    Without a terminal every method is a no-op apart from counting rows.
    """

    def __init__(self, total_rows: int, *, description: str = "Importing rows") -> None:
        self.total_rows = total_rows
        self.description = description
        self.current_row = 0
        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None = self._open_bar() if self.enabled else None

    def _open_bar(self) -> TqdmType[Any]:
        return tqdm(
            total=self.total_rows,
            desc=self.description,
            unit="row",
            disable=False,
            leave=True,
            position=0,
            ncols=80,
            ascii=True,
        )

    def advance(self) -> None:
        self.current_row += 1
        if self.pbar is not None:
            self.pbar.update(1)

    def set_postfix(self, **stats: Any) -> None:
        """Show running counters (e.g. records=12) next to the bar."""
        if self.pbar is not None:
            self.pbar.set_postfix(**stats)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
