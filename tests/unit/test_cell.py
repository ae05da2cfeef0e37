from __future__ import annotations

from datetime import date, datetime, time, timedelta

import numpy as np
import pandas as pd
import pytest

from production_import.models.cell import Cell, CellKind


@pytest.mark.parametrize("raw", [None, float("nan"), np.nan, pd.NaT, ""])
def test_empty_values(raw):
    cell = Cell.of(raw)
    assert cell.kind is CellKind.EMPTY
    assert cell.is_empty


@pytest.mark.parametrize("raw", [0, 12, 3.5, np.int64(4), np.float64(2.5), float("inf")])
def test_numbers(raw):
    cell = Cell.of(raw)
    assert cell.kind is CellKind.NUMBER
    assert cell.value == raw


@pytest.mark.parametrize(
    "raw",
    [datetime(2024, 3, 1), date(2024, 3, 1), time(7, 0), timedelta(hours=2), pd.Timestamp("2024-03-01")],
)
def test_temporal(raw):
    assert Cell.of(raw).kind is CellKind.TEMPORAL


def test_text_and_bool():
    assert Cell.of("QTD TON") == Cell(CellKind.TEXT, "QTD TON")
    assert Cell.of("  ").kind is CellKind.TEXT
    assert Cell.of(True) == Cell(CellKind.TEXT, "True")


def test_cell_passthrough():
    cell = Cell(CellKind.NUMBER, 1)
    assert Cell.of(cell) is cell


def test_cell_is_immutable():
    cell = Cell.of(1)
    with pytest.raises(AttributeError):
        cell.value = 2
