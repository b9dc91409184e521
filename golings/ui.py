"""Terminal rendering of the exercise list."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from golings.exercises import Exercise

_HEADERS = ("Name", "Path", "State")


def _border(widths: list[int]) -> str:
    return "+" + "+".join("-" * (width + 2) for width in widths) + "+"


def _row(cells: tuple[str, ...], widths: list[int]) -> str:
    return "|" + "|".join(f" {cell.ljust(width)} " for cell, width in zip(cells, widths)) + "|"


def print_list(out: TextIO, exercises: Iterable[Exercise]) -> None:
    """Write a table of exercise names, paths and states to ``out``."""
    header = tuple(title.upper() for title in _HEADERS)
    rows = [(ex.name, ex.path, str(ex.state())) for ex in exercises]
    widths = [max(len(cell) for cell in column) for column in zip(header, *rows)]

    border = _border(widths)
    lines = [border, _row(header, widths), border]
    lines.extend(_row(row, widths) for row in rows)
    lines.append(border)
    out.write("\n".join(lines) + "\n")