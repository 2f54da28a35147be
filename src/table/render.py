"""Plain-text rendering of filtered rows for the answering model."""

from __future__ import annotations

from collections.abc import Sequence

from src.table.layout import Cell


def render_tsv(rows: Sequence[Sequence[Cell]]) -> str:
    """Render rows as tab-separated lines, header first, each line terminated by a newline."""

    lines = ["\t".join("" if cell is None else str(cell) for cell in row) for row in rows]
    return "".join(f"{line}\n" for line in lines)
