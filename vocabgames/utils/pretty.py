"""Pretty-print helpers for crossword grids and Connections boards."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Sequence

from ..core.constants import Direction

if TYPE_CHECKING:
    from ..core.models import Category, Clue
    from ..engine.connections import PartitionResult
    from ..engine.generator import CrosswordResult
    from ..engine.grid import CrosswordGrid


EMPTY_SYMBOL = "#"


def format_grid(grid: CrosswordGrid, *, show_solution: bool = True) -> str:
    width = grid.bounds.cols
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(grid.bounds.rows):
        symbols = []
        for c in range(width):
            cell = grid.cell(r, c)
            if not cell.occupied:
                symbols.append(EMPTY_SYMBOL)
            elif show_solution:
                symbols.append(cell.letter)
            else:
                symbols.append(cell.input or ".")
        row_render = " ".join(f"{symbol:>2}" for symbol in symbols)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_clues(clues: Sequence[Clue]) -> str:
    lines: List[str] = []
    for direction, title in ((Direction.ACROSS, "Across"), (Direction.DOWN, "Down")):
        lines.append(f"--- {title} ---")
        for clue in clues:
            if clue.direction == direction:
                lines.append(f"  {clue.number:>2}. {clue.text or '(no definition)'} ({len(clue.word)})")
    return "\n".join(lines)


def format_board(categories: Sequence[Category]) -> str:
    return "\n".join(f"[{category.color_index}] {category.name}: {', '.join(category.words)}" for category in categories)


def print_crossword(result: CrosswordResult, *, stream=None) -> None:
    """Print grid, clues and placement stats for a generated crossword."""

    stream = stream or sys.stdout
    if not result.ok:
        print(f"Generation failed: {result.error}", file=stream)
        return
    print(format_grid(result.grid), file=stream)
    print(file=stream)
    print(format_clues(result.clues), file=stream)
    print(file=stream)
    print(f"  Placed:   {result.score} words after {result.attempts_run} attempts", file=stream)
    if result.skipped_words:
        print(f"  Skipped:  {', '.join(result.skipped_words)}", file=stream)
    if result.seed is not None:
        print(f"  Seed:     {result.seed}", file=stream)


def print_connections(result: PartitionResult, *, stream=None) -> None:
    stream = stream or sys.stdout
    if not result.ok:
        print(f"Generation failed: {result.error}", file=stream)
        return
    print(format_board(result.categories), file=stream)
