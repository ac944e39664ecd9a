"""Grid representation and helper utilities."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple

from ..core.constants import DEFAULT_GRID_SIZE, Bounds, Direction
from ..core.models import Cell


@dataclass
class GridConfig:
    """Configuration values driving the grid layout."""

    size: int = DEFAULT_GRID_SIZE

    def bounds(self) -> Bounds:
        return Bounds(rows=self.size, cols=self.size)


class CrosswordGrid:
    """Square matrix of cells holding solution letters and learner input."""

    def __init__(self, config: Optional[GridConfig] = None) -> None:
        self.config = config or GridConfig()
        if self.config.size < 1:
            raise ValueError(f"Grid size must be positive, got {self.config.size}")
        self.bounds = self.config.bounds()
        self.cells: List[List[Cell]] = [
            [Cell(row=r, col=c) for c in range(self.bounds.cols)]
            for r in range(self.bounds.rows)
        ]

    @property
    def size(self) -> int:
        return self.bounds.rows

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def in_bounds(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col)

    def is_occupied(self, row: int, col: int) -> bool:
        """Return True for an occupied in-bounds cell; out of bounds counts as empty."""

        return self.in_bounds(row, col) and self.cells[row][col].occupied

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def occupied_cells(self) -> List[Cell]:
        """All occupied cells in row-major order."""

        return [cell for cell in self.iter_cells() if cell.occupied]

    def starts_word(self, row: int, col: int, direction: Direction) -> bool:
        """True when an occupied cell begins a run of two or more letters."""

        if not self.is_occupied(row, col):
            return False
        dr, dc = direction.step
        return not self.is_occupied(row - dr, col - dc) and self.is_occupied(row + dr, col + dc)

    def word_starts(self) -> List[Tuple[int, int]]:
        """Cells that start an across or down run, in row-major order."""

        return [
            (cell.row, cell.col)
            for cell in self.iter_cells()
            if self.starts_word(cell.row, cell.col, Direction.ACROSS)
            or self.starts_word(cell.row, cell.col, Direction.DOWN)
        ]

    # ------------------------------------------------------------------
    # Copies and resets
    # ------------------------------------------------------------------
    def clone(self) -> "CrosswordGrid":
        """Return a structural copy sharing no cell objects with this grid."""

        copy = CrosswordGrid(GridConfig(size=self.config.size))
        copy.cells = [[replace(cell) for cell in row] for row in self.cells]
        return copy

    def reset_inputs(self) -> None:
        for cell in self.iter_cells():
            cell.input = ""

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_jsonable(self, include_solution: bool = True) -> List[List[Optional[dict]]]:
        serialized: List[List[Optional[dict]]] = []
        for row in self.cells:
            serialized_row: List[Optional[dict]] = []
            for cell in row:
                if not cell.occupied:
                    serialized_row.append(None)
                    continue
                payload = {
                    "clue_number": cell.clue_number,
                    "across": cell.across_ref,
                    "down": cell.down_ref,
                    "input": cell.input,
                }
                if include_solution:
                    payload["letter"] = cell.letter
                serialized_row.append(payload)
            serialized.append(serialized_row)
        return serialized
