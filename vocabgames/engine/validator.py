"""Deterministic rule validation for generated crosswords."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Set

from ..core.exceptions import LayoutValidationError
from ..core.models import PlacedWord
from ..utils.logger import get_logger
from .grid import CrosswordGrid, GridConfig
from .placement import can_place, centered_placement, place_word


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class CrosswordValidator:
    """Runs deterministic validation over a finished layout."""

    def validate(self, grid: CrosswordGrid, placed: Sequence[PlacedWord]) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_word_letters(grid, placed)
            self._check_no_run_on(grid, placed)
            self._check_no_orphan_cells(grid, placed)
            self._check_replay(grid, placed)
        except LayoutValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_word_letters(self, grid: CrosswordGrid, placed: Sequence[PlacedWord]) -> None:
        for word in placed:
            for index, (row, col) in enumerate(word.cells):
                if not grid.in_bounds(row, col):
                    raise LayoutValidationError(f"Word {word.word} leaves the grid at ({row},{col})")
                cell = grid.cell(row, col)
                if cell.letter != word.word[index]:
                    raise LayoutValidationError(
                        f"Letter conflict at ({row},{col}): '{cell.letter}' vs {word.word}[{index}]"
                    )
                if cell.word_ref(word.direction) != word.id:
                    raise LayoutValidationError(
                        f"Cell ({row},{col}) does not reference {word.id}"
                    )

    def _check_no_run_on(self, grid: CrosswordGrid, placed: Sequence[PlacedWord]) -> None:
        for word in placed:
            dr, dc = word.direction.step
            end_row, end_col = word.end
            if grid.is_occupied(word.row - dr, word.col - dc):
                raise LayoutValidationError(f"Word {word.word} runs on before its start")
            if grid.is_occupied(end_row + dr, end_col + dc):
                raise LayoutValidationError(f"Word {word.word} runs on after its end")

    def _check_no_orphan_cells(self, grid: CrosswordGrid, placed: Sequence[PlacedWord]) -> None:
        covered: Set[tuple] = {coord for word in placed for coord in word.cells}
        for cell in grid.occupied_cells():
            if (cell.row, cell.col) not in covered:
                raise LayoutValidationError(f"Occupied cell ({cell.row},{cell.col}) belongs to no word")
            if cell.across_ref is None and cell.down_ref is None:
                raise LayoutValidationError(f"Occupied cell ({cell.row},{cell.col}) has no word reference")

    def _check_replay(self, grid: CrosswordGrid, placed: Sequence[PlacedWord]) -> None:
        """Rebuild the layout in placement order; every step must be legal."""

        replay = CrosswordGrid(GridConfig(size=grid.size))
        for index, word in enumerate(placed):
            if index == 0 and (word.row, word.col, word.direction) != centered_placement(replay, word.word):
                raise LayoutValidationError(f"Opening word {word.word} is not centred")
            if not can_place(replay, word.word, word.row, word.col, word.direction):
                raise LayoutValidationError(
                    f"Word {word.word} at ({word.row},{word.col}) {word.direction.value} "
                    "was not legal when placed"
                )
            place_word(replay, word.word, word.row, word.col, word.direction)
