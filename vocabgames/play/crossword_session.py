"""Interactive crossword play: selection, navigation, input and checking."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..core.constants import Arrow, Direction
from ..core.models import Clue, PlacedWord, VocabularyItem
from ..engine.generator import CrosswordGenerator, CrosswordResult, GeneratorConfig
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class CrosswordSession:
    """Mutable play state layered on a generated crossword.

    Every handler is total: input that does not apply to the current state
    (an empty cell, a finished puzzle, no selection) leaves it unchanged.
    """

    def __init__(self, result: CrosswordResult) -> None:
        if not result.ok or result.grid is None:
            raise ValueError("CrosswordSession requires a successful generation result")
        self.result = result
        self.grid = result.grid.clone()
        self.grid.reset_inputs()
        self.clues: List[Clue] = list(result.clues)
        self.placed_words: List[PlacedWord] = list(result.placed_words)
        self.selected: Optional[Tuple[int, int]] = None
        self.direction = Direction.ACROSS
        self.solved = False
        # Non-letter characters that occur in the solution, such as hyphens.
        self._symbols = {
            char for word in self.placed_words for char in word.word if not char.isalpha()
        }

    @classmethod
    def start(
        cls,
        items: Sequence[VocabularyItem],
        config: Optional[GeneratorConfig] = None,
        generator: Optional[CrosswordGenerator] = None,
    ) -> Tuple[Optional["CrosswordSession"], CrosswordResult]:
        """Generate a puzzle and open a session on it when generation succeeds."""

        generator = generator or CrosswordGenerator(config)
        result = generator.generate(items)
        if not result.ok:
            return None, result
        return cls(result), result

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def click(self, row: int, col: int) -> None:
        if not self.grid.is_occupied(row, col):
            return
        if self.selected == (row, col):
            self.direction = self.direction.toggled()
        else:
            self.selected = (row, col)

    def select_clue(self, clue: Clue) -> None:
        if not self.grid.is_occupied(clue.row, clue.col):
            return
        self.selected = (clue.row, clue.col)
        self.direction = clue.direction

    def move(self, arrow: Arrow) -> None:
        """Jump to the nearest occupied cell in the arrow's direction."""

        if self.selected is None:
            return
        self.direction = arrow.direction
        dr, dc = arrow.step
        row, col = self.selected
        row, col = row + dr, col + dc
        while self.grid.in_bounds(row, col):
            if self.grid.cell(row, col).occupied:
                self.selected = (row, col)
                return
            row, col = row + dr, col + dc

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def type_letter(self, char: str) -> None:
        if self.solved or self.selected is None:
            return
        if len(char) != 1 or not (char.isalpha() or char.upper() in self._symbols):
            return
        row, col = self.selected
        self.grid.cell(row, col).input = char.upper()
        self._step(1)

    def backspace(self) -> None:
        if self.solved or self.selected is None:
            return
        row, col = self.selected
        self.grid.cell(row, col).input = ""
        self._step(-1)

    def _step(self, sign: int) -> None:
        """Move one cell along the current direction if that cell is part of the puzzle."""

        assert self.selected is not None
        dr, dc = self.direction.step
        row, col = self.selected[0] + dr * sign, self.selected[1] + dc * sign
        if self.grid.is_occupied(row, col):
            self.selected = (row, col)

    # ------------------------------------------------------------------
    # Checking
    # ------------------------------------------------------------------
    def check(self) -> bool:
        """Mark the puzzle solved when every entry matches; no per-cell feedback."""

        if self.solved:
            return True
        for cell in self.grid.occupied_cells():
            if (cell.input or "").upper() != (cell.letter or "").upper():
                return False
        self.solved = True
        LOGGER.info("Crossword solved")
        return True

    @property
    def filled_count(self) -> int:
        return sum(1 for cell in self.grid.occupied_cells() if cell.input)

    @property
    def total_cells(self) -> int:
        return len(self.grid.occupied_cells())

    def word_at_selection(self) -> Optional[PlacedWord]:
        """The placed word running through the selection in the current direction."""

        if self.selected is None:
            return None
        cell = self.grid.cell(*self.selected)
        ref = cell.word_ref(self.direction)
        for word in self.placed_words:
            if word.id == ref:
                return word
        return None

    def active_clue(self) -> Optional[Clue]:
        word = self.word_at_selection()
        if word is None:
            return None
        for clue in self.clues:
            if (clue.row, clue.col, clue.direction) == (word.row, word.col, word.direction):
                return clue
        return None
