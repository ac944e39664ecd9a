import io
import unittest

from vocabgames.core.constants import Direction
from vocabgames.core.exceptions import InsufficientInputError
from vocabgames.core.models import Category
from vocabgames.engine.connections import PartitionResult
from vocabgames.engine.generator import CrosswordResult, number_clues
from vocabgames.engine.grid import CrosswordGrid, GridConfig
from vocabgames.engine.placement import place_word
from vocabgames.utils.pretty import format_board, format_clues, format_grid, print_connections, print_crossword


class PrettyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = CrosswordGrid(GridConfig(size=4))
        self.placed = [
            place_word(self.grid, "CAT", 1, 0, Direction.ACROSS),
            place_word(self.grid, "TOE", 1, 2, Direction.DOWN),
        ]
        self.clues = number_clues(self.grid, self.placed, {"CAT": "Feline"})

    def test_format_grid_shows_letters_and_blocks(self) -> None:
        lines = format_grid(self.grid).splitlines()
        self.assertEqual(len(lines), 6)
        self.assertEqual(lines[3], " 1 |  C  A  T  #")

    def test_format_grid_can_show_input(self) -> None:
        self.grid.cell(1, 0).input = "C"
        lines = format_grid(self.grid, show_solution=False).splitlines()
        self.assertEqual(lines[3], " 1 |  C  .  .  #")

    def test_format_clues(self) -> None:
        text = format_clues(self.clues)
        self.assertIn("--- Across ---\n   1. Feline (3)", text)
        self.assertIn("   2. (no definition) (3)", text)

    def test_format_board(self) -> None:
        text = format_board([Category("4 LETTERS", ["sand", "seal", "soap", "silk"], 0)])
        self.assertEqual(text, "[0] 4 LETTERS: sand, seal, soap, silk")

    def test_print_failures(self) -> None:
        stream = io.StringIO()
        print_crossword(CrosswordResult(error=InsufficientInputError("too few")), stream=stream)
        print_connections(PartitionResult(error=InsufficientInputError("too few")), stream=stream)
        self.assertEqual(stream.getvalue().count("Generation failed: too few"), 2)

    def test_print_crossword(self) -> None:
        stream = io.StringIO()
        result = CrosswordResult(grid=self.grid, placed_words=self.placed, clues=self.clues, attempts_run=3, seed=9)
        print_crossword(result, stream=stream)
        self.assertIn("Placed:   2 words after 3 attempts", stream.getvalue())
        self.assertIn("Seed:     9", stream.getvalue())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
