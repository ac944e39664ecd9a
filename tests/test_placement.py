import unittest

from vocabgames.core.constants import Direction
from vocabgames.engine.grid import CrosswordGrid, GridConfig
from vocabgames.engine.placement import (
    can_place,
    centered_placement,
    find_intersecting_placement,
    intersection_candidates,
    place_word,
)


class CanPlaceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = CrosswordGrid(GridConfig(size=6))
        place_word(self.grid, "CAT", 2, 0, Direction.ACROSS)

    def test_word_must_fit_in_grid(self) -> None:
        self.assertFalse(can_place(self.grid, "ELEPHANT", 0, 0, Direction.ACROSS))
        self.assertFalse(can_place(self.grid, "BAD", 4, 1, Direction.DOWN))

    def test_rejects_run_on_after_existing_word(self) -> None:
        self.assertFalse(can_place(self.grid, "DOG", 2, 3, Direction.ACROSS))

    def test_rejects_letter_conflict(self) -> None:
        self.assertFalse(can_place(self.grid, "BOX", 1, 1, Direction.DOWN))

    def test_accepts_matching_crossing(self) -> None:
        self.assertTrue(can_place(self.grid, "BAD", 1, 1, Direction.DOWN))

    def test_rejects_side_by_side_words(self) -> None:
        self.assertFalse(can_place(self.grid, "DOG", 3, 0, Direction.ACROSS))

    def test_place_word_sets_references(self) -> None:
        placed = place_word(self.grid, "BAD", 1, 1, Direction.DOWN)
        crossing = self.grid.cell(2, 1)
        self.assertEqual(placed.id, "DN_1_1")
        self.assertEqual(crossing.across_ref, "AC_2_0")
        self.assertEqual(crossing.down_ref, "DN_1_1")


class IntersectionSearchTests(unittest.TestCase):
    def test_opening_word_is_centred(self) -> None:
        grid = CrosswordGrid(GridConfig(size=12))
        self.assertEqual(centered_placement(grid, "HELLO"), (6, 3, Direction.ACROSS))

    def test_first_fit_crossing(self) -> None:
        grid = CrosswordGrid(GridConfig(size=12))
        placed = [place_word(grid, "HELLO", 6, 3, Direction.ACROSS)]
        self.assertEqual(
            find_intersecting_placement(grid, "LOW", placed),
            (6, 5, Direction.DOWN),
        )

    def test_no_shared_letters_means_no_candidates(self) -> None:
        grid = CrosswordGrid(GridConfig(size=12))
        placed = [place_word(grid, "HELLO", 6, 3, Direction.ACROSS)]
        self.assertEqual(list(intersection_candidates("BUY", placed)), [])
        self.assertIsNone(find_intersecting_placement(grid, "BUY", placed))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
