import unittest
from unittest.mock import patch

from vocabgames.core.constants import Direction
from vocabgames.core.exceptions import DegenerateLayoutError, InsufficientInputError
from vocabgames.core.models import VocabularyItem
from vocabgames.engine.generator import (
    AttemptResult,
    CrosswordGenerator,
    GeneratorConfig,
    number_clues,
    qualify_entries,
)
from vocabgames.engine.grid import CrosswordGrid, GridConfig
from vocabgames.engine.placement import place_word
from vocabgames.engine.validator import CrosswordValidator


WORDS = [
    VocabularyItem("python", "A large constricting snake"),
    VocabularyItem("type", "A category of things"),
    VocabularyItem("honey", "Sweet food made by bees"),
    VocabularyItem("note", "A short written message"),
    VocabularyItem("open", "Not closed"),
    VocabularyItem("tone", "Quality of a sound"),
    VocabularyItem("pen", "Writing tool"),
    VocabularyItem("yeti", "Abominable snowman"),
]


def layout(result):
    return [(w.word, w.row, w.col, w.direction) for w in result.placed_words]


class QualifyEntriesTests(unittest.TestCase):
    def test_filters_and_uppercases(self) -> None:
        items = [
            VocabularyItem("at"),
            VocabularyItem(" apple ", "fruit"),
            VocabularyItem("APPLE", "duplicate"),
            VocabularyItem("ice cream"),
            VocabularyItem("extraordinarily"),
            VocabularyItem("well-being"),
        ]
        entries = qualify_entries(items)
        self.assertEqual([entry.word for entry in entries], ["APPLE", "WELL-BEING"])
        self.assertEqual(entries[0].clue, "fruit")

    def test_length_is_measured_after_uppercasing(self) -> None:
        entries = qualify_entries([
            VocabularyItem("Fußballspaß"),
            VocabularyItem("ßßßßßßßßßßß"),
            VocabularyItem("Fußball"),
        ])
        self.assertEqual([entry.word for entry in entries], ["FUSSBALL"])


class GeneratorFailureTests(unittest.TestCase):
    def test_too_few_words(self) -> None:
        result = CrosswordGenerator(GeneratorConfig(seed=1)).generate(
            [VocabularyItem("cat"), VocabularyItem("at")]
        )
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, InsufficientInputError)
        self.assertIsNone(result.grid)

    def test_words_that_never_cross(self) -> None:
        result = CrosswordGenerator(GeneratorConfig(seed=1, attempts=5)).generate(
            [VocabularyItem("abc"), VocabularyItem("def")]
        )
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, DegenerateLayoutError)

    def test_words_too_long_once_uppercased(self) -> None:
        for long_word in ("Fußballspaß", "ßßßßßßßßßßß"):
            result = CrosswordGenerator(GeneratorConfig(seed=5)).generate(
                [VocabularyItem(long_word), VocabularyItem("ball")]
            )
            self.assertFalse(result.ok)
            self.assertIsInstance(result.error, InsufficientInputError)

    def test_rejects_zero_attempts(self) -> None:
        with self.assertRaises(ValueError):
            CrosswordGenerator(GeneratorConfig(attempts=0))


class GeneratorLayoutTests(unittest.TestCase):
    def setUp(self) -> None:
        self.result = CrosswordGenerator(GeneratorConfig(seed=42)).generate(WORDS)

    def test_result_is_valid(self) -> None:
        self.assertTrue(self.result.ok, self.result.error)
        self.assertGreaterEqual(self.result.score, 2)
        validation = CrosswordValidator().validate(self.result.grid, self.result.placed_words)
        self.assertTrue(validation.ok, validation.messages)

    def test_crossings_agree(self) -> None:
        grid = self.result.grid
        for word in self.result.placed_words:
            for index, (row, col) in enumerate(word.cells):
                self.assertEqual(grid.cell(row, col).letter, word.word[index])

    def test_no_word_runs_on(self) -> None:
        grid = self.result.grid
        for word in self.result.placed_words:
            dr, dc = word.direction.step
            end_row, end_col = word.end
            self.assertFalse(grid.is_occupied(word.row - dr, word.col - dc))
            self.assertFalse(grid.is_occupied(end_row + dr, end_col + dc))

    def test_skipped_words_are_the_unplaced_ones(self) -> None:
        placed = {word.word for word in self.result.placed_words}
        expected = [entry.word for entry in qualify_entries(WORDS) if entry.word not in placed]
        self.assertEqual(self.result.skipped_words, expected)

    def test_clue_lists_split_by_direction(self) -> None:
        across = self.result.across_clues
        down = self.result.down_clues
        self.assertEqual(len(across) + len(down), len(self.result.clues))
        self.assertTrue(all(clue.direction == Direction.ACROSS for clue in across))
        self.assertTrue(all(clue.direction == Direction.DOWN for clue in down))
        self.assertTrue(across)

    def test_clues_carry_definitions(self) -> None:
        definitions = {item.word.upper(): item.definition for item in WORDS}
        self.assertEqual(len(self.result.clues), self.result.score)
        for clue in self.result.clues:
            self.assertEqual(clue.text, definitions[clue.word])
            self.assertEqual(self.result.grid.cell(clue.row, clue.col).clue_number, clue.number)


class GeneratorDeterminismTests(unittest.TestCase):
    def test_same_seed_same_layout(self) -> None:
        first = CrosswordGenerator(GeneratorConfig(seed=7)).generate(WORDS)
        second = CrosswordGenerator(GeneratorConfig(seed=7)).generate(WORDS)
        self.assertEqual(layout(first), layout(second))

    def test_more_attempts_never_score_lower(self) -> None:
        for seed in range(5):
            single = CrosswordGenerator(GeneratorConfig(seed=seed, attempts=1)).generate(WORDS)
            many = CrosswordGenerator(GeneratorConfig(seed=seed, attempts=10)).generate(WORDS)
            self.assertGreaterEqual(many.score, single.score)

    def test_tie_keeps_earlier_attempt(self) -> None:
        attempts = []
        for row in (5, 2):
            grid = CrosswordGrid(GeneratorConfig().to_grid_config())
            placed = [
                place_word(grid, "CAT", row, 4, Direction.ACROSS),
                place_word(grid, "COW", row, 4, Direction.DOWN),
            ]
            attempts.append(AttemptResult(grid=grid, placed=placed))

        generator = CrosswordGenerator(GeneratorConfig(seed=1, attempts=2))
        items = [VocabularyItem("cat"), VocabularyItem("cow")]
        with patch.object(generator, "run_attempt", side_effect=attempts) as run_attempt:
            result = generator.generate(items)

        self.assertEqual(run_attempt.call_count, 2)
        self.assertTrue(result.ok, result.error)
        self.assertIs(result.grid, attempts[0].grid)
        self.assertEqual(result.placed_words[0].row, 5)

    def test_unplaceable_word_is_skipped(self) -> None:
        items = [VocabularyItem("cat"), VocabularyItem("car"), VocabularyItem("zzz")]
        result = CrosswordGenerator(GeneratorConfig(seed=3)).generate(items)
        self.assertTrue(result.ok, result.error)
        self.assertEqual(result.skipped_words, ["ZZZ"])


class NumberCluesTests(unittest.TestCase):
    def test_shared_start_gets_one_number(self) -> None:
        grid = CrosswordGrid(GridConfig(size=5))
        placed = [
            place_word(grid, "CAT", 0, 0, Direction.ACROSS),
            place_word(grid, "COW", 0, 0, Direction.DOWN),
            place_word(grid, "TOE", 0, 2, Direction.DOWN),
        ]
        clues = number_clues(grid, placed, {"CAT": "feline"})

        self.assertEqual(
            [(clue.number, clue.direction, clue.word) for clue in clues],
            [(1, Direction.ACROSS, "CAT"), (1, Direction.DOWN, "COW"), (2, Direction.DOWN, "TOE")],
        )
        self.assertEqual(clues[0].text, "feline")
        self.assertEqual(clues[2].text, "")
        self.assertEqual(grid.cell(0, 0).clue_number, 1)
        self.assertEqual(grid.cell(0, 2).clue_number, 2)
        self.assertIsNone(grid.cell(0, 1).clue_number)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
