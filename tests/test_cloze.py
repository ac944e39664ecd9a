import random
import unittest

from vocabgames.core.models import ParagraphQuestion
from vocabgames.play.cloze import ParagraphClozeSession, grade_answers, marked_words, parse_paragraph


PARAGRAPH = "The **terse** reply left the **verbose** speaker without words."


class ParseTests(unittest.TestCase):
    def test_segments_and_blanks(self) -> None:
        segments = parse_paragraph(PARAGRAPH)
        self.assertEqual(
            [(segment.text, segment.blank) for segment in segments],
            [
                ("The ", None),
                ("terse", 0),
                (" reply left the ", None),
                ("verbose", 1),
                (" speaker without words.", None),
            ],
        )

    def test_marked_words(self) -> None:
        self.assertEqual(marked_words(PARAGRAPH), ["terse", "verbose"])
        self.assertEqual(marked_words("No markers here."), [])


class ClozeSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = ParagraphClozeSession(PARAGRAPH, rng=random.Random(0))

    def test_bank_starts_full(self) -> None:
        self.assertEqual(sorted(self.session.bank), ["terse", "verbose"])
        self.assertEqual(self.session.filled, {0: None, 1: None})

    def test_drop_from_bank(self) -> None:
        self.assertTrue(self.session.drop("terse", 0))
        self.assertEqual(self.session.filled[0], "terse")
        self.assertEqual(self.session.bank, ["verbose"])

    def test_drop_onto_filled_blank_returns_previous_word(self) -> None:
        self.session.drop("verbose", 0)
        self.session.drop("terse", 0)
        self.assertEqual(self.session.filled[0], "terse")
        self.assertEqual(self.session.bank, ["verbose"])

    def test_move_between_blanks(self) -> None:
        self.session.drop("terse", 1)
        self.assertTrue(self.session.drop("terse", 0, source=1))
        self.assertEqual(self.session.filled, {0: "terse", 1: None})

    def test_invalid_drops_are_ignored(self) -> None:
        self.assertFalse(self.session.drop("missing", 0))
        self.assertFalse(self.session.drop("terse", 5))
        self.assertFalse(self.session.drop("terse", 0, source=1))
        self.assertEqual(sorted(self.session.bank), ["terse", "verbose"])

    def test_return_to_bank(self) -> None:
        self.session.drop("terse", 0)
        self.assertTrue(self.session.return_to_bank(0))
        self.assertIsNone(self.session.filled[0])
        self.assertFalse(self.session.return_to_bank(0))

    def test_check_counts_correct_blanks(self) -> None:
        self.session.drop("verbose", 0)
        self.session.drop("terse", 1)
        self.assertEqual(self.session.check(), 0)
        self.assertFalse(self.session.blank_status(0))

        self.session.drop("terse", 0, source=1)
        self.assertIsNone(self.session.blank_status(0))
        self.session.drop("verbose", 1)
        self.assertEqual(self.session.check(), 2)
        self.assertTrue(self.session.blank_status(1))

    def test_reset(self) -> None:
        self.session.drop("terse", 0)
        self.session.check()
        self.session.reset()
        self.assertEqual(self.session.filled, {0: None, 1: None})
        self.assertFalse(self.session.show_results)


class GradeAnswersTests(unittest.TestCase):
    def test_trimmed_case_insensitive(self) -> None:
        questions = [
            ParagraphQuestion("Which word means brief?", "terse"),
            ParagraphQuestion("Who was left without words?", "The speaker"),
            ParagraphQuestion("Unanswered?", "yes"),
        ]
        answers = {0: "  TERSE ", 1: "speaker"}
        self.assertEqual(grade_answers(questions, answers), [True, False, False])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
