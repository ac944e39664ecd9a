import random
import unittest

from vocabgames.core.models import MatchingPair
from vocabgames.play.matching import MatchingSession


PAIRS = [
    MatchingPair("terse", "Brief and to the point"),
    MatchingPair("verbose", "Using too many words"),
    MatchingPair("candid", "Truthful and straightforward"),
]


class MatchingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MatchingSession(PAIRS, rng=random.Random(3))

    def test_two_cards_per_pair(self) -> None:
        ids = sorted(card.id for card in self.session.cards)
        self.assertEqual(
            ids,
            ["definition-0", "definition-1", "definition-2", "word-0", "word-1", "word-2"],
        )

    def test_first_selection_waits(self) -> None:
        self.assertIsNone(self.session.select("word-0"))
        self.assertEqual(self.session.selected, ["word-0"])
        self.assertEqual(self.session.attempts, 0)

    def test_matching_pair(self) -> None:
        self.session.select("word-1")
        self.assertTrue(self.session.select("definition-1"))
        self.assertEqual(self.session.matched, {1})
        self.assertEqual(self.session.attempts, 1)
        self.assertEqual(self.session.selected, [])

    def test_mismatch_clears_selection(self) -> None:
        self.session.select("word-0")
        self.assertFalse(self.session.select("definition-2"))
        self.assertEqual(self.session.selected, [])
        self.assertEqual(self.session.attempts, 1)
        self.assertEqual(self.session.matched, set())

    def test_same_card_twice_is_ignored(self) -> None:
        self.session.select("word-0")
        self.assertIsNone(self.session.select("word-0"))
        self.assertEqual(self.session.attempts, 0)

    def test_matched_cards_are_ignored(self) -> None:
        self.session.select("word-0")
        self.session.select("definition-0")
        self.assertIsNone(self.session.select("word-0"))

    def test_complete_and_restart(self) -> None:
        for index in range(len(PAIRS)):
            self.session.select(f"word-{index}")
            self.session.select(f"definition-{index}")
        self.assertTrue(self.session.complete)
        self.assertEqual(self.session.attempts, 3)

        self.session.restart()
        self.assertFalse(self.session.complete)
        self.assertEqual(self.session.attempts, 0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
