"""Hangman rounds over vocabulary words."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence, Set

from ..core.constants import HANGMAN_MAX_WRONG, HANGMAN_ROUND_SIZE, GamePhase
from ..core.models import VocabularyItem
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class HangmanSession:
    """Plays a round of words one after the other.

    Completing a word moves straight on to the next one; completing the last
    word wins the round and six wrong guesses on any word lose it.
    """

    def __init__(
        self,
        words: Sequence[VocabularyItem],
        max_wrong: int = HANGMAN_MAX_WRONG,
    ) -> None:
        self.words: List[VocabularyItem] = [item for item in words if item.word.strip()]
        self.max_wrong = max_wrong
        self.restart()

    @classmethod
    def from_vocabulary(
        cls,
        items: Sequence[VocabularyItem],
        rng: Optional[random.Random] = None,
        limit: int = HANGMAN_ROUND_SIZE,
    ) -> "HangmanSession":
        """Pick up to ``limit`` random words from the learner's list."""

        rng = rng or random.Random()
        pool = list(items)
        rng.shuffle(pool)
        return cls(pool[:limit])

    def restart(self) -> None:
        self.index = 0
        self.guesses: Set[str] = set()
        self.wrong_guesses = 0
        self.hint_shown = False
        self.completed: List[str] = []
        self.phase = GamePhase.PLAYING if self.words else GamePhase.SETUP

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def current(self) -> Optional[VocabularyItem]:
        if self.index >= len(self.words):
            return None
        return self.words[self.index]

    @property
    def current_word(self) -> str:
        item = self.current
        return item.word.strip().upper() if item else ""

    @property
    def remaining_guesses(self) -> int:
        return self.max_wrong - self.wrong_guesses

    @property
    def masked_word(self) -> str:
        """Unguessed letters as ``_``; spaces, hyphens and other marks shown as-is."""

        return "".join(
            char if not char.isalpha() or char in self.guesses else "_"
            for char in self.current_word
        )

    def reveal_hint(self) -> str:
        self.hint_shown = True
        item = self.current
        return item.definition if item else ""

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def guess(self, letter: str) -> Optional[bool]:
        """Guess a letter; returns whether it occurs, or None when ignored."""

        if self.phase != GamePhase.PLAYING:
            return None
        letter = letter.upper()
        if len(letter) != 1 or not letter.isalpha() or letter in self.guesses:
            return None

        self.guesses.add(letter)
        word = self.current_word
        if letter not in word:
            self.wrong_guesses += 1
            if self.wrong_guesses >= self.max_wrong:
                self.phase = GamePhase.LOST
                LOGGER.info("Hangman lost on %s", word)
            return False

        if all(not char.isalpha() or char in self.guesses for char in word):
            self._advance()
        return True

    def _advance(self) -> None:
        self.completed.append(self.current_word)
        if self.index >= len(self.words) - 1:
            self.phase = GamePhase.WON
            LOGGER.info("Hangman round won (%s words)", len(self.completed))
            return
        self.index += 1
        self.guesses = set()
        self.wrong_guesses = 0
        self.hint_shown = False
