"""Shared constants and enumerations for the vocabulary games."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Word directions supported by the crossword grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def perpendicular_steps(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        if self is Direction.ACROSS:
            return ((-1, 0), (1, 0))
        return ((0, -1), (0, 1))

    def toggled(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class Arrow(str, Enum):
    """Keyboard arrows used for crossword navigation."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def step(self) -> Tuple[int, int]:
        return ARROW_STEPS[self]

    @property
    def direction(self) -> Direction:
        if self in (Arrow.LEFT, Arrow.RIGHT):
            return Direction.ACROSS
        return Direction.DOWN


ARROW_STEPS = {
    Arrow.UP: (-1, 0),
    Arrow.DOWN: (1, 0),
    Arrow.LEFT: (0, -1),
    Arrow.RIGHT: (0, 1),
}


class GamePhase(str, Enum):
    """Lifecycle of an interactive game session."""

    SETUP = "setup"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class Confidence(str, Enum):
    """Self-rating tags stored per vocabulary word."""

    KNOW = "know"
    LEARNING = "learning"
    NEED_HELP = "need-help"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols


ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
VOWELS: Tuple[str, ...] = ("A", "E", "I", "O", "U")

DEFAULT_GRID_SIZE = 12
DEFAULT_ATTEMPTS = 20
MIN_CROSSWORD_WORD = 3
MAX_CROSSWORD_WORD = 11
MIN_CROSSWORD_WORDS = 2

CONNECTIONS_GROUP_SIZE = 4
CONNECTIONS_GROUP_COUNT = 4
CONNECTIONS_MISTAKES = 4
CONNECTIONS_MIN_LENGTH = 4
CONNECTIONS_MAX_LENGTH = 10

HANGMAN_MAX_WRONG = 6
HANGMAN_ROUND_SIZE = 10

MIN_VOCABULARY = 3
MAX_VOCABULARY = 50
