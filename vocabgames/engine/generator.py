"""Crossword generation orchestration.

Randomized greedy search: every attempt shuffles the qualifying words, opens
with the first one centred, then places each remaining word at its first
legal crossing (first-fit) or drops it. The attempt placing the most words
wins (best-of-N, earlier attempt kept on ties).
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.constants import (
    DEFAULT_ATTEMPTS,
    DEFAULT_GRID_SIZE,
    MAX_CROSSWORD_WORD,
    MIN_CROSSWORD_WORD,
    MIN_CROSSWORD_WORDS,
    Direction,
)
from ..core.exceptions import (
    DegenerateLayoutError,
    InsufficientInputError,
    LayoutValidationError,
    VocabGameError,
)
from ..core.models import Clue, PlacedWord, VocabularyItem
from ..utils.logger import get_logger
from .grid import CrosswordGrid, GridConfig
from .placement import centered_placement, find_intersecting_placement, place_word
from .validator import CrosswordValidator


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    grid_size: int = DEFAULT_GRID_SIZE
    attempts: int = DEFAULT_ATTEMPTS
    min_length: int = MIN_CROSSWORD_WORD
    max_length: int = MAX_CROSSWORD_WORD
    seed: Optional[int] = None

    def to_grid_config(self) -> GridConfig:
        return GridConfig(size=self.grid_size)


@dataclass
class CrosswordEntry:
    """A qualifying word in grid form with its clue text."""

    word: str
    clue: str


@dataclass
class AttemptResult:
    grid: CrosswordGrid
    placed: List[PlacedWord]

    @property
    def score(self) -> int:
        return len(self.placed)


@dataclass
class CrosswordResult:
    grid: Optional[CrosswordGrid] = None
    placed_words: List[PlacedWord] = field(default_factory=list)
    clues: List[Clue] = field(default_factory=list)
    attempts_run: int = 0
    skipped_words: List[str] = field(default_factory=list)
    seed: Optional[int] = None
    error: Optional[VocabGameError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.grid is not None

    @property
    def score(self) -> int:
        return len(self.placed_words)

    @property
    def across_clues(self) -> List[Clue]:
        return [clue for clue in self.clues if clue.direction == Direction.ACROSS]

    @property
    def down_clues(self) -> List[Clue]:
        return [clue for clue in self.clues if clue.direction == Direction.DOWN]


def qualify_entries(
    items: Sequence[VocabularyItem],
    min_length: int = MIN_CROSSWORD_WORD,
    max_length: int = MAX_CROSSWORD_WORD,
) -> List[CrosswordEntry]:
    """Keep single words of a playable length, uppercased, first occurrence wins."""

    entries: List[CrosswordEntry] = []
    seen: set[str] = set()
    for item in items:
        # Length is measured after uppercasing; "ß" becomes "SS".
        surface = item.word.strip().upper()
        if not (min_length <= len(surface) <= max_length):
            continue
        if any(char.isspace() for char in surface):
            continue
        if surface in seen:
            continue
        seen.add(surface)
        entries.append(CrosswordEntry(word=surface, clue=item.definition))
    return entries


def number_clues(
    grid: CrosswordGrid, placed: Sequence[PlacedWord], clue_texts: Dict[str, str]
) -> List[Clue]:
    """Assign clue numbers by row-major scan of word starts.

    A cell starting both an across and a down word carries one shared number.
    Numbers are written back into the grid cells.
    """

    starts: Dict[Tuple[int, int], List[PlacedWord]] = {}
    for word in placed:
        starts.setdefault((word.row, word.col), []).append(word)

    for cell in grid.iter_cells():
        cell.clue_number = None

    clues: List[Clue] = []
    number = 0
    for cell in grid.iter_cells():
        words = starts.get((cell.row, cell.col))
        if not words:
            continue
        number += 1
        cell.clue_number = number
        for word in sorted(words, key=lambda w: w.direction != Direction.ACROSS):
            clues.append(
                Clue(
                    number=number,
                    direction=word.direction,
                    text=clue_texts.get(word.word, ""),
                    row=word.row,
                    col=word.col,
                    word=word.word,
                )
            )
    return clues


class CrosswordGenerator:
    """Builds a numbered crossword from a vocabulary list."""

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()
        if self.config.attempts < 1:
            raise ValueError("At least one generation attempt is required")
        self.rng = random.Random(self.config.seed)
        self.validator = CrosswordValidator()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, items: Sequence[VocabularyItem]) -> CrosswordResult:
        """Return a typed result; generation failures never raise past here."""

        try:
            return self._build(items)
        except VocabGameError as exc:
            LOGGER.warning("Crossword generation failed: %s", exc)
            return CrosswordResult(seed=self.config.seed, error=exc)

    def _build(self, items: Sequence[VocabularyItem]) -> CrosswordResult:
        max_length = min(self.config.max_length, self.config.grid_size)
        entries = qualify_entries(items, self.config.min_length, max_length)
        if len(entries) < MIN_CROSSWORD_WORDS:
            raise InsufficientInputError(
                f"Need at least {MIN_CROSSWORD_WORDS} words of "
                f"{self.config.min_length}-{max_length} letters, got {len(entries)}"
            )
        words = [entry.word for entry in entries]
        best: Optional[AttemptResult] = None
        for attempt in range(1, self.config.attempts + 1):
            candidate = self.run_attempt(words)
            LOGGER.debug("Attempt %s/%s placed %s words", attempt, self.config.attempts, candidate.score)
            if best is None or candidate.score > best.score:
                best = candidate
        assert best is not None

        if best.score < MIN_CROSSWORD_WORDS:
            raise DegenerateLayoutError(
                f"Best layout connected only {best.score} word(s) out of {len(words)}"
            )

        clue_texts = {entry.word: entry.clue for entry in entries}
        clues = number_clues(best.grid, best.placed, clue_texts)
        validation = self.validator.validate(best.grid, best.placed)
        if not validation.ok:
            raise LayoutValidationError(f"Crossword validation failed: {validation.messages}")

        placed_set = {word.word for word in best.placed}
        skipped = [word for word in words if word not in placed_set]
        LOGGER.info(
            "Crossword generated: %s/%s words placed after %s attempts",
            best.score,
            len(words),
            self.config.attempts,
        )
        return CrosswordResult(
            grid=best.grid,
            placed_words=best.placed,
            clues=clues,
            attempts_run=self.config.attempts,
            skipped_words=skipped,
            seed=self.config.seed,
        )

    # ------------------------------------------------------------------
    # Single attempt
    # ------------------------------------------------------------------
    def run_attempt(self, words: Sequence[str]) -> AttemptResult:
        """Shuffle, open with a centred word and greedily cross the rest."""

        order = list(words)
        self.rng.shuffle(order)
        grid = CrosswordGrid(self.config.to_grid_config())
        placed: List[PlacedWord] = []

        row, col, direction = centered_placement(grid, order[0])
        placed.append(place_word(grid, order[0], row, col, direction))

        for word in order[1:]:
            position = find_intersecting_placement(grid, word, placed)
            if position is None:
                LOGGER.debug("No crossing for %s in this attempt", word)
                continue
            placed.append(place_word(grid, word, *position))
        return AttemptResult(grid=grid, placed=placed)
