"""Connections puzzle generation.

Partitions a vocabulary list into four groups of four words sharing a
structural property. Rules are tried in a fixed priority order and each
accepted group claims the first matching words in input order, so the
grouping is deterministic; only the board order is shuffled.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import (
    ALPHABET,
    CONNECTIONS_GROUP_COUNT,
    CONNECTIONS_GROUP_SIZE,
    CONNECTIONS_MAX_LENGTH,
    CONNECTIONS_MIN_LENGTH,
    VOWELS,
)
from ..core.exceptions import InsufficientInputError, VocabGameError
from ..core.models import Category, ConnectionsCard, VocabularyItem
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Rule = Tuple[str, Callable[[str], bool]]


@dataclass
class PartitionerConfig:
    group_size: int = CONNECTIONS_GROUP_SIZE
    group_count: int = CONNECTIONS_GROUP_COUNT
    min_length: int = CONNECTIONS_MIN_LENGTH
    max_length: int = CONNECTIONS_MAX_LENGTH
    seed: Optional[int] = None

    @property
    def board_size(self) -> int:
        return self.group_size * self.group_count


@dataclass
class PartitionResult:
    categories: List[Category] = field(default_factory=list)
    cards: List[ConnectionsCard] = field(default_factory=list)
    error: Optional[VocabGameError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.categories)


def unique_words(items: Sequence[VocabularyItem]) -> List[str]:
    """Trimmed words in input order, dropping blanks and case-insensitive repeats."""

    words: List[str] = []
    seen: set[str] = set()
    for item in items:
        word = item.word.strip()
        key = word.upper()
        if not word or key in seen:
            continue
        seen.add(key)
        words.append(word)
    return words


def _length_rule(length: int) -> Rule:
    return f"{length} LETTERS", lambda word: len(word) == length


def _starts_rule(letter: str) -> Rule:
    return f"STARTS WITH '{letter}'", lambda word: word.upper().startswith(letter)


def _ends_rule(letter: str) -> Rule:
    return f"ENDS WITH '{letter}'", lambda word: word.upper().endswith(letter)


def _contains_rule(vowel: str) -> Rule:
    return f"CONTAINS '{vowel}'", lambda word: vowel in word.upper()


class CategoryPartitioner:
    """Finds four structurally justified word groups."""

    def __init__(self, config: Optional[PartitionerConfig] = None) -> None:
        self.config = config or PartitionerConfig()
        self.rng = random.Random(self.config.seed)

    def rules(self) -> Iterator[Rule]:
        """Structural rules in priority order."""

        for length in range(self.config.min_length, self.config.max_length + 1):
            yield _length_rule(length)
        for letter in ALPHABET:
            yield _starts_rule(letter)
        for letter in ALPHABET:
            yield _ends_rule(letter)
        for vowel in VOWELS:
            yield _contains_rule(vowel)

    def partition(self, items: Sequence[VocabularyItem]) -> PartitionResult:
        """Return four categories and a shuffled board, or the failure."""

        try:
            categories = self._build_categories(unique_words(items))
        except VocabGameError as exc:
            LOGGER.warning("Connections generation failed: %s", exc)
            return PartitionResult(error=exc)

        cards = [
            ConnectionsCard(id=word, word=word, category_name=category.name)
            for category in categories
            for word in category.words
        ]
        self.rng.shuffle(cards)
        LOGGER.info(
            "Connections puzzle generated: %s",
            ", ".join(category.name for category in categories),
        )
        return PartitionResult(categories=categories, cards=cards)

    def _build_categories(self, words: List[str]) -> List[Category]:
        if len(words) < self.config.board_size:
            raise InsufficientInputError(
                f"Connections needs at least {self.config.board_size} unique words, got {len(words)}"
            )

        pool = list(words)
        categories: List[Category] = []
        for name, predicate in self.rules():
            if len(categories) >= self.config.group_count:
                break
            self._claim(pool, categories, name, predicate)

        while len(categories) < self.config.group_count:
            name = f"RANDOM GROUP {len(categories) + 1}"
            if not self._claim(pool, categories, name, lambda word: True):
                raise InsufficientInputError(
                    "Ran out of words before four groups could be formed"
                )
            LOGGER.debug("Filled %s from leftover words", name)
        return categories

    def _claim(
        self,
        pool: List[str],
        categories: List[Category],
        name: str,
        predicate: Callable[[str], bool],
    ) -> bool:
        """Take the first ``group_size`` matches from ``pool`` as a new category."""

        matches = [word for word in pool if predicate(word)]
        if len(matches) < self.config.group_size:
            return False
        chosen = matches[: self.config.group_size]
        for word in chosen:
            pool.remove(word)
        categories.append(Category(name=name, words=chosen, color_index=len(categories)))
        LOGGER.debug("Category %s claimed %s", name, chosen)
        return True
