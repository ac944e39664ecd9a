"""Data models shared by the puzzle engines and the study sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import Direction


@dataclass(frozen=True)
class VocabularyItem:
    """A word supplied by the learner together with its definition."""

    word: str
    definition: str = ""


@dataclass
class Cell:
    """Represents a crossword grid cell with metadata.

    A cell is occupied exactly when it holds a solution ``letter``. ``input``
    is the learner's entry and is only compared to ``letter`` on check.
    """

    row: int
    col: int
    letter: Optional[str] = None
    across_ref: Optional[str] = None
    down_ref: Optional[str] = None
    clue_number: Optional[int] = None
    input: str = ""

    @property
    def occupied(self) -> bool:
        return self.letter is not None

    def word_ref(self, direction: Direction) -> Optional[str]:
        return self.across_ref if direction == Direction.ACROSS else self.down_ref


@dataclass
class PlacedWord:
    """A word written into the grid."""

    word: str
    row: int
    col: int
    direction: Direction

    @property
    def id(self) -> str:
        prefix = "AC" if self.direction == Direction.ACROSS else "DN"
        return f"{prefix}_{self.row}_{self.col}"

    @property
    def cells(self) -> List[Tuple[int, int]]:
        dr, dc = self.direction.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(len(self.word))]

    @property
    def end(self) -> Tuple[int, int]:
        return self.cells[-1]


@dataclass
class Clue:
    """A numbered crossword clue."""

    number: int
    direction: Direction
    text: str
    row: int
    col: int
    word: str


@dataclass
class Category:
    """A Connections group of words sharing a structural property."""

    name: str
    words: List[str]
    color_index: int


@dataclass
class ConnectionsCard:
    """One tile on the Connections board."""

    id: str
    word: str
    category_name: str
    selected: bool = False
    solved: bool = False


# ----------------------------------------------------------------------
# Study materials returned by the AI collaborator
# ----------------------------------------------------------------------
@dataclass
class QuizQuestion:
    question: str
    options: List[str]
    correct_index: int
    word: str = ""


@dataclass
class Flashcard:
    word: str
    definition: str
    example: str = ""
    synonyms: Optional[str] = None
    antonyms: Optional[str] = None
    context: Optional[str] = None
    etymology: Optional[str] = None
    mnemonic: Optional[str] = None


@dataclass
class MatchingPair:
    word: str
    definition: str


@dataclass
class ParagraphQuestion:
    question: str
    answer: str


@dataclass
class ParagraphData:
    paragraph: str
    questions: List[ParagraphQuestion] = field(default_factory=list)


@dataclass
class StudyMaterials:
    """Everything generated for one vocabulary list."""

    quiz: List[QuizQuestion] = field(default_factory=list)
    flashcards: List[Flashcard] = field(default_factory=list)
    matching: List[MatchingPair] = field(default_factory=list)
    paragraph: Optional[ParagraphData] = None
