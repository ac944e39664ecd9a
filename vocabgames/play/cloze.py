"""Paragraph practice: fill-in-the-blank editor and comprehension grading."""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from ..core.models import ParagraphQuestion


MARKER_RE = re.compile(r"(\*\*[^*]+\*\*)")


@dataclass
class Segment:
    """A piece of the paragraph: plain text or a blank with its answer."""

    text: str
    blank: Optional[int] = None

    @property
    def is_blank(self) -> bool:
        return self.blank is not None


def parse_paragraph(paragraph: str) -> List[Segment]:
    """Split ``**word**`` markers into numbered blanks, keeping the text around them."""

    segments: List[Segment] = []
    blank_index = 0
    for part in MARKER_RE.split(paragraph or ""):
        if not part:
            continue
        if part.startswith("**") and part.endswith("**") and len(part) > 4:
            segments.append(Segment(text=part[2:-2], blank=blank_index))
            blank_index += 1
        else:
            segments.append(Segment(text=part))
    return segments


def marked_words(paragraph: str) -> List[str]:
    return [segment.text for segment in parse_paragraph(paragraph) if segment.is_blank]


def grade_answers(questions: Sequence[ParagraphQuestion], answers: Mapping[int, str]) -> List[bool]:
    """Literal comparison, ignoring case and surrounding whitespace."""

    results: List[bool] = []
    for index, question in enumerate(questions):
        given = (answers.get(index) or "").strip().lower()
        results.append(bool(given) and given == question.answer.strip().lower())
    return results


class ParagraphClozeSession:
    """Drag-and-drop state for the paragraph editor."""

    def __init__(self, paragraph: str, rng: Optional[random.Random] = None) -> None:
        self.paragraph = paragraph
        self.rng = rng or random.Random()
        self.segments = parse_paragraph(paragraph)
        self.answers: List[str] = [segment.text for segment in self.segments if segment.is_blank]
        self.reset()

    def reset(self) -> None:
        self.filled: Dict[int, Optional[str]] = {index: None for index in range(len(self.answers))}
        self.bank: List[str] = list(self.answers)
        self.rng.shuffle(self.bank)
        self.show_results = False

    def drop(self, word: str, target: int, source: Optional[int] = None) -> bool:
        """Place ``word`` into blank ``target`` from the bank or from blank ``source``."""

        if target not in self.filled or source == target:
            return False
        if source is None:
            if word not in self.bank:
                return False
            self.bank.remove(word)
        else:
            if self.filled.get(source) != word:
                return False
            self.filled[source] = None

        displaced = self.filled[target]
        if displaced is not None:
            self.bank.append(displaced)
        self.filled[target] = word
        self.rng.shuffle(self.bank)
        self.show_results = False
        return True

    def return_to_bank(self, blank: int) -> bool:
        word = self.filled.get(blank)
        if word is None:
            return False
        self.filled[blank] = None
        self.bank.append(word)
        self.rng.shuffle(self.bank)
        self.show_results = False
        return True

    def check(self) -> int:
        self.show_results = True
        return self.correct_count

    @property
    def correct_count(self) -> int:
        return sum(1 for index, answer in enumerate(self.answers) if self.filled[index] == answer)

    def blank_status(self, blank: int) -> Optional[bool]:
        """True/False once results are shown for a filled blank, otherwise None."""

        word = self.filled.get(blank)
        if not self.show_results or word is None:
            return None
        return word == self.answers[blank]
