"""Multiple-choice quiz session."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.models import QuizQuestion


class QuizSession:
    def __init__(self, questions: Sequence[QuizQuestion]) -> None:
        self.questions: List[QuizQuestion] = list(questions)
        self.restart()

    def restart(self) -> None:
        self.index = 0
        self.selection: Optional[int] = None
        self.score = 0
        self.finished = not self.questions

    @property
    def current(self) -> Optional[QuizQuestion]:
        if self.finished:
            return None
        return self.questions[self.index]

    def answer(self, option_index: int) -> Optional[bool]:
        """Lock in an answer for the current question; later answers are ignored."""

        question = self.current
        if question is None or self.selection is not None:
            return None
        if not 0 <= option_index < len(question.options):
            return None
        self.selection = option_index
        correct = option_index == question.correct_index
        if correct:
            self.score += 1
        return correct

    def next(self) -> None:
        if self.finished:
            return
        if self.index >= len(self.questions) - 1:
            self.finished = True
            return
        self.index += 1
        self.selection = None

    @property
    def percentage(self) -> int:
        if not self.questions:
            return 0
        return round(self.score / len(self.questions) * 100)
