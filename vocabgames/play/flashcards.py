"""Flashcard deck navigation with persisted self-ratings."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence

from ..core.constants import Confidence
from ..core.models import Flashcard
from ..data.confidence_store import ConfidenceStore


DUE_RANK = {
    Confidence.NEED_HELP: 0,
    Confidence.LEARNING: 1,
    None: 2,
    Confidence.KNOW: 3,
}


class FlashcardDeck:
    """Cyclic deck; moving to another card turns it back face down."""

    def __init__(self, cards: Sequence[Flashcard], store: Optional[ConfidenceStore] = None) -> None:
        self.cards: List[Flashcard] = list(cards)
        self.store = store
        self._session: Dict[str, Confidence] = {}
        self.index = 0
        self.flipped = False

    @property
    def current(self) -> Optional[Flashcard]:
        if not self.cards:
            return None
        return self.cards[self.index]

    @property
    def progress(self) -> str:
        if not self.cards:
            return "0 / 0"
        return f"{self.index + 1} / {len(self.cards)}"

    def flip(self) -> None:
        self.flipped = not self.flipped

    def next(self) -> None:
        if self.cards:
            self.index = (self.index + 1) % len(self.cards)
            self.flipped = False

    def previous(self) -> None:
        if self.cards:
            self.index = (self.index - 1) % len(self.cards)
            self.flipped = False

    # ------------------------------------------------------------------
    # Ratings
    # ------------------------------------------------------------------
    def rating(self, word: str) -> Optional[Confidence]:
        if self.store is not None:
            return self.store.get(word)
        return self._session.get(word)

    def rate(self, confidence: Confidence | str) -> None:
        card = self.current
        if card is None:
            return
        confidence = Confidence(confidence)
        if self.store is not None:
            self.store.set(card.word, confidence)
        else:
            self._session[card.word] = confidence

    def clear_rating(self) -> None:
        card = self.current
        if card is None:
            return
        if self.store is not None:
            self.store.clear(card.word)
        else:
            self._session.pop(card.word, None)

    def counts(self) -> Dict[Optional[Confidence], int]:
        """Number of cards per confidence tag; ``None`` counts unrated cards."""
        tally = Counter(self.rating(card.word) for card in self.cards)
        return {tag: tally.get(tag, 0) for tag in DUE_RANK}

    def due_order(self) -> List[Flashcard]:
        return sorted(self.cards, key=lambda card: DUE_RANK[self.rating(card.word)])
