"""Word/definition matching game."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set

from ..core.models import MatchingPair


WORD = "word"
DEFINITION = "definition"


@dataclass
class MatchingCard:
    id: str
    content: str
    kind: str
    pair_id: int


class MatchingSession:
    """Two face-up selections at a time; a word and its own definition match."""

    def __init__(self, pairs: Sequence[MatchingPair], rng: Optional[random.Random] = None) -> None:
        self.pairs: List[MatchingPair] = list(pairs)
        self.rng = rng or random.Random()
        self.restart()

    def restart(self) -> None:
        cards: List[MatchingCard] = []
        for index, pair in enumerate(self.pairs):
            cards.append(MatchingCard(f"word-{index}", pair.word, WORD, index))
            cards.append(MatchingCard(f"definition-{index}", pair.definition, DEFINITION, index))
        self.rng.shuffle(cards)
        self.cards = cards
        self._by_id: Dict[str, MatchingCard] = {card.id: card for card in cards}
        self.selected: List[str] = []
        self.matched: Set[int] = set()
        self.attempts = 0

    @property
    def complete(self) -> bool:
        return bool(self.pairs) and len(self.matched) == len(self.pairs)

    def select(self, card_id: str) -> Optional[bool]:
        """Select a card; returns the match outcome once two are face up."""

        card = self._by_id.get(card_id)
        if card is None or card_id in self.selected or card.pair_id in self.matched:
            return None
        self.selected.append(card_id)
        if len(self.selected) < 2:
            return None

        self.attempts += 1
        first, second = (self._by_id[cid] for cid in self.selected)
        self.selected = []
        if first.pair_id == second.pair_id and first.kind != second.kind:
            self.matched.add(first.pair_id)
            return True
        return False
