"""Interactive Connections play: selection, submission and mistake budget."""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.constants import CONNECTIONS_GROUP_SIZE, CONNECTIONS_MISTAKES, GamePhase
from ..core.models import Category, ConnectionsCard, VocabularyItem
from ..engine.connections import CategoryPartitioner, PartitionResult
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class ConnectionsSession:
    """Selection set, solved groups and mistakes for one Connections board.

    Invalid moves (a fifth selection, touching a solved card, submitting
    fewer than four cards, playing after the game ended) are ignored.
    """

    def __init__(self, result: PartitionResult, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self._load(result)

    def _load(self, result: PartitionResult) -> None:
        if not result.ok:
            raise ValueError("ConnectionsSession requires a successful partition result")
        self.result = result
        self.categories: List[Category] = list(result.categories)
        self.cards: List[ConnectionsCard] = [
            ConnectionsCard(id=card.id, word=card.word, category_name=card.category_name)
            for card in result.cards
        ]
        self._by_id: Dict[str, ConnectionsCard] = {card.id: card for card in self.cards}
        self.selected: List[str] = []
        self.solved: List[str] = []
        self.mistakes_remaining = CONNECTIONS_MISTAKES
        self.phase = GamePhase.PLAYING

    @classmethod
    def start(
        cls,
        items: Sequence[VocabularyItem],
        partitioner: Optional[CategoryPartitioner] = None,
        rng: Optional[random.Random] = None,
    ) -> Tuple[Optional["ConnectionsSession"], PartitionResult]:
        partitioner = partitioner or CategoryPartitioner()
        result = partitioner.partition(items)
        if not result.ok:
            return None, result
        return cls(result, rng=rng), result

    def new_game(self, partitioner: CategoryPartitioner, items: Sequence[VocabularyItem]) -> PartitionResult:
        """Regenerate the board and reset all play state; keeps the old board on failure."""

        result = partitioner.partition(items)
        if result.ok:
            self._load(result)
        return result

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def select(self, card_id: str) -> None:
        if self.phase != GamePhase.PLAYING:
            return
        card = self._by_id.get(card_id)
        if card is None or card.solved:
            return
        if card.selected:
            card.selected = False
            self.selected.remove(card_id)
            return
        if len(self.selected) >= CONNECTIONS_GROUP_SIZE:
            return
        card.selected = True
        self.selected.append(card_id)

    @property
    def can_submit(self) -> bool:
        return self.phase == GamePhase.PLAYING and len(self.selected) == CONNECTIONS_GROUP_SIZE

    def submit(self) -> Optional[bool]:
        """Check the selection; returns None when submitting is not allowed."""

        if not self.can_submit:
            return None
        chosen = [self._by_id[card_id] for card_id in self.selected]
        category_name = chosen[0].category_name
        if all(card.category_name == category_name for card in chosen):
            for card in chosen:
                card.solved = True
                card.selected = False
            self.selected = []
            self.solved.append(category_name)
            LOGGER.info("Solved group %s", category_name)
            if len(self.solved) == len(self.categories):
                self.phase = GamePhase.WON
            return True

        # Wrong guesses keep the selection so one card can be swapped out.
        self.mistakes_remaining -= 1
        if self.mistakes_remaining <= 0:
            self.mistakes_remaining = 0
            self.phase = GamePhase.LOST
        return False

    def deselect_all(self) -> None:
        for card in self.cards:
            if not card.solved:
                card.selected = False
        self.selected = []

    def shuffle(self) -> None:
        """Solved cards first, grouped in solve order; unsolved cards reshuffled."""

        solved_cards = [
            card
            for name in self.solved
            for card in self.cards
            if card.solved and card.category_name == name
        ]
        unsolved = [card for card in self.cards if not card.solved]
        self.rng.shuffle(unsolved)
        self.cards = solved_cards + unsolved

    # ------------------------------------------------------------------
    # Display helpers
    # ------------------------------------------------------------------
    def category_for(self, name: str) -> Optional[Category]:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def solved_groups(self) -> List[Category]:
        groups: List[Category] = []
        for name in self.solved:
            category = self.category_for(name)
            if category is not None:
                groups.append(category)
        return groups

    def card(self, card_id: str) -> Optional[ConnectionsCard]:
        return self._by_id.get(card_id)
