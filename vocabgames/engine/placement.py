"""Word placement rules for the crossword grid.

``can_place`` is the only gatekeeper: ``place_word`` writes unconditionally
and callers are expected to have checked the position first.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence, Tuple

from ..core.constants import Direction
from ..core.models import PlacedWord
from ..utils.logger import get_logger
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)

Placement = Tuple[int, int, Direction]


def can_place(grid: CrosswordGrid, word: str, row: int, col: int, direction: Direction) -> bool:
    """Return True when ``word`` may be written at ``(row, col)`` in ``direction``."""

    if not word:
        return False
    dr, dc = direction.step
    length = len(word)
    end_row = row + dr * (length - 1)
    end_col = col + dc * (length - 1)
    if not grid.in_bounds(row, col) or not grid.in_bounds(end_row, end_col):
        return False

    # Neighbours along the axis must stay empty, otherwise two words merge.
    if grid.is_occupied(row - dr, col - dc):
        return False
    if grid.is_occupied(end_row + dr, end_col + dc):
        return False

    for index, letter in enumerate(word):
        r, c = row + dr * index, col + dc * index
        cell = grid.cell(r, c)
        if cell.occupied:
            if cell.letter != letter:
                return False
            continue
        for pr, pc in direction.perpendicular_steps:
            if grid.is_occupied(r + pr, c + pc):
                return False
    return True


def place_word(grid: CrosswordGrid, word: str, row: int, col: int, direction: Direction) -> PlacedWord:
    """Write ``word`` into the grid and return its placement record."""

    placed = PlacedWord(word=word, row=row, col=col, direction=direction)
    for index, (r, c) in enumerate(placed.cells):
        cell = grid.cell(r, c)
        cell.letter = word[index]
        if direction == Direction.ACROSS:
            cell.across_ref = placed.id
        else:
            cell.down_ref = placed.id
    return placed


def centered_placement(grid: CrosswordGrid, word: str) -> Placement:
    """Position for the opening word: across, on the middle row, centred."""

    return grid.size // 2, (grid.size - len(word)) // 2, Direction.ACROSS


def intersection_candidates(word: str, placed: Sequence[PlacedWord]) -> Iterator[Placement]:
    """Yield positions where ``word`` crosses an already placed word.

    Order is placed-word order, then the letter index in ``word``, then the
    letter index in the placed word. Each candidate runs perpendicular to the
    word it crosses.
    """

    for target in placed:
        new_direction = target.direction.toggled()
        for j, char in enumerate(word):
            for k, existing in enumerate(target.word):
                if existing != char:
                    continue
                tr, tc = target.direction.step
                cross_row = target.row + tr * k
                cross_col = target.col + tc * k
                nr, nc = new_direction.step
                yield cross_row - nr * j, cross_col - nc * j, new_direction


def find_intersecting_placement(
    grid: CrosswordGrid, word: str, placed: Sequence[PlacedWord]
) -> Optional[Placement]:
    """Return the first legal crossing position for ``word`` (first-fit)."""

    for row, col, direction in intersection_candidates(word, placed):
        if can_place(grid, word, row, col, direction):
            LOGGER.debug("Fit %s at (%s,%s) %s", word, row, col, direction.value)
            return row, col, direction
    return None
