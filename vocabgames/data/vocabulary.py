"""Learner vocabulary input: parsing, loading and validation."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Iterable, List

from ..core.constants import MAX_VOCABULARY, MIN_VOCABULARY
from ..core.exceptions import VocabularyError
from ..core.models import Flashcard, VocabularyItem
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

SEPARATORS_RE = re.compile(r"[,\n]")


def _parse_entry(entry: str) -> VocabularyItem | None:
    entry = entry.strip()
    if not entry or entry.startswith("#"):
        return None
    if ":" in entry:
        word, _, definition = entry.partition(":")
        word = word.strip()
        if not word:
            return None
        return VocabularyItem(word, definition.strip())
    return VocabularyItem(entry)


def dedupe(items: Iterable[VocabularyItem]) -> List[VocabularyItem]:
    """Keep the first occurrence of each word, compared case-insensitively."""

    seen = set()
    unique: List[VocabularyItem] = []
    for item in items:
        key = item.word.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def parse_vocabulary_text(text: str) -> List[VocabularyItem]:
    """Split on commas and newlines; ``WORD:definition`` entries keep their definition.

    A definition containing a comma would be split, so files with
    definitions are written one entry per line without commas.
    """

    entries = [_parse_entry(part) for part in SEPARATORS_RE.split(text or "")]
    return dedupe(item for item in entries if item is not None)


def load_vocabulary_file(path: Path | str) -> List[VocabularyItem]:
    """Load a plain-text word list or a JSON list of ``{word, definition}`` objects."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise VocabularyError(f"Could not read vocabulary file {path}: {exc}") from exc

    if path.suffix.lower() != ".json":
        items = parse_vocabulary_text(text)
        LOGGER.info("Loaded %d words from %s", len(items), path.name)
        return items

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise VocabularyError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, list):
        raise VocabularyError(f"{path} must contain a JSON list")

    items: List[VocabularyItem] = []
    for entry in data:
        if isinstance(entry, str):
            parsed = _parse_entry(entry)
            if parsed is not None:
                items.append(parsed)
        elif isinstance(entry, dict) and str(entry.get("word", "")).strip():
            items.append(
                VocabularyItem(str(entry["word"]).strip(), str(entry.get("definition", "")).strip())
            )
        else:
            LOGGER.warning("Skipping malformed vocabulary entry: %r", entry)
    items = dedupe(items)
    LOGGER.info("Loaded %d words from %s", len(items), path.name)
    return items


def validate_vocabulary(
    items: List[VocabularyItem],
    minimum: int = MIN_VOCABULARY,
    maximum: int = MAX_VOCABULARY,
) -> List[VocabularyItem]:
    if len(items) < minimum:
        raise VocabularyError(f"Please enter at least {minimum} words (got {len(items)})")
    if len(items) > maximum:
        raise VocabularyError(f"Please enter at most {maximum} words (got {len(items)})")
    return items


def items_from_flashcards(flashcards: Iterable[Flashcard]) -> List[VocabularyItem]:
    return [VocabularyItem(card.word, card.definition) for card in flashcards]
