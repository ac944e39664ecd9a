"""Flashcard self-ratings persisted as a single JSON document.

The file under ``local_db/`` (or ``$VOCABGAMES_HOME``) maps each literal
word to its confidence tag. Every change rewrites the whole file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional

from ..core.constants import Confidence
from ..core.exceptions import ConfidenceStoreError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

HOME_ENV = "VOCABGAMES_HOME"
DEFAULT_FILENAME = "flashcard_confidence.json"


def default_store_path() -> Path:
    return Path(os.environ.get(HOME_ENV, "local_db")) / DEFAULT_FILENAME


class ConfidenceStore:
    """Word -> confidence mapping backed by one JSON file."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else default_store_path()
        self._ratings: Dict[str, Confidence] = {}
        self.load()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def load(self) -> Dict[str, Confidence]:
        """Read the file; a missing or unreadable file yields an empty store."""
        self._ratings = {}
        if not self.path.exists():
            LOGGER.debug("Confidence store not found: %s", self.path)
            return self.all()

        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            LOGGER.warning("Confidence store read error (%s): %s", self.path.name, exc)
            return self.all()

        if not isinstance(doc, dict):
            LOGGER.warning("Confidence store %s is not a JSON object; ignoring", self.path.name)
            return self.all()

        for word, tag in doc.items():
            try:
                self._ratings[word] = Confidence(tag)
            except ValueError:
                LOGGER.warning("Skipping unknown confidence %r for %r", tag, word)
        LOGGER.debug("Confidence store loaded: %d ratings", len(self._ratings))
        return self.all()

    def get(self, word: str) -> Optional[Confidence]:
        return self._ratings.get(word)

    def set(self, word: str, confidence: Confidence | str) -> None:
        self._ratings[word] = Confidence(confidence)
        self._write()

    def clear(self, word: str) -> None:
        if self._ratings.pop(word, None) is not None:
            self._write()

    def all(self) -> Dict[str, Confidence]:
        return dict(self._ratings)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _write(self) -> None:
        doc = {word: tag.value for word, tag in self._ratings.items()}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            raise ConfidenceStoreError(f"Could not write {self.path}: {exc}") from exc
        LOGGER.debug("Confidence store written: %d ratings", len(doc))
