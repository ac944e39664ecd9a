"""Vocabulary study games built from a learner's word list.

This package exposes the public API surface via:

- ``vocabgames.engine.generator.CrosswordGenerator``: lays out a numbered crossword.
- ``vocabgames.engine.connections.CategoryPartitioner``: builds a Connections board.
- ``vocabgames.play`` sessions: crossword, Connections, hangman, matching,
  paragraph cloze, quiz and flashcard state machines.
- ``vocabgames.io.study_materials.StudyMaterialGenerator``: Gemini-backed
  quiz, flashcard, matching and paragraph content.
"""

from .engine.connections import CategoryPartitioner, PartitionerConfig
from .engine.generator import CrosswordGenerator, GeneratorConfig
from .play.connections_session import ConnectionsSession
from .play.crossword_session import CrosswordSession

__all__ = [
    "CategoryPartitioner",
    "PartitionerConfig",
    "CrosswordGenerator",
    "GeneratorConfig",
    "ConnectionsSession",
    "CrosswordSession",
]

__version__ = "0.1.0"
