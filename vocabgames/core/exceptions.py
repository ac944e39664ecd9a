"""Custom exception hierarchy for the vocabulary games."""


class VocabGameError(Exception):
    """Base exception for generation and study-material failures."""


class VocabularyError(VocabGameError):
    """Raised when the vocabulary input cannot be used."""


class InsufficientInputError(VocabGameError):
    """Raised when a generator does not receive enough usable words."""


class DegenerateLayoutError(VocabGameError):
    """Raised when the best crossword attempt connects fewer than two words."""


class LayoutValidationError(VocabGameError):
    """Raised when a generated crossword fails the integrity checks."""


class ExternalGenerationError(VocabGameError):
    """Raised when the AI collaborator fails or returns unusable content."""


class GenerationInProgressError(VocabGameError):
    """Raised when a study-material request overlaps one already running."""


class ConfidenceStoreError(VocabGameError):
    """Raised when confidence ratings cannot be persisted."""
