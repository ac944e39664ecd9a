"""AI study-material generation: quiz, flashcards, matching pairs, paragraphs.

Prompts ask Gemini for JSON; :func:`extract_json` tolerates markdown fences
and chatter around the payload. Every failure surfaces as
:class:`ExternalGenerationError` with a message fit to show the learner.
"""

from __future__ import annotations

import json
import re
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol, Sequence

from ..core.exceptions import ExternalGenerationError, GenerationInProgressError
from ..core.models import (
    Flashcard,
    MatchingPair,
    ParagraphData,
    ParagraphQuestion,
    QuizQuestion,
    StudyMaterials,
    VocabularyItem,
)
from ..utils.logger import get_logger
from .gemini_client import GeminiAPIError, GeminiClient


LOGGER = get_logger(__name__)

FENCED_JSON_RE = re.compile(r"```json\s*\n(.*?)\n\s*```", re.DOTALL)
OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

DIFFICULTIES = ("easy", "medium", "hard", "custom")


class TextClient(Protocol):
    def generate_text(self, prompt: str) -> str:
        """Return the model's text response for ``prompt``."""


def extract_json(text: str) -> Any:
    """Parse JSON from a fenced block, the outermost ``{...}``, or the whole text."""

    text = text or ""
    fenced = FENCED_JSON_RE.search(text)
    if fenced:
        candidate = fenced.group(1)
    else:
        braces = OBJECT_RE.search(text)
        candidate = braces.group(0) if braces else text
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as exc:
        LOGGER.warning("Could not parse model output as JSON: %s", exc)
        LOGGER.debug("Model output was: %s", text)
        raise ExternalGenerationError("The AI response was not in the expected JSON format.") from exc


class StudyMaterialGenerator:
    """Builds study materials for a word list through a Gemini text client."""

    QUIZ_PROMPT = (
        "Create {count} multiple choice quiz questions for these vocabulary words: {words}.\n"
        "{instruction}"
        "For each question, provide:\n"
        "1. A sentence with a blank where the vocabulary word should go\n"
        "2. Four answer choices (one correct, three incorrect)\n"
        "3. The index of the correct answer\n"
        "Format your response as JSON with this structure:\n"
        '{{"questions": [{{"question": "sentence with ___ blank", '
        '"options": ["option1", "option2", "option3", "option4"], '
        '"correct": 0, "word": "vocabulary word"}}]}}'
    )

    FLASHCARD_PROMPT = (
        "Create comprehensive flashcards for these vocabulary words: {words}.\n"
        "You MUST provide ALL of the following fields for each word: the word, a clear "
        "definition, synonyms (2-3, comma-separated), antonyms (2-3, comma-separated), "
        "a context sentence, the etymology and an example sentence.\n"
        "Format your response as JSON with this structure:\n"
        '{{"flashcards": [{{"word": "...", "definition": "...", "synonyms": "...", '
        '"antonyms": "...", "context": "...", "etymology": "...", "example": "..."}}]}}'
    )

    MATCHING_PROMPT = (
        "Create matching pairs for these vocabulary words: {words}.\n"
        "Provide the word and a brief definition (5-10 words).\n"
        "Format your response as JSON with this structure:\n"
        '{{"pairs": [{{"word": "vocabulary word", "definition": "brief definition"}}]}}'
    )

    PARAGRAPH_PROMPT = (
        "Write a cohesive paragraph (150-200 words) that uses ALL of these vocabulary "
        "words: {words}.\n"
        "{instruction}"
        "Mark each vocabulary word with bold formatting like **word** and use each word "
        "correctly in context. Also write 3-4 comprehension questions about the paragraph.\n"
        "Format your response as JSON with this structure:\n"
        '{{"paragraph": "text with **bolded** vocabulary words", '
        '"questions": [{{"question": "comprehension question", "answer": "expected answer"}}]}}'
    )

    HANGMAN_PROMPT = (
        "List {count} challenging single words for a game of hangman on the theme: {theme}.\n"
        "Use letters only and give each word a short definition to serve as a hint.\n"
        "Format your response as JSON with this structure:\n"
        '{{"words": [{{"word": "word", "definition": "short definition"}}]}}'
    )

    QUIZ_DIFFICULTY = {
        "easy": "Make the questions straightforward with clear distinctions between the correct answer and distractors.",
        "medium": "Make the questions moderately challenging with subtle differences between options.",
        "hard": "Make the questions very challenging, requiring deep understanding of nuances and context.",
    }

    PARAGRAPH_DIFFICULTY = {
        "easy": "Use simple sentence structures and clear contexts for each vocabulary word.",
        "medium": "Use moderately complex sentence structures with nuanced contexts.",
        "hard": "Use sophisticated sentence structures and challenging, abstract contexts.",
    }

    def __init__(
        self,
        client: Optional[TextClient] = None,
        max_retries: int = 2,
        backoff_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self._client = client
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def generate(self, words: Sequence[str]) -> StudyMaterials:
        """Quiz, flashcards, matching pairs and a paragraph for ``words``."""
        vocab = self._join(words)
        with self._exclusive("Failed to generate study materials. Please check your API key and try again."):
            quiz = self._parse_quiz(self._request(self.QUIZ_PROMPT.format(count=10, words=vocab, instruction="")))
            flashcards = self._parse_flashcards(self._request(self.FLASHCARD_PROMPT.format(words=vocab)))
            matching = self._parse_matching(self._request(self.MATCHING_PROMPT.format(words=vocab)))
            paragraph = self._parse_paragraph(
                self._request(self.PARAGRAPH_PROMPT.format(words=vocab, instruction=""))
            )
        LOGGER.info(
            "Study materials ready: %d questions, %d flashcards, %d pairs",
            len(quiz), len(flashcards), len(matching),
        )
        return StudyMaterials(quiz=quiz, flashcards=flashcards, matching=matching, paragraph=paragraph)

    def generate_more_quiz(
        self, words: Sequence[str], difficulty: str = "medium", topic: str = "", count: int = 5,
    ) -> List[QuizQuestion]:
        instruction = self._instruction(self.QUIZ_DIFFICULTY, difficulty, topic, "Focus the questions on: {topic}")
        prompt = self.QUIZ_PROMPT.format(count=count, words=self._join(words), instruction=instruction)
        with self._exclusive("Failed to generate more quiz questions. Please try again."):
            return self._parse_quiz(self._request(prompt))

    def generate_more_paragraph(
        self, words: Sequence[str], difficulty: str = "medium", topic: str = "",
    ) -> ParagraphData:
        instruction = self._instruction(
            self.PARAGRAPH_DIFFICULTY, difficulty, topic, "Focus the paragraph on the theme: {topic}"
        )
        prompt = self.PARAGRAPH_PROMPT.format(words=self._join(words), instruction=instruction)
        with self._exclusive("Failed to generate a new paragraph. Please try again."):
            return self._parse_paragraph(self._request(prompt))

    def generate_hangman_words(self, theme: str, count: int = 10) -> List[VocabularyItem]:
        if not theme.strip():
            raise ExternalGenerationError("Please enter a theme")
        prompt = self.HANGMAN_PROMPT.format(count=count, theme=theme.strip())
        with self._exclusive("Failed to generate hangman words. Please try again."):
            data = self._request(prompt)
            entries = self._require_list(data, "words")
            items = [
                VocabularyItem(str(entry["word"]).strip(), str(entry.get("definition", "")).strip())
                for entry in entries
                if isinstance(entry, dict) and str(entry.get("word", "")).strip()
            ]
            if not items:
                raise ExternalGenerationError("The AI returned no hangman words.")
            return items[:count]

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _exclusive(self, failure_message: str) -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            raise GenerationInProgressError("A generation request is already running")
        try:
            yield
        except ExternalGenerationError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            LOGGER.error("Unusable study material payload: %s", exc)
            raise ExternalGenerationError(failure_message) from exc
        finally:
            self._lock.release()

    def _client_or_default(self) -> TextClient:
        if self._client is None:
            try:
                self._client = GeminiClient()
            except GeminiAPIError as exc:
                raise ExternalGenerationError(str(exc)) from exc
        return self._client

    def _request(self, prompt: str) -> Any:
        """Call the model with linear backoff between attempts and parse the JSON."""
        client = self._client_or_default()
        for attempt in range(1, self.max_retries + 1):
            try:
                text = client.generate_text(prompt)
                if not text:
                    raise GeminiAPIError("Empty response from API")
                return extract_json(text)
            except (GeminiAPIError, ExternalGenerationError) as exc:
                if attempt == self.max_retries:
                    LOGGER.error("Generation failed after %d attempts: %s", attempt, exc)
                    if isinstance(exc, ExternalGenerationError):
                        raise
                    raise ExternalGenerationError(
                        "The AI service is unavailable. Please check your API key and try again."
                    ) from exc
                LOGGER.warning("Attempt %d failed, retrying: %s", attempt, exc)
                self._sleep(self.backoff_seconds * attempt)
        raise AssertionError("unreachable")  # pragma: no cover

    @staticmethod
    def _join(words: Sequence[str]) -> str:
        return ", ".join(word.strip() for word in words if word.strip())

    @staticmethod
    def _instruction(table: Dict[str, str], difficulty: str, topic: str, custom_template: str) -> str:
        difficulty = (difficulty or "medium").lower()
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {difficulty}")
        if difficulty == "custom":
            return custom_template.format(topic=topic.strip()) + "\n" if topic.strip() else ""
        return table[difficulty] + "\n"

    @staticmethod
    def _require_list(data: Any, key: str) -> List[Any]:
        if not isinstance(data, dict) or not isinstance(data.get(key), list):
            raise ExternalGenerationError(f"The AI response is missing '{key}'.")
        return data[key]

    @classmethod
    def _require_objects(cls, data: Any, key: str) -> List[Dict[str, Any]]:
        entries = cls._require_list(data, key)
        if not all(isinstance(entry, dict) for entry in entries):
            raise ExternalGenerationError(f"The AI response has malformed '{key}' entries.")
        return entries

    @classmethod
    def _parse_quiz(cls, data: Any) -> List[QuizQuestion]:
        questions: List[QuizQuestion] = []
        for entry in cls._require_objects(data, "questions"):
            options = [str(option) for option in entry["options"]]
            correct = int(entry["correct"])
            if not 0 <= correct < len(options):
                LOGGER.warning("Dropping quiz question with bad answer index: %r", entry)
                continue
            questions.append(
                QuizQuestion(
                    question=str(entry["question"]),
                    options=options,
                    correct_index=correct,
                    word=str(entry.get("word", "")),
                )
            )
        return questions

    @classmethod
    def _parse_flashcards(cls, data: Any) -> List[Flashcard]:
        optional = ("synonyms", "antonyms", "context", "etymology", "mnemonic")
        cards: List[Flashcard] = []
        for entry in cls._require_objects(data, "flashcards"):
            extras = {key: str(entry[key]) for key in optional if entry.get(key)}
            cards.append(
                Flashcard(
                    word=str(entry["word"]),
                    definition=str(entry["definition"]),
                    example=str(entry.get("example", "")),
                    **extras,
                )
            )
        return cards

    @classmethod
    def _parse_matching(cls, data: Any) -> List[MatchingPair]:
        return [
            MatchingPair(word=str(entry["word"]), definition=str(entry["definition"]))
            for entry in cls._require_objects(data, "pairs")
        ]

    @classmethod
    def _parse_paragraph(cls, data: Any) -> ParagraphData:
        if not isinstance(data, dict) or not isinstance(data.get("paragraph"), str):
            raise ExternalGenerationError("The AI response is missing 'paragraph'.")
        entries = cls._require_objects(data, "questions") if data.get("questions") else []
        questions = [
            ParagraphQuestion(question=str(entry["question"]), answer=str(entry["answer"]))
            for entry in entries
        ]
        return ParagraphData(paragraph=data["paragraph"], questions=questions)
