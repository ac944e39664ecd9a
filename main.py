"""CLI entrypoint for the vocabulary study games."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from vocabgames.core.constants import DEFAULT_ATTEMPTS, DEFAULT_GRID_SIZE
from vocabgames.core.exceptions import VocabGameError
from vocabgames.core.models import VocabularyItem
from vocabgames.data.vocabulary import (
    dedupe,
    load_vocabulary_file,
    parse_vocabulary_text,
    validate_vocabulary,
)
from vocabgames.engine.connections import CategoryPartitioner, PartitionerConfig, PartitionResult
from vocabgames.engine.generator import CrosswordGenerator, CrosswordResult, GeneratorConfig
from vocabgames.io.study_materials import StudyMaterialGenerator
from vocabgames.utils.logger import configure_logging, get_logger
from vocabgames.utils.pretty import print_connections, print_crossword


LOGGER = get_logger("vocabgames.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate vocabulary games from a word list",
    )
    parser.add_argument(
        "--game",
        choices=["crossword", "connections", "materials"],
        default="crossword",
        help="What to generate",
    )
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Vocabulary words (format: WORD or WORD:definition)",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="Text file (comma/newline separated, # comments) or JSON list of {word, definition}",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--attempts",
        type=int,
        default=DEFAULT_ATTEMPTS,
        help="Crossword layout attempts (best one wins)",
    )
    parser.add_argument("--grid-size", type=int, default=DEFAULT_GRID_SIZE, help="Crossword grid size")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Print a human-readable grid or board instead of JSON (crossword, connections)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def collect_vocabulary(args: argparse.Namespace) -> List[VocabularyItem]:
    items: List[VocabularyItem] = []
    if args.words:
        items.extend(parse_vocabulary_text("\n".join(args.words)))
    if args.words_file:
        items.extend(load_vocabulary_file(args.words_file))
    return validate_vocabulary(dedupe(items))


def crossword_payload(result: CrosswordResult) -> Dict[str, Any]:
    return {
        "grid": result.grid.to_jsonable(),
        "clues": [
            {
                "number": clue.number,
                "direction": clue.direction.value,
                "text": clue.text,
                "start": [clue.row, clue.col],
                "length": len(clue.word),
                "answer": clue.word,
            }
            for clue in result.clues
        ],
        "skipped_words": result.skipped_words,
        "seed": result.seed,
    }


def connections_payload(result: PartitionResult) -> Dict[str, Any]:
    return {
        "categories": [
            {"name": category.name, "words": category.words, "color_index": category.color_index}
            for category in result.categories
        ],
        "cards": [card.word for card in result.cards],
    }


def materials_payload(items: List[VocabularyItem]) -> Dict[str, Any]:
    materials = StudyMaterialGenerator().generate([item.word for item in items])
    paragraph = materials.paragraph
    return {
        "quiz": [question.__dict__ for question in materials.quiz],
        "flashcards": [card.__dict__ for card in materials.flashcards],
        "matching": [pair.__dict__ for pair in materials.matching],
        "paragraph": {
            "paragraph": paragraph.paragraph,
            "questions": [question.__dict__ for question in paragraph.questions],
        } if paragraph else None,
    }


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if not args.words and not args.words_file:
        parser.error("provide --words or --words-file")

    try:
        items = collect_vocabulary(args)
        if args.game == "crossword":
            config = GeneratorConfig(grid_size=args.grid_size, attempts=args.attempts, seed=args.seed)
            result = CrosswordGenerator(config).generate(items)
            if not result.ok:
                raise result.error
            if args.pretty:
                print_crossword(result)
                return 0
            payload = crossword_payload(result)
        elif args.game == "connections":
            board = CategoryPartitioner(PartitionerConfig(seed=args.seed)).partition(items)
            if not board.ok:
                raise board.error
            if args.pretty:
                print_connections(board)
                return 0
            payload = connections_payload(board)
        else:
            payload = materials_payload(items)
    except VocabGameError as exc:
        LOGGER.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
