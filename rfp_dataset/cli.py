"""Command-line entry point: build a fine-tuning dataset from RFP/proposal pairs."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rfp_dataset.config import Settings, settings
from rfp_dataset.errors import LLMConnectionError, NoCompletePairsError
from rfp_dataset.export import write_jsonl
from rfp_dataset.ingestion.pairs import discover_pairs
from rfp_dataset.models.document import DocumentPair
from rfp_dataset.models.pipeline import ProgressEvent
from rfp_dataset.pipeline import Pipeline

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_EMPTY = 1
EXIT_CONNECTION = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rfp-dataset",
        description="Generate a JSONL fine-tuning dataset from RFP and proposal documents using a local Ollama model.",
    )
    parser.add_argument(
        "--pairs-dir",
        type=Path,
        help="Directory whose sub-directories each hold rfp/ and proposal/ folders.",
    )
    parser.add_argument(
        "--rfp",
        type=Path,
        action="append",
        default=[],
        help="RFP file for an ad-hoc pair (repeatable).",
    )
    parser.add_argument("--proposal", type=Path, help="Proposal file for the ad-hoc pair.")
    parser.add_argument("--output", type=Path, help="Output JSONL path.")
    parser.add_argument("--chunk-size", type=int, help="Characters per page.")
    parser.add_argument("--model", help="Ollama model name.")
    parser.add_argument("--url", help="Ollama generate endpoint.")
    parser.add_argument("--log-level", help="Logging level.")
    return parser


def apply_overrides(base: Settings, args: argparse.Namespace) -> Settings:
    updates = {}
    if args.output:
        updates["output_path"] = str(args.output)
    if args.chunk_size is not None:
        if args.chunk_size <= 0:
            raise ValueError("--chunk-size must be positive")
        updates["page_chunk_size"] = args.chunk_size
    if args.model:
        updates["ollama_model"] = args.model
    if args.url:
        updates["ollama_url"] = args.url
    if args.log_level:
        level = args.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(
                f"--log-level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL, got {args.log_level!r}"
            )
        updates["log_level"] = level
    return base.model_copy(update=updates)


def collect_pairs(args: argparse.Namespace) -> List[DocumentPair]:
    pairs: List[DocumentPair] = []
    if args.pairs_dir:
        pairs.extend(discover_pairs(args.pairs_dir))
    if args.rfp or args.proposal:
        pairs.append(
            DocumentPair(
                pair_id="cli",
                rfp=list(args.rfp),
                proposal=[args.proposal] if args.proposal else [],
            )
        )
    return pairs


def print_progress(event: ProgressEvent) -> None:
    print(event.message, file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = apply_overrides(settings, args)
    except ValueError as exc:
        parser.error(str(exc))
    logging.basicConfig(level=config.log_level)

    pipeline = Pipeline(config=config, progress=print_progress)
    try:
        result = pipeline.run(collect_pairs(args))
    except LLMConnectionError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_CONNECTION
    except NoCompletePairsError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_EMPTY

    for report in result.reports:
        if report.error:
            print(f"Pair {report.pair_id}: {report.error}", file=sys.stderr)
    if result.warning:
        print(result.warning, file=sys.stderr)
        return EXIT_EMPTY

    output_path = config.output_path_obj
    total = write_jsonl(result.records, output_path)
    pair_count = len(result.reports)
    print(
        f"Your fine-tuning dataset with {total} entries has been created "
        f"from {pair_count} document pair(s): {output_path}"
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
