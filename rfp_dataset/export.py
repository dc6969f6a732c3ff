"""Serialize training records into the JSONL fine-tuning format."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable

from rfp_dataset.models.dataset import TrainingRecord

logger = logging.getLogger(__name__)

LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _escape_surrogate(match: re.Match) -> str:
    return f"\\u{ord(match.group(0)):04x}"


def record_to_line(record: TrainingRecord) -> str:
    line = json.dumps(record.to_example().model_dump(), ensure_ascii=False, separators=(",", ":"))
    # Lone surrogates cannot be encoded as UTF-8; keep them as JSON escapes.
    return LONE_SURROGATE.sub(_escape_surrogate, line)


def render_jsonl(records: Iterable[TrainingRecord]) -> str:
    """One JSON object per line, separated by newlines, with no trailing newline."""
    return "\n".join(record_to_line(record) for record in records)


def write_jsonl(records: Iterable[TrainingRecord], output_path: Path) -> int:
    records = list(records)
    text = render_jsonl(records)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="\n") as handle:
        handle.write(text)
    logger.info("Wrote %s training examples to %s", len(records), output_path)
    return len(records)
