"""Lenient JSON parsing for model replies."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

LEADING_JSON_FENCE = re.compile(r"^```json\s*")
LEADING_FENCE = re.compile(r"^```\s*")
TRAILING_FENCE = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    sanitized = LEADING_JSON_FENCE.sub("", text.strip())
    sanitized = LEADING_FENCE.sub("", sanitized)
    return TRAILING_FENCE.sub("", sanitized)


def parse_json(text: str) -> Any:
    """Parse a model reply as JSON, returning an empty list when it is not JSON."""
    sanitized = strip_code_fences(text)
    try:
        return json.loads(sanitized)
    except json.JSONDecodeError:
        logger.warning("Failed to parse JSON from model reply: %.500s", sanitized)
        return []
