"""Prompt size estimation against the model's context window."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

import tiktoken

from rfp_dataset.config import settings

logger = logging.getLogger(__name__)

ENCODING_NAME = "cl100k_base"


@lru_cache(maxsize=2)
def load_prompt_encoding(allow_fallback: Optional[bool] = None) -> Optional[tiktoken.Encoding]:
    """Return the tokenizer used for estimates, or None to count words instead."""
    if allow_fallback is None:
        allow_fallback = settings.allow_tiktoken_fallback
    try:
        return tiktoken.get_encoding(ENCODING_NAME)
    except Exception as exc:
        if not allow_fallback:
            raise RuntimeError(
                f"tiktoken encoding {ENCODING_NAME!r} is unavailable ({exc}); "
                "set ALLOW_TIKTOKEN_FALLBACK=1 to estimate prompt sizes by word count."
            ) from exc
        logger.warning("tiktoken encoding %s is unavailable (%s); estimating prompt sizes by word count.", ENCODING_NAME, exc)
        return None


def estimate_prompt_tokens(prompt: str, encoding: Optional[tiktoken.Encoding]) -> int:
    # Special-token strings inside documents are ordinary text here.
    if encoding:
        return len(encoding.encode(prompt, disallowed_special=()))
    return len(prompt.split())
