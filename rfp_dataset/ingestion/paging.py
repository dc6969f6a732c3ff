"""Split long documents into fixed-size pages that fit a model prompt."""

from __future__ import annotations

from typing import List, Optional

from rfp_dataset.config import settings


def paginate(text: str, chunk_size: Optional[int] = None) -> List[str]:
    """Return consecutive, non-overlapping ``chunk_size`` character pages of ``text``."""
    if chunk_size is None:
        chunk_size = settings.page_chunk_size
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [text[start:start + chunk_size] for start in range(0, len(text), chunk_size)]
