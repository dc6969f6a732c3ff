"""Page-by-page extraction of self-contained sections from an RFP."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from rfp_dataset.errors import LLMConnectionError
from rfp_dataset.llm.ollama_client import OllamaClient
from rfp_dataset.llm.parsing import parse_json
from rfp_dataset.llm.prompts import build_section_extraction_prompt

logger = logging.getLogger(__name__)


class SectionExtractor:
    """Asks the model for the logical sections found on each page."""

    def __init__(self, client: Optional[OllamaClient] = None) -> None:
        self.client = client or OllamaClient()

    def extract_page(self, page: str) -> List[str]:
        response = self.client.generate(build_section_extraction_prompt(page), json_mode=True)
        parsed = parse_json(response)
        if not isinstance(parsed, list):
            logger.debug("Model returned %s instead of a list; ignoring page", type(parsed).__name__)
            return []
        sections = [item for item in parsed if isinstance(item, str)]
        if len(sections) != len(parsed):
            logger.debug("Dropped %s non-string sections", len(parsed) - len(sections))
        return sections

    def extract(self, pages: Sequence[str]) -> List[str]:
        """Return every section found across ``pages``, in page order.

        A page that fails for any reason other than connectivity contributes
        nothing; LLMConnectionError aborts the whole extraction.
        """
        all_sections: List[str] = []
        for page_number, page in enumerate(pages, start=1):
            try:
                sections = self.extract_page(page)
            except LLMConnectionError:
                raise
            except Exception as exc:
                logger.warning("Skipping page %s during section extraction: %s", page_number, exc)
                continue
            logger.debug("Page %s yielded %s sections", page_number, len(sections))
            all_sections.extend(sections)
        return all_sections


def extract_sections(pages: Sequence[str], client: Optional[OllamaClient] = None) -> List[str]:
    return SectionExtractor(client).extract(pages)
