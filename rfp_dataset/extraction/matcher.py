"""Search-then-extract matching of an RFP section against proposal pages.

The relevance phase asks a cheap YES/NO question for every proposal page. Only
the pages voted relevant are concatenated and sent in a single extraction
prompt, which keeps the number of large prompts at one per section.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from rfp_dataset.errors import LLMConnectionError
from rfp_dataset.llm.ollama_client import OllamaClient
from rfp_dataset.llm.prompts import build_answer_extraction_prompt, build_relevance_prompt

logger = logging.getLogger(__name__)

RELEVANT_TOKEN = "YES"


def is_affirmative(response: str) -> bool:
    return RELEVANT_TOKEN in response.strip().upper()


class SectionMatcher:
    """Finds the proposal passage that answers an RFP section."""

    def __init__(self, client: Optional[OllamaClient] = None) -> None:
        self.client = client or OllamaClient()

    def is_relevant(self, section: str, page: str) -> bool:
        response = self.client.generate(build_relevance_prompt(section, page), json_mode=False)
        return is_affirmative(response)

    def find_relevant_pages(self, section: str, pages: Sequence[str]) -> List[str]:
        relevant: List[str] = []
        for page_number, page in enumerate(pages, start=1):
            try:
                if self.is_relevant(section, page):
                    relevant.append(page)
            except LLMConnectionError:
                raise
            except Exception as exc:
                logger.warning("Skipping page %s during relevance check: %s", page_number, exc)
        return relevant

    def extract_answer(self, section: str, relevant_pages: Sequence[str]) -> Optional[str]:
        try:
            response = self.client.generate(
                build_answer_extraction_prompt(section, relevant_pages), json_mode=False
            )
        except LLMConnectionError:
            raise
        except Exception as exc:
            logger.error("Error during final extraction: %s", exc)
            return None
        return response.strip() or None

    def find_match(self, section: str, pages: Sequence[str]) -> Optional[str]:
        """Return the answering proposal text, or None when nothing relevant is found."""
        relevant_pages = self.find_relevant_pages(section, pages)
        if not relevant_pages:
            logger.debug("No relevant proposal pages for section %.80r", section)
            return None
        logger.debug("%s of %s proposal pages judged relevant", len(relevant_pages), len(pages))
        return self.extract_answer(section, relevant_pages)


def find_matching_section(
    section: str, pages: Sequence[str], client: Optional[OllamaClient] = None
) -> Optional[str]:
    return SectionMatcher(client).find_match(section, pages)
