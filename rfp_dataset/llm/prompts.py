"""Prompt templates for section extraction and proposal matching."""

from __future__ import annotations

from typing import Iterable

PAGE_SEPARATOR = "\n\n---\n\n"


def build_section_extraction_prompt(page: str) -> str:
    return f"""Analyze the following page of a document. Identify and extract all distinct, self-contained logical sections or requirements from this text.
Return a valid JSON array of strings, where each string is the exact text of a section you found.
If no complete sections are found on this page, return an empty array [].

Document Page:
---
{page}
---"""


def build_relevance_prompt(section: str, page: str) -> str:
    return f"""RFP Requirement: "{section}"

Proposal Text Snippet: "{page}"

Does the Proposal Text Snippet likely contain the specific answer to the RFP Requirement?
Respond with only "YES" or "NO"."""


def build_answer_extraction_prompt(section: str, relevant_pages: Iterable[str]) -> str:
    """Ask for the exact proposal passage answering ``section``."""
    combined = PAGE_SEPARATOR.join(relevant_pages)
    return f"""You will be given a specific requirement from an RFP and a block of relevant text from a proposal.
Your task is to extract the single, complete, and exact section from the proposal text that directly answers the RFP requirement.
Return only the text of the proposal section, with no extra commentary.

RFP Requirement:
---
{section}
---

Relevant Proposal Text:
---
{combined}
---"""
