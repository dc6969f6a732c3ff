"""RFP section extraction and proposal matching."""

from .matcher import SectionMatcher, find_matching_section
from .sections import SectionExtractor, extract_sections

__all__ = ["SectionExtractor", "SectionMatcher", "extract_sections", "find_matching_section"]
