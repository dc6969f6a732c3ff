"""Exception hierarchy for the dataset builder."""

from __future__ import annotations

from typing import Optional


class DatasetBuilderError(RuntimeError):
    """Base class for every error raised by the builder."""


class LLMError(DatasetBuilderError):
    """A language model call failed for a reason other than connectivity."""


class LLMResponseError(LLMError):
    """The model endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Ollama API Error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class LLMConnectionError(LLMError):
    """The model endpoint could not be reached or answered nonsense.

    The message carries remediation steps meant to be shown to the user as-is.
    """


class DocumentDecodeError(DatasetBuilderError):
    """An input file could not be turned into text."""

    def __init__(self, name: str, reason: Optional[str] = None) -> None:
        super().__init__(f"Failed to process file: {name}")
        self.name = name
        self.reason = reason


class NoCompletePairsError(DatasetBuilderError):
    """No document pair had both RFP files and a single proposal file."""

    def __init__(self, message: str = "Please provide at least one complete RFP and Proposal pair.") -> None:
        super().__init__(message)
