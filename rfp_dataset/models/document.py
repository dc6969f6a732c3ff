"""Document-level data models."""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A named piece of decoded text."""

    model_config = ConfigDict(frozen=True)

    name: str
    content: str


DocumentSource = Union[Document, Path]


class DocumentPair(BaseModel):
    """One or more RFP documents and the proposal that answers them."""

    pair_id: str
    rfp: List[DocumentSource] = Field(default_factory=list)
    proposal: List[DocumentSource] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return len(self.rfp) >= 1 and len(self.proposal) == 1
