"""Progress and result models reported by the pipeline."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .dataset import TrainingRecord


class PipelineState(str, Enum):
    IDLE = "idle"
    READING_FILES = "reading_files"
    PAGINATING = "paginating"
    EXTRACTING_RFP_SECTIONS = "extracting_rfp_sections"
    MATCHING_PROPOSAL = "matching_proposal"
    DONE = "done"
    COMPLETE = "complete"
    FAILED = "failed"


class ProgressEvent(BaseModel):
    """Status update emitted on every phase transition."""

    state: PipelineState
    message: str
    pair_index: Optional[int] = None
    pair_count: Optional[int] = None
    section_index: Optional[int] = None
    section_count: Optional[int] = None


class PairReport(BaseModel):
    """Outcome of processing a single document pair."""

    pair_id: str
    rfp_pages: int = 0
    proposal_pages: int = 0
    sections_found: int = 0
    records_created: int = 0
    error: Optional[str] = None
    skipped_reason: Optional[str] = None


class PipelineResult(BaseModel):
    """Records produced by one run plus per-pair bookkeeping."""

    state: PipelineState
    records: List[TrainingRecord] = Field(default_factory=list)
    reports: List[PairReport] = Field(default_factory=list)
    warning: Optional[str] = None
