"""Sequences paging, section extraction and matching over document pairs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from rfp_dataset.config import Settings, settings
from rfp_dataset.errors import DocumentDecodeError, LLMConnectionError, NoCompletePairsError
from rfp_dataset.extraction.matcher import SectionMatcher
from rfp_dataset.extraction.sections import SectionExtractor
from rfp_dataset.ingestion.decoders import decode_file
from rfp_dataset.ingestion.paging import paginate
from rfp_dataset.llm.ollama_client import OllamaClient
from rfp_dataset.models.dataset import TrainingRecord
from rfp_dataset.models.document import Document, DocumentPair, DocumentSource
from rfp_dataset.models.pipeline import (
    PairReport,
    PipelineResult,
    PipelineState,
    ProgressEvent,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]
Decoder = Callable[[Path], Document]

NO_RECORDS_WARNING = (
    "The AI model could not extract any valid sections from your documents. "
    "Please check the document content and try again."
)


def combine_rfp_documents(documents: Sequence[Document]) -> str:
    """Join RFP files into one text, each headed by its file name."""
    return "\n\n".join(f"--- RFP File: {doc.name} ---\n{doc.content}" for doc in documents)


class Pipeline:
    """Turns RFP/proposal pairs into training records.

    Every model call is issued one at a time. Content failures are absorbed at
    the page or section level; LLMConnectionError ends the run.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        client: Optional[OllamaClient] = None,
        decoder: Optional[Decoder] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.config = config or settings
        self.client = client or OllamaClient(self.config)
        self.decoder = decoder or decode_file
        self.progress = progress
        self.extractor = SectionExtractor(self.client)
        self.matcher = SectionMatcher(self.client)

    def _emit(self, state: PipelineState, message: str, **fields) -> None:
        logger.debug("[%s] %s", state.value, message)
        if self.progress:
            self.progress(ProgressEvent(state=state, message=message, **fields))

    def _load(self, source: DocumentSource) -> Document:
        if isinstance(source, Document):
            return source
        return self.decoder(Path(source))

    def read_pair(self, pair: DocumentPair) -> Tuple[List[Document], Document]:
        rfp_documents = [self._load(source) for source in pair.rfp]
        proposal_document = self._load(pair.proposal[0])
        return rfp_documents, proposal_document

    def process_pair(self, pair: DocumentPair, index: int, count: int) -> Tuple[List[TrainingRecord], PairReport]:
        report = PairReport(pair_id=pair.pair_id)
        position = {"pair_index": index, "pair_count": count}

        self._emit(
            PipelineState.READING_FILES,
            f"Processing pair {index} of {count}: Reading files...",
            **position,
        )
        try:
            rfp_documents, proposal_document = self.read_pair(pair)
        except DocumentDecodeError as exc:
            logger.error("Pair %s could not be read: %s", pair.pair_id, exc)
            report.error = str(exc)
            return [], report

        self._emit(
            PipelineState.PAGINATING,
            f"Processing pair {index}: Splitting documents into pages...",
            **position,
        )
        chunk_size = self.config.page_chunk_size
        rfp_pages = paginate(combine_rfp_documents(rfp_documents), chunk_size)
        proposal_pages = paginate(proposal_document.content, chunk_size)
        report.rfp_pages = len(rfp_pages)
        report.proposal_pages = len(proposal_pages)

        self._emit(
            PipelineState.EXTRACTING_RFP_SECTIONS,
            f"Processing pair {index}: Extracting requirements from RFP...",
            **position,
        )
        sections = self.extractor.extract(rfp_pages)
        report.sections_found = len(sections)
        if not sections:
            logger.warning("No RFP sections found for pair %s. Skipping.", pair.pair_id)
            report.skipped_reason = "No RFP sections found."
            return [], report

        records: List[TrainingRecord] = []
        for section_index, section in enumerate(sections, start=1):
            self._emit(
                PipelineState.MATCHING_PROPOSAL,
                f"Processing pair {index}: Matching proposal for RFP section "
                f"{section_index} of {len(sections)}...",
                section_index=section_index,
                section_count=len(sections),
                **position,
            )
            answer = self.matcher.find_match(section, proposal_pages)
            if answer:
                records.append(TrainingRecord(requirement=section, answer=answer))
        report.records_created = len(records)

        self._emit(
            PipelineState.DONE,
            f"Processing pair {index}: Done ({len(records)} of {len(sections)} sections matched).",
            **position,
        )
        return records, report

    def run(self, pairs: Sequence[DocumentPair]) -> PipelineResult:
        """Process every complete pair in order and collect the records.

        Raises NoCompletePairsError before any model call when no pair is
        complete, and lets LLMConnectionError propagate.
        """
        complete_pairs = [pair for pair in pairs if pair.is_complete]
        self._emit(PipelineState.IDLE, f"{len(complete_pairs)} of {len(pairs)} document pairs are complete.")
        if not complete_pairs:
            error = NoCompletePairsError()
            self._emit(PipelineState.FAILED, str(error))
            raise error

        records: List[TrainingRecord] = []
        reports: List[PairReport] = []
        count = len(complete_pairs)
        try:
            for index, pair in enumerate(complete_pairs, start=1):
                pair_records, report = self.process_pair(pair, index, count)
                records.extend(pair_records)
                reports.append(report)
        except LLMConnectionError as exc:
            self._emit(PipelineState.FAILED, str(exc))
            raise

        logger.info("Generated %s training records from %s document pairs", len(records), count)
        warning = None if records else NO_RECORDS_WARNING
        if warning:
            logger.warning(warning)
        self._emit(PipelineState.COMPLETE, warning or f"Generated {len(records)} training records.")
        return PipelineResult(
            state=PipelineState.COMPLETE,
            records=records,
            reports=reports,
            warning=warning,
        )
