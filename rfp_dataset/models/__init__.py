"""Typed models shared across the application."""

from .dataset import ChatMessage, TrainingExample, TrainingRecord
from .document import Document, DocumentPair, DocumentSource
from .pipeline import PairReport, PipelineResult, PipelineState, ProgressEvent

__all__ = [
    "ChatMessage",
    "Document",
    "DocumentPair",
    "DocumentSource",
    "PairReport",
    "PipelineResult",
    "PipelineState",
    "ProgressEvent",
    "TrainingExample",
    "TrainingRecord",
]
