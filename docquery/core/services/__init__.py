"""Core services implementing the question-answering pipeline."""

from .chunker import TextChunker
from .context import CONTEXT_SEPARATOR, assemble_context
from .indexer import EmbeddingIndexer
from .orchestrator import BatchOrchestrator, validate_batch_request
from .query_planner import QueryPlanner
from .retriever import Retriever
from .synthesizer import NO_ANSWER, AnswerSynthesizer, is_grounded

__all__ = [
    "AnswerSynthesizer",
    "BatchOrchestrator",
    "CONTEXT_SEPARATOR",
    "EmbeddingIndexer",
    "NO_ANSWER",
    "QueryPlanner",
    "Retriever",
    "TextChunker",
    "assemble_context",
    "is_grounded",
    "validate_batch_request",
]
