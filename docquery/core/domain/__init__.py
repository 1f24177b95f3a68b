"""Domain models for the document QA service.

- document: SourceDocument, Chunk and SearchMatch
- answer: SynthesizedAnswer, AnswerRecord, BatchMetrics and BatchResult
- request: BatchRequest, the validated shape of an incoming batch

    from docquery.core.domain import Chunk, SearchMatch
"""

from .answer import AnswerRecord, BatchMetrics, BatchResult, SynthesizedAnswer
from .document import Chunk, SearchMatch, SourceDocument
from .request import BatchRequest

__all__ = [
    # Document models
    "SourceDocument",
    "Chunk",
    "SearchMatch",
    # Request schema
    "BatchRequest",
    # Answer models
    "SynthesizedAnswer",
    "AnswerRecord",
    "BatchMetrics",
    "BatchResult",
]
