"""Answer and batch metric models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SynthesizedAnswer:
    """Output of a single generation call.

    Attributes:
        text: Trimmed model output, or a fixed placeholder.
        grounded: False when the model reported the answer is not in the document.
    """

    text: str
    grounded: bool


@dataclass
class AnswerRecord:
    """The outcome of answering one question.

    Attributes:
        question: The question as supplied by the caller.
        answer: The answer text returned to the caller.
        elapsed_seconds: Wall-clock time from query resolution to synthesis.
        grounded: Whether the answer was drawn from the document.
        error: Failure description when the question could not be answered.
    """

    question: str
    answer: str
    elapsed_seconds: float
    grounded: bool
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class BatchMetrics:
    """Aggregate latency and grounding statistics for a batch."""

    total_questions: int
    total_seconds: float
    average_seconds: float
    grounded_count: int
    accuracy: float
    failed_count: int = 0

    @classmethod
    def from_records(cls, records: list[AnswerRecord]) -> "BatchMetrics":
        total = len(records)
        total_seconds = sum(r.elapsed_seconds for r in records)
        grounded = sum(1 for r in records if r.grounded)
        return cls(
            total_questions=total,
            total_seconds=total_seconds,
            average_seconds=total_seconds / total if total else 0.0,
            grounded_count=grounded,
            accuracy=(grounded / total * 100) if total else 0.0,
            failed_count=sum(1 for r in records if r.failed),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_questions": self.total_questions,
            "total_ms": round(self.total_seconds * 1000, 2),
            "average_ms": round(self.average_seconds * 1000, 2),
            "grounded_count": self.grounded_count,
            "accuracy_pct": round(self.accuracy, 2),
            "failed_count": self.failed_count,
        }


@dataclass
class BatchResult:
    """Everything produced by one orchestrator run.

    Only ``answers`` is returned to HTTP callers; records and metrics are kept
    for logging and the CLI.
    """

    records: list[AnswerRecord]
    metrics: BatchMetrics
    namespace: str
    chunk_count: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def answers(self) -> list[str]:
        return [record.answer for record in self.records]
