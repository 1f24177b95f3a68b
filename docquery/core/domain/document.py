"""Document, chunk and search match models for the RAG pipeline."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class SourceDocument:
    """A fetched document and the text extracted from it.

    The temporary file at ``local_path`` is owned by the batch orchestrator,
    which deletes it once ingestion finishes.

    Attributes:
        url: The URL the document was fetched from.
        content: Raw bytes of the downloaded payload.
        local_path: Request-scoped temporary file holding ``content``.
        pages: Ordered text units extracted from the document, one per page.
    """

    url: str
    content: bytes
    local_path: Path | None = None
    pages: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Chunk:
    """An ordered, bounded slice of a document's extracted text.

    Attributes:
        text: The chunk text, copied verbatim from the source text.
        source: URL of the originating document.
        sequence: Zero-based position of the chunk in the document.
        start: Offset of the first character in the concatenated text.
    """

    text: str
    source: str
    sequence: int
    start: int = 0

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    def to_payload(self, namespace: str) -> dict[str, Any]:
        """Payload stored next to the chunk's vector in the index."""
        return {
            "text": self.text,
            "source": self.source,
            "sequence": self.sequence,
            "namespace": namespace,
        }


@dataclass
class SearchMatch:
    """A similarity search hit.

    Attributes:
        text: Stored chunk text.
        score: Similarity score, higher is more relevant.
        metadata: Remaining payload fields (source, sequence, ...).
    """

    text: str
    score: float
    metadata: dict[str, Any] = field(default_factory=dict)
