"""Splits extracted document text into overlapping chunks."""

import logging

from ..domain import Chunk

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"

# Tried in order when choosing where a window ends
BOUNDARY_SEPARATORS = ("\n\n", "\n", ". ", "? ", "! ", "; ", " ")


class TextChunker:
    """Fixed-size overlapping window splitter that prefers natural boundaries.

    Windows are at most ``chunk_size`` characters. A window ends at the last
    paragraph break inside it, then the last line break, sentence end or
    whitespace, and only falls back to a hard cut when none of those lets the
    next window start further along. Consecutive windows share exactly
    ``chunk_overlap`` characters, and windows are never stripped, so the
    chunks together cover every character of the input.
    """

    def __init__(self, chunk_size: int = 800, chunk_overlap: int = 200) -> None:
        """Initialize the chunker.

        Args:
            chunk_size: Maximum characters per chunk (must be positive).
            chunk_overlap: Characters shared by neighbouring chunks
                (must be less than chunk_size).

        Raises:
            ValueError: If the parameters cannot make forward progress.
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0:
            raise ValueError("chunk_overlap must be non-negative")
        if chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be less than chunk_size to avoid infinite loop")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def split_text(self, text: str) -> list[tuple[int, str]]:
        """Split text into ``(start_offset, window_text)`` pairs."""
        if not text:
            return []

        windows: list[tuple[int, str]] = []
        length = len(text)
        start = 0
        # A boundary must leave the window longer than the overlap, and we
        # avoid boundaries in the first half to keep chunks reasonably full.
        min_window = max(self.chunk_overlap + 1, self.chunk_size // 2)

        while True:
            end = min(start + self.chunk_size, length)
            if end < length:
                end = self._find_boundary(text, start, end, start + min_window)
            windows.append((start, text[start:end]))
            if end >= length:
                break
            start = end - self.chunk_overlap

        return windows

    def split_document(self, pages: list[str], source: str) -> list[Chunk]:
        """Join pages and split them into ordered chunks.

        Args:
            pages: Page texts in document order.
            source: URL of the document the pages came from.

        Returns:
            Chunks in document order with sequence numbers starting at 0.
        """
        text = PAGE_SEPARATOR.join(pages)
        chunks = [
            Chunk(text=window, source=source, sequence=i, start=offset)
            for i, (offset, window) in enumerate(self.split_text(text))
        ]
        logger.info(
            "Split %d pages (%d chars) into %d chunks", len(pages), len(text), len(chunks)
        )
        return chunks

    @staticmethod
    def _find_boundary(text: str, start: int, end: int, min_end: int) -> int:
        """Return the best cut position in ``(min_end, end]``, or ``end``."""
        for separator in BOUNDARY_SEPARATORS:
            position = text.rfind(separator, start, end)
            if position == -1:
                continue
            cut = position + len(separator)
            if cut >= min_end:
                return cut
        return end
