"""Document fetching and parsing port interfaces."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..domain import SourceDocument


class DocumentFetcherPort(ABC):
    """Abstract interface for downloading documents."""

    @abstractmethod
    def fetch(self, url: str) -> SourceDocument:
        """Download ``url`` and persist it to a request-unique temporary file.

        Raises:
            FetchError: On non-success status, network failure or empty body.
        """
        ...


class DocumentParserPort(ABC):
    """Abstract interface for extracting text from a downloaded document."""

    @abstractmethod
    def extract(self, path: Path) -> list[str]:
        """Return ordered text units, one per page.

        Raises:
            ExtractionError: If the file is unreadable or has no text.
        """
        ...
