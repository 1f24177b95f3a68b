"""HTTP document fetcher writing request-scoped temporary files."""

import logging
import tempfile
import uuid
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import urlparse

import requests

from ....core.domain import SourceDocument
from ....core.domain.exceptions import FetchError
from ....core.ports.document_port import DocumentFetcherPort

logger = logging.getLogger(__name__)

# Constants
DOWNLOAD_TIMEOUT = 60
DEFAULT_SUFFIX = ".pdf"
TEMP_PREFIX = "docquery-"


class HttpDocumentFetcher(DocumentFetcherPort):
    """Downloads documents with a pooled ``requests`` session.

    Each download is written to a uniquely named file so concurrent requests
    never share a path. The caller owns the file and must delete it.
    """

    def __init__(
        self,
        temp_dir: Path | str | None = None,
        timeout: float = DOWNLOAD_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            temp_dir: Directory for downloaded files (system temp dir if None).
            timeout: Seconds to wait for the document host.
            session: Optional pre-configured session (tests inject one).
        """
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "docquery/1.0"})

    def __enter__(self) -> "HttpDocumentFetcher":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close session."""
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def fetch(self, url: str) -> SourceDocument:
        """Download ``url`` into a fresh temporary file.

        Raises:
            FetchError: On network failure, non-success status or empty body.
        """
        logger.info("Downloading document from %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch document: {exc}", url=url, cause=exc) from exc

        if not response.ok:
            raise FetchError(
                f"Failed to fetch document: HTTP {response.status_code}",
                url=url,
                status=response.status_code,
            )

        content = response.content
        if not content:
            raise FetchError("Failed to fetch document: empty response body", url=url)

        local_path = self.temp_dir / f"{TEMP_PREFIX}{uuid.uuid4().hex}{self._suffix_for(url)}"
        try:
            self.temp_dir.mkdir(parents=True, exist_ok=True)
            local_path.write_bytes(content)
        except OSError as exc:
            local_path.unlink(missing_ok=True)
            raise FetchError(
                "Failed to store downloaded document", url=url, cause=exc
            ) from exc

        logger.info("Saved %d bytes to %s", len(content), local_path)
        return SourceDocument(url=url, content=content, local_path=local_path)

    @staticmethod
    def _suffix_for(url: str) -> str:
        suffix = PurePosixPath(urlparse(url).path).suffix.lower()
        return suffix if suffix and len(suffix) <= 6 else DEFAULT_SUFFIX
