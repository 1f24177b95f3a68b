"""PDF text extraction with pypdf."""

import logging
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from ....core.domain.exceptions import ExtractionError
from ....core.domain.utils import normalize_text
from ....core.ports.document_port import DocumentParserPort

logger = logging.getLogger(__name__)


class PdfDocumentParser(DocumentParserPort):
    """Extracts one text unit per PDF page."""

    def extract(self, path: Path) -> list[str]:
        """Read page texts from the PDF at ``path``.

        Pages without a text layer yield empty strings so page positions are
        preserved.

        Raises:
            ExtractionError: If the file cannot be parsed, is encrypted, or
                contains no text at all.
        """
        context = {"stage": "extract", "path": str(path)}
        try:
            reader = PdfReader(path)
            if reader.is_encrypted and not reader.decrypt(""):
                raise ExtractionError("Document is encrypted", context=context)
            pages = [normalize_text(page.extract_text() or "") for page in reader.pages]
        except ExtractionError:
            raise
        except (PyPdfError, OSError, ValueError) as exc:
            raise ExtractionError(
                f"Unreadable or unsupported document: {exc}", cause=exc, context=context
            ) from exc

        if not any(page.strip() for page in pages):
            raise ExtractionError("Document contains no extractable text", context=context)

        logger.info("Extracted %d pages from %s", len(pages), path.name)
        return pages
