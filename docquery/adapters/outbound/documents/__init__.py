"""Document fetching and parsing adapters."""

from .http_fetcher import HttpDocumentFetcher
from .pdf_parser import PdfDocumentParser

__all__ = ["HttpDocumentFetcher", "PdfDocumentParser"]
