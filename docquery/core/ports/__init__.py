"""Ports (interfaces) the core services depend on."""

from .document_port import DocumentFetcherPort, DocumentParserPort
from .embedding_port import EmbeddingPort
from .llm_port import LLMPort
from .vector_store_port import VectorStorePort

__all__ = [
    "DocumentFetcherPort",
    "DocumentParserPort",
    "EmbeddingPort",
    "LLMPort",
    "VectorStorePort",
]
