"""Composition root wiring adapters into the batch orchestrator."""

from __future__ import annotations

import logging
import math
from functools import lru_cache

from ..adapters.outbound.documents import HttpDocumentFetcher, PdfDocumentParser
from ..adapters.outbound.embeddings import GeminiEmbeddingFunction
from ..adapters.outbound.llm import GeminiAdapter
from ..adapters.outbound.vector_store import InMemoryVectorStore, QdrantAdapter
from ..config.settings import Settings, get_settings
from ..core.ports import VectorStorePort
from ..core.services import (
    AnswerSynthesizer,
    BatchOrchestrator,
    EmbeddingIndexer,
    QueryPlanner,
    Retriever,
    TextChunker,
)

logger = logging.getLogger(__name__)


def build_vector_store(settings: Settings) -> VectorStorePort:
    if settings.vector_store_backend == "memory":
        logger.info("Using in-memory vector store")
        return InMemoryVectorStore()
    request_timeout = settings.request_timeout_seconds
    return QdrantAdapter(
        url=settings.qdrant_url,
        api_key=settings.qdrant_api_key,
        collection_name=settings.qdrant_collection,
        dimension=settings.embedding_dimension,
        timeout=math.ceil(request_timeout) if request_timeout else None,
    )


def build_orchestrator(
    settings: Settings,
    vector_store: VectorStorePort | None = None,
) -> BatchOrchestrator:
    """Construct a fully wired orchestrator from settings.

    Args:
        settings: Application settings.
        vector_store: Optional store to use instead of the configured backend.

    Returns:
        BatchOrchestrator ready to run requests.
    """
    timeout = settings.request_timeout_seconds or None
    store = vector_store or build_vector_store(settings)
    embedder = GeminiEmbeddingFunction(
        api_key=settings.google_api_key,
        model_name=settings.embedding_model,
        dimension=settings.embedding_dimension,
        request_timeout=timeout,
    )
    answer_llm = GeminiAdapter(
        api_key=settings.google_api_key, model=settings.llm_model, request_timeout=timeout
    )
    rewrite_llm = (
        GeminiAdapter(
            api_key=settings.google_api_key,
            model=settings.rewrite_model,
            request_timeout=timeout,
        )
        if settings.query_rewrite_enabled
        else None
    )

    return BatchOrchestrator(
        fetcher=HttpDocumentFetcher(temp_dir=settings.temp_dir, timeout=timeout or 60),
        parser=PdfDocumentParser(),
        chunker=TextChunker(settings.chunk_size, settings.chunk_overlap),
        indexer=EmbeddingIndexer(
            embedder,
            store,
            batch_size=settings.embedding_batch_size,
            max_concurrency=settings.embedding_max_concurrency,
            settle_delay=settings.index_settle_delay,
            settle_timeout=settings.index_settle_timeout,
            call_timeout=timeout,
        ),
        planner=QueryPlanner(
            rewrite_llm, rewrite_enabled=settings.query_rewrite_enabled, call_timeout=timeout
        ),
        retriever=Retriever(embedder, store, top_k=settings.top_k_results, call_timeout=timeout),
        synthesizer=AnswerSynthesizer(answer_llm, call_timeout=timeout),
        vector_store=store,
        max_context_chars=settings.max_context_chars,
        failure_policy=settings.batch_failure_policy,
        cleanup_namespace=settings.cleanup_namespace,
        call_timeout=timeout,
    )


@lru_cache
def get_orchestrator() -> BatchOrchestrator:
    logger.info("Initializing BatchOrchestrator (composition root)...")
    settings = get_settings()
    settings.ensure_directories()
    return build_orchestrator(settings)
