"""
Pytest configuration and shared fixtures.

Fixtures wire the fakes from ``tests.fakes`` into real core services so the
pipeline runs end to end without network access.
"""

import pytest

from docquery.adapters.outbound.vector_store import InMemoryVectorStore
from docquery.core.services import (
    AnswerSynthesizer,
    BatchOrchestrator,
    EmbeddingIndexer,
    QueryPlanner,
    Retriever,
    TextChunker,
)
from tests.fakes import POLICY_PAGES, FakeFetcher, HashingEmbedder, ScriptedLLM, StaticParser


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: HTTP-level tests with faked services")


@pytest.fixture
def embedder():
    return HashingEmbedder()


@pytest.fixture
def vector_store():
    return InMemoryVectorStore()


@pytest.fixture
def llm():
    return ScriptedLLM()


@pytest.fixture
def fetcher(tmp_path):
    return FakeFetcher(tmp_path)


@pytest.fixture
def make_orchestrator(fetcher, embedder, vector_store, llm):
    """Factory building an orchestrator around the fakes; kwargs override defaults."""

    def _make(**overrides) -> BatchOrchestrator:
        options = {
            "pages": POLICY_PAGES,
            "llm": llm,
            "failure_policy": "fail_fast",
            "cleanup_namespace": True,
            "max_context_chars": 12000,
            "chunk_size": 200,
            "chunk_overlap": 40,
            "call_timeout": None,
        }
        options.update(overrides)
        return BatchOrchestrator(
            fetcher=fetcher,
            parser=StaticParser(options["pages"]),
            chunker=TextChunker(options["chunk_size"], options["chunk_overlap"]),
            indexer=EmbeddingIndexer(embedder, vector_store, batch_size=2, settle_timeout=1.0),
            planner=QueryPlanner(),
            retriever=Retriever(embedder, vector_store, top_k=3),
            synthesizer=AnswerSynthesizer(options["llm"], call_timeout=options["call_timeout"]),
            vector_store=vector_store,
            max_context_chars=options["max_context_chars"],
            failure_policy=options["failure_policy"],
            cleanup_namespace=options["cleanup_namespace"],
        )

    return _make
