"""Batch orchestration: ingest one document, answer many questions."""

import asyncio
import hashlib
import logging
import time
import uuid
from typing import Any, Literal

import pydantic

from ..domain import AnswerRecord, BatchMetrics, BatchRequest, BatchResult, Chunk, SourceDocument
from ..domain.exceptions import DocQAError, ExtractionError, FetchError, ValidationError
from ..ports.document_port import DocumentFetcherPort, DocumentParserPort
from ..ports.vector_store_port import VectorStorePort
from .chunker import TextChunker
from .concurrency import run_blocking
from .context import assemble_context
from .indexer import EmbeddingIndexer
from .query_planner import QueryPlanner
from .retriever import Retriever
from .synthesizer import AnswerSynthesizer

logger = logging.getLogger(__name__)

FailurePolicy = Literal["fail_fast", "isolate"]

FAILED_ANSWER = "Unable to answer this question."


def validate_batch_request(documents: Any, questions: Any) -> BatchRequest:
    """Validate raw request values against :class:`BatchRequest`.

    Raises:
        ValidationError: With one diagnostic per offending field.
    """
    try:
        return BatchRequest.model_validate({"documents": documents, "questions": questions})
    except pydantic.ValidationError as e:
        raise ValidationError(
            "Invalid request format",
            errors=validation_diagnostics(e.errors()),
            cause=e,
        ) from e


def validation_diagnostics(errors: Any) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into ``{"field", "message"}`` pairs."""
    diagnostics = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        diagnostics.append(
            {"field": ".".join(location) or "body", "message": str(error.get("msg", ""))}
        )
    return diagnostics


def make_namespace(url: str) -> str:
    """Request-unique namespace, prefixed by a short hash of the document URL."""
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:12]
    return f"{digest}-{uuid.uuid4().hex}"


class BatchOrchestrator:
    """Runs the full question-answering pipeline for one request.

    Ingestion (fetch, extract, chunk, index) happens once and completes
    before any question is processed. Questions then run concurrently; the
    answers keep the input order. The temporary document file is removed on
    every exit path, and the request namespace is dropped afterwards when
    ``cleanup_namespace`` is set.

    With ``failure_policy="fail_fast"`` the first failing question aborts the
    batch. With ``"isolate"`` a failing question gets a fixed answer and its
    error is recorded in :attr:`BatchResult.errors`.
    """

    def __init__(
        self,
        fetcher: DocumentFetcherPort,
        parser: DocumentParserPort,
        chunker: TextChunker,
        indexer: EmbeddingIndexer,
        planner: QueryPlanner,
        retriever: Retriever,
        synthesizer: AnswerSynthesizer,
        vector_store: VectorStorePort,
        max_context_chars: int = 12000,
        failure_policy: FailurePolicy = "fail_fast",
        cleanup_namespace: bool = True,
        call_timeout: float | None = None,
    ) -> None:
        if failure_policy not in ("fail_fast", "isolate"):
            raise ValueError(f"Unknown failure policy: {failure_policy}")
        self.fetcher = fetcher
        self.parser = parser
        self.chunker = chunker
        self.indexer = indexer
        self.planner = planner
        self.retriever = retriever
        self.synthesizer = synthesizer
        self.vector_store = vector_store
        self.max_context_chars = max_context_chars
        self.failure_policy = failure_policy
        self.cleanup_namespace = cleanup_namespace
        self.call_timeout = call_timeout

    async def run(self, documents: Any, questions: Any) -> BatchResult:
        """Validate raw inputs, then answer every question about the document.

        Raises:
            ValidationError: Before any work if the inputs are malformed.
            FetchError, ExtractionError, IndexingError: On ingestion failure.
            DocQAError: On a per-question failure under ``fail_fast``.
        """
        request = validate_batch_request(documents, questions)
        return await self.run_request(request)

    async def run_request(self, request: BatchRequest) -> BatchResult:
        """Answer an already validated request."""
        url = request.documents
        namespace = make_namespace(url)
        logger.info(
            "Processing %d questions for %s (namespace %s)", len(request.questions), url, namespace
        )

        indexing_started = False
        try:
            chunks = await self._ingest(url)
            indexing_started = True
            chunk_count = await self.indexer.index(chunks, namespace)
            records, errors = await self._answer_all(request.questions, namespace)
        finally:
            if indexing_started and self.cleanup_namespace:
                await self._drop_namespace(namespace)

        metrics = BatchMetrics.from_records(records)
        self._log_metrics(metrics)
        return BatchResult(
            records=records,
            metrics=metrics,
            namespace=namespace,
            chunk_count=chunk_count,
            errors=errors,
        )

    async def _ingest(self, url: str) -> list[Chunk]:
        """Fetch, extract and chunk; the temporary file is always released."""
        # No call timeout: the fetcher applies its own and owns the temp file until it returns
        try:
            document = await run_blocking(self.fetcher.fetch, url)
        except DocQAError:
            raise
        except Exception as e:
            raise FetchError("Failed to fetch document", url=url, cause=e) from e

        try:
            if document.local_path is None:
                raise ExtractionError(
                    "Fetched document has no local file to parse",
                    context={"stage": "extract", "url": url},
                )
            try:
                document.pages = await run_blocking(
                    self.parser.extract, document.local_path, timeout=self.call_timeout
                )
            except DocQAError:
                raise
            except Exception as e:
                raise ExtractionError(
                    "Failed to extract text from document",
                    cause=e,
                    context={"stage": "extract", "url": url},
                ) from e
            return self.chunker.split_document(document.pages, source=url)
        finally:
            self._release(document)

    @staticmethod
    def _release(document: SourceDocument) -> None:
        if document.local_path is None:
            return
        document.local_path.unlink(missing_ok=True)
        logger.debug("Temporary file %s deleted", document.local_path)

    async def _answer_all(
        self, questions: list[str], namespace: str
    ) -> tuple[list[AnswerRecord], list[str]]:
        tasks = [asyncio.create_task(self.answer(q, namespace)) for q in questions]

        if self.failure_policy == "isolate":
            results = await asyncio.gather(*tasks, return_exceptions=True)
            records: list[AnswerRecord] = []
            errors: list[str] = []
            for question, result in zip(questions, results, strict=True):
                if isinstance(result, AnswerRecord):
                    records.append(result)
                    continue
                if not isinstance(result, Exception):
                    raise result
                logger.warning("Question failed: %r: %s", question, result)
                errors.append(f"{question}: {result}")
                records.append(
                    AnswerRecord(
                        question=question,
                        answer=FAILED_ANSWER,
                        elapsed_seconds=0.0,
                        grounded=False,
                        error=str(result),
                    )
                )
            return records, errors

        try:
            return list(await asyncio.gather(*tasks)), []
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def answer(self, question: str, namespace: str) -> AnswerRecord:
        """Resolve, retrieve, assemble and synthesize for a single question."""
        started = time.perf_counter()
        query = await self.planner.resolve(question)
        matches = await self.retriever.retrieve(query, namespace)
        context = assemble_context(matches, self.max_context_chars)
        answer = await self.synthesizer.synthesize(context, query)
        elapsed = time.perf_counter() - started

        logger.debug(
            "Answered %r in %.0fms (%d matches, %d context chars)",
            question,
            elapsed * 1000,
            len(matches),
            len(context),
        )
        return AnswerRecord(
            question=question,
            answer=answer.text,
            elapsed_seconds=elapsed,
            grounded=answer.grounded,
        )

    async def _drop_namespace(self, namespace: str) -> None:
        try:
            await run_blocking(
                self.vector_store.delete_namespace, namespace, timeout=self.call_timeout
            )
        except Exception as e:
            logger.warning("Failed to delete namespace %s: %s", namespace, e)

    @staticmethod
    def _log_metrics(metrics: BatchMetrics) -> None:
        logger.info(
            "Batch complete: %d questions, total %.0fms, average %.2fms, accuracy %.2f%%",
            metrics.total_questions,
            metrics.total_seconds * 1000,
            metrics.average_seconds * 1000,
            metrics.accuracy,
            extra={"metrics": metrics.to_dict()},
        )
