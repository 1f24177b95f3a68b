"""Test doubles for the external services behind the core ports."""

import re
import zlib
from pathlib import Path

from docquery.core.domain import SourceDocument
from docquery.core.domain.exceptions import FetchError
from docquery.core.ports import DocumentFetcherPort, DocumentParserPort, EmbeddingPort, LLMPort

FAKE_DIMENSION = 64


class HashingEmbedder(EmbeddingPort):
    """Bag-of-words vectors: identical texts always get identical vectors."""

    dimension = FAKE_DIMENSION

    def __init__(self) -> None:
        self.query_calls: list[str] = []
        self.document_calls: list[list[str]] = []

    def _vector(self, text: str) -> list[float]:
        vector = [0.0] * FAKE_DIMENSION
        for word in re.findall(r"\w+", text.lower()):
            vector[zlib.crc32(word.encode()) % FAKE_DIMENSION] += 1.0
        return vector

    def embed_query(self, text: str) -> list[float]:
        self.query_calls.append(text)
        return self._vector(text)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.append(list(texts))
        return [self._vector(text) for text in texts]


class ScriptedLLM(LLMPort):
    """Returns canned answers, optionally keyed by a substring of the prompt."""

    model_name = "fake-model"

    def __init__(self, default: str = "The grace period is thirty days.", by_question=None):
        self.default = default
        self.by_question = by_question or {}
        self.prompts: list[tuple[str, str | None]] = []

    def generate(self, prompt, system_prompt=None, temperature=0.0, max_tokens=1024):
        self.prompts.append((prompt, system_prompt))
        for needle, reply in self.by_question.items():
            if f"Question: {needle}" in prompt:
                if isinstance(reply, Exception):
                    raise reply
                return reply
        return self.default


class FakeFetcher(DocumentFetcherPort):
    """Writes a small file per fetch into ``directory``; fails for unknown URLs."""

    def __init__(self, directory: Path, known_urls=("https://docs.example.com/policy.pdf",)):
        self.directory = directory
        self.known_urls = set(known_urls)
        self.fetched: list[Path] = []

    def fetch(self, url: str) -> SourceDocument:
        if url not in self.known_urls:
            raise FetchError("Failed to fetch document: HTTP 404", url=url, status=404)
        path = self.directory / f"docquery-{len(self.fetched)}.pdf"
        path.write_bytes(b"%PDF-1.4 fake")
        self.fetched.append(path)
        return SourceDocument(url=url, content=b"%PDF-1.4 fake", local_path=path)


class StaticParser(DocumentParserPort):
    def __init__(self, pages: list[str]):
        self.pages = pages

    def extract(self, path: Path) -> list[str]:
        return list(self.pages)


POLICY_PAGES = [
    "Grace Period. A grace period of thirty days is provided for premium payment "
    "after the due date to renew or continue the policy without losing continuity benefits.",
    "Waiting Period. There is a waiting period of thirty-six months of continuous coverage "
    "for pre-existing diseases and their direct complications to be covered.",
    "Maternity. The policy covers maternity expenses including childbirth and lawful "
    "medical termination of pregnancy after twenty-four months of continuous coverage.",
]

POLICY_URL = "https://docs.example.com/policy.pdf"
