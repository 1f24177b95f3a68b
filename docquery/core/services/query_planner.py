"""Turns a raw question into the query used for retrieval."""

import logging

from ..domain.utils import normalize_text
from ..ports.llm_port import LLMPort
from .concurrency import run_blocking
from .prompts import build_rewrite_prompt

logger = logging.getLogger(__name__)


class QueryPlanner:
    """Resolves questions in pass-through or rewrite mode.

    In rewrite mode the question is restated by a generative model as a
    self-contained query. Any rewrite failure falls back to the original
    question, so resolution never fails a request.
    """

    def __init__(
        self,
        llm: LLMPort | None = None,
        rewrite_enabled: bool = False,
        call_timeout: float | None = None,
    ) -> None:
        if rewrite_enabled and llm is None:
            raise ValueError("Query rewriting requires an LLM")
        self.llm = llm
        self.rewrite_enabled = rewrite_enabled
        self.call_timeout = call_timeout

    async def resolve(self, question: str) -> str:
        """Return the resolved query for ``question``; never empty."""
        original = normalize_text(question).strip() or question
        if not self.rewrite_enabled or self.llm is None:
            return original

        try:
            rewritten = await run_blocking(
                self.llm.generate, build_rewrite_prompt(original), timeout=self.call_timeout
            )
        except Exception as e:
            logger.warning("Query rewrite failed, using original question: %s", e)
            return original

        rewritten = normalize_text(rewritten).strip().strip('"').strip()
        if not rewritten:
            return original

        logger.debug("Rewrote %r -> %r", original, rewritten)
        return rewritten
