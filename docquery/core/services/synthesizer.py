"""Grounded answer generation."""

import logging
import re

from ..domain import SynthesizedAnswer
from ..domain.exceptions import SynthesisError
from ..domain.utils import normalize_text
from ..ports.llm_port import LLMPort
from .concurrency import run_blocking
from .prompts import NOT_FOUND_ANSWER, build_answer_prompt

logger = logging.getLogger(__name__)

NO_ANSWER = "No answer generated"

_NOT_FOUND_PATTERN = re.compile(r"not mentioned in the document\.*", re.IGNORECASE)


def is_grounded(answer: str) -> bool:
    """False only for the "not mentioned" sentinel, ignoring case and trailing dots."""
    return _NOT_FOUND_PATTERN.fullmatch(answer.strip()) is None


class AnswerSynthesizer:
    """Asks the generative model for an answer drawn only from the context."""

    def __init__(
        self,
        llm: LLMPort,
        temperature: float = 0.0,
        call_timeout: float | None = None,
    ) -> None:
        self.llm = llm
        self.temperature = temperature
        self.call_timeout = call_timeout

    async def synthesize(self, context: str, query: str) -> SynthesizedAnswer:
        """Generate an answer for ``query`` from ``context``.

        An empty context cannot ground anything, so the sentinel is returned
        without calling the model.

        Raises:
            SynthesisError: If the model call fails or times out.
        """
        if not context.strip():
            return SynthesizedAnswer(text=NOT_FOUND_ANSWER, grounded=False)

        prompt, system_prompt = build_answer_prompt(context, query)
        try:
            raw = await run_blocking(
                self._generate, prompt, system_prompt, timeout=self.call_timeout
            )
        except SynthesisError as e:
            e.extra_context.setdefault("question", query)
            raise
        except Exception as e:
            raise SynthesisError(
                "Answer generation failed",
                cause=e,
                context={
                    "stage": "synthesize",
                    "question": query,
                    "model": getattr(self.llm, "model_name", None),
                },
            ) from e

        answer = normalize_text(raw).strip() or NO_ANSWER
        return SynthesizedAnswer(text=answer, grounded=is_grounded(answer))

    def _generate(self, prompt: str, system_prompt: str) -> str:
        return self.llm.generate(prompt, system_prompt=system_prompt, temperature=self.temperature)
