"""Google Gemini adapter for text generation using the google-genai SDK."""

import logging
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google import genai
    from google.genai import types

from ....core.domain.exceptions import MissingAPIKeyError, SynthesisError
from ....core.domain.utils import normalize_text
from ....core.ports.llm_port import LLMPort

logger = logging.getLogger(__name__)


def http_options_for(timeout: float | None) -> "types.HttpOptions | None":
    """SDK request options; google-genai takes the timeout in milliseconds."""
    if not timeout:
        return None
    from google.genai import types

    return types.HttpOptions(timeout=int(timeout * 1000))


class GeminiAdapter(LLMPort):
    """Generates text with a Gemini model."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        max_retries: int = 3,
        request_timeout: float | None = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Google AI API key.
            model: Model to use.
            max_retries: Attempts for rate-limited calls.
            request_timeout: Seconds allowed per HTTP request; None uses the SDK default.
        """
        self.api_key = api_key
        self.model_name = model
        self.max_retries = max_retries
        self.request_timeout = request_timeout
        self._client: "genai.Client | None" = None

    def _get_client(self) -> "genai.Client":
        """Lazy load the Gemini client."""
        if self._client is None:
            if not self.api_key:
                raise MissingAPIKeyError(
                    "Google API key not set. Get one at https://aistudio.google.com/ "
                    "and set GOOGLE_API_KEY in your .env file.",
                    context={"setting": "google_api_key"},
                )

            from google import genai

            self._client = genai.Client(
                api_key=self.api_key, http_options=http_options_for(self.request_timeout)
            )
            logger.info("Gemini client initialized for model: %s", self.model_name)

        return self._client

    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
    ) -> str:
        """Generate a response from the LLM.

        Rate-limit errors are retried with exponential backoff; every other
        failure is raised immediately.

        Returns:
            Generated text; empty when the model produced no candidates.

        Raises:
            SynthesisError: If the call fails or retries are exhausted.
        """
        from google.genai.types import GenerateContentConfig

        client = self._get_client()
        config = GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
            system_instruction=normalize_text(system_prompt) if system_prompt else None,
        )

        for attempt in range(self.max_retries):
            try:
                response = client.models.generate_content(
                    model=self.model_name,
                    contents=normalize_text(prompt),
                    config=config,
                )
            except Exception as e:
                error_msg = str(e).lower()
                retryable = "quota" in error_msg or "rate" in error_msg or "429" in error_msg
                if retryable and attempt < self.max_retries - 1:
                    wait_time = 2**attempt
                    logger.warning("Rate limit hit, retrying in %ds", wait_time)
                    time.sleep(wait_time)
                    continue
                raise SynthesisError(
                    f"Gemini generation failed: {type(e).__name__}",
                    cause=e,
                    context={"model": self.model_name, "attempts": attempt + 1},
                ) from e

            # Safety filters leave no candidates
            if not response.candidates:
                logger.warning("Gemini returned no candidates")
                return ""
            return normalize_text(response.text or "")

        raise SynthesisError(
            "Gemini generation failed after retries",
            context={"model": self.model_name, "attempts": self.max_retries},
        )
