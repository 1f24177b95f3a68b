"""Port for the generative model used in rewriting and answering."""

from abc import ABC, abstractmethod


class LLMPort(ABC):
    """A text-in, text-out model; ``model_name`` is reported in error context."""

    model_name: str

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
    ) -> str:
        """Return the model's completion for ``prompt``.

        Raises:
            SynthesisError: If the provider call fails.
        """
        ...
