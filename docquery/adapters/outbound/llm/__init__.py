"""LLM adapters."""

from .gemini_adapter import GeminiAdapter

__all__ = ["GeminiAdapter"]
