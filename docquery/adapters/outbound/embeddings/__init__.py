"""Embedding adapters."""

from .gemini_embedding import GeminiEmbeddingFunction

__all__ = ["GeminiEmbeddingFunction"]
