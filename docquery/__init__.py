"""Retrieval-augmented question answering over a single document."""

__version__ = "1.0.0"
