"""Composition root."""

from .container import build_orchestrator, build_vector_store, get_orchestrator

__all__ = ["build_orchestrator", "build_vector_store", "get_orchestrator"]
