"""FastAPI dependency injection."""

from ....composition.container import get_orchestrator
from ....core.services import BatchOrchestrator


def orchestrator_dependency() -> BatchOrchestrator:
    """Provide the shared orchestrator; tests override this dependency."""
    return get_orchestrator()
