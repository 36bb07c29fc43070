"""FastAPI dependencies for orchestrator access."""


def get_orchestrator():
    """Dependency to get orchestrator instance (singleton pattern)."""
    from orchestrator.core import LifeGuideOrchestrator

    if not hasattr(get_orchestrator, "_instance"):
        get_orchestrator._instance = LifeGuideOrchestrator.from_config()
    return get_orchestrator._instance
