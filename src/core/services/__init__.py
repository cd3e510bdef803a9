"""Core services: debouncing, cancellation and query orchestration."""

from core.services.query_orchestrator import (
    PageResetCoordinator,
    QueryOrchestrator,
    validate_page,
)
from core.services.state_store import StateStore

__all__ = [
    "PageResetCoordinator",
    "QueryOrchestrator",
    "StateStore",
    "validate_page",
]
