"""Infrastructure dependency factories.

Application-scoped singletons:
- Logging (structlog console adapter)
- Auth state store (one authoritative record per process)
- Orchestration gate (shared by all gated handlers)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from authcore.core.config import settings

if TYPE_CHECKING:
    from authcore.application.commands.handlers.auth_flow import AuthOperationGate
    from authcore.application.state import AuthStateStore
    from authcore.domain.protocols import LoggerProtocol


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from authcore.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(use_json=not settings.is_development, level=settings.log_level)


@lru_cache()
def get_auth_state_store() -> "AuthStateStore":
    """Return the process-wide auth state store.

    Usage:
        store = get_auth_state_store()
        unsubscribe = store.select(select_navigation_snapshot, route)
    """
    from authcore.application.state import AuthStateStore

    return AuthStateStore(logger=get_logger())


@lru_cache()
def get_auth_operation_gate() -> "AuthOperationGate":
    """Return the orchestration gate shared by auth handlers."""
    from authcore.application.commands.handlers.auth_flow import AuthOperationGate

    return AuthOperationGate()
