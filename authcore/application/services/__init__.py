"""Application services."""

from authcore.application.services.auth_session_observer import AuthSessionObserver

__all__ = ["AuthSessionObserver"]
