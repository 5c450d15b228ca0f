"""Authoritative client-side authentication state."""

from authcore.application.state.auth_state_store import (
    INITIAL_AUTH_STATE,
    AuthState,
    AuthStateStore,
    NavigationSnapshot,
    select_error,
    select_is_authenticated,
    select_is_loading,
    select_navigation_snapshot,
    select_user,
)

__all__ = [
    "AuthState",
    "AuthStateStore",
    "INITIAL_AUTH_STATE",
    "NavigationSnapshot",
    "select_error",
    "select_is_authenticated",
    "select_is_loading",
    "select_navigation_snapshot",
    "select_user",
]
