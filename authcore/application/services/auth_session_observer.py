"""Auth session observer.

Binds out-of-band session changes (token refresh, external sign-out,
session expiry) to the state store, without any user intent:

    user None  -> set_authenticated(False)  (barrier: pending writes of
                  in-flight operations are discarded)
    user       -> set_user(user) when it differs from the stored user

Both are whole-record transitions, so a notification racing with an
in-flight use case never leaves a half-applied state.
"""

from authcore.application.state import AuthStateStore
from authcore.domain.entities import AuthUser
from authcore.domain.protocols import AuthRepository, LoggerProtocol, Unsubscribe


class AuthSessionObserver:
    """Keeps the store in sync with provider session notifications.

    Example:
        >>> observer = AuthSessionObserver(repository, store, logger)
        >>> observer.start()
        >>> ...
        >>> observer.stop()
    """

    def __init__(
        self,
        repository: AuthRepository,
        store: AuthStateStore,
        logger: LoggerProtocol,
    ) -> None:
        self._repository = repository
        self._store = store
        self._logger = logger.bind(component="auth_session_observer")
        self._unsubscribe: Unsubscribe | None = None

    @property
    def is_running(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> None:
        """Subscribe (idempotent)."""
        if self._unsubscribe is None:
            self._unsubscribe = self._repository.observe_auth_state(self._on_change)

    def stop(self) -> None:
        """Unsubscribe; no notification is applied afterwards."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_change(self, user: AuthUser | None) -> None:
        state = self._store.state
        if user is None:
            if state.is_authenticated or state.user is not None:
                self._logger.info("auth_session_ended_externally")
                self._store.set_authenticated(False)
            return
        if state.user != user or not state.is_authenticated:
            self._logger.debug("auth_session_user_updated", user_id=user.id)
            self._store.set_user(user)
