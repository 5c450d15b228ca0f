"""Auth state store.

Single authoritative, observable record of the client's authentication
state. Callers never write fields; they call named transitions, each of
which replaces the whole frozen AuthState and enforces its coupled
invariants:

    set_user(u)              user=u, is_authenticated=(u is not None), error=None
    set_authenticated(False) is_authenticated=False, user=None      (barrier)
    set_authenticated(True)  is_authenticated=True (never fabricates a user)
    set_loading(flag)        is_loading=flag, nothing else
    set_error(e)             error=e, is_loading=False
    clear_error()            error=None
    reset()                  initial state                          (barrier)

Sequence guard:
    Every applied transition increments a monotonic sequence. Barrier
    transitions record the sequence they produced. A use case takes a token
    (issue_token()) on entry and passes it to its transitions; a transition
    whose token is older than the last barrier is a stale write from a
    superseded operation and is discarded (returns False).

Observation:
    subscribe() delivers every new state; select() delivers a derived value
    only when it changes. Both return disposers. Listener failures are
    logged and never break a transition.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from itertools import count

from authcore.domain.entities import AuthUser
from authcore.domain.errors import AuthError
from authcore.domain.protocols import LoggerProtocol, Unsubscribe


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthState:
    """Immutable authentication state snapshot."""

    user: AuthUser | None = None
    is_authenticated: bool = False
    is_loading: bool = False
    error: AuthError | None = None


INITIAL_AUTH_STATE = AuthState()


@dataclass(frozen=True, slots=True, kw_only=True)
class NavigationSnapshot:
    """Routing input consumed by the navigation boundary."""

    is_authenticated: bool
    user_id: str | None


type StateListener = Callable[[AuthState], None]


# =============================================================================
# Selectors (pure, read-only)
# =============================================================================


def select_user(state: AuthState) -> AuthUser | None:
    return state.user


def select_is_authenticated(state: AuthState) -> bool:
    return state.is_authenticated


def select_is_loading(state: AuthState) -> bool:
    return state.is_loading


def select_error(state: AuthState) -> AuthError | None:
    return state.error


def select_navigation_snapshot(state: AuthState) -> NavigationSnapshot:
    return NavigationSnapshot(
        is_authenticated=state.is_authenticated,
        user_id=state.user.id if state.user is not None else None,
    )


# =============================================================================
# Store
# =============================================================================


class AuthStateStore:
    """Observable auth state container with a stale-write guard.

    Args:
        logger: Logger for stale discards and listener failures.

    Example:
        >>> store = AuthStateStore(logger=get_logger())
        >>> token = store.issue_token()
        >>> store.reset()
        >>> store.set_user(user, token=token)  # issued before reset
        False
    """

    def __init__(self, *, logger: LoggerProtocol) -> None:
        self._logger = logger.bind(component="auth_state_store")
        self._state = INITIAL_AUTH_STATE
        self._sequence = 0
        self._barrier = 0
        self._listeners: dict[int, StateListener] = {}
        self._listener_ids = count(1)

    @property
    def state(self) -> AuthState:
        """Current state (immutable snapshot)."""
        return self._state

    @property
    def sequence(self) -> int:
        """Sequence number of the last applied transition."""
        return self._sequence

    def issue_token(self) -> int:
        """Return a token for tagging the transitions of one operation."""
        return self._sequence

    def is_stale(self, token: int | None) -> bool:
        """True if a write tagged with token would be discarded."""
        return token is not None and token < self._barrier

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def set_user(self, user: AuthUser | None, *, token: int | None = None) -> bool:
        return self._apply(
            "set_user",
            replace(self._state, user=user, is_authenticated=user is not None, error=None),
            token,
        )

    def set_authenticated(self, value: bool, *, token: int | None = None) -> bool:
        if value:
            return self._apply(
                "set_authenticated", replace(self._state, is_authenticated=True), token
            )
        return self._apply(
            "set_authenticated",
            replace(self._state, is_authenticated=False, user=None),
            token,
            barrier=True,
        )

    def set_loading(self, value: bool, *, token: int | None = None) -> bool:
        return self._apply("set_loading", replace(self._state, is_loading=value), token)

    def set_error(self, error: AuthError, *, token: int | None = None) -> bool:
        return self._apply(
            "set_error", replace(self._state, error=error, is_loading=False), token
        )

    def clear_error(self, *, token: int | None = None) -> bool:
        return self._apply("clear_error", replace(self._state, error=None), token)

    def reset(self) -> None:
        """Restore the initial state. Never stale; always a barrier."""
        self._apply("reset", INITIAL_AUTH_STATE, None, barrier=True)

    # -------------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        """Register a listener called with every new state.

        Returns:
            Unsubscribe: Idempotent disposer.
        """
        listener_id = next(self._listener_ids)
        self._listeners[listener_id] = listener

        def unsubscribe() -> None:
            self._listeners.pop(listener_id, None)

        return unsubscribe

    def select[T](
        self,
        selector: Callable[[AuthState], T],
        listener: Callable[[T], None],
    ) -> Unsubscribe:
        """Register a listener for a derived value.

        The listener runs only when the selected value changes; unrelated
        transitions do not notify it.

        Args:
            selector: Pure function of AuthState.
            listener: Called with the new selected value.

        Returns:
            Unsubscribe: Idempotent disposer.
        """
        last = selector(self._state)

        def on_state(state: AuthState) -> None:
            nonlocal last
            selected = selector(state)
            if selected == last:
                return
            last = selected
            listener(selected)

        return self.subscribe(on_state)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _apply(
        self,
        transition: str,
        new_state: AuthState,
        token: int | None,
        *,
        barrier: bool = False,
    ) -> bool:
        if self.is_stale(token):
            self._logger.info(
                "auth_state_stale_write_discarded",
                transition=transition,
                token=token,
                barrier=self._barrier,
            )
            return False

        self._sequence += 1
        if barrier:
            self._barrier = self._sequence
        self._state = new_state
        self._logger.debug(
            "auth_state_transition",
            transition=transition,
            sequence=self._sequence,
            is_authenticated=new_state.is_authenticated,
            is_loading=new_state.is_loading,
        )
        self._notify(new_state)
        return True

    def _notify(self, state: AuthState) -> None:
        for listener_id in list(self._listeners):
            listener = self._listeners.get(listener_id)
            if listener is None:
                continue
            try:
                listener(state)
            except Exception as e:
                self._logger.warning(
                    "auth_state_listener_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
