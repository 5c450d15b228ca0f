"""Unit tests for AuthSessionObserver.

Tests cover:
- External sign-out flips the store to unauthenticated
- Token refresh updates the stored user
- start() is idempotent, stop() disposes
- No callback is applied after stop(), even mid-dispatch
"""

from unittest.mock import MagicMock

import pytest

from authcore.application.services import AuthSessionObserver
from tests.conftest import create_auth_user


class FakeRepository:
    """Captures the observe_auth_state listener."""

    def __init__(self):
        self.listeners = []
        self.disposed = 0

    def observe_auth_state(self, listener):
        self.listeners.append(listener)

        def unsubscribe():
            self.disposed += 1
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def emit(self, user):
        for listener in list(self.listeners):
            if listener in self.listeners:
                listener(user)


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture
def observer(repository, store, mock_logger):
    return AuthSessionObserver(repository=repository, store=store, logger=mock_logger)


@pytest.mark.unit
class TestAuthSessionObserver:
    def test_external_sign_out_unauthenticates(self, observer, repository, store, mock_logger):
        store.set_user(create_auth_user())
        observer.start()

        repository.emit(None)

        assert store.state.is_authenticated is False
        assert store.state.user is None
        mock_logger.info.assert_any_call("auth_session_ended_externally")

    def test_sign_out_when_already_signed_out_is_ignored(self, observer, repository, store):
        observer.start()
        sequence = store.sequence

        repository.emit(None)

        assert store.sequence == sequence

    def test_refreshed_user_replaces_stored_user(self, observer, repository, store):
        store.set_user(create_auth_user(email_verified=False))
        observer.start()
        refreshed = create_auth_user(email_verified=True)

        repository.emit(refreshed)

        assert store.state.user is refreshed

    def test_identical_user_is_not_reapplied(self, observer, repository, store):
        store.set_user(create_auth_user())
        observer.start()
        sequence = store.sequence

        repository.emit(create_auth_user())

        assert store.sequence == sequence

    def test_sign_out_barrier_discards_in_flight_write(self, observer, repository, store):
        store.set_user(create_auth_user())
        observer.start()
        token = store.issue_token()

        repository.emit(None)

        assert store.set_user(create_auth_user(), token=token) is False

    def test_start_is_idempotent(self, observer, repository):
        observer.start()
        observer.start()

        assert len(repository.listeners) == 1
        assert observer.is_running is True

    def test_stop_disposes(self, observer, repository, store):
        observer.start()
        observer.stop()
        observer.stop()

        repository.emit(create_auth_user())

        assert repository.disposed == 1
        assert observer.is_running is False
        assert store.state.user is None

    def test_stop_during_dispatch_blocks_pending_callback(self, repository, store, mock_logger):
        observer = AuthSessionObserver(repository=repository, store=store, logger=mock_logger)
        first_listener = MagicMock(side_effect=lambda user: observer.stop())
        repository.observe_auth_state(first_listener)
        observer.start()

        repository.emit(create_auth_user())

        first_listener.assert_called_once()
        assert store.state.user is None
