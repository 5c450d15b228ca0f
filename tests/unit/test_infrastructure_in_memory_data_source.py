"""Unit tests for the in-memory provider adapters.

Tests cover:
- Provider-shaped failures (AuthProviderException codes)
- Auth state notifications and disposers (including mid-dispatch)
- Listener failures are isolated
- Security event sink queries and session expiry
- MFA factor lifecycle
"""

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time

from authcore.domain.entities import SecurityEvent, UserSession
from authcore.domain.enums import MFAFactorStatus, MFAType, SecurityEventType
from authcore.domain.protocols import AuthProviderException
from authcore.infrastructure.auth import (
    InMemoryAuthDataSource,
    InMemoryMFAProvider,
    InMemorySecurityEventSink,
)
from tests.conftest import TEST_PASSWORD

EMAIL = "ada@example.com"


@pytest.mark.unit
class TestInMemoryAuthDataSource:
    @pytest.mark.asyncio
    async def test_sign_in_failure_is_provider_shaped(self, data_source):
        data_source.seed_user(EMAIL, TEST_PASSWORD)

        with pytest.raises(AuthProviderException) as exc_info:
            await data_source.sign_in_with_email_and_password(EMAIL, "nope")

        assert exc_info.value.code == "invalid_credentials"
        assert exc_info.value.status == 400
        assert exc_info.value.message == "Invalid login credentials"

    @pytest.mark.asyncio
    async def test_unconfirmed_email_blocks_sign_in_when_required(self):
        source = InMemoryAuthDataSource(require_email_confirmation=True)
        source.seed_user(EMAIL, TEST_PASSWORD, email_verified=False)

        with pytest.raises(AuthProviderException) as exc_info:
            await source.sign_in_with_email_and_password(EMAIL, TEST_PASSWORD)

        assert exc_info.value.code == "email_not_confirmed"

    @pytest.mark.asyncio
    async def test_sign_in_sets_current_user(self, data_source):
        seeded = data_source.seed_user(EMAIL, TEST_PASSWORD)

        await data_source.sign_in_with_email_and_password(" ADA@example.com", TEST_PASSWORD)

        current = await data_source.get_current_user()
        assert current.id == seeded.id
        assert current.last_sign_in_at is not None

    @pytest.mark.asyncio
    async def test_sign_out_without_session_is_noop(self, data_source):
        received = []
        data_source.on_auth_state_changed(received.append)

        await data_source.sign_out()

        assert received == []

    @pytest.mark.asyncio
    async def test_notifications_follow_session(self, data_source):
        data_source.seed_user(EMAIL, TEST_PASSWORD)
        received = []
        data_source.on_auth_state_changed(received.append)

        await data_source.sign_in_with_email_and_password(EMAIL, TEST_PASSWORD)
        await data_source.sign_out()

        assert [user.email if user else None for user in received] == [EMAIL, None]

    def test_expire_session_notifies_none(self, data_source):
        received = []
        data_source.on_auth_state_changed(received.append)

        data_source.expire_session()

        assert received == [None]

    def test_disposer_stops_callbacks(self, data_source):
        received = []
        unsubscribe = data_source.on_auth_state_changed(received.append)

        unsubscribe()
        unsubscribe()
        data_source.emit(None)

        assert received == []

    def test_disposal_mid_dispatch_skips_pending_listener(self, data_source):
        received = []
        disposers = {}
        data_source.on_auth_state_changed(lambda user: disposers["second"]())
        disposers["second"] = data_source.on_auth_state_changed(received.append)

        data_source.emit(None)

        assert received == []

    def test_failing_listener_does_not_block_others(self, data_source):
        received = []

        def broken(user):
            raise RuntimeError("boom")

        data_source.on_auth_state_changed(broken)
        data_source.on_auth_state_changed(received.append)

        data_source.emit(None)

        assert received == [None]

    @pytest.mark.asyncio
    async def test_operations_without_session_raise(self, data_source):
        with pytest.raises(AuthProviderException) as exc_info:
            await data_source.list_sessions()

        assert exc_info.value.code == "session_not_found"
        assert exc_info.value.status == 401


@pytest.mark.unit
class TestInMemorySecurityEventSink:
    @pytest.mark.asyncio
    async def test_query_filters_and_orders(self):
        sink = InMemorySecurityEventSink()
        day_one = datetime(2024, 6, 1, 12, tzinfo=UTC)
        old = SecurityEvent(type=SecurityEventType.LOGIN, user_id="user-1", timestamp=day_one)
        new = SecurityEvent(
            type=SecurityEventType.LOGOUT,
            user_id="user-1",
            timestamp=day_one + timedelta(days=1),
        )
        other = SecurityEvent(
            type=SecurityEventType.LOGIN, user_id="user-2", timestamp=day_one
        )
        for event in (old, new, other):
            await sink.record(event)

        everything = await sink.query("user-1")
        recent = await sink.query("user-1", since=day_one + timedelta(hours=1))

        assert everything == [new, old]
        assert recent == [new]
        assert await sink.query("user-1", limit=1) == [new]

    def test_event_timestamp_is_utc_now(self):
        with freeze_time("2024-06-01 12:00:00"):
            event = SecurityEvent(type=SecurityEventType.LOGIN, user_id=None)

        assert event.timestamp == datetime(2024, 6, 1, 12, tzinfo=UTC)


@pytest.mark.unit
class TestUserSessionExpiry:
    def test_is_expired_against_current_time(self):
        with freeze_time("2024-06-01 12:00:00"):
            now = datetime.now(UTC)
            session = UserSession(
                id="session-1",
                user_id="user-1",
                device_id="phone",
                is_active=True,
                expires_at=now + timedelta(minutes=30),
                created_at=now,
                last_active_at=now,
            )
            assert session.is_expired() is False

        with freeze_time("2024-06-01 12:30:00"):
            assert session.is_expired() is True

    def test_is_expired_with_explicit_reference(self):
        now = datetime(2024, 6, 1, 12, tzinfo=UTC)
        session = UserSession(
            id="session-1",
            user_id="user-1",
            device_id="phone",
            is_active=True,
            expires_at=now,
            created_at=now - timedelta(hours=1),
            last_active_at=now - timedelta(hours=1),
        )

        assert session.is_expired(now - timedelta(seconds=1)) is False
        assert session.is_expired(now) is True


@pytest.mark.unit
class TestInMemoryMFAProvider:
    @pytest.mark.asyncio
    async def test_factor_lifecycle(self):
        mfa = InMemoryMFAProvider(valid_code="654321")

        enrollment = await mfa.enroll(MFAType.TOTP, friendly_name="Phone app")
        assert (await mfa.list_factors())[0].status == MFAFactorStatus.UNVERIFIED

        await mfa.verify_enrollment(enrollment.factor_id, "654321")
        factor = (await mfa.list_factors())[0]
        assert factor.is_verified is True
        assert factor.friendly_name == "Phone app"

        await mfa.unenroll(enrollment.factor_id)
        assert await mfa.list_factors() == []

    @pytest.mark.asyncio
    async def test_challenge_is_single_use(self):
        mfa = InMemoryMFAProvider()
        enrollment = await mfa.enroll(MFAType.EMAIL)
        challenge_id = await mfa.create_challenge(enrollment.factor_id)

        await mfa.verify_challenge(enrollment.factor_id, challenge_id, "123456")

        with pytest.raises(AuthProviderException) as exc_info:
            await mfa.verify_challenge(enrollment.factor_id, challenge_id, "123456")
        assert exc_info.value.code == "mfa_challenge_expired"

    @pytest.mark.asyncio
    async def test_non_totp_enrollment_has_no_secret(self):
        enrollment = await InMemoryMFAProvider().enroll(MFAType.SMS, phone="+15551234567")

        assert enrollment.secret is None
        assert enrollment.qr_code is None
