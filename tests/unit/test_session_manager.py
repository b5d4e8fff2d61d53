"""Unit tests for BrowserSessionManager.

Tests cover:
- Lazy, idempotent session creation (including concurrent first use)
- Console events flowing into the log buffer with notifications
- Failed launches leaving no half-initialized session behind
- Teardown semantics (no-op without session, no re-creation afterwards)
"""

import asyncio

import pytest

from playwrightmcp.components.session_manager import (
    BrowserSessionManager,
    SessionClosedError,
    SessionError,
    SessionState,
)
from playwrightmcp.domains.resources import LOGS_URI, NotificationKind
from tests.helpers.fake_driver import FakeDriverFactory, recording_subscriber


@pytest.fixture
def manager(driver_factory, resources):
    return BrowserSessionManager(driver_factory, resources)


class TestEnsureSession:
    @pytest.mark.asyncio
    async def test_no_session_before_first_use(self, manager, driver_factory):
        assert manager.state is SessionState.IDLE
        assert manager.session is None
        assert driver_factory.drivers == []

    @pytest.mark.asyncio
    async def test_creates_session_once(self, manager, driver_factory):
        first = await manager.ensure_session()
        second = await manager.ensure_session()

        assert first is second
        assert manager.state is SessionState.LIVE
        assert len(driver_factory.drivers) == 1
        assert driver_factory.drivers[0].launched
        assert first.page is driver_factory.page

    @pytest.mark.asyncio
    async def test_concurrent_first_use_launches_once(self, resources):
        factory = FakeDriverFactory(launch_delay=0.01)
        manager = BrowserSessionManager(factory, resources)

        sessions = await asyncio.gather(*(manager.ensure_session() for _ in range(10)))

        assert len(factory.drivers) == 1
        assert manager.launch_count == 1
        assert all(s is sessions[0] for s in sessions)


class TestConsoleForwarding:
    @pytest.mark.asyncio
    async def test_console_events_reach_log_buffer_in_order(self, manager, resources):
        received = []
        resources.subscribe(recording_subscriber(received))
        session = await manager.ensure_session()

        session.page.emit_console("log", "first")
        session.page.emit_console("warning", "second")
        session.page.emit_console("error", "third")
        await resources.wait_for_deliveries()

        assert resources.read(LOGS_URI).text == "[log] first\n[warning] second\n[error] third"
        assert len(received) == 3
        assert all(n.kind is NotificationKind.UPDATED for n in received)
        assert all(n.uri == LOGS_URI for n in received)


class TestLaunchFailure:
    @pytest.mark.asyncio
    async def test_failure_surfaces_and_resets_state(self, resources):
        factory = FakeDriverFactory(failures=["Executable doesn't exist"])
        manager = BrowserSessionManager(factory, resources)

        with pytest.raises(SessionError, match="Executable doesn't exist"):
            await manager.ensure_session()

        assert manager.session is None
        assert manager.state is SessionState.IDLE
        assert factory.drivers[0].closed

    @pytest.mark.asyncio
    async def test_retry_after_failure_succeeds(self, resources):
        factory = FakeDriverFactory(failures=["boom"])
        manager = BrowserSessionManager(factory, resources)

        with pytest.raises(SessionError):
            await manager.ensure_session()
        session = await manager.ensure_session()

        assert session is manager.session
        assert len(factory.drivers) == 2
        assert manager.state is SessionState.LIVE


class TestTeardown:
    @pytest.mark.asyncio
    async def test_teardown_without_session_is_noop(self, manager, driver_factory):
        await manager.teardown()
        assert driver_factory.drivers == []
        assert manager.state is SessionState.CLOSED

    @pytest.mark.asyncio
    async def test_teardown_closes_driver(self, manager, driver_factory):
        await manager.ensure_session()
        await manager.teardown()

        assert driver_factory.drivers[0].closed
        assert manager.session is None

    @pytest.mark.asyncio
    async def test_teardown_twice_is_safe(self, manager):
        await manager.ensure_session()
        await manager.teardown()
        await manager.teardown()
        assert manager.state is SessionState.CLOSED

    @pytest.mark.asyncio
    async def test_no_recreation_after_teardown(self, manager, driver_factory):
        await manager.ensure_session()
        await manager.teardown()

        with pytest.raises(SessionClosedError):
            await manager.ensure_session()
        assert len(driver_factory.drivers) == 1
