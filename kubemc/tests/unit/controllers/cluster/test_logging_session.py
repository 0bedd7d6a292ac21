"""Tests for the headless LoggingSession."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock

import pytest

from kubemc.constants.enums import ConnectivityState
from kubemc.controllers.cluster import ConnectivitySupervisor, LoggingSession

SESSION_LOGGER = "kubemc.controllers.cluster.session"


class TestLoggingSession:
    """Tests for LoggingSession hooks."""

    @pytest.fixture
    def session(self) -> LoggingSession:
        return LoggingSession()

    def test_initial_state(self, session: LoggingSession) -> None:
        assert not session.refresh_paused
        assert session.warning is None
        assert not session.terminated
        assert session.exit_code == 0

    def test_pause_and_resume(self, session: LoggingSession) -> None:
        session.pause_refresh()
        session.pause_refresh()
        assert session.refresh_paused
        session.resume_refresh()
        assert not session.refresh_paused

    def test_warning_logged_and_cleared(
        self,
        session: LoggingSession,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING, logger=SESSION_LOGGER):
            session.show_warning("Dial K8s Toast [1/3]")
        assert session.warning == "Dial K8s Toast [1/3]"
        assert "Dial K8s Toast [1/3]" in caplog.text
        session.clear_warning()
        assert session.warning is None

    def test_info_logged(
        self,
        session: LoggingSession,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger=SESSION_LOGGER):
            session.show_info("K8s connectivity OK")
        assert "K8s connectivity OK" in caplog.text

    def test_terminate_sets_exit_code(
        self,
        session: LoggingSession,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.ERROR, logger=SESSION_LOGGER):
            session.terminate("Lost K8s connection (3). Bailing out!")
        assert session.terminated
        assert session.exit_code == 1
        assert session.exit_message == "Lost K8s connection (3). Bailing out!"
        assert "Bailing out!" in caplog.text


class TestLoggingSessionSupervised:
    """LoggingSession driven by a real ConnectivitySupervisor."""

    @pytest.mark.asyncio
    async def test_failures_pause_then_terminate(self) -> None:
        session = LoggingSession()
        supervisor = ConnectivitySupervisor(
            AsyncMock(return_value=False),
            session,
            interval=0.01,
            max_delay=0.02,
            max_failures=2,
        )

        await supervisor.run()

        assert supervisor.state is ConnectivityState.FATALLY_DISCONNECTED
        assert session.refresh_paused
        assert session.warning == "Dial K8s Toast [1/2]"
        assert session.exit_message == "Lost K8s connection (2). Bailing out!"

    @pytest.mark.asyncio
    async def test_recovery_resumes_and_clears(self) -> None:
        session = LoggingSession()
        supervisor = ConnectivitySupervisor(
            AsyncMock(side_effect=[False, True]),
            session,
            interval=0.01,
            max_failures=3,
        )

        await supervisor.probe_once()
        assert session.refresh_paused
        await supervisor.probe_once()

        assert supervisor.state is ConnectivityState.HEALTHY
        assert not session.refresh_paused
        assert session.warning is None
        assert not session.terminated
