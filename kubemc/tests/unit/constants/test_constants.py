"""Tests for constants."""

from __future__ import annotations

from kubemc.constants import ConnectivityState
from kubemc.constants.defaults import DEFAULT_BURST, DEFAULT_QPS, FANOUT_BURST, FANOUT_QPS
from kubemc.constants.limits import MAX_CONN_RETRY_DEFAULT, MAX_PARALLEL_DEFAULT
from kubemc.constants.timeouts import (
    CLUSTER_REFRESH_INTERVAL,
    MAX_BACKOFF_DELAY,
    VERSION_PROBE_TIMEOUT,
)
from kubemc.constants.values import MULTI_CONTEXT_SEPARATOR, NOT_AVAILABLE


class TestConstants:
    """Sanity checks for shared constants."""

    def test_separator(self) -> None:
        assert MULTI_CONTEXT_SEPARATOR == "@@"

    def test_version_sentinel(self) -> None:
        assert NOT_AVAILABLE == "N/A"

    def test_fanout_tuning_exceeds_default(self) -> None:
        assert FANOUT_QPS == 50
        assert FANOUT_BURST == 100
        assert FANOUT_QPS > DEFAULT_QPS
        assert FANOUT_BURST > DEFAULT_BURST

    def test_fanout_limits(self) -> None:
        assert MAX_PARALLEL_DEFAULT == 10
        assert VERSION_PROBE_TIMEOUT == 5

    def test_supervisor_cadence(self) -> None:
        assert CLUSTER_REFRESH_INTERVAL == 15
        assert MAX_BACKOFF_DELAY == 120
        assert MAX_CONN_RETRY_DEFAULT >= 1

    def test_connectivity_states(self) -> None:
        assert {state.name for state in ConnectivityState} == {
            "HEALTHY",
            "DEGRADED",
            "FATALLY_DISCONNECTED",
        }
