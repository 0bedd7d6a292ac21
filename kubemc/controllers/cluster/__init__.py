"""Cluster connectivity supervision."""

from kubemc.controllers.cluster.session import LoggingSession
from kubemc.controllers.cluster.supervisor import (
    ConnectivitySupervisor,
    RetryState,
    SupervisedSession,
)

__all__ = [
    "ConnectivitySupervisor",
    "LoggingSession",
    "RetryState",
    "SupervisedSession",
]
