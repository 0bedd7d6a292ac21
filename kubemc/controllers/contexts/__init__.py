"""Context configuration, clients and the connection registry."""

from kubemc.controllers.contexts.client import (
    ClientTuning,
    GroupVersionResource,
    KubectlClient,
    run_kubectl,
)
from kubemc.controllers.contexts.kubeconfig import ContextProfile, KubeConfig
from kubemc.controllers.contexts.registry import FANOUT_TUNING, ConnectionRegistry

__all__ = [
    "FANOUT_TUNING",
    "ClientTuning",
    "ConnectionRegistry",
    "ContextProfile",
    "GroupVersionResource",
    "KubeConfig",
    "KubectlClient",
    "run_kubectl",
]
