"""Controllers for kubemc.

- contexts: kubeconfig resolution, kubectl clients and the connection registry
- fanout: bounded-concurrency dispatch, aggregation and the controller surface
- cluster: connectivity supervision
"""

from kubemc.controllers.base import BaseController
from kubemc.controllers.cluster import ConnectivitySupervisor
from kubemc.controllers.contexts import ConnectionRegistry
from kubemc.controllers.fanout import MultiContextController

__all__ = [
    "BaseController",
    "ConnectionRegistry",
    "ConnectivitySupervisor",
    "MultiContextController",
]
