"""Constants module for kubemc.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings, sentinels, reserved tokens)
- timeouts.py: Timeout values (seconds)
- limits.py: Limit values (max/min)
- defaults.py: Default values for settings and client tuning
"""

from kubemc.constants.defaults import (
    DEFAULT_RESOURCE,
    FANOUT_BURST,
    FANOUT_QPS,
    REFRESH_INTERVAL_DEFAULT,
)
from kubemc.constants.enums import ConnectivityState
from kubemc.constants.limits import (
    MAX_CONN_RETRY_DEFAULT,
    MAX_PARALLEL_DEFAULT,
)
from kubemc.constants.timeouts import (
    CLUSTER_REFRESH_INTERVAL,
    MAX_BACKOFF_DELAY,
    VERSION_PROBE_TIMEOUT,
)
from kubemc.constants.values import (
    APP_NAME,
    APP_TITLE,
    MULTI_CONTEXT_SEPARATOR,
    NOT_AVAILABLE,
)

__all__ = [
    # Application
    "APP_NAME",
    "APP_TITLE",
    # Timeouts
    "CLUSTER_REFRESH_INTERVAL",
    # Defaults
    "DEFAULT_RESOURCE",
    "FANOUT_BURST",
    "FANOUT_QPS",
    "MAX_BACKOFF_DELAY",
    # Limits
    "MAX_CONN_RETRY_DEFAULT",
    "MAX_PARALLEL_DEFAULT",
    # Reserved tokens
    "MULTI_CONTEXT_SEPARATOR",
    "NOT_AVAILABLE",
    "REFRESH_INTERVAL_DEFAULT",
    "VERSION_PROBE_TIMEOUT",
    # Enums
    "ConnectivityState",
]
