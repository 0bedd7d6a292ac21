"""Limit and threshold constants.

All limit values and validation ranges.
"""

from typing import Final

# ============================================================================
# Fan-out limits
# ============================================================================

MAX_PARALLEL_DEFAULT: Final = 10
MAX_PARALLEL_MIN: Final = 1
MAX_PARALLEL_MAX: Final = 64
FANOUT_QPS_MIN: Final = 1.0
FANOUT_BURST_MIN: Final = 1

# ============================================================================
# Connectivity limits
# ============================================================================

MAX_CONN_RETRY_DEFAULT: Final = 5
MAX_CONN_RETRY_MIN: Final = 1
CLUSTER_REFRESH_INTERVAL_MIN: Final = 1.0
MAX_BACKOFF_MIN: Final = 1.0

# ============================================================================
# Validation limits
# ============================================================================

REFRESH_INTERVAL_MIN: Final = 1

__all__ = [
    "CLUSTER_REFRESH_INTERVAL_MIN",
    "FANOUT_BURST_MIN",
    "FANOUT_QPS_MIN",
    "MAX_BACKOFF_MIN",
    "MAX_CONN_RETRY_DEFAULT",
    "MAX_CONN_RETRY_MIN",
    "MAX_PARALLEL_DEFAULT",
    "MAX_PARALLEL_MAX",
    "MAX_PARALLEL_MIN",
    "REFRESH_INTERVAL_MIN",
]
