"""Timeout constants.

All timeout and interval values for kubectl calls, probes and refresh cycles.
"""

from typing import Final

# ============================================================================
# Per-task timeouts (float, in seconds)
# ============================================================================

VERSION_PROBE_TIMEOUT: Final = 5.0
CONNECTIVITY_CHECK_TIMEOUT: Final = 10.0

# Process-level ceiling for kubectl calls that carry no explicit timeout
KUBECTL_COMMAND_TIMEOUT: Final = 45

# ============================================================================
# Supervisor cadence (float, in seconds)
# ============================================================================

CLUSTER_REFRESH_INTERVAL: Final = 15.0
MAX_BACKOFF_DELAY: Final = 120.0

__all__ = [
    "CLUSTER_REFRESH_INTERVAL",
    "CONNECTIVITY_CHECK_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
    "MAX_BACKOFF_DELAY",
    "VERSION_PROBE_TIMEOUT",
]
