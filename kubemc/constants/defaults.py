"""Default values for settings.

All default values used in the AppSettings model and client tuning.
"""

from typing import Final

# ============================================================================
# Client tuning
# ============================================================================

# Fan-out clients share the API server with up to MAX_PARALLEL_DEFAULT
# siblings, so they get higher ceilings than a single-cluster client.
FANOUT_QPS: Final = 50.0
FANOUT_BURST: Final = 100
DEFAULT_QPS: Final = 5.0
DEFAULT_BURST: Final = 10

# ============================================================================
# UI defaults
# ============================================================================

REFRESH_INTERVAL_DEFAULT: Final = 10
DEFAULT_RESOURCE: Final = "pods"
LOG_LEVEL_DEFAULT: Final = "INFO"

__all__ = [
    "DEFAULT_BURST",
    "DEFAULT_QPS",
    "DEFAULT_RESOURCE",
    "FANOUT_BURST",
    "FANOUT_QPS",
    "LOG_LEVEL_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
]
