"""All enum definitions.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Connectivity Enums
# =============================================================================


class ConnectivityState(Enum):
    """Connectivity supervisor states.

    FATALLY_DISCONNECTED is terminal: the owning session is ended.
    """

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FATALLY_DISCONNECTED = "fatally_disconnected"


__all__ = [
    "ConnectivityState",
]
