"""Scalar value constants.

Application strings, reserved tokens and sentinels.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_NAME: Final = "kubemc"
APP_TITLE: Final = "kubemc - multi-context"

# ============================================================================
# Sentinels and reserved tokens
# ============================================================================

# Placeholder for contexts whose server version could not be determined.
NOT_AVAILABLE: Final = "N/A"

# Reserved: never valid inside a context name or a resource path.
MULTI_CONTEXT_SEPARATOR: Final = "@@"

# Namespace selectors meaning "every namespace".
CLUSTER_SCOPE: Final = "-"
NAMESPACE_ALL: Final = "all"

# ============================================================================
# kubectl arguments
# ============================================================================

KUBECTL_BINARY: Final = "kubectl"
CONTEXT_FLAG: Final = "--context"
ARGS_SEPARATOR: Final = "--"

# ============================================================================
# Report formatting
# ============================================================================

ERROR_OUTPUT_PREFIX: Final = "(error)"

__all__ = [
    "APP_NAME",
    "APP_TITLE",
    "ARGS_SEPARATOR",
    "CLUSTER_SCOPE",
    "CONTEXT_FLAG",
    "ERROR_OUTPUT_PREFIX",
    "KUBECTL_BINARY",
    "MULTI_CONTEXT_SEPARATOR",
    "NAMESPACE_ALL",
    "NOT_AVAILABLE",
]
