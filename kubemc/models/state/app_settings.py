"""Application settings models."""

from pydantic import BaseModel, ConfigDict, field_validator

from kubemc.constants.defaults import (
    DEFAULT_RESOURCE,
    FANOUT_BURST,
    FANOUT_QPS,
    LOG_LEVEL_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
)
from kubemc.constants.limits import (
    CLUSTER_REFRESH_INTERVAL_MIN,
    FANOUT_BURST_MIN,
    FANOUT_QPS_MIN,
    MAX_BACKOFF_MIN,
    MAX_CONN_RETRY_DEFAULT,
    MAX_CONN_RETRY_MIN,
    MAX_PARALLEL_DEFAULT,
    MAX_PARALLEL_MAX,
    MAX_PARALLEL_MIN,
    REFRESH_INTERVAL_MIN,
)
from kubemc.constants.timeouts import (
    CLUSTER_REFRESH_INTERVAL,
    MAX_BACKOFF_DELAY,
    VERSION_PROBE_TIMEOUT,
)
from kubemc.constants.values import KUBECTL_BINARY


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Cluster access
    kubeconfig: str = ""
    kubectl_binary: str = KUBECTL_BINARY

    # Fan-out
    max_parallel: int = MAX_PARALLEL_DEFAULT
    fanout_qps: float = FANOUT_QPS
    fanout_burst: int = FANOUT_BURST

    # Per-task timeouts in seconds; None means unbounded
    version_timeout_seconds: float | None = VERSION_PROBE_TIMEOUT
    list_timeout_seconds: float | None = None
    command_timeout_seconds: float | None = None

    # Refresh and connectivity
    refresh_interval: int = REFRESH_INTERVAL_DEFAULT  # seconds
    cluster_refresh_interval: float = CLUSTER_REFRESH_INTERVAL
    max_backoff_seconds: float = MAX_BACKOFF_DELAY
    max_conn_retry: int = MAX_CONN_RETRY_DEFAULT

    # UI preferences
    default_resource: str = DEFAULT_RESOURCE

    # Logging
    log_level: str = LOG_LEVEL_DEFAULT
    log_file: str = ""

    @field_validator("max_parallel")
    @classmethod
    def _clamp_max_parallel(cls, value: int) -> int:
        return max(MAX_PARALLEL_MIN, min(MAX_PARALLEL_MAX, value))

    @field_validator("max_conn_retry")
    @classmethod
    def _clamp_max_conn_retry(cls, value: int) -> int:
        return max(MAX_CONN_RETRY_MIN, value)

    @field_validator("refresh_interval")
    @classmethod
    def _clamp_refresh_interval(cls, value: int) -> int:
        return max(REFRESH_INTERVAL_MIN, value)

    @field_validator("cluster_refresh_interval")
    @classmethod
    def _clamp_cluster_refresh_interval(cls, value: float) -> float:
        return max(CLUSTER_REFRESH_INTERVAL_MIN, value)

    @field_validator("max_backoff_seconds")
    @classmethod
    def _clamp_max_backoff(cls, value: float) -> float:
        return max(MAX_BACKOFF_MIN, value)

    @field_validator("fanout_qps")
    @classmethod
    def _clamp_fanout_qps(cls, value: float) -> float:
        return max(FANOUT_QPS_MIN, value)

    @field_validator("fanout_burst")
    @classmethod
    def _clamp_fanout_burst(cls, value: int) -> int:
        return max(FANOUT_BURST_MIN, value)

    @field_validator(
        "version_timeout_seconds",
        "list_timeout_seconds",
        "command_timeout_seconds",
    )
    @classmethod
    def _non_positive_timeout_is_unbounded(cls, value: float | None) -> float | None:
        if value is None or value <= 0:
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return (value or LOG_LEVEL_DEFAULT).strip().upper()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
