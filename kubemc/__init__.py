"""kubemc - multi-context Kubernetes fan-out and aggregation."""

__version__ = "0.1.0"
