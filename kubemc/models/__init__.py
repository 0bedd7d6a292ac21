"""Data models for kubemc."""
