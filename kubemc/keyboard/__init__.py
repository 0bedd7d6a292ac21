"""Keyboard bindings."""

from kubemc.keyboard.app import APP_BINDINGS, DESCRIBE_BINDINGS

__all__ = [
    "APP_BINDINGS",
    "DESCRIBE_BINDINGS",
]
