"""Base controller."""

from kubemc.controllers.base.base_controller import BaseController

__all__ = ["BaseController"]
