"""Fan-out dispatch, aggregation and the multi-context controller."""

from kubemc.controllers.fanout.command import format_results, inject_context_flag
from kubemc.controllers.fanout.controller import MultiContextController, TimeoutPolicy
from kubemc.controllers.fanout.dispatcher import FanOutDispatcher

__all__ = [
    "FanOutDispatcher",
    "MultiContextController",
    "TimeoutPolicy",
    "format_results",
    "inject_context_flag",
]
