"""App-level keyboard bindings.

This module contains Textual Binding objects for app-level bindings
that work from any screen.
"""

from textual.binding import Binding

# ============================================================================
# Textual Binding objects for app-level bindings
# ============================================================================

APP_BINDINGS: list[Binding] = [
    Binding("r", "refresh", "Refresh"),
    Binding("d", "describe", "Describe"),
    Binding("v", "versions", "Versions"),
    Binding("q", "app.quit", "Quit", priority=True),
]

DESCRIBE_BINDINGS: list[Binding] = [
    Binding("escape", "close", "Back", priority=True),
    Binding("q", "close", "Back"),
]

__all__ = [
    "APP_BINDINGS",
    "DESCRIBE_BINDINGS",
]
