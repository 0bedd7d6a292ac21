"""Main application class for the kubemc TUI.

The app shows one resource kind merged across the selected contexts. Each
row is keyed by its composite id so row actions route back to the owning
context. The app is also the session driven by the connectivity supervisor.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.css.query import NoMatches, WrongType
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import DataTable, Footer, Header, Static

from kubemc.constants import APP_TITLE
from kubemc.controllers.cluster import ConnectivitySupervisor
from kubemc.controllers.fanout import MultiContextController
from kubemc.keyboard.app import APP_BINDINGS, DESCRIBE_BINDINGS
from kubemc.models.core.context_object import ContextObject
from kubemc.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)

TABLE_COLUMNS: tuple[str, ...] = ("CONTEXT", "NAMESPACE", "NAME", "AGE")


class DescribeScreen(Screen[None]):
    """Full-screen ``kubectl describe`` output for one row."""

    BINDINGS: list[Binding] = DESCRIBE_BINDINGS

    DEFAULT_CSS = """
    DescribeScreen #describe-body {
        padding: 0 1;
    }
    """

    def __init__(self, title: str, body: str) -> None:
        super().__init__()
        self._title = title
        self._body = body

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(Static(self._body, markup=False, id="describe-body"))
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self._title

    def action_close(self) -> None:
        self.app.pop_screen()


class MultiContextApp(App[None]):
    """Merged multi-context resource table."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    DEFAULT_CSS = """
    #status-bar {
        height: 1;
        padding: 0 1;
        color: $warning;
    }

    #resources {
        height: 1fr;
    }
    """

    def __init__(
        self,
        controller: MultiContextController,
        settings: AppSettings | None = None,
        *,
        resource: str | None = None,
        namespace: str = "",
        label_selector: str = "",
        supervise: bool = True,
    ) -> None:
        super().__init__()
        self.controller = controller
        self.settings = settings or AppSettings()
        self.resource = resource or self.settings.default_resource
        self.namespace = namespace
        self.label_selector = label_selector
        self.supervise = supervise
        self.contexts: list[str] = []
        self._refresh_timer: Timer | None = None
        self._supervisor: ConnectivitySupervisor | None = None
        self._status_message = ""

    # =========================================================================
    # Composition and lifecycle
    # =========================================================================

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="status-bar")
        yield DataTable(id="resources", cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#resources", DataTable)
        table.add_columns(*TABLE_COLUMNS)
        self._refresh_timer = self.set_interval(
            self.settings.refresh_interval,
            self.action_refresh,
            name="resource-refresh",
        )
        self.action_refresh()
        if self.supervise:
            self._supervisor = ConnectivitySupervisor(
                self.controller.check_connection,
                self,
                interval=self.settings.cluster_refresh_interval,
                max_delay=self.settings.max_backoff_seconds,
                max_failures=self.settings.max_conn_retry,
                side_refresh=self._refresh_versions,
            )
            self._supervisor.start()

    def on_unmount(self) -> None:
        if self._supervisor is not None:
            self._supervisor.stop()

    # =========================================================================
    # Actions
    # =========================================================================

    def action_refresh(self) -> None:
        self.run_worker(
            self._load_rows(),
            name="load-rows",
            group="refresh",
            exclusive=True,
            exit_on_error=False,
        )

    def action_versions(self) -> None:
        self.run_worker(
            self._refresh_versions(),
            name="versions",
            group="versions",
            exclusive=True,
            exit_on_error=False,
        )

    def action_describe(self) -> None:
        row_id = self.selected_row_id()
        if row_id is None:
            self.notify("Nothing selected", severity="warning")
            return
        self.run_worker(
            self._describe(row_id),
            name="describe",
            group="describe",
            exclusive=True,
            exit_on_error=False,
        )

    def selected_row_id(self) -> str | None:
        """Row id under the cursor, or None when the table is empty."""
        table = self.query_one("#resources", DataTable)
        if table.row_count == 0:
            return None
        cell_key = table.coordinate_to_cell_key(table.cursor_coordinate)
        return cell_key.row_key.value

    # =========================================================================
    # Workers
    # =========================================================================

    async def _load_rows(self) -> None:
        self.contexts = self.controller.target_contexts()
        if not self.contexts:
            self.show_warning("No context selected and no current context")
            return
        try:
            objects = await self.controller.list_across_contexts(
                self.contexts,
                self.resource,
                self.namespace,
                self.label_selector,
            )
        except ValueError as exc:
            self.notify(str(exc), title="Invalid resource", severity="error")
            return
        self.populate(objects)

    def populate(self, objects: list[ContextObject]) -> None:
        """Replace table rows with ``objects``."""
        multi = len(self.contexts) > 1
        table = self.query_one("#resources", DataTable)
        table.clear()
        for obj in objects:
            table.add_row(
                obj.context,
                obj.namespace or "-",
                obj.name,
                obj.age(),
                key=obj.row_id if multi else obj.path,
            )
        self.sub_title = (
            f"{self.resource}: {len(objects)} object(s) across "
            f"{len(self.contexts)} context(s)"
        )

    async def _refresh_versions(self) -> None:
        contexts = self.contexts or self.controller.target_contexts()
        versions = await self.controller.server_versions(contexts)
        summary = ", ".join(f"{name} {version}" for name, version in versions.items())
        logger.debug("Server versions: %s", summary)
        if summary:
            self.title = f"{APP_TITLE} [{summary}]"

    async def _describe(self, row_id: str) -> None:
        try:
            body = await self.controller.describe(row_id, self.resource)
        except Exception as exc:
            logger.warning("Describe failed for %s: %s", row_id, exc)
            self.notify(str(exc), title="Describe failed", severity="error")
            return
        self.push_screen(DescribeScreen(row_id, body))

    # =========================================================================
    # SupervisedSession
    # =========================================================================

    def pause_refresh(self) -> None:
        if self._refresh_timer is not None:
            self._refresh_timer.pause()

    def resume_refresh(self) -> None:
        if self._refresh_timer is not None:
            self._refresh_timer.resume()

    def show_info(self, message: str) -> None:
        self._set_status("")
        self.notify(message)

    def show_warning(self, message: str) -> None:
        self._set_status(message)
        self.notify(message, severity="warning")

    def clear_warning(self) -> None:
        self._set_status("")

    def terminate(self, message: str) -> None:
        logger.error(message)
        self.exit(return_code=1, message=message)

    def _set_status(self, message: str) -> None:
        self._status_message = message
        with suppress(NoMatches, WrongType):
            self.query_one("#status-bar", Static).update(message)


__all__ = [
    "DescribeScreen",
    "MultiContextApp",
    "TABLE_COLUMNS",
]
