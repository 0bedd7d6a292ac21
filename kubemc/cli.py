"""Command line entry point for kubemc."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from kubemc import __version__
from kubemc.constants.enums import ConnectivityState
from kubemc.constants.values import APP_NAME, ARGS_SEPARATOR
from kubemc.controllers.cluster import ConnectivitySupervisor, LoggingSession
from kubemc.controllers.errors import ConfigResolutionError
from kubemc.controllers.fanout import MultiContextController, format_results
from kubemc.logging_config import default_log_file, setup_logging
from kubemc.models.state.app_settings import AppSettings
from kubemc.models.state.config_manager import ConfigLoadError, ConfigManager
from kubemc.models.state.selection import SelectedContexts

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Run kubectl operations across multiple Kubernetes contexts",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--kubeconfig", default=None, help="Path to kubeconfig file")
    parser.add_argument(
        "--context",
        default=None,
        help="Active context (default: kubeconfig current-context)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from settings)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("contexts", help="List kubeconfig contexts and the selection")

    select = sub.add_parser("select", help="Rewrite the multi-context selection")
    select.add_argument("names", nargs="*", help="Context names to select")
    select_mode = select.add_mutually_exclusive_group()
    select_mode.add_argument("--all", action="store_true", help="Select every context")
    select_mode.add_argument("--clear", action="store_true", help="Clear the selection")
    select_mode.add_argument("--toggle", action="store_true", help="Toggle the given names")

    sub.add_parser("versions", help="Print the server version of each target context")

    watch = sub.add_parser("watch", help="Supervise connectivity to the active context")
    watch.add_argument("--once", action="store_true", help="Check once and exit")

    get = sub.add_parser("get", help="List a resource across target contexts")
    get.add_argument("resource", help="Resource, e.g. pods or deployments.v1.apps")
    get.add_argument("-n", "--namespace", default="", help="Namespace (default: all)")
    get.add_argument("-l", "--selector", default="", help="Label selector")

    run = sub.add_parser("run", help="Run a kubectl command across target contexts")
    run.add_argument("--max-parallel", type=int, default=None, help="Concurrency bound")
    run.add_argument("kubectl_args", nargs=argparse.REMAINDER, help="kubectl arguments")

    tui = sub.add_parser("tui", help="Launch the multi-context table")
    tui.add_argument("resource", nargs="?", default=None, help="Resource to show")
    tui.add_argument("-n", "--namespace", default="", help="Namespace (default: all)")
    tui.add_argument("-l", "--selector", default="", help="Label selector")

    return parser


def load_settings(args: argparse.Namespace) -> AppSettings:
    """Load persisted settings and apply command line overrides."""
    try:
        settings = ConfigManager.load()
    except ConfigLoadError as exc:
        logger.warning("%s; using defaults", exc)
        settings = AppSettings()
    if args.kubeconfig:
        settings.kubeconfig = args.kubeconfig
    if args.log_level:
        settings.log_level = args.log_level
    return settings


def _strip_separator(kubectl_args: Sequence[str]) -> list[str]:
    args = list(kubectl_args)
    if args and args[0] == ARGS_SEPARATOR:
        args = args[1:]
    return args


def cmd_contexts(controller: MultiContextController, console: Console) -> int:
    names = controller.registry.list_context_names()
    selected = set(controller.selection.load())
    active = controller.active_context
    table = Table("SEL", "CURRENT", "CONTEXT", box=None)
    for name in names:
        table.add_row(
            "*" if name in selected else "",
            "(current)" if name == active else "",
            name,
        )
    console.print(table)
    return 0


def cmd_select(
    controller: MultiContextController,
    args: argparse.Namespace,
    console: Console,
) -> int:
    selection = controller.selection
    if args.clear:
        selection.clear()
        console.print("Selection cleared")
        return 0

    known = controller.registry.list_context_names()
    if args.all:
        names = selection.select_all(known)
        console.print(f"{len(names)} context(s) selected")
        return 0

    unknown = [name for name in args.names if name not in known]
    if unknown:
        console.print(f"[red]Unknown context(s):[/red] {', '.join(unknown)}")
        return 2

    if args.toggle:
        for name in args.names:
            state = "selected" if selection.toggle(name) else "deselected"
            console.print(f"{name} {state}")
        return 0

    names = selection.save(args.names)
    console.print(f"{len(names)} context(s) selected")
    return 0


def _versions_table(versions: dict[str, str]) -> Table:
    table = Table("CONTEXT", "VERSION", box=None)
    for name, version in versions.items():
        table.add_row(name, version)
    return table


def cmd_versions(controller: MultiContextController, console: Console) -> int:
    contexts = controller.target_contexts()
    versions = asyncio.run(controller.server_versions(contexts))
    console.print(_versions_table(versions))
    return 0


def cmd_watch(
    controller: MultiContextController,
    settings: AppSettings,
    args: argparse.Namespace,
    console: Console,
) -> int:
    """Run the connectivity supervisor until it gives up or is interrupted.

    Server versions of the target contexts are printed after every healthy
    check. Returns 1 once the supervisor declares the connection lost.
    """
    session = LoggingSession()

    async def _print_versions() -> None:
        versions = await controller.server_versions(controller.target_contexts())
        console.print(_versions_table(versions))

    async def _watch() -> ConnectivityState:
        supervisor = ConnectivitySupervisor(
            controller.check_connection,
            session,
            interval=settings.cluster_refresh_interval,
            max_delay=settings.max_backoff_seconds,
            max_failures=settings.max_conn_retry,
            side_refresh=None if args.once else _print_versions,
        )
        if args.once:
            state = await supervisor.probe_once()
            if state is ConnectivityState.HEALTHY:
                await _print_versions()
            return state
        try:
            await supervisor.run()
        finally:
            supervisor.stop()
        return supervisor.state

    try:
        state = asyncio.run(_watch())
    except KeyboardInterrupt:
        logger.info("Watch interrupted")
        return session.exit_code
    if args.once:
        return 0 if state is ConnectivityState.HEALTHY else 1
    return session.exit_code


def cmd_get(
    controller: MultiContextController,
    args: argparse.Namespace,
    console: Console,
) -> int:
    contexts = controller.target_contexts()
    objects = asyncio.run(
        controller.list_across_contexts(contexts, args.resource, args.namespace, args.selector)
    )
    table = Table("CONTEXT", "NAMESPACE", "NAME", "AGE", box=None)
    for obj in objects:
        table.add_row(obj.context, obj.namespace or "-", obj.name, obj.age())
    console.print(table)
    return 0


def cmd_run(
    controller: MultiContextController,
    args: argparse.Namespace,
    console: Console,
) -> int:
    kubectl_args = _strip_separator(args.kubectl_args)
    if not kubectl_args:
        console.print("[red]No kubectl arguments given[/red]")
        return 2
    contexts = controller.target_contexts()
    results = asyncio.run(
        controller.run_command_across_contexts(contexts, kubectl_args, args.max_parallel)
    )
    console.out(format_results(results), highlight=False)
    return 0 if all(result.ok for result in results) else 1


def cmd_tui(
    controller: MultiContextController,
    settings: AppSettings,
    args: argparse.Namespace,
) -> int:
    from kubemc.app import MultiContextApp

    app = MultiContextApp(
        controller,
        settings,
        resource=args.resource,
        namespace=args.namespace,
        label_selector=args.selector,
    )
    app.run()
    return app.return_code or 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args)

    if args.command == "tui":
        setup_logging(settings.log_level, settings.log_file or default_log_file())
    else:
        setup_logging(settings.log_level, settings.log_file or None)

    console = Console()
    controller = MultiContextController.from_settings(
        settings,
        context=args.context,
        selection=SelectedContexts(),
    )

    try:
        if args.command == "contexts":
            return cmd_contexts(controller, console)
        if args.command == "select":
            return cmd_select(controller, args, console)
        if args.command == "versions":
            return cmd_versions(controller, console)
        if args.command == "watch":
            return cmd_watch(controller, settings, args, console)
        if args.command == "get":
            return cmd_get(controller, args, console)
        if args.command == "run":
            return cmd_run(controller, args, console)
        if args.command == "tui":
            return cmd_tui(controller, settings, args)
    except ConfigResolutionError as exc:
        console.print(f"[red]Kubeconfig error:[/red] {exc}")
        return 2
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        return 2
    parser.error(f"unknown command {args.command!r}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
