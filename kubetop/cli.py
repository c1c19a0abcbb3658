"""Command-line interface for kubetop.

Provides pod, node and version subcommands.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console

from kubetop import __version__
from kubetop.app import NodeReportRequest, PodReportRequest, ReportApp
from kubetop.constants.defaults import (
    NAMESPACE_DEFAULT,
    NODE_SORT_KEY_DEFAULT,
    POD_SORT_KEY_DEFAULT,
)
from kubetop.constants.enums import NodeSortKey, PodSortKey
from kubetop.errors import KubetopError
from kubetop.models.state.app_settings import load_settings
from kubetop.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

POD_COMMANDS = ("pod", "po", "pods")
NODE_COMMANDS = ("node", "no", "nodes")


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add options shared by every report subcommand."""
    parser.add_argument(
        "--context", default=None,
        help="Kubeconfig context to use (default: current context)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to a YAML settings file (default: ~/.config/kubetop/config.yaml)",
    )
    parser.add_argument(
        "--timeout", type=float, default=None, dest="report_timeout_seconds",
        help="Global report deadline in seconds (default: 5)",
    )
    parser.add_argument(
        "--watermark", type=float, default=None,
        help="Flag percentages below this value (default: 20)",
    )
    parser.add_argument(
        "--wide", action="store_true",
        help="Add request, limit, usage and allocation quantity columns",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the kubetop argument parser."""
    parser = argparse.ArgumentParser(
        prog="kubetop",
        description="Kubernetes pod and node CPU/memory utilization report",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # pod subcommand
    pod_parser = subparsers.add_parser(
        POD_COMMANDS[0], aliases=list(POD_COMMANDS[1:]),
        help="Show pod usage against requests and limits",
    )
    pod_parser.add_argument(
        "-n", "--namespace", default=NAMESPACE_DEFAULT,
        help=f"Namespace to report on (default: {NAMESPACE_DEFAULT})",
    )
    pod_parser.add_argument(
        "--sort-by", default=POD_SORT_KEY_DEFAULT, dest="sort_by",
        help=(
            "Sort key: "
            + ", ".join(key.value for key in PodSortKey)
            + f" (default: {POD_SORT_KEY_DEFAULT})"
        ),
    )
    pod_parser.add_argument(
        "--container", action="store_true",
        help="Show one row per container",
    )
    pod_parser.add_argument(
        "--no-group", action="store_false", dest="group_by_workload", default=None,
        help="Do not keep pods of the same workload adjacent",
    )
    _add_common_args(pod_parser)

    # node subcommand
    node_parser = subparsers.add_parser(
        NODE_COMMANDS[0], aliases=list(NODE_COMMANDS[1:]),
        help="Show node request headroom and live utilization",
    )
    node_parser.add_argument(
        "--sort-by", default=NODE_SORT_KEY_DEFAULT, dest="sort_by",
        help=(
            "Sort key: "
            + ", ".join(key.value for key in NodeSortKey)
            + f" (default: {NODE_SORT_KEY_DEFAULT})"
        ),
    )
    _add_common_args(node_parser)

    # version subcommand
    subparsers.add_parser("version", help="Print the kubetop version")
    return parser


def run(args: argparse.Namespace, console: Console | None = None) -> int:
    """Execute a parsed command and return the process exit code."""
    if args.command == "version":
        (console or Console()).print(f"kubetop {__version__}", highlight=False)
        return 0

    setup_logging(args.verbose)
    settings = load_settings(
        args.config,
        context=args.context,
        report_timeout_seconds=args.report_timeout_seconds,
        watermark=args.watermark,
    )
    app = ReportApp(settings=settings, console=console)

    if args.command in POD_COMMANDS:
        app.run_pod_report(
            PodReportRequest(
                namespace=args.namespace,
                sort_key=args.sort_by,
                by_container=args.container,
                wide=args.wide,
                group_by_workload=args.group_by_workload,
            )
        )
    else:  # node
        app.run_node_report(NodeReportRequest(sort_key=args.sort_by, wide=args.wide))
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the kubetop CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        exit_code = run(args)
    except KubetopError as exc:
        logger.debug("Report failed", exc_info=True)
        Console(stderr=True).print(f"error: {exc.message}", highlight=False, markup=False)
        exit_code = exc.exit_code
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
