#!/usr/bin/env python3
"""
TTSUM CLI
---------
Summarizes tainted nodes and tolerating workloads.

    ttsum taints [--match EXPR | --no-match EXPR]
    ttsum tolerations apps/v1 deployments -n kube-system --match 'Exists(key:NoSchedule)'
"""

import sys
import argparse
import logging
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ttsum.cli.formatter import SummaryFormatter
from ttsum.core.config import (
    COMMAND_TAINTS,
    COMMAND_TOLERATIONS,
    OUTPUT_FORMATS,
    OUTPUT_TABLE,
    RunConfig,
)
from ttsum.core.engine import SummaryEngine
from ttsum.core.errors import TTSumError

__version__ = "0.1.0"

console = Console()
err_console = Console(stderr=True)

MATCH_HELP = "Show resources with {0} match, must be in format {1}"
NO_MATCH_HELP = "Show resources without {0} match, must be in format {1}"


def configure_logging(verbose: bool) -> None:
    """Library modules only create named loggers; the CLI owns the handlers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


class TTSumCLI:
    """
    CLI wrapper that translates user commands into engine runs.
    """

    def __init__(self, out: Optional[Console] = None):
        self.console = out or console
        self.parser = argparse.ArgumentParser(
            prog="ttsum",
            description="ttsum helps summarize tainted nodes and tolerating resources",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _add_common_args(self, sub: argparse.ArgumentParser, subject: str, fmt: str):
        sub.add_argument("--kubeconfig", help="Path to kubeconfig")
        sub.add_argument("-f", "--from-file", dest="from_file",
                         help="Read objects from a YAML file or directory instead of the cluster")
        sub.add_argument("-o", "--output", choices=OUTPUT_FORMATS, default=OUTPUT_TABLE,
                         help="Output format (default: table)")
        sub.add_argument("--verbose", action="store_true", help="Enable debug logging")

        selectors = sub.add_mutually_exclusive_group()
        selectors.add_argument("--match", default="", help=MATCH_HELP.format(subject, fmt))
        selectors.add_argument("--no-match", dest="no_match", default="",
                               help=NO_MATCH_HELP.format(subject, fmt))

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version=f"ttsum v{__version__}")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        taints_parser = subparsers.add_parser(
            COMMAND_TAINTS,
            help="Summarize taints for nodes, and whether they match a taint",
            description="For example; $ ttsum taints --match key=value:NoSchedule",
        )
        self._add_common_args(taints_parser, "taint", "key=value:effect")

        tol_parser = subparsers.add_parser(
            COMMAND_TOLERATIONS,
            help="Summarize tolerations for a resource",
            description="For example; $ ttsum tolerations apps/v1 deployments --namespace kube-system",
        )
        tol_parser.add_argument("api_version", nargs="?", help="API version, e.g. apps/v1")
        tol_parser.add_argument("resource", nargs="?", help="Resource name, e.g. deployments")
        tol_parser.add_argument("-n", "--namespace", default="",
                                help="Target a specific namespace, defaults to all namespaces")
        self._add_common_args(tol_parser, "toleration", "Operator(key=value:effect)")

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit code."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)
        if not args.command:
            self.parser.print_help()
            return 0

        configure_logging(getattr(args, "verbose", False))
        try:
            cfg = RunConfig.from_args(args)
            results = SummaryEngine(cfg).run()
        except TTSumError as e:
            err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
            return 1

        SummaryFormatter(self.console).render(cfg.command, results, cfg.output)
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(TTSumCLI().run())
    except KeyboardInterrupt:
        err_console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
