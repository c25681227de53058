#!/usr/bin/env python3
"""
TTSUM RUN CONFIGURATION
-----------------------
Immutable settings for one invocation, built once from parsed command-line
arguments and passed into the engine.

Author: TTSum Team
Date: 2026-10-19
"""

import argparse
from dataclasses import dataclass
from typing import Optional, Tuple

from ttsum.core.errors import UsageError

COMMAND_TAINTS = "taints"
COMMAND_TOLERATIONS = "tolerations"

OUTPUT_TABLE = "table"
OUTPUT_YAML = "yaml"
OUTPUT_FORMATS = (OUTPUT_TABLE, OUTPUT_YAML)


@dataclass(frozen=True)
class RunConfig:
    command: str
    api_version: str = ""           # tolerations only, e.g. apps/v1
    resource: str = ""              # tolerations only, e.g. deployments
    namespace: str = ""             # empty means all namespaces
    match: str = ""
    no_match: str = ""
    kubeconfig_path: Optional[str] = None
    manifest_path: Optional[str] = None
    output: str = OUTPUT_TABLE
    verbose: bool = False

    def __post_init__(self):
        if self.match and self.no_match:
            raise UsageError("--match and --no-match are mutually exclusive arguments")
        if self.command == COMMAND_TOLERATIONS and not (self.api_version and self.resource):
            raise UsageError("must provide group/resource e.g. ttsum tolerations apps/v1 deployments")
        if self.output not in OUTPUT_FORMATS:
            raise UsageError(f"unsupported output format '{self.output}'")

    @property
    def match_expression(self) -> Optional[Tuple[str, bool]]:
        """(expression, keep_on_match), or None when no filter was requested."""
        if self.match:
            return self.match, True
        if self.no_match:
            return self.no_match, False
        return None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RunConfig":
        return cls(
            command=args.command,
            api_version=getattr(args, "api_version", None) or "",
            resource=getattr(args, "resource", None) or "",
            namespace=getattr(args, "namespace", None) or "",
            match=getattr(args, "match", None) or "",
            no_match=getattr(args, "no_match", None) or "",
            kubeconfig_path=getattr(args, "kubeconfig", None),
            manifest_path=getattr(args, "from_file", None),
            output=getattr(args, "output", None) or OUTPUT_TABLE,
            verbose=bool(getattr(args, "verbose", False)),
        )
