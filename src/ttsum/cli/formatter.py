# src/ttsum/cli/formatter.py
import io
from typing import Any, Dict, List, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text
from ruamel.yaml import YAML

from ttsum.core.config import COMMAND_TAINTS, OUTPUT_YAML
from ttsum.core.engine import TaintsResult, TolerationsResult
from ttsum.core.printer import format_taint, format_toleration

console = Console()


class SummaryFormatter:
    """
    SummaryFormatter: renders engine results for the terminal.
    Tables are borderless and left aligned so the output stays greppable.
    """

    def __init__(self, out: Console = None):
        self.console = out or console
        self.yaml = YAML(typ='rt')
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def _table(self, headers: Sequence[str]) -> Table:
        table = Table(
            box=None,
            show_edge=False,
            pad_edge=False,
            header_style="bold",
            padding=(0, 3, 0, 0),
        )
        for header in headers:
            table.add_column(header, justify="left", no_wrap=True)
        return table

    def taints_table(self, results: Sequence[TaintsResult]) -> Table:
        table = self._table(["NAME", "TAINTS"])
        for r in results:
            table.add_row(Text(r.name), Text(r.rendered))
        return table

    def tolerations_table(self, results: Sequence[TolerationsResult]) -> Table:
        table = self._table(["NAMESPACE", "NAME", "TOLERATIONS"])
        for r in results:
            table.add_row(Text(r.namespace), Text(r.name), Text(r.rendered))
        return table

    def to_yaml(self, command: str, results: Sequence[Any]) -> str:
        """Serializes the report using the same display strings as the table."""
        docs: List[Dict[str, Any]] = []
        for r in results:
            if command == COMMAND_TAINTS:
                docs.append({"name": r.name, "taints": [format_taint(t) for t in r.taints]})
            else:
                docs.append({
                    "namespace": r.namespace,
                    "name": r.name,
                    "tolerations": [format_toleration(t) for t in r.tolerations],
                })

        stream = io.StringIO()
        self.yaml.dump(docs, stream)
        return stream.getvalue()

    def render(self, command: str, results: Sequence[Any], output: str) -> None:
        if output == OUTPUT_YAML:
            self.console.print(self.to_yaml(command, results), end="",
                               markup=False, highlight=False, emoji=False, soft_wrap=True)
            return

        if command == COMMAND_TAINTS:
            self.console.print(self.taints_table(results))
        else:
            self.console.print(self.tolerations_table(results))
