"""Display service for repository views"""
import json
from itertools import groupby
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from git_repo_keeper.constants import COLUMNS
from git_repo_keeper.formatters import styled_status
from git_repo_keeper.models.repository import RepositoryView
from git_repo_keeper.models.scan import ScanResult
from git_repo_keeper.logging_config import get_logger

logger = get_logger(__name__)


def make_console(color_mode: str = "always") -> Console:
    """Create a rich Console honouring the configured color mode."""
    if color_mode == "never":
        return Console(no_color=True, highlight=False)
    if color_mode == "compatibility":
        return Console(force_terminal=True, color_system="standard", highlight=False)
    return Console(force_terminal=True, highlight=False)


class DisplayService:
    def __init__(
        self,
        display_mode: str = "standard",
        color_mode: str = "always",
        console: Optional[Console] = None,
    ):
        self.display_mode = display_mode
        self.console = console or make_console(color_mode)

    def display(self, result: ScanResult) -> None:
        """Render a scan result in the configured display mode."""
        if self.display_mode == "json":
            self.display_json(result)
        elif self.display_mode == "classic":
            self.display_classic(result)
        else:
            self.display_standard(result)

        for failure in result.failures:
            logger.error(f"Could not read {failure.path}: {failure.error}")

    def display_json(self, result: ScanResult) -> None:
        payload = [view.to_dict() for view in result.views]
        # Raw output: rich markup, emoji codes and highlighting would corrupt the JSON
        self.console.out(json.dumps(payload, indent=2), highlight=False)

    def display_classic(self, result: ScanResult) -> None:
        table = Table()
        for col in COLUMNS:
            if col.width:
                table.add_column(col.label, min_width=col.width)
            else:
                table.add_column(col.label)

        for view in result.views:
            # Text cells, so names like "project[old]" are not parsed as markup
            table.add_row(
                Text(view.name),
                styled_status(view.status),
                Text(view.branch),
                Text(view.url or "none"),
            )

        self.console.print(table)

    def display_standard(self, result: ScanResult) -> None:
        """Group repositories by parent directory, submodules indented below."""
        first = True
        for parent, views in groupby(result.views, key=lambda v: v.parent):
            if not first:
                self.console.print()
            first = False
            self.console.print(Text(parent or "/", style="bold"))
            for view in views:
                self._print_repository(view)

    def _print_repository(self, view: RepositoryView) -> None:
        line = Text("  ")
        line.append(view.name, style="bold")
        line.append(" ~ ")
        line.append_text(styled_status(view.status))
        line.append(" ~ ")
        line.append(view.branch, style="cyan")
        self.console.print(line)

        self.console.print(Text(f"    {view.url or 'none'}", style="dim"))
        if view.email:
            self.console.print(Text(f"    {view.email}", style="dim"))

        for submodule in view.submodules:
            sub_line = Text("    ↳ ")
            sub_line.append(submodule.name)
            sub_line.append(" ~ ")
            sub_line.append_text(styled_status(submodule.status))
            sub_line.append(" ~ ")
            sub_line.append(submodule.branch, style="cyan")
            self.console.print(sub_line)
