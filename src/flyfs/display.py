"""Console rendering for the flyfs command line."""

from __future__ import annotations

import stat as stat_module
from datetime import datetime
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from flyfs.entities import Directory, Path
    from flyfs.types import StatResult


def _timestamp(value: float) -> str:
    return datetime.fromtimestamp(value).strftime("%Y-%m-%d %H:%M:%S")


def _style(entity: Path) -> str:
    from flyfs.entities import Directory, File

    if isinstance(entity, Directory):
        return "bold blue"
    if isinstance(entity, File):
        return ""
    return "magenta"


class Display:
    """Rich output helpers for the command line."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize display.

        Args:
            console: Console to print to. Defaults to standard output.
        """
        self.console = console or Console()

    def show_listing(
        self, entries: list[Path], title: str | None = None, dotted: list[str] | None = None
    ) -> None:
        """Display directory entries one per line, directories highlighted.

        Args:
            entries: Entities to list.
            title: Optional heading.
            dotted: Current/parent tokens to list before the entries.
        """
        if title:
            self.console.print(f"[bold]{title}[/bold]")
        for token in dotted or []:
            self.console.print(token, style="bold blue", markup=False)
        if not entries and not dotted:
            self.console.print("[yellow]Empty directory[/yellow]")
            return
        for entry in entries:
            suffix = entry.filesystem.separator if _style(entry) == "bold blue" else ""
            self.console.print(f"{entry.name}{suffix}", style=_style(entry) or None, markup=False)

    def show_tree(self, start: Directory, entries: list[Path]) -> None:
        """Display visited entries as a tree below start.

        Entries whose parent was not itself collected hang off the top node
        with their path relative to start.
        """
        root = Tree(f"[bold blue]{start.path}[/bold blue]")
        nodes: dict[str, Tree] = {start.path: root}
        for entry in entries:
            parent = nodes.get(entry.dirname)
            if parent is None:
                parent, label = root, entry.relative(start.absolute())
            else:
                label = entry.name
            style = _style(entry)
            nodes[entry.path] = parent.add(f"[{style}]{label}[/{style}]" if style else label)
        self.console.print(root)

    def show_stat(self, path: str, info: StatResult) -> None:
        """Display metadata for a path.

        Args:
            path: Path as given by the user.
            info: Fresh stat result.
        """
        table = Table(title=path, show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Type", info.kind.value)
        table.add_row("Size", str(info.size))
        table.add_row("Mode", stat_module.filemode(info.mode))
        table.add_row("Permissions", oct(info.permissions))
        table.add_row("Owner", f"{info.uid}:{info.gid}")
        table.add_row("Links", str(info.links))
        table.add_row("Modified", _timestamp(info.modified))
        table.add_row("Accessed", _timestamp(info.accessed))
        table.add_row("Changed", _timestamp(info.changed))
        flags = [
            name
            for name, value in (
                ("readable", info.readable),
                ("writable", info.writable),
                ("executable", info.executable),
                ("owned", info.owned),
            )
            if value
        ]
        table.add_row("Access", ", ".join(flags) or "none")

        self.console.print(table)

    def show_resolution(self, path: str, forms: dict[str, str]) -> None:
        """Display the different resolved forms of a path."""
        table = Table(title=f"Resolution of {path}")
        table.add_column("Form", style="cyan")
        table.add_column("Path")
        for form, value in forms.items():
            table.add_row(form, value)
        self.console.print(table)

    def show_content(self, text: str) -> None:
        """Print file content verbatim."""
        self.console.print(text, end="", markup=False, highlight=False)

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_info(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message.
        """
        self.console.print(f"[blue]i[/blue] {message}")
