"""CLI commands using Typer."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from flyfs import __version__
from flyfs.config import load_config
from flyfs.context import create_filesystem
from flyfs.display import Display
from flyfs.errors import FilesystemError
from flyfs.filesystem import Filesystem
from flyfs.virtual import VirtualResolver

app = typer.Typer(
    name="flyfs",
    help="Inspect and manipulate real or virtual filesystems",
    no_args_is_help=True,
)

console = Console()
display = Display(console)

# Global options set by the main callback
_options: dict[str, Any] = {}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"flyfs v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Configuration file (YAML or JSON)")
    ] = None,
    cwd: Annotated[str | None, typer.Option("--cwd", help="Working directory to resolve against")] = None,
    root: Annotated[
        list[str] | None,
        typer.Option("--root", "-r", help="Virtual root directory (repeatable)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log filesystem calls")] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Inspect and manipulate real or virtual filesystems."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _options.update(config=config, cwd=cwd, roots=root or [])


def _filesystem(context: Filesystem | None) -> Filesystem:
    """Return the injected filesystem or build one from the global options.

    Raises:
        typer.Exit: If the configuration can't be loaded.
    """
    if context is not None:
        return context

    overrides: dict[str, Any] = {}
    if _options.get("cwd"):
        overrides["cwd"] = _options["cwd"]
    if _options.get("roots"):
        overrides["roots"] = _options["roots"]
    try:
        settings = load_config(_options.get("config"))
        fs = create_filesystem(settings.model_copy(update=overrides))
    except (FileNotFoundError, ValueError) as e:
        display.show_error(f"Invalid configuration: {e}")
        raise typer.Exit(1) from e

    if isinstance(fs.resolver, VirtualResolver):
        for root in fs.resolver.roots:
            if not os.path.isdir(root):
                display.show_warning(f"Virtual root {root} is not a directory")
    return fs


# ============================================================================
# Inspection Commands
# ============================================================================


@app.command("ls")
def ls(
    path: Annotated[str, typer.Argument(help="Directory to list")] = ".",
    all_entries: Annotated[
        bool, typer.Option("--all", "-a", help="Include current and parent entries")
    ] = False,
    _context=None,
) -> None:
    """List a directory."""
    fs = _filesystem(_context)
    directory = fs.directory(path)

    try:
        names = directory.read(include_dotted=all_entries)
    except FilesystemError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e

    tokens = (fs.current_token, fs.parent_token)
    dotted = [name for name in names if name in tokens]
    entries = [directory.child(name) for name in names if name not in tokens]
    display.show_listing(entries, dotted=dotted)


@app.command("tree")
def tree(
    path: Annotated[str, typer.Argument(help="Directory to start from")] = ".",
    depth: Annotated[int | None, typer.Option("--depth", "-d", help="Levels to descend")] = None,
    files: Annotated[bool, typer.Option("--files/--no-files", help="Include files")] = True,
    dirs: Annotated[bool, typer.Option("--dirs/--no-dirs", help="Include directories")] = True,
    include: Annotated[
        list[str] | None, typer.Option("--include", "-i", help="Only show names matching glob")
    ] = None,
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-x", help="Hide names matching glob")
    ] = None,
    _context=None,
) -> None:
    """Show a directory tree."""
    fs = _filesystem(_context)
    start = fs.directory(path)

    try:
        visitor = start.visit(
            files=files,
            dirs=dirs,
            depth=depth,
            include=include or [],
            exclude=exclude or [],
        )
        entries = visitor.collect()
    except (ValueError, FilesystemError) as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e

    display.show_tree(start, entries)


@app.command("stat")
def stat(
    path: Annotated[str, typer.Argument(help="Path to inspect")],
    _context=None,
) -> None:
    """Show metadata for a path."""
    fs = _filesystem(_context)

    try:
        info = fs.stat_path(path)
    except FilesystemError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e

    display.show_stat(path, info)


@app.command("cat")
def cat(
    path: Annotated[str, typer.Argument(help="File to print")],
    _context=None,
) -> None:
    """Print the content of a file."""
    fs = _filesystem(_context)

    try:
        text = fs.read_file(path)
    except FilesystemError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e

    display.show_content(text)


@app.command("resolve")
def resolve(
    path: Annotated[str, typer.Argument(help="Path to resolve")],
    base: Annotated[str | None, typer.Option("--base", "-b", help="Base for the relative form")] = None,
    _context=None,
) -> None:
    """Show the canonical, absolute, relative and definitive forms of a path."""
    fs = _filesystem(_context)

    try:
        absolute = fs.absolute(path)
        forms = {
            "canonical": fs.canonical(path),
            "absolute": absolute,
            "collapsed": fs.collapse_directory(absolute),
            "relative": fs.relative(path, base),
            "definitive": fs.definitive(path),
        }
    except FilesystemError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e

    display.show_resolution(path, forms)


# ============================================================================
# Modification Commands
# ============================================================================


@app.command("touch")
def touch(
    path: Annotated[str, typer.Argument(help="File to create or touch")],
    _context=None,
) -> None:
    """Create a file or update its modification time."""
    fs = _filesystem(_context)

    try:
        fs.touch_file(path)
    except FilesystemError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e

    display.show_success(f"Touched {fs.absolute(path)}")


@app.command("mkdir")
def mkdir(
    path: Annotated[str, typer.Argument(help="Directory to create")],
    _context=None,
) -> None:
    """Create a directory and any missing parents."""
    fs = _filesystem(_context)

    if fs.directory_exists(path):
        display.show_info(f"{fs.absolute(path)} already exists")
        return

    try:
        fs.create_directory(path)
    except FilesystemError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e

    display.show_success(f"Created {fs.absolute(path)}")


@app.command("rm")
def rm(
    path: Annotated[str, typer.Argument(help="File or directory to delete")],
    recursive: Annotated[
        bool, typer.Option("--recursive", "-r", help="Delete directories and their content")
    ] = False,
    _context=None,
) -> None:
    """Delete a file, or a directory with --recursive."""
    fs = _filesystem(_context)

    if fs.directory_exists(path) and not recursive:
        display.show_error(f"{fs.absolute(path)} is a directory (use --recursive)")
        raise typer.Exit(1)

    try:
        if fs.directory_exists(path):
            fs.delete_directory(path)
        else:
            fs.delete_file(path)
    except FilesystemError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e

    display.show_success(f"Deleted {fs.absolute(path)}")


if __name__ == "__main__":
    app()
