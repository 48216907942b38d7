"""Shared helpers for console output and file-system writes.

Output goes through Rich consoles: ``console`` for normal progress and
``err_console`` (stderr) for errors.  The file-system helpers translate
``OSError`` into ``ScaffoldFileSystemError`` so callers see the offending path.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .errors import ScaffoldFileSystemError

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def create_dir(path: str | Path) -> Path:
    """Create a directory and any missing parents.

    Raises:
        ScaffoldFileSystemError: If the directory cannot be created.
    """
    dir_path = Path(path)
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ScaffoldFileSystemError("create", dir_path, exc) from exc
    return dir_path


def write_file(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories first.

    Raises:
        ScaffoldFileSystemError: If a parent directory cannot be created or
            the file cannot be written.
    """
    file_path = Path(path)
    create_dir(file_path.parent)
    try:
        file_path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ScaffoldFileSystemError("write to", file_path, exc) from exc
    return file_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red ``error`` prefix followed by *message* on stderr."""
    err_console.print(f"[bold red]error[/bold red]: {escape(message)}", highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message on stderr."""
    err_console.print(f"[bold yellow]warning[/bold yellow]: {escape(message)}", highlight=False)


def print_summary_table(rows: list[tuple[str, ...]], columns: list[str], title: str) -> None:
    """Print a simple table with the given column headers."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    console.print(table)
