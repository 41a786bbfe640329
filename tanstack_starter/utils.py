"""Shared console and shell helpers for tanstack-starter.

All user-facing output goes through the module-level Rich ``console`` so tests
can swap it for a recording console.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from rich.console import Console
from rich.rule import Rule
from rich.table import Table
from rich.tree import Tree

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_banner(title: str) -> None:
    """Print the tool banner as a full-width rule."""
    console.print()
    console.print(Rule(f"[bold cyan]{title}[/bold cyan]", style="cyan"))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_file_tree(root_name: str, paths: list[str]) -> None:
    """Render relative POSIX paths as a directory tree."""
    tree = Tree(f"[bold]{root_name}/[/bold]")
    branches: dict[str, Tree] = {"": tree}
    for path in sorted(paths):
        parts = path.split("/")
        for depth in range(1, len(parts)):
            key = "/".join(parts[:depth])
            if key not in branches:
                parent = branches["/".join(parts[: depth - 1])]
                branches[key] = parent.add(f"[bold blue]{parts[depth - 1]}/[/bold blue]")
        branches["/".join(parts[:-1])].add(parts[-1])
    console.print(tree)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


# ---------------------------------------------------------------------------
# Git
# ---------------------------------------------------------------------------


def init_git_repository(path: str | Path) -> bool:
    """Run ``git init`` inside *path*.

    Returns:
        ``True`` on success.  A missing ``git`` executable or a failing
        ``git init`` is reported as a warning and returns ``False``; the
        generated project is complete either way.
    """
    try:
        subprocess.run(
            ["git", "init"],
            cwd=str(path),
            check=True,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        print_warning("git not found on PATH; skipped repository initialisation.")
        return False
    except subprocess.CalledProcessError as exc:
        print_warning(f"git init failed: {exc.stderr.strip() or exc}")
        return False
    return True
