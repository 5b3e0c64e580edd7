"""Shared utility functions for setupdoc.

Provides the Rich console used for all diagnostic output, a handful of
formatting helpers, and the small asynchronous environment probes that
capability providers and the generator run before composing a document.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Environment probes
# ---------------------------------------------------------------------------

#: Lockfile name -> package manager, checked in order.
LOCKFILES: dict[str, str] = {
    "bun.lockb": "bun",
    "pnpm-lock.yaml": "pnpm",
    "yarn.lock": "yarn",
    "package-lock.json": "npm",
}


async def command_available(name: str) -> bool:
    """Return ``True`` if an executable called *name* is on ``PATH``.

    The lookup runs in the default executor so it never blocks the event
    loop.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, lambda: shutil.which(name) is not None)


async def detect_package_manager(project_root: str | Path | None) -> str | None:
    """Detect the Node.js package manager in use under *project_root*.

    Looks for well-known lockfiles (see :data:`LOCKFILES`).  Returns ``None``
    when *project_root* is ``None``, is not a directory, or has no lockfile.
    """
    if project_root is None:
        return None

    root = Path(project_root)

    def _probe() -> str | None:
        if not root.is_dir():
            return None
        for lockfile, manager in LOCKFILES.items():
            if (root / lockfile).is_file():
                return manager
        return None

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _probe)


async def find_existing_files(
    project_root: str | Path | None, names: list[str]
) -> list[str]:
    """Return the subset of *names* that already exist under *project_root*.

    Order follows *names*.  An unset or missing root yields an empty list.
    """
    if project_root is None:
        return []

    root = Path(project_root)

    def _probe() -> list[str]:
        if not root.is_dir():
            return []
        return [name for name in names if (root / name).exists()]

    return await asyncio.to_thread(_probe)


async def read_text(path: str | Path) -> str:
    """Read a UTF-8 text file without blocking the event loop."""
    return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Keys and values are printed literally, never parsed as Rich markup.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
