"""Shared utility functions for the FHEVM example tools.

Provides async command execution, file-system helpers that turn OS errors
into :class:`FilesystemError`, name helpers, and Rich-based console output.
"""

from __future__ import annotations

import asyncio
import re
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

if TYPE_CHECKING:
    from fhevm_examples.registry import ExampleRegistry

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ExampleToolError(Exception):
    """Base class for every fatal error reported by the command-line tools."""


class FilesystemError(ExampleToolError):
    """Raised when a file-system operation fails for a specific path."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: float = 30.0,
) -> tuple[int, str, str]:
    """Run a command asynchronously.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A timeout is reported as
        returncode ``-1`` with an explanatory stderr.

    Raises:
        FileNotFoundError: If the program is not installed.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return -1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}"

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return process.returncode or 0, stdout_str, stderr_str


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def to_pascal_case(name: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``.

    Examples::

        to_pascal_case("fhe-counter") -> "FheCounter"
        to_pascal_case("transportation-dispatch") -> "TransportationDispatch"
    """
    parts = re.split(r"[-_\s]+", name)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Raises:
        FilesystemError: If the directory cannot be created, e.g. because a
            regular file already occupies the path.
    """
    dir_path = Path(path)
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
    except FileExistsError as exc:
        raise FilesystemError(dir_path, "Path exists and is not a directory") from exc
    except OSError as exc:
        raise FilesystemError(dir_path, f"Cannot create directory ({exc.strerror})") from exc
    return dir_path


def write_text(path: str | Path, content: str) -> Path:
    """Create parent dirs and write *content* as UTF-8 without newline translation."""
    file_path = Path(path)
    ensure_dir(file_path.parent)
    try:
        with file_path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except OSError as exc:
        raise FilesystemError(file_path, f"Cannot write file ({exc.strerror})") from exc
    return file_path


def copy_file(src: str | Path, dest: str | Path) -> Path:
    """Copy *src* to *dest* byte-for-byte, creating parent directories."""
    dest_path = Path(dest)
    ensure_dir(dest_path.parent)
    try:
        shutil.copyfile(src, dest_path)
    except OSError as exc:
        raise FilesystemError(dest_path, f"Cannot copy {src} ({exc.strerror})") from exc
    return dest_path


async def write_text_async(path: str | Path, content: str) -> Path:
    """Thread-pool wrapper around :func:`write_text`."""
    return await asyncio.to_thread(write_text, path, content)


async def copy_file_async(src: str | Path, dest: str | Path) -> Path:
    """Thread-pool wrapper around :func:`copy_file`."""
    return await asyncio.to_thread(copy_file, src, dest)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str) -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold bright_cyan]{escape(title)}[/bold bright_cyan]", style="bright_cyan"))
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}", soft_wrap=True)


def print_error(message: str) -> None:
    """Print a red error message on stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)


def print_examples_table(registry: ExampleRegistry, *, to_stderr: bool = False) -> None:
    """Print every registered example (id, title, category, description).

    Ids are always printed in full, one per row, in registry order.
    """
    descriptors = registry.list_all()
    id_width = max((len(d.id) for d in descriptors), default=2)

    table = Table(title="Available Examples", show_header=True, header_style="bold cyan")
    table.add_column("Id", style="bold", no_wrap=True, min_width=id_width)
    table.add_column("Title")
    table.add_column("Category", style="dim", no_wrap=True)
    table.add_column("Description")

    for descriptor in descriptors:
        table.add_row(
            escape(descriptor.id),
            escape(descriptor.title),
            escape(descriptor.category),
            escape(descriptor.description),
        )

    target = err_console if to_stderr else console
    target.print(table)
    target.print()


def print_valid_ids(registry: ExampleRegistry) -> None:
    """Print the plain list of valid example ids on stderr, one per line."""
    err_console.print("Valid example ids:")
    for example_id in registry.ids():
        err_console.print(f"  - {escape(example_id)}", soft_wrap=True)
