"""Shared helpers for skel.

Provides the Rich consoles used for all user-facing output, small message
helpers, and the async subprocess runner used by the build step.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------

def _describe(cmd: str | list[str]) -> str:
    return cmd if isinstance(cmd, str) else " ".join(cmd)

def _decode(raw: bytes | None) -> str:
    return (raw or b"").decode("utf-8", errors="replace").strip()

async def _spawn(
    cmd: str | list[str], cwd: str | Path | None, env: dict[str, str] | None, capture: bool
) -> asyncio.subprocess.Process:
    pipe = asyncio.subprocess.PIPE if capture else None
    options = {
        "stdout": pipe,
        "stderr": pipe,
        "cwd": str(cwd) if cwd else None,
        "env": {**os.environ, **env} if env else None,
    }
    if isinstance(cmd, str):
        return await asyncio.create_subprocess_shell(cmd, **options)
    return await asyncio.create_subprocess_exec(*cmd, **options)

async def run_command(
    cmd: str | list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a child process and wait for it.

    A list is executed directly; a string goes through the shell.

    Args:
        cmd: Argument list or shell command string.
        cwd: Working directory for the child, or ``None`` to inherit ours.
        timeout: Seconds to wait before the child is killed.
        capture: Collect stdout/stderr.  With ``False`` the child writes
            straight to our terminal and both strings come back empty.
        env: Extra environment variables layered over ``os.environ``.

    Returns:
        ``(returncode, stdout, stderr)`` with the output stripped.  A timeout
        is reported as returncode ``-1`` with the reason in stderr.
    """
    process = await _spawn(cmd, cwd, env, capture)
    try:
        out, err = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return -1, "", f"Command timed out after {timeout}s: {_describe(cmd)}"

    return process.returncode or 0, _decode(out), _decode(err)

# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------

def print_summary_table(
    data: dict[str, str], title: str = "Summary", columns: tuple[str, str] = ("Item", "Value")
) -> None:
    """Print a two-column key/value table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column(columns[0], style="dim", no_wrap=True)
    table.add_column(columns[1])

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)

def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")

def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")

def print_error(message: str) -> None:
    """Print a red error message to stderr.

    The message is printed without markup parsing so paths and TOML snippets
    containing brackets come through intact.
    """
    err_console.print(message, style="bold red", markup=False, highlight=False)
