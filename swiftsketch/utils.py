"""Shared utility functions for SwiftSketch.

Provides async command execution, the Xcode version probe, and Rich-based
console output.  Command execution never raises for a non-zero exit status;
callers decide whether a failure is fatal.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from rich.console import Console
from rich.table import Table

from swiftsketch.config import DEFAULT_XCODE_VERSION

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run an executable asynchronously and capture its output.

    Args:
        cmd: Executable and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A timeout is reported as
        return code ``-1`` with an explanatory stderr.

    Raises:
        OSError: If the executable cannot be started (e.g. not installed).
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
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
# Xcode version probe
# ---------------------------------------------------------------------------


def parse_xcode_version(output: str) -> str | None:
    """Extract the version from ``xcodebuild -version`` output.

    Examples::

        parse_xcode_version("Xcode 16.2\\nBuild version 16C5032a") -> "16.2"
        parse_xcode_version("") -> None
    """
    lines = output.strip().splitlines()
    if not lines:
        return None
    words = lines[0].split()
    if not words:
        return None
    return words[-1]


async def probe_xcode_version(xcodebuild: str = "xcodebuild", timeout: int = 30) -> str:
    """Return the installed Xcode version, or ``DEFAULT_XCODE_VERSION``.

    Never raises: a missing tool, a non-zero exit or unparsable output all
    fall back to the default.
    """
    try:
        code, stdout, _ = await run_command([xcodebuild, "-version"], timeout=timeout)
    except OSError:
        return DEFAULT_XCODE_VERSION
    if code != 0:
        return DEFAULT_XCODE_VERSION
    return parse_xcode_version(stdout) or DEFAULT_XCODE_VERSION


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


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


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_step(message: str) -> None:
    """Print an indented progress line (verbose mode)."""
    console.print(f"  [dim]-[/dim] {message}")
