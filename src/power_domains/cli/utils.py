"""Shared utilities for CLI commands."""

from __future__ import annotations

import sys
import traceback
from pathlib import Path
from typing import TYPE_CHECKING

from power_domains.exceptions import PowerDomainError

if TYPE_CHECKING:
    from rich.console import Console

    from power_domains.loader import Design

__all__ = ["format_error", "print_error", "get_error_console", "load_or_report"]

# Module-level console for error output, created lazily
_error_console: Console | None = None


def get_error_console() -> Console:
    """Get or create the Rich console for error output.

    Returns a console configured for stderr with appropriate settings.
    The console is created lazily and cached for reuse.
    """
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None)
    return _error_console


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
) -> None:
    """
    Print an exception with Rich formatting when available.

    Uses Rich console for colored error output on TTY terminals,
    falls back to plain text for non-TTY (pipes, JSON mode, etc.).

    Args:
        e: The exception to print
        verbose: If True, include full stack trace
        use_rich: Override automatic TTY detection (None = auto-detect)
    """
    console = get_error_console()

    if use_rich is None:
        use_rich = console.is_terminal

    if verbose:
        # Always use plain text for stack traces
        print(traceback.format_exc(), file=sys.stderr)
        return

    if use_rich:
        from rich.markup import escape

        console.print(f"[bold red]Error:[/bold red] {escape(_describe(e))}")
    else:
        print(format_error(e), file=sys.stderr)


def format_error(e: Exception, verbose: bool = False) -> str:
    """
    Format an exception for user-friendly display (plain text).

    Args:
        e: The exception to format
        verbose: If True, include full stack trace

    Returns:
        Formatted error message string
    """
    if verbose:
        return traceback.format_exc()

    return f"Error: {_describe(e)}"


def _describe(e: Exception) -> str:
    if isinstance(e, (PowerDomainError, FileNotFoundError)):
        return str(e)

    # For other exceptions, show type and message
    return f"{type(e).__name__}: {e}"


def load_or_report(path: str | Path) -> Design | None:
    """Load a declaration file, printing the error and returning None on failure."""
    from power_domains.loader import load_design

    try:
        return load_design(path)
    except (PowerDomainError, FileNotFoundError) as e:
        print_error(e)
        return None
