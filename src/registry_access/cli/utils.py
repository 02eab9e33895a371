"""Shared utilities for CLI commands."""

from __future__ import annotations

import logging
import sys
import traceback
from typing import TYPE_CHECKING

from registry_access.exceptions import RegistryAccessError

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["configure_logging", "format_error", "print_error", "get_error_console"]

# Module-level console for error output, created lazily
_error_console: Console | None = None


def get_error_console() -> Console:
    """Get or create the Rich console for error output.

    Returns a console configured for stderr. The console is created lazily
    and cached for reuse.
    """
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None)
    return _error_console


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging for a CLI run."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
) -> None:
    """
    Print an exception with Rich formatting when available.

    Uses a Rich console on TTY terminals and falls back to plain text for
    pipes and redirected output.

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

    if use_rich and isinstance(e, RegistryAccessError):
        console.print("Error:", style="bold red", end=" ")
        console.print(str(e), markup=False, highlight=False)
    else:
        print(format_error(e, verbose=False), file=sys.stderr)


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

    if isinstance(e, RegistryAccessError):
        return f"Error: {e}"

    return f"Error: {type(e).__name__}: {e}"
