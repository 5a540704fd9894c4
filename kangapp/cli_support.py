"""Shared utilities for kangapp CLI modules."""
from __future__ import annotations

import os
import re
import unicodedata
from typing import Dict, Optional

import typer
from rich.console import Console

DEFAULT_PROJECT_NAME = "app"


def is_mock() -> bool:
    """Return True when the CLI runs in mock mode (no external commands)."""
    return os.environ.get("KANG_MOCK") == "1"


def setup_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up console verbosity and, when asked for, file logging.

    Args:
        log_file: Path to log file (optional)
        verbose: Enable verbose logging
    """
    from kangapp.core.logger import set_console_level, setup_file_logging

    set_console_level(verbose)
    if log_file or verbose:
        setup_file_logging(log_file=log_file, verbose=verbose)


def slugify(value: str) -> str:
    """Turn a directory name into a package-name friendly slug.

    Examples:
        "My App" -> "my-app"
        "café_site!" -> "cafe_site"
    """
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^\w\s.-]", "", normalized).strip().lower()
    slug = re.sub(r"[\s]+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug).strip("-.")
    return slug or DEFAULT_PROJECT_NAME


def project_variables(project_name: str) -> Dict[str, str]:
    """Variables substituted into a new project's marked template files."""
    return {
        "name": project_name,
        "description": f"{project_name} project",
    }


def confirm_action(message: str, yes_flag: bool = False, mock: bool = False) -> bool:
    """Prompt user for confirmation unless --yes or mock mode.

    Args:
        message: Confirmation message to display
        yes_flag: Skip prompt if True (from --yes flag)
        mock: Skip prompt if True (mock mode)

    Returns:
        True if confirmed, False otherwise
    """
    if yes_flag or mock:
        return True
    return typer.confirm(message)


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {e}")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting."""
    console.print(f"[green]{prefix}[/green] {message}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting."""
    console.print(f"[red]{prefix}[/red] {message}")


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {message}")
