#!/usr/bin/env python3
"""kangapp CLI - Scaffold web projects from templates."""

import typer
from rich.console import Console

from kangapp import __version__
from kangapp.cli_create_commands import register_create_commands
from kangapp.core.logger import get_logger

app = typer.Typer(
    name="kang",
    help="""kangapp - Scaffold web projects from templates

Copies a template, installs dependencies and sets up linting.

Quick start:
  kang templates                       # Browse templates
  kang create my-app                   # Interactive setup
  kang create my-app -t next-ts -p npm # Skip the questions

More commands: kang --help
""",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)

register_create_commands(app, console)


@app.command()
def version():
    """Show kangapp version."""
    console.print(f"kangapp v{__version__}")


if __name__ == "__main__":
    app()
