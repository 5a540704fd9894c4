"""Interactive prompts for the create command.

Each prompt returns a plain value so the provisioning code never deals with
terminal input.
"""
from typing import List, Sequence, TypeVar

import typer
from rich.console import Console

from kangapp.core.template_loader import TemplateLoader
from kangapp.services.toolchain import PACKAGE_MANAGERS

T = TypeVar("T")

console: Console = Console()


def select(question: str, options: Sequence[T], labels: List[str]) -> T:
    """Show a numbered menu and return the chosen option."""
    if not options:
        raise ValueError(f"No options to choose from for: {question}")

    console.print(f"[bold cyan]?[/bold cyan] {question}")
    for index, label in enumerate(labels, start=1):
        console.print(f"  [cyan]{index}[/cyan]) {label}")

    while True:
        choice = typer.prompt("Select", default=1, type=int)
        if 1 <= choice <= len(options):
            return options[choice - 1]
        console.print(f"[red]Please enter a number between 1 and {len(options)}[/red]")


def prompt_template(template_loader: TemplateLoader) -> str:
    """Prompt user to choose a project template; returns its name."""
    catalog = template_loader.load_catalog()
    names = list(catalog.templates)
    labels = [
        f"{catalog.templates[name].label} [dim]({name})[/dim]"
        for name in names
    ]
    return select("Choose a template", names, labels)


def prompt_package_manager() -> str:
    """Prompt user to choose a package manager."""
    managers = list(PACKAGE_MANAGERS)
    return select("Choose a package manager", managers, managers)


def prompt_lint() -> bool:
    """Prompt user whether to add ESLint + Prettier."""
    return typer.confirm("Add lint config (ESLint, Prettier)?", default=True)
