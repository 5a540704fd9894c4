"""Create CLI commands - create, templates."""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from kangapp import cli_prompts
from kangapp.cli_support import (
    confirm_action,
    handle_cli_error,
    is_mock,
    print_error,
    print_success,
    print_warning,
    project_variables,
    setup_logging,
    slugify,
)
from kangapp.core.config import get_config
from kangapp.core.logger import get_logger
from kangapp.core.pipeline import Pipeline, PipelineAbortError, StageReport, StageState
from kangapp.core.reporter import format_summary, summarize
from kangapp.core.stages import ProvisionOptions, build_stages
from kangapp.core.template_loader import TemplateLoader, TemplateNotFoundError
from kangapp.services.process import ProcessGateway
from kangapp.services.toolchain import UnknownPackageManagerError, validate_package_manager

# Module-level instances (will be set by register function)
console: Console = Console()
template_loader: Optional[TemplateLoader] = None
logger = get_logger(__name__)


def _loader() -> TemplateLoader:
    global template_loader
    if template_loader is None:
        template_loader = TemplateLoader(get_config().templates_dir)
    return template_loader


def print_stage_report(report: StageReport) -> None:
    """Render one pipeline progress event."""
    if report.state == StageState.ENABLED:
        console.print(f"[cyan]…[/cyan] {report.title}")
    elif report.state == StageState.SUCCEEDED:
        print_success(console, report.title)
    elif report.state == StageState.FAILED:
        print_error(console, f"{report.title}: {report.error_detail}")
    elif report.error_detail:
        # Disabled stages carry no detail and are not shown
        console.print(f"[dim]↓ {report.title} ({report.error_detail})[/dim]")


def _print_templates() -> None:
    loader = _loader()
    catalog = loader.load_catalog()
    console.print("[cyan]Available templates:[/cyan]\n")
    for name, template in catalog.templates.items():
        console.print(f"  [bold]{name}[/bold]  {template.label} [dim]({template.kind})[/dim]")
        console.print(f"    {loader.get_template_info(name)}\n")


def templates():
    """List available project templates."""
    _print_templates()


def create(
    directory: str = typer.Argument(
        ".", help="Project directory (defaults to the current directory)"
    ),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help="Template to use (e.g., next-ts, vite-ts)"
    ),
    package_manager: Optional[str] = typer.Option(
        None, "--package-manager", "-p", help="Package manager (npm, yarn, pnpm)"
    ),
    lint: Optional[bool] = typer.Option(
        None, "--lint/--no-lint", help="Add ESLint + Prettier config and run them"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    list_templates: bool = typer.Option(
        False, "--list-templates", "-l", help="List available templates and exit"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write a log file"),
):
    """Create a new project from a template.

    Copies the template, fills in the project name, installs dependencies
    and optionally sets up ESLint + Prettier.

    Examples:
        kang create my-app                       # Interactive
        kang create my-app --template next-ts    # Pick the template up front
        kang create my-app -t vite-ts -p pnpm --no-lint
    """
    if list_templates:
        _print_templates()
        return

    setup_logging(log_file=log_file, verbose=verbose)
    config = get_config()
    loader = _loader()
    cwd = Path.cwd()
    project_dir = (cwd / directory).resolve()

    try:
        if project_dir.exists() and not project_dir.is_dir():
            raise NotADirectoryError(f"{project_dir} exists and is not a directory")

        if template is None:
            template = cli_prompts.prompt_template(loader)
        selected = loader.load_template(template)

        if package_manager is None:
            package_manager = cli_prompts.prompt_package_manager()
        validate_package_manager(package_manager)
    except (TemplateNotFoundError, UnknownPackageManagerError) as e:
        handle_cli_error(e, console, verbose=verbose, exit_code=2)
    except (FileNotFoundError, NotADirectoryError, ValueError) as e:
        handle_cli_error(e, console, verbose=verbose)

    if lint is None:
        lint = cli_prompts.prompt_lint()

    if project_dir.exists() and any(project_dir.iterdir()):
        print_warning(console, f"{project_dir} is not empty")
        if not confirm_action("Continue and write into it?", yes_flag=yes, mock=is_mock()):
            raise typer.Exit(0)

    project_name = slugify(project_dir.name)
    options = ProvisionOptions(
        project_dir=project_dir,
        template=selected,
        package_manager=package_manager,
        lint=lint,
        variables=project_variables(project_name),
        configs_dir=loader.configs_dir,
        gateway=ProcessGateway(mock=is_mock(), timeout=config.process_timeout),
        config=config,
    )

    logger.debug(
        f"Creating {project_name} from {selected.name} in {project_dir} "
        f"(package manager: {package_manager}, lint: {lint})"
    )

    console.print()
    pipeline = Pipeline(observer=print_stage_report)
    try:
        context = pipeline.run(build_stages(options))
    except PipelineAbortError as e:
        handle_cli_error(e, console, verbose=verbose)

    summary = summarize(context, selected, [package_manager], project_dir, cwd=cwd)
    console.print(format_summary(summary))


def register_create_commands(
    app: typer.Typer,
    shared_console: Console,
    shared_template_loader: Optional[TemplateLoader] = None,
):
    """Register create commands with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
        shared_template_loader: Preconfigured template loader (optional)
    """
    global console, template_loader
    console = shared_console
    cli_prompts.console = shared_console
    if shared_template_loader is not None:
        template_loader = shared_template_loader

    app.command()(create)
    app.command()(templates)


