"""Final summary of a provisioning run."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional

from kangapp.models.template import Template
from kangapp.services import toolchain


@dataclass(frozen=True)
class Summary:
    """What the user needs to start working on the new project.

    Attributes:
        relative_project_path: Project path relative to the working directory ("" if identical)
        dev_command: Command starting the dev server ("" if none applies)
        package_manager: Package manager whose install succeeded, if any
    """

    relative_project_path: str
    dev_command: str = ""
    package_manager: Optional[str] = None


def successful_package_manager(
    context: Mapping[str, object],
    requested_package_managers: Iterable[str],
) -> Optional[str]:
    """Return the first requested package manager recorded as succeeded."""
    for name in requested_package_managers:
        if context.get(name) is True:
            return name
    return None


def dev_command(template: Template, package_manager: Optional[str]) -> str:
    """Dev server command for template, or "" when there is none."""
    if package_manager is None or not template.is_runnable:
        return ""
    return toolchain.dev_command(package_manager)


def summarize(
    context: Mapping[str, object],
    template: Template,
    requested_package_managers: Iterable[str],
    project_dir: Path,
    cwd: Optional[Path] = None,
) -> Summary:
    """Build the final summary from a finished pipeline context."""
    package_manager = successful_package_manager(context, requested_package_managers)
    cwd = Path(cwd) if cwd is not None else Path.cwd()

    relative = os.path.relpath(Path(project_dir).resolve(), cwd.resolve())
    if relative == ".":
        relative = ""

    return Summary(
        relative_project_path=Path(relative).as_posix() if relative else "",
        dev_command=dev_command(template, package_manager),
        package_manager=package_manager,
    )


def next_step(summary: Summary) -> str:
    """Single shell line taking the user into the project and starting it."""
    parts = []
    if summary.relative_project_path:
        parts.append(f"cd {summary.relative_project_path}")
    if summary.dev_command:
        parts.append(summary.dev_command)
    return " && ".join(parts)


def format_summary(summary: Summary) -> str:
    """Human-readable multi-line success message."""
    lines = ["", "Project created successfully.", ""]
    command = next_step(summary)
    if command:
        lines += ["To get started, run:", "", f"  {command}", ""]
    if summary.package_manager is None:
        lines += ["Dependencies were not installed; install them before starting.", ""]
    return "\n".join(lines)
