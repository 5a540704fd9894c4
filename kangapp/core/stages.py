"""Provisioning stages for a new project.

Stages, in order:

1. Copy template (fatal on failure)
2. Install dependencies with the chosen package manager
3. Add lint config (only when lint was requested)
4. Run lint (only when lint was requested)

Context keys written:

- ``files``: number of files materialized by the copy stage
- ``<package manager>``: True if ``install`` succeeded, else False
- ``lint_config``: True once lint dependencies and config are in place, else False
- ``lint``: True once eslint and prettier both ran, else False
"""
import glob
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from kangapp.core import copier
from kangapp.core.config import KangConfig, get_config
from kangapp.core.copier import CopyFailure
from kangapp.core.logger import get_logger
from kangapp.core.pipeline import PipelineContext, PipelineStage, StageSkipped
from kangapp.core.substitution import UndefinedVariableError, render
from kangapp.core.template_selector import TemplateFile, list_files, partition
from kangapp.models.template import Template
from kangapp.services import toolchain
from kangapp.services.process import ProcessFailure, ProcessGateway

logger = get_logger(__name__)


@dataclass
class ProvisionOptions:
    """Choices a provisioning run is built from.

    Attributes:
        project_dir: Target directory (created if missing)
        template: Selected template, with its root set
        package_manager: npm, yarn or pnpm
        lint: Whether to add and run ESLint + Prettier
        variables: Token values substituted into marked files
        configs_dir: Directory holding the lint config files
    """

    project_dir: Path
    template: Template
    package_manager: str
    lint: bool
    variables: Mapping[str, str]
    configs_dir: Path
    gateway: ProcessGateway = field(default_factory=ProcessGateway)
    config: Optional[KangConfig] = None

    def __post_init__(self):
        self.project_dir = Path(self.project_dir)
        self.configs_dir = Path(self.configs_dir)
        toolchain.validate_package_manager(self.package_manager)
        if self.template.root is None:
            raise ValueError(f"Template '{self.template.name}' has no root directory")
        if self.config is None:
            self.config = get_config()


def _write_marked(
    template_file: TemplateFile,
    rendered_path: str,
    template_root: Path,
    project_dir: Path,
    variables: Mapping[str, str],
) -> Path:
    source = template_root / template_file.relative_path
    target = project_dir / rendered_path
    try:
        content = source.read_text(encoding="utf-8")
    except OSError as e:
        raise CopyFailure(f"Failed to read {source}: {e}", path=source) from e

    rendered = render(content, variables)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(rendered, encoding="utf-8")
    except OSError as e:
        raise CopyFailure(f"Failed to write {target}: {e}", path=target) from e

    logger.debug(f"Rendered {template_file.relative_path} -> {rendered_path}")
    return target


def copy_template(
    template_root: Path,
    project_dir: Path,
    variables: Mapping[str, str],
    marker: str = "_",
    max_workers: int = 8,
) -> List[Path]:
    """Materialize a template into project_dir.

    Plain files are copied verbatim. Marked files are rendered concurrently
    and written under their marker-free names; every render task finishes
    before this returns. If any task failed, the failure of the first file
    in path order is raised and the others are logged.

    Returns:
        Paths written, plain files first

    Raises:
        UndefinedVariableError: If a marked file references an unknown token
        CopyFailure: If a file cannot be read, copied or written
    """
    template_root = Path(template_root)
    project_dir = Path(project_dir)

    files = list_files(template_root, marker)
    plain, marked = partition(files)
    marked_files = sorted(marked, key=lambda f: f.relative_path)

    # Resolved up front: a filename made only of markers raises ValueError
    targets = {f: f.rendered_relative_path for f in marked_files}

    project_dir.mkdir(parents=True, exist_ok=True)
    patterns = ["**/*"] + [f"!{glob.escape(f.relative_path)}" for f in marked_files]
    written = copier.copy(patterns, project_dir, base_dir=template_root)
    logger.debug(f"Copied {len(plain)} plain files into {project_dir}")

    if not marked_files:
        return written

    errors = []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(marked_files))) as pool:
        futures = [
            pool.submit(_write_marked, f, targets[f], template_root, project_dir, variables)
            for f in marked_files
        ]
        for template_file, future in zip(marked_files, futures):
            try:
                written.append(future.result())
            except (UndefinedVariableError, CopyFailure) as e:
                errors.append((template_file, e))

    if errors:
        for template_file, error in errors[1:]:
            logger.error(f"Failed to render {template_file.relative_path}: {error}")
        raise errors[0][1]

    return written


def build_stages(options: ProvisionOptions) -> List[PipelineStage]:
    """Build the provisioning stages for options."""
    project_dir = options.project_dir
    package_manager = options.package_manager
    gateway = options.gateway
    config = options.config

    def lint_requested(context: PipelineContext) -> bool:
        return options.lint

    def copy_stage(context: PipelineContext) -> None:
        written = copy_template(
            options.template.root,
            project_dir,
            options.variables,
            marker=config.marker,
            max_workers=config.copy_workers,
        )
        context["files"] = len(written)

    def install_stage(context: PipelineContext) -> None:
        try:
            gateway.spawn(package_manager, toolchain.install_args(package_manager), cwd=project_dir)
        except ProcessFailure as e:
            context[package_manager] = False
            logger.debug(f"Dependency install failed: {e}")
            raise StageSkipped(f"Skipping install: {package_manager} install failed") from e
        context[package_manager] = True

    def add_lint_config_stage(context: PipelineContext) -> None:
        context["lint_config"] = False
        gateway.spawn(
            package_manager,
            toolchain.add_dev_args(package_manager, toolchain.LINT_PACKAGES),
            cwd=project_dir,
        )
        copier.copy(toolchain.LINT_CONFIG_FILES, project_dir, base_dir=options.configs_dir)

        for source_name, target_name in options.template.lint_config_renames.items():
            source = project_dir / source_name
            try:
                source.rename(project_dir / target_name)
            except OSError as e:
                raise CopyFailure(f"Failed to rename {source} to {target_name}: {e}", path=source) from e
            logger.debug(f"Renamed {source_name} -> {target_name}")

        context["lint_config"] = True

    def run_lint_stage(context: PipelineContext) -> None:
        context["lint"] = False
        for binary, args in toolchain.LINT_COMMANDS:
            gateway.spawn(toolchain.lint_binary(project_dir, binary), args, cwd=project_dir)
        context["lint"] = True

    return [
        PipelineStage("Copy template", copy_stage),
        PipelineStage(
            f"Install dependencies with {package_manager}",
            install_stage,
            skippable=True,
        ),
        PipelineStage(
            "Add lint config",
            add_lint_config_stage,
            enabled=lint_requested,
            skippable=True,
        ),
        PipelineStage(
            "Run lint",
            run_lint_stage,
            enabled=lint_requested,
            skippable=True,
        ),
    ]
