"""Package manager and lint tool command table.

Everything that knows concrete command names or flags lives here; the
provisioning stages only ask for argument lists.
"""
from pathlib import Path
from typing import Dict, List, Tuple

PACKAGE_MANAGERS: Tuple[str, ...] = ("npm", "yarn", "pnpm")

# Subcommand used to add a dependency (npm has no `add`)
ADD_SUBCOMMANDS: Dict[str, str] = {
    'npm': 'install',
    'yarn': 'add',
    'pnpm': 'add',
}

LINT_PACKAGES: List[str] = [
    'eslint',
    'prettier',
    'eslint-config-prettier',
    'eslint-plugin-prettier',
    'eslint-plugin-import',
    '@typescript-eslint/eslint-plugin',
    '@typescript-eslint/parser',
]

# Lint configuration files shipped in templates/configs/
LINT_CONFIG_FILES: List[str] = ['.eslintrc.js', '.prettierrc']

# (binary under node_modules/.bin, arguments)
LINT_COMMANDS: List[Tuple[str, List[str]]] = [
    ('eslint', ['--fix', '.']),
    ('prettier', ['--write', '.']),
]


class UnknownPackageManagerError(ValueError):
    """Raised for a package manager missing from the command table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Unknown package manager '{name}' (supported: {', '.join(PACKAGE_MANAGERS)})"
        )


def validate_package_manager(name: str) -> str:
    """Return name if it is a supported package manager."""
    if name not in PACKAGE_MANAGERS:
        raise UnknownPackageManagerError(name)
    return name


def install_args(package_manager: str) -> List[str]:
    """Arguments installing the project's declared dependencies."""
    validate_package_manager(package_manager)
    return ['install']


def add_dev_args(package_manager: str, packages: List[str]) -> List[str]:
    """Arguments adding packages as development dependencies."""
    validate_package_manager(package_manager)
    return [ADD_SUBCOMMANDS[package_manager], '-D', *packages]


def dev_command(package_manager: str) -> str:
    """Command starting a runnable project's dev server."""
    validate_package_manager(package_manager)
    return f"{package_manager} run dev"


def lint_binary(project_dir: Path, name: str) -> Path:
    """Path of a locally installed lint binary."""
    return Path(project_dir) / "node_modules" / ".bin" / name
