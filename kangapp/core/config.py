"""kangapp runtime configuration and settings."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _default_templates_dir() -> Path:
    # Config is in kangapp/core/, templates are in kangapp/templates/
    return Path(__file__).parent.parent / "templates"


@dataclass
class KangConfig:
    """Runtime configuration for scaffolding runs.

    Attributes:
        templates_dir: Root holding catalog.yml, projects/ and configs/
        process_timeout: Timeout in seconds for package manager and lint
            commands (default: None, wait until the process exits)
        copy_workers: Worker threads used to render marked files (default: 8)
        marker: Filename character flagging a file for rename + substitution
    """

    templates_dir: Optional[Path] = None
    process_timeout: Optional[float] = None
    copy_workers: int = 8
    marker: str = "_"

    def __post_init__(self):
        if self.templates_dir is None:
            self.templates_dir = _default_templates_dir()
        else:
            self.templates_dir = Path(self.templates_dir)
        if self.copy_workers < 1:
            raise ValueError(f"copy_workers must be at least 1, got {self.copy_workers}")
        if len(self.marker) != 1:
            raise ValueError(f"marker must be a single character, got {self.marker!r}")

    @classmethod
    def from_env(cls) -> "KangConfig":
        """Create config from environment variables.

        Environment variables:
            KANG_TEMPLATES_DIR: Alternative templates root
            KANG_PROCESS_TIMEOUT: External command timeout in seconds
            KANG_COPY_WORKERS: Thread count for marked-file rendering
            KANG_MARKER: Marker character in template filenames

        Returns:
            KangConfig instance with values from environment or defaults
        """
        templates_dir = os.getenv("KANG_TEMPLATES_DIR")
        timeout = os.getenv("KANG_PROCESS_TIMEOUT")
        return cls(
            templates_dir=Path(templates_dir) if templates_dir else None,
            process_timeout=float(timeout) if timeout else None,
            copy_workers=int(os.getenv("KANG_COPY_WORKERS", cls.copy_workers)),
            marker=os.getenv("KANG_MARKER", cls.marker),
        )


# Global config instance (can be overridden)
_config: Optional[KangConfig] = None


def get_config() -> KangConfig:
    """Get the global kangapp configuration.

    Returns:
        KangConfig instance (creates from environment if not set)
    """
    global _config
    if _config is None:
        _config = KangConfig.from_env()
    return _config


def set_config(config: Optional[KangConfig]):
    """Set the global kangapp configuration.

    Args:
        config: KangConfig instance to use globally, or None to reload from env
    """
    global _config
    _config = config
