"""Template catalog models."""
import re
from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Template(BaseModel):
    """A project template: a static file tree plus its catalog metadata.

    ``kind`` decides whether the scaffolded project has a dev server:
    ``runnable`` templates expose ``<package manager> run dev``, ``library``
    templates expose no start command.
    """

    model_config = ConfigDict(extra='forbid', frozen=True)

    name: str
    label: str
    description: str = ""
    kind: Literal["runnable", "library"] = "runnable"
    lint_config_renames: Dict[str, str] = Field(
        default_factory=dict,
        description="Lint config files renamed after copying (e.g. .eslintrc.js -> .eslintrc.cjs)",
    )
    root: Optional[Path] = Field(None, description="Template file tree; set by the loader")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate template names are lowercase slugs."""
        if not re.match(r'^[a-z0-9][a-z0-9\-]*$', v):
            raise ValueError(
                f"Template name '{v}' is invalid. "
                "Must be lowercase letters, numbers, and hyphens only."
            )
        return v

    @field_validator('lint_config_renames')
    @classmethod
    def validate_renames(cls, v):
        """Validate renames stay flat filenames inside the project root."""
        for source, target in v.items():
            for name in (source, target):
                if not name or '/' in name or '\\' in name or name in ('.', '..'):
                    raise ValueError(f"Lint config rename entries must be plain filenames. Got: {name!r}")
        return v

    @property
    def is_runnable(self) -> bool:
        return self.kind == "runnable"


class TemplateCatalog(BaseModel):
    """Contents of templates/catalog.yml."""

    model_config = ConfigDict(extra='forbid')

    templates: Dict[str, Template] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> 'TemplateCatalog':
        """Build a catalog from YAML data where templates are keyed by name."""
        raw = (data or {}).get('templates') or {}
        templates = {
            name: Template(name=name, **(fields or {}))
            for name, fields in raw.items()
        }
        return cls(templates=templates)
