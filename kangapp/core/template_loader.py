"""Template catalog loading for project scaffolding."""
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from kangapp.core.logger import get_logger
from kangapp.models.template import Template, TemplateCatalog

logger = get_logger(__name__)

CATALOG_FILE = "catalog.yml"


class TemplateNotFoundError(LookupError):
    """Raised when a template is unknown or its file tree is missing."""

    def __init__(self, name: str, available: Optional[List[str]] = None):
        self.name = name
        self.available = available or []
        message = f"Template '{name}' not found"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class TemplateLoader:
    """Loads the template catalog and resolves template directories.

    Layout of the templates directory::

        catalog.yml          # template metadata
        projects/<name>/     # project file trees
        configs/             # lint configuration files
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """Initialize template loader.

        Args:
            templates_dir: Path to templates directory. Defaults to kangapp/templates/
        """
        if templates_dir is None:
            # Loader is in kangapp/core/, templates are in kangapp/templates/
            templates_dir = Path(__file__).parent.parent / "templates"
        self.templates_dir = Path(templates_dir)
        self.projects_dir = self.templates_dir / "projects"
        self.configs_dir = self.templates_dir / "configs"
        self._catalog: Optional[TemplateCatalog] = None

    def load_catalog(self) -> TemplateCatalog:
        """Load and validate catalog.yml (cached after the first call).

        Raises:
            FileNotFoundError: If the catalog file doesn't exist
            ValueError: If the catalog doesn't validate
        """
        if self._catalog is not None:
            return self._catalog

        catalog_path = self.templates_dir / CATALOG_FILE
        if not catalog_path.exists():
            raise FileNotFoundError(f"Template catalog not found at {catalog_path}")

        with open(catalog_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        try:
            self._catalog = TemplateCatalog.from_dict(data)
        except ValidationError as e:
            raise ValueError(f"Invalid template catalog {catalog_path}: {e}") from e

        logger.debug(f"Loaded {len(self._catalog.templates)} templates from {catalog_path}")
        return self._catalog

    def list_templates(self) -> List[str]:
        """List template names in catalog order."""
        return list(self.load_catalog().templates)

    def get_template_info(self, template_name: str) -> str:
        """Get template description.

        Returns:
            Template description string
        """
        template = self.load_catalog().templates.get(template_name)
        if template is None or not template.description:
            return "No description"
        return template.description

    def load_template(self, template_name: str) -> Template:
        """Resolve a template by name, with its file tree root set.

        Raises:
            TemplateNotFoundError: If the template is not in the catalog or
                its project directory is missing
        """
        catalog = self.load_catalog()
        template = catalog.templates.get(template_name)
        if template is None:
            raise TemplateNotFoundError(template_name, list(catalog.templates))

        root = self.projects_dir / template_name
        if not root.is_dir():
            raise TemplateNotFoundError(template_name)

        return template.model_copy(update={"root": root})
