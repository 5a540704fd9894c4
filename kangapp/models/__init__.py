"""Data models for kangapp."""
from kangapp.models.template import Template, TemplateCatalog

__all__ = [
    'Template',
    'TemplateCatalog',
]
