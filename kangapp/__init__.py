"""kangapp - project scaffolding with a provisioning pipeline."""

__version__ = "0.1.0"
