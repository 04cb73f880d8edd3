"""Development environment verification for multi-package workspaces."""

__version__ = "0.1.0"
