"""Bundled game content."""

from idlequest.content.defaults import default_catalog

__all__ = ["default_catalog"]
