"""Dokdash: a dashboard over Dokploy projects and their published domains."""

__version__ = "0.3.0"
