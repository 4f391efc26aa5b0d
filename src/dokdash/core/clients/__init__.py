# dokdash/core/clients/__init__.py
"""Upstream HTTP clients."""

from dokdash.core.clients.dokploy import DokployClient, normalize_base_url

__all__ = [
    "DokployClient",
    "normalize_base_url",
]
