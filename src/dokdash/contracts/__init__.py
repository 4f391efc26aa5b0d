"""Data contracts shared by the server, the browser shell and the CLI."""
from dokdash.contracts.dokploy import (
    RESOURCE_SECTIONS,
    ConfigResponse,
    Domain,
    Environment,
    Meta,
    OpenApiDocument,
    Project,
    Resource,
    ResourceSection,
    parse_project_list,
    resolve_domain_url,
)
from dokdash.contracts.entry import EntriesResponse, ResourceEntry

__all__ = [
    "Domain", "Resource", "Environment", "Project",
    "OpenApiDocument", "Meta", "ConfigResponse",
    "ResourceSection", "RESOURCE_SECTIONS",
    "ResourceEntry", "EntriesResponse",
    "parse_project_list", "resolve_domain_url",
]
