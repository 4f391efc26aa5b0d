# dokdash/core/projection.py
"""
Projection of the project tree into a flat, sorted list of entries.

Projects → environments → resource categories → resources become one
``ResourceEntry`` per resource, in a deterministic order with stable ids.
Pure functions only; nothing here performs I/O.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from urllib.parse import urlsplit

from dokdash.contracts.dokploy import RESOURCE_SECTIONS, Project, resolve_domain_url
from dokdash.contracts.entry import ResourceEntry

UNNAMED_PROJECT = "Unnamed project"

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def flatten_projects(projects: Sequence[Project]) -> list[ResourceEntry]:
    """Flatten projects into entries sorted by project name, then title.

    Entry ids fall back from ``composeId`` to ``applicationId`` to
    ``databaseId``; a resource with none of them gets a positional key
    ``{projectId or projectName}-{category}-{index}``, which only stays
    stable while the upstream keeps the same ordering.
    """
    entries: list[ResourceEntry] = []

    for index, project in enumerate(projects):
        project_name = project.name if project.name is not None else UNNAMED_PROJECT
        project_key = _first_present(project.project_id, project.name, f"project-{to_base36(index)}")
        id_prefix = project.project_id if project.project_id is not None else project_name

        for environment in project.environments or []:
            environment_name = environment.name

            for section in RESOURCE_SECTIONS:
                resources = environment.resources(section.key)
                if not resources:
                    continue

                for res_index, resource in enumerate(resources):
                    urls = [
                        url
                        for url in (resolve_domain_url(domain) for domain in resource.domains or [])
                        if url
                    ]
                    entry_id = resource.upstream_id
                    if entry_id is None:
                        entry_id = f"{id_prefix}-{section.key}-{res_index}"

                    entries.append(
                        ResourceEntry(
                            id=entry_id,
                            project_key=project_key,
                            title=resource.display_name,
                            project_name=project_name,
                            environment_name=environment_name,
                            section_label=section.label,
                            urls=urls,
                        )
                    )

    # sorted() is stable: equal keys keep emission order
    return sorted(
        entries,
        key=lambda entry: (_collation_key(entry.project_name), _collation_key(entry.title)),
    )


def partition_entries(
    entries: Iterable[ResourceEntry],
    pinned_ids: Iterable[str],
) -> tuple[list[ResourceEntry], list[ResourceEntry]]:
    """Split entries into ``(pinned, regular)``, each keeping input order."""
    pinned_set = set(pinned_ids)
    pinned: list[ResourceEntry] = []
    regular: list[ResourceEntry] = []
    for entry in entries:
        (pinned if entry.id in pinned_set else regular).append(entry)
    return pinned, regular


def to_base36(value: int) -> str:
    if value < 0:
        return "-" + to_base36(-value)
    digits = []
    while True:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
        if value == 0:
            break
    return "".join(reversed(digits))


def domain_label(url: str) -> str:
    """Short label for a link: the last two labels of its hostname."""
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return url
    if not host:
        return url
    parts = host.split(".")
    if len(parts) <= 2:
        return host
    return ".".join(parts[-2:])


def format_timestamp(value: str | None) -> str | None:
    """Render an ISO-8601 timestamp in local time; unparsable input is returned as-is."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _collation_key(value: str) -> tuple[str, str]:
    return (value.casefold(), value)


def _first_present(*values: str | None) -> str | None:
    for value in values:
        if value is not None:
            return value
    return None
