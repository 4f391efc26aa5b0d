# dokdash/contracts/dokploy.py
"""
Accepted shape of Dokploy data and the envelope served to clients.

Validation is structural and permissive: only ``Domain.host``,
``OpenApiServer.url`` and ``Meta.fetched_at`` are required, everything else
is optional, and ``null`` counts as absent. Upstream records keep fields
they do not declare (``extra="allow"``) so new Dokploy attributes pass
through untouched. Python names are snake_case; wire names are the
upstream camelCase.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    field_validator,
)
from pydantic.alias_generators import to_camel


class UpstreamModel(BaseModel):
    """Base for records received from Dokploy."""

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Domain(UpstreamModel):
    domain_id: StrictStr | None = None
    host: StrictStr = Field(min_length=1)
    https: StrictBool | None = None
    port: StrictInt | StrictFloat | None = None
    path: StrictStr | None = None
    service_name: StrictStr | None = None


class Resource(UpstreamModel):
    """One deployable unit: an application, a compose stack or a database."""

    compose_id: StrictStr | None = None
    application_id: StrictStr | None = None
    database_id: StrictStr | None = None
    name: StrictStr | None = None
    app_name: StrictStr | None = None
    compose_status: StrictStr | None = None
    status: StrictStr | None = None
    domains: list[Domain] | None = None

    @property
    def upstream_id(self) -> str | None:
        return _first_present(self.compose_id, self.application_id, self.database_id)

    @property
    def display_name(self) -> str:
        return _first_present(self.name, self.app_name, "Untitled resource")


class Environment(UpstreamModel):
    environment_id: StrictStr | None = None
    name: StrictStr | None = None
    description: StrictStr | None = None
    applications: list[Resource] | None = None
    compose: list[Resource] | None = None
    postgres: list[Resource] | None = None
    mysql: list[Resource] | None = None
    mariadb: list[Resource] | None = None
    mongo: list[Resource] | None = None
    redis: list[Resource] | None = None

    def resources(self, category: str) -> list[Resource] | None:
        """Resources of one category, ``None`` when the category is absent."""
        if category not in _CATEGORY_KEYS:
            raise KeyError(f"Unknown resource category '{category}'")
        return getattr(self, category)


class Project(UpstreamModel):
    project_id: StrictStr | None = None
    name: StrictStr | None = None
    description: StrictStr | None = None
    environments: list[Environment] | None = None


class OpenApiInfo(UpstreamModel):
    title: StrictStr | None = None
    version: StrictStr | None = None
    description: StrictStr | None = None


class OpenApiServer(UpstreamModel):
    url: StrictStr


class OpenApiDocument(UpstreamModel):
    """The subset of Dokploy's OpenAPI descriptor the dashboard reads."""

    info: OpenApiInfo | None = None
    servers: list[OpenApiServer] | None = None


# -- Envelope ------------------------------------------------------------------


class Meta(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    title: StrictStr | None = None
    version: StrictStr | None = None
    description: StrictStr | None = None
    servers: list[StrictStr] = Field(default_factory=list)
    fetched_at: StrictStr

    @field_validator("servers", mode="before")
    @classmethod
    def _null_servers(cls, value: Any) -> Any:
        return [] if value is None else value


class ConfigResponse(BaseModel):
    """Payload of ``GET /api/config``."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    projects: list[Project]
    meta: Meta

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict; meta fields that are not set are omitted."""
        body = self.model_dump(mode="json", by_alias=True)
        body["meta"] = self.meta.model_dump(mode="json", by_alias=True, exclude_none=True)
        return body


project_list_adapter: TypeAdapter[list[Project]] = TypeAdapter(list[Project])


def parse_project_list(data: Any) -> list[Project]:
    return project_list_adapter.validate_python(data)


# -- Resource categories -------------------------------------------------------


@dataclass(frozen=True)
class ResourceSection:
    key: str
    label: str


RESOURCE_SECTIONS: tuple[ResourceSection, ...] = (
    ResourceSection("applications", "Applications"),
    ResourceSection("compose", "Compose Stacks"),
    ResourceSection("postgres", "Postgres"),
    ResourceSection("mysql", "MySQL"),
    ResourceSection("mariadb", "MariaDB"),
    ResourceSection("mongo", "MongoDB"),
    ResourceSection("redis", "Redis"),
)

_CATEGORY_KEYS = frozenset(section.key for section in RESOURCE_SECTIONS)


# -- Helpers -------------------------------------------------------------------


def resolve_domain_url(domain: Domain | None) -> str | None:
    """Build the public URL of a domain record.

    Returns ``None`` when there is no domain or its host is empty. The port
    is appended only when set and non-zero; a bare ``/`` path is dropped.
    Host and path are used verbatim.
    """
    if domain is None or not domain.host:
        return None
    scheme = "https" if domain.https else "http"
    port = f":{_format_port(domain.port)}" if domain.port else ""
    path = domain.path if domain.path and domain.path != "/" else ""
    return f"{scheme}://{domain.host}{port}{path}"


def _format_port(port: int | float) -> str:
    if isinstance(port, float) and port.is_integer():
        return str(int(port))
    return str(port)


def _first_present(*values: str | None) -> str | None:
    for value in values:
        if value is not None:
            return value
    return None
