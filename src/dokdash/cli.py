# dokdash/cli.py
"""
Command line entry point.

``serve`` runs the web dashboard; ``list``, ``pin`` and ``unpin`` are a
terminal rendition of it that keeps its pins in a JSON file.
"""
from __future__ import annotations

import asyncio
import json
import sys

import click

from dokdash.contracts.entry import ResourceEntry
from dokdash.core.aggregator import ConfigAggregator
from dokdash.core.config import Settings
from dokdash.core.projection import domain_label, format_timestamp
from dokdash.dashboard.loader import AggregatorLoader, ConfigLoader, HttpConfigLoader
from dokdash.dashboard.pins import JsonFileStorage, PinStore
from dokdash.dashboard.view import Dashboard


def _pin_store(settings: Settings) -> PinStore:
    return PinStore(JsonFileStorage(settings.dokdash_pins_path))


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Dokdash: Dokploy projects, environments and service domains."""
    ctx.ensure_object(dict)
    ctx.obj.setdefault("settings", Settings())


# ── Server ──────────────────────────────────────────────────────


@main.command()
@click.option("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0).")
@click.option("--port", type=int, default=None, help="Bind port (default: $PORT or 3000).")
@click.option("--reload", is_flag=True, help="Restart on code changes.")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool) -> None:
    """Run the web dashboard."""
    import uvicorn

    settings: Settings = ctx.obj["settings"]
    uvicorn.run(
        "dokdash.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


# ── Terminal dashboard ──────────────────────────────────────────


def _print_entry(entry: ResourceEntry, pinned: bool) -> None:
    marker = "📌 " if pinned else "   "
    click.secho(f"{marker}{entry.title}", bold=True, nl=False)
    click.secho(f"  [{entry.project_name}]", fg="green")
    environment = entry.environment_name or "Environment"
    click.secho(f"      {environment} · {entry.section_label}  ({entry.id})", dim=True)
    if entry.urls:
        for url in entry.urls:
            click.echo(f"      {domain_label(url):<24} {url}")
    else:
        click.secho("      No domains configured.", dim=True)


@main.command("list")
@click.option("--server", "server_url", default=None, help="Read from a running dashboard instead of Dokploy.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output entries as JSON.")
@click.pass_context
def list_entries(ctx: click.Context, server_url: str | None, as_json: bool) -> None:
    """Show all resources, pinned ones first."""
    settings: Settings = ctx.obj["settings"]
    loader: ConfigLoader
    if server_url:
        loader = HttpConfigLoader(server_url)
    else:
        loader = AggregatorLoader(ConfigAggregator(settings))

    dashboard = Dashboard(loader, _pin_store(settings))
    asyncio.run(dashboard.load())

    if dashboard.view_state == "error":
        click.secho(f"❌ Unable to load Dokploy data: {dashboard.error}", fg="red", err=True)
        sys.exit(1)

    pinned, regular = dashboard.partition()

    if as_json:
        click.echo(json.dumps(
            {
                "pinned": [e.model_dump(mode="json", by_alias=True) for e in pinned],
                "entries": [e.model_dump(mode="json", by_alias=True) for e in regular],
            },
            indent=2,
        ))
        return

    meta = dashboard.data.meta if dashboard.data else None
    title = (meta.title if meta else None) or "Applications Overview"
    click.secho(title, fg="cyan", bold=True)
    if meta and meta.description:
        click.echo(meta.description)
    updated = format_timestamp(meta.fetched_at) if meta else None
    if updated:
        click.secho(f"Updated {updated}", dim=True)
    click.echo()

    if dashboard.view_state == "empty":
        click.secho("No deployments found", fg="yellow")
        click.echo("Connected to Dokploy but found no applications or services to show.")
        return

    if pinned:
        click.secho("PINNED", fg="green", bold=True)
        for entry in pinned:
            _print_entry(entry, pinned=True)
        click.echo()
    for entry in regular:
        _print_entry(entry, pinned=False)


@main.command()
@click.argument("entry_id")
@click.pass_context
def pin(ctx: click.Context, entry_id: str) -> None:
    """Pin an entry by id."""
    store = _pin_store(ctx.obj["settings"])
    store.pin(entry_id)
    click.echo(f"📌 Pinned {entry_id}")


@main.command()
@click.argument("entry_id")
@click.pass_context
def unpin(ctx: click.Context, entry_id: str) -> None:
    """Unpin an entry by id."""
    store = _pin_store(ctx.obj["settings"])
    if entry_id not in store:
        click.secho(f"{entry_id} is not pinned", fg="yellow")
        return
    store.unpin(entry_id)
    click.echo(f"Unpinned {entry_id}")


if __name__ == "__main__":
    main()
