"""Snapshot commands: refresh, show and the refresh loop."""

import asyncio
from typing import Optional

import typer

from ..db import close_connection_pool
from ..errors import SnapshotUnavailableError
from ..snapshot import SnapshotScheduler
from .common import build_pipeline, build_snapshot_cache, console, load_config_or_exit, print_groups


def refresh_command() -> None:
    """Compute a new snapshot and store it."""
    config = load_config_or_exit()
    cache = build_snapshot_cache(config, build_pipeline(config))

    try:
        with console.status("Refreshing snapshot..."):
            snapshot = asyncio.run(cache.safe_refresh())
    finally:
        close_connection_pool()

    if snapshot is None:
        console.print("[red]❌ Refresh failed; previous snapshot kept.[/red]")
        raise typer.Exit(1)

    groups = snapshot.payload.get("groups", [])
    console.print(f"[green]✅ Snapshot {snapshot.id} stored with {len(groups)} groups[/green]")


def show_command(
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Groups to show (max 25)"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw payload as JSON"),
) -> None:
    """Show the latest snapshot, computing one if none exists."""
    config = load_config_or_exit()
    cache = build_snapshot_cache(config, build_pipeline(config))

    try:
        payload = asyncio.run(cache.read(limit, strict=True))
    except SnapshotUnavailableError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    finally:
        close_connection_pool()

    if json_output:
        console.print_json(data=payload)
    else:
        print_groups(payload.get("groups", []), title="Latest Snapshot")


def serve_command(
    interval: Optional[int] = typer.Option(
        None,
        "--interval",
        "-i",
        help="Minutes between refreshes (default from config)",
        min=1,
    ),
) -> None:
    """Refresh snapshots now and then on a fixed interval until interrupted."""
    config = load_config_or_exit()
    cache = build_snapshot_cache(config, build_pipeline(config))
    scheduler = SnapshotScheduler(cache, interval or config.config.snapshot.refresh_minutes)

    try:
        asyncio.run(scheduler.run())
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/yellow]")
    finally:
        close_connection_pool()
        console.print(f"[dim]{scheduler.runs} refreshes, {scheduler.failures} failed[/dim]")
