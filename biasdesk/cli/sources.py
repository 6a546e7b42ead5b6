"""Sources management commands."""

from typing import Optional

import httpx
import typer
from rich.table import Table

from ..config import SourceConfig, load_sources, save_sources
from ..models import Bias
from .common import console, load_config_or_exit

sources_app = typer.Typer(help="Manage RSS sources")

BIAS_STYLES = {Bias.PROGRESSIVE: "red", Bias.CENTRIST: "yellow", Bias.CONSERVATIVE: "blue"}


@sources_app.command("list")
def sources_list(
    bias: Optional[Bias] = typer.Option(None, "--bias", "-b", help="Only this bias"),
) -> None:
    """List all configured sources."""
    config = load_config_or_exit()

    try:
        sources = load_sources(config.sources_path)
    except FileNotFoundError:
        console.print("[red]Sources file not found. Run 'biasdesk init' first.[/red]")
        raise typer.Exit(1)

    if bias is not None:
        sources = [s for s in sources if s.bias == bias]

    if not sources:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Bias")
    table.add_column("Enabled", style="yellow")
    table.add_column("Feed", style="blue")

    for source in sources:
        table.add_row(
            source.id,
            source.name,
            f"[{BIAS_STYLES[source.bias]}]{source.bias.value}[/]",
            "✓" if source.enabled else "✗",
            source.feed_url,
        )

    console.print(table)


@sources_app.command("add")
def sources_add(
    source_id: str = typer.Option(..., "--id", help="Source identifier"),
    name: str = typer.Option(..., "--name", "-n", help="Source name"),
    feed_url: str = typer.Option(..., "--feed-url", "-f", help="RSS feed URL"),
    bias: Bias = typer.Option(..., "--bias", "-b", help="Bias category"),
    url: str = typer.Option("", "--url", "-u", help="Homepage URL"),
) -> None:
    """Add a new RSS source."""
    config = load_config_or_exit()

    try:
        sources = load_sources(config.sources_path)
    except FileNotFoundError:
        sources = []

    if any(s.id == source_id or s.feed_url == feed_url for s in sources):
        console.print(f"[red]Source '{source_id}' or feed URL already exists.[/red]")
        raise typer.Exit(1)

    sources.append(
        SourceConfig(id=source_id, name=name, url=url, feed_url=feed_url, bias=bias, enabled=True)
    )
    save_sources(sources, config.sources_path)

    console.print(f"[green]✅ Added {bias.value} source: {name}[/green]")


@sources_app.command("remove")
def sources_remove(
    source_id: str = typer.Argument(..., help="Source id to remove"),
) -> None:
    """Remove a source."""
    config = load_config_or_exit()

    try:
        sources = load_sources(config.sources_path)
    except FileNotFoundError:
        console.print("[red]Sources file not found.[/red]")
        raise typer.Exit(1)

    original_count = len(sources)
    sources = [s for s in sources if s.id != source_id]

    if len(sources) == original_count:
        console.print(f"[red]Source '{source_id}' not found.[/red]")
        raise typer.Exit(1)

    save_sources(sources, config.sources_path)
    console.print(f"[green]✅ Removed source: {source_id}[/green]")


@sources_app.command("test")
def sources_test(
    source_id: Optional[str] = typer.Argument(None, help="Source id to test (or test all)"),
) -> None:
    """Test RSS feed connectivity."""
    config = load_config_or_exit()
    fetch = config.config.fetch

    try:
        sources = load_sources(config.sources_path)
    except FileNotFoundError:
        console.print("[red]Sources file not found.[/red]")
        raise typer.Exit(1)

    if source_id:
        sources = [s for s in sources if s.id == source_id]
        if not sources:
            console.print(f"[red]Source '{source_id}' not found.[/red]")
            raise typer.Exit(1)

    with httpx.Client(
        timeout=fetch.timeout_seconds,
        headers={"User-Agent": fetch.user_agent},
        follow_redirects=True,
    ) as client:
        for source in sources:
            if not source.enabled:
                console.print(f"[yellow]⚠️  {source.name}: Disabled[/yellow]")
                continue

            try:
                response = client.get(source.feed_url)
                response.raise_for_status()
                console.print(f"[green]✅ {source.name}: OK ({response.status_code})[/green]")
            except httpx.HTTPError as e:
                console.print(f"[red]❌ {source.name}: Failed - {e}[/red]")
