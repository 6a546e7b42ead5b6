"""On-demand matching commands."""

import asyncio
from typing import Optional

import typer
from rich.table import Table

from ..errors import FeedsUnavailableError
from ..models import BIAS_ORDER
from .common import build_pipeline, console, load_config_or_exit, print_groups


def match_command(
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Maximum story groups to build",
        min=1,
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the raw payload as JSON"),
) -> None:
    """Fetch all feeds now and print the matched story groups."""
    config = load_config_or_exit()
    pipeline = build_pipeline(config)

    try:
        with console.status("Fetching feeds and matching stories..."):
            result = asyncio.run(pipeline.compute_matched_stories(limit))
    except FeedsUnavailableError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        console.print_json(data=result.to_payload())
        return

    print_groups(result.groups)
    fetch_stats = result.stats.get("fetch", {})
    for bias in BIAS_ORDER:
        stats = fetch_stats.get(bias.value, {})
        console.print(
            f"[dim]{bias.value}: {stats.get('articles', 0)} articles from "
            f"{stats.get('sources', 0) - stats.get('failed', 0)}/{stats.get('sources', 0)} sources[/dim]"
        )


def by_bias_command(
    limit: int = typer.Option(15, "--limit", "-l", help="Headlines per bias", min=1, max=50),
) -> None:
    """Print the latest headlines of each bias column."""
    config = load_config_or_exit()
    pipeline = build_pipeline(config)

    with console.status("Fetching feeds..."):
        columns = asyncio.run(pipeline.fetch_news_by_bias(limit))

    for bias in BIAS_ORDER:
        table = Table(title=bias.value.title())
        table.add_column("Published", style="dim")
        table.add_column("Source", style="cyan")
        table.add_column("Title")
        for article in columns[bias]:
            published = article.published_at.strftime("%Y-%m-%d %H:%M") if article.published_at else "-"
            table.add_row(published, article.source_name, article.title)
        console.print(table)
