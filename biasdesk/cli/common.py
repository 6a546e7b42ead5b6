"""Helpers shared by CLI commands."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import Config
from ..models import Article, StoryGroup
from ..pipeline import MatchPipeline
from ..snapshot import MemorySnapshotStore, PostgresSnapshotStore, SnapshotCache

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )
    # Keep HTTP client chatter out of INFO output
    logging.getLogger("httpx").setLevel(logging.WARNING)


def load_config_or_exit(config_path: Optional[Path] = None) -> Config:
    config = Config(config_path)
    try:
        _ = config.config  # loads and validates the YAML
    except FileNotFoundError:
        console.print("[red]Config file not found. Run 'biasdesk init' first.[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    return config


def build_pipeline(config: Config) -> MatchPipeline:
    try:
        return MatchPipeline.from_config(config)
    except FileNotFoundError:
        console.print("[red]Sources file not found. Run 'biasdesk init' first.[/red]")
        raise typer.Exit(1)


def build_snapshot_cache(config: Config, pipeline: MatchPipeline) -> SnapshotCache:
    settings = config.config
    if settings.snapshot.backend == "postgres":
        store = PostgresSnapshotStore(config.get_db_config())
    else:
        store = MemorySnapshotStore()
    return SnapshotCache(
        store,
        pipeline.compute_matched_stories,
        limit_groups=settings.matching.limit_groups,
        read_limit=settings.snapshot.read_limit,
    )


def _article_cell(article: Optional[Article]) -> str:
    if article is None:
        return "-"
    return f"{article.title}\n[dim]{article.source_name}[/dim]"


def print_groups(groups: list, title: str = "Matched Stories") -> None:
    """Print story groups side by side, one row per group."""
    if not groups:
        console.print("[yellow]No matched stories.[/yellow]")
        return

    table = Table(title=title, show_lines=True)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Progressive", style="red")
    table.add_column("Centrist", style="yellow")
    table.add_column("Conservative", style="blue")
    table.add_column("Others", justify="right")
    table.add_column("Tags", style="magenta")

    for i, group in enumerate(groups, 1):
        if not isinstance(group, StoryGroup):
            group = StoryGroup.model_validate(group)
        table.add_row(
            str(i),
            _article_cell(group.progressive),
            _article_cell(group.centrist),
            _article_cell(group.conservative),
            str(len(group.other_sources)),
            ", ".join(group.tags or []),
        )

    console.print(table)
