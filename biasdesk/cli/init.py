"""Init command implementation."""

from pathlib import Path
from typing import List

import typer
from rich.panel import Panel

from ..config import ConfigModel, SourceConfig, save_config, save_sources
from ..config.loader import DEFAULT_CONFIG_DIR
from ..db import close_connection_pool, init_database, validate_connection
from ..models import Bias
from .common import console


def create_default_sources() -> List[SourceConfig]:
    """Create default Spanish news sources, grouped by bias."""
    return [
        SourceConfig(
            id="eldiario",
            name="elDiario.es",
            url="https://www.eldiario.es",
            feed_url="https://www.eldiario.es/rss/",
            bias=Bias.PROGRESSIVE,
        ),
        SourceConfig(
            id="publico",
            name="Público",
            url="https://www.publico.es",
            feed_url="https://www.publico.es/rss/",
            bias=Bias.PROGRESSIVE,
        ),
        SourceConfig(
            id="20minutos",
            name="20minutos",
            url="https://www.20minutos.es",
            feed_url="https://www.20minutos.es/rss/",
            bias=Bias.CENTRIST,
        ),
        SourceConfig(
            id="lavanguardia",
            name="La Vanguardia",
            url="https://www.lavanguardia.com",
            feed_url="https://www.lavanguardia.com/rss/home.xml",
            bias=Bias.CENTRIST,
        ),
        SourceConfig(
            id="abc",
            name="ABC",
            url="https://www.abc.es",
            feed_url="https://www.abc.es/rss/2.0/portada/",
            bias=Bias.CONSERVATIVE,
        ),
        SourceConfig(
            id="larazon",
            name="La Razón",
            url="https://www.larazon.es",
            feed_url="https://www.larazon.es/rss/portada.xml",
            bias=Bias.CONSERVATIVE,
        ),
    ]


def init_command(
    config_dir: Path = typer.Option(
        DEFAULT_CONFIG_DIR,
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    backend: str = typer.Option(
        "postgres",
        "--backend",
        help="Snapshot store (postgres, memory)",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("biasdesk", "--db-name", help="Database name"),
    db_user: str = typer.Option("biasdesk", "--db-user", help="Database user"),
    seed_sources: bool = typer.Option(
        True,
        "--seed-sources/--no-seed-sources",
        help="Seed default news sources",
    ),
) -> None:
    """Initialize configuration, sources and the snapshot database."""
    console.print(Panel.fit("📰 biasdesk - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    sources_path = config_dir / "sources.yaml"

    try:
        config = ConfigModel(
            postgres={
                "host": db_host,
                "port": db_port,
                "database": db_name,
                "user": db_user,
                "password_env": "BIASDESK_DB_PASSWORD",
            },
            snapshot={"backend": backend},
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if seed_sources:
        sources = create_default_sources()
        save_sources(sources, sources_path)
        console.print(f"✅ Created sources: {sources_path} (seeded with {len(sources)} sources)")
    else:
        save_sources([], sources_path)
        console.print(f"✅ Created sources: {sources_path} (empty)")

    if backend != "postgres":
        console.print(Panel("[green]✅ Initialized with in-memory snapshots[/green]", style="green"))
        return

    console.print("\n[bold]Testing database connection...[/bold]")
    db_config = config.postgres.model_dump()

    try:
        if not validate_connection(db_config):
            console.print(
                "[red]❌ Database connection failed![/red]\n"
                "Please ensure Postgres is running and credentials are correct.\n"
                "Set the password via environment variable: "
                "[bold]export BIASDESK_DB_PASSWORD=your_password[/bold]"
            )
            raise typer.Exit(1)

        console.print("✅ Database connection successful")

        console.print("\n[bold]Initializing database schema...[/bold]")
        try:
            init_database(db_config)
        except Exception as e:
            console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
            raise typer.Exit(1)
        console.print("✅ Database schema initialized")
    finally:
        close_connection_pool()

    console.print(
        Panel(
            f"[green]✅ biasdesk initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Sources: {sources_path}\n\n"
            f"Next steps:\n"
            f"1. Set database password: [bold]export BIASDESK_DB_PASSWORD=your_password[/bold]\n"
            f"2. Try a cycle: [bold]biasdesk match[/bold]\n"
            f"3. Keep snapshots fresh: [bold]biasdesk serve[/bold]",
            style="green",
        )
    )
