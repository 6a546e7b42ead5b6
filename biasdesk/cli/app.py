"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .common import setup_logging
from .init import init_command
from .match import by_bias_command, match_command
from .snapshot import refresh_command, serve_command, show_command
from .sources import sources_app

app = typer.Typer(
    name="biasdesk",
    help="Compare how progressive, centrist and conservative outlets cover the same story",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    setup_logging(verbose)


# Register commands
app.command("init")(init_command)
app.command("match")(match_command)
app.command("by-bias")(by_bias_command)
app.command("refresh")(refresh_command)
app.command("show")(show_command)
app.command("serve")(serve_command)
app.add_typer(sources_app, name="sources", help="Manage RSS sources")


if __name__ == "__main__":
    app()
