"""
smfreader - Standard MIDI File decoder.

A command-line tool for inspecting and validating .mid files.
"""

from typing import Optional

import typer
from rich.console import Console

from cli.commands.chunks import chunks
from cli.commands.dump import dump
from cli.commands.info import info
from cli.commands.validate import validate
from smfreader import __version__
from smfreader.log import setup_logging

console = Console()

# Main app
app = typer.Typer(
    name="smfreader",
    help="Decode and inspect Standard MIDI Files.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="info")(info)
app.command(name="chunks")(chunks)
app.command(name="dump")(dump)
app.command(name="validate")(validate)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]smfreader[/bold] version {__version__}")
    console.print("[dim]Standard MIDI File decoder[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-L", help="Log level for decoder messages (e.g. DEBUG, WARNING)"
    ),
) -> None:
    """
    smfreader - Decode and inspect Standard MIDI Files.

    Reads format 0 and format 1 files with PPQN timing.

    [bold]Commands:[/bold]

        smfreader info song.mid       # Header, tracks and anomalies
        smfreader chunks song.mid     # Chunk structure
        smfreader dump song.mid       # Hex dump
        smfreader validate song.mid   # Structural validation

    Use --help with any command for more details.
    """
    setup_logging(log_level)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
