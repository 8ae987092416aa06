"""Main Typer application for the Veo Studio CLI."""

import logging

import typer
from rich.logging import RichHandler

from veostudio import __version__
from veostudio.cli.commands.config_cmd import config
from veostudio.cli.commands.generate import generate
from veostudio.cli.ui.console import console

app = typer.Typer(
    name="veostudio",
    help="Generate, retry and extend short videos with Google Veo.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"veostudio version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logs through Rich; DEBUG when verbose, warnings otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    if verbose:
        # The SDK's HTTP stack is noisy at DEBUG
        for name in ("httpx", "httpcore", "google_genai"):
            logging.getLogger(name).setLevel(logging.INFO)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logs, including every operation status check.",
    ),
) -> None:
    """Veo Studio: generate videos from text, frames, reference images or a previous clip.

    Quick start: run [bold]veostudio generate "a cat surfing at sunset"[/bold].

    Setup: run [bold]veostudio config --check[/bold] to verify that your
    GEMINI_API_KEY is configured.
    """
    configure_logging(verbose)


app.command()(generate)
app.command()(config)
