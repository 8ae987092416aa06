"""Config command: view current configuration settings."""

import typer

from veostudio.cli.ui.console import (
    console,
    print_header,
    print_key_value_table,
    print_muted,
)
from veostudio.cli.ui.setup import run_setup_check
from veostudio.config import ConfigLoader, load_settings


def config(
    check: bool = typer.Option(
        False,
        "--check",
        help="Validate that the API key is configured.",
    ),
    config_file: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration YAML file.",
    ),
) -> None:
    """View current configuration and validate setup.

    Shows the generation defaults, the status-check budget and where
    videos are written. The API key is masked.
    """
    settings = load_settings(config_file)

    if check:
        if not run_setup_check(settings):
            raise typer.Exit(code=1)
        return

    print_header("Veo Studio Configuration")

    gemini = settings.api.gemini_api_key.get_secret_value()
    print_key_value_table(
        "API Key",
        {"GEMINI_API_KEY": _mask_key(gemini) if gemini else "[red]not set[/red]"},
    )
    console.print()

    generation = settings.generation
    print_key_value_table(
        "Generation Defaults",
        {
            "Model": generation.model,
            "Resolution": generation.resolution,
            "Aspect Ratio": generation.aspect_ratio,
        },
    )
    console.print()

    budget = generation.poll_interval * generation.max_polls
    print_key_value_table(
        "Status Checks",
        {
            "Interval": f"{generation.poll_interval:g}s",
            "Max Checks": str(generation.max_polls),
            "Gives Up After": f"~{budget:g}s",
        },
    )
    console.print()

    source = ConfigLoader(config_file).find_config_file()
    print_key_value_table(
        "Files",
        {
            "Output Directory": settings.output_dir,
            "Config File": str(source) if source else "[dim]none (defaults)[/dim]",
        },
    )

    print_muted("\nTip: run 'veostudio config --check' before your first generation.")


def _mask_key(key: str) -> str:
    """Show only the last 4 characters of *key*."""
    if len(key) <= 4:
        return "****"
    return "*" * (len(key) - 4) + key[-4:]
