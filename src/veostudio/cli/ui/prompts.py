"""User input prompts and confirmation dialogs for the Veo Studio CLI."""

import typer

from .console import console


def prompt_user_input(message: str = "> ", default: str = "") -> str:
    """Prompt the user for text input, returning *default* on an empty line."""
    value = console.input(f"[bold]{message}[/bold]").strip()
    return value or default


def confirm_action(message: str, default: bool = False) -> bool:
    return typer.confirm(message, default=default)


def prompt_api_key() -> str | None:
    """Ask for a Gemini API key without echoing it.

    Returns:
        The entered key, or None if the user left it blank.
    """
    console.print("Get a key at https://aistudio.google.com/apikey (billing must be enabled).")
    key = typer.prompt("Gemini API key", default="", hide_input=True, show_default=False)
    return key.strip() or None


def choose_action(options: dict[str, str]) -> str:
    """Show a numbered menu and return the chosen option key.

    Args:
        options: Mapping of option key to label, in display order.
    """
    keys = list(options)
    for number, key in enumerate(keys, start=1):
        console.print(f"  [bold]{number}[/bold]. {options[key]}")
    while True:
        answer = typer.prompt("Choose", default="1").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(keys):
            return keys[int(answer) - 1]
        if answer in options:
            return answer
        console.print(f"Enter a number between 1 and {len(keys)}.")
