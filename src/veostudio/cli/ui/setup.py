"""Setup check for API key detection and configuration guidance."""

from pathlib import Path

from veostudio.config.settings import Settings

from .console import console, print_error, print_info, print_muted, print_success


def run_setup_check(settings: Settings) -> bool:
    """Check the API key configuration, printing guidance for anything missing.

    Returns:
        True if all required configuration is present, False otherwise.
    """
    missing_keys = settings.get_missing_api_keys()
    if not missing_keys:
        print_success("All required configuration is present.")
        return True

    print_error("Missing required API keys:")
    console.print()
    for key in missing_keys:
        print_error(_KEY_HELP.get(key, f"{key} is not set."))
    console.print()
    print_info("Set keys using one of these methods:")
    print_muted("  1. Create a .env file:  GEMINI_API_KEY=...")
    print_muted("  2. Export in your shell: export GEMINI_API_KEY=...")
    print_muted("  3. Enter a key when 'veostudio generate' asks for one")

    if not Path(".env").exists() and Path(".env.example").exists():
        console.print()
        print_info("Tip: Copy .env.example to .env and fill in your API key:")
        print_muted("  cp .env.example .env")

    return False


_KEY_HELP: dict[str, str] = {
    "GEMINI_API_KEY": (
        "GEMINI_API_KEY is not set. "
        "Get one at https://aistudio.google.com/apikey"
    ),
}
