"""Rich console singleton and styled output helpers for the Veo Studio CLI."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from veostudio.models.request import GenerateVideoParams
from veostudio.state.models import GenerationSession, SessionState

# Singleton console instance used throughout the CLI
console = Console()

BRAND_COLOR = "magenta"
SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"
ERROR_COLOR = "red"
MUTED_COLOR = "dim"


def print_header(title: str) -> None:
    """Print a styled header panel for a CLI section."""
    console.print(
        Panel(
            Text(title, style=f"bold {BRAND_COLOR}", justify="center"),
            border_style=BRAND_COLOR,
            padding=(1, 2),
        )
    )


def print_success(message: str) -> None:
    console.print(f"[{SUCCESS_COLOR}]\\[+][/{SUCCESS_COLOR}] {message}")


def print_warning(message: str) -> None:
    console.print(f"[{WARNING_COLOR}]\\[!][/{WARNING_COLOR}] {message}")


def print_error(message: str) -> None:
    console.print(f"[{ERROR_COLOR}]\\[x][/{ERROR_COLOR}] {message}")


def print_info(message: str) -> None:
    console.print(f"[{BRAND_COLOR}]\\[*][/{BRAND_COLOR}] {message}")


def print_muted(message: str) -> None:
    console.print(f"[{MUTED_COLOR}]{message}[/{MUTED_COLOR}]")


def print_key_value_table(
    title: str, data: dict[str, str], title_style: str = BRAND_COLOR
) -> None:
    """Print a two-column key-value table."""
    table = Table(title=title, title_style=title_style, show_header=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, value)
    console.print(table)


def print_request_summary(request: GenerateVideoParams, cost: float) -> None:
    """Show what is about to be submitted, including attached media."""
    details = {
        "Mode": str(request.mode),
        "Model": str(request.model),
        "Format": f"{request.resolution} {request.aspect_ratio}",
        "Prompt": escape(request.prompt) or "[dim](none)[/dim]",
    }
    if request.start_frame is not None:
        details["Start Frame"] = escape(request.start_frame.name)
    if request.end_frame is not None:
        details["End Frame"] = escape(request.end_frame.name)
    if request.is_looping:
        details["Looping"] = "yes"
    if request.reference_images:
        details["References"] = escape(", ".join(img.name for img in request.reference_images))
    if request.style_image is not None:
        details["Style"] = escape(request.style_image.name)
    if request.input_video is not None:
        details["Input Video"] = escape(request.input_video.name)
    details["Estimated Cost"] = f"${cost:.2f}"
    print_key_value_table("Request", details)


def print_session_outcome(session: GenerationSession) -> None:
    """Report a finished attempt: where the video is, or what went wrong."""
    if session.state == SessionState.SUCCEEDED and session.video is not None:
        print_success(f"Video ready: {escape(str(session.video.path))}")
        return

    if session.state == SessionState.SUCCEEDED:
        print_error("Video generated, but its file is missing. Please try again.")
        return

    if session.state == SessionState.FAILED and session.error is not None:
        console.print(
            Panel(
                Text(session.error.user_message, style=ERROR_COLOR),
                title=f"Error ({session.error.kind})",
                title_align="left",
                border_style=ERROR_COLOR,
            )
        )
