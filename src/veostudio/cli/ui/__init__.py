"""CLI UI components for Veo Studio."""

from .console import (
    console,
    print_error,
    print_header,
    print_info,
    print_key_value_table,
    print_muted,
    print_request_summary,
    print_session_outcome,
    print_success,
    print_warning,
)
from .progress import SessionStatusRelay, describe_session
from .prompts import choose_action, confirm_action, prompt_api_key, prompt_user_input
from .setup import run_setup_check

__all__ = [
    "SessionStatusRelay",
    "choose_action",
    "confirm_action",
    "console",
    "describe_session",
    "print_error",
    "print_header",
    "print_info",
    "print_key_value_table",
    "print_muted",
    "print_request_summary",
    "print_session_outcome",
    "print_success",
    "print_warning",
    "prompt_api_key",
    "prompt_user_input",
    "run_setup_check",
]
