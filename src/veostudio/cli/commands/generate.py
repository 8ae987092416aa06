"""Generate command: submit a video generation and follow up on the result."""

import asyncio
from collections.abc import Awaitable
from pathlib import Path

import typer
from rich.markup import escape

from veostudio.api import SettingsCredentialProvider, VeoClient
from veostudio.assets import ArtifactStoreError, load_image
from veostudio.cli.ui.console import (
    console,
    print_error,
    print_header,
    print_info,
    print_request_summary,
    print_session_outcome,
    print_success,
    print_warning,
)
from veostudio.cli.ui.progress import SessionStatusRelay
from veostudio.cli.ui.prompts import (
    choose_action,
    confirm_action,
    prompt_api_key,
    prompt_user_input,
)
from veostudio.config import load_settings
from veostudio.core import (
    ExtensionError,
    GenerationOrchestrator,
    RawRequestInputs,
    RequestBuilder,
    RequestValidationError,
)
from veostudio.models import AspectRatio, GenerateVideoParams, GenerationMode, Resolution, VeoModel
from veostudio.state import GenerationSession, SessionState


def _load_inputs(
    prompt: str,
    mode: GenerationMode,
    model: VeoModel | None,
    aspect_ratio: AspectRatio | None,
    resolution: Resolution | None,
    start_frame: Path | None,
    end_frame: Path | None,
    loop: bool,
    references: list[Path],
    style: Path | None,
) -> RawRequestInputs:
    """Encode the media options and collect everything into raw form inputs."""
    return RawRequestInputs(
        prompt=prompt,
        mode=mode,
        model=model,
        aspect_ratio=aspect_ratio,
        resolution=resolution,
        start_frame=load_image(start_frame) if start_frame else None,
        end_frame=load_image(end_frame) if end_frame else None,
        is_looping=loop,
        reference_images=[load_image(path) for path in references],
        style_image=load_image(style) if style else None,
    )


def _follow_up_options(orchestrator: GenerationOrchestrator) -> dict[str, str]:
    session = orchestrator.session
    options: dict[str, str] = {}
    if session.state == SessionState.SUCCEEDED:
        if orchestrator.can_extend:
            options["extend"] = "Extend this video"
        options["retry"] = "Regenerate with the same request"
    elif session.state == SessionState.FAILED:
        options["retry"] = "Retry the same request"
        options["edit"] = "Try again with the same inputs (edit the prompt)"
    else:
        options["edit"] = "Edit the prompt and submit"
    options["new"] = "Start a new video"
    options["quit"] = "Quit"
    return options


class StudioSession:
    """Interactive loop around one orchestrator, mirroring the studio UI."""

    def __init__(
        self,
        orchestrator: GenerationOrchestrator,
        builder: RequestBuilder,
        relay: SessionStatusRelay,
    ) -> None:
        self.orchestrator = orchestrator
        self.builder = builder
        self.relay = relay

    async def _step(self, command: Awaitable[GenerationSession]) -> GenerationSession:
        with self.relay.spinning():
            session = await command
        print_session_outcome(session)
        return session

    def _build(self, raw: RawRequestInputs) -> GenerateVideoParams | None:
        try:
            return self.builder.build(raw)
        except RequestValidationError as exc:
            for reason in exc.reasons:
                print_error(reason)
            return None

    async def run(self, request: GenerateVideoParams, interactive: bool) -> GenerationSession:
        session = await self._step(self.orchestrator.submit(request))

        while True:
            if session.credential_selection_requested and interactive:
                if confirm_action("Select a different API key and retry?", default=True):
                    # The key prompt cannot run under a spinner
                    session = await self.orchestrator.select_credential()
                    print_session_outcome(session)
                    continue

            if not interactive:
                return session

            console.print()
            choice = choose_action(_follow_up_options(self.orchestrator))
            if choice == "quit":
                return session

            if choice == "retry":
                session = await self._step(self.orchestrator.retry())
                continue

            next_request = self._next_request(choice)
            if next_request is None:
                session = self.orchestrator.session
                continue
            session = await self._step(self.orchestrator.submit(next_request))

    def _next_request(self, choice: str) -> GenerateVideoParams | None:
        """Turn a follow-up choice into the next request to submit.

        Returns None when the edited inputs were invalid; the orchestrator
        is then idle and keeps the pre-fill for another edit.
        """
        if choice == "extend":
            try:
                prefill = self.orchestrator.extend()
            except ExtensionError as exc:
                print_error(escape(str(exc)))
                return None
            print_info("Describe what should happen next (optional).")
            raw = RawRequestInputs.from_params(prefill)
            raw.prompt = prompt_user_input("Extend prompt> ")
            return self._build(raw)

        if choice == "edit":
            if self.orchestrator.session.state == SessionState.IDLE:
                prefill = self.orchestrator.prefill
            else:
                prefill = self.orchestrator.try_again()
            raw = RawRequestInputs.from_params(prefill) if prefill else RawRequestInputs()
            current = escape(raw.prompt)
            raw.prompt = prompt_user_input(f"Prompt \\[{current}]> ", default=raw.prompt)
            return self._build(raw)

        if choice == "new":
            self.orchestrator.reset()
            raw = RawRequestInputs(prompt=prompt_user_input("Prompt> "))
            return self._build(raw)

        return None


def generate(
    prompt: str = typer.Argument("", help="Text prompt describing the video."),
    mode: GenerationMode = typer.Option(
        GenerationMode.TEXT_TO_VIDEO,
        "--mode",
        "-m",
        help="Generation mode.",
    ),
    model: VeoModel | None = typer.Option(
        None, "--model", help="Veo model. Defaults to the configured model."
    ),
    aspect_ratio: AspectRatio | None = typer.Option(
        None, "--aspect-ratio", "-a", help="16:9 (landscape) or 9:16 (portrait)."
    ),
    resolution: Resolution | None = typer.Option(
        None, "--resolution", "-r", help="720p or 1080p. Only 720p videos can be extended."
    ),
    start_frame: Path | None = typer.Option(
        None, "--start-frame", help="Start frame image (frames-to-video)."
    ),
    end_frame: Path | None = typer.Option(
        None, "--end-frame", help="End frame image (frames-to-video)."
    ),
    loop: bool = typer.Option(
        False, "--loop", help="Loop back to the start frame (frames-to-video)."
    ),
    reference: list[Path] = typer.Option(
        [], "--reference", help="Reference image, up to 3 (references-to-video)."
    ),
    style: Path | None = typer.Option(
        None, "--style", help="Style image (references-to-video)."
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Copy the final video to this path."
    ),
    interactive: bool = typer.Option(
        True,
        "--interactive/--no-interactive",
        help="Offer retry, extend and restart after each attempt.",
    ),
    config_file: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration YAML file.",
    ),
) -> None:
    """Generate a video with Google Veo.

    Submits the request, polls the long-running operation until the video
    is ready (or the status-check budget runs out) and downloads it.
    After each attempt you can retry, edit the prompt, extend a 720p
    result, or start over.

    Requires: GEMINI_API_KEY in .env or the environment (you will be
    asked for a key if it is missing or rejected).
    """
    settings = load_settings(config_file)
    builder = RequestBuilder(settings.generation)

    try:
        raw = _load_inputs(
            prompt, mode, model, aspect_ratio, resolution,
            start_frame, end_frame, loop, reference, style,
        )
    except (FileNotFoundError, ValueError) as exc:
        print_error(escape(str(exc)))
        raise typer.Exit(code=1)

    try:
        request = builder.build(raw)
    except RequestValidationError as exc:
        for reason in exc.reasons:
            print_error(reason)
        raise typer.Exit(code=1)

    credentials = SettingsCredentialProvider(
        settings, prompt_fn=prompt_api_key if interactive else None
    )
    client = VeoClient(credentials)
    relay = SessionStatusRelay(settings.generation.max_polls)
    orchestrator = GenerationOrchestrator.from_settings(
        settings, client, credentials, listeners=[relay]
    )

    print_header("Veo Studio")
    print_request_summary(request, client.estimate_cost(request.model))

    studio = StudioSession(orchestrator, builder, relay)
    try:
        session = asyncio.run(studio.run(request, interactive))
    except KeyboardInterrupt:
        console.print("\n")
        print_warning("Generation interrupted.")
        raise typer.Exit(code=0)

    if output is not None and session.state == SessionState.SUCCEEDED:
        try:
            saved = orchestrator.store.save_copy(output)
        except ArtifactStoreError as exc:
            print_error(escape(str(exc)))
            raise typer.Exit(code=1)
        print_success(f"Saved video to {escape(str(saved))}")

    if session.state != SessionState.SUCCEEDED:
        raise typer.Exit(code=1)
