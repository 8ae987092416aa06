"""Google Veo client for the generation lifecycle.

Wraps the google-genai SDK. Unlike a fire-and-wait helper, the client
exposes the three steps of a long-running generation separately
(submit, query status, fetch artifact) so the orchestrator can own the
polling loop, timeouts and supersession.

The SDK calls are synchronous, so each one is pushed to a thread via
asyncio.to_thread() to keep the event loop responsive.
"""

import asyncio
import logging
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import unquote, urlencode

from google import genai
from google.genai import types

from veostudio.models.request import GenerateVideoParams, GenerationMode, MediaFile

from .base import CredentialProviderProtocol, OperationStatus, RemoteArtifact, VideoAPIError

logger = logging.getLogger(__name__)

# Veo 3.1 produces 8-second clips
CLIP_SECONDS = 8

# Per-second cost by model variant (Veo 3.x always generates audio natively)
_COST_PER_SECOND: dict[str, float] = {
    "veo-3.1-fast-generate-preview": 0.15,
    "veo-3.1-generate-preview": 0.40,
}

_DOWNLOAD_TIMEOUT = 120.0


def _image(media: MediaFile) -> types.Image:
    return types.Image(image_bytes=media.data, mime_type=media.mime_type)


def build_generate_kwargs(params: GenerateVideoParams) -> dict[str, Any]:
    """Map a request onto keyword arguments for ``models.generate_videos``.

    Only the media belonging to ``params.mode`` is sent. Extend requests
    omit the aspect ratio because the API derives it from the input video.
    """
    config = types.GenerateVideosConfig(
        number_of_videos=1,
        resolution=params.resolution.value,
    )
    if params.mode != GenerationMode.EXTEND_VIDEO:
        config.aspect_ratio = params.aspect_ratio.value

    kwargs: dict[str, Any] = {"model": params.model.value, "config": config}
    if params.prompt:
        kwargs["prompt"] = params.prompt

    if params.mode == GenerationMode.FRAMES_TO_VIDEO:
        if params.start_frame is not None:
            kwargs["image"] = _image(params.start_frame)
        last_frame = params.start_frame if params.is_looping else params.end_frame
        if last_frame is not None:
            config.last_frame = _image(last_frame)

    elif params.mode == GenerationMode.REFERENCES_TO_VIDEO:
        references = [
            types.VideoGenerationReferenceImage(
                image=_image(img),
                reference_type=types.VideoGenerationReferenceType.ASSET,
            )
            for img in params.reference_images
        ]
        if params.style_image is not None:
            references.append(
                types.VideoGenerationReferenceImage(
                    image=_image(params.style_image),
                    reference_type=types.VideoGenerationReferenceType.STYLE,
                )
            )
        if references:
            config.reference_images = references

    elif params.mode == GenerationMode.EXTEND_VIDEO:
        if params.input_video_object is None:
            raise VideoAPIError("An input video object is required to extend a video.")
        kwargs["video"] = params.input_video_object

    return kwargs


def to_operation_status(operation: Any) -> OperationStatus:
    """Convert an SDK ``GenerateVideosOperation`` into an OperationStatus."""
    error: str | None = None
    if operation.error:
        if isinstance(operation.error, dict):
            error = str(operation.error.get("message") or operation.error)
        else:
            error = str(operation.error)

    artifacts: tuple[RemoteArtifact, ...] = ()
    reasons: tuple[str, ...] = ()
    response = operation.response
    if response is not None:
        artifacts = tuple(
            RemoteArtifact(
                uri=generated.video.uri if generated.video is not None else None,
                video=generated.video,
            )
            for generated in (response.generated_videos or [])
        )
        reasons = tuple(str(r) for r in (response.rai_media_filtered_reasons or ()))

    return OperationStatus(
        handle=operation,
        done=bool(operation.done),
        artifacts=artifacts,
        error=error,
        filtered_reasons=reasons,
    )


def authenticated_url(uri: str, api_key: str) -> str:
    """Append the API key to a content locator as a query parameter."""
    url = unquote(uri)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode({'key': api_key})}"


class VeoClient:
    """Google Veo client implementing VideoGenerationAPIProtocol.

    The genai client is built lazily from the credential provider and
    rebuilt whenever the active key changes, so a key selected after a
    rejected attempt takes effect on the next submit.
    """

    def __init__(
        self,
        credentials: CredentialProviderProtocol,
        client: Any | None = None,
        download_timeout: float = _DOWNLOAD_TIMEOUT,
    ) -> None:
        self.credentials = credentials
        self.download_timeout = download_timeout
        self._fixed_client = client
        self._client: genai.Client | None = None
        self._client_key: str | None = None

    @property
    def client(self) -> Any:
        if self._fixed_client is not None:
            return self._fixed_client
        key = self.credentials.api_key
        if self._client is None or key != self._client_key:
            self._client = genai.Client(api_key=key)
            self._client_key = key
        return self._client

    async def submit(self, params: GenerateVideoParams) -> OperationStatus:
        """Start a Veo generation for *params*.

        Raises:
            VideoAPIError: If an extend request carries no input video object.
            google.genai.errors.APIError: Propagated from the SDK unchanged.
        """
        kwargs = build_generate_kwargs(params)
        logger.info(
            "Submitting Veo generation: model=%s, mode=%s, resolution=%s",
            params.model,
            params.mode,
            params.resolution,
        )
        operation = await asyncio.to_thread(self.client.models.generate_videos, **kwargs)
        status = to_operation_status(operation)
        logger.debug("Veo operation started: %s", status.name)
        return status

    async def query_status(self, status: OperationStatus) -> OperationStatus:
        operation = await asyncio.to_thread(self.client.operations.get, status.handle)
        return to_operation_status(operation)

    async def fetch_artifact(self, artifact: RemoteArtifact) -> tuple[bytes, str]:
        """Download a generated video using the active API key.

        Returns:
            The video bytes and their MIME type.

        Raises:
            VideoAPIError: If the artifact has no URI or the server
                answers with an HTTP error.
        """
        if not artifact.uri:
            raise VideoAPIError("Generated video is missing a URI.")
        url = authenticated_url(artifact.uri, self.credentials.api_key)
        return await asyncio.to_thread(self._download, url)

    def _download(self, url: str) -> tuple[bytes, str]:
        logger.debug("Downloading generated video")
        try:
            with urllib.request.urlopen(  # noqa: S310
                url, timeout=self.download_timeout
            ) as response:
                data = response.read()
                content_type = response.headers.get("Content-Type") or "video/mp4"
        except urllib.error.HTTPError as exc:
            raise VideoAPIError(f"Failed to fetch video: {exc.code} {exc.reason}") from exc

        mime_type = content_type.split(";", 1)[0].strip() or "video/mp4"
        logger.info("Downloaded generated video (%d bytes)", len(data))
        return data, mime_type

    def estimate_cost(self, model: str, duration: int = CLIP_SECONDS) -> float:
        """Estimate cost in USD for generating *duration* seconds with *model*."""
        rate = _COST_PER_SECOND.get(model, _COST_PER_SECOND["veo-3.1-fast-generate-preview"])
        return duration * rate
