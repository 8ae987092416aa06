"""Generation request models for Veo Studio.

A ``GenerateVideoParams`` value describes exactly one generation attempt.
It is frozen: deriving a follow-up request (retry, extend) always builds
a new value. The model validator enforces the per-mode media rules, so
an invalid request cannot be constructed at all.
"""

import base64
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Veo 3.1 accepts at most three asset reference images per request
MAX_REFERENCE_IMAGES = 3


class VeoModel(StrEnum):
    """Veo model variants offered by the studio."""

    VEO_FAST = "veo-3.1-fast-generate-preview"
    VEO = "veo-3.1-generate-preview"


class AspectRatio(StrEnum):
    """Output aspect ratio."""

    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


class Resolution(StrEnum):
    """Output resolution."""

    P720 = "720p"
    P1080 = "1080p"


class GenerationMode(StrEnum):
    """How the prompt and attached media are combined into a request."""

    TEXT_TO_VIDEO = "text-to-video"
    FRAMES_TO_VIDEO = "frames-to-video"
    REFERENCES_TO_VIDEO = "references-to-video"
    EXTEND_VIDEO = "extend-video"


class MediaFile(BaseModel):
    """An encoded image or video attachment held in memory."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Original file name, used for display")
    mime_type: str = Field(..., description="MIME type, e.g. image/png or video/mp4")
    data: bytes = Field(..., repr=False, description="Raw file bytes")

    @property
    def base64(self) -> str:
        """Wire encoding of the attachment."""
        return base64.b64encode(self.data).decode("ascii")

    @property
    def size(self) -> int:
        return len(self.data)


class GenerateVideoParams(BaseModel):
    """Immutable description of one video generation attempt."""

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(default="", description="Text prompt; optional in some modes")
    model: VeoModel = Field(default=VeoModel.VEO_FAST)
    aspect_ratio: AspectRatio = Field(default=AspectRatio.LANDSCAPE)
    resolution: Resolution = Field(default=Resolution.P720)
    mode: GenerationMode = Field(default=GenerationMode.TEXT_TO_VIDEO)

    # frames-to-video
    start_frame: MediaFile | None = None
    end_frame: MediaFile | None = None
    is_looping: bool = False

    # references-to-video
    reference_images: tuple[MediaFile, ...] = ()
    style_image: MediaFile | None = None

    # extend-video
    input_video: MediaFile | None = None
    input_video_object: Any = Field(
        default=None,
        description="Remote video handle returned by a previous generation",
    )

    @model_validator(mode="after")
    def _check_mode_media(self) -> "GenerateVideoParams":
        problems = mode_media_problems(self)
        if problems:
            raise ValueError("; ".join(problems))
        return self

    @property
    def has_frames(self) -> bool:
        return self.start_frame is not None or self.end_frame is not None

    @property
    def has_references(self) -> bool:
        return bool(self.reference_images) or self.style_image is not None

    @property
    def has_input_video(self) -> bool:
        return self.input_video is not None or self.input_video_object is not None


def mode_media_problems(params: GenerateVideoParams) -> list[str]:
    """Return every structural media rule the request breaks.

    Shared by the model validator and the request builder so both speak
    with the same messages.
    """
    problems: list[str] = []
    mode = params.mode

    if mode != GenerationMode.FRAMES_TO_VIDEO:
        if params.has_frames:
            problems.append(f"Start and end frames cannot be used in {mode} mode")
        if params.is_looping:
            problems.append("Looping is only available in frames-to-video mode")
    if mode != GenerationMode.REFERENCES_TO_VIDEO and params.has_references:
        problems.append(f"Reference and style images cannot be used in {mode} mode")
    if mode != GenerationMode.EXTEND_VIDEO and params.has_input_video:
        problems.append(f"An input video cannot be used in {mode} mode")

    if mode == GenerationMode.FRAMES_TO_VIDEO:
        if params.start_frame is None:
            problems.append("Frames-to-video requires a start frame")
        if params.is_looping and params.end_frame is not None:
            problems.append(
                "A looping video reuses the start frame; remove the end frame"
            )
    elif mode == GenerationMode.REFERENCES_TO_VIDEO:
        if len(params.reference_images) > MAX_REFERENCE_IMAGES:
            problems.append(
                f"At most {MAX_REFERENCE_IMAGES} reference images are allowed, "
                f"got {len(params.reference_images)}"
            )
    elif mode == GenerationMode.EXTEND_VIDEO:
        if params.input_video_object is None:
            problems.append("An input video object is required to extend a video")
        if params.resolution != Resolution.P720:
            problems.append("Extending a video is only supported at 720p")

    return problems
