"""Request construction from raw user inputs.

The builder is the only place a ``GenerateVideoParams`` is created from
user input. It reports every violated rule at once so the user can fix
the form in one pass, and it never contacts the remote API.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from veostudio.config.settings import GenerationSettings
from veostudio.models.request import (
    AspectRatio,
    GenerateVideoParams,
    GenerationMode,
    MediaFile,
    Resolution,
    VeoModel,
    mode_media_problems,
)

logger = logging.getLogger(__name__)


class RequestValidationError(ValueError):
    """Raised when raw inputs cannot form a valid request.

    Attributes:
        reasons: One human-readable message per violated rule.
    """

    def __init__(self, reasons: list[str]) -> None:
        self.reasons = list(reasons)
        super().__init__("; ".join(self.reasons))


class RawRequestInputs(BaseModel):
    """Form values as entered by the user, before validation.

    Unset model, aspect ratio and resolution fall back to the configured
    generation defaults.
    """

    prompt: str = ""
    mode: GenerationMode = GenerationMode.TEXT_TO_VIDEO
    model: VeoModel | None = None
    aspect_ratio: AspectRatio | None = None
    resolution: Resolution | None = None
    start_frame: MediaFile | None = None
    end_frame: MediaFile | None = None
    is_looping: bool = False
    reference_images: list[MediaFile] = Field(default_factory=list)
    style_image: MediaFile | None = None
    input_video: MediaFile | None = None
    input_video_object: Any = None

    @classmethod
    def from_params(cls, params: GenerateVideoParams) -> "RawRequestInputs":
        """Pre-fill the form from an existing request."""
        return cls(
            prompt=params.prompt,
            mode=params.mode,
            model=params.model,
            aspect_ratio=params.aspect_ratio,
            resolution=params.resolution,
            start_frame=params.start_frame,
            end_frame=params.end_frame,
            is_looping=params.is_looping,
            reference_images=list(params.reference_images),
            style_image=params.style_image,
            input_video=params.input_video,
            input_video_object=params.input_video_object,
        )


class RequestBuilder:
    """Builds validated generation requests."""

    def __init__(self, defaults: GenerationSettings | None = None) -> None:
        self.defaults = defaults or GenerationSettings()

    def build(self, raw: RawRequestInputs) -> GenerateVideoParams:
        """Validate *raw* and return the canonical request.

        Raises:
            RequestValidationError: Listing every violated rule.
        """
        fields = self._canonical_fields(raw)
        reasons = self._prompt_problems(raw.mode, fields)
        reasons.extend(mode_media_problems(GenerateVideoParams.model_construct(**fields)))
        if reasons:
            logger.debug("Rejected %s request: %s", raw.mode, reasons)
            raise RequestValidationError(reasons)

        try:
            return GenerateVideoParams(**fields)
        except ValidationError as exc:
            raise RequestValidationError(
                [str(err["msg"]) for err in exc.errors()]
            ) from exc

    def _canonical_fields(self, raw: RawRequestInputs) -> dict[str, Any]:
        model = raw.model or VeoModel(self.defaults.model)
        aspect_ratio = raw.aspect_ratio or AspectRatio(self.defaults.aspect_ratio)
        resolution = raw.resolution or Resolution(self.defaults.resolution)

        if raw.mode == GenerationMode.REFERENCES_TO_VIDEO:
            # Reference images are only accepted by the standard model at 16:9 / 720p
            forced = (VeoModel.VEO, AspectRatio.LANDSCAPE, Resolution.P720)
            if (model, aspect_ratio, resolution) != forced:
                logger.info(
                    "References-to-video uses %s at %s/%s; overriding %s at %s/%s",
                    *forced,
                    model,
                    aspect_ratio,
                    resolution,
                )
            model, aspect_ratio, resolution = forced
        elif raw.mode == GenerationMode.EXTEND_VIDEO and resolution != Resolution.P720:
            logger.info("Extend-video only supports 720p; overriding %s", resolution)
            resolution = Resolution.P720

        return {
            "prompt": raw.prompt.strip(),
            "model": model,
            "aspect_ratio": aspect_ratio,
            "resolution": resolution,
            "mode": raw.mode,
            "start_frame": raw.start_frame,
            "end_frame": raw.end_frame,
            "is_looping": raw.is_looping,
            "reference_images": tuple(raw.reference_images),
            "style_image": raw.style_image,
            "input_video": raw.input_video,
            "input_video_object": raw.input_video_object,
        }

    @staticmethod
    def _prompt_problems(mode: GenerationMode, fields: dict[str, Any]) -> list[str]:
        problems: list[str] = []
        if mode == GenerationMode.TEXT_TO_VIDEO and not fields["prompt"]:
            problems.append("A prompt is required for text-to-video")
        elif mode == GenerationMode.REFERENCES_TO_VIDEO:
            if not fields["prompt"]:
                problems.append("A prompt is required for references-to-video")
            if not fields["reference_images"]:
                problems.append("References-to-video requires at least one reference image")
        return problems


def build_request(
    raw: RawRequestInputs, defaults: GenerationSettings | None = None
) -> GenerateVideoParams:
    """Convenience function wrapping ``RequestBuilder(defaults).build(raw)``."""
    return RequestBuilder(defaults).build(raw)
