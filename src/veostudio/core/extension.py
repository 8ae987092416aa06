"""Derive a follow-up "extend" request from a finished generation."""

import logging

from veostudio.models.request import (
    GenerateVideoParams,
    GenerationMode,
    MediaFile,
    Resolution,
)
from veostudio.state.models import GeneratedVideo

logger = logging.getLogger(__name__)

EXTEND_INPUT_NAME = "last_video.mp4"


class ExtensionError(ValueError):
    """Raised when a result cannot be extended."""


def can_extend(request: GenerateVideoParams | None, video: GeneratedVideo | None) -> bool:
    """Whether *video*, produced by *request*, can seed an extend request.

    The API only extends videos generated at 720p, and it needs the
    remote video object returned with the result.
    """
    return (
        request is not None
        and video is not None
        and video.video is not None
        and request.resolution == Resolution.P720
    )


def derive_extend_request(
    prior: GenerateVideoParams, video: GeneratedVideo | None
) -> GenerateVideoParams:
    """Build the extend request that continues *video*.

    Model and aspect ratio carry over from *prior*. The prompt is blank
    for the user to fill in, looping is off and every non-extend media
    field is cleared.

    Raises:
        ExtensionError: If there is no usable video or *prior* was not 720p.
    """
    if video is None or video.video is None:
        raise ExtensionError("There is no generated video to extend.")
    if prior.resolution != Resolution.P720:
        raise ExtensionError(
            f"Only 720p videos can be extended; this one is {prior.resolution}."
        )

    extended = GenerateVideoParams(
        prompt="",
        model=prior.model,
        aspect_ratio=prior.aspect_ratio,
        resolution=Resolution.P720,
        mode=GenerationMode.EXTEND_VIDEO,
        input_video=MediaFile(
            name=EXTEND_INPUT_NAME, mime_type=video.mime_type, data=video.data
        ),
        input_video_object=video.video,
        is_looping=False,
    )
    logger.info("Prepared extend request from %s (%s)", video.uri, prior.mode)
    return extended
