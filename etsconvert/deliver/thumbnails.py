"""
Thumbnails: Elastic Transcoder preset thumbnails become a MediaConvert
frame capture output.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from etsconvert.deliver.geometry import scaling_behavior
from etsconvert.source.tracking import path_of
from etsconvert.source.values import parse_int

if TYPE_CHECKING:
    from etsconvert.reporting.models import MessageLog


def frame_capture_output(thumbnails: Any, log: "MessageLog") -> Optional[Dict[str, Any]]:
    """
    MediaConvert output settings for Elastic Transcoder preset thumbnails.

    One frame every `interval` seconds is captured as JPEG.
    """
    if not thumbnails:
        return None

    if thumbnails.get("format") == "png":
        log.warn(path_of(thumbnails, "format"), "MediaConvert does not support PNG thumbnails.")

    return {
        "containerSettings": {"container": "RAW"},
        "videoDescription": {
            "codecSettings": {
                "codec": "FRAME_CAPTURE",
                "frameCaptureSettings": {
                    "framerateNumerator": 1,
                    "framerateDenominator": parse_int(thumbnails.get("interval")),
                },
            },
            "width": parse_int(thumbnails.get("maxWidth")),
            "height": parse_int(thumbnails.get("maxHeight")),
            "scalingBehavior": scaling_behavior(thumbnails, log),
        },
    }


def thumbnail_name_modifier(pattern: str, thumbnails: Any) -> Optional[str]:
    """Name modifier standing in for the {resolution} token of a thumbnail pattern."""
    if "{resolution}" not in pattern:
        return None
    return f"-{thumbnails.get('maxWidth')}x{thumbnails.get('maxHeight')}"
