"""
Geometry: output resolution, pixel aspect ratio, and scaling behavior.

Elastic Transcoder describes frame geometry with max width/height (or a
legacy "WxH" resolution), an aspect ratio or display aspect ratio, and a
sizing/padding policy pair. MediaConvert wants explicit width/height, a
pixel aspect ratio (PAR) fraction, and a single scaling behavior.

PAR derivation (DAR -> PAR):

    parNumerator   = dw * h
    parDenominator = dh * w
    both divided by gcd(parNumerator, parDenominator)

The display aspect ratio is tried first because it is defined against the
definite output bounds; the plain aspect ratio is the fallback.
"""

import re
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

from etsconvert.source.tracking import path_of
from etsconvert.source.values import is_auto, parse_int

if TYPE_CHECKING:
    from etsconvert.reporting.models import MessageLog

ASPECT_RATIO_RE = re.compile(r"^\d+:\d+$")
RESOLUTION_RE = re.compile(r"^\s*(\d+)\s*x\s*(\d+)\s*$")

SCALING_DOC_URL = "https://docs.aws.amazon.com/mediaconvert/latest/ug/video-scaling.html"


class Resolution(NamedTuple):
    width: Optional[int]
    height: Optional[int]

    @property
    def is_definite(self) -> bool:
        return self.width is not None and self.height is not None


class Par(NamedTuple):
    numerator: int
    denominator: int


# ============================================================================
# RESOLUTION
# ============================================================================

def get_resolution(video: Any) -> Optional[Resolution]:
    """
    Effective output resolution of Elastic Transcoder video parameters.

    Max width/height win over the resolution string; each may
    independently be "auto" (None). Returns None when nothing usable is
    specified.
    """
    if not video:
        return None

    max_width = video.get("maxWidth")
    max_height = video.get("maxHeight")

    if max_width or max_height:
        return Resolution(
            None if is_auto(max_width) else parse_int(max_width),
            None if is_auto(max_height) else parse_int(max_height),
        )

    resolution = video.get("resolution")
    if not isinstance(resolution, str) or is_auto(resolution):
        return None

    match = RESOLUTION_RE.match(resolution)
    if not match:
        return None

    return Resolution(int(match.group(1)), int(match.group(2)))


# ============================================================================
# PIXEL ASPECT RATIO
# ============================================================================

def gcd(a: int, b: int) -> int:
    """Euclid's algorithm. gcd(0, 0) is 0."""
    while b != 0:
        a, b = b, a % b
    return a


def dar_to_par(w: int, h: int, dw: int, dh: int) -> Optional[Par]:
    """
    Convert a resolution and display aspect ratio to a reduced PAR.

    Returns None for degenerate input (any value missing or < 1), which
    is the only guard: callers decide how to report it.
    """
    if any(not isinstance(v, int) or v < 1 for v in (w, h, dw, dh)):
        return None

    numerator = dw * h
    denominator = dh * w
    divisor = gcd(numerator, denominator)

    return Par(numerator // divisor, denominator // divisor)


def _parse_ratio(value: Any) -> Optional[tuple]:
    if not isinstance(value, str) or not ASPECT_RATIO_RE.match(value):
        return None
    left, right = value.split(":")
    return int(left), int(right)


def par_from_display_aspect_ratio(video: Any, log: "MessageLog") -> Optional[Par]:
    """PAR from displayAspectRatio against definite output bounds."""
    ratio = _parse_ratio(video.get("displayAspectRatio"))
    if ratio is None:
        return None

    resolution = get_resolution(video)
    definite_bounds = video.get("sizingPolicy") == "Stretch" or video.get("paddingPolicy") == "Pad"

    if not definite_bounds or resolution is None or not resolution.is_definite:
        log.warn(
            path_of(video, "displayAspectRatio"),
            "Video display aspect ratio cannot be converted to pixel aspect ratio without "
            "definite video resolution. Video `displayAspectRatio` setting is ignored.",
        )
        return None

    par = dar_to_par(resolution.width, resolution.height, *ratio)
    if par is None:
        log.warn(
            path_of(video, "displayAspectRatio"),
            "Video display aspect ratio cannot be converted to pixel aspect ratio. "
            "Video `displayAspectRatio` setting is ignored.",
        )
    return par


def par_from_aspect_ratio(video: Any, log: "MessageLog") -> Optional[Par]:
    """PAR from aspectRatio against the resolution."""
    ratio = _parse_ratio(video.get("aspectRatio"))
    if ratio is None:
        return None

    resolution = get_resolution(video)

    if resolution is None or not resolution.is_definite:
        log.warn(
            path_of(video, "aspectRatio"),
            "Video aspect ratio cannot be converted to pixel aspect ratio without resolution. "
            "Video `aspectRatio` setting is ignored.",
        )
        return None

    par = dar_to_par(resolution.width, resolution.height, *ratio)
    if par is None:
        log.warn(
            path_of(video, "aspectRatio"),
            "Video aspect ratio cannot be converted to pixel aspect ratio. "
            "Video `aspectRatio` setting is ignored.",
        )
    return par


def get_par(video: Any, log: "MessageLog") -> Optional[Par]:
    """
    Pixel aspect ratio of Elastic Transcoder video parameters.

    None means "let MediaConvert apply its default".
    """
    if not video:
        return None

    return par_from_display_aspect_ratio(video, log) or par_from_aspect_ratio(video, log)


# ============================================================================
# SCALING BEHAVIOR
# ============================================================================

# Keys are (sizingPolicy, paddingPolicy). None means MediaConvert's default
# behavior, which is fit with padding.
SCALING_BEHAVIOR_MAP = {
    ("Fit", "NoPad"): "FIT",
    ("Fit", "Pad"): None,
    ("Fill", "NoPad"): "FILL",
    ("Fill", "Pad"): "FILL",
    ("Stretch", "NoPad"): "STRETCH_TO_OUTPUT",
    ("Stretch", "Pad"): "STRETCH_TO_OUTPUT",
    ("Keep", "NoPad"): None,
    ("Keep", "Pad"): None,
    ("ShrinkToFit", "NoPad"): "FIT_NO_UPSCALE",
    ("ShrinkToFit", "Pad"): "FIT_NO_UPSCALE",  # no padding in MediaConvert
    ("ShrinkToFill", "NoPad"): "FILL",
    ("ShrinkToFill", "Pad"): "FILL",
}


def scaling_behavior(model: Any, log: "MessageLog") -> Optional[str]:
    """
    MediaConvert scalingBehavior for an object with sizing/padding policy
    (video parameters or thumbnails).
    """
    sizing = model.get("sizingPolicy")
    padding = model.get("paddingPolicy")

    if sizing == "Keep":
        log.warn(
            path_of(model, "sizingPolicy"),
            'MediaConvert does not have equivalent "Keep" sizing policy. '
            "The default sizing policy will be used, which is fit with padding. "
            f"For more info see {SCALING_DOC_URL}",
        )
    elif sizing == "ShrinkToFill":
        log.warn(
            path_of(model, "sizingPolicy"),
            'MediaConvert does not have equivalent "ShrinkToFill" sizing policy. '
            'The sizing policy "Fill" is used. '
            f"For more info see {SCALING_DOC_URL}",
        )
    elif sizing == "ShrinkToFit" and padding == "Pad":
        log.warn(
            path_of(model, "sizingPolicy"),
            "MediaConvert does not add padding when you choose Fit without upscaling. "
            f"For more info see {SCALING_DOC_URL}",
        )

    return SCALING_BEHAVIOR_MAP.get((sizing, padding))
