"""
Video codec registry: Elastic Transcoder codecs and their MediaConvert
counterparts.

This is the ONLY place codec identity is defined. Every variant owns:
- the MediaConvert codec name
- the codec-specific settings key ("h264Settings", ...)
- which rate control modes apply

Lookup tables for framerate, interlace mode and profiles live here as
plain data so they can be audited against the service documentation.
"""

from enum import Enum
from typing import Dict, Optional, Tuple


class RateControlMode(str, Enum):
    CBR = "CBR"
    VBR = "VBR"
    QVBR = "QVBR"


class VideoCodec(str, Enum):
    """Elastic Transcoder video codecs (closed set)."""

    H264 = "H.264"
    MPEG2 = "mpeg2"
    VP8 = "vp8"
    VP9 = "vp9"
    GIF = "gif"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["VideoCodec"]:
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def target(self) -> str:
        """MediaConvert codec name."""
        return _TARGET_CODECS[self]

    @property
    def settings_key(self) -> str:
        return _SETTINGS_KEYS[self]

    @property
    def has_bitrate(self) -> bool:
        """Whether the MediaConvert codec has bitrate/rate control settings."""
        return self is not VideoCodec.GIF


_TARGET_CODECS: Dict[VideoCodec, str] = {
    VideoCodec.H264: "H_264",
    VideoCodec.MPEG2: "MPEG2",
    VideoCodec.VP8: "VP8",
    VideoCodec.VP9: "VP9",
    VideoCodec.GIF: "GIF",
}

_SETTINGS_KEYS: Dict[VideoCodec, str] = {
    VideoCodec.H264: "h264Settings",
    VideoCodec.MPEG2: "mpeg2Settings",
    VideoCodec.VP8: "vp8Settings",
    VideoCodec.VP9: "vp9Settings",
    VideoCodec.GIF: "gifSettings",
}


# Elastic Transcoder frame rate -> (framerateNumerator, framerateDenominator).
# "auto" and unknown values use the MediaConvert default (follow source).
FRAMERATE_MAP: Dict[str, Tuple[int, int]] = {
    "10": (10, 1),
    "15": (15, 1),
    "23.97": (24000, 1001),
    "24": (24, 1),
    "25": (25, 1),
    "29.97": (30000, 1001),
    "30": (30, 1),
    "50": (50, 1),
    "60": (60, 1),
}

# None is the MediaConvert default, which is progressive.
INTERLACE_MODE_MAP: Dict[str, Optional[str]] = {
    "auto": None,
    "Progressive": None,
    "TopFirst": "TOP_FIELD",
    "BottomFirst": "BOTTOM_FIELD",
}

# MPEG-2 profile is derived from chroma subsampling.
MPEG2_CHROMA_PROFILE_MAP: Dict[str, str] = {
    "yuv420p": "MAIN",
    "yuv422p": "PROFILE_422",
}

COLOR_SPACE_CONVERSION_MAP: Dict[str, str] = {
    "Bt601ToBt709": "FORCE_709",
    "Bt709ToBt601": "FORCE_601",
}
