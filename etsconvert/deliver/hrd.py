"""
HRD buffer size limits.

MediaConvert rejects an hrdBufferSize above what the codec, profile and
level allow. Limits (bits):

- H.264: MaxCPB of the level (H.264 Table A-1, in units of 1000 bits for
  the base factor) times the NAL HRD factor of the profile (Table A-2).
  Baseline and Main use 1200, High uses 1500. When no level is given the
  encoder picks one automatically, so the highest level bounds the size.
- MPEG-2: VBV buffer of the high level for the profile.
- VP8/VP9: a single flat maximum.
- GIF: no HRD buffer at all.
"""

from typing import Dict, Optional

from etsconvert.deliver.codecs import VideoCodec

# H.264 MaxCPB per MediaConvert level (1000 bits).
H264_MAX_CPB: Dict[str, int] = {
    "LEVEL_1": 175,
    "LEVEL_1_1": 500,
    "LEVEL_1_2": 1000,
    "LEVEL_1_3": 2000,
    "LEVEL_2": 2000,
    "LEVEL_2_1": 4000,
    "LEVEL_2_2": 4000,
    "LEVEL_3": 10000,
    "LEVEL_3_1": 14000,
    "LEVEL_3_2": 20000,
    "LEVEL_4": 25000,
    "LEVEL_4_1": 62500,
    "LEVEL_4_2": 62500,
    "LEVEL_5": 135000,
    "LEVEL_5_1": 240000,
    "LEVEL_5_2": 240000,
}

H264_HIGHEST_LEVEL = "LEVEL_5_2"

# cpbBrNalFactor per MediaConvert H.264 profile.
H264_NAL_FACTOR: Dict[str, int] = {
    "BASELINE": 1200,
    "MAIN": 1200,
    "HIGH": 1500,
}

# profile -> level -> maximum hrdBufferSize (bits)
H264_MAX_HRD_BUFFER_SIZE: Dict[str, Dict[str, int]] = {
    profile: {level: cpb * factor for level, cpb in H264_MAX_CPB.items()}
    for profile, factor in H264_NAL_FACTOR.items()
}

# MPEG-2 profile (from chroma subsampling) -> maximum hrdBufferSize (bits)
MPEG2_MAX_HRD_BUFFER_SIZE: Dict[str, int] = {
    "MAIN": 9781248,
    "PROFILE_422": 47185920,
}

MPEG2_DEFAULT_PROFILE = "MAIN"

VPX_MAX_HRD_BUFFER_SIZE = 47185920


def max_hrd_buffer_size(
    codec: Optional[VideoCodec],
    profile: Optional[str] = None,
    level: Optional[str] = None,
) -> Optional[int]:
    """
    Maximum hrdBufferSize (bits) for a MediaConvert codec/profile/level.

    Args:
        codec: Source video codec
        profile: MediaConvert codec profile ("HIGH", "PROFILE_422", ...)
        level: MediaConvert H.264 level ("LEVEL_4_1"); None for automatic

    Returns None when no maximum is known.
    """
    if codec is VideoCodec.H264:
        table = H264_MAX_HRD_BUFFER_SIZE.get(profile)
        if table is None:
            return None
        return table.get(level or H264_HIGHEST_LEVEL)

    if codec is VideoCodec.MPEG2:
        return MPEG2_MAX_HRD_BUFFER_SIZE.get(profile or MPEG2_DEFAULT_PROFILE)

    if codec in (VideoCodec.VP8, VideoCodec.VP9):
        return VPX_MAX_HRD_BUFFER_SIZE

    return None
