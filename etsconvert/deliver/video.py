"""
Video translation: Elastic Transcoder VideoParameters to a MediaConvert
VideoDescription.

Codec settings are built in three steps:
1. Derive every generic setting (rate control, bitrates, framerate, PAR,
   profile/level, HRD buffer, GOP, interlace) from the source.
2. Attach the generic object under the codec-specific key of the
   VideoCodec variant ("h264Settings", "mpeg2Settings", ...).
3. Drop empty values.

Rate control selection:

    codec    bitrate & no max bitrate    otherwise
    H.264    CBR                         QVBR
    MPEG-2   CBR                         VBR
    VP8/VP9  VBR                         VBR
    GIF      (no rate control)

Bitrates are kbps in Elastic Transcoder and bps in MediaConvert.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from etsconvert.deliver.cleanup import remove_empty
from etsconvert.deliver.codecs import (
    COLOR_SPACE_CONVERSION_MAP,
    FRAMERATE_MAP,
    INTERLACE_MODE_MAP,
    MPEG2_CHROMA_PROFILE_MAP,
    RateControlMode,
    VideoCodec,
)
from etsconvert.deliver.geometry import get_par, get_resolution, scaling_behavior
from etsconvert.deliver.hrd import H264_MAX_CPB, max_hrd_buffer_size
from etsconvert.source.tracking import path_of
from etsconvert.source.values import is_auto, parse_int

if TYPE_CHECKING:
    from etsconvert.jobs.context import ConversionContext

logger = logging.getLogger(__name__)


def _has_bitrate(video: Any) -> bool:
    bit_rate = video.get("bitRate")
    return bool(bit_rate) and not is_auto(bit_rate)


def _max_bit_rate(video: Any) -> Any:
    return (video.get("codecOptions") or {}).get("maxBitRate")


def rate_control_mode(video: Any) -> Optional[RateControlMode]:
    """Select the MediaConvert rate control mode."""
    codec = VideoCodec.parse(video.get("codec"))
    constant = _has_bitrate(video) and not _max_bit_rate(video)

    if codec is VideoCodec.H264:
        return RateControlMode.CBR if constant else RateControlMode.QVBR
    if codec is VideoCodec.MPEG2:
        return RateControlMode.CBR if constant else RateControlMode.VBR
    if codec in (VideoCodec.VP8, VideoCodec.VP9):
        return RateControlMode.VBR
    return None


def codec_profile(codec: Optional[VideoCodec], video: Any) -> Optional[str]:
    codec_options = video.get("codecOptions") or {}

    if codec is VideoCodec.H264:
        profile = codec_options.get("profile")
        return profile.upper() if isinstance(profile, str) and profile else None
    if codec is VideoCodec.MPEG2:
        return MPEG2_CHROMA_PROFILE_MAP.get(codec_options.get("chromaSubsampling"))
    return None


def codec_level(codec: Optional[VideoCodec], video: Any, ctx: "ConversionContext") -> Optional[str]:
    """H.264 level as a MediaConvert enum value, e.g. "4.1" -> "LEVEL_4_1"."""
    level = (video.get("codecOptions") or {}).get("level")

    if codec is not VideoCodec.H264 or not level:
        return None

    if level == "1b":
        ctx.log.warn(
            path_of(video, "codecOptions", "level"),
            "MediaConvert does not support H.264 codec level '1b'. Ignoring this setting which "
            "tells MediaConvert to automatically detect codec level.",
        )
        return None

    res = f"LEVEL_{str(level).replace('.', '_')}"
    if res not in H264_MAX_CPB:
        ctx.log.warn(
            path_of(video, "codecOptions", "level"),
            f"H.264 codec level '{level}' has no MediaConvert equivalent. Ignoring this setting "
            "which tells MediaConvert to automatically detect codec level.",
        )
        return None

    return res


def hrd_buffer_size(
    codec: Optional[VideoCodec],
    video: Any,
    profile: Optional[str],
    level: Optional[str],
    ctx: "ConversionContext",
) -> Optional[int]:
    """
    HRD buffer size in bits, capped to the codec/profile/level maximum.

    An explicit buffer size wins; otherwise it is derived as ten times the
    max bitrate; otherwise it is left to MediaConvert.
    """
    if codec is None or not codec.has_bitrate:
        return None

    codec_options = video.get("codecOptions") or {}
    buffer_kbits = parse_int(codec_options.get("bufferSize"))
    max_kbps = parse_int(codec_options.get("maxBitRate"))

    if buffer_kbits is not None:
        size = buffer_kbits * 1000
        field_name = "bufferSize"
    elif max_kbps is not None:
        size = max_kbps * 1000 * 10
        field_name = "maxBitRate"
    else:
        return None

    cap = max_hrd_buffer_size(codec, profile, level)

    if cap is not None and size > cap:
        described = " ".join(v for v in (codec.target, profile, level) if v)
        ctx.log.warn(
            path_of(video, "codecOptions", field_name),
            f"The HRD buffer size of {size} bits exceeds the maximum hrdBufferSize of {cap} bits "
            f"for {described}. The maximum is used instead.",
        )
        return cap

    return size


def codec_settings(video: Any, ctx: "ConversionContext") -> Dict[str, Any]:
    """
    Make the MediaConvert CodecSettings object for Elastic Transcoder
    VideoParameters.
    """
    raw_codec = video.get("codec")
    codec = VideoCodec.parse(raw_codec)
    codec_options = video.get("codecOptions") or {}
    source_profile = codec_options.get("profile")

    logger.debug(f"Converting video parameters at {path_of(video)} (codec={raw_codec})")

    if codec is None:
        ctx.log.error(
            path_of(video, "codec"),
            f"MediaConvert does not support {raw_codec} video codec.",
        )

    if codec is VideoCodec.VP8 and source_profile:
        ctx.log.warn(
            path_of(video, "codecOptions", "profile"),
            "MediaConvert does not support VP8 profile. This setting is ignored.",
        )

    mode = rate_control_mode(video)

    if mode is RateControlMode.VBR and not _has_bitrate(video):
        ctx.log.warn(
            path_of(video, "bitRate"),
            "When using VBR, MediaConvert requires video bitrate to be specified, but it is not "
            "specified in the Elastic Transcoder preset settings.",
        )

    if mode is RateControlMode.QVBR and not _max_bit_rate(video):
        ctx.log.warn(
            path_of(video, "codecOptions", "maxBitRate"),
            "When using QVBR, MediaConvert requires video max bitrate to be specified, but it is "
            "not specified in the Elastic Transcoder preset settings.",
        )

    bitrate = None
    if mode is not None and mode is not RateControlMode.QVBR:
        kbps = parse_int(video.get("bitRate"))
        bitrate = kbps * 1000 if kbps is not None else None

    max_bitrate = None
    if mode is not None and mode is not RateControlMode.CBR:
        kbps = parse_int(_max_bit_rate(video))
        max_bitrate = kbps * 1000 if kbps is not None else None

    framerate = FRAMERATE_MAP.get(video.get("frameRate"))
    par = get_par(video, ctx.log) if codec is None or codec.has_bitrate else None
    profile = codec_profile(codec, video)
    level = codec_level(codec, video, ctx)
    hrd = hrd_buffer_size(codec, video, profile, level, ctx)

    settings: Dict[str, Any] = {
        "framerateControl": "SPECIFIED" if framerate else None,
        "framerateNumerator": framerate[0] if framerate else None,
        "framerateDenominator": framerate[1] if framerate else None,
    }

    if codec is None or codec.has_bitrate:
        fixed_gop = video.get("fixedGOP") == "true"
        baseline = codec is VideoCodec.H264 and source_profile == "baseline"

        settings.update({
            "gopSizeUnits": "FRAMES" if fixed_gop else None,
            "gopSize": parse_int(video.get("keyframesMaxDist")) if fixed_gop else None,
            "bitrate": bitrate,
            "rateControlMode": mode.value if mode else None,
            "parControl": "SPECIFIED" if par else None,
            "parNumerator": par.numerator if par else None,
            "parDenominator": par.denominator if par else None,
            "codecProfile": profile,
            "codecLevel": level,
            "entropyEncoding": "CAVLC" if baseline else None,
            "numberReferenceFrames": (
                parse_int(codec_options.get("maxReferenceFrames"))
                if codec is VideoCodec.H264 else None
            ),
            "numberBFramesBetweenReferenceFrames": 0 if baseline else None,
            "maxBitrate": max_bitrate,
            "hrdBufferSize": hrd,
            "interlaceMode": INTERLACE_MODE_MAP.get(codec_options.get("interlacedMode")),
        })

    res: Dict[str, Any] = {"codec": codec.target if codec else None}
    if codec is not None:
        res[codec.settings_key] = settings

    return remove_empty(res)


def color_corrector(video: Any) -> Optional[Dict[str, str]]:
    """Color corrector preprocessor for a color space conversion mode."""
    mode = (video.get("codecOptions") or {}).get("colorSpaceConversionMode")
    conversion = COLOR_SPACE_CONVERSION_MAP.get(mode)
    return {"colorSpaceConversion": conversion} if conversion else None


def video_description(video: Any, ctx: "ConversionContext") -> Optional[Dict[str, Any]]:
    """
    Convert Elastic Transcoder VideoParameters to a MediaConvert
    VideoDescription.
    """
    if not video:
        return None

    resolution = get_resolution(video)
    corrector = color_corrector(video)

    return remove_empty({
        "codecSettings": codec_settings(video, ctx),
        "width": resolution.width if resolution else None,
        "height": resolution.height if resolution else None,
        "scalingBehavior": scaling_behavior(video, ctx.log),
        "videoPreprocessors": {"colorCorrector": corrector} if corrector else None,
    })
