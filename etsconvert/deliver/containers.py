"""
Container mapping.

A standalone output keeps its preset container; an output inside a
playlist takes the container of the playlist format instead.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from etsconvert.source.tracking import path_of

if TYPE_CHECKING:
    from etsconvert.reporting.models import MessageLog

# Elastic Transcoder container -> MediaConvert container (None: unsupported)
CONTAINER_MAP: Dict[str, Optional[str]] = {
    "flac": "RAW",
    "flv": "F4V",
    "fmp4": None,
    "gif": "GIF",
    "mp2": "RAW",
    "mp3": "RAW",
    "mp4": "MP4",
    "mpg": None,
    "mxf": "MXF",
    "oga": "OGG",
    "ogg": "OGG",
    "ts": "M2TS",
    "wav": "RAW",
    "webm": "WEBM",
}

# Elastic Transcoder playlist format -> MediaConvert output container
PLAYLIST_CONTAINER_MAP: Dict[str, str] = {
    "HLSv3": "M3U8",
    "HLSv4": "M3U8",
    "MPEG-DASH": "MPD",
    "Smooth": "ISMV",
}


def file_container_settings(preset: Any, log: "MessageLog") -> Optional[Dict[str, str]]:
    """Container settings for an output in a file output group."""
    source = preset.get("container")
    container = CONTAINER_MAP.get(source)

    if container:
        return {"container": container}

    if source == "fmp4":
        message = (
            "MediaConvert only supports fragmented MP4 output inside an HLS, DASH, or CMAF "
            "output group."
        )
    else:
        message = f"MediaConvert does not support {source} container."

    log.error(path_of(preset, "container"), message)
    return None


def playlist_container_settings(playlist_format: str, log: "MessageLog") -> Dict[str, Optional[str]]:
    """Container settings for an output in an adaptive bitrate output group."""
    container = PLAYLIST_CONTAINER_MAP.get(playlist_format)

    if not container:
        log.error(["playlistFormat"], f"Playlist format '{playlist_format}' is invalid.")

    return {"container": container}


def container_settings(
    preset: Any,
    log: "MessageLog",
    playlist_format: Optional[str] = None,
) -> Optional[Dict[str, Optional[str]]]:
    if isinstance(playlist_format, str):
        return playlist_container_settings(playlist_format, log)
    return file_container_settings(preset, log)
