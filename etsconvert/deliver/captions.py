"""
Captions: input caption selectors and sidecar caption outputs.

Input side: the Elastic Transcoder merge policy decides which MediaConvert
caption selectors exist on the input.

    MergeRetain / MergeOverride -> embedded selector + one file selector per source
    Override                    -> one file selector per source

MediaConvert has no merge policy; retaining embedded captions is
approximated by always adding the embedded selector (WARN).

Output side: for every caption source that produced a selector on the
first input, each sidecar caption format of an output becomes one
MediaConvert output carrying a single caption description.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from etsconvert.deliver.containers import PLAYLIST_CONTAINER_MAP
from etsconvert.deliver.languages import to_language_code
from etsconvert.deliver.timespan import parse_time_offset
from etsconvert.source.tracking import path_of

if TYPE_CHECKING:
    from etsconvert.jobs.context import ConversionContext

logger = logging.getLogger(__name__)

# Sidecar file extension -> MediaConvert caption source type.
# DFXP and EBU-TT (xml) sources are not supported by MediaConvert.
CAPTION_SOURCE_TYPE_MAP: Dict[str, str] = {
    "scc": "SCC",
    "srt": "SRT",
    "ttml": "TTML",
    "vtt": "WEBVTT",
}

UNSUPPORTED_SOURCE_EXTENSIONS = frozenset({"dfxp", "xml"})

# Elastic Transcoder output caption format -> MediaConvert destination type
CAPTION_FORMAT_MAP: Dict[str, str] = {
    "dfxp": "TTML",
    "scc": "SCC",
    "srt": "SRT",
    "ttml": "TTML",
    "webvtt": "WEBVTT",
}

SIDECAR_FORMATS = frozenset({"dfxp", "scc", "srt", "webvtt"})

MERGE_POLICIES_WITH_EMBEDDED = frozenset({"MergeRetain", "MergeOverride"})


def selector_name(index: int) -> str:
    return f"Captions Selector {index}"


def caption_source_file(source: Any, ctx: "ConversionContext") -> str:
    return f"s3://{ctx.pipeline.get('inputBucket')}/{source.get('key')}"


def has_output_captions(outputs: Any) -> bool:
    """Whether any output declares at least one caption format."""
    for output in outputs or []:
        formats = (output.get("captions") or {}).get("captionFormats")
        if formats:
            return True
    return False


def embedded_selector() -> Dict[str, Any]:
    return {
        "sourceSettings": {
            "sourceType": "EMBEDDED",
            "embeddedSourceSettings": {"convert608To708": "UPCONVERT"},
        }
    }


def caption_selector(source: Any, ctx: "ConversionContext") -> Optional[Dict[str, Any]]:
    """
    Convert an Elastic Transcoder caption source to a MediaConvert file
    caption selector, or None when it cannot be converted.
    """
    key = source.get("key") if source else None
    if not isinstance(key, str):
        return None

    i = key.rfind(".")
    extension = key[i + 1:].lower().strip() if i >= 0 else None

    if extension in UNSUPPORTED_SOURCE_EXTENSIONS:
        return None

    source_type = CAPTION_SOURCE_TYPE_MAP.get(extension)
    if not source_type:
        ctx.log.warn(
            path_of(source, "key"),
            f"The captions source type '{extension}' is not supported by MediaConvert. "
            "This captions source is ignored.",
        )
        return None

    time_offset = source.get("timeOffset")
    time_delta = time_delta_units = None

    if time_offset:
        parsed = parse_time_offset(time_offset)
        if parsed is None:
            ctx.log.warn(
                path_of(source, "timeOffset"),
                f"The captions time offset '{time_offset}' cannot be parsed. "
                "This captions source is ignored.",
            )
            return None
        time_delta, time_delta_units = parsed

    file_source_settings = {"sourceFile": caption_source_file(source, ctx)}
    if time_delta_units:
        file_source_settings["timeDelta"] = time_delta
        file_source_settings["timeDeltaUnits"] = time_delta_units

    return {
        "sourceSettings": {
            "sourceType": source_type,
            "fileSourceSettings": file_source_settings,
        }
    }


def input_caption_selectors(
    input_captions: Any,
    outputs: Any,
    ctx: "ConversionContext",
) -> Optional[Dict[str, Dict[str, Any]]]:
    """
    MediaConvert caption selectors for a job input.

    Returns None unless the input has captions and at least one output
    asks for them.
    """
    if not input_captions or not has_output_captions(outputs):
        return None

    merge_policy = input_captions.get("mergePolicy")
    sources = input_captions.get("captionSources") or []
    file_selectors = [s for s in (caption_selector(src, ctx) for src in sources) if s]

    if merge_policy in MERGE_POLICIES_WITH_EMBEDDED:
        ctx.log.warn(
            path_of(input_captions, "mergePolicy"),
            "MediaConvert does not support captions merge policy.",
        )
        selectors = [embedded_selector()] + file_selectors
    elif merge_policy == "Override":
        selectors = file_selectors
    else:
        selectors = []

    if not selectors:
        return None

    return {selector_name(i): selector for i, selector in enumerate(selectors, 1)}


def sidecar_caption_outputs(
    output: Any,
    caption_sources: Any,
    selectors: Optional[Dict[str, Dict[str, Any]]],
    ctx: "ConversionContext",
    playlist_format: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Make MediaConvert sidecar caption outputs for an Elastic Transcoder
    output.

    Args:
        output: Elastic Transcoder job output
        caption_sources: Caption sources of the first job input
        selectors: MediaConvert caption selectors already built for the first input
        playlist_format: Playlist format when the output is in a playlist
    """
    if not output:
        return []

    formats = (output.get("captions") or {}).get("captionFormats") or []
    sidecar_formats = [f for f in formats if f.get("format") in SIDECAR_FORMATS]

    for caption_format in formats:
        if caption_format.get("format") not in SIDECAR_FORMATS:
            ctx.log.warn(
                path_of(caption_format, "format"),
                f"Embedded captions format '{caption_format.get('format')}' is not converted.",
            )

    selectors = selectors or {}
    res: List[Dict[str, Any]] = []

    has_embedded = any(
        s.get("sourceSettings", {}).get("sourceType") == "EMBEDDED" for s in selectors.values()
    )
    if has_embedded and sidecar_formats:
        ctx.log.info(path_of(output), "Embedded captions sources are not included in sidecar outputs.")

    container = PLAYLIST_CONTAINER_MAP.get(playlist_format, "RAW")

    for source in caption_sources or []:
        source_file = caption_source_file(source, ctx)
        name = next(
            (
                n for n, s in selectors.items()
                if s.get("sourceSettings", {}).get("fileSourceSettings", {}).get("sourceFile") == source_file
            ),
            None,
        )
        if name is None:
            continue

        language = source.get("language")
        language_code = to_language_code(language)

        if language and not language_code:
            ctx.log.warn(
                path_of(source, "language"),
                f"Captions language '{language}' has no ISO 639-2 equivalent. "
                "The caption language code is omitted.",
            )

        modifier = language_code or (language or "").upper() or name.replace(" ", "")

        for caption_format in sidecar_formats:
            logger.debug(f"Adding sidecar {caption_format.get('format')} output for {source.get('key')}")
            res.append({
                "nameModifier": f"-{modifier}",
                "containerSettings": {"container": container},
                "captionDescriptions": [{
                    "captionSelectorName": name,
                    "destinationSettings": {
                        "destinationType": CAPTION_FORMAT_MAP.get(caption_format.get("format")),
                    },
                    "languageCode": language_code,
                    "languageDescription": source.get("label"),
                }],
            })

    return res
