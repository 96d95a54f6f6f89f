"""
Source documents: loading, key casing, and data-path tracking.
"""

from .errors import SourceError, SourceLoadError, PresetNotFoundError
from .tracking import TrackedDict, TrackedList, attach_paths, unwrap, path_of
from .casing import to_camel, to_pascal
from .loader import (
    LoadedJob,
    ElasticTranscoderSource,
    load_job_files,
    load_preset_file,
    resolve_presets,
)

__all__ = [
    # Errors
    "SourceError",
    "SourceLoadError",
    "PresetNotFoundError",
    # Tracking
    "TrackedDict",
    "TrackedList",
    "attach_paths",
    "unwrap",
    "path_of",
    # Casing
    "to_camel",
    "to_pascal",
    # Loading
    "LoadedJob",
    "ElasticTranscoderSource",
    "load_job_files",
    "load_preset_file",
    "resolve_presets",
]
