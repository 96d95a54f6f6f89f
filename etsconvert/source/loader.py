"""
Source loading: read Elastic Transcoder jobs, pipelines and presets.

Two sources are supported:
- JSON files (API responses or bare objects, PascalCase or camelCase)
- The Elastic Transcoder API via boto3

Either way, everything the conversion needs is resolved here, before the
converter runs: the job, its pipeline, and the preset of every output.
The converter itself never performs I/O.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from etsconvert.source.casing import to_camel
from etsconvert.source.errors import PresetNotFoundError, SourceLoadError
from etsconvert.source.tracking import TrackedDict, attach_paths

logger = logging.getLogger(__name__)


@dataclass
class LoadedJob:
    """A job with its pipeline and fully resolved preset table."""

    job: TrackedDict
    pipeline: Dict[str, Any]
    presets: Dict[str, TrackedDict] = field(default_factory=dict)


# ============================================================================
# NORMALIZATION
# ============================================================================

def _unwrap_response(data: Dict[str, Any], resource: str) -> Dict[str, Any]:
    """Accept both {"Job": {...}} API responses and bare objects."""
    for key in (resource, resource.lower()):
        value = data.get(key)
        if isinstance(value, dict):
            return value
    return data


def prepare_job(data: Dict[str, Any]) -> TrackedDict:
    """Normalize a raw job object and attach data paths."""
    job = to_camel(_unwrap_response(data, "Job"))
    return attach_paths(job, ["job"])


def prepare_preset(data: Dict[str, Any]) -> TrackedDict:
    """Normalize a raw preset object and attach data paths."""
    preset = to_camel(_unwrap_response(data, "Preset"))
    return attach_paths(preset, ["preset", preset.get("name") or preset.get("id") or ""])


def prepare_pipeline(data: Dict[str, Any]) -> Dict[str, Any]:
    return to_camel(_unwrap_response(data, "Pipeline"))


def resolve_presets(job: TrackedDict, presets: Iterable[TrackedDict]) -> Dict[str, TrackedDict]:
    """
    Build the preset table for a job.

    Raises:
        PresetNotFoundError: An output references a preset not in `presets`.
    """
    table = {preset.get("id"): preset for preset in presets}

    for output in job.get("outputs") or []:
        preset_id = output.get("presetId")
        if preset_id not in table:
            raise PresetNotFoundError(preset_id, output.get("key"))

    return table


# ============================================================================
# FILES
# ============================================================================

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Read a JSON object from disk.

    Raises:
        SourceLoadError: File missing, unreadable, or not a JSON object.
    """
    path = Path(path)
    if not path.exists():
        raise SourceLoadError(str(path), "file not found")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SourceLoadError(str(path), f"invalid JSON: {e}") from e
    except OSError as e:
        raise SourceLoadError(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise SourceLoadError(str(path), "expected a JSON object")

    return data


def load_preset_file(path: Path) -> TrackedDict:
    return prepare_preset(load_json_file(path))


def load_job_files(
    job_path: Path,
    pipeline_path: Path,
    preset_paths: Iterable[Path],
) -> LoadedJob:
    """Load a job, its pipeline and presets from JSON files."""
    job = prepare_job(load_json_file(job_path))
    pipeline = prepare_pipeline(load_json_file(pipeline_path))
    presets = resolve_presets(job, [load_preset_file(p) for p in preset_paths])

    logger.debug(f"Loaded job {job.get('id')} with {len(presets)} preset(s) from files")

    return LoadedJob(job=job, pipeline=pipeline, presets=presets)


# ============================================================================
# ELASTIC TRANSCODER API
# ============================================================================

def get_client(region: Optional[str] = None):
    """Elastic Transcoder SDK client."""
    session = boto3.session.Session(region_name=region)
    return session.client("elastictranscoder")


class ElasticTranscoderSource:
    """
    Reads jobs, pipelines and presets from the Elastic Transcoder API.

    Presets are cached per instance: a job usually references the same
    preset from several outputs.
    """

    def __init__(self, region: Optional[str] = None, client=None):
        self.region = region
        self._client = client or get_client(region)
        self._preset_cache: Dict[str, TrackedDict] = {}

    def _call(self, resource: str, method: str, **params) -> Dict[str, Any]:
        logger.debug(f"Calling {method} {params} (region={self.region})")
        try:
            response = getattr(self._client, method)(**params)
        except (ClientError, BotoCoreError) as e:
            raise SourceLoadError(resource, str(e)) from e
        logger.debug(f"{method} response: {json.dumps(response, default=str)}")
        return response

    def get_job(self, job_id: str) -> TrackedDict:
        response = self._call(f"job {job_id}", "read_job", Id=job_id)
        return prepare_job(response)

    def get_pipeline(self, pipeline_id: str) -> Dict[str, Any]:
        response = self._call(f"pipeline {pipeline_id}", "read_pipeline", Id=pipeline_id)
        return prepare_pipeline(response)

    def get_preset(self, preset_id: str) -> TrackedDict:
        if preset_id not in self._preset_cache:
            response = self._call(f"preset {preset_id}", "read_preset", Id=preset_id)
            self._preset_cache[preset_id] = prepare_preset(response)
        return self._preset_cache[preset_id]

    def load_job(self, job_id: str) -> LoadedJob:
        """Fetch a job, its pipeline and every referenced preset."""
        job = self.get_job(job_id)
        pipeline = self.get_pipeline(job.get("pipelineId"))

        presets = []
        for output in job.get("outputs") or []:
            preset_id = output.get("presetId")
            if preset_id:
                presets.append(self.get_preset(preset_id))

        return LoadedJob(job=job, pipeline=pipeline, presets=resolve_presets(job, presets))
