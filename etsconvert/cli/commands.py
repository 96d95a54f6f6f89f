"""
CLI command implementations.

Commands:
- convert_job_command: Elastic Transcoder job -> MediaConvert job or job template
- convert_preset_command: Elastic Transcoder preset -> MediaConvert presets

Each command loads its source either from JSON files or from the Elastic
Transcoder API, never both, then hands the fully resolved documents to
the converter. Commands return the ConversionResult; printing and exit
codes belong to the entrypoint.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..jobs import ConversionResult, ConversionSettings, convert_job, convert_preset
from ..source import ElasticTranscoderSource, LoadedJob, load_job_files, load_preset_file
from ..source.tracking import TrackedDict
from .errors import ValidationError

logger = logging.getLogger(__name__)


def load_job(
    job_id: Optional[str] = None,
    region: Optional[str] = None,
    job_file: Optional[Path] = None,
    pipeline_file: Optional[Path] = None,
    preset_files: Optional[List[Path]] = None,
    source: Optional[ElasticTranscoderSource] = None,
) -> LoadedJob:
    """
    Load a job with its pipeline and presets.

    Args:
        job_id: Elastic Transcoder job id (API mode)
        region: AWS region of the job (API mode)
        job_file: Job JSON file (file mode)
        pipeline_file: Pipeline JSON file (file mode, required with job_file)
        preset_files: Preset JSON files (file mode)
        source: Pre-built API source, mostly for tests

    Raises:
        ValidationError: Neither or both modes selected, or pipeline missing
        SourceError: Loading failed
    """
    if bool(job_id) == bool(job_file):
        raise ValidationError("Specify exactly one of --job-id or --job-file")

    if job_file:
        if not pipeline_file:
            raise ValidationError("--pipeline-file is required with --job-file")
        logger.debug(f"Loading job from {job_file}")
        return load_job_files(Path(job_file), Path(pipeline_file), [Path(p) for p in preset_files or []])

    source = source or ElasticTranscoderSource(region)
    logger.debug(f"Fetching job {job_id} (region={region})")
    return source.load_job(job_id)


def load_preset(
    preset_id: Optional[str] = None,
    region: Optional[str] = None,
    preset_file: Optional[Path] = None,
    source: Optional[ElasticTranscoderSource] = None,
) -> TrackedDict:
    """
    Load a single preset from a file or the Elastic Transcoder API.

    Raises:
        ValidationError: Neither or both of preset_id and preset_file given
        SourceError: Loading failed
    """
    if bool(preset_id) == bool(preset_file):
        raise ValidationError("Specify exactly one of --preset-id or --preset-file")

    if preset_file:
        return load_preset_file(Path(preset_file))

    source = source or ElasticTranscoderSource(region)
    return source.get_preset(preset_id)


def convert_job_command(
    settings: ConversionSettings,
    job_id: Optional[str] = None,
    region: Optional[str] = None,
    job_file: Optional[Path] = None,
    pipeline_file: Optional[Path] = None,
    preset_files: Optional[List[Path]] = None,
    source: Optional[ElasticTranscoderSource] = None,
) -> ConversionResult:
    """Load and convert an Elastic Transcoder job."""
    if not settings.is_template and (settings.template_description or settings.template_category):
        raise ValidationError("--description and --category require --name")

    loaded = load_job(job_id, region, job_file, pipeline_file, preset_files, source)
    return convert_job(loaded, settings)


def convert_preset_command(
    settings: ConversionSettings,
    preset_id: Optional[str] = None,
    region: Optional[str] = None,
    preset_file: Optional[Path] = None,
    source: Optional[ElasticTranscoderSource] = None,
) -> ConversionResult:
    """Load and convert an Elastic Transcoder preset."""
    preset = load_preset(preset_id, region, preset_file, source)
    return convert_preset(preset, settings)
