"""
Command line surface.

Provides two commands:
- job: convert a job to MediaConvert job or job template settings
- preset: convert a preset to MediaConvert output presets

The CLI is a dispatcher only. No conversion logic lives here.
"""

from .commands import (
    convert_job_command,
    convert_preset_command,
    load_job,
    load_preset,
)
from .errors import CLIError, ValidationError

__all__ = [
    "convert_job_command",
    "convert_preset_command",
    "load_job",
    "load_preset",
    "CLIError",
    "ValidationError",
]
