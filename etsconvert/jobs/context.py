"""
ConversionContext: everything a translator may consult.

One context is created per conversion run and passed explicitly into
every translator call. It holds:
- the immutable settings
- the MessageLog (the only mutable shared state)
- the read-only pipeline record and preset table
- the read-only source job (None for standalone preset conversion)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from etsconvert.jobs.settings import ConversionSettings, DEFAULT_CONVERSION_SETTINGS
from etsconvert.reporting.models import MessageLog
from etsconvert.source.loader import LoadedJob
from etsconvert.source.tracking import TrackedDict


@dataclass
class ConversionContext:
    settings: ConversionSettings = DEFAULT_CONVERSION_SETTINGS
    log: MessageLog = field(default_factory=MessageLog)
    pipeline: Dict[str, Any] = field(default_factory=dict)
    presets: Dict[str, TrackedDict] = field(default_factory=dict)
    job: Optional[TrackedDict] = None

    @classmethod
    def for_job(cls, loaded: LoadedJob, settings: ConversionSettings = DEFAULT_CONVERSION_SETTINGS) -> "ConversionContext":
        return cls(
            settings=settings,
            pipeline=loaded.pipeline,
            presets=loaded.presets,
            job=loaded.job,
        )

    def preset_for(self, output: Any) -> Optional[TrackedDict]:
        """Preset referenced by a job output."""
        return self.presets.get(output.get("presetId"))

    @property
    def output_key_prefix(self) -> str:
        if self.job is None:
            return ""
        return self.job.get("outputKeyPrefix") or ""
