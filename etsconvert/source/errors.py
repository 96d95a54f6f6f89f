"""
Source loading errors.

Loading happens before conversion starts. Any failure here is fatal for
the run; conversion problems themselves are never raised, they are
recorded as messages.
"""


class SourceError(Exception):
    """Base exception for source document failures."""
    pass


class SourceLoadError(SourceError):
    """Raised when a job, pipeline or preset cannot be read."""

    def __init__(self, resource: str, reason: str):
        self.resource = resource
        self.reason = reason
        super().__init__(f"Failed to load {resource}: {reason}")


class PresetNotFoundError(SourceError):
    """Raised when an output references a preset that cannot be resolved."""

    def __init__(self, preset_id: str, output_key: str = None):
        self.preset_id = preset_id
        self.output_key = output_key
        where = f" (output '{output_key}')" if output_key else ""
        super().__init__(f"Preset not found: {preset_id}{where}")
