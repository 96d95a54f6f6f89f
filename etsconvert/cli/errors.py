"""
Command line errors.

Raised before any source is loaded, when the options of `etsconvert job`
or `etsconvert preset` cannot describe a conversion. The entrypoint maps
them to exit code 1.
"""


class CLIError(Exception):
    """Base exception for etsconvert command failures."""
    pass


class ValidationError(CLIError):
    """
    Raised when conversion options conflict or a required option is missing,
    e.g. both --job-id and --job-file, or --description without --name.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
