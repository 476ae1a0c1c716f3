"""
Error kinds raised by the generation pipeline.

Callers can tell configuration problems (detected before any output is
produced) apart from runtime failures (entropy or sink I/O), which abort the
run and are never retried.
"""


class SynthDataError(Exception):
    """Base class for all generator errors."""


class InvalidConfigurationError(SynthDataError, ValueError):
    """Raised when generation parameters are invalid or cannot be parsed."""


class EntropyUnavailableError(SynthDataError):
    """Raised when no seed was given and the OS entropy source cannot be read."""


class SinkWriteError(SynthDataError, IOError):
    """Raised when the output sink stops accepting bytes."""
