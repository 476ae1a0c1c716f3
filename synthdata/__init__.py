"""
Deterministic synthetic test data generator.

Produces reproducible streams of normally distributed values encoded as raw
single or double precision IEEE-754 binary in a chosen byte order.
"""

from .config import ByteOrder, GenerationConfig, Precision
from .encoding import decode
from .errors import (
    EntropyUnavailableError,
    InvalidConfigurationError,
    SinkWriteError,
    SynthDataError,
)
from .pipeline import RunSummary, generate, iter_chunks, iter_values

__version__ = "0.1.0"

__all__ = [
    "ByteOrder",
    "GenerationConfig",
    "Precision",
    "decode",
    "generate",
    "iter_chunks",
    "iter_values",
    "RunSummary",
    "SynthDataError",
    "InvalidConfigurationError",
    "EntropyUnavailableError",
    "SinkWriteError",
]
