"""
Generation configuration.

Defines the closed option sets for output precision and byte order, and the
immutable GenerationConfig validated once before a run starts.
"""

import logging
import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

MAX_SEED = 2**64 - 1


class Precision(Enum):
    """Output numeric width."""

    SINGLE = "float"
    DOUBLE = "double"

    @property
    def width(self) -> int:
        """Size in bytes of one encoded value."""
        return 4 if self is Precision.SINGLE else 8

    @property
    def dtype_char(self) -> str:
        return "f4" if self is Precision.SINGLE else "f8"

    @classmethod
    def parse(cls, value: Union[str, "Precision"]) -> "Precision":
        """Parse a datatype name or one of its aliases (f32, f, f64, d)."""
        return _parse_option(cls, value, _PRECISION_ALIASES, "datatype")


class ByteOrder(Enum):
    """Byte order of each serialized value."""

    LITTLE = "little"
    BIG = "big"
    NATIVE = "native"

    @classmethod
    def parse(cls, value: Union[str, "ByteOrder"]) -> "ByteOrder":
        """Parse an endianness name or one of its aliases (le, l, be, b, ne, n)."""
        return _parse_option(cls, value, _BYTE_ORDER_ALIASES, "endianness")


_PRECISION_ALIASES: Dict[str, Precision] = {
    "float": Precision.SINGLE,
    "f32": Precision.SINGLE,
    "f": Precision.SINGLE,
    "single": Precision.SINGLE,
    "double": Precision.DOUBLE,
    "f64": Precision.DOUBLE,
    "d": Precision.DOUBLE,
}

_BYTE_ORDER_ALIASES: Dict[str, ByteOrder] = {
    "little": ByteOrder.LITTLE,
    "le": ByteOrder.LITTLE,
    "l": ByteOrder.LITTLE,
    "big": ByteOrder.BIG,
    "be": ByteOrder.BIG,
    "b": ByteOrder.BIG,
    "native": ByteOrder.NATIVE,
    "ne": ByteOrder.NATIVE,
    "n": ByteOrder.NATIVE,
}


def _parse_option(enum_cls, value, aliases, option_name):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise InvalidConfigurationError(
            f"{option_name} must be a string, got {type(value).__name__}"
        )
    key = value.strip().lower()
    if key not in aliases:
        choices = ", ".join(sorted(aliases))
        raise InvalidConfigurationError(
            f"Unknown {option_name} '{value}' (expected one of: {choices})"
        )
    return aliases[key]


@dataclass(frozen=True)
class GenerationConfig:
    """
    Parameters of a single generation run.

    Attributes:
        mean: Centre of the normal distribution
        std: Standard deviation, strictly positive
        count: Number of values to generate; 0 yields empty output
        precision: Width of each encoded value (SINGLE or DOUBLE)
        byte_order: Byte order of each encoded value (LITTLE, BIG or NATIVE)
        seed: Optional unsigned 64-bit seed; fresh entropy is used when None
    """

    mean: float
    std: float
    count: int
    precision: Precision = Precision.SINGLE
    byte_order: ByteOrder = ByteOrder.NATIVE
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate the configuration before any sampling begins."""
        for name in ("mean", "std"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidConfigurationError(f"{name} must be a real number")
            if not math.isfinite(value):
                raise InvalidConfigurationError(f"{name} must be finite, got {value}")
            # numpy scalars are stored as plain Python numbers.
            object.__setattr__(self, name, float(value))

        if self.std <= 0:
            raise InvalidConfigurationError(
                f"std must be greater than 0, got {self.std}"
            )

        if isinstance(self.count, bool) or not isinstance(self.count, numbers.Integral):
            raise InvalidConfigurationError("count must be an integer")
        object.__setattr__(self, "count", int(self.count))
        if self.count < 0:
            raise InvalidConfigurationError(
                f"count must be non-negative, got {self.count}"
            )

        if not isinstance(self.precision, Precision):
            raise InvalidConfigurationError(f"Invalid precision: {self.precision!r}")
        if not isinstance(self.byte_order, ByteOrder):
            raise InvalidConfigurationError(f"Invalid byte order: {self.byte_order!r}")

        if self.seed is not None:
            if isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral):
                raise InvalidConfigurationError("seed must be an integer")
            object.__setattr__(self, "seed", int(self.seed))
            if not 0 <= self.seed <= MAX_SEED:
                raise InvalidConfigurationError(
                    f"seed must be an unsigned 64-bit integer, got {self.seed}"
                )

    @property
    def output_size(self) -> int:
        """Total number of bytes a run with this configuration produces."""
        return self.count * self.precision.width

    @classmethod
    def from_options(
        cls,
        mean: float,
        std: float,
        count: int,
        datatype: Union[str, Precision] = "float",
        endianness: Union[str, ByteOrder] = "native",
        seed: Optional[int] = None,
    ) -> "GenerationConfig":
        """
        Build a configuration from loosely typed caller options.

        Enum options accept their names and short aliases; unknown values raise
        InvalidConfigurationError.
        """
        config = cls(
            mean=mean,
            std=std,
            count=count,
            precision=Precision.parse(datatype),
            byte_order=ByteOrder.parse(endianness),
            seed=seed,
        )
        logger.debug(f"Built configuration: {config}")
        return config
