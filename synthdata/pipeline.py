"""
Generation pipeline.

Seed -> sample -> encode -> serialize -> sink, one value at a time in a single
pass. A run moves CONFIGURED -> SEEDING -> STREAMING -> COMPLETED, or ends in
FAILED from SEEDING (no entropy) or STREAMING (sink failure). No state is
entered twice.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Iterator, Optional

from .config import ByteOrder, GenerationConfig, Precision
from .encoding import EncodedValue, encode, resolve_byte_order, serialize
from .errors import EntropyUnavailableError, SinkWriteError
from .sampler import NormalSampler
from .seed import resolve_seed
from .sink import DEFAULT_BUFFER_SIZE, SinkWriter

logger = logging.getLogger(__name__)


class RunState(Enum):
    """Lifecycle of a generation run."""

    CONFIGURED = "configured"
    SEEDING = "seeding"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


_TRANSITIONS = {
    RunState.CONFIGURED: {RunState.SEEDING},
    RunState.SEEDING: {RunState.STREAMING, RunState.FAILED},
    RunState.STREAMING: {RunState.COMPLETED, RunState.FAILED},
    RunState.COMPLETED: set(),
    RunState.FAILED: set(),
}


@dataclass(frozen=True)
class RunSummary:
    """Outcome of a completed run."""

    seed: int
    count: int
    precision: Precision
    byte_order: ByteOrder
    bytes_written: int


class Run:
    """
    A single pass over one configuration.

    The byte order is resolved when the run is created, so every value in
    its output shares the same layout even for NATIVE.
    """

    def __init__(self, config: GenerationConfig):
        self.config = config
        self.byte_order = resolve_byte_order(config.byte_order)
        self.state = RunState.CONFIGURED
        self.seed: Optional[int] = None

    def _advance(self, new_state: RunState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Invalid run transition {self.state.value} -> {new_state.value}"
            )
        logger.debug(f"Run state {self.state.value} -> {new_state.value}")
        self.state = new_state

    def fail(self) -> None:
        """Mark the run as failed."""
        self._advance(RunState.FAILED)

    def complete(self) -> None:
        """Mark the run as completed once its output has been delivered."""
        self._advance(RunState.COMPLETED)

    def _seed(self) -> int:
        self._advance(RunState.SEEDING)
        try:
            self.seed = resolve_seed(self.config.seed)
        except EntropyUnavailableError:
            self.fail()
            raise
        return self.seed

    def values(self) -> Iterator[EncodedValue]:
        """Yield encoded values in generation order."""
        seed = self._seed()
        self._advance(RunState.STREAMING)
        config = self.config
        sampler = NormalSampler(seed, config.mean, config.std)
        for _ in range(config.count):
            yield encode(next(sampler), config.precision)

    def chunks(self) -> Iterator[bytes]:
        """Yield the serialized form of each value in generation order."""
        for encoded in self.values():
            yield serialize(encoded, self.byte_order)


def iter_values(config: GenerationConfig) -> Iterator[EncodedValue]:
    """Yield the values of a run cast to the configured precision."""
    run = Run(config)
    yield from run.values()
    run.complete()


def iter_chunks(config: GenerationConfig) -> Iterator[bytes]:
    """Yield the 4 or 8 byte chunks of a run."""
    run = Run(config)
    yield from run.chunks()
    run.complete()


def generate(
    config: GenerationConfig,
    stream: BinaryIO,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> RunSummary:
    """
    Run the pipeline and stream its output to *stream*.

    Args:
        config: Validated generation configuration
        stream: Binary destination (e.g. sys.stdout.buffer or io.BytesIO)
        buffer_size: Bytes to collect before each write to the stream

    Returns:
        RunSummary describing the run

    Raises:
        EntropyUnavailableError: If no seed was given and none could be drawn
        SinkWriteError: If the stream stops accepting bytes
    """
    run = Run(config)
    sink = SinkWriter(stream, buffer_size=buffer_size)

    logger.info(
        f"Generating {config.count} {config.precision.value} values "
        f"~ N({config.mean}, {config.std}^2) in {run.byte_order.value}-endian order"
    )

    try:
        for chunk in run.chunks():
            sink.write(chunk)
        sink.flush()
    except SinkWriteError:
        run.fail()
        raise
    run.complete()

    logger.info(f"Wrote {sink.bytes_written} bytes (seed={run.seed})")
    return RunSummary(
        seed=run.seed,
        count=config.count,
        precision=config.precision,
        byte_order=run.byte_order,
        bytes_written=sink.bytes_written,
    )
