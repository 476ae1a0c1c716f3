#!/usr/bin/env python3
"""
CLI Entry point for the synthetic test data generator.

Writes raw binary values to stdout, e.g.:

    synthdata --mean 10 --std 2 --num 1000 --datatype double -e le --seed 42 > data.bin
"""

import argparse
import logging
import os
import sys

from synthdata.config import GenerationConfig
from synthdata.errors import (
    EntropyUnavailableError,
    InvalidConfigurationError,
    SinkWriteError,
)
from synthdata.pipeline import generate, iter_values
from synthdata.sink import SinkWriter

logger = logging.getLogger("synthdata")

EXIT_OK = 0
EXIT_INVALID_CONFIG = 2
EXIT_NO_ENTROPY = 3
EXIT_IO_FAILURE = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="synthdata",
        description="Generate normally distributed test data as raw binary on stdout",
    )
    parser.add_argument(
        "-m", "--mean", type=float, required=True, help="Mean of the distribution"
    )
    parser.add_argument(
        "-s",
        "--std",
        type=float,
        required=True,
        help="Standard deviation of the distribution (> 0)",
    )
    parser.add_argument(
        "-n",
        "--num",
        "--size",
        dest="num",
        type=int,
        required=True,
        help="Number of values to generate",
    )
    parser.add_argument(
        "-d",
        "--datatype",
        default="float",
        help="Output datatype: float (f32, f) or double (f64, d)",
    )
    parser.add_argument(
        "-e",
        "--endianness",
        "--endianess",
        dest="endianness",
        default="native",
        help="Byte order: little (le, l), big (be, b) or native (ne, n)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the PRNG")
    parser.add_argument(
        "-p",
        "--print",
        dest="print_values",
        action="store_true",
        help="Print values as text instead of writing binary",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (logs go to stderr)",
    )
    return parser


def _print_values(config: GenerationConfig, stream) -> None:
    with SinkWriter(stream) as sink:
        for value in iter_values(config):
            sink.write(f"{value}\n".encode("ascii"))


def _silence_stdout() -> None:
    # Python flushes stdout at exit; point it at devnull so a closed pipe
    # does not produce a second error.
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = GenerationConfig.from_options(
            mean=args.mean,
            std=args.std,
            count=args.num,
            datatype=args.datatype,
            endianness=args.endianness,
            seed=args.seed,
        )
    except InvalidConfigurationError as exc:
        parser.print_usage(sys.stderr)
        logger.error(f"Invalid configuration: {exc}")
        return EXIT_INVALID_CONFIG

    stream = sys.stdout.buffer
    try:
        if args.print_values:
            _print_values(config, stream)
        else:
            generate(config, stream)
    except EntropyUnavailableError as exc:
        logger.error(f"No seed given and no entropy available: {exc}")
        return EXIT_NO_ENTROPY
    except SinkWriteError as exc:
        if isinstance(exc.__cause__, BrokenPipeError):
            _silence_stdout()
        else:
            logger.error(f"Output failed: {exc}")
        return EXIT_IO_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
