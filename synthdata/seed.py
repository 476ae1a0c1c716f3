"""
Seed resolution for reproducible runs.
"""

import logging
import os
from typing import Optional

from .errors import EntropyUnavailableError

logger = logging.getLogger(__name__)

SEED_BYTES = 8


def resolve_seed(seed: Optional[int] = None) -> int:
    """
    Resolve the seed for a run.

    Args:
        seed: Explicit seed, returned unchanged when given

    Returns:
        Unsigned 64-bit seed

    Raises:
        EntropyUnavailableError: If no seed was given and the OS entropy source
            cannot be read
    """
    if seed is not None:
        logger.debug(f"Using explicit seed {seed}")
        return seed

    try:
        raw = os.urandom(SEED_BYTES)
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailableError(
            f"Unable to read {SEED_BYTES} bytes from the system entropy source"
        ) from exc

    resolved = int.from_bytes(raw, "big")
    # Logged so an entropy-seeded run can be replayed with --seed.
    logger.info(f"Using entropy-derived seed {resolved}")
    return resolved
