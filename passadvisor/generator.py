"""
passadvisor.generator
Random password generator; uses the OS entropy source (secrets.SystemRandom) by default.
"""

import logging
import random
from secrets import SystemRandom
from typing import List, Optional

from .tables import GENERATOR_ALPHABET, GENERATOR_CLASSES

logger = logging.getLogger(__name__)

DEFAULT_LENGTH = 16
MIN_LENGTH = len(GENERATOR_CLASSES)

_sysrand = SystemRandom()


class RandomSourceUnavailable(RuntimeError):
    """The random source could not produce data (e.g. no OS entropy source)."""


def generate(length: int = DEFAULT_LENGTH, rng: Optional[random.Random] = None) -> str:
    """
    Generate a password with at least one lowercase letter, uppercase letter,
    digit and symbol.

    One character of each class is drawn first, the rest uniformly from the
    whole alphabet, then everything is shuffled so the guaranteed characters
    do not sit at fixed positions. `rng` may be any random.Random-compatible
    object; it defaults to SystemRandom.
    """
    if length < MIN_LENGTH:
        raise ValueError(f"length must be at least {MIN_LENGTH}")

    rng = rng or _sysrand
    try:
        password_chars: List[str] = [rng.choice(pool) for pool in GENERATOR_CLASSES]
        for _ in range(length - len(password_chars)):
            password_chars.append(rng.choice(GENERATOR_ALPHABET))
        # Fisher-Yates
        rng.shuffle(password_chars)
    except (NotImplementedError, OSError) as e:
        logger.error("random source unavailable: %s", e)
        raise RandomSourceUnavailable(f"random source unavailable: {e}") from e

    logger.debug("generated password of length %d", length)
    return "".join(password_chars)
