import math
import secrets
import string
import time
from dataclasses import dataclass
from typing import Dict, Mapping

from .errors import EmptyPoolError

# Canonical order: pools are always concatenated upper, lower, numbers, symbols.
CHARSETS: Dict[str, str] = {
    "upper": string.ascii_uppercase,
    "lower": string.ascii_lowercase,
    "numbers": string.digits,
    "symbols": "!@#$%^&*()_+-=[]{}<>?",
}

WEAK = "Weak"
MEDIUM = "Medium"
STRONG = "Strong"

MEDIUM_THRESHOLD = 40
STRONG_THRESHOLD = 60


@dataclass(frozen=True)
class GenerationResult:
    password: str
    pool_size: int
    response_time: float  # milliseconds


def normalize_options(options: Mapping) -> Dict[str, bool]:
    """Snapshot of the four character-class flags; only a literal True enables one."""
    return {name: options.get(name) is True for name in CHARSETS}


def build_pool(options: Mapping) -> str:
    return "".join(
        chars for name, chars in CHARSETS.items() if options.get(name, False)
    )


def generate(length: int, options: Mapping, rng=secrets) -> GenerationResult:
    """
    Draw a password of ``length`` characters from the pool selected by options.

    Args:
        length: number of characters, at least 1
        options: mapping with upper/lower/numbers/symbols flags
        rng: randomness source exposing ``randbelow(n)``; the secrets module
            by default

    Raises:
        EmptyPoolError: no character class is enabled
        ValueError: length is not a positive integer
    """
    start = time.perf_counter()

    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise ValueError(f"length must be a positive integer, got {length!r}")

    pool = build_pool(options)
    if not pool:
        raise EmptyPoolError()

    pool_size = len(pool)
    password = "".join(pool[rng.randbelow(pool_size)] for _ in range(length))

    elapsed_ms = (time.perf_counter() - start) * 1000
    return GenerationResult(password, pool_size, round(elapsed_ms, 2))


def entropy(length: int, pool_size: int) -> float:
    if pool_size < 1:
        raise ValueError(f"pool size must be at least 1, got {pool_size}")
    return length * math.log2(pool_size)


def evaluate(password: str, pool_size: int) -> str:
    """Label a password Weak/Medium/Strong from its length and pool size only."""
    bits = entropy(len(password), pool_size)
    if bits < MEDIUM_THRESHOLD:
        return WEAK
    if bits < STRONG_THRESHOLD:
        return MEDIUM
    return STRONG
