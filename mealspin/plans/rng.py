"""Seeded random number generation.

The hash and PRNG reproduce the JavaScript reference bit for bit, so a
seed produces the same plan whichever implementation generated it:

- hash: h = h * 31 + code (mod 2**32) over UTF-16 code units, read as a
  signed 32-bit integer, absolute value
- PRNG: mulberry32

All candidate selection goes through shuffle_items so that a plan is a
pure function of (catalog, filters, seed).
"""

import secrets
from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")

RNG = Callable[[], float]

_MASK32 = 0xFFFFFFFF
_MULBERRY_INCREMENT = 0x6D2B79F5
_SEED_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_SEED_LENGTH = 26


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def hash_seed(seed: str) -> int:
    """Hash a seed string to a non-negative 32-bit state."""
    encoded = seed.encode("utf-16-le")
    h = 0
    for i in range(0, len(encoded), 2):
        code = encoded[i] | (encoded[i + 1] << 8)
        h = (h * 31 + code) & _MASK32
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def mulberry32(state: int) -> RNG:
    """Return a mulberry32 generator of floats in [0, 1)."""
    state &= _MASK32

    def next_float() -> float:
        nonlocal state
        state = (state + _MULBERRY_INCREMENT) & _MASK32
        t = state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    return next_float


def create_seeded_rng(seed: str) -> RNG:
    """Create a deterministic RNG from a string seed."""
    return mulberry32(hash_seed(seed))


def generate_seed() -> str:
    """Generate a fresh random seed string (not reproducible)."""
    return "".join(secrets.choice(_SEED_ALPHABET) for _ in range(_SEED_LENGTH))


def shuffle_items(items: Sequence[T], rng: RNG) -> list[T]:
    """Fisher-Yates shuffle driven by rng. The input is not modified.

    Walks from the last index down to 1, swapping index i with
    floor(rng() * (i + 1)).
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def pick_random_n(items: Sequence[T], n: int, rng: RNG) -> list[T]:
    """Pick up to n distinct items without replacement."""
    if n <= 0:
        return []
    return shuffle_items(items, rng)[:n]
