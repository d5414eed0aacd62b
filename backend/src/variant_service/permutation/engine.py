"""
Deterministic, seed-keyed shuffling.

The seed string is hashed to a 32-bit state which drives a Mulberry32
generator; the generator drives a Fisher-Yates shuffle. All three steps are
pinned so that a (sequence, seed) pair yields the same order in every
process and in every language that implements the same contract. Bump
PERMUTATION_VERSION if any step ever changes: printed rows would no longer
be reproducible.

Nothing here reads wall-clock time, process-level RNG state or hash-table
iteration order.
"""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

PERMUTATION_VERSION = 1

_MASK32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296
_MULBERRY_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiplication."""
    return (a * b) & _MASK32


def _utf16_code_units(text: str) -> list[int]:
    encoded = text.encode("utf-16-le")
    return [
        encoded[i] | (encoded[i + 1] << 8) for i in range(0, len(encoded), 2)
    ]


def string_hash(seed: str) -> int:
    """
    Hash a seed string to a signed 32-bit integer.

    h = h * 31 + c over the UTF-16 code units of the seed, wrapping at
    32 bits. Characters outside the BMP contribute their two surrogates.

    Args:
        seed: Seed string. The empty string hashes to 0.

    Returns:
        Hash as a signed 32-bit integer.
    """
    h = 0
    for unit in _utf16_code_units(seed):
        h = (h * 31 + unit) & _MASK32
    return h - _TWO_POW_32 if h >= 2**31 else h


class Mulberry32:
    """Small 32-bit PRNG. Each instance owns its state; there is no global."""

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK32

    def next_float(self) -> float:
        """Next value in [0, 1)."""
        self._state = (self._state + _MULBERRY_INCREMENT) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32

    def next_index(self, bound: int) -> int:
        """Next integer in [0, bound)."""
        return int(self.next_float() * bound)


def shuffle(sequence: Sequence[T], seed: str) -> list[T]:
    """
    Return a seeded permutation of ``sequence``.

    Pure function: the input is never mutated and identical (sequence, seed)
    pairs always yield the same order.

    Args:
        sequence: Elements to reorder.
        seed: Seed string.

    Returns:
        New list containing the same elements in permuted order.
    """
    shuffled = list(sequence)
    if len(shuffled) <= 1:
        return shuffled

    rng = Mulberry32(string_hash(seed))
    current = len(shuffled)
    while current != 0:
        pick = rng.next_index(current)
        current -= 1
        shuffled[current], shuffled[pick] = shuffled[pick], shuffled[current]

    return shuffled
