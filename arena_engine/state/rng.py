"""
Random sources for battle resolution.

Every randomised roll in the engine (critical hits, gem activation) draws
from a ``RandomSource``: a zero-argument callable returning a uniform float
in [0, 1). Production code uses ``random.random``; tests and replays inject
a ``SeededRandom`` or a ``sequence_source`` so outcomes are reproducible.

SeededRandom is backed by XorShift128, which keeps its whole state in two
64-bit integers. That makes copies cheap, so batch simulations can fork a
stream per battle without sharing state.
"""

from __future__ import annotations

import random
from itertools import cycle
from typing import Callable, Iterable, Optional, Union

__all__ = [
    "RandomSource",
    "XorShift128",
    "SeededRandom",
    "default_random_source",
    "sequence_source",
    "seed_to_long",
]


RandomSource = Callable[[], float]

_MASK_64 = 0xFFFFFFFFFFFFFFFF
_SEED_CHARACTERS = "0123456789ABCDEFGHIJKLMNPQRSTUVWXYZ"


def default_random_source() -> RandomSource:
    """Uniform [0, 1) source used when nothing is injected."""
    return random.random


def sequence_source(values: Iterable[float]) -> RandomSource:
    """
    Replay a fixed list of rolls, cycling when exhausted.

    Args:
        values: Floats in [0, 1). Must not be empty.
    """
    values = list(values)
    if not values:
        raise ValueError("sequence_source needs at least one value")
    it = cycle(values)
    return lambda: next(it)


class XorShift128:
    """
    XorShift128 PRNG.

    State is two 64-bit integers (seed0, seed1).
    """

    def __init__(self, seed: int, seed1: Optional[int] = None):
        """
        Initialize with a 64-bit seed or explicit (seed0, seed1) state.

        Args:
            seed: Either the initial seed (if seed1 is None) or seed0 state
            seed1: If provided, use (seed, seed1) as direct state values
        """
        if seed1 is not None:
            # Two-argument form: set state directly (used by copy())
            self.seed0 = seed & _MASK_64
            self.seed1 = seed1 & _MASK_64
        else:
            # A zero state never leaves zero
            if seed == 0:
                seed = -0x8000000000000000
            self.seed0 = self._murmur_hash3(seed)
            self.seed1 = self._murmur_hash3(self.seed0)

    @staticmethod
    def _murmur_hash3(x: int) -> int:
        """MurmurHash3 finalizer - used for seed initialization."""
        x = x & _MASK_64
        x ^= x >> 33
        x = (x * 0xff51afd7ed558ccd) & _MASK_64
        x ^= x >> 33
        x = (x * 0xc4ceb9fe1a85ec53) & _MASK_64
        x ^= x >> 33
        return x

    def next_long(self) -> int:
        """Next unsigned 64-bit value."""
        s1 = self.seed0
        s0 = self.seed1
        self.seed0 = s0

        s1 ^= (s1 << 23) & _MASK_64
        self.seed1 = (s1 ^ s0 ^ (s1 >> 17) ^ (s0 >> 26)) & _MASK_64

        return (self.seed0 + self.seed1) & _MASK_64

    def next_int(self, bound: int) -> int:
        """Random int in [0, bound)."""
        if bound <= 0:
            raise ValueError("bound must be positive")

        # Rejection sampling keeps the distribution unbiased
        limit = (1 << 63) - ((1 << 63) % bound)
        while True:
            bits = self.next_long() >> 1
            if bits < limit:
                return int(bits % bound)

    def next_float(self) -> float:
        """Random float in [0, 1) with 24 bits of precision."""
        return (self.next_long() >> 40) / (1 << 24)

    def next_double(self) -> float:
        """Random double in [0, 1) with 53 bits of precision."""
        return (self.next_long() >> 11) / (1 << 53)

    def copy(self) -> XorShift128:
        """Create a copy with same state."""
        return XorShift128(self.seed0, self.seed1)


class SeededRandom:
    """
    Deterministic RandomSource.

    Calling the instance returns the next double in [0, 1), so it can be
    passed anywhere a RandomSource is expected. ``counter`` tracks how
    many rolls have been drawn.

    Usage:
        rng = SeededRandom("ARENA1")
        calc = DamageCalculator(random_source=rng)
    """

    def __init__(self, seed: Union[int, str], counter: int = 0):
        """
        Args:
            seed: Integer seed, or seed string (see seed_to_long)
            counter: Number of rolls to skip (resume a saved stream)
        """
        if isinstance(seed, str):
            seed = seed_to_long(seed)
        self.seed = seed
        self._rng = XorShift128(seed)
        self.counter = 0
        for _ in range(counter):
            self()

    def __call__(self) -> float:
        self.counter += 1
        return self._rng.next_double()

    def random_int(self, range_val: int) -> int:
        """Random int in [0, range_val] INCLUSIVE."""
        self.counter += 1
        return self._rng.next_int(range_val + 1)

    def copy(self) -> SeededRandom:
        new = SeededRandom.__new__(SeededRandom)
        new.seed = self.seed
        new._rng = self._rng.copy()
        new.counter = self.counter
        return new


def seed_to_long(seed_string: str) -> int:
    """
    Convert a seed string (e.g., "ARENA1") to an integer seed.

    Uses base-35 encoding: 0-9 + A-Z excluding O. O is read as 0.
    Purely ASCII-numeric strings (including negative) are parsed as integers.
    Characters outside the alphabet are skipped.
    """
    digits = seed_string.lstrip('-')
    if digits.isascii() and digits.isdigit():
        return int(seed_string)

    seed_string = seed_string.upper().replace("O", "0")

    result = 0
    for char in seed_string:
        remainder = _SEED_CHARACTERS.find(char)
        if remainder == -1:
            continue
        result *= len(_SEED_CHARACTERS)
        result += remainder

    return result & _MASK_64
