"""
Seeded PRNG for the draw engine.

XorShift128+ (two 64-bit words of state, MurmurHash3-derived from the seed)
wrapped in a counting `Random` that is the sole source of randomness for a
session. Every consumer - deck sampling, extension draws, bonus draws, dice
rolls - advances the same instance in strict call order, so a seed plus the
sequence of operations fully determines every outcome.

Seeds can be given as integers or as base-35 seed strings ("4YUHY81W7GRHT").
"""

import time
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

_MASK64 = 0xFFFFFFFFFFFFFFFF

# Base-35 alphabet used for seed strings: digits + A-Z without O
SEED_CHARACTERS = "0123456789ABCDEFGHIJKLMNPQRSTUVWXYZ"


class XorShift128:
    """
    XorShift128+ generator.

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
            self.seed0 = seed & _MASK64
            self.seed1 = seed1 & _MASK64
        else:
            # An all-zero state would stay zero forever
            if seed == 0:
                seed = -0x8000000000000000
            self.seed0 = self._murmur_hash3(seed)
            self.seed1 = self._murmur_hash3(self.seed0)

    @staticmethod
    def _murmur_hash3(x: int) -> int:
        """MurmurHash3 finalizer - spreads seed bits across the state."""
        x = x & _MASK64
        x ^= x >> 33
        x = (x * 0xff51afd7ed558ccd) & _MASK64
        x ^= x >> 33
        x = (x * 0xc4ceb9fe1a85ec53) & _MASK64
        x ^= x >> 33
        return x

    def _next_long(self) -> int:
        """Advance the state and return the next unsigned 64-bit value."""
        s1 = self.seed0
        s0 = self.seed1
        self.seed0 = s0

        s1 ^= (s1 << 23) & _MASK64
        self.seed1 = (s1 ^ s0 ^ (s1 >> 17) ^ (s0 >> 26)) & _MASK64

        return (self.seed0 + self.seed1) & _MASK64

    def next_int(self, bound: int) -> int:
        """Uniform int in [0, bound), rejecting the biased tail."""
        if bound <= 0:
            raise ValueError("bound must be positive")

        while True:
            bits = self._next_long() >> 1
            val = bits % bound
            # Reject draws from the final partial block of size < bound
            if bits - val + (bound - 1) <= (_MASK64 >> 1):
                return int(val)

    def next_double(self) -> float:
        """Uniform float in [0, 1) with 53 bits of precision."""
        return (self._next_long() >> 11) / (1 << 53)

    def get_state(self, index: int) -> int:
        """Get state value (0 = seed0, 1 = seed1)."""
        if index == 0:
            return self.seed0
        return self.seed1

    def copy(self) -> 'XorShift128':
        """Create a copy with same state."""
        return XorShift128(self.seed0, self.seed1)


class Random:
    """
    Counting wrapper around XorShift128.

    `counter` records how many values have been consumed, which makes it easy
    to see (and assert in tests) that a given operation advanced the stream
    exactly as many times as expected.
    """

    def __init__(self, seed: int, counter: int = 0):
        """
        Initialize RNG with seed and optional counter.

        Args:
            seed: 64-bit seed value
            counter: Number of calls to skip (restores a stream position)
        """
        self.seed = seed
        self._rng = XorShift128(seed)
        self.counter = 0

        for _ in range(counter):
            self.random_float()

    @classmethod
    def from_time(cls) -> 'Random':
        """Non-reproducible RNG seeded from the wall clock."""
        return cls(time.time_ns() & 0xFFFFFFFF)

    def random_float(self) -> float:
        """Random float in [0, 1)."""
        self.counter += 1
        return self._rng.next_double()

    def random_int_range(self, start: int, end: int) -> int:
        """Random int in [start, end] INCLUSIVE."""
        if end < start:
            raise ValueError(f"empty range [{start}, {end}]")
        self.counter += 1
        return start + self._rng.next_int(end - start + 1)

    def random_int(self, range_val: int) -> int:
        """Random int in [0, range_val] INCLUSIVE."""
        return self.random_int_range(0, range_val)

    def choice(self, items: Sequence[T]) -> T:
        """Uniformly pick one element; consumes exactly one value."""
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.random_int_range(0, len(items) - 1)]

    def copy(self) -> 'Random':
        """Create an independent copy at the same stream position."""
        new = Random.__new__(Random)
        new.seed = self.seed
        new._rng = self._rng.copy()
        new.counter = self.counter
        return new


def seed_to_long(seed_string: str) -> int:
    """
    Convert seed string (e.g., "ABC123XYZ") to long value.

    Base-35 encoding: 0-9 + A-Z excluding O. O is read as 0.
    A purely numeric string (including negative) is a plain integer.
    """
    if seed_string.lstrip('-').isdigit():
        return int(seed_string)

    seed_string = seed_string.upper().replace("O", "0")

    result = 0
    for char in seed_string:
        remainder = SEED_CHARACTERS.find(char)
        if remainder == -1:
            continue  # Skip invalid characters
        result *= len(SEED_CHARACTERS)
        result += remainder

    return result


def long_to_seed(seed_long: int) -> str:
    """Convert long value back to a base-35 seed string."""
    char_count = len(SEED_CHARACTERS)

    if seed_long == 0:
        return "0"

    leftover = seed_long & _MASK64

    result = []
    while leftover != 0:
        remainder = leftover % char_count
        leftover = leftover // char_count
        result.append(SEED_CHARACTERS[remainder])

    return ''.join(reversed(result))
