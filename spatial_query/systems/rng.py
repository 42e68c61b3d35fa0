"""Domain-separated deterministic RNG using xxhash.

Every value is a pure function of (seed, domain, index, salt), so the same
seed always scatters the same world regardless of call order.

Formula: RNG_Value = Hash(Seed, Domain, Index, Salt)
"""

from __future__ import annotations

import struct

import xxhash

from spatial_query.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator."""

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, index: int, salt: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, index, salt)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, index: int, salt: int = 0) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, index, salt) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, index: int, low: int, high: int, salt: int = 0) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, index, salt)
        return low + int(f * (high - low + 1))

    def next_range(self, domain: Domain, index: int, low: float, high: float, salt: int = 0) -> float:
        """Return a deterministic float in [low, high)."""
        return low + self.next_float(domain, index, salt) * (high - low)
