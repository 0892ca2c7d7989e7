# ==================================================
# bloom_text_encoder/strategy.py
# ==================================================
"""
Strategies that turn a payload into the k bit indices of a filter of M bits.

Each strategy is part of the persisted form of every filter built with it:
the ordinal is written into the filter header and used to pick the strategy
back on load.  Members are never reordered, removed or changed; a new
algorithm gets a new member with the next free ordinal.

All strategies derive the indices by double hashing over one 128‑bit digest:

    h1 = digest[0:8]  (little‑endian)
    h2 = digest[8:16] (little‑endian)
    index_i = ((h1 + i * h2) & 0x7FFF_FFFF_FFFF_FFFF) % M      for i in 0..k-1

Duplicate indices are kept.
"""
from enum import IntEnum
from hashlib import blake2b
import struct

import mmh3
import xxhash

from .const import MAX_LONG
from .errors import LoadError


def _as_bytes(payload: str | bytes) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return bytes(payload)


# -- 128‑bit digests ----------------------------------------------------------
def _murmur3_128(payload: bytes) -> bytes:
    # MurmurHash3 x64 128, seed 0: h1 then h2, each little‑endian
    return mmh3.hash_bytes(payload, seed=0, x64arch=True)


def _blake2b_128(payload: bytes) -> bytes:
    return blake2b(payload, digest_size=16).digest()


def _xxh3_128(payload: bytes) -> bytes:
    return xxhash.xxh3_128_digest(payload)


class HashIndexStrategy(IntEnum):
    # ordinals below 3 are never assigned
    MURMUR128_MITZ_64 = 3
    BLAKE2B_128 = 4
    XXH3_128 = 5

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "HashIndexStrategy":
        try:
            return cls(ordinal)
        except ValueError:
            raise LoadError(f"no hash strategy registered for ordinal {ordinal}") from None

    def digest(self, payload: str | bytes) -> bytes:
        return _DIGESTS[self](_as_bytes(payload))

    def indices(self, payload: str | bytes, k: int, m: int) -> list[int]:
        h1, h2 = struct.unpack("<QQ", self.digest(payload))
        return [((h1 + i * h2) & MAX_LONG) % m for i in range(k)]


_DIGESTS = {
    HashIndexStrategy.MURMUR128_MITZ_64: _murmur3_128,
    HashIndexStrategy.BLAKE2B_128: _blake2b_128,
    HashIndexStrategy.XXH3_128: _xxh3_128,
}

DEFAULT_STRATEGY = HashIndexStrategy.MURMUR128_MITZ_64
