# ==================================================
# bloom_text_encoder/bloom.py
# ==================================================
import logging
import struct
from typing import BinaryIO, Iterable

import numpy as np

from .bitvector import BitVector
from .const import HEADER_FMT, HEADER_SIZE, MAGIC, VERSION_MINOR
from .errors import ConfigurationError, LoadError
from .strategy import DEFAULT_STRATEGY, HashIndexStrategy

log = logging.getLogger(__name__)


class BloomFilter:
    """Bloom filter of ``bit_size`` bits probed by ``num_hash_functions`` indices.

    Many payloads share the same bit vector; colliding bits are expected.
    ``masked_pattern`` reports the *current* state of the shared bits at a
    payload's positions, so payloads never inserted can still light up bits
    set by others.
    """

    def __init__(self, bit_size: int, num_hash_functions: int,
                 strategy: HashIndexStrategy | int = DEFAULT_STRATEGY,
                 bits: BitVector | None = None):
        if bit_size <= 0:
            raise ConfigurationError(f"bit size must be positive, got {bit_size}")
        if num_hash_functions <= 0:
            raise ConfigurationError(
                f"number of hash functions must be positive, got {num_hash_functions}")
        if bits is not None and len(bits) != bit_size:
            raise ConfigurationError(
                f"bit vector holds {len(bits)} bits, filter declares {bit_size}")

        try:
            self.strategy = HashIndexStrategy(strategy)
        except ValueError:
            raise ConfigurationError(f"unknown hash strategy {strategy!r}") from None

        self.m = int(bit_size)
        self.k = int(num_hash_functions)
        self.bits = bits if bits is not None else BitVector(self.m)

    # -- hashing helpers ---------------------------------------------------
    def _hashes(self, payload: str | bytes) -> list[int]:
        return self.strategy.indices(payload, self.k, self.m)

    # ----------------------------------------------------------------------
    def insert(self, payload: str | bytes) -> bool:
        """Set the payload's bits; True if any of them was clear before."""
        changed = False
        for bit in self._hashes(payload):
            changed |= self.bits.set(bit)
        return changed

    add = insert

    def insert_all(self, payloads: Iterable[str | bytes]) -> int:
        return sum(1 for p in payloads if self.insert(p))

    def might_contain(self, payload: str | bytes) -> bool:
        return all(self.bits.get(bit) for bit in self._hashes(payload))

    __contains__ = might_contain

    def masked_pattern(self, payload: str | bytes) -> np.ndarray:
        pattern = np.zeros(self.m, dtype=np.float64)
        for bit in self._hashes(payload):
            if self.bits.get(bit):
                pattern[bit] = 1.0
        return pattern

    @property
    def bit_size(self) -> int:
        return self.m

    @property
    def num_hash_functions(self) -> int:
        return self.k

    @property
    def bits_set(self) -> int:
        return self.bits.bit_count()

    @property
    def fill_rate(self) -> float:
        return self.bits_set / self.m

    def __eq__(self, other):
        if not isinstance(other, BloomFilter):
            return NotImplemented
        return (self.k == other.k and self.strategy == other.strategy
                and self.bits == other.bits)

    def __repr__(self):
        return (f"BloomFilter(bit_size={self.m}, num_hash_functions={self.k}, "
                f"strategy={self.strategy.name}, bits_set={self.bits_set})")

    # -- persistence -------------------------------------------------------
    def to_bytes(self) -> bytes:
        header = struct.pack(HEADER_FMT, MAGIC, VERSION_MINOR,
                             int(self.strategy), self.k, self.m)
        return header + self.bits.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "BloomFilter":
        if len(data) < HEADER_SIZE:
            raise LoadError(f"filter header truncated ({len(data)} bytes)")
        magic, _ver, ordinal, k, m = struct.unpack_from(HEADER_FMT, data, 0)
        if magic != MAGIC:
            raise LoadError("Invalid bloom filter data")
        if k <= 0:
            raise LoadError(f"invalid number of hash functions {k}")
        strategy = HashIndexStrategy.from_ordinal(ordinal)
        bits = BitVector.from_bytes(m, data[HEADER_SIZE:])
        log.debug("read filter: strategy=%s k=%d m=%d", strategy.name, k, m)
        return cls(m, k, strategy, bits)

    def write_to(self, stream: BinaryIO) -> int:
        return stream.write(self.to_bytes())

    @classmethod
    def read_from(cls, stream: BinaryIO) -> "BloomFilter":
        return cls.from_bytes(stream.read())
