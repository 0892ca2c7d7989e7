# ==================================================
# bloom_text_encoder/bitvector.py
# ==================================================
import threading

import numpy as np

from .const import LOCK_STRIPES, WORD_BITS, WORD_FMT
from .errors import ConfigurationError, IndexRangeError, LoadError


class BitVector:
    """Fixed‑length bit array over 64‑bit words.

    ``set`` is a read‑modify‑write on a single word guarded by one lock out of
    a small stripe pool, so inserts from several threads never lose bits.
    ``get`` reads without locking; bits only ever go 0 → 1.
    """

    def __init__(self, bit_size: int, words: np.ndarray | None = None,
                 stripes: int = LOCK_STRIPES):
        if bit_size <= 0:
            raise ConfigurationError(f"bit size must be positive, got {bit_size}")
        self._bit_size = int(bit_size)
        n_words = (self._bit_size + WORD_BITS - 1) // WORD_BITS

        if words is None:
            self._words = np.zeros(n_words, dtype=np.uint64)
        else:
            words = np.asarray(words, dtype=np.uint64)
            if words.shape != (n_words,):
                raise LoadError(f"expected {n_words} words for {bit_size} bits, "
                                f"got {words.size}")
            self._words = words.copy()

        self._locks = [threading.Lock() for _ in range(max(1, min(stripes, n_words)))]

    # -- addressing --------------------------------------------------------
    def _locate(self, index: int) -> tuple[int, np.uint64]:
        if not 0 <= index < self._bit_size:
            raise IndexRangeError(f"bit {index} outside [0, {self._bit_size})")
        return index >> 6, np.uint64(1 << (index & 63))

    # ----------------------------------------------------------------------
    def set(self, index: int) -> bool:
        """Set bit ``index``; True if it was previously clear."""
        word_i, mask = self._locate(index)
        with self._locks[word_i % len(self._locks)]:
            old = self._words[word_i]
            if old & mask:
                return False
            self._words[word_i] = old | mask
            return True

    def get(self, index: int) -> bool:
        word_i, mask = self._locate(index)
        return bool(self._words[word_i] & mask)

    def __len__(self) -> int:
        return self._bit_size

    @property
    def bit_size(self) -> int:
        return self._bit_size

    @property
    def words(self) -> np.ndarray:
        """Read‑only view of the storage words."""
        view = self._words.view()
        view.flags.writeable = False
        return view

    def bit_count(self) -> int:
        return int(np.unpackbits(self._words.view(np.uint8)).sum())

    def __eq__(self, other):
        if not isinstance(other, BitVector):
            return NotImplemented
        return (self._bit_size == other._bit_size
                and np.array_equal(self._words, other._words))

    # -- serialisation -----------------------------------------------------
    def to_bytes(self) -> bytes:
        return self._words.astype(WORD_FMT).tobytes()

    @classmethod
    def from_bytes(cls, bit_size: int, data: bytes) -> "BitVector":
        if bit_size <= 0:
            raise LoadError(f"bit size must be positive, got {bit_size}")
        n_words = (bit_size + WORD_BITS - 1) // WORD_BITS
        if len(data) != n_words * 8:
            raise LoadError(f"bit payload is {len(data)} bytes, "
                            f"expected {n_words * 8}")
        words = np.frombuffer(data, dtype=WORD_FMT).astype(np.uint64)

        spare = n_words * WORD_BITS - bit_size
        if spare and int(words[-1]) >> (WORD_BITS - spare):
            raise LoadError("bits set beyond the declared bit size")
        return cls(bit_size, words)
