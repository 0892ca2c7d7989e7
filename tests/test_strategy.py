from hashlib import blake2b
import struct

import pytest

from bloom_text_encoder import DEFAULT_STRATEGY, HashIndexStrategy, LoadError

MAX_LONG = (1 << 63) - 1


def test_ordinals_are_stable():
    assert DEFAULT_STRATEGY == 3
    assert HashIndexStrategy.MURMUR128_MITZ_64 == 3
    assert HashIndexStrategy.BLAKE2B_128 == 4
    assert HashIndexStrategy.XXH3_128 == 5


def test_unknown_ordinal():
    for ordinal in (0, 1, 2, 99):
        with pytest.raises(LoadError):
            HashIndexStrategy.from_ordinal(ordinal)
    assert HashIndexStrategy.from_ordinal(4) is HashIndexStrategy.BLAKE2B_128


@pytest.mark.parametrize("strategy", list(HashIndexStrategy))
def test_digest_is_128_bits(strategy):
    assert len(strategy.digest(b"nuthatch")) == 16


@pytest.mark.parametrize("strategy", list(HashIndexStrategy))
def test_indices_in_range_and_deterministic(strategy):
    for m in (1, 7, 64, 1024, 4096):
        first = strategy.indices(b"white-breasted", 5, m)
        assert len(first) == 5
        assert all(0 <= i < m for i in first)
        assert strategy.indices(b"white-breasted", 5, m) == first


@pytest.mark.parametrize("strategy", list(HashIndexStrategy))
def test_str_payload_is_utf8(strategy):
    assert strategy.indices("Grünspecht", 4, 1024) == \
        strategy.indices("Grünspecht".encode("utf-8"), 4, 1024)


def test_murmur_empty_payload_hashes_to_zero():
    # MurmurHash3 x64 128 of the empty input with seed 0 is all zeros
    assert HashIndexStrategy.MURMUR128_MITZ_64.digest(b"") == b"\0" * 16
    assert HashIndexStrategy.MURMUR128_MITZ_64.indices(b"", 4, 1024) == [0, 0, 0, 0]


def test_double_hashing_formula():
    payload = b"carolinensis"
    h1, h2 = struct.unpack("<QQ", blake2b(payload, digest_size=16).digest())
    expected = [((h1 + i * h2) & MAX_LONG) % 1000 for i in range(6)]
    assert HashIndexStrategy.BLAKE2B_128.indices(payload, 6, 1000) == expected


def test_duplicates_are_kept():
    # with a single bit every index collapses to 0
    assert HashIndexStrategy.XXH3_128.indices(b"x", 3, 1) == [0, 0, 0]


def test_strategies_differ():
    payload = b"songbird"
    patterns = {tuple(s.indices(payload, 5, 1 << 20)) for s in HashIndexStrategy}
    assert len(patterns) == len(HashIndexStrategy)


# fixed answers: persisted models depend on these never changing
def test_murmur_known_answer():
    digest = HashIndexStrategy.MURMUR128_MITZ_64.digest(
        "The quick brown fox jumps over the lazy dog")
    assert digest.hex() == "6c1b07bc7bbc4be347939ac4a93c437a"
    assert HashIndexStrategy.MURMUR128_MITZ_64.indices(
        "The quick brown fox jumps over the lazy dog", 5, 4096) == [2924, 3763, 506, 1345, 2184]


def test_blake2b_known_answer():
    assert HashIndexStrategy.BLAKE2B_128.digest(b"").hex() == "cae66941d9efbd404e4d88758ea67670"
    assert HashIndexStrategy.BLAKE2B_128.digest(b"nuthatch").hex() == \
        "2ab9f8520dd85bbef630271207c0121c"
    assert HashIndexStrategy.BLAKE2B_128.indices(b"nuthatch", 5, 4096) == \
        [2346, 2592, 2838, 3084, 3330]


def test_xxh3_known_answer():
    assert HashIndexStrategy.XXH3_128.digest(b"").hex() == "99aa06d3014798d86001c324468d497f"
    assert HashIndexStrategy.XXH3_128.indices(b"", 5, 4096) == [2713, 3065, 3417, 3769, 25]
