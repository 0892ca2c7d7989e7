import threading

import numpy as np
import pytest

from bloom_text_encoder import BitVector, ConfigurationError, IndexRangeError, LoadError


def test_set_reports_transition():
    bits = BitVector(100)
    assert bits.set(5) is True
    assert bits.set(5) is False
    assert bits.get(5)
    assert not bits.get(6)


def test_length_and_word_count():
    bits = BitVector(130)
    assert len(bits) == 130
    assert bits.bit_size == 130
    assert bits.words.shape == (3,)


@pytest.mark.parametrize("index", [-1, 64, 1000])
def test_out_of_range(index):
    bits = BitVector(64)
    with pytest.raises(IndexRangeError):
        bits.set(index)
    with pytest.raises(IndexRangeError):
        bits.get(index)


@pytest.mark.parametrize("size", [0, -8])
def test_non_positive_size(size):
    with pytest.raises(ConfigurationError):
        BitVector(size)


def test_word_boundaries():
    bits = BitVector(128)
    for i in (0, 63, 64, 127):
        bits.set(i)
    assert bits.bit_count() == 4
    assert int(bits.words[0]) == (1 << 63) | 1
    assert int(bits.words[1]) == (1 << 63) | 1


def test_words_view_is_read_only():
    bits = BitVector(64)
    with pytest.raises(ValueError):
        bits.words[0] = 1


def test_bytes_roundtrip_is_little_endian():
    bits = BitVector(70)
    bits.set(0)
    bits.set(65)
    data = bits.to_bytes()
    assert len(data) == 16
    assert data[0] == 1
    assert data[8] == 2
    assert BitVector.from_bytes(70, data) == bits


def test_from_bytes_rejects_bad_length():
    with pytest.raises(LoadError):
        BitVector.from_bytes(128, b"\0" * 15)


def test_from_bytes_rejects_padding_bits():
    data = (1 << 10).to_bytes(8, "little")
    with pytest.raises(LoadError):
        BitVector.from_bytes(10, data)


def test_concurrent_sets_lose_nothing():
    bits = BitVector(256, stripes=4)
    indices = list(range(256))
    expected_new = []

    def worker(shard):
        expected_new.append(sum(bits.set(i) for i in shard))

    # every thread hits every word, so updates to one word race
    shards = [indices[n::8] for n in range(8)]
    threads = [threading.Thread(target=worker, args=(s,)) for s in shards]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(expected_new) == 256
    assert bits.bit_count() == 256
    assert np.all(bits.words == np.uint64(0xFFFF_FFFF_FFFF_FFFF))
