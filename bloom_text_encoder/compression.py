# ==================================================
# bloom_text_encoder/compression.py
# ==================================================
import zstandard as zstd

from .errors import LoadError

# -------- zstd wrappers ---------------------------------------------------

LEVEL = 3


def compress(data: bytes) -> bytes:
    return zstd.ZstdCompressor(level=LEVEL).compress(data)


def decompress(data: bytes) -> bytes:
    try:
        return zstd.ZstdDecompressor().decompress(data)
    except zstd.ZstdError as exc:
        raise LoadError(f"corrupt compressed payload: {exc}") from exc
