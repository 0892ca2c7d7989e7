# ==================================================
# bloom_text_encoder/const.py
# ==================================================
MAGIC = b"BLM1"           # 4‑byte magic + format major «1»
HEADER_FMT = "<4sHHIQ"     # magic, version_minor (H), strategy ordinal (H), hash functions (I), bit_size (Q)
HEADER_SIZE = 20           # bytes (4+2+2+4+8)
WORD_FMT = "<u8"           # little‑endian 64‑bit storage words
WORD_BITS = 64
VERSION_MINOR = 0

MAX_LONG = 0x7FFF_FFFF_FFFF_FFFF   # clears the sign bit of a combined hash
LOCK_STRIPES = 64                  # word‑level locks shared by a BitVector

# encoder defaults
DEFAULT_BIT_SIZE = 4096
DEFAULT_HASH_FUNCTIONS = 5
DEFAULT_MIN_FREQUENCY = 1
DEFAULT_IDENTIFIER = "BLM"
DEFAULT_PREPROCESSOR = "none"
DEFAULT_LANGUAGE = "EN"

# model container entries
MODEL_SUFFIX = ".zip"
ENTRY_CONFIG = "encoder.json"
ENTRY_VOCAB = "vocab.json"
ENTRY_BLOOM = "bloom.bin.zst"
