# ==================================================
# bloom_text_encoder/errors.py
# ==================================================


class BloomEncoderError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(BloomEncoderError, ValueError):
    """Bit size or hash count is not positive, or a model disagrees with the configuration."""


class ModelUnavailableError(BloomEncoderError, RuntimeError):
    """Encoder was used before it was trained or loaded."""


class LoadError(BloomEncoderError, ValueError):
    """Persisted filter or model container cannot be read back."""


class IndexRangeError(BloomEncoderError, IndexError):
    """A bit index fell outside [0, bit_size)."""
