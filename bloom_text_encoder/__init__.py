from .bitvector import BitVector
from .bloom import BloomFilter
from .config import EncoderConfig
from .encoder import BloomVectorEncoder
from .errors import (BloomEncoderError, ConfigurationError, IndexRangeError,
                     LoadError, ModelUnavailableError)
from .model import Document, Sentence, Token
from .strategy import DEFAULT_STRATEGY, HashIndexStrategy
from .text import Language

__version__ = "0.1.0"

__all__ = [
    "BitVector", "BloomFilter", "BloomVectorEncoder", "EncoderConfig",
    "HashIndexStrategy", "DEFAULT_STRATEGY", "Language",
    "Document", "Sentence", "Token",
    "BloomEncoderError", "ConfigurationError", "IndexRangeError",
    "LoadError", "ModelUnavailableError",
]
