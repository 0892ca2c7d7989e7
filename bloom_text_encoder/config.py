# ==================================================
# bloom_text_encoder/config.py
# ==================================================
from dataclasses import asdict, dataclass, fields
import os
from typing import Any, Mapping

from .const import (DEFAULT_BIT_SIZE, DEFAULT_HASH_FUNCTIONS, DEFAULT_IDENTIFIER,
                    DEFAULT_LANGUAGE, DEFAULT_MIN_FREQUENCY, DEFAULT_PREPROCESSOR)
from .errors import ConfigurationError
from .strategy import DEFAULT_STRATEGY, HashIndexStrategy
from .text import Language, get_preprocessor

ENV_PREFIX = "BLOOM_ENCODER_"


@dataclass(frozen=True)
class EncoderConfig:
    """Settings fixed for the lifetime of an encoder."""

    bit_size: int = DEFAULT_BIT_SIZE
    num_hash_functions: int = DEFAULT_HASH_FUNCTIONS
    min_frequency: int = DEFAULT_MIN_FREQUENCY
    strategy: int = int(DEFAULT_STRATEGY)
    identifier: str = DEFAULT_IDENTIFIER
    preprocessor: str = DEFAULT_PREPROCESSOR
    language: str | None = DEFAULT_LANGUAGE

    def __post_init__(self):
        if self.bit_size <= 0:
            raise ConfigurationError(f"bit size must be positive, got {self.bit_size}")
        if self.num_hash_functions <= 0:
            raise ConfigurationError(
                f"number of hash functions must be positive, got {self.num_hash_functions}")
        if self.min_frequency < 0:
            raise ConfigurationError(
                f"minimum frequency must not be negative, got {self.min_frequency}")
        try:
            HashIndexStrategy(self.strategy)
        except ValueError:
            raise ConfigurationError(f"unknown hash strategy {self.strategy!r}") from None
        get_preprocessor(self.preprocessor)
        Language.parse(self.language)

    # ----------------------------------------------------------------------
    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, **overrides) -> "EncoderConfig":
        """Read ``<prefix>BIT_SIZE``, ``<prefix>HASH_FUNCTIONS`` and friends."""
        def _int(name, default):
            raw = os.getenv(prefix + name)
            if raw is None:
                return default
            try:
                return int(raw)
            except ValueError:
                raise ConfigurationError(f"{prefix + name} must be an integer, got {raw!r}") from None

        values = {
            "bit_size": _int("BIT_SIZE", DEFAULT_BIT_SIZE),
            "num_hash_functions": _int("HASH_FUNCTIONS", DEFAULT_HASH_FUNCTIONS),
            "min_frequency": _int("MIN_FREQUENCY", DEFAULT_MIN_FREQUENCY),
            "strategy": _int("STRATEGY", int(DEFAULT_STRATEGY)),
            "identifier": os.getenv(prefix + "IDENTIFIER", DEFAULT_IDENTIFIER),
            "preprocessor": os.getenv(prefix + "PREPROCESSOR", DEFAULT_PREPROCESSOR),
            "language": os.getenv(prefix + "LANGUAGE", DEFAULT_LANGUAGE) or None,
        }
        values.update(overrides)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EncoderConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def replace(self, **changes) -> "EncoderConfig":
        return EncoderConfig(**{**self.to_dict(), **changes})
