# ==================================================
# bloom_text_encoder/encoder.py
# ==================================================
"""
Fixed‑size text vectors from a trained Bloom filter.

Training counts the tokens of a corpus, drops stopwords and rare tokens and
inserts every surviving token into the filter.  Encoding a word reads the
filter's current bits at that word's k positions (its *masked pattern*);
encoding a phrase, sentence or document adds up the patterns of its words,
so overlapping bits count 2.0, 3.0, … rather than saturating at 1.0.

Models are saved as a zip container::

    <name>.zip
      encoder.json     configuration (bit size, hash count, strategy, …)
      vocab.json       surviving word counts
      bloom.bin.zst    zstd‑compressed filter (header + little‑endian words)
"""
import json
import logging
from pathlib import Path
import threading
import time
from typing import Any, Iterable, Iterator
import zipfile

import numpy as np

from .bloom import BloomFilter
from .compression import compress, decompress
from .config import EncoderConfig
from .const import (DEFAULT_BIT_SIZE, DEFAULT_HASH_FUNCTIONS, DEFAULT_IDENTIFIER,
                    DEFAULT_LANGUAGE, DEFAULT_MIN_FREQUENCY, DEFAULT_PREPROCESSOR,
                    ENTRY_BLOOM, ENTRY_CONFIG, ENTRY_VOCAB, MODEL_SUFFIX)
from .errors import ConfigurationError, LoadError, ModelUnavailableError
from .strategy import DEFAULT_STRATEGY, HashIndexStrategy
from .text import Language, get_preprocessor, is_stopword, split_spaces
from .vocab import Vocabulary

log = logging.getLogger(__name__)

UNITS = ("token", "sentence")

_CONFIGURED = object()


def iter_token_texts(corpus: Iterable[Any]) -> Iterator[str]:
    """Yield token strings from strings, word lists or anything with ``.tokens``."""
    for item in corpus:
        if isinstance(item, str):
            yield from split_spaces(item)
        elif hasattr(item, "tokens"):
            for token in item.tokens:
                yield token.text
        elif isinstance(item, (list, tuple)):
            yield from item
        else:
            raise TypeError(f"cannot read tokens from {type(item).__name__}")


class BloomVectorEncoder:
    """Encodes text into vectors of ``bit_size`` reals through a Bloom filter."""

    name = "Bloom Filter Encoder"

    def __init__(self, bit_size: int = DEFAULT_BIT_SIZE,
                 num_hash_functions: int = DEFAULT_HASH_FUNCTIONS,
                 min_frequency: int = DEFAULT_MIN_FREQUENCY,
                 strategy: HashIndexStrategy | int = DEFAULT_STRATEGY,
                 identifier: str = DEFAULT_IDENTIFIER,
                 preprocessor: str = DEFAULT_PREPROCESSOR,
                 language: str | None = DEFAULT_LANGUAGE):
        self.config = EncoderConfig(bit_size=bit_size,
                                    num_hash_functions=num_hash_functions,
                                    min_frequency=min_frequency,
                                    strategy=int(strategy),
                                    identifier=identifier,
                                    preprocessor=preprocessor,
                                    language=language)
        self._preprocess = get_preprocessor(self.config.preprocessor)
        self.bloom = BloomFilter(self.config.bit_size, self.config.num_hash_functions,
                                 self.config.strategy)
        self.vocabulary = Vocabulary()
        self.total_words = 0
        self.model_path: Path | None = None
        self._model_available = False
        self._train_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: EncoderConfig) -> "BloomVectorEncoder":
        return cls(**config.to_dict())

    # ----------------------------------------------------------------------
    @property
    def identifier(self) -> str:
        return self.config.identifier

    @property
    def embedding_vector_size(self) -> int:
        return self.bloom.bit_size

    def is_model_available(self) -> bool:
        return self._model_available

    def _check_available(self):
        if not self._model_available:
            raise ModelUnavailableError(
                f"{self.name} has no model yet; train or load one first")

    def __repr__(self):
        return (f"BloomVectorEncoder(bit_size={self.config.bit_size}, "
                f"num_hash_functions={self.config.num_hash_functions}, "
                f"available={self._model_available})")

    # -- training ----------------------------------------------------------
    def train(self, corpus: Iterable[Any], min_frequency: int | None = None,
              language: "Language | str | None" = _CONFIGURED):
        """Insert every frequent, non‑stopword token of ``corpus`` into the filter.

        ``min_frequency`` and ``language`` default to the configured values;
        an explicit ``language=None`` keeps stopwords.  Calling ``train`` again,
        or from several threads on corpus shards, adds to the existing filter:
        bits are never cleared and word counts and ``total_words`` add up over
        all calls.
        """
        if min_frequency is None:
            min_frequency = self.config.min_frequency
        if language is _CONFIGURED:
            language = self.config.language
        language = Language.parse(language)

        log.info("Training %s model...", self.name)
        start = time.perf_counter()

        counts = Vocabulary()
        total = 0
        for text in iter_token_texts(corpus):
            word = self._preprocess(text)
            if not word:
                continue
            total += 1
            if not is_stopword(word, language):
                counts.add(word)

        seen = len(counts)
        counts.truncate(min_frequency)
        if not len(counts):
            log.warning("no words left after filtering %d candidates "
                        "(min_frequency=%d)", seen, min_frequency)

        for word in counts.words():
            self.bloom.insert(word)

        with self._train_lock:
            self.vocabulary.merge(counts)
            self.total_words += total
            self._model_available = True

        log.info("trained Bloom filter over %d words (%d total) into %d bits "
                 "(ratio: %.2f, fill rate: %.4f) in %.3fs",
                 len(counts), seen, self.bloom.bit_size,
                 self.bloom.bit_size / max(1, len(counts)), self.bloom.fill_rate,
                 time.perf_counter() - start)

    # -- vocabulary lookups ------------------------------------------------
    def frequency(self, word: str) -> int:
        return self.vocabulary.frequency(self._preprocess(word))

    def probability(self, word: str) -> float:
        return self.vocabulary.probability(self._preprocess(word), self.total_words)

    def is_unknown(self, word: str) -> bool:
        return self._preprocess(word) not in self.vocabulary

    def might_contain(self, word: str) -> bool:
        self._check_available()
        return self.bloom.might_contain(self._preprocess(word))

    # -- encoding ----------------------------------------------------------
    def encode(self, span: Any) -> np.ndarray:
        """Vector of ``embedding_vector_size`` reals for a string or span.

        Strings are split at whitespace; tokens, sentences and documents are
        read through their ``tokens``; lists are encoded item by item.  The
        result is always the element‑wise sum of the per‑word patterns.
        """
        self._check_available()
        if isinstance(span, str):
            return self.encode_words(split_spaces(span))
        if hasattr(span, "tokens"):
            return self.encode_words(t.text for t in span.tokens)
        if isinstance(span, (list, tuple)):
            return self.encode_spans(span)
        raise TypeError(f"cannot encode {type(span).__name__}")

    def encode_words(self, words: Iterable[str]) -> np.ndarray:
        self._check_available()
        vector = np.zeros(self.embedding_vector_size, dtype=np.float64)
        for word in words:
            word = self._preprocess(word)
            if word:
                vector += self.bloom.masked_pattern(word)
        return vector

    def encode_spans(self, spans: Iterable[Any]) -> np.ndarray:
        self._check_available()
        vector = np.zeros(self.embedding_vector_size, dtype=np.float64)
        for span in spans:
            vector += self.encode(span)
        return vector

    def _units(self, container: Any, unit: str) -> list:
        if unit not in UNITS:
            raise ValueError(f"cannot encode unit {unit!r}, expected one of {UNITS}")
        if unit == "token":
            return list(container.tokens)
        if not hasattr(container, "sentences"):
            raise ValueError(f"{type(container).__name__} has no sentences")
        return list(container.sentences)

    def encode_each(self, container: Any, unit: str = "token"):
        """Attach the vector of every token (or sentence) of ``container`` to it."""
        self._check_available()
        for span in self._units(container, unit):
            span.put_vector(self.identifier, self.encode(span))

    def encode_matrix(self, documents: list, max_time_steps: int,
                      unit: str = "token") -> np.ndarray:
        """Batch of shape (documents, bit_size, max_time_steps), zero padded."""
        self._check_available()
        matrix = np.zeros((len(documents), self.embedding_vector_size, max_time_steps),
                          dtype=np.float64)
        for batch_i, doc in enumerate(documents):
            for t, span in enumerate(self._units(doc, unit)[:max_time_steps]):
                matrix[batch_i, :, t] = self.encode(span)
        return matrix

    # -- persistence -------------------------------------------------------
    def save(self, destination: str | Path, name: str) -> Path:
        self._check_available()
        path = Path(destination) / f"{name}{MODEL_SUFFIX}"
        path.parent.mkdir(parents=True, exist_ok=True)

        meta = {**self.config.to_dict(), "total_words": self.total_words}
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(ENTRY_CONFIG, json.dumps(meta, indent=2, sort_keys=True))
            zf.writestr(ENTRY_VOCAB, json.dumps(self.vocabulary.to_dict(), ensure_ascii=False))
            zf.writestr(ENTRY_BLOOM, compress(self.bloom.to_bytes()))

        self.model_path = path
        log.info("saved bloom filter (%d bits, %d words) to %s",
                 self.bloom.bit_size, len(self.vocabulary), path)
        return path

    def load(self, source: str | Path):
        """Restore a saved model; its bit size, hash count, strategy and
        preprocessor must match this encoder's configuration."""
        path = Path(source)
        config, total_words, vocabulary, bloom = self._read_container(path)

        mismatched = [f"{key}: model={getattr(config, key)!r} "
                      f"encoder={getattr(self.config, key)!r}"
                      for key in ("bit_size", "num_hash_functions", "strategy", "preprocessor")
                      if getattr(config, key) != getattr(self.config, key)]
        if mismatched:
            raise ConfigurationError(f"model {path} does not fit this encoder ("
                                     + "; ".join(mismatched) + ")")
        self._install(path, total_words, vocabulary, bloom)

    @classmethod
    def from_model(cls, source: str | Path) -> "BloomVectorEncoder":
        """Build an encoder with the configuration stored in ``source`` and load it."""
        path = Path(source)
        config, total_words, vocabulary, bloom = cls._read_container(path)
        encoder = cls.from_config(config)
        encoder._install(path, total_words, vocabulary, bloom)
        return encoder

    def _install(self, path: Path, total_words: int, vocabulary: Vocabulary,
                 bloom: BloomFilter):
        self.bloom = bloom
        self.vocabulary = vocabulary
        self.total_words = total_words
        self.model_path = path
        self._model_available = True
        log.info("loaded bloom filter with size %d from %s", bloom.bit_size, path)

    @staticmethod
    def _read_container(path: Path) -> tuple[EncoderConfig, int, Vocabulary, BloomFilter]:
        try:
            with zipfile.ZipFile(path) as zf:
                meta = json.loads(zf.read(ENTRY_CONFIG).decode("utf-8"))
                vocabulary = Vocabulary.from_dict(
                    json.loads(zf.read(ENTRY_VOCAB).decode("utf-8")))
                raw = zf.read(ENTRY_BLOOM)
            config = EncoderConfig.from_dict(meta)
            total_words = int(meta.get("total_words", 0))
        except LoadError:
            raise
        except (OSError, zipfile.BadZipFile, KeyError, ValueError,
                TypeError, AttributeError) as exc:
            raise LoadError(f"cannot read model container {path}: {exc}") from exc

        bloom = BloomFilter.from_bytes(decompress(raw))
        if (bloom.bit_size, bloom.num_hash_functions, int(bloom.strategy)) != \
                (config.bit_size, config.num_hash_functions, config.strategy):
            raise LoadError(f"metadata of {path} disagrees with its filter header "
                            f"({config.bit_size}/{config.num_hash_functions}/{config.strategy} vs "
                            f"{bloom.bit_size}/{bloom.num_hash_functions}/{int(bloom.strategy)})")
        return config, total_words, vocabulary, bloom
