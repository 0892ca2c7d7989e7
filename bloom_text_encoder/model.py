# ==================================================
# bloom_text_encoder/model.py
# ==================================================
"""Minimal text containers the encoder reads tokens from and writes vectors to."""
from dataclasses import dataclass, field
import logging
import re

import numpy as np

log = logging.getLogger(__name__)

SENTENCE_PATTERN = re.compile(r"[^.!?]+(?:[.!?]+|$)")
TOKEN_PATTERN = re.compile(r"\w+(?:[-'’]\w+)*|[^\w\s]")


class VectorMixin:
    """Named vectors attached to a span, keyed by encoder identifier."""

    def put_vector(self, identifier: str, vector: np.ndarray):
        self.vectors[identifier] = np.array(vector, dtype=np.float64, copy=True)

    def get_vector(self, identifier: str) -> np.ndarray | None:
        vector = self.vectors.get(identifier)
        if vector is None:
            log.error("Requesting unknown vector with identifier '%s'", identifier)
        return vector

    def has_vector(self, identifier: str) -> bool:
        return identifier in self.vectors

    def clear_vectors(self, identifier: str | None = None):
        if identifier is None:
            self.vectors.clear()
        else:
            self.vectors.pop(identifier, None)


@dataclass(eq=False)
class Token(VectorMixin):
    text: str
    begin: int = 0
    end: int = 0
    vectors: dict = field(default_factory=dict, repr=False)

    @property
    def tokens(self) -> list["Token"]:
        return [self]

    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass(eq=False)
class Sentence(VectorMixin):
    tokens: list[Token] = field(default_factory=list)
    vectors: dict = field(default_factory=dict, repr=False)

    @property
    def text(self) -> str:
        return " ".join(t.text for t in self.tokens)

    @property
    def begin(self) -> int:
        return self.tokens[0].begin if self.tokens else 0

    @property
    def end(self) -> int:
        return self.tokens[-1].end if self.tokens else 0


@dataclass(eq=False)
class Document(VectorMixin):
    sentences: list[Sentence] = field(default_factory=list)
    vectors: dict = field(default_factory=dict, repr=False)

    @property
    def tokens(self) -> list[Token]:
        return [t for s in self.sentences for t in s.tokens]

    @property
    def text(self) -> str:
        return " ".join(s.text for s in self.sentences)

    def get_sentence(self, index: int) -> Sentence:
        return self.sentences[index]

    @classmethod
    def from_text(cls, text: str) -> "Document":
        """Split at sentence punctuation and tokenize into words and symbols."""
        sentences = []
        for s_match in SENTENCE_PATTERN.finditer(text):
            offset = s_match.start()
            tokens = [Token(m.group(), offset + m.start(), offset + m.end())
                      for m in TOKEN_PATTERN.finditer(s_match.group())]
            if tokens:
                sentences.append(Sentence(tokens))
        return cls(sentences)
