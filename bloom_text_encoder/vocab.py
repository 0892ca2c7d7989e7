# ==================================================
# bloom_text_encoder/vocab.py
# ==================================================
from collections import Counter
from typing import Iterable, Mapping


class Vocabulary:
    """Word counts collected during training."""

    def __init__(self, counts: Mapping[str, int] | None = None):
        self._counts = Counter(counts or {})

    def add(self, word: str, count: int = 1):
        self._counts[word] += count

    def update(self, words: Iterable[str]):
        self._counts.update(words)

    def merge(self, other: "Vocabulary"):
        self._counts.update(other._counts)

    def truncate(self, min_frequency: int) -> int:
        """Drop words seen fewer than ``min_frequency`` times; returns how many went."""
        rare = [w for w, c in self._counts.items() if c < min_frequency]
        for w in rare:
            del self._counts[w]
        return len(rare)

    def words(self) -> list[str]:
        # most frequent first, ties in first‑seen order
        return [w for w, _ in self._counts.most_common()]

    def frequency(self, word: str) -> int:
        return self._counts.get(word, 0)

    def probability(self, word: str, total_words: int) -> float:
        return self.frequency(word) / total_words if total_words else 0.0

    def __contains__(self, word: str) -> bool:
        return word in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self):
        return iter(self.words())

    def to_dict(self) -> dict[str, int]:
        return dict(self._counts.most_common())

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> "Vocabulary":
        return cls({str(w): int(c) for w, c in data.items()})
