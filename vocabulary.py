# vocabulary.py
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, Mapping, Set

from models import LanguageModel


class VocabularyIndex:
    """Known words and their best observed frequency, derived from orders 1 and 2."""

    __slots__ = ("words", "frequencies")

    def __init__(self, words: FrozenSet[str], frequencies: Mapping[str, float]):
        self.words = words
        self.frequencies = frequencies

    @classmethod
    def build(cls, model: LanguageModel) -> "VocabularyIndex":
        words: Set[str] = set()
        frequencies: Dict[str, float] = {}

        def _record(word: str, weight: float):
            existing = frequencies.get(word)
            if existing is None or weight > existing:
                frequencies[word] = weight

        # unigrams: the only context is ""
        for _, word, weight in model.entries(1):
            words.add(word)
            _record(word, weight)

        # bigrams add both the context word and the continuation
        for context, word, weight in model.entries(2):
            words.add(context)
            words.add(word)
            _record(word, weight)

        # "" is the unigram context, never a word
        words.discard("")
        return cls(frozenset(words), MappingProxyType(frequencies))

    def frequency(self, word: str) -> float:
        return self.frequencies.get(word, 0.0)

    def __contains__(self, word: object) -> bool:
        return word in self.words

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)
