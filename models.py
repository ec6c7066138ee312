# models.py
import re
import unicodedata
from collections import defaultdict, Counter
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from config import CONTEXT_SEPARATOR, MAX_ORDER

# order -> context key -> continuation word -> weight
NGramTable = Mapping[int, Mapping[str, Mapping[str, float]]]

_EMPTY: Mapping = MappingProxyType({})


class LanguageModel:
    """Read-only n-gram frequency table keyed by explicit order.

    Context keys are the previous ``n - 1`` words joined by CONTEXT_SEPARATOR
    (the empty string for order 1). Weights are raw frequencies, not
    probabilities. A missing order or context is simply "no data".
    """

    __slots__ = ("_orders",)

    def __init__(self, orders: Optional[NGramTable] = None):
        frozen = {}
        for order, contexts in (orders or {}).items():
            frozen[int(order)] = MappingProxyType(
                {
                    context: MappingProxyType(
                        {word: float(weight) for word, weight in continuations.items()}
                    )
                    for context, continuations in contexts.items()
                }
            )
        self._orders = MappingProxyType(dict(sorted(frozen.items())))

    @property
    def orders(self) -> Tuple[int, ...]:
        return tuple(self._orders)

    def order(self, n: int) -> Mapping[str, Mapping[str, float]]:
        return self._orders.get(n, _EMPTY)

    def continuations(self, n: int, context: str) -> Mapping[str, float]:
        return self.order(n).get(context, _EMPTY)

    def entries(self, n: int) -> Iterator[Tuple[str, str, float]]:
        """Yield (context, word, weight) for every entry of order `n`."""
        for context, continuations in self.order(n).items():
            for word, weight in continuations.items():
                yield context, word, weight

    def __len__(self) -> int:
        return sum(len(conts) for contexts in self._orders.values() for conts in contexts.values())

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"LanguageModel(orders={self.orders}, entries={len(self)})"


def normalize_word(text: str) -> str:
    """Lowercase and compose accents (NFC): "u" + combining circumflex becomes "û"."""
    return unicodedata.normalize("NFC", text.lower())


def tokenize(text: str):
    return re.findall(r"\w+", normalize_word(text))


class NGramModel:
    """Counts n-grams of every order up to max_order over a corpus."""

    def __init__(self, max_order: int = MAX_ORDER):
        self.max_order = max_order
        # mapping from order to context key to Counter of next words
        self.ngrams: Dict[int, Dict[str, Counter]] = {
            n: defaultdict(Counter) for n in range(1, max_order + 1)
        }

    def train(self, text: str):
        tokens = tokenize(text)
        for n in range(1, self.max_order + 1):
            if len(tokens) < n:
                break
            for i in range(len(tokens) - n + 1):
                context = CONTEXT_SEPARATOR.join(tokens[i:i + n - 1])
                next_word = tokens[i + n - 1]
                self.ngrams[n][context][next_word] += 1

    def to_language_model(self) -> LanguageModel:
        return LanguageModel(
            {n: contexts for n, contexts in self.ngrams.items() if contexts}
        )
