# correction.py
from typing import FrozenSet, List, Mapping, NamedTuple, Optional

from adjacency import KEYBOARD_ADJACENCY, neighbors
from config import (
    LENGTH_WINDOW,
    LONG_WORD_LENGTH,
    LONG_WORD_THRESHOLD,
    MAX_CORRECTION_DISTANCE,
    MIN_CORRECTION_LENGTH,
    SHORT_WORD_THRESHOLD,
)
from models import normalize_word
from scorer import keyboard_distance
from vocabulary import VocabularyIndex


class CorrectionCandidate(NamedTuple):
    word: str
    distance: float
    frequency: float


def match_capitalization(original: str, correction: str) -> str:
    """Re-apply the case pattern of `original` (ALL CAPS or Title) to `correction`."""
    if not original:
        return correction
    if original.isupper():
        return correction.upper()
    if original[0].isupper():
        return correction[:1].upper() + correction[1:]
    return correction


def confidence_threshold(length: int) -> float:
    # longer words tolerate more edits
    return LONG_WORD_THRESHOLD if length >= LONG_WORD_LENGTH else SHORT_WORD_THRESHOLD


class CorrectionSelector:
    """Flags probable typos and picks at most one replacement from the vocabulary."""

    def __init__(
        self,
        vocabulary: VocabularyIndex,
        adjacency: Mapping[str, FrozenSet[str]] = KEYBOARD_ADJACENCY,
    ):
        self.vocabulary = vocabulary
        self.adjacency = adjacency

    def is_valid_word(self, word: str) -> bool:
        return normalize_word(word) in self.vocabulary

    def _candidates(self, lowercased: str) -> List[CorrectionCandidate]:
        """Vocabulary words of similar length and first key, within MAX_CORRECTION_DISTANCE.

        Words whose first letter is neither the typed one nor a neighbour are
        never considered, even if they would be closer.
        """
        min_len = max(1, len(lowercased) - LENGTH_WINDOW)
        max_len = len(lowercased) + LENGTH_WINDOW
        first = lowercased[0]
        first_keys = neighbors(first, self.adjacency) | {first}

        candidates = []
        for word in self.vocabulary:
            if not min_len <= len(word) <= max_len:
                continue
            if word[0] not in first_keys:
                continue
            distance = keyboard_distance(lowercased, word, self.adjacency)
            if distance <= MAX_CORRECTION_DISTANCE:
                candidates.append(
                    CorrectionCandidate(word, distance, self.vocabulary.frequency(word))
                )
        # closest first, then most frequent; word breaks remaining ties
        candidates.sort(key=lambda c: (c.distance, -c.frequency, c.word))
        return candidates

    def correct(self, word: str) -> Optional[str]:
        lowercased = normalize_word(word)
        if self.is_valid_word(lowercased):
            return None
        # 1-2 letter words give too many false positives
        if len(lowercased) < MIN_CORRECTION_LENGTH:
            return None

        candidates = self._candidates(lowercased)
        if not candidates:
            return None

        best = candidates[0]
        if best.distance > confidence_threshold(len(lowercased)):
            return None
        return match_capitalization(word, best.word)
