# prediction.py
from typing import List, Optional

from config import (
    BACKOFF_CANDIDATE_LIMIT,
    CONTEXT_SEPARATOR,
    MAX_ORDER,
    MAX_SUGGESTIONS,
    MIN_ORDER,
)
from models import LanguageModel, normalize_word


def split_context(text: str) -> List[str]:
    """Whitespace tokens of `text`, lowercased and NFC-composed."""
    return normalize_word(text).split()


def current_word(context: str) -> Optional[str]:
    """The word right before the cursor, or None when the text is blank."""
    tokens = context.split()
    return tokens[-1] if tokens else None


class PredictionSelector:
    """Backoff n-gram lookup: most specific context first, raw weight order within an order."""

    def __init__(self, model: LanguageModel):
        self.model = model

    def candidates(self, history: List[str]) -> List[str]:
        candidates: List[str] = []
        for n in range(MAX_ORDER, MIN_ORDER - 1, -1):
            required_history = n - 1
            if len(history) < required_history:
                continue
            history_key = CONTEXT_SEPARATOR.join(history[-required_history:])
            matches = self.model.continuations(n, history_key)
            if not matches:
                continue
            candidates.extend(sorted(matches, key=matches.get, reverse=True))
            if len(candidates) > BACKOFF_CANDIDATE_LIMIT:
                break
        return candidates

    def suggestions(self, context_text: str) -> List[str]:
        tokens = split_context(context_text)
        if not tokens:
            return []

        # finishing a word: predict IT, not what comes after it
        typing_new_word = context_text[-1].isspace()
        partial_word = ""
        if not typing_new_word:
            partial_word = tokens.pop()

        candidates = self.candidates(tokens)
        if typing_new_word:
            return candidates[:MAX_SUGGESTIONS]
        return [c for c in candidates if c.lower().startswith(partial_word)][:MAX_SUGGESTIONS]
