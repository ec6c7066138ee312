# loader.py
import json
import logging
import math
import os
from typing import Any, Dict, Mapping

from config import CORPUS_FILE, MAX_ORDER, MODEL_FILE
from models import LanguageModel, NGramModel, normalize_word

logger = logging.getLogger(__name__)


class ModelFormatError(ValueError):
    """Raised when a decoded model does not have the order/context/word/weight shape."""


def _parse_order(key: Any) -> int:
    try:
        order = int(key)
    except (TypeError, ValueError):
        raise ModelFormatError(f"n-gram order must be an integer, got {key!r}") from None
    if order < 1:
        raise ModelFormatError(f"n-gram order must be positive, got {order}")
    return order


def _parse_weight(order: int, context: str, word: str, weight: Any) -> float:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise ModelFormatError(
            f"weight for {word!r} after {context!r} (order {order}) is not a number: {weight!r}"
        )
    if weight < 0 or math.isnan(weight):
        raise ModelFormatError(
            f"weight for {word!r} after {context!r} (order {order}) is negative or NaN"
        )
    return float(weight)


def parse_model(data: Mapping[str, Any]) -> LanguageModel:
    """Validate an already decoded ``order -> context -> word -> weight`` mapping."""
    if not isinstance(data, Mapping):
        raise ModelFormatError(f"model must be a JSON object, got {type(data).__name__}")

    orders: Dict[int, Dict[str, Dict[str, float]]] = {}
    for order_key, contexts in data.items():
        order = _parse_order(order_key)
        if not isinstance(contexts, Mapping):
            raise ModelFormatError(f"order {order} must map contexts to continuations")
        table = orders.setdefault(order, {})
        for context, continuations in contexts.items():
            if not isinstance(continuations, Mapping):
                raise ModelFormatError(f"context {context!r} (order {order}) must map words to weights")
            # keys are stored lowercase and NFC so lookups never miss on case or accent form
            bucket = table.setdefault(normalize_word(context), {})
            for word, weight in continuations.items():
                value = _parse_weight(order, context, word, weight)
                word = normalize_word(word)
                bucket[word] = max(bucket.get(word, 0.0), value)
    return LanguageModel(orders)


def load_model(path: str) -> LanguageModel:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_model(data)


def train_model(text: str, max_order: int = MAX_ORDER) -> LanguageModel:
    ngram = NGramModel(max_order)
    ngram.train(text)
    return ngram.to_language_model()


def load_corpus(path: str, max_order: int = MAX_ORDER) -> LanguageModel:
    with open(path, "r", encoding="utf-8") as f:
        corpus = f.read()
    return train_model(corpus, max_order)


def default_loader() -> LanguageModel:
    """Load MODEL_FILE, falling back to counting n-grams over CORPUS_FILE."""
    if os.path.exists(MODEL_FILE):
        logger.info("Loading model from %s", MODEL_FILE)
        return load_model(MODEL_FILE)
    if os.path.exists(CORPUS_FILE):
        logger.warning("Model file %s not found, counting n-grams over %s", MODEL_FILE, CORPUS_FILE)
        return load_corpus(CORPUS_FILE)
    raise FileNotFoundError(f"neither {MODEL_FILE} nor {CORPUS_FILE} exists")
