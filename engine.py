# engine.py
import logging
import threading
from typing import Callable, FrozenSet, List, Mapping, NamedTuple, Optional

from adjacency import KEYBOARD_ADJACENCY
from correction import CorrectionSelector
from models import LanguageModel
from prediction import PredictionSelector, current_word
from vocabulary import VocabularyIndex

logger = logging.getLogger(__name__)


class Correction(NamedTuple):
    original: str     # what to delete before the cursor
    replacement: str  # what to insert instead


class _EngineState(NamedTuple):
    model: LanguageModel
    vocabulary: VocabularyIndex
    predictor: PredictionSelector
    corrector: CorrectionSelector


class PredictionEngine:
    """Façade over the prediction and correction selectors.

    The model is published once, as a single immutable state object, so queries
    never lock. Until then every query answers as if the model were empty.
    """

    def __init__(
        self,
        model: Optional[LanguageModel] = None,
        adjacency: Mapping[str, FrozenSet[str]] = KEYBOARD_ADJACENCY,
    ):
        self.adjacency = adjacency
        self._state: Optional[_EngineState] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        if model is not None:
            self.publish(model)

    def publish(self, model: LanguageModel) -> None:
        vocabulary = VocabularyIndex.build(model)
        state = _EngineState(
            model,
            vocabulary,
            PredictionSelector(model),
            CorrectionSelector(vocabulary, self.adjacency),
        )
        # single assignment: readers see the old state or the whole new one
        self._state = state
        logger.info(
            "Model ready: orders=%s, %d entries, %d vocabulary words",
            model.orders, len(model), len(vocabulary),
        )

    def _load(self, loader: Callable[[], LanguageModel]) -> None:
        try:
            model = loader()
        except Exception:
            logger.exception("Failed to load language model; predictions stay disabled")
            return
        self.publish(model)

    def load_in_background(self, loader: Callable[[], LanguageModel]) -> threading.Thread:
        """Start the one-shot model load; later calls return the same thread."""
        with self._lock:
            if self._thread is None:
                logger.info("Loading language model in background")
                self._thread = threading.Thread(
                    target=self._load, args=(loader,), name="model-loader", daemon=True
                )
                self._thread.start()
            return self._thread

    def ready(self) -> bool:
        return self._state is not None

    @property
    def vocabulary(self) -> Optional[VocabularyIndex]:
        state = self._state
        return state.vocabulary if state else None

    def suggestions(self, context: str) -> List[str]:
        state = self._state
        if state is None:
            return []
        return state.predictor.suggestions(context)

    def is_valid_word(self, word: str) -> bool:
        state = self._state
        if state is None:
            return False
        return state.corrector.is_valid_word(word)

    def correct(self, word: str) -> Optional[str]:
        state = self._state
        if state is None:
            return None
        return state.corrector.correct(word)

    def autocorrect(self, context: str) -> Optional[Correction]:
        """Correction for the word right before the cursor, if it needs one."""
        word = current_word(context)
        if not word:
            return None
        replacement = self.correct(word)
        if replacement is None:
            return None
        return Correction(word, replacement)
