"""Ensemble sentiment scoring.

Three signals are combined into one score:

* a lexicon signal, the mean AFINN-style valence per token scaled into [-1, 1];
* an optional secondary model (TextBlob polarity by default);
* a tag heuristic counting positive against negative terms.

With the secondary model the weights are 0.4/0.4/0.2; without it the lexicon
and tag signals are re-weighted to 0.6/0.4.
"""

from __future__ import annotations

import collections
import enum
import importlib.util
import logging
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import _default_lexicons, _default_valences
from .errors import InvalidInputError
from .text_utils import sentiment_tokens

Scorer = Callable[[str], float]

POSITIVE_THRESHOLD = 0.1
NEGATIVE_THRESHOLD = -0.1


class ModelState(enum.Enum):
    NOT_PROBED = "not_probed"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


@dataclass
class SentimentResult:
    score: float
    positive_word_count: int
    negative_word_count: int
    total_words: int
    classification: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def classify_sentiment(score: float) -> str:
    if score >= POSITIVE_THRESHOLD:
        return "positive"
    if score <= NEGATIVE_THRESHOLD:
        return "negative"
    return "neutral"


def _textblob_scorer() -> Optional[Scorer]:
    spec = importlib.util.find_spec("textblob")
    if spec is None:
        logging.warning("TextBlob not available; sentiment uses lexicon and tag signals only.")
        return None
    from textblob import TextBlob

    def score(text: str) -> float:
        return float(TextBlob(text).sentiment.polarity)

    return score


class SentimentAnalyzer:
    def __init__(
        self,
        valences: Optional[Dict[str, int]] = None,
        lexicons: Optional[Dict[str, Dict[str, List[str]]]] = None,
        secondary_model: Optional[Scorer] = None,
        use_secondary_model: bool = True,
    ) -> None:
        self.valences = {k.lower(): v for k, v in (valences or _default_valences()).items()}
        families = lexicons if lexicons is not None else _default_lexicons()
        tags = families.get("sentiment", {})
        self.positive_terms = frozenset(t.lower() for t in tags.get("positive", []))
        self.negative_terms = frozenset(t.lower() for t in tags.get("negative", []))
        self._secondary = secondary_model
        if not use_secondary_model:
            self.model_state = ModelState.UNAVAILABLE
        elif secondary_model is not None:
            self.model_state = ModelState.AVAILABLE
        else:
            self.model_state = ModelState.NOT_PROBED

    def secondary_available(self) -> bool:
        if self.model_state is ModelState.NOT_PROBED:
            self._secondary = _textblob_scorer()
            self.model_state = ModelState.AVAILABLE if self._secondary else ModelState.UNAVAILABLE
        return self.model_state is ModelState.AVAILABLE

    def lexicon_score(self, tokens: List[str]) -> float:
        if not tokens:
            return 0.0
        mean = sum(self.valences.get(t.lower(), 0) for t in tokens) / len(tokens)
        # mean valence rarely leaves [-3, 3]
        return max(-1.0, min(1.0, mean / 3))

    def tag_counts(self, tokens: List[str]) -> Tuple[int, int]:
        counts = collections.Counter(t.lower() for t in tokens)
        positive = sum(c for t, c in counts.items() if t in self.positive_terms)
        negative = sum(c for t, c in counts.items() if t in self.negative_terms)
        return positive, negative

    def _secondary_score(self, text: str) -> float:
        try:
            return float(self._secondary(text))
        except Exception:
            logging.warning("Secondary sentiment model failed; scoring it as 0", exc_info=True)
            return 0.0

    def analyze(self, text: str) -> SentimentResult:
        if not isinstance(text, str) or not text:
            raise InvalidInputError("Input must be a non-empty string")

        tokens = sentiment_tokens(text)
        lexicon = self.lexicon_score(tokens)
        positive, negative = self.tag_counts(tokens)
        heuristic = (positive - negative) / (positive + negative) if positive + negative else 0.0

        if self.secondary_available():
            secondary = self._secondary_score(text)
            score = 0.4 * lexicon + 0.4 * secondary + 0.2 * heuristic
        else:
            score = 0.6 * lexicon + 0.4 * heuristic

        return SentimentResult(
            score=score,
            positive_word_count=positive,
            negative_word_count=negative,
            total_words=len(tokens),
            classification=classify_sentiment(score),
        )

    def add_custom_lexicon(self, lexicon: Dict[str, List[str]]) -> None:
        logging.warning(
            "add_custom_lexicon is deprecated for the ensemble analyzer; pass lexicons to the constructor."
        )
