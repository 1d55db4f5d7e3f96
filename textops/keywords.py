from __future__ import annotations

import collections
from typing import Dict, List, Optional

from .lexicon_loader import DEFAULT_CACHE, LexiconCache
from .text_utils import word_tokens

DEFAULT_IDF = 1.5


class KeywordExtractor:
    """TF-IDF keyword ranking over stopword-filtered tokens.

    Ties keep the order in which terms first appear in the text.
    """

    def __init__(self, cache: Optional[LexiconCache] = None) -> None:
        self.cache = cache if cache is not None else DEFAULT_CACHE

    def score_terms(self, text: str) -> Dict[str, float]:
        words = word_tokens((text or "").lower())
        if not words:
            return {}
        stopwords = self.cache.active_stopwords()
        idf = self.cache.active_idf()
        tf = collections.Counter(w for w in words if w not in stopwords and len(w) > 2)
        total = len(words)
        return {word: (count / total) * idf.get(word, DEFAULT_IDF) for word, count in tf.items()}

    def extract_keywords(self, text: str, top_n: int = 5) -> List[str]:
        scores = self.score_terms(text)
        ranked = sorted(scores.items(), key=lambda x: x[1], reverse=True)
        return [word for word, _ in ranked[:top_n]]
