from __future__ import annotations

import math
import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, List

from .errors import InvalidInputError
from .text_utils import word_tokens

READABILITY_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+(?=\s|\Z)")
SILENT_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")

COMPLEXITY_SCALE = [
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
]


@dataclass
class ReadabilityResult:
    readability_score: float
    grade_level: float
    smog_index: float
    word_count: int
    sentence_count: int
    syllable_count: int
    avg_words_per_sentence: float
    avg_syllables_per_word: float
    complexity: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _empty_result() -> ReadabilityResult:
    return ReadabilityResult(
        readability_score=0,
        grade_level=0,
        smog_index=0,
        word_count=0,
        sentence_count=0,
        syllable_count=0,
        avg_words_per_sentence=0,
        avg_syllables_per_word=0,
        complexity="N/A",
    )


def count_syllables(word: str) -> int:
    if not word:
        return 0
    word = word.lower().strip()
    if len(word) <= 3:
        return 1
    word = SILENT_SUFFIX_RE.sub("", word)
    groups = VOWEL_GROUP_RE.findall(word)
    return len(groups) if groups else 1


def complexity_label(reading_ease: float) -> str:
    for threshold, label in COMPLEXITY_SCALE:
        if reading_ease >= threshold:
            return label
    return "Very Difficult"


class TextStatistics:
    """Flesch-Kincaid and SMOG readability with short-text handling."""

    def flesch_kincaid_readability(self, text: str) -> ReadabilityResult:
        if not isinstance(text, str) or not text:
            raise InvalidInputError("Input must be a non-empty string")

        words = word_tokens(text)
        word_count = len(words)
        if word_count == 0:
            return _empty_result()

        sentence_count = len(READABILITY_SENTENCE_RE.findall(text)) or 1
        per_word = [count_syllables(w) for w in words]
        syllables = sum(per_word)

        avg_words = word_count / sentence_count
        avg_syllables = syllables / word_count

        reading_ease = max(0.0, min(100.0, 206.835 - 1.015 * avg_words - 84.6 * avg_syllables))
        grade_level = max(0.0, 0.39 * avg_words + 11.8 * avg_syllables - 15.59)
        smog = self._smog_index(per_word, sentence_count)

        return ReadabilityResult(
            readability_score=round(reading_ease, 1),
            grade_level=round(grade_level, 1),
            smog_index=round(smog, 1),
            word_count=word_count,
            sentence_count=sentence_count,
            syllable_count=syllables,
            avg_words_per_sentence=round(avg_words, 1),
            avg_syllables_per_word=round(avg_syllables, 2),
            complexity=complexity_label(reading_ease),
        )

    @staticmethod
    def _smog_index(syllables_per_word: List[int], sentence_count: int) -> float:
        word_count = len(syllables_per_word)
        polysyllables = sum(1 for s in syllables_per_word if s >= 3)
        if sentence_count < 3 or word_count < 10:
            # approximation from polysyllable density for short texts
            return max(0.0, 3.1291 + 10 * (polysyllables / word_count))
        return 1.043 * math.sqrt(polysyllables * (30 / sentence_count)) + 3.1291
