from __future__ import annotations

import collections
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List


@dataclass
class WordDifference:
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)

    @property
    def added_count(self) -> int:
        return len(self.added)

    @property
    def removed_count(self) -> int:
        return len(self.removed)

    @property
    def unchanged_count(self) -> int:
        return len(self.unchanged)


@dataclass
class TextDiffResult:
    """Bag-of-words comparison of two texts.

    ``edit_distance`` and ``common_substrings`` are reserved and always empty;
    the comparison ignores word order and position.
    """

    similarity: float
    word_difference: WordDifference
    edit_distance: int = 0
    common_substrings: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        diff = self.word_difference
        payload["word_difference"].update(
            {
                "added_count": diff.added_count,
                "removed_count": diff.removed_count,
                "unchanged_count": diff.unchanged_count,
            }
        )
        return payload


class TextDiff:
    def compare(self, text_a: str, text_b: str) -> TextDiffResult:
        words_a = text_a.split()
        words_b = text_b.split()
        counts_a = collections.Counter(words_a)
        counts_b = collections.Counter(words_b)

        diff = WordDifference()
        # union in first-seen order, text A first
        for word in dict.fromkeys(list(counts_a) + list(counts_b)):
            c_a = counts_a.get(word, 0)
            c_b = counts_b.get(word, 0)
            diff.unchanged.extend([word] * min(c_a, c_b))
            if c_b > c_a:
                diff.added.extend([word] * (c_b - c_a))
            elif c_a > c_b:
                diff.removed.extend([word] * (c_a - c_b))

        total = len(words_a) + len(words_b)
        similarity = 200.0 * diff.unchanged_count / total if total else 0.0
        return TextDiffResult(similarity=similarity, word_difference=diff)
