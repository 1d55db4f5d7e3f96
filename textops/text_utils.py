from __future__ import annotations

import re
import unicodedata
from typing import List

ALPHABET_RE = re.compile(r"[a-zA-Z]")
DIGIT_RE = re.compile(r"[0-9]")
PUNCT_RE = re.compile(r"[!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~]")
SPECIAL_CHAR_RE = re.compile(r"[^a-zA-Z0-9\s!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~]")
URL_RE = re.compile(r"https?://\S+", re.IGNORECASE)
BLANK_LINE_RE = re.compile(r"^\s*$(?:\r\n?|\n)", re.MULTILINE)
EXTRA_SPACES_RE = re.compile(r" +")
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(r"(?:\+\d{1,3}[-\s]?)?\(?\d{3}\)?[-\s]?\d{3}[-\s]?\d{4}")
HASHTAG_RE = re.compile(r"#[a-zA-Z0-9_]+")
MENTION_RE = re.compile(r"@[a-zA-Z0-9_]+")
TITLE_WORD_RE = re.compile(r"\w\S*")

WORD_RE = re.compile(r"\b\w+\b")
TOKEN_RE = re.compile(r"[\w']+")
SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")


def word_tokens(text: str) -> List[str]:
    return WORD_RE.findall(text or "")


def sentiment_tokens(text: str) -> List[str]:
    return TOKEN_RE.findall(text or "")


def count_words(text: str) -> int:
    return len((text or "").split())


def count_sentences(text: str) -> int:
    """Terminated sentences plus one for unterminated trailing text."""
    trimmed = (text or "").strip()
    if not trimmed:
        return 0
    matches = list(SENTENCE_RE.finditer(trimmed))
    if not matches:
        return 1
    has_trailing = matches[-1].end() < len(trimmed)
    return len(matches) + (1 if has_trailing else 0)


def count_characters(text: str) -> int:
    return sum(1 for ch in text if not ch.isspace() and unicodedata.category(ch) != "Cf")


def to_title_case(text: str) -> str:
    return TITLE_WORD_RE.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)


def reverse_text(text: str) -> str:
    # combining marks stay attached to their base character
    clusters: List[str] = []
    for ch in text:
        if clusters and unicodedata.combining(ch):
            clusters[-1] += ch
        else:
            clusters.append(ch)
    return "".join(reversed(clusters))
