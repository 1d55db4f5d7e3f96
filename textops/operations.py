from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional

from .errors import ConfigurationError
from .text_utils import (
    ALPHABET_RE,
    BLANK_LINE_RE,
    DIGIT_RE,
    EMAIL_RE,
    EXTRA_SPACES_RE,
    HASHTAG_RE,
    MENTION_RE,
    PHONE_RE,
    PUNCT_RE,
    SPECIAL_CHAR_RE,
    URL_RE,
    count_characters,
    count_sentences,
    count_words,
    reverse_text,
    to_title_case,
)

if TYPE_CHECKING:
    from .analyser import Analyser

Handler = Callable[["Analyser", Any], None]


class Operation(str, enum.Enum):
    """Built-in operations. Options may be keyed by member, value or member name."""

    REMOVE_PUNCTUATIONS = "removepunc"
    REMOVE_NUMBERS = "removenum"
    REMOVE_ALPHABETS = "removealpha"
    REMOVE_SPECIAL_CHARS = "removespecialchar"
    REMOVE_NEWLINES = "newlineremover"
    REMOVE_EXTRA_SPACES = "extraspaceremover"
    EXTRACT_URLS = "extractUrls"
    EXTRACT_EMAILS = "extractEmails"
    EXTRACT_PHONE_NUMBERS = "extractPhoneNumbers"
    EXTRACT_HASHTAGS = "extractHashtags"
    EXTRACT_MENTIONS = "extractMentions"
    CONVERT_TO_UPPERCASE = "fullcaps"
    CONVERT_TO_LOWERCASE = "lowercaps"
    CONVERT_TO_TITLE_CASE = "titlecase"
    COUNT_CHARACTERS = "charcount"
    COUNT_ALPHABETS = "alphacount"
    COUNT_NUMBERS = "numcount"
    COUNT_ALPHANUMERIC = "alphanumericcount"
    COUNT_WORDS = "wordcount"
    COUNT_SENTENCES = "sentencecount"
    REVERSE_TEXT = "reversetext"
    TRUNCATE = "truncate"
    EXTRACT_KEYWORDS = "extractKeywords"
    ANALYZE_SENTIMENT = "analyzeSentiment"
    CALCULATE_READABILITY = "calculateReadability"
    DETECT_LANGUAGE = "detectLanguage"
    COMPARE_TEXTS = "compareTexts"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def resolve(cls, key: Any) -> Optional["Operation"]:
        if isinstance(key, Operation):
            return key
        if not isinstance(key, str):
            return None
        try:
            return cls(key)
        except ValueError:
            return cls.__members__.get(key)

    @classmethod
    def identifiers(cls) -> set:
        return set(cls.__members__) | {op.value for op in cls}


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _substitute(pattern, description: str, replacement: str = "") -> Handler:
    def handler(session: "Analyser", value: Any) -> None:
        session.text = pattern.sub(replacement, session.text)
        session.log_operation(description)

    return handler


def _extract(pattern, attr: str, description: str) -> Handler:
    def handler(session: "Analyser", value: Any) -> None:
        setattr(session, attr, pattern.findall(session.text))
        session.log_operation(description)

    return handler


def remove_newlines(session: "Analyser", value: Any) -> None:
    session.text = BLANK_LINE_RE.sub("\n", session.text).strip()
    session.log_operation("Removed New Line Characters")


def remove_extra_spaces(session: "Analyser", value: Any) -> None:
    session.text = EXTRA_SPACES_RE.sub(" ", session.text).strip()
    session.log_operation("Removed Extra Spaces")


def to_uppercase(session: "Analyser", value: Any) -> None:
    session.text = session.text.upper()
    session.log_operation("Changed to Uppercase")


def to_lowercase(session: "Analyser", value: Any) -> None:
    session.text = session.text.lower()
    session.log_operation("Changed to Lowercase")


def to_title(session: "Analyser", value: Any) -> None:
    session.text = to_title_case(session.text)
    session.log_operation("Changed to Title Case")


def count_chars(session: "Analyser", value: Any) -> None:
    session.character_count = count_characters(session.text)
    session.log_operation("Counted Characters")


def count_alphabets(session: "Analyser", value: Any) -> None:
    session.alphabet_count = len(ALPHABET_RE.findall(session.text))
    session.log_operation("Counted Alphabets")


def count_numbers(session: "Analyser", value: Any) -> None:
    session.numeric_count = len(DIGIT_RE.findall(session.text))
    session.log_operation("Counted Numbers")


def count_alphanumeric(session: "Analyser", value: Any) -> None:
    session.alphabet_count = len(ALPHABET_RE.findall(session.text))
    session.numeric_count = len(DIGIT_RE.findall(session.text))
    session.log_operation("Counted Alphabets and Numbers")


def count_word_tokens(session: "Analyser", value: Any) -> None:
    session.word_count = count_words(session.text)
    session.log_operation("Counted Words")


def count_sentence_spans(session: "Analyser", value: Any) -> None:
    session.sentence_count = count_sentences(session.text)
    session.log_operation("Counted Sentences")


def reverse(session: "Analyser", value: Any) -> None:
    session.text = reverse_text(session.text)
    session.log_operation("Reversed Text")


def truncate(session: "Analyser", value: Any) -> None:
    if not isinstance(value, Mapping) or not _positive_int(value.get("max_length")):
        raise ConfigurationError("Truncate operation requires a valid configuration with max_length")
    max_length = value["max_length"]
    suffix = value.get("suffix", "...")
    if not isinstance(suffix, str):
        raise ConfigurationError("Truncate suffix must be a string")
    if len(session.text) <= max_length:
        return
    # the suffix is appended after the cut, so output may exceed max_length
    session.text = session.text[:max_length] + suffix
    session.log_operation(f"Truncated Text to {max_length} characters")


def extract_keywords(session: "Analyser", value: Any) -> None:
    top_n = 5
    if isinstance(value, Mapping) and value.get("top_n") is not None:
        top_n = value["top_n"]
        if not _positive_int(top_n):
            raise ConfigurationError("extractKeywords top_n must be a positive integer")
    session.keywords = session.keyword_extractor.extract_keywords(session.text, top_n)
    session.log_operation(f"Extracted Top {top_n} Keywords (TF-IDF)")


def analyze_sentiment(session: "Analyser", value: Any) -> None:
    session.sentiment = session.sentiment_analyzer.analyze(session.text)
    session.log_operation("Analysed Sentiment")


def calculate_readability(session: "Analyser", value: Any) -> None:
    session.readability = session.text_statistics.flesch_kincaid_readability(session.text)
    session.log_operation("Calculated Readability Metrics (Flesch-Kincaid & SMOG)")


def detect_language(session: "Analyser", value: Any) -> None:
    result = session.language_detector.detect(session.text)
    session.language = result
    session.log_operation(f"Detected Language: {result.detected_language}")


def compare_texts(session: "Analyser", value: Any) -> None:
    if not isinstance(value, Mapping) or not isinstance(value.get("compare_with"), str):
        raise ConfigurationError("CompareTexts operation requires a 'compare_with' text")
    result = session.text_diff.compare(session.text, value["compare_with"])
    session.comparison = result
    session.log_operation(f"Compared Texts ({result.similarity:.2f}% similarity)")


BUILTIN_HANDLERS: Dict[Operation, Handler] = {
    Operation.REMOVE_PUNCTUATIONS: _substitute(PUNCT_RE, "Removed Punctuations"),
    Operation.REMOVE_NUMBERS: _substitute(DIGIT_RE, "Removed Numbers"),
    Operation.REMOVE_ALPHABETS: _substitute(ALPHABET_RE, "Removed Alphabets"),
    Operation.REMOVE_SPECIAL_CHARS: _substitute(SPECIAL_CHAR_RE, "Removed Special Characters"),
    Operation.REMOVE_NEWLINES: remove_newlines,
    Operation.REMOVE_EXTRA_SPACES: remove_extra_spaces,
    Operation.EXTRACT_URLS: _extract(URL_RE, "urls", "Extracted URLs"),
    Operation.EXTRACT_EMAILS: _extract(EMAIL_RE, "emails", "Extracted Emails"),
    Operation.EXTRACT_PHONE_NUMBERS: _extract(PHONE_RE, "phone_numbers", "Extracted Phone Numbers"),
    Operation.EXTRACT_HASHTAGS: _extract(HASHTAG_RE, "hashtags", "Extracted Hashtags"),
    Operation.EXTRACT_MENTIONS: _extract(MENTION_RE, "mentions", "Extracted Mentions"),
    Operation.CONVERT_TO_UPPERCASE: to_uppercase,
    Operation.CONVERT_TO_LOWERCASE: to_lowercase,
    Operation.CONVERT_TO_TITLE_CASE: to_title,
    Operation.COUNT_CHARACTERS: count_chars,
    Operation.COUNT_ALPHABETS: count_alphabets,
    Operation.COUNT_NUMBERS: count_numbers,
    Operation.COUNT_ALPHANUMERIC: count_alphanumeric,
    Operation.COUNT_WORDS: count_word_tokens,
    Operation.COUNT_SENTENCES: count_sentence_spans,
    Operation.REVERSE_TEXT: reverse,
    Operation.TRUNCATE: truncate,
    Operation.EXTRACT_KEYWORDS: extract_keywords,
    Operation.ANALYZE_SENTIMENT: analyze_sentiment,
    Operation.CALCULATE_READABILITY: calculate_readability,
    Operation.DETECT_LANGUAGE: detect_language,
    Operation.COMPARE_TEXTS: compare_texts,
}
