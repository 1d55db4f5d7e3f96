import importlib.util
import logging

import pytest

from textops.errors import InvalidInputError
from textops.sentiment import ModelState, SentimentAnalyzer, classify_sentiment
from textops.text_utils import sentiment_tokens


def _analyzer(**kwargs):
    kwargs.setdefault("use_secondary_model", False)
    return SentimentAnalyzer(**kwargs)


def test_positive_text():
    result = _analyzer().analyze("I love this amazing product")
    assert result.classification == "positive"
    assert result.score > 0.1
    assert result.score == pytest.approx(0.6 * (7 / 5 / 3) + 0.4)
    assert result.positive_word_count == 2
    assert result.negative_word_count == 0
    assert result.total_words == 5


def test_negative_text():
    result = _analyzer().analyze("This is terrible and awful")
    assert result.classification == "negative"
    assert result.score < -0.1
    assert result.negative_word_count == 2


def test_neutral_text():
    result = _analyzer().analyze("The report lists the quarterly figures for the northern region.")
    assert result.classification == "neutral"
    assert abs(result.score) < 0.1


def test_three_signal_weighting_with_secondary_model():
    analyzer = SentimentAnalyzer(secondary_model=lambda text: -1.0)
    assert analyzer.model_state is ModelState.AVAILABLE
    result = analyzer.analyze("I love this amazing product")
    assert result.score == pytest.approx(0.4 * (7 / 5 / 3) - 0.4 + 0.2)
    assert result.classification == "neutral"


def test_failing_secondary_model_scores_zero():
    def broken(text):
        raise RuntimeError("model crashed")

    result = SentimentAnalyzer(secondary_model=broken).analyze("I love this amazing product")
    assert result.score == pytest.approx(0.4 * (7 / 5 / 3) + 0.2)


def test_lexicon_signal_is_clamped():
    assert _analyzer().lexicon_score(["outstanding", "superb"]) == 1.0
    assert _analyzer().lexicon_score(["hate"] * 3) == -1.0
    assert _analyzer().lexicon_score([]) == 0.0


def test_missing_textblob_marks_model_unavailable(monkeypatch):
    monkeypatch.setattr(importlib.util, "find_spec", lambda name: None)
    analyzer = SentimentAnalyzer()
    assert analyzer.model_state is ModelState.NOT_PROBED
    assert analyzer.secondary_available() is False
    assert analyzer.model_state is ModelState.UNAVAILABLE
    assert analyzer.analyze("I love this amazing product").classification == "positive"


@pytest.mark.parametrize("value", ["", None, 3])
def test_invalid_input(value):
    with pytest.raises(InvalidInputError):
        _analyzer().analyze(value)


def test_thresholds():
    assert classify_sentiment(0.1) == "positive"
    assert classify_sentiment(-0.1) == "negative"
    assert classify_sentiment(0.0999) == "neutral"


@pytest.mark.parametrize(
    "text, label",
    [
        ("I love this amazing product", "positive"),
        ("This is terrible and awful", "negative"),
        ("The report lists the quarterly figures for the northern region.", "neutral"),
    ],
)
def test_default_analyzer_uses_textblob(text, label):
    from textblob import TextBlob

    analyzer = SentimentAnalyzer()
    result = analyzer.analyze(text)
    assert analyzer.model_state is ModelState.AVAILABLE
    assert result.classification == label

    tokens = sentiment_tokens(text)
    positive, negative = analyzer.tag_counts(tokens)
    heuristic = (positive - negative) / (positive + negative) if positive + negative else 0.0
    expected = (
        0.4 * analyzer.lexicon_score(tokens)
        + 0.4 * TextBlob(text).sentiment.polarity
        + 0.2 * heuristic
    )
    assert result.score == pytest.approx(expected)


def test_custom_lexicon_is_ignored_with_warning(caplog):
    analyzer = _analyzer()
    with caplog.at_level(logging.WARNING):
        analyzer.add_custom_lexicon({"positive": ["product"]})
    assert "add_custom_lexicon is deprecated" in caplog.text
    assert analyzer.analyze("product").classification == "neutral"
