import pytest

from textops.errors import InvalidInputError
from textops.readability import TextStatistics, complexity_label, count_syllables

ACADEMIC = (
    "The institutionalization of interdisciplinary epistemological frameworks necessitates "
    "comprehensive reconsideration of methodological assumptions underlying contemporary "
    "organizational administration. Consequently, administrative rationalization "
    "presupposes considerable organizational communication. Heterogeneous institutional "
    "configurations systematically complicate evaluative generalization."
)


def test_simple_sentence_is_very_easy():
    result = TextStatistics().flesch_kincaid_readability("The cat sat on the mat.")
    assert result.word_count == 6
    assert result.sentence_count == 1
    assert result.syllable_count == 6
    assert result.readability_score == 100.0
    assert result.grade_level == 0
    assert result.smog_index == 3.1
    assert result.complexity == "Very Easy"


def test_two_sentence_text_is_very_easy():
    text = (
        "The quick brown fox jumps over the lazy dog. It was a bright cold day in April, "
        "and the clocks were striking thirteen."
    )
    result = TextStatistics().flesch_kincaid_readability(text)
    assert result.sentence_count == 2
    assert result.complexity == "Very Easy"


def test_academic_paragraph_is_difficult():
    result = TextStatistics().flesch_kincaid_readability(ACADEMIC)
    assert result.sentence_count == 3
    assert result.readability_score < 50
    assert result.complexity in ("Difficult", "Very Difficult")
    # three sentences and ten-plus words take the classic SMOG branch
    assert result.smog_index > 10


def test_no_words_returns_empty_result():
    result = TextStatistics().flesch_kincaid_readability("!!! ... ???")
    assert result.word_count == 0
    assert result.complexity == "N/A"


@pytest.mark.parametrize("value", ["", None, 42])
def test_invalid_input(value):
    with pytest.raises(InvalidInputError):
        TextStatistics().flesch_kincaid_readability(value)


def test_unterminated_text_counts_as_one_sentence():
    result = TextStatistics().flesch_kincaid_readability("no punctuation at all here")
    assert result.sentence_count == 1


def test_count_syllables():
    assert count_syllables("cat") == 1
    assert count_syllables("table") == 2
    assert count_syllables("jumped") == 1
    assert count_syllables("reading") == 2
    assert count_syllables("syllable") == 3
    assert count_syllables("") == 0


def test_complexity_breakpoints():
    assert complexity_label(95) == "Very Easy"
    assert complexity_label(80) == "Easy"
    assert complexity_label(75) == "Fairly Easy"
    assert complexity_label(60) == "Standard"
    assert complexity_label(55) == "Fairly Difficult"
    assert complexity_label(30) == "Difficult"
    assert complexity_label(29.9) == "Very Difficult"
