from textops.text_utils import (
    count_characters,
    count_sentences,
    count_words,
    reverse_text,
    sentiment_tokens,
    to_title_case,
    word_tokens,
)


def test_count_sentences_terminated():
    assert count_sentences("This is one. This is two.") == 2
    assert count_sentences("Wait... what?!") == 2


def test_count_sentences_empty_and_unterminated():
    assert count_sentences("") == 0
    assert count_sentences("   \n ") == 0
    assert count_sentences("No terminal punctuation") == 1
    assert count_sentences("First one. and a trailing part") == 2


def test_count_words_splits_on_whitespace_runs():
    assert count_words("  hello   world \n foo ") == 3
    assert count_words("") == 0


def test_count_characters_skips_whitespace_and_format_chars():
    assert count_characters("a b\u200bc\n") == 3


def test_title_case():
    assert to_title_case("hello wORLD test") == "Hello World Test"


def test_reverse_keeps_combining_marks():
    assert reverse_text("Hello") == "olleH"
    assert reverse_text("e\u0301a") == "ae\u0301"


def test_tokenizers():
    assert word_tokens("It's a dog-eat-dog world") == ["It", "s", "a", "dog", "eat", "dog", "world"]
    assert sentiment_tokens("It's fine") == ["It's", "fine"]
