from textops.keywords import KeywordExtractor
from textops.lexicon_loader import LexiconCache

TEXT = "Python python PYTHON is great. Data science with python and data."


def test_ranks_by_tf_idf_with_default_idf(offline_cache):
    assert KeywordExtractor(offline_cache).extract_keywords(TEXT, top_n=3) == ["python", "data", "great"]


def test_ties_keep_first_occurrence_order(offline_cache):
    assert KeywordExtractor(offline_cache).extract_keywords(TEXT, top_n=4)[2:] == ["great", "science"]


def test_loaded_idf_changes_ranking(offline_cache):
    offline_cache.idf = {"python": 0.1}
    assert KeywordExtractor(offline_cache).extract_keywords(TEXT, top_n=3) == ["data", "great", "science"]


def test_filters_stopwords_and_short_tokens(offline_cache):
    keywords = KeywordExtractor(offline_cache).extract_keywords("an ox is at the zoo today", top_n=10)
    assert keywords == ["zoo", "today"]
    assert not set(keywords) & offline_cache.active_stopwords()


def test_returns_at_most_top_n(offline_cache):
    text = "alpha beta gamma delta epsilon zeta theta"
    assert len(KeywordExtractor(offline_cache).extract_keywords(text, top_n=2)) == 2


def test_unloaded_cache_degrades_to_fallback_stopwords():
    cache = LexiconCache(stopword_urls=[])
    assert not cache.loaded
    assert KeywordExtractor(cache).extract_keywords("the the the river river", top_n=5) == ["river"]


def test_empty_text(offline_cache):
    assert KeywordExtractor(offline_cache).extract_keywords("", top_n=5) == []
    assert KeywordExtractor(offline_cache).extract_keywords("?!", top_n=5) == []
