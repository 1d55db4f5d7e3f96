import pytest

from textops.analyser import Analyser
from textops.config import TextOpsConfig
from textops.language import LanguageDetector
from textops.lexicon_loader import LexiconCache

SAMPLE_TEXT = (
    "Hello World! This is a test string with 123 numbers, https://example.com URL, "
    "test@email.com, #hashtag, and @mention. It has multiple sentences too. The movie was good."
)


def stub_ranking(text, min_length, whitelist=None, blacklist=None):
    ranked = [("eng", 0.91), ("sco", 0.05), ("fra", 0.02), ("deu", 0.01), ("nld", 0.005), ("spa", 0.001)]
    if whitelist:
        ranked = [r for r in ranked if r[0] in whitelist]
    if blacklist:
        ranked = [r for r in ranked if r[0] not in blacklist]
    return ranked


@pytest.fixture
def offline_cache():
    cache = LexiconCache(stopword_urls=[], idf_url="http://lexicons.invalid/idf.txt")
    cache.stopwords = cache.fallback_stopwords
    cache.idf = {}
    return cache


@pytest.fixture
def offline_config():
    return TextOpsConfig(offline=True, use_secondary_sentiment=False)


@pytest.fixture
def make_analyser(offline_cache, offline_config):
    def factory(text, options=None, **kwargs):
        kwargs.setdefault("config", offline_config)
        kwargs.setdefault("cache", offline_cache)
        kwargs.setdefault("language_detector", LanguageDetector(classifier=stub_ranking))
        return Analyser(text, options, **kwargs)

    return factory
