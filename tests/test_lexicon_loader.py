import asyncio
import math

import httpx

from textops.lexicon_loader import LexiconCache

URLS = ["http://lexicons.test/a.json", "http://lexicons.test/b.json", "http://lexicons.test/c.txt"]
IDF_URL = "http://lexicons.test/idf.txt"


def _transport(routes, calls=None):
    def handler(request):
        url = str(request.url)
        if calls is not None:
            calls.append(url)
        if url not in routes:
            return httpx.Response(404)
        status, kwargs = routes[url]
        return httpx.Response(status, **kwargs)

    return httpx.MockTransport(handler)


def _cache(routes, calls=None):
    return LexiconCache(stopword_urls=URLS, idf_url=IDF_URL, transport=_transport(routes, calls))


def test_stopwords_are_merged_from_all_sources():
    cache = _cache(
        {
            URLS[0]: (200, {"json": ["The", "and"]}),
            URLS[1]: (200, {"json": ["is"]}),
            URLS[2]: (200, {"text": "foo\nbar\n"}),
        }
    )
    stopwords = asyncio.run(cache.load_stopwords())
    assert stopwords == {"the", "and", "is", "foo", "bar"}


def test_stopwords_fall_back_when_every_source_fails():
    cache = _cache({URLS[0]: (500, {}), URLS[1]: (200, {"json": {"not": "a list"}})})
    stopwords = asyncio.run(cache.load_stopwords())
    assert stopwords == cache.fallback_stopwords
    assert "the" in stopwords


def test_idf_uses_rank_approximation():
    cache = _cache({IDF_URL: (200, {"text": "the\nof\n\nand\n"})})
    idf = asyncio.run(cache.load_idf())
    assert idf["the"] == 0
    assert idf["of"] == math.log(2)
    assert idf["and"] == math.log(4)


def test_idf_failure_is_not_cached():
    cache = _cache({IDF_URL: (503, {})})
    assert asyncio.run(cache.load_idf()) == {}
    assert cache.idf is None
    assert not cache.loaded


def test_network_errors_are_swallowed():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    cache = LexiconCache(stopword_urls=URLS, idf_url=IDF_URL, transport=httpx.MockTransport(handler))
    asyncio.run(cache.ensure_loaded())
    assert cache.stopwords == cache.fallback_stopwords
    assert cache.active_idf() == {}


def test_ensure_loaded_is_idempotent():
    calls = []
    cache = _cache(
        {
            URLS[0]: (200, {"json": ["the"]}),
            IDF_URL: (200, {"text": "the\nriver\n"}),
        },
        calls,
    )
    asyncio.run(cache.ensure_loaded())
    assert cache.loaded
    first = len(calls)
    asyncio.run(cache.ensure_loaded())
    assert len(calls) == first
    cache.clear()
    assert not cache.loaded


def test_corpus_idf_weights_rare_terms_higher():
    cache = LexiconCache(stopword_urls=[])
    idf = cache.load_corpus_idf(["the cat sat", "the dog ran", "the cat ran"])
    assert idf["dog"] > idf["cat"] > idf["the"]
    assert cache.idf is idf


def test_empty_corpus_keeps_current_table():
    cache = LexiconCache(stopword_urls=[])
    assert cache.load_corpus_idf(["", "   "]) == {}
    assert cache.idf is None


def test_malformed_urls_degrade_to_defaults():
    cache = LexiconCache(
        stopword_urls=["http://[::1"],
        idf_url="http://[::1",
        transport=_transport({}),
    )
    asyncio.run(cache.ensure_loaded())
    assert cache.stopwords == cache.fallback_stopwords
    assert cache.idf is None
    assert cache.active_idf() == {}
