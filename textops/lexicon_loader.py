"""Process-wide cache for stopword and IDF lexicons.

Loading is idempotent and never raises: unreachable sources degrade to the
built-in stopword list and an empty IDF table, and keyword extraction keeps
working with those.
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Dict, FrozenSet, Iterable, List, Optional

import httpx
from sklearn.feature_extraction.text import TfidfVectorizer

from .config import IDF_URL, STOPWORD_URLS, TextOpsConfig, _default_stopwords

# InvalidURL is not an HTTPError subclass
FETCH_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


class LexiconCache:
    def __init__(
        self,
        stopword_urls: Optional[List[str]] = None,
        idf_url: str = IDF_URL,
        fallback_stopwords: Optional[Iterable[str]] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.stopword_urls = list(STOPWORD_URLS if stopword_urls is None else stopword_urls)
        self.idf_url = idf_url
        self.fallback_stopwords: FrozenSet[str] = frozenset(
            w.lower() for w in (fallback_stopwords if fallback_stopwords is not None else _default_stopwords())
        )
        self.timeout = timeout
        self.transport = transport
        self.stopwords: Optional[FrozenSet[str]] = None
        self.idf: Optional[Dict[str, float]] = None

    @classmethod
    def from_config(
        cls, config: TextOpsConfig, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "LexiconCache":
        return cls(
            stopword_urls=config.stopword_urls,
            idf_url=config.idf_url,
            fallback_stopwords=config.stopwords,
            timeout=config.request_timeout,
            transport=transport,
        )

    @property
    def loaded(self) -> bool:
        return self.stopwords is not None and self.idf is not None

    def active_stopwords(self) -> FrozenSet[str]:
        return self.stopwords if self.stopwords is not None else self.fallback_stopwords

    def active_idf(self) -> Dict[str, float]:
        return self.idf if self.idf is not None else {}

    def clear(self) -> None:
        self.stopwords = None
        self.idf = None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def _fetch_word_list(self, client: httpx.AsyncClient, url: str) -> List[str]:
        try:
            resp = await client.get(url)
        except FETCH_ERRORS as exc:
            logging.warning("Stopword source %s unreachable: %s", url, exc)
            return []
        if not resp.is_success:
            logging.warning("Stopword source %s returned HTTP %d", url, resp.status_code)
            return []
        try:
            words = resp.json()
        except ValueError:
            # plain text list, one word per line
            return [line.strip().lower() for line in resp.text.splitlines() if line.strip()]
        if not isinstance(words, list):
            return []
        return [str(w).strip().lower() for w in words if str(w).strip()]

    async def load_stopwords(self) -> FrozenSet[str]:
        if self.stopwords is not None:
            return self.stopwords
        async with self._client() as client:
            results = await asyncio.gather(
                *(self._fetch_word_list(client, url) for url in self.stopword_urls)
            )
        merged = {word for words in results for word in words}
        if merged:
            self.stopwords = frozenset(merged)
            logging.info("Loaded %d stopwords from %d sources", len(merged), len(self.stopword_urls))
        else:
            logging.warning("No stopword source available; using %d built-in stopwords", len(self.fallback_stopwords))
            self.stopwords = self.fallback_stopwords
        return self.stopwords

    async def load_idf(self) -> Dict[str, float]:
        """Rank-based IDF approximation from a frequency-ordered word list."""
        if self.idf is not None:
            return self.idf
        try:
            async with self._client() as client:
                resp = await client.get(self.idf_url)
                resp.raise_for_status()
        except FETCH_ERRORS as exc:
            logging.warning("Failed to load IDF list from %s: %s", self.idf_url, exc)
            return {}
        idf: Dict[str, float] = {}
        for index, line in enumerate(resp.text.splitlines()):
            word = line.strip().lower()
            if word:
                # Zipf: idf ~ log(rank)
                idf[word] = math.log(index + 1)
        self.idf = idf
        logging.info("Loaded IDF table with %d terms", len(idf))
        return idf

    async def ensure_loaded(self) -> None:
        await asyncio.gather(self.load_stopwords(), self.load_idf())

    def load_corpus_idf(self, texts: Iterable[str]) -> Dict[str, float]:
        """Fit IDF weights from a local corpus and cache them."""
        docs = [t for t in texts if isinstance(t, str) and t.strip()]
        if not docs:
            logging.warning("IDF corpus is empty; keeping current IDF table")
            return self.active_idf()
        vectorizer = TfidfVectorizer(lowercase=True, token_pattern=r"(?u)\b\w+\b")
        try:
            vectorizer.fit(docs)
        except ValueError as exc:
            logging.warning("Could not fit IDF from corpus: %s", exc)
            return self.active_idf()
        idf = {
            term: float(weight)
            for term, weight in zip(vectorizer.get_feature_names_out(), vectorizer.idf_)
        }
        self.idf = idf
        logging.info("Fitted IDF table with %d terms from %d documents", len(idf), len(docs))
        return idf


DEFAULT_CACHE = LexiconCache()
