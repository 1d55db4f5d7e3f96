"""Operation pipeline over a single mutable text buffer.

An ``Analyser`` owns the text, the counters and collections derived from it,
an operation log and an options mapping (operation id -> ``True``/``False`` or
a per-operation config mapping). ``run()`` applies every enabled operation in
option insertion order and returns an immutable ``AnalyserResult``.

Sessions are not safe for concurrent ``run()`` calls. Batch processing gives
every text its own session; only the lexicon cache is shared.
"""

from __future__ import annotations

import copy
import logging
import time
import types
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .config import TextOpsConfig
from .diff import TextDiff, TextDiffResult
from .errors import (
    DuplicateOperationError,
    InvalidArgumentError,
    InvalidInputError,
    UnknownOperationError,
)
from .keywords import KeywordExtractor
from .language import LanguageDetectionResult, LanguageDetector
from .lexicon_loader import DEFAULT_CACHE, LexiconCache
from .operations import BUILTIN_HANDLERS, Operation
from .readability import ReadabilityResult, TextStatistics
from .sentiment import SentimentAnalyzer, SentimentResult


def _is_enabled(value: Any) -> bool:
    # a config mapping is itself the "enabled" signal
    return value is not None and value is not False


def _option_key(key: Any) -> str:
    # built-ins are stored under their value whichever alias the caller used
    if isinstance(key, (Operation, str)):
        op = Operation.resolve(key)
        return op.value if op is not None else key
    raise InvalidArgumentError(f"Operation identifiers must be strings, got {type(key).__name__}")


@dataclass
class CustomOperation:
    """A caller-registered ``text -> text`` transform with optional metadata."""

    id: str
    display_name: str
    operation: Callable[[str], str]
    metadata: Optional[Dict[str, Any]] = None
    metadata_extractor: Optional[Callable[[str], Mapping[str, Any]]] = None

    def __call__(self, session: "Analyser", value: Any) -> None:
        original = session.text
        try:
            result = self.operation(original)
            if not isinstance(result, str):
                raise InvalidInputError(
                    f"Custom operation {self.id!r} returned {type(result).__name__}, expected str"
                )
            session.text = result
            session.log_operation(self.display_name, custom=True)
            entry = session.custom_metadata.setdefault(self.id, {})
            if self.metadata:
                entry.update(self.metadata)
            if self.metadata_extractor is not None:
                entry.update(self.metadata_extractor(original))
        except Exception as exc:
            session.log_operation(f"Error in Custom Operation: {self.display_name} - {exc}", custom=True)
            raise


@dataclass(frozen=True)
class AnalyserResult:
    purpose: str
    output: str
    operations: Tuple[str, ...]
    builtin_operations: Tuple[str, ...]
    custom_operations: Tuple[str, ...]
    execution_time: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        for key in ("operations", "builtin_operations", "custom_operations"):
            payload[key] = list(payload[key])
        return payload


class Analyser:
    def __init__(
        self,
        text: str,
        options: Optional[Mapping[Any, Any]] = None,
        config: Optional[TextOpsConfig] = None,
        cache: Optional[LexiconCache] = None,
        sentiment_analyzer: Optional[SentimentAnalyzer] = None,
        language_detector: Optional[LanguageDetector] = None,
    ) -> None:
        if not isinstance(text, str):
            raise InvalidInputError("Input text must be a string")
        self.config = config if config is not None else TextOpsConfig()
        self.cache = cache if cache is not None else DEFAULT_CACHE
        self.original_text = text
        self.text = text
        self._options: Dict[str, Any] = {}
        self._custom: Dict[str, CustomOperation] = {}
        self.configure(options or {})

        self.sentiment_analyzer = sentiment_analyzer or SentimentAnalyzer(
            valences=self.config.valences,
            lexicons=self.config.lexicons,
            use_secondary_model=self.config.use_secondary_sentiment,
        )
        self.keyword_extractor = KeywordExtractor(self.cache)
        self.text_statistics = TextStatistics()
        self.language_detector = language_detector or LanguageDetector(
            min_length=self.config.language_min_length,
            whitelist=self.config.language_whitelist,
            blacklist=self.config.language_blacklist,
        )
        self.text_diff = TextDiff()
        self._clear_derived()

    # -- factories -------------------------------------------------------

    @classmethod
    async def create(
        cls,
        text: str,
        options: Optional[Mapping[Any, Any]] = None,
        config: Optional[TextOpsConfig] = None,
        cache: Optional[LexiconCache] = None,
        **kwargs: Any,
    ) -> "Analyser":
        """Load the shared stopword/IDF lexicons, then build a session."""
        if not isinstance(text, str):
            raise InvalidInputError("Input text must be a string")
        cache = cache if cache is not None else DEFAULT_CACHE
        if not (config and config.offline):
            await cache.ensure_loaded()
        return cls(text, options, config=config, cache=cache, **kwargs)

    @classmethod
    def with_operations(cls, text: str, names: Iterable[Any], **kwargs: Any) -> "Analyser":
        options: Dict[str, Any] = {}
        for name in names:
            op = Operation.resolve(name)
            if op is not None:
                options[op.value] = True
        return cls(text, options, **kwargs)

    @classmethod
    async def batch(
        cls,
        texts: Sequence[str],
        options: Optional[Mapping[Any, Any]] = None,
        config: Optional[TextOpsConfig] = None,
        cache: Optional[LexiconCache] = None,
        **kwargs: Any,
    ) -> List[AnalyserResult]:
        """Run the same options over many texts, one session per text."""
        if not isinstance(texts, (list, tuple)):
            raise InvalidInputError("Texts must be a list of strings")
        cache = cache if cache is not None else DEFAULT_CACHE
        if not (config and config.offline):
            await cache.ensure_loaded()
        results = []
        for text in texts:
            session = cls(text, dict(options or {}), config=config, cache=cache, **kwargs)
            results.append(session.run())
        logging.info("Processed batch of %d texts", len(results))
        return results

    # -- options ---------------------------------------------------------

    @property
    def options(self) -> Mapping[str, Any]:
        return types.MappingProxyType(self._options)

    @property
    def available_operations(self) -> Dict[str, str]:
        available = {op.name: op.value for op in Operation}
        available.update({cid: cid for cid in self._custom})
        return available

    def configure(self, options: Mapping[Any, Any]) -> None:
        if not isinstance(options, Mapping):
            raise InvalidArgumentError("Options must be a mapping of operation id to flag or config")
        for key, value in options.items():
            self._options[_option_key(key)] = value

    def register_custom_operation(
        self,
        op_id: str,
        display_name: str,
        operation: Callable[[str], str],
        enabled: bool = False,
        metadata: Optional[Mapping[str, Any]] = None,
        metadata_extractor: Optional[Callable[[str], Mapping[str, Any]]] = None,
    ) -> None:
        if not op_id or not isinstance(op_id, str):
            raise InvalidArgumentError("Command name must be a non-empty string")
        if not display_name or not isinstance(display_name, str):
            raise InvalidArgumentError("Log name must be a non-empty string")
        if not callable(operation):
            raise InvalidArgumentError("Operation must be a function")
        if metadata is not None and not isinstance(metadata, Mapping):
            raise InvalidArgumentError("Metadata must be a mapping")
        if metadata_extractor is not None and not callable(metadata_extractor):
            raise InvalidArgumentError("Metadata extractor must be a function")
        if op_id in Operation.identifiers() or op_id in self._custom:
            raise DuplicateOperationError(f'Operation "{op_id}" already exists')

        self._custom[op_id] = CustomOperation(
            id=op_id,
            display_name=display_name,
            operation=operation,
            metadata=dict(metadata) if metadata else None,
            metadata_extractor=metadata_extractor,
        )
        if not _is_enabled(self._options.get(op_id)):
            self._options[op_id] = bool(enabled)

    def toggle(self, op_id: Any, enabled: bool) -> None:
        key = _option_key(op_id)
        if not isinstance(enabled, bool):
            raise InvalidArgumentError("enabled must be a boolean")
        if key not in self._options and Operation.resolve(key) is None and key not in self._custom:
            raise UnknownOperationError(f'Operation "{key}" not found. Please add it first.')
        if self._options.get(key) is enabled:
            return
        self._options[key] = enabled

    def _set_all(self, flag: bool) -> None:
        for op in Operation:
            self._options[op.value] = flag
        for cid in self._custom:
            self._options[cid] = flag

    def enable_all(self) -> None:
        self._set_all(True)

    def disable_all(self) -> None:
        self._set_all(False)

    # -- state -----------------------------------------------------------

    def _clear_derived(self) -> None:
        self.character_count = 0
        self.alphabet_count = 0
        self.numeric_count = 0
        self.word_count = 0
        self.sentence_count = 0
        self.urls: List[str] = []
        self.emails: List[str] = []
        self.phone_numbers: List[str] = []
        self.hashtags: List[str] = []
        self.mentions: List[str] = []
        self.keywords: List[str] = []
        self.sentiment: Optional[SentimentResult] = None
        self.readability: Optional[ReadabilityResult] = None
        self.language: Optional[LanguageDetectionResult] = None
        self.comparison: Optional[TextDiffResult] = None
        self.custom_metadata: Dict[str, Dict[str, Any]] = {}
        self.operation_log: List[str] = []
        self.builtin_log: List[str] = []
        self.custom_log: List[str] = []
        self._started = 0.0
        self._finished = 0.0

    def reset(self, new_text: Optional[str] = None) -> None:
        """Restore the original (or a new) text and clear everything derived from it.

        Registered custom operations and the options mapping survive.
        """
        if new_text is not None:
            if not isinstance(new_text, str):
                raise InvalidArgumentError("New text must be a string")
            self.original_text = new_text
        self.text = self.original_text
        self._clear_derived()

    def log_operation(self, description: str, custom: bool = False) -> None:
        self.operation_log.append(description)
        if custom:
            self.custom_log.append(description)
        else:
            self.builtin_log.append(description)

    # -- execution -------------------------------------------------------

    def run(self) -> AnalyserResult:
        self._started = time.perf_counter()
        try:
            for key, value in list(self._options.items()):
                if not _is_enabled(value):
                    continue
                custom = self._custom.get(key)
                if custom is not None:
                    custom(self, value)
                    continue
                op = Operation.resolve(key)
                if op is None:
                    logging.warning("No handler found for operation: %s", key)
                    continue
                BUILTIN_HANDLERS[op](self, value)
        except Exception as exc:
            logging.error("Operation failed: %s", exc)
            self.log_operation(f"Error: {exc}")
            raise
        finally:
            self._finished = time.perf_counter()
        return self.results()

    def results(self) -> AnalyserResult:
        def _dump(item):
            return item.to_dict() if item is not None else None

        metadata = {
            "counts": {
                "character_count": self.character_count,
                "alphabet_count": self.alphabet_count,
                "numeric_count": self.numeric_count,
                "word_count": self.word_count,
                "sentence_count": self.sentence_count,
            },
            "urls": list(self.urls),
            "emails": list(self.emails),
            "phone_numbers": list(self.phone_numbers),
            "hashtags": list(self.hashtags),
            "mentions": list(self.mentions),
            "keywords": list(self.keywords),
            "readability": _dump(self.readability),
            "sentiment": _dump(self.sentiment),
            "language_detection": _dump(self.language),
            "text_comparison": _dump(self.comparison),
            "custom": copy.deepcopy(self.custom_metadata),
        }
        return AnalyserResult(
            purpose=",".join(self.operation_log),
            output=self.text,
            operations=tuple(self.operation_log),
            builtin_operations=tuple(self.builtin_log),
            custom_operations=tuple(self.custom_log),
            execution_time=(self._finished - self._started) * 1000,
            metadata=metadata,
        )
