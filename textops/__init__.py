"""
textops: a configurable pipeline of text operations.

Cleaning, extraction, case transforms and counting run as leaf operations of an
``Analyser`` session, alongside sentiment, readability, language detection,
TF-IDF keywords and bag-of-words text comparison. The command line entrypoint
is ``textops.run.main``.
"""

from .analyser import Analyser, AnalyserResult, CustomOperation
from .config import TextOpsConfig
from .diff import TextDiff, TextDiffResult
from .errors import (
    ConfigurationError,
    DuplicateOperationError,
    InvalidArgumentError,
    InvalidInputError,
    TextOpsError,
    UnknownOperationError,
)
from .keywords import KeywordExtractor
from .language import LanguageDetectionResult, LanguageDetector
from .lexicon_loader import DEFAULT_CACHE, LexiconCache
from .operations import Operation
from .readability import ReadabilityResult, TextStatistics
from .sentiment import SentimentAnalyzer, SentimentResult

__all__ = [
    "Analyser",
    "AnalyserResult",
    "CustomOperation",
    "TextOpsConfig",
    "TextDiff",
    "TextDiffResult",
    "TextOpsError",
    "InvalidInputError",
    "ConfigurationError",
    "DuplicateOperationError",
    "UnknownOperationError",
    "InvalidArgumentError",
    "KeywordExtractor",
    "LanguageDetector",
    "LanguageDetectionResult",
    "LexiconCache",
    "DEFAULT_CACHE",
    "Operation",
    "TextStatistics",
    "ReadabilityResult",
    "SentimentAnalyzer",
    "SentimentResult",
]
