from __future__ import annotations

import importlib.util
import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import pycountry

from .errors import InvalidInputError

UNDETERMINED = "und"

Classifier = Callable[[str, int, Optional[Sequence[str]], Optional[Sequence[str]]], List[Tuple[str, float]]]

COMMON_NAMES = {
    "und": "Undetermined",
    "eng": "English",
    "spa": "Spanish",
    "fra": "French",
    "deu": "German",
    "ita": "Italian",
    "por": "Portuguese",
    "rus": "Russian",
    "jpn": "Japanese",
    "kor": "Korean",
    "cmn": "Chinese (Mandarin)",
    "arb": "Arabic",
    "hin": "Hindi",
    "ben": "Bengali",
    "nld": "Dutch",
    "pol": "Polish",
    "tur": "Turkish",
    "vie": "Vietnamese",
    "tha": "Thai",
    "swe": "Swedish",
}

# langdetect codes that do not map onto the macrolanguage entry we report
_LANGDETECT_OVERRIDES = {"zh-cn": "cmn", "zh-tw": "cmn", "ar": "arb"}


@dataclass
class AlternativeLanguage:
    language: str
    language_name: str
    confidence: float


@dataclass
class LanguageDetectionResult:
    detected_language: str
    language_name: str
    confidence: float
    scores: Dict[str, float]
    alternative_languages: List[AlternativeLanguage] = field(default_factory=list)

    @property
    def undetermined(self) -> bool:
        return self.detected_language == UNDETERMINED

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def undetermined_result() -> LanguageDetectionResult:
    return LanguageDetectionResult(
        detected_language=UNDETERMINED,
        language_name=COMMON_NAMES[UNDETERMINED],
        confidence=0,
        scores={UNDETERMINED: 0},
        alternative_languages=[],
    )


def _lookup_language(**kwargs):
    try:
        return pycountry.languages.get(**kwargs)
    except KeyError:
        return None


def to_iso639_3(code: str) -> str:
    code = code.lower()
    if code in _LANGDETECT_OVERRIDES:
        return _LANGDETECT_OVERRIDES[code]
    base = code.split("-")[0]
    if len(base) == 3:
        return base
    lang = _lookup_language(alpha_2=base)
    return lang.alpha_3 if lang is not None else base


def language_name(code: str) -> str:
    """Common table first, then the ISO 639-3 registry, else the code itself."""
    if code in COMMON_NAMES:
        return COMMON_NAMES[code]
    lang = _lookup_language(alpha_3=code)
    if lang is not None and getattr(lang, "name", None):
        return lang.name
    return code.upper()


def langdetect_classifier(
    text: str,
    min_length: int,
    whitelist: Optional[Sequence[str]] = None,
    blacklist: Optional[Sequence[str]] = None,
) -> List[Tuple[str, float]]:
    """Ranked (ISO 639-3 code, probability) pairs from langdetect."""
    spec = importlib.util.find_spec("langdetect")
    if spec is None:
        logging.warning("langdetect not available; language reported as undetermined.")
        return []
    from langdetect import DetectorFactory, detect_langs
    from langdetect.lang_detect_exception import LangDetectException

    if len(text) < min_length:
        return []
    DetectorFactory.seed = 0
    try:
        langs = detect_langs(text)
    except LangDetectException:
        return []
    # zh-cn and zh-tw both map to cmn; keep the higher score
    merged: Dict[str, float] = {}
    for item in langs:
        code = to_iso639_3(item.lang)
        if whitelist and code not in whitelist:
            continue
        if blacklist and code in blacklist:
            continue
        merged[code] = max(merged.get(code, 0.0), float(item.prob))
    return sorted(merged.items(), key=lambda x: x[1], reverse=True)


class LanguageDetector:
    def __init__(
        self,
        min_length: int = 10,
        whitelist: Optional[Sequence[str]] = None,
        blacklist: Optional[Sequence[str]] = None,
        classifier: Optional[Classifier] = None,
    ) -> None:
        self.min_length = min_length
        self.whitelist = list(whitelist or [])
        self.blacklist = list(blacklist or [])
        self.classifier = classifier or langdetect_classifier

    def detect(
        self,
        text: str,
        whitelist: Optional[Sequence[str]] = None,
        blacklist: Optional[Sequence[str]] = None,
        min_length: Optional[int] = None,
    ) -> LanguageDetectionResult:
        if not isinstance(text, str) or not text:
            raise InvalidInputError("Input must be a non-empty string")
        min_length = self.min_length if min_length is None else min_length
        if len(text) < min_length:
            return undetermined_result()

        whitelist = list(whitelist) if whitelist else self.whitelist
        blacklist = list(blacklist) if blacklist else self.blacklist
        ranked = self.classifier(text, min_length, whitelist or None, blacklist or None)
        if not ranked or ranked[0][0] == UNDETERMINED:
            return undetermined_result()

        top_code, top_score = ranked[0]
        return LanguageDetectionResult(
            detected_language=top_code,
            language_name=language_name(top_code),
            confidence=round(top_score * 100, 2),
            scores={code: round(score * 100, 2) for code, score in ranked[:5]},
            alternative_languages=[
                AlternativeLanguage(
                    language=code,
                    language_name=language_name(code),
                    confidence=round(score * 100, 2),
                )
                for code, score in ranked[1:4]
            ],
        )

    def add_custom_language(self, lang: str, profile: Dict[str, float]) -> None:
        logging.warning(
            "Custom language profiles are not supported; use whitelist/blacklist in detect() instead."
        )
