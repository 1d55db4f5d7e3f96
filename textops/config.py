from __future__ import annotations

import argparse
import json
import pathlib
import uuid
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from .operations import Operation

STOPWORD_URLS = [
    "https://raw.githubusercontent.com/6/stopwords-json/master/dist/en.json",
    "https://raw.githubusercontent.com/stopwords-iso/stopwords-en/master/stopwords-en.json",
    "https://raw.githubusercontent.com/Alir3z4/stop-words/master/english.txt",
]

# Frequency-ordered list, most common word first.
IDF_URL = (
    "https://raw.githubusercontent.com/first20hours/google-10000-english/master/"
    "google-10000-english.txt"
)


def _default_stopwords() -> List[str]:
    return [
        "a", "an", "the", "and", "or", "but", "if", "because", "as", "what",
        "which", "this", "that", "these", "those", "then", "just", "so", "than",
        "such", "when", "while", "to", "of", "at", "by", "for", "with", "about",
        "against", "between", "into", "through", "during", "before", "after",
        "above", "below", "from", "up", "down", "in", "out", "on", "off", "over",
        "under", "again", "further", "here", "there", "all", "any", "both",
        "each", "few", "more", "most", "other", "some", "no", "nor", "not",
        "only", "own", "same", "very", "can", "will", "is", "are", "was", "were",
    ]


def _default_valences() -> Dict[str, int]:
    """AFINN-style word valences in the range -5..5."""
    return {
        # positive
        "love": 3, "loved": 3, "loves": 3, "loving": 2, "like": 2, "liked": 2,
        "good": 3, "great": 3, "amazing": 4, "awesome": 4, "excellent": 3,
        "fantastic": 4, "wonderful": 4, "outstanding": 5, "superb": 5,
        "brilliant": 4, "happy": 3, "glad": 3, "joy": 3, "joyful": 3,
        "delighted": 3, "pleased": 3, "nice": 3, "best": 3, "better": 2,
        "beautiful": 3, "perfect": 3, "enjoy": 2, "enjoyed": 2, "fun": 4,
        "cool": 1, "recommend": 2, "recommended": 2, "thanks": 2, "thank": 2,
        "win": 4, "winning": 4, "success": 2, "successful": 3, "helpful": 2,
        "impressive": 3, "favorite": 2, "positive": 2, "fine": 2, "easy": 1,
        "exciting": 3, "excited": 3, "calm": 2, "safe": 1, "strong": 2,
        "smart": 1, "clean": 2, "fresh": 1, "friendly": 2, "kind": 2,
        "lucky": 3, "proud": 2, "satisfied": 2, "solid": 2, "gorgeous": 3,
        "incredible": 4, "charming": 3, "elegant": 2, "reliable": 2,
        # negative
        "hate": -3, "hated": -3, "hates": -3, "bad": -3, "terrible": -3,
        "awful": -3, "horrible": -3, "worst": -3, "worse": -3, "poor": -2,
        "sad": -2, "angry": -3, "annoyed": -2, "annoying": -2, "disappointed": -2,
        "disappointing": -2, "disgusting": -3, "ugly": -3, "broken": -1,
        "fail": -2, "failed": -2, "failure": -2, "problem": -2, "problems": -2,
        "wrong": -2, "useless": -2, "waste": -1, "boring": -3, "stupid": -2,
        "dirty": -2, "painful": -2, "pain": -2, "slow": -2, "fear": -2,
        "afraid": -2, "scared": -2, "sick": -2, "cry": -1, "lost": -3,
        "lose": -3, "loss": -3, "negative": -2, "dangerous": -2, "nasty": -3,
        "rude": -2, "unhappy": -2, "upset": -2, "hurt": -2, "crap": -3,
        "pathetic": -2, "mediocre": -3, "miserable": -3, "dreadful": -3,
        "damaged": -3, "unreliable": -2, "confusing": -2, "frustrating": -2,
    }


def _default_lexicons() -> Dict[str, Dict[str, List[str]]]:
    return {
        "sentiment": {
            "positive": [
                "love", "loved", "great", "amazing", "awesome", "excellent",
                "fantastic", "wonderful", "outstanding", "superb", "brilliant",
                "good", "happy", "glad", "nice", "best", "beautiful", "perfect",
                "fun", "impressive", "favorite", "exciting", "friendly", "kind",
                "incredible", "gorgeous", "charming", "elegant", "reliable",
                "helpful", "pleased", "delighted", "enjoy", "enjoyed",
            ],
            "negative": [
                "hate", "hated", "bad", "terrible", "awful", "horrible", "worst",
                "worse", "poor", "sad", "angry", "annoying", "disappointing",
                "disappointed", "disgusting", "ugly", "broken", "useless",
                "boring", "stupid", "dirty", "painful", "nasty", "rude", "unhappy",
                "pathetic", "mediocre", "miserable", "dreadful", "damaged",
                "unreliable", "confusing", "frustrating", "wrong",
            ],
        },
    }


@dataclass
class TextOpsConfig:
    """Central configuration for a textops run."""

    input_path: Optional[str] = None
    text: Optional[str] = None
    operations: List[str] = field(default_factory=list)
    output_dir: str = "outputs"
    output_format: str = "parquet"
    truncate_max_length: Optional[int] = None
    truncate_suffix: str = "..."
    compare_with: Optional[str] = None
    keyword_top_n: int = 5
    language_min_length: int = 10
    language_whitelist: List[str] = field(default_factory=list)
    language_blacklist: List[str] = field(default_factory=list)
    use_secondary_sentiment: bool = True
    offline: bool = False
    idf_corpus_path: Optional[str] = None
    request_timeout: float = 10.0
    stopword_urls: List[str] = field(default_factory=lambda: list(STOPWORD_URLS))
    idf_url: str = IDF_URL
    stopwords: List[str] = field(default_factory=_default_stopwords)
    valences: Dict[str, int] = field(default_factory=_default_valences)
    lexicons: Dict[str, Dict[str, List[str]]] = field(default_factory=_default_lexicons)
    run_id: Optional[str] = None

    @classmethod
    def from_args(cls, args: Optional[List[str]] = None) -> "TextOpsConfig":
        parser = argparse.ArgumentParser(description="Run textops operations over text.")
        source = parser.add_mutually_exclusive_group(required=True)
        source.add_argument(
            "input_path",
            nargs="?",
            help="Batch input: .parquet, .csv, .jsonl or a plain text file (one text per line)",
        )
        source.add_argument("--text", help="Analyse a single inline text")
        parser.add_argument(
            "--op",
            dest="operations",
            action="append",
            default=[],
            help="Operation to enable (identifier or member name); repeatable",
        )
        parser.add_argument(
            "--output-dir",
            default="outputs",
            help="Directory for run artifacts (default: outputs)",
        )
        parser.add_argument(
            "--output-format",
            choices=["parquet", "csv"],
            default="parquet",
            help="Table format for batch results (default: parquet)",
        )
        parser.add_argument(
            "--truncate-max-length", type=int, default=None, help="Enables truncate with this length"
        )
        parser.add_argument("--truncate-suffix", default="...", help="Suffix appended on truncation")
        parser.add_argument("--compare-with", default=None, help="Enables text comparison against this text")
        parser.add_argument(
            "--top-n", dest="keyword_top_n", type=int, default=5, help="Number of keywords to extract"
        )
        parser.add_argument(
            "--language-min-length",
            type=int,
            default=10,
            help="Texts shorter than this are reported as undetermined",
        )
        parser.add_argument(
            "--language-whitelist",
            nargs="*",
            default=[],
            help="ISO 639-3 codes the language detector may report",
        )
        parser.add_argument(
            "--language-blacklist",
            nargs="*",
            default=[],
            help="ISO 639-3 codes the language detector must ignore",
        )
        parser.add_argument(
            "--no-secondary-sentiment",
            dest="use_secondary_sentiment",
            action="store_false",
            help="Disable the optional TextBlob sentiment signal",
        )
        parser.add_argument(
            "--offline",
            action="store_true",
            help="Skip fetching stopword and IDF lists",
        )
        parser.add_argument(
            "--idf-corpus",
            dest="idf_corpus_path",
            default=None,
            help="Fit IDF weights from this local corpus instead of the remote word list",
        )
        parser.add_argument(
            "--request-timeout", type=float, default=10.0, help="Timeout in seconds for resource fetches"
        )
        parsed = parser.parse_args(args=args)
        if parsed.input_path is None and parsed.text is None:
            parser.error("one of the arguments input_path --text is required")
        return cls(
            input_path=parsed.input_path,
            text=parsed.text,
            operations=parsed.operations,
            output_dir=parsed.output_dir,
            output_format=parsed.output_format,
            truncate_max_length=parsed.truncate_max_length,
            truncate_suffix=parsed.truncate_suffix,
            compare_with=parsed.compare_with,
            keyword_top_n=parsed.keyword_top_n,
            language_min_length=parsed.language_min_length,
            language_whitelist=parsed.language_whitelist,
            language_blacklist=parsed.language_blacklist,
            use_secondary_sentiment=parsed.use_secondary_sentiment,
            offline=parsed.offline,
            idf_corpus_path=parsed.idf_corpus_path,
            request_timeout=parsed.request_timeout,
        )

    def to_options(self) -> Dict[str, Any]:
        """Build an options mapping from the CLI operation selection."""
        options: Dict[str, Any] = {}
        for name in self.operations:
            op = Operation.resolve(name)
            options[op.value if op is not None else name] = True
        if self.truncate_max_length is not None:
            options[Operation.TRUNCATE.value] = {
                "max_length": self.truncate_max_length,
                "suffix": self.truncate_suffix,
            }
        if self.compare_with is not None:
            options[Operation.COMPARE_TEXTS.value] = {"compare_with": self.compare_with}
        if Operation.EXTRACT_KEYWORDS.value in options:
            options[Operation.EXTRACT_KEYWORDS.value] = {"top_n": self.keyword_top_n}
        return options

    def ensure_run_id(self) -> str:
        if not self.run_id:
            self.run_id = str(uuid.uuid4())
        return self.run_id

    def output_path(self, *parts: str) -> pathlib.Path:
        path = pathlib.Path(self.output_dir).joinpath(*parts)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2, sort_keys=True)


def save_config_snapshot(config: TextOpsConfig) -> None:
    path = config.output_path("textops_config_snapshot.json")
    path.write_text(config.to_json())
