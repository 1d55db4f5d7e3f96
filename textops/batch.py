from __future__ import annotations

import collections
import logging
import pathlib
from typing import Any, Dict, Iterable, List, Mapping, Optional

import numpy as np
import pandas as pd

from .analyser import Analyser, AnalyserResult
from .config import TextOpsConfig
from .errors import InvalidInputError
from .lexicon_loader import LexiconCache

TEXT_COLUMNS = ["text", "content", "body", "desc", "description"]
ID_COLUMNS = ["doc_id", "id", "document_id"]


def _choose_column(df: pd.DataFrame, candidates: Iterable[str]) -> Optional[str]:
    for name in candidates:
        if name in df.columns:
            return name
    return None


def _read_frame(input_path: str) -> pd.DataFrame:
    suffix = pathlib.Path(input_path).suffix.lower()
    if suffix == ".parquet":
        return pd.read_parquet(input_path)
    if suffix == ".csv":
        return pd.read_csv(input_path)
    if suffix == ".jsonl":
        return pd.read_json(input_path, lines=True)
    if suffix == ".json":
        return pd.read_json(input_path)
    lines = pathlib.Path(input_path).read_text(encoding="utf-8").splitlines()
    return pd.DataFrame({"text": [line for line in lines if line.strip()]})


def load_texts(input_path: str) -> pd.DataFrame:
    """Load texts into a frame with ``doc_id`` and ``text`` columns."""
    df = _read_frame(input_path)
    text_col = _choose_column(df, TEXT_COLUMNS)
    if text_col is None:
        raise InvalidInputError(
            f"No text column in {input_path}; expected one of {', '.join(TEXT_COLUMNS)}"
        )
    id_col = _choose_column(df, ID_COLUMNS)
    frame = pd.DataFrame(
        {
            "doc_id": df[id_col].astype(str) if id_col else [str(i) for i in range(len(df))],
            "text": df[text_col].fillna("").astype(str),
        }
    )
    empty = frame["text"].str.strip() == ""
    if empty.any():
        logging.info("Dropping %d empty texts", int(empty.sum()))
    frame = frame[~empty].reset_index(drop=True)
    logging.info("Loaded %d texts from %s", len(frame), input_path)
    return frame


def _flatten(doc_id: str, result: AnalyserResult, run_id: Optional[str]) -> Dict[str, Any]:
    meta = result.metadata
    sentiment = meta["sentiment"] or {}
    readability = meta["readability"] or {}
    language = meta["language_detection"] or {}
    comparison = meta["text_comparison"] or {}
    row = {
        "run_id": run_id,
        "doc_id": doc_id,
        "output": result.output,
        "operations": list(result.operations),
    }
    row.update(meta["counts"])
    for key in ["urls", "emails", "phone_numbers", "hashtags", "mentions", "keywords"]:
        row[key] = list(meta[key])
    row.update(
        {
            "sentiment_score": sentiment.get("score", np.nan),
            "sentiment_label": sentiment.get("classification"),
            "reading_ease": readability.get("readability_score", np.nan),
            "grade_level": readability.get("grade_level", np.nan),
            "complexity": readability.get("complexity"),
            "language": language.get("detected_language"),
            "language_confidence": language.get("confidence", np.nan),
            "similarity": comparison.get("similarity", np.nan),
            "execution_time_ms": result.execution_time,
        }
    )
    return row


async def analyse_frame(
    texts: pd.DataFrame,
    options: Mapping[Any, Any],
    config: TextOpsConfig,
    cache: Optional[LexiconCache] = None,
    **kwargs: Any,
) -> pd.DataFrame:
    results = await Analyser.batch(
        texts["text"].tolist(), options, config=config, cache=cache, **kwargs
    )
    run_id = config.ensure_run_id()
    rows = [_flatten(doc_id, result, run_id) for doc_id, result in zip(texts["doc_id"], results)]
    return pd.DataFrame(rows)


def write_results(results: pd.DataFrame, config: TextOpsConfig) -> pathlib.Path:
    if config.output_format == "csv":
        path = config.output_path("textops_results.csv")
        results.to_csv(path, index=False)
    else:
        path = config.output_path("textops_results.parquet")
        results.to_parquet(path, index=False)
    logging.info("Wrote %d result rows to %s", len(results), path)
    return path


def _stat_lines(label: str, series: pd.Series) -> List[str]:
    values = series.dropna().to_numpy(dtype=float)
    if not len(values):
        return []
    return [
        f"{label} mean: {float(np.mean(values)):.3f}",
        f"{label} median: {float(np.median(values)):.3f}",
    ]


def batch_report(results: pd.DataFrame, config: TextOpsConfig) -> pathlib.Path:
    lines = [
        "# Text operations report",
        f"Run: {config.run_id}",
        f"Texts: {len(results)}",
        "",
    ]
    if not results.empty:
        lines.extend(_stat_lines("Sentiment score", results["sentiment_score"]))
        lines.extend(_stat_lines("Reading ease", results["reading_ease"]))
        lines.extend(_stat_lines("Similarity", results["similarity"]))
        for title, column in [
            ("Sentiment labels", "sentiment_label"),
            ("Complexity", "complexity"),
            ("Languages", "language"),
        ]:
            counts = collections.Counter(v for v in results[column] if v)
            if counts:
                lines.append(f"\n## {title}")
                for value, count in counts.most_common():
                    lines.append(f"- {value}: {count}")
        keyword_counts = collections.Counter(kw for kws in results["keywords"] for kw in kws)
        if keyword_counts:
            lines.append("\n## Top keywords")
            for kw, count in keyword_counts.most_common(25):
                lines.append(f"- {kw}: {count}")
    report_path = config.output_path("textops_report.md")
    report_path.write_text("\n".join(lines))
    logging.info("Wrote batch report to %s", report_path)
    return report_path
