import json

import pandas as pd
import pytest

from textops.config import TextOpsConfig
from textops.run import main


def test_from_args_builds_options():
    config = TextOpsConfig.from_args(
        [
            "--text",
            "hello",
            "--op",
            "fullcaps",
            "--op",
            "EXTRACT_KEYWORDS",
            "--top-n",
            "3",
            "--truncate-max-length",
            "4",
            "--compare-with",
            "hello there",
            "--offline",
        ]
    )
    assert config.text == "hello"
    assert config.offline
    assert config.to_options() == {
        "fullcaps": True,
        "truncate": {"max_length": 4, "suffix": "..."},
        "compareTexts": {"compare_with": "hello there"},
        "extractKeywords": {"top_n": 3},
    }


def test_from_args_requires_a_source():
    with pytest.raises(SystemExit):
        TextOpsConfig.from_args(["--op", "fullcaps"])


def test_from_args_rejects_two_sources():
    with pytest.raises(SystemExit):
        TextOpsConfig.from_args(["docs.csv", "--text", "hello"])


def test_run_id_is_stable():
    config = TextOpsConfig()
    assert config.ensure_run_id() == config.ensure_run_id()


def test_inline_text_prints_json(capsys):
    main(["--text", "Hello world. Bye.", "--op", "fullcaps", "--op", "sentencecount", "--offline"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["output"] == "HELLO WORLD. BYE."
    assert payload["metadata"]["counts"]["sentence_count"] == 2
    assert payload["operations"] == ["Changed to Uppercase", "Counted Sentences"]


def test_batch_file_run(tmp_path):
    source = tmp_path / "docs.csv"
    pd.DataFrame({"text": ["one two three", "four five"]}).to_csv(source, index=False)
    out = tmp_path / "out"
    main([str(source), "--op", "wordcount", "--offline", "--output-dir", str(out), "--output-format", "csv"])

    results = pd.read_csv(out / "textops_results.csv")
    assert results["word_count"].tolist() == [3, 2]
    assert (out / "textops_report.md").exists()
    snapshot = json.loads((out / "textops_config_snapshot.json").read_text())
    assert snapshot["operations"] == ["wordcount"]
    assert snapshot["offline"] is True


def test_member_names_merge_with_their_config():
    config = TextOpsConfig.from_args(
        ["--text", "abcdefghij", "--op", "TRUNCATE", "--op", "COMPARE_TEXTS", "--truncate-max-length", "3",
         "--compare-with", "abc...", "--offline"]
    )
    assert config.to_options() == {
        "truncate": {"max_length": 3, "suffix": "..."},
        "compareTexts": {"compare_with": "abc..."},
    }


def test_member_name_truncate_and_compare_run(capsys):
    main(
        ["--text", "abcdefghij", "--op", "TRUNCATE", "--truncate-max-length", "3",
         "--op", "COMPARE_TEXTS", "--compare-with", "abc...", "--offline"]
    )
    payload = json.loads(capsys.readouterr().out)
    assert payload["output"] == "abc..."
    assert payload["metadata"]["text_comparison"]["similarity"] == 100
