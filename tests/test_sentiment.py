"""Tests for feedback sentiment aggregation and the pipeline script."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest
import yaml

from feedbackpulse.sentiment.aggregate import add_sentiment, filter_feedback, load_feedback_csv, sentiment_summary
from scripts.run_sentiment import ensure_demo_data, main


def _cfg(tmp_path: Path) -> dict:
    return {
        "sentiment": {
            "raw_path": str(tmp_path / "feedback.csv"),
            "output_dir": str(tmp_path / "reports"),
            "id_column": "id",
            "text_column": "content",
            "source_column": "source",
            "project_column": "project_id",
        }
    }


def _scored(tmp_path: Path) -> pd.DataFrame:
    cfg = _cfg(tmp_path)
    data = pd.DataFrame(
        {
            "id": [1, 2, 3, 4, 5],
            "project_id": [10, 10, 10, 20, 20],
            "source": ["email", "survey", "email", "social", "email"],
            "content": ["Great support", "Not helpful at all", "", "Checkout is slow", "Shipping took a week"],
            "customer_name": ["Ana", "Ben", "Cy", "Dee", "Slowik"],
        }
    )
    path = Path(cfg["sentiment"]["raw_path"])
    data.to_csv(path, index=False)

    df = load_feedback_csv(path, "id", "content")
    return add_sentiment(df, cfg)


def test_load_drops_empty_text_rows(tmp_path: Path) -> None:
    df = _scored(tmp_path)

    assert list(df["id"]) == [1, 2, 4, 5]


def test_load_requires_columns(tmp_path: Path) -> None:
    path = tmp_path / "feedback.csv"
    pd.DataFrame({"id": [1], "body": ["good"]}).to_csv(path, index=False)

    with pytest.raises(ValueError):
        load_feedback_csv(path, "id", "content")


def test_add_sentiment_columns(tmp_path: Path) -> None:
    df = _scored(tmp_path)

    assert {"sentiment", "sentiment_score", "confidence"}.issubset(df.columns)
    assert list(df["sentiment"]) == ["positive", "negative", "negative", "neutral"]
    assert list(df["sentiment_score"]) == [100, -100, -100, 0]
    assert df["confidence"].between(10, 100).all()


def test_add_sentiment_on_empty_frame(tmp_path: Path) -> None:
    empty = pd.DataFrame({"id": [], "content": []})

    scored = add_sentiment(empty, _cfg(tmp_path))

    assert scored.empty
    assert {"sentiment", "sentiment_score", "confidence"}.issubset(scored.columns)


def test_filter_by_sentiment_source_and_search(tmp_path: Path) -> None:
    cfg = _cfg(tmp_path)
    df = _scored(tmp_path)

    negatives = filter_feedback(df, cfg, sentiment="NEGATIVE")
    email = filter_feedback(df, cfg, source="email")
    slow = filter_feedback(df, cfg, search="SLOW")
    both = filter_feedback(df, cfg, sentiment="negative", source="social")

    assert list(negatives["id"]) == [2, 4]
    assert list(email["id"]) == [1, 5]
    assert list(slow["id"]) == [4, 5]
    assert list(both["id"]) == [4]


def test_filter_rejects_unknown_sentiment(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        filter_feedback(_scored(tmp_path), _cfg(tmp_path), sentiment="mixed")


def test_summary_per_project(tmp_path: Path) -> None:
    summary = sentiment_summary(_scored(tmp_path), _cfg(tmp_path))

    assert list(summary["project_id"]) == [10, 20]
    first = summary.iloc[0]
    assert first["total"] == 2
    assert first["positive"] == 1
    assert first["negative"] == 1
    assert first["positive_share"] == 0.5
    assert first["mean_score"] == 0.0
    second = summary.iloc[1]
    assert second["neutral"] == 1
    assert second["mean_score"] == -50.0


def test_summary_without_project_column(tmp_path: Path) -> None:
    df = _scored(tmp_path).drop(columns=["project_id"])

    summary = sentiment_summary(df, _cfg(tmp_path))

    assert len(summary) == 1
    assert summary.iloc[0]["total"] == 4
    assert summary.iloc[0]["negative_share"] == 0.5


def test_summary_on_empty_frame(tmp_path: Path) -> None:
    empty = add_sentiment(pd.DataFrame({"id": [], "content": []}), _cfg(tmp_path))

    summary = sentiment_summary(empty, _cfg(tmp_path))

    assert summary.empty
    assert "mean_confidence" in summary.columns


def test_single_text_mode(capsys) -> None:
    main(["--text", "not really good"])

    out = json.loads(capsys.readouterr().out)
    assert out == {"sentiment": "negative", "sentiment_score": -100, "confidence": 100}


def test_single_text_mode_uses_configured_lexicon(tmp_path: Path, capsys) -> None:
    cfg = _cfg(tmp_path)
    cfg["sentiment"]["lexicon"] = {"extra_negative": ["meh"]}
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(yaml.safe_dump(cfg), encoding="utf-8")

    main(["--config", str(cfg_path), "--text", "meh"])

    out = json.loads(capsys.readouterr().out)
    assert out["sentiment"] == "negative"
    assert out["sentiment_score"] == -100


def test_single_text_mode_without_config_uses_reference_lexicon(tmp_path: Path, capsys) -> None:
    main(["--config", str(tmp_path / "missing.yaml"), "--text", "meh, good"])

    out = json.loads(capsys.readouterr().out)
    assert out["sentiment"] == "positive"


@pytest.mark.parametrize("content", ["sentiment: [unclosed\n", "- just\n- a list\n"])
def test_invalid_config_exits(tmp_path: Path, content: str, capsys) -> None:
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(content, encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(cfg_path)])

    assert excinfo.value.code == 1
    assert "Invalid config" in capsys.readouterr().err


def test_source_filter_from_command_line(tmp_path: Path) -> None:
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(yaml.safe_dump(_cfg(tmp_path)), encoding="utf-8")

    main(["--config", str(cfg_path), "--demo", "--source", "email"])

    filtered = pd.read_csv(tmp_path / "reports" / "sentiment_filtered.csv")
    assert list(filtered["id"]) == [1, 4]
    assert set(filtered["source"]) == {"email"}


def test_demo_pipeline_writes_reports(tmp_path: Path) -> None:
    cfg = _cfg(tmp_path)
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(yaml.safe_dump(cfg), encoding="utf-8")

    main(["--config", str(cfg_path), "--demo", "--sentiment", "negative"])

    reports = tmp_path / "reports"
    events = pd.read_csv(reports / "sentiment_events.csv")
    filtered = pd.read_csv(reports / "sentiment_filtered.csv")
    summary = pd.read_csv(reports / "sentiment_summary.csv")
    assert len(events) == 5
    assert set(filtered["sentiment"]) == {"negative"}
    assert list(summary["project_id"]) == [1, 2]


def test_missing_data_without_demo_exits(tmp_path: Path) -> None:
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(yaml.safe_dump(_cfg(tmp_path)), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(cfg_path)])

    assert excinfo.value.code == 1


def test_ensure_demo_data_uses_configured_columns(tmp_path: Path) -> None:
    cfg = {"sentiment": {"id_column": "fid", "text_column": "body", "project_column": "proj"}}
    path = tmp_path / "nested" / "demo.csv"

    ensure_demo_data(path, cfg)

    df = pd.read_csv(path)
    assert {"fid", "body", "proj", "source"}.issubset(df.columns)
