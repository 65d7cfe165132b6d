"""Sentiment aggregation utilities for feedback exports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from feedbackpulse.sentiment.lexicon import Lexicon
from feedbackpulse.sentiment.scoring import CATEGORIES, NEGATIVE, NEUTRAL, POSITIVE, analyze

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["sentiment", "sentiment_score", "confidence"]
SEARCH_EXTRA_COLUMNS = ["customer_name", "customer_email"]
SUMMARY_COLUMNS = [
    "total",
    POSITIVE,
    NEGATIVE,
    NEUTRAL,
    "positive_share",
    "negative_share",
    "mean_score",
    "mean_confidence",
]


def _sentiment_cfg(cfg: Dict[str, Any]) -> Dict[str, Any]:
    return cfg.get("sentiment") or {}


def load_feedback_csv(path: Path | str, id_col: str, text_col: str) -> pd.DataFrame:
    """Load a feedback CSV and drop rows without text."""
    df = pd.read_csv(path)
    df.columns = [str(c).strip() for c in df.columns]

    if text_col not in df.columns:
        raise ValueError(f"text column '{text_col}' not found")
    if id_col not in df.columns:
        raise ValueError(f"id column '{id_col}' not found")

    df[text_col] = df[text_col].fillna("").astype(str).str.strip()
    kept = df[df[text_col] != ""].reset_index(drop=True)
    dropped = len(df) - len(kept)
    if dropped:
        logger.info("Dropped %d feedback rows with empty text from %s", dropped, path)
    return kept


def add_sentiment(df: pd.DataFrame, cfg: Dict[str, Any], lexicon: Lexicon | None = None) -> pd.DataFrame:
    """Add sentiment, sentiment_score and confidence columns."""
    text_col = _sentiment_cfg(cfg).get("text_column", "content")
    df = df.copy()
    if df.empty:
        for col in RESULT_COLUMNS:
            df[col] = pd.Series(dtype="object" if col == "sentiment" else "int64")
        return df

    results = df[text_col].map(lambda text: analyze(text, lexicon).to_dict())
    scored = pd.DataFrame(results.tolist(), index=df.index, columns=RESULT_COLUMNS)
    for col in RESULT_COLUMNS:
        df[col] = scored[col]
    logger.debug("Scored %d feedback rows", len(df))
    return df


def filter_feedback(
    df: pd.DataFrame,
    cfg: Dict[str, Any],
    sentiment: str | None = None,
    source: str | None = None,
    search: str | None = None,
) -> pd.DataFrame:
    """Filter scored feedback by category, source and free-text search."""
    sentiment_cfg = _sentiment_cfg(cfg)
    text_col = sentiment_cfg.get("text_column", "content")
    source_col = sentiment_cfg.get("source_column", "source")

    mask = pd.Series(True, index=df.index)
    if sentiment:
        sentiment = sentiment.lower()
        if sentiment not in CATEGORIES:
            raise ValueError(f"unknown sentiment '{sentiment}'; expected one of {list(CATEGORIES)}")
        mask &= df["sentiment"] == sentiment
    if source:
        if source_col not in df.columns:
            raise ValueError(f"source column '{source_col}' not found")
        mask &= df[source_col].astype(str) == source
    if search:
        needle = search.lower()
        search_cols: List[str] = [text_col] + [col for col in SEARCH_EXTRA_COLUMNS if col in df.columns]
        hit = pd.Series(False, index=df.index)
        for col in search_cols:
            hit |= df[col].fillna("").astype(str).str.lower().str.contains(needle, regex=False)
        mask &= hit

    return df[mask].reset_index(drop=True)


def _summarize(group: pd.DataFrame) -> Dict[str, Any]:
    total = len(group)
    counts = group["sentiment"].value_counts()
    row: Dict[str, Any] = {"total": total}
    for category in CATEGORIES:
        row[category] = int(counts.get(category, 0))
    row["positive_share"] = row[POSITIVE] / total if total else 0.0
    row["negative_share"] = row[NEGATIVE] / total if total else 0.0
    row["mean_score"] = float(group["sentiment_score"].mean()) if total else 0.0
    row["mean_confidence"] = float(group["confidence"].mean()) if total else 0.0
    return row


def sentiment_summary(df: pd.DataFrame, cfg: Dict[str, Any]) -> pd.DataFrame:
    """Summarize sentiment counts and averages per project."""
    project_col = _sentiment_cfg(cfg).get("project_column")
    group_by_project = bool(project_col) and project_col in df.columns
    columns = ([project_col] if group_by_project else []) + SUMMARY_COLUMNS

    if df.empty:
        return pd.DataFrame(columns=columns)

    if not group_by_project:
        return pd.DataFrame([_summarize(df)], columns=columns)

    rows = []
    for project_id, group in df.groupby(project_col, sort=True):
        row = {project_col: project_id}
        row.update(_summarize(group))
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)
