"""Score customer feedback sentiment and write per-project reports."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
import yaml

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from feedbackpulse.sentiment.aggregate import (
    add_sentiment,
    filter_feedback,
    load_feedback_csv,
    sentiment_summary,
)
from feedbackpulse.sentiment.lexicon import lexicon_from_config
from feedbackpulse.sentiment.scoring import CATEGORIES, analyze


DEFAULT_CONFIG_PATH = Path("configs") / "config.yaml"


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run lexicon-based feedback sentiment pipeline.")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to config YAML.")
    parser.add_argument("--demo", action="store_true", help="Generate a tiny demo dataset if raw_path is missing.")
    parser.add_argument("--text", help="Analyze a single text and print the result as JSON.")
    parser.add_argument("--sentiment", choices=list(CATEGORIES), help="Only keep feedback with this sentiment.")
    parser.add_argument("--source", help="Only keep feedback from this source (email, survey, social, ...).")
    parser.add_argument("--search", help="Only keep feedback whose text or customer fields contain this string.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def load_config(cfg_path: Path) -> Dict[str, Any]:
    with cfg_path.open("r", encoding="utf-8") as handle:
        cfg = yaml.safe_load(handle) or {}
    if not isinstance(cfg, dict):
        raise ValueError("Configuration file must be a mapping.")
    return cfg


def ensure_demo_data(path: Path, cfg: Dict[str, Any]) -> None:
    """Create a small demo dataset if requested."""
    sentiment_cfg = cfg.get("sentiment") or {}
    id_col = sentiment_cfg.get("id_column", "id")
    text_col = sentiment_cfg.get("text_column", "content")
    source_col = sentiment_cfg.get("source_column", "source")
    project_col = sentiment_cfg.get("project_column", "project_id")

    data = [
        {id_col: 1, project_col: 1, source_col: "email", text_col: "The new dashboard is really helpful and fast!", "customer_name": "Ana"},
        {id_col: 2, project_col: 1, source_col: "survey", text_col: "Checkout is not easy, and the search is slow.", "customer_name": "Ben"},
        {id_col: 3, project_col: 1, source_col: "social", text_col: "Shipping took a week.", "customer_name": "Chloe"},
        {id_col: 4, project_col: 2, source_col: "email", text_col: "Terrible support, the app is extremely confusing.", "customer_name": "Dev"},
        {id_col: 5, project_col: 2, source_col: "survey", text_col: "Great value, I would recommend it.", "customer_name": "Eli"},
    ]

    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(data).to_csv(path, index=False)
    print(f"Demo feedback data written to {path}")


def run_pipeline(cfg: Dict[str, Any], raw_path: Path, output_dir: Path, args: argparse.Namespace) -> pd.DataFrame:
    sentiment_cfg = cfg.get("sentiment") or {}
    id_col = sentiment_cfg.get("id_column", "id")
    text_col = sentiment_cfg.get("text_column", "content")

    lexicon = lexicon_from_config(cfg)
    df = load_feedback_csv(raw_path, id_col=id_col, text_col=text_col)
    df = add_sentiment(df, cfg, lexicon)
    summary = sentiment_summary(df, cfg)

    output_dir.mkdir(parents=True, exist_ok=True)
    events_path = output_dir / "sentiment_events.csv"
    summary_path = output_dir / "sentiment_summary.csv"
    df.to_csv(events_path, index=False)
    summary.to_csv(summary_path, index=False)

    if args.sentiment or args.source or args.search:
        filtered = filter_feedback(df, cfg, sentiment=args.sentiment, source=args.source, search=args.search)
        filtered_path = output_dir / "sentiment_filtered.csv"
        filtered.to_csv(filtered_path, index=False)
        print(f"Filtered rows: {len(filtered)}/{len(df)} written to {filtered_path}")

    print("Sentiment pipeline complete.")
    print(f"Label counts: {df['sentiment'].value_counts().to_dict()}")
    print("Summary:")
    print(summary.to_string(index=False))
    return df


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg_path = args.config if args.config.is_absolute() else PROJECT_ROOT / args.config
    if not cfg_path.exists() and args.text is None:
        print(f"Config not found: {cfg_path}", file=sys.stderr)
        sys.exit(1)

    # Single-text mode falls back to the reference lexicon without a config file.
    try:
        cfg = load_config(cfg_path) if cfg_path.exists() else {}
        lexicon = lexicon_from_config(cfg)
    except (ValueError, yaml.YAMLError) as exc:
        print(f"Invalid config {cfg_path}: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.text is not None:
        print(json.dumps(analyze(args.text, lexicon).to_dict()))
        return

    sentiment_cfg = cfg.get("sentiment") or {}

    raw_path = Path(sentiment_cfg.get("raw_path", ""))
    if not raw_path.is_absolute():
        raw_path = PROJECT_ROOT / raw_path

    if not raw_path.exists():
        if args.demo:
            ensure_demo_data(raw_path, cfg)
        else:
            print(f"Feedback data not found at {raw_path}. Use --demo to generate sample data.", file=sys.stderr)
            sys.exit(1)

    output_dir = Path(sentiment_cfg.get("output_dir", "reports"))
    if not output_dir.is_absolute():
        output_dir = PROJECT_ROOT / output_dir

    try:
        run_pipeline(cfg, raw_path, output_dir, args)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
