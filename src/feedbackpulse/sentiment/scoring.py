"""Lightweight lexicon-based sentiment scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

from feedbackpulse.sentiment.lexicon import REFERENCE_LEXICON, Lexicon
from feedbackpulse.sentiment.modifiers import ScoringState
from feedbackpulse.sentiment.tokenizer import iter_tokens

POSITIVE = "positive"
NEGATIVE = "negative"
NEUTRAL = "neutral"
CATEGORIES = (POSITIVE, NEGATIVE, NEUTRAL)

# Scores strictly beyond these are polar; the boundary itself is neutral.
POSITIVE_THRESHOLD = 20
NEGATIVE_THRESHOLD = -20

SCORE_MIN = -100
SCORE_MAX = 100
CONFIDENCE_MIN = 10
CONFIDENCE_MAX = 100
TOKENS_PER_EXPECTED_HIT = 10


@dataclass(frozen=True)
class SentimentResult:
    category: str
    score: int
    confidence: int

    def to_dict(self) -> Dict[str, object]:
        """Return the fields under the names stored on a feedback record."""
        return {"sentiment": self.category, "sentiment_score": self.score, "confidence": self.confidence}


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    magnitude = int(math.floor(abs(value) + 0.5))
    return magnitude if value >= 0 else -magnitude


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def normalized_score(accumulated_score: float, sentiment_word_count: int) -> int:
    """Average contribution per sentiment word as a percentage in [-100, 100]."""
    if sentiment_word_count == 0:
        return 0
    # Multiply before dividing so exact .5 ties survive the float division.
    raw = round_half_away(accumulated_score * 100 / sentiment_word_count)
    return _clamp(raw, SCORE_MIN, SCORE_MAX)


def confidence_score(sentiment_word_count: int, token_count: int) -> int:
    """Sentiment-word density relative to one hit per ten tokens, in [10, 100]."""
    if token_count > TOKENS_PER_EXPECTED_HIT:
        ratio = sentiment_word_count * 100 * TOKENS_PER_EXPECTED_HIT / token_count
    else:
        ratio = sentiment_word_count * 100
    raw = round_half_away(ratio)
    return max(CONFIDENCE_MIN, min(CONFIDENCE_MAX, raw))


def sentiment_label(score: int) -> str:
    """Return the category for a normalized score."""
    if score > POSITIVE_THRESHOLD:
        return POSITIVE
    if score < NEGATIVE_THRESHOLD:
        return NEGATIVE
    return NEUTRAL


def score_tokens(text: str | None, lexicon: Lexicon | None = None) -> ScoringState:
    """Run the modifier state machine over the tokens of ``text``."""
    lexicon = lexicon or REFERENCE_LEXICON
    state = ScoringState()
    for token in iter_tokens(text):
        state.feed(lexicon.classify(token))
    return state


def analyze(text: str | None, lexicon: Lexicon | None = None) -> SentimentResult:
    """Score free text into a category, a signed score and a confidence."""
    state = score_tokens(text, lexicon)
    score = normalized_score(state.accumulated_score, state.sentiment_word_count)
    return SentimentResult(
        category=sentiment_label(score),
        score=score,
        confidence=confidence_score(state.sentiment_word_count, state.token_count),
    )
