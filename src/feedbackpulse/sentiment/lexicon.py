"""Lexicon tables and token classification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable

logger = logging.getLogger(__name__)

# Reference lexicon for customer feedback
POSITIVE_WORDS = frozenset(
    {
        "excellent",
        "amazing",
        "great",
        "good",
        "fantastic",
        "wonderful",
        "awesome",
        "love",
        "perfect",
        "brilliant",
        "outstanding",
        "superb",
        "impressive",
        "satisfied",
        "happy",
        "pleased",
        "delighted",
        "recommend",
        "best",
        "beautiful",
        "helpful",
        "useful",
        "easy",
        "fast",
        "quick",
        "smooth",
        "efficient",
    }
)

NEGATIVE_WORDS = frozenset(
    {
        "terrible",
        "awful",
        "bad",
        "horrible",
        "disappointing",
        "frustrating",
        "hate",
        "worst",
        "useless",
        "broken",
        "slow",
        "difficult",
        "confusing",
        "angry",
        "upset",
        "annoyed",
        "poor",
        "lacking",
        "missing",
        "problem",
        "issue",
        "bug",
        "error",
        "fail",
        "failed",
        "wrong",
        "expensive",
    }
)

INTENSIFIERS = frozenset({"very", "really", "extremely", "incredibly", "absolutely", "totally"})

# The contractions never match: the tokenizer splits "don't" into "don", "t".
NEGATORS = frozenset(
    {"not", "no", "never", "nothing", "nowhere", "nobody", "don't", "doesn't", "won't", "can't"}
)

INTENSIFIER_MULTIPLIER = 1.5


class TokenKind(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    INTENSIFIER = "intensifier"
    NEGATOR = "negator"
    NONE = "none"


@dataclass(frozen=True)
class Lexicon:
    """Immutable word tables shared read-only by every scoring call.

    Lookup precedence when a word appears in more than one table:
    positive/negative, then negator, then intensifier. A word listed as both
    positive and negative is rejected.
    """

    positive: FrozenSet[str] = POSITIVE_WORDS
    negative: FrozenSet[str] = NEGATIVE_WORDS
    intensifiers: FrozenSet[str] = INTENSIFIERS
    negators: FrozenSet[str] = NEGATORS

    def __post_init__(self) -> None:
        for name in ("positive", "negative", "intensifiers", "negators"):
            object.__setattr__(self, name, frozenset(getattr(self, name)))
        overlap = self.positive & self.negative
        if overlap:
            raise ValueError(f"Words cannot be both positive and negative: {sorted(overlap)}")

    def classify(self, token: str) -> TokenKind:
        if token in self.positive:
            return TokenKind.POSITIVE
        if token in self.negative:
            return TokenKind.NEGATIVE
        if token in self.negators:
            return TokenKind.NEGATOR
        if token in self.intensifiers:
            return TokenKind.INTENSIFIER
        return TokenKind.NONE

    def extended(
        self,
        positive: Iterable[str] = (),
        negative: Iterable[str] = (),
        intensifiers: Iterable[str] = (),
        negators: Iterable[str] = (),
    ) -> "Lexicon":
        """Return a new lexicon with extra words added to each table."""
        return Lexicon(
            positive=self.positive | _normalize_words(positive),
            negative=self.negative | _normalize_words(negative),
            intensifiers=self.intensifiers | _normalize_words(intensifiers),
            negators=self.negators | _normalize_words(negators),
        )


REFERENCE_LEXICON = Lexicon()


def _normalize_words(words: Iterable[str]) -> FrozenSet[str]:
    cleaned = (str(word).strip().lower() for word in words)
    return frozenset(word for word in cleaned if word)


def lexicon_from_config(cfg: Dict[str, Any] | None) -> Lexicon:
    """Build a lexicon from the ``sentiment.lexicon`` config section."""
    lexicon_cfg = ((cfg or {}).get("sentiment") or {}).get("lexicon") or {}
    if not isinstance(lexicon_cfg, dict):
        raise ValueError("sentiment.lexicon must be a mapping.")

    extras: Dict[str, Iterable[str]] = {}
    for table in ("positive", "negative", "intensifiers", "negators"):
        key = f"extra_{table}"
        words = lexicon_cfg.get(key) or []
        if not isinstance(words, list):
            raise ValueError(f"sentiment.lexicon.{key} must be a list of words.")
        extras[table] = words

    if not any(extras.values()):
        return REFERENCE_LEXICON

    lexicon = REFERENCE_LEXICON.extended(**extras)
    logger.info(
        "Custom lexicon: %d positive, %d negative, %d intensifiers, %d negators",
        len(lexicon.positive),
        len(lexicon.negative),
        len(lexicon.intensifiers),
        len(lexicon.negators),
    )
    return lexicon
