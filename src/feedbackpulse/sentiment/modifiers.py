"""Negation and intensifier tracking across a token stream."""

from __future__ import annotations

from dataclasses import dataclass

from feedbackpulse.sentiment.lexicon import INTENSIFIER_MULTIPLIER, TokenKind


@dataclass
class ScoringState:
    """Per-call accumulator for the modifier state machine.

    A negator flips the next sentiment word only and survives intervening
    intensifiers and neutral words. An intensifier scales the next sentiment
    word only. Both are consumed by that word.
    """

    accumulated_score: float = 0.0
    sentiment_word_count: int = 0
    token_count: int = 0
    pending_negation: bool = False
    pending_multiplier: float = 1.0

    def on_negator(self) -> None:
        self.pending_negation = True

    def on_intensifier(self) -> None:
        self.pending_multiplier = INTENSIFIER_MULTIPLIER

    def on_polarity(self, base: int) -> float:
        """Apply pending modifiers to a +1/-1 hit and return its contribution."""
        self.sentiment_word_count += 1
        if self.pending_negation:
            base = -base
            self.pending_negation = False
        contribution = base * self.pending_multiplier
        self.accumulated_score += contribution
        self.pending_multiplier = 1.0
        return contribution

    def feed(self, kind: TokenKind) -> None:
        self.token_count += 1
        if kind is TokenKind.NEGATOR:
            self.on_negator()
        elif kind is TokenKind.INTENSIFIER:
            self.on_intensifier()
        elif kind is TokenKind.POSITIVE:
            self.on_polarity(1)
        elif kind is TokenKind.NEGATIVE:
            self.on_polarity(-1)
