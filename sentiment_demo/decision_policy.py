from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from sentiment_demo.sentiment_types import Decision, ScoreEntry

DEFAULT_NEUTRAL_MARGIN = 0.1
DEFAULT_MIN_CONFIDENCE = 0.6

_POSITIVE_TOKEN = "POS"
_NEGATIVE_TOKEN = "NEG"


@dataclass(frozen=True)
class DecisionPolicy:
    """
    Three-way decision over a binary (positive/negative) classifier.

    Rules:
    - |pos - neg| < neutral_margin           -> Neutral
    - max(pos, neg) < min_confidence         -> Neutral
    - otherwise pos >= neg -> Positive, else Negative

    A tie that survives both filters (only possible with neutral_margin=0)
    resolves to Positive.

    Raises:
        ValueError: if a threshold is outside [0, 1]
    """

    neutral_margin: float = DEFAULT_NEUTRAL_MARGIN
    min_confidence: float = DEFAULT_MIN_CONFIDENCE

    def __post_init__(self) -> None:
        if not 0.0 <= self.neutral_margin <= 1.0:
            raise ValueError("neutral_margin must be within [0, 1]")
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError("min_confidence must be within [0, 1]")

    def decide(self, scores: Sequence[ScoreEntry]) -> Decision:
        pos = _find_score(scores, _POSITIVE_TOKEN)
        neg = _find_score(scores, _NEGATIVE_TOKEN)
        diff = abs(pos - neg)
        max_prob = max(pos, neg)

        if diff < self.neutral_margin or max_prob < self.min_confidence:
            return Decision(label="Neutral", confidence=1.0 - diff)

        if pos >= neg:
            return Decision(label="Positive", confidence=pos)
        return Decision(label="Negative", confidence=neg)


def _find_score(scores: Sequence[ScoreEntry], token: str) -> float:
    # First matching entry wins; absent class counts as 0.
    for entry in scores:
        if token in entry.label.upper():
            return entry.score
    return 0.0


@dataclass(frozen=True)
class DisplayResult:
    text: str
    style: str  # positive|negative|neutral


_DISPLAY = {
    "Positive": ("😃", "positive"),
    "Negative": ("😡", "negative"),
    "Neutral": ("😐", "neutral"),
}


def format_decision(decision: Decision) -> DisplayResult:
    """Render a decision for display, e.g. "😃 Positive (confidence: 0.97)"."""
    emoji, style = _DISPLAY[decision.label]
    rounded = round(decision.confidence, 2)
    return DisplayResult(
        text=f"{emoji} {decision.label} (confidence: {rounded:.2f})",
        style=style,
    )
