from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

ReviewSentiment = Literal["positive", "negative"]


@dataclass(frozen=True)
class LabeledReview:
    """One row of a labeled reviews CSV (e.g. IMDBDataset.csv)."""

    review: str
    sentiment: ReviewSentiment


@dataclass(frozen=True)
class DatasetStats:
    positive: int
    negative: int
    total: int


@dataclass(frozen=True)
class SampleCheck:
    """Expected vs predicted label for one dataset sample."""

    text: str
    expected: ReviewSentiment
    predicted: str  # positive|negative|neutral|error
    confidence: Optional[float]
