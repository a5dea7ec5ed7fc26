from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Literal, Mapping, Optional, Protocol, Sequence

from sentiment_demo.errors import InferenceError

DecisionLabel = Literal["Positive", "Negative", "Neutral"]


@dataclass(frozen=True)
class ScoreEntry:
    """One (label, score) pair as returned by the classifier."""

    label: str
    score: float


# Canonical engine output for one text. Tuples keep entries immutable.
RawScoreSet = tuple[ScoreEntry, ...]


@dataclass(frozen=True)
class Decision:
    """
    Three-way sentiment outcome.

    - label: Positive|Negative|Neutral
    - confidence: winning score for Positive/Negative; 1 - |pos - neg| for
      Neutral (a closeness heuristic, not a calibrated probability)
    """

    label: DecisionLabel
    confidence: float


class LoaderState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ProgressEvent:
    """Status emitted while the classifier loads, e.g. ("loading model", "<model id>")."""

    status: str
    name: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.status} {self.name}" if self.name else self.status


ProgressCallback = Callable[[ProgressEvent], None]


class Classifier(Protocol):
    def classify(self, text: str) -> RawScoreSet: ...


def normalize_raw_scores(raw: Any) -> RawScoreSet:
    """
    Convert engine output to a RawScoreSet.

    Accepted shapes:
    - {"label": ..., "score": ...}              single top-1 object
    - [{"label": ..., "score": ...}, ...]       top-1 or all classes
    - [[{"label": ..., "score": ...}, ...]]     all classes, batched form

    Raises:
        InferenceError: unknown shape, missing keys, or scores outside [0, 1]
    """
    if isinstance(raw, Mapping):
        items: Sequence[Any] = [raw]
    elif isinstance(raw, (list, tuple)):
        if raw and isinstance(raw[0], (list, tuple)):
            items = raw[0]
        else:
            items = raw
    else:
        raise InferenceError(
            "Unexpected classifier output shape",
            details={"type": type(raw).__name__},
        )

    return tuple(_to_entry(item) for item in items)


def _to_entry(item: Any) -> ScoreEntry:
    if not isinstance(item, Mapping) or "label" not in item or "score" not in item:
        raise InferenceError("Classifier output entry lacks label/score", details={"entry": repr(item)})

    try:
        score = float(item["score"])
    except (TypeError, ValueError) as e:
        raise InferenceError("Classifier score is not numeric", details={"entry": repr(item)}) from e

    if math.isnan(score) or not 0.0 <= score <= 1.0:
        raise InferenceError("Classifier score out of range [0, 1]", details={"score": score})

    return ScoreEntry(label=str(item["label"]), score=score)
