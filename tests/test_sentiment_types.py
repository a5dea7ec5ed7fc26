from __future__ import annotations

import pytest

from sentiment_demo.errors import InferenceError
from sentiment_demo.sentiment_types import ScoreEntry, normalize_raw_scores

_ALL = [{"label": "POSITIVE", "score": 0.9}, {"label": "NEGATIVE", "score": 0.1}]
_EXPECTED = (ScoreEntry("POSITIVE", 0.9), ScoreEntry("NEGATIVE", 0.1))


def test_normalize_flat_list():
    assert normalize_raw_scores(_ALL) == _EXPECTED


def test_normalize_nested_list():
    assert normalize_raw_scores([_ALL]) == _EXPECTED


def test_normalize_single_object():
    assert normalize_raw_scores({"label": "NEGATIVE", "score": 0.8}) == (ScoreEntry("NEGATIVE", 0.8),)


def test_normalize_empty_list():
    assert normalize_raw_scores([]) == ()


@pytest.mark.parametrize(
    "raw",
    [
        "POSITIVE",
        None,
        [{"label": "POSITIVE"}],
        [{"label": "POSITIVE", "score": "high"}],
        [{"label": "POSITIVE", "score": 1.2}],
        [{"label": "POSITIVE", "score": float("nan")}],
        [("POSITIVE", 0.9)],
    ],
)
def test_normalize_rejects_malformed_output(raw):
    with pytest.raises(InferenceError):
        normalize_raw_scores(raw)


def test_score_entries_are_immutable():
    entry = ScoreEntry("POSITIVE", 0.5)
    with pytest.raises(AttributeError):
        entry.score = 0.6  # type: ignore[misc]
