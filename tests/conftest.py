from __future__ import annotations

from typing import Callable, Optional

import pytest

from sentiment_demo.decision_policy import DecisionPolicy
from sentiment_demo.errors import InferenceError
from sentiment_demo.loader import ClassifierLoader
from sentiment_demo.sentiment_pipeline import SentimentAnalyzer
from sentiment_demo.sentiment_types import ProgressEvent, RawScoreSet, ScoreEntry


class FakeClassifier:
    """Returns fixed scores; records every text it was asked to classify."""

    def __init__(self, pos: float = 0.97, neg: float = 0.03, fail_on: Optional[str] = None):
        self.pos = pos
        self.neg = neg
        self.fail_on = fail_on
        self.texts: list[str] = []

    def classify(self, text: str) -> RawScoreSet:
        self.texts.append(text)
        if self.fail_on is not None and self.fail_on in text:
            raise InferenceError("backend failure")
        return (ScoreEntry("POSITIVE", self.pos), ScoreEntry("NEGATIVE", self.neg))


class CountingInitializer:
    """Initializer that counts calls and can fail the first `failures` attempts."""

    def __init__(self, classifier: FakeClassifier, failures: int = 0):
        self.classifier = classifier
        self.failures = failures
        self.calls = 0

    def __call__(self, progress) -> FakeClassifier:
        self.calls += 1
        progress(ProgressEvent("loading model", "fake-model"))
        if self.calls <= self.failures:
            raise OSError("model download failed")
        return self.classifier


@pytest.fixture
def make_classifier() -> Callable[..., FakeClassifier]:
    return FakeClassifier


@pytest.fixture
def make_analyzer() -> Callable[..., tuple[SentimentAnalyzer, CountingInitializer]]:
    def _make(
            classifier: Optional[FakeClassifier] = None,
            failures: int = 0,
            max_input_chars: int = 0,
            policy: Optional[DecisionPolicy] = None,
    ) -> tuple[SentimentAnalyzer, CountingInitializer]:
        init = CountingInitializer(classifier or FakeClassifier(), failures=failures)
        analyzer = SentimentAnalyzer(
            ClassifierLoader(init),
            policy or DecisionPolicy(),
            max_input_chars=max_input_chars,
        )
        return analyzer, init

    return _make
