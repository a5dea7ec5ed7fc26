from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Optional

from sentiment_demo.decision_policy import DecisionPolicy, format_decision
from sentiment_demo.errors import EmptyInputError, InferenceError, InitializationError
from sentiment_demo.loader import ClassifierLoader
from sentiment_demo.sentiment_model import SentimentModelConfig, initialize_classifier
from sentiment_demo.sentiment_types import Classifier, Decision, ProgressCallback
from sentiment_demo.settings import AnalyzerSettings

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter some text."
LOAD_FAILED_MESSAGE = "Failed to load model. Please try again."
ANALYZE_FAILED_MESSAGE = "Failed to analyze sentiment. Please try again."


@dataclass(frozen=True)
class AnalysisOutcome:
    """
    What the UI renders for one request.

    decision is None when the request failed; message is then user-facing.
    """

    decision: Optional[Decision]
    message: str
    style: str  # positive|negative|neutral|muted|error


def prepare_text(text: Optional[str], max_chars: int = 0) -> str:
    """
    Select text used for inference.

    Rules:
    - strip surrounding whitespace
    - blank -> EmptyInputError
    - max_chars > 0: keep only the first max_chars characters
    """
    prepared = (text or "").strip()
    if not prepared:
        raise EmptyInputError(EMPTY_INPUT_MESSAGE)
    if max_chars > 0:
        return prepared[:max_chars]
    return prepared


class SentimentAnalyzer:
    """
    Entry point for the UI: text -> Decision.

    Flow: prepare text -> loader.ensure_ready() -> classifier -> policy.
    Blank input is rejected before the loader is touched.
    """

    def __init__(
            self,
            loader: ClassifierLoader[Classifier],
            policy: DecisionPolicy,
            max_input_chars: int = 0,
    ):
        if max_input_chars < 0:
            raise ValueError("max_input_chars must be >= 0")
        self._loader = loader
        self._policy = policy
        self._max_input_chars = max_input_chars

    @property
    def loader(self) -> ClassifierLoader[Classifier]:
        return self._loader

    def add_progress_observer(self, observer: ProgressCallback) -> None:
        self._loader.add_progress_observer(observer)

    def ensure_ready(self) -> Classifier:
        return self._loader.ensure_ready()

    def analyze(self, text: Optional[str]) -> Decision:
        """
        Raises:
            EmptyInputError: blank text (no model call is made)
            InitializationError: the classifier could not be loaded
            InferenceError: the classify call failed
        """
        prepared = prepare_text(text, self._max_input_chars)
        classifier = self._loader.ensure_ready()
        scores = classifier.classify(prepared)
        decision = self._policy.decide(scores)
        logger.debug("Decision: label=%s confidence=%.4f chars=%s", decision.label, decision.confidence, len(prepared))
        return decision

    def analyze_for_display(self, text: Optional[str]) -> AnalysisOutcome:
        """Request boundary: never raises analyzer errors, returns a message instead."""
        try:
            decision = self.analyze(text)
        except EmptyInputError as e:
            return AnalysisOutcome(decision=None, message=e.message, style="muted")
        except InitializationError as e:
            logger.warning("Analyze aborted, model not loaded: %s", e)
            return AnalysisOutcome(decision=None, message=LOAD_FAILED_MESSAGE, style="error")
        except InferenceError as e:
            logger.warning("Analyze failed: %s", e)
            return AnalysisOutcome(decision=None, message=ANALYZE_FAILED_MESSAGE, style="error")

        shown = format_decision(decision)
        return AnalysisOutcome(decision=decision, message=shown.text, style=shown.style)


def build_analyzer(s: AnalyzerSettings) -> SentimentAnalyzer:
    """Wire settings -> model config -> loader -> policy -> analyzer. Nothing is loaded yet."""
    model_cfg = SentimentModelConfig(
        model_id=s.sentiment_model_id,
        device=s.sentiment_device,
        quantized=s.sentiment_quantized,
        max_length=s.sentiment_max_length,
    )
    loader: ClassifierLoader[Classifier] = ClassifierLoader(partial(initialize_classifier, model_cfg))
    policy = DecisionPolicy(
        neutral_margin=s.sentiment_neutral_margin,
        min_confidence=s.sentiment_min_confidence,
    )
    return SentimentAnalyzer(loader, policy, max_input_chars=s.sentiment_max_input_chars)
