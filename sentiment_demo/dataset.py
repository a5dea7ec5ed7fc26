from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Sequence, Union

from sentiment_demo.errors import InferenceError
from sentiment_demo.models import DatasetStats, LabeledReview, SampleCheck
from sentiment_demo.sentiment_pipeline import SentimentAnalyzer

logger = logging.getLogger(__name__)

_VALID_SENTIMENTS = ("positive", "negative")


def load_labeled_reviews(path: Union[str, Path]) -> list[LabeledReview]:
    """
    Load a labeled reviews CSV.

    Rules:
    - first row is a header and is skipped
    - column 0: review text, column 1: sentiment
    - rows with blank review, fewer than 2 columns, or a sentiment other
      than positive/negative are skipped

    Raises:
        FileNotFoundError: if the file does not exist
    """
    p = Path(path)
    logger.info("Loading labeled reviews: path=%s", p)

    out: list[LabeledReview] = []
    skipped = 0
    with p.open(encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)
        for row in reader:
            if len(row) < 2:
                skipped += 1
                continue
            review = row[0].strip()
            sentiment = row[1].strip().lower()
            if not review or sentiment not in _VALID_SENTIMENTS:
                skipped += 1
                continue
            out.append(LabeledReview(review=review, sentiment=sentiment))  # type: ignore[arg-type]

    logger.info("Loaded labeled reviews: records=%s skipped=%s", len(out), skipped)
    return out


def dataset_stats(reviews: Sequence[LabeledReview]) -> DatasetStats:
    positive = sum(1 for r in reviews if r.sentiment == "positive")
    negative = sum(1 for r in reviews if r.sentiment == "negative")
    return DatasetStats(positive=positive, negative=negative, total=len(reviews))


def check_samples(
        analyzer: SentimentAnalyzer,
        reviews: Sequence[LabeledReview],
        limit: int,
        sample_chars: int = 512,
) -> list[SampleCheck]:
    """
    Run the first `limit` reviews through the analyzer.

    - each review is cut to sample_chars characters (0 = no cut)
    - an InferenceError on one sample is recorded as "error" and the run continues
    - InitializationError propagates (nothing can be checked without a model)

    Raises:
        ValueError: if limit < 0 or sample_chars < 0
    """
    if limit < 0:
        raise ValueError("limit must be >= 0")
    if sample_chars < 0:
        raise ValueError("sample_chars must be >= 0")

    out: list[SampleCheck] = []
    for review in reviews[:limit]:
        text = review.review[:sample_chars] if sample_chars else review.review
        try:
            decision = analyzer.analyze(text)
        except InferenceError as e:
            logger.warning("Sample prediction failed: chars=%s err=%s", len(text), e)
            out.append(SampleCheck(text=text, expected=review.sentiment, predicted="error", confidence=None))
            continue

        out.append(
            SampleCheck(
                text=text,
                expected=review.sentiment,
                predicted=decision.label.lower(),
                confidence=decision.confidence,
            )
        )
    return out
