from __future__ import annotations

import json
import logging
import sys

from sentiment_demo.dataset import check_samples, dataset_stats, load_labeled_reviews
from sentiment_demo.errors import InitializationError
from sentiment_demo.sentiment_pipeline import build_analyzer
from sentiment_demo.settings import load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> int:
    s = load_settings()

    try:
        reviews = load_labeled_reviews(s.sentiment_dataset_path)
    except FileNotFoundError:
        logger.error("Dataset not found: %s", s.sentiment_dataset_path)
        return 1

    stats = dataset_stats(reviews)
    logger.info(
        "Dataset statistics: positive=%s negative=%s total=%s",
        stats.positive,
        stats.negative,
        stats.total,
    )

    analyzer = build_analyzer(s)
    try:
        checks = check_samples(
            analyzer,
            reviews,
            limit=s.sentiment_dataset_samples,
            sample_chars=s.sentiment_sample_chars,
        )
    except InitializationError as e:
        logger.error("Model could not be loaded: %s", e)
        return 1

    # Minimal output for inspection (CLI only)
    sample = [
        {
            "text": c.text[:40],
            "expected": c.expected,
            "predicted": c.predicted,
            "confidence": c.confidence,
        }
        for c in checks
    ]
    print(json.dumps(sample, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
