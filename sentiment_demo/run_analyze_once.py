from __future__ import annotations

import json
import logging
import sys
from typing import Optional, Sequence

from sentiment_demo.errors import InitializationError
from sentiment_demo.sentiment_pipeline import build_analyzer
from sentiment_demo.settings import load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Analyze texts given as arguments (JSON output), or stdin lines when none are given.
    """
    texts = list(sys.argv[1:] if argv is None else argv)
    s = load_settings()
    analyzer = build_analyzer(s)

    # Start loading immediately so the first request does not pay for it
    try:
        analyzer.ensure_ready()
    except InitializationError as e:
        logger.error("Model could not be loaded: %s", e)
        return 1

    if texts:
        rows = []
        for text in texts:
            outcome = analyzer.analyze_for_display(text)
            rows.append(
                {
                    "text": text,
                    "label": outcome.decision.label if outcome.decision else None,
                    "confidence": outcome.decision.confidence if outcome.decision else None,
                    "display": outcome.message,
                }
            )
        print(json.dumps(rows, ensure_ascii=False, indent=2))
        return 0

    for line in sys.stdin:
        print(analyzer.analyze_for_display(line).message, flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
