"""
Exceptions raised by the analyzer core.

Each error carries a human-readable message plus an optional details dict,
so the request boundary can log context without parsing strings.
"""
from __future__ import annotations

from typing import Any, Optional


class SentimentDemoError(Exception):
    """Base class; catch this to handle any analyzer failure."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InitializationError(SentimentDemoError):
    """
    The classifier could not be made ready.

    Covers download failures, missing or corrupt model files and unsupported
    backends. The loader moves to FAILED and retries on the next call.
    """


class InferenceError(SentimentDemoError):
    """
    A single classify call failed after the classifier was ready.

    Does not affect loader state.
    """


class EmptyInputError(SentimentDemoError):
    """Blank or whitespace-only text was submitted."""
