from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import torch
from transformers import AutoModelForSequenceClassification, AutoTokenizer, pipeline

from sentiment_demo.errors import InferenceError, InitializationError
from sentiment_demo.sentiment_types import (
    ProgressCallback,
    ProgressEvent,
    RawScoreSet,
    normalize_raw_scores,
)

logger = logging.getLogger(__name__)

SUPPORTED_DEVICES = ("auto", "cpu", "cuda")


@dataclass(frozen=True)
class SentimentModelConfig:
    model_id: str
    device: str  # "auto" | "cpu" | "cuda"
    quantized: bool
    max_length: int  # engine-side token truncation; 0 disables


def _select_device(device: str) -> torch.device:
    if device not in SUPPORTED_DEVICES:
        raise InitializationError(
            f"Unsupported backend: {device!r}",
            details={"supported": list(SUPPORTED_DEVICES)},
        )
    if device == "cpu":
        return torch.device("cpu")
    if device == "cuda":
        if not torch.cuda.is_available():
            raise InitializationError("Backend 'cuda' requested but CUDA is not available")
        return torch.device("cuda")
    # auto
    return torch.device("cuda" if torch.cuda.is_available() else "cpu")


def _from_pretrained(loader_cls: Any, model_id: str) -> Any:
    try:
        return loader_cls.from_pretrained(model_id)
    except (OSError, ValueError) as e:
        raise InitializationError(
            f"Failed to load model {model_id}: {e}",
            details={"model_id": model_id},
        ) from e


def initialize_classifier(cfg: SentimentModelConfig, on_progress: ProgressCallback) -> HfClassifier:
    """
    Download (or read from the local HF cache) and prepare the classifier.

    Progress events, in order:
    initiate, loading tokenizer, loading model, [quantizing], ready

    Raises:
        InitializationError: unsupported backend, quantization on a non-CPU
            device, or model files that cannot be fetched or read
    """
    device = _select_device(cfg.device)
    if cfg.quantized and device.type != "cpu":
        raise InitializationError(
            "Quantized models are only supported on the cpu backend",
            details={"device": device.type},
        )

    on_progress(ProgressEvent("initiate", cfg.model_id))
    on_progress(ProgressEvent("loading tokenizer", cfg.model_id))
    tokenizer = _from_pretrained(AutoTokenizer, cfg.model_id)
    on_progress(ProgressEvent("loading model", cfg.model_id))
    model = _from_pretrained(AutoModelForSequenceClassification, cfg.model_id)

    model.eval()
    if cfg.quantized:
        on_progress(ProgressEvent("quantizing", cfg.model_id))
        model = torch.ao.quantization.quantize_dynamic(model, {torch.nn.Linear}, dtype=torch.qint8)

    pipe = pipeline("text-classification", model=model, tokenizer=tokenizer, device=device)
    on_progress(ProgressEvent("ready", cfg.model_id))

    logger.info(
        "Sentiment model ready: model=%s device=%s quantized=%s max_length=%s",
        cfg.model_id,
        device.type,
        cfg.quantized,
        cfg.max_length,
    )
    return HfClassifier(pipe, cfg)


class HfClassifier:
    """
    Wrapper over a transformers text-classification pipeline.

    - requests scores for every class (top_k=None)
    - normalizes the pipeline's output shape to a RawScoreSet
    - wraps any engine failure in InferenceError
    """

    def __init__(self, pipe: Callable[..., Any], cfg: SentimentModelConfig):
        self._pipe = pipe
        self._cfg = cfg

    @property
    def model_id(self) -> str:
        return self._cfg.model_id

    def classify(self, text: str) -> RawScoreSet:
        kwargs: dict[str, Any] = {"top_k": None}
        if self._cfg.max_length > 0:
            kwargs["truncation"] = True
            kwargs["max_length"] = self._cfg.max_length

        try:
            raw = self._pipe(text, **kwargs)
        except Exception as e:
            logger.error("Inference failed: model=%s chars=%s err=%s", self._cfg.model_id, len(text), e)
            raise InferenceError(f"Inference failed: {e}", details={"chars": len(text)}) from e

        return normalize_raw_scores(raw)
