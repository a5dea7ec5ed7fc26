from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class AnalyzerSettings(BaseSettings):
    """
    Environment-driven settings for model loading + neutral decisioning.
    """

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # ---- Model ----
    sentiment_model_id: str = Field(
        default="distilbert-base-uncased-finetuned-sst-2-english",
        alias="SENTIMENT_MODEL_ID",
    )

    # Device: "auto" | "cpu" | "cuda"
    sentiment_device: str = Field(default="auto", alias="SENTIMENT_DEVICE")

    # int8 dynamic quantization (cpu only)
    sentiment_quantized: bool = Field(default=False, alias="SENTIMENT_QUANTIZED")

    # Tokenizer truncation inside the engine; 0 lets over-long input fail instead
    sentiment_max_length: int = Field(default=512, alias="SENTIMENT_MAX_LENGTH")

    # Character cut applied before inference; 0 = off
    sentiment_max_input_chars: int = Field(default=0, alias="SENTIMENT_MAX_INPUT_CHARS")

    # ---- Neutral decisioning ----
    # |pos - neg| < margin -> neutral
    sentiment_neutral_margin: float = Field(default=0.1, alias="SENTIMENT_NEUTRAL_MARGIN")
    # max(pos, neg) < floor -> neutral
    sentiment_min_confidence: float = Field(default=0.6, alias="SENTIMENT_MIN_CONFIDENCE")

    # ---- Dataset check ----
    sentiment_dataset_path: str = Field(default="IMDBDataset.csv", alias="SENTIMENT_DATASET_PATH")
    sentiment_dataset_samples: int = Field(default=2, alias="SENTIMENT_DATASET_SAMPLES")
    sentiment_sample_chars: int = Field(default=512, alias="SENTIMENT_SAMPLE_CHARS")


def load_settings() -> AnalyzerSettings:
    return AnalyzerSettings()
