from __future__ import annotations

import json

import pytest

from sentiment_demo import run_dataset_check_once


@pytest.fixture(autouse=True)
def _dataset_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SENTIMENT_DATASET_PATH", str(tmp_path / "IMDBDataset.csv"))
    monkeypatch.setenv("SENTIMENT_DATASET_SAMPLES", "2")
    monkeypatch.setenv("SENTIMENT_SAMPLE_CHARS", "512")
    return tmp_path


def _write_csv(tmp_path):
    (tmp_path / "IMDBDataset.csv").write_text(
        "review,sentiment\n"
        '"A dreadful, boring film.",negative\n'
        '"Wonderful cast",positive\n'
        '"never sampled",positive\n',
        encoding="utf-8",
    )


def test_exits_1_when_dataset_is_missing(capsys):
    assert run_dataset_check_once.main() == 1
    assert capsys.readouterr().out == ""


def test_exits_1_when_model_cannot_be_loaded(tmp_path, monkeypatch, make_analyzer):
    _write_csv(tmp_path)
    analyzer, _ = make_analyzer(failures=1)
    monkeypatch.setattr(run_dataset_check_once, "build_analyzer", lambda s: analyzer)

    assert run_dataset_check_once.main() == 1


def test_prints_sample_checks_as_json(tmp_path, monkeypatch, make_analyzer, make_classifier, capsys):
    _write_csv(tmp_path)
    analyzer, _ = make_analyzer(make_classifier(pos=0.04, neg=0.96))
    monkeypatch.setattr(run_dataset_check_once, "build_analyzer", lambda s: analyzer)

    assert run_dataset_check_once.main() == 0

    rows = json.loads(capsys.readouterr().out)
    assert rows == [
        {"text": "A dreadful, boring film.", "expected": "negative", "predicted": "negative", "confidence": 0.96},
        {"text": "Wonderful cast", "expected": "positive", "predicted": "negative", "confidence": 0.96},
    ]
