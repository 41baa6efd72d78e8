"""Shared test fixtures for devine-dismisser tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from devine_dismisser.classifier import NaiveBayesClassifier
from devine_dismisser.model import Model

THEIST_LINES = [
    "God is real and answers every prayer",
    "Pray to the Lord and he will guide you",
    "Jesus loves you, have faith in God",
    "The Bible is the word of God",
    "Praise the Lord for his blessings",
    "Faith in God gives my life meaning",
]

ANTI_THEIST_LINES = [
    "Religion is a delusion with no evidence",
    "There is no evidence that any god exists",
    "Faith is believing without evidence or reason",
    "Organized religion has caused endless harm",
    "Atheism is simply the rejection of unproven claims",
    "Science explains the world without needing religion",
]

NEUTRAL_LINES = [
    "Nature is beautiful in the spring",
    "Here is my recipe for banana bread",
    "The football match went to extra time",
    "This camera review covers low light performance",
    "Learn to play guitar chords in ten minutes",
    "Top ten travel destinations for the summer",
]


@pytest.fixture
def scenario_model() -> Model:
    """The three-document theist/neutral model used throughout the docs."""
    model = Model()
    model.add_document("god is real", "theist")
    model.add_document("nature is beautiful", "neutral")
    model.add_document("prayer works", "theist")
    return model


@pytest.fixture
def scenario_classifier(scenario_model: Model) -> NaiveBayesClassifier:
    return NaiveBayesClassifier(scenario_model)


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """Directory holding the three default training files."""
    directory = tmp_path / "training data"
    directory.mkdir()
    (directory / "training_theist.txt").write_text(
        "\n".join(THEIST_LINES) + "\n", encoding="utf-8"
    )
    (directory / "training_anti_theist.txt").write_text(
        "\n\n".join(ANTI_THEIST_LINES) + "\n", encoding="utf-8"
    )
    (directory / "training_neutral.txt").write_text(
        "  " + "\n  ".join(NEUTRAL_LINES) + "  \n\n", encoding="utf-8"
    )
    return directory


@pytest.fixture
def trained_classifier() -> NaiveBayesClassifier:
    """Classifier trained on the three-label synthetic corpus."""
    classifier = NaiveBayesClassifier()
    for label, lines in (
        ("theist", THEIST_LINES),
        ("anti-theist", ANTI_THEIST_LINES),
        ("neutral", NEUTRAL_LINES),
    ):
        for line in lines:
            classifier.add_document(line, label)
    return classifier


@pytest.fixture
def corpus_lines() -> dict[str, list[str]]:
    """Training lines written by ``corpus_dir``, keyed by label."""
    return {
        "theist": THEIST_LINES,
        "anti-theist": ANTI_THEIST_LINES,
        "neutral": NEUTRAL_LINES,
    }
