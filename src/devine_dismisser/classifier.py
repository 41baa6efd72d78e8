"""Multinomial Naive Bayes over bag-of-words token counts.

For every trained label the classifier computes, in log space to avoid
underflow on long texts::

    score(label) = ln P(label) + sum(ln P(token | label) for token in text)

and returns the label with the strictly greatest score. Labels are visited in
the order they were first trained, so ties go to the earliest label. With no
labels (or an empty vocabulary) there is nothing to decide between and
``classify`` returns ``None``.

Example::

    classifier = NaiveBayesClassifier()
    classifier.add_document("god is real", "theist")
    classifier.add_document("nature is beautiful", "neutral")
    classifier.add_document("prayer works", "theist")

    classifier.classify("god answers prayer")   # "theist"
    classifier.predict_proba("nature walk")     # {"theist": 0.41, "neutral": 0.59}
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from . import codec
from .errors import CallerContractError, UntrainedModelError
from .model import Model, smoothed_probability
from .tokenizer import tokenize


@dataclass
class ClassificationResult:
    """Outcome of classifying a single text."""

    label: str
    confidence: float
    probabilities: dict[str, float]

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "confidence": round(self.confidence, 4),
            "probabilities": {
                k: round(v, 4) for k, v in sorted(
                    self.probabilities.items(),
                    key=lambda x: x[1],
                    reverse=True,
                )
            },
        }


class NaiveBayesClassifier:
    """Label decisions backed by an explicitly owned ``Model``.

    Args:
        model: Trained or empty model to classify with. A fresh empty model
            is created when omitted. The classifier reads and trains this
            exact instance; it never copies it.
    """

    def __init__(self, model: Optional[Model] = None) -> None:
        self._model = model if model is not None else Model()

    @property
    def model(self) -> Model:
        return self._model

    @property
    def labels(self) -> list[str]:
        return self._model.labels

    @property
    def is_trained(self) -> bool:
        """Whether classification can produce a decision."""
        return self._model.is_trained and bool(self._model.vocabulary)

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def add_document(self, text: str, label: str) -> None:
        """Train on one document. See ``Model.add_document``."""
        self._model.add_document(text, label)

    def train(self, groups: Iterable) -> int:
        """Train on labelled groups of lines.

        Args:
            groups: Iterable of objects with ``label`` and ``lines``
                attributes (``corpus.TrainingGroup``), consumed in order.

        Returns:
            Number of documents added.
        """
        added = 0
        for group in groups:
            for line in group.lines:
                self._model.add_document(line, group.label)
                added += 1
        return added

    # ------------------------------------------------------------------
    # Inference
    # ------------------------------------------------------------------

    def classify(self, text: str) -> Optional[str]:
        """Return the most probable label for ``text``, or ``None``.

        ``None`` means "no decision": the model has no labels or no
        vocabulary yet.

        Raises:
            CallerContractError: If ``text`` is not a string.
        """
        _check_text(text)
        if not self.is_trained:
            return None
        return _best_label(self.log_scores(text))

    def log_scores(self, text: str) -> dict[str, float]:
        """Unnormalised log posterior for every label, in label order.

        Raises:
            UntrainedModelError: If the model cannot score yet.
        """
        if not self.is_trained:
            raise UntrainedModelError("Classifier not trained. Add documents first.")

        tokens = tokenize(text)
        model = self._model
        vocab_size = len(model.vocabulary)

        scores: dict[str, float] = {}
        for label, stats in model.classes.items():
            total_words = stats.total_tokens
            score = math.log(stats.document_count / model.total_documents)
            for token in tokens:
                score += math.log(smoothed_probability(stats.count(token), total_words, vocab_size))
            scores[label] = score
        return scores

    def predict_proba(self, text: str) -> dict[str, float]:
        """Posterior probability of each label, summing to 1.

        Uses log-sum-exp for numerical stability.
        """
        return _normalise(self.log_scores(text))

    def classify_with_confidence(self, text: str) -> Optional[ClassificationResult]:
        """Like ``classify`` but also reports the posterior distribution.

        The text is scored once; label and probabilities come from the same
        scores.
        """
        _check_text(text)
        if not self.is_trained:
            return None
        log_scores = self.log_scores(text)
        label = _best_label(log_scores)
        proba = _normalise(log_scores)
        return ClassificationResult(label=label, confidence=proba[label], probabilities=proba)

    def most_informative_features(
        self,
        label: str,
        top_n: int = 20,
    ) -> list[tuple[str, float]]:
        """Tokens that most favour ``label`` over the other labels.

        Each vocabulary token is scored by its log likelihood under ``label``
        minus its mean log likelihood under the other labels.

        Returns:
            List of (token, log_likelihood_ratio) tuples, highest first.

        Raises:
            CallerContractError: If ``label`` is unknown.
        """
        model = self._model
        if label not in model.classes:
            raise CallerContractError(f"Unknown label: {label!r}. Known: {model.labels}")

        others = [other for other in model.labels if other != label]
        ranked: list[tuple[str, float]] = []
        for token in model.vocabulary:
            target = math.log(model.word_probability(token, label))
            if others:
                baseline = sum(
                    math.log(model.word_probability(token, other)) for other in others
                ) / len(others)
                target -= baseline
            ranked.append((token, round(target, 4)))

        ranked.sort(key=lambda x: (-x[1], x[0]))
        return ranked[:top_n]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Snapshot of the underlying model."""
        return codec.serialize(self._model)

    @classmethod
    def from_dict(cls, data: dict) -> "NaiveBayesClassifier":
        """Classifier over a model restored from a snapshot.

        Raises:
            DecodeError: If the snapshot is malformed.
        """
        return cls(codec.deserialize(data))


def _check_text(text: object) -> None:
    if not isinstance(text, str):
        raise CallerContractError(f"text must be a string, got {type(text).__name__}")


def _best_label(scores: dict[str, float]) -> Optional[str]:
    # strict > keeps the earliest label on a tie
    best_label: Optional[str] = None
    best_score = -math.inf
    for label, score in scores.items():
        if score > best_score:
            best_label, best_score = label, score
    return best_label


def _normalise(log_scores: dict[str, float]) -> dict[str, float]:
    max_score = max(log_scores.values())
    exp_scores = {label: math.exp(s - max_score) for label, s in log_scores.items()}
    total = sum(exp_scores.values())
    return {label: score / total for label, score in exp_scores.items()}
