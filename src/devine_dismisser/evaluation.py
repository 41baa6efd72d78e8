"""Accuracy reporting and cross-validation for the classifier.

``cross_validate`` trains a fresh model per fold (stratified so every fold
keeps roughly the corpus label mix) and scores the held-out lines with
``compute_metrics``. Texts the fold model cannot decide on are counted
under the ``NO_DECISION`` pseudo-label.
"""

from __future__ import annotations

import random
from collections import Counter, defaultdict
from dataclasses import dataclass, field

from .classifier import NaiveBayesClassifier
from .model import Model

NO_DECISION = "<none>"


@dataclass
class EvaluationReport:
    """Classification quality over one labelled test set.

    Attributes:
        accuracy: Fraction of exact label matches.
        per_label: Precision, recall and F1 for every label seen.
        macro_f1: Unweighted mean F1 across labels.
        confusion: ``confusion[true][predicted]`` counts.
        support: Number of test texts per true label.
    """

    accuracy: float = 0.0
    per_label: dict[str, dict[str, float]] = field(default_factory=dict)
    macro_f1: float = 0.0
    confusion: dict[str, dict[str, int]] = field(default_factory=dict)
    support: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "accuracy": round(self.accuracy, 4),
            "macro_f1": round(self.macro_f1, 4),
            "per_label": {
                label: {k: round(v, 4) for k, v in scores.items()}
                for label, scores in self.per_label.items()
            },
            "confusion": self.confusion,
            "support": self.support,
        }


def compute_metrics(y_true: list[str], y_pred: list[str]) -> EvaluationReport:
    """Compare predicted labels against the truth.

    Raises:
        ValueError: If the two lists differ in length.
    """
    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")

    labels = sorted(set(y_true) | set(y_pred))
    confusion = {t: {p: 0 for p in labels} for t in labels}
    for t, p in zip(y_true, y_pred):
        confusion[t][p] += 1

    hits = sum(confusion[label][label] for label in labels)
    accuracy = hits / len(y_true) if y_true else 0.0

    per_label: dict[str, dict[str, float]] = {}
    for label in labels:
        tp = confusion[label][label]
        predicted = sum(confusion[t][label] for t in labels)
        actual = sum(confusion[label].values())
        precision = tp / predicted if predicted else 0.0
        recall = tp / actual if actual else 0.0
        f1 = 2 * precision * recall / (precision + recall) if precision + recall else 0.0
        per_label[label] = {"precision": precision, "recall": recall, "f1": f1}

    macro_f1 = sum(s["f1"] for s in per_label.values()) / len(labels) if labels else 0.0

    return EvaluationReport(
        accuracy=accuracy,
        per_label=per_label,
        macro_f1=macro_f1,
        confusion=confusion,
        support=dict(Counter(y_true)),
    )


def stratified_k_fold(
    labels: list[str],
    k: int = 5,
    seed: int = 42,
) -> list[tuple[list[int], list[int]]]:
    """Split indices into ``k`` (train, test) pairs with balanced labels.

    Indices of each label are shuffled with ``seed`` and dealt round-robin
    across folds.
    """
    if k < 2:
        raise ValueError(f"k must be at least 2, got {k}")

    rng = random.Random(seed)
    by_label: dict[str, list[int]] = defaultdict(list)
    for idx, label in enumerate(labels):
        by_label[label].append(idx)

    fold_of = [0] * len(labels)
    for indices in by_label.values():
        rng.shuffle(indices)
        for position, idx in enumerate(indices):
            fold_of[idx] = position % k

    return [
        (
            [i for i, f in enumerate(fold_of) if f != fold],
            [i for i, f in enumerate(fold_of) if f == fold],
        )
        for fold in range(k)
    ]


def cross_validate(
    texts: list[str],
    labels: list[str],
    k: int = 5,
    seed: int = 42,
) -> list[EvaluationReport]:
    """Train and score a fresh model on each of ``k`` stratified folds."""
    if len(texts) != len(labels):
        raise ValueError("texts and labels must have the same length")

    reports: list[EvaluationReport] = []
    for train_idx, test_idx in stratified_k_fold(labels, k=k, seed=seed):
        model = Model()
        for i in train_idx:
            model.add_document(texts[i], labels[i])
        classifier = NaiveBayesClassifier(model)

        predictions = [classifier.classify(texts[i]) or NO_DECISION for i in test_idx]
        reports.append(compute_metrics([labels[i] for i in test_idx], predictions))
    return reports
