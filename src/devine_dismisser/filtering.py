"""Hide/keep decisions for candidate texts.

Page scraping (finding comment bodies and video titles) happens elsewhere.
This module only makes the decision: given strings, say which ones to hide.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .classifier import NaiveBayesClassifier

logger = logging.getLogger(__name__)

DEFAULT_BLOCKED_LABELS: tuple[str, ...] = ("theist",)


@dataclass
class FilterResult:
    """Texts split by the filter, each list in input order."""

    kept: list[str] = field(default_factory=list)
    hidden: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"kept": self.kept, "hidden": self.hidden}


class ContentFilter:
    """Hides texts whose predicted label is blocked.

    A text the classifier cannot decide on (untrained model) is always kept.

    Args:
        classifier: Classifier used for every decision.
        blocked_labels: Labels whose texts should be hidden.
    """

    def __init__(
        self,
        classifier: NaiveBayesClassifier,
        blocked_labels: Iterable[str] = DEFAULT_BLOCKED_LABELS,
    ) -> None:
        self.classifier = classifier
        self.blocked_labels = frozenset(blocked_labels)

    def should_hide(self, text: str) -> bool:
        label = self.classifier.classify(text)
        if label is not None and label in self.blocked_labels:
            logger.info("Blocked a %s text: %s", label, text)
            return True
        return False

    def partition(self, texts: Iterable[str]) -> FilterResult:
        """Split ``texts`` into kept and hidden, preserving order."""
        result = FilterResult()
        for text in texts:
            (result.hidden if self.should_hide(text) else result.kept).append(text)
        return result
