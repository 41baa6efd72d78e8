"""Training statistics for the bag-of-words classifier.

The ``Model`` holds everything learned from training: a ``ClassStats`` entry
per label (document count plus per-token occurrence counts), the global
vocabulary, and the total number of training documents. It is the only
mutable state in the package and only ever grows.

The Laplace-smoothed token likelihood lives here too, since it is a pure
function of these counts::

    P(token | label) = (count(token, label) + 1) / (tokens(label) + |V|)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import CallerContractError, UntrainedModelError
from .tokenizer import tokenize


@dataclass
class ClassStats:
    """Counts gathered for a single label.

    Attributes:
        document_count: Number of training documents assigned to the label.
        token_counts: Total occurrences of each token across those documents.
            Tokens never seen under the label are absent, not zero.
    """

    document_count: int = 0
    token_counts: dict[str, int] = field(default_factory=dict)

    def count(self, token: str) -> int:
        """Occurrences of ``token`` under this label (0 if never seen)."""
        return self.token_counts.get(token, 0)

    @property
    def total_tokens(self) -> int:
        """Sum of all token occurrences under this label."""
        return sum(self.token_counts.values())


@dataclass
class Model:
    """Per-label statistics, vocabulary and document total.

    Labels are kept in the order they were first trained; classification
    breaks ties in favour of the earliest label.

    Example::

        model = Model()
        model.add_document("god is real", "theist")
        model.add_document("nature is beautiful", "neutral")
        model.word_probability("god", "theist")  # 2 / 8 = 0.25
    """

    classes: dict[str, ClassStats] = field(default_factory=dict)
    vocabulary: set[str] = field(default_factory=set)
    total_documents: int = 0

    @property
    def labels(self) -> list[str]:
        """Known labels in first-seen order."""
        return list(self.classes)

    @property
    def vocabulary_size(self) -> int:
        return len(self.vocabulary)

    @property
    def is_trained(self) -> bool:
        """Whether at least one document has been added."""
        return bool(self.classes)

    def add_document(self, text: str, label: str) -> None:
        """Count one training document under ``label``.

        The label's document count and the model total go up by exactly one,
        even when ``text`` yields no tokens. Every token occurrence (repeats
        included) is added to the label's counts and to the vocabulary.

        Raises:
            CallerContractError: If ``label`` is empty or not a string, or if
                ``text`` is not a string. The model is left untouched.
        """
        if not isinstance(label, str) or not label:
            raise CallerContractError("Training documents need a non-empty string label")
        tokens = tokenize(text)

        stats = self.classes.setdefault(label, ClassStats())
        stats.document_count += 1
        self.total_documents += 1

        for token in tokens:
            self.vocabulary.add(token)
            stats.token_counts[token] = stats.count(token) + 1

    def word_probability(self, token: str, label: str) -> float:
        """Laplace-smoothed likelihood of ``token`` given ``label``.

        Always strictly positive, including for tokens never seen under the
        label (or never seen at all).

        Raises:
            UntrainedModelError: If the vocabulary is empty.
            CallerContractError: If ``label`` is not a trained label.
        """
        if not self.vocabulary:
            raise UntrainedModelError("Model has an empty vocabulary. Train it first.")
        stats = self.classes.get(label)
        if stats is None:
            raise CallerContractError(f"Unknown label: {label!r}. Known: {self.labels}")
        return smoothed_probability(stats.count(token), stats.total_tokens, len(self.vocabulary))

    def prior(self, label: str) -> float:
        """Fraction of training documents assigned to ``label``."""
        stats = self.classes.get(label)
        if stats is None:
            raise CallerContractError(f"Unknown label: {label!r}. Known: {self.labels}")
        return stats.document_count / self.total_documents


def smoothed_probability(word_count: int, total_words: int, vocab_size: int) -> float:
    """Add-one estimate shared by ``Model.word_probability`` and scoring."""
    return (word_count + 1) / (total_words + vocab_size)
