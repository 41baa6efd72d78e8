"""Training corpus loading.

A corpus is one UTF-8 text file per label, one training document per line.
Lines are stripped and blank lines skipped. Groups are returned in the order
of the label-to-file mapping, which fixes the label order (and therefore the
tie-break order) of a model trained from them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .classifier import NaiveBayesClassifier
from .model import Model

logger = logging.getLogger(__name__)

DEFAULT_TRAINING_FILES: dict[str, str] = {
    "theist": "training_theist.txt",
    "anti-theist": "training_anti_theist.txt",
    "neutral": "training_neutral.txt",
}


@dataclass
class TrainingGroup:
    """All training lines for one label."""

    label: str
    lines: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)


def read_lines(path: str | Path) -> list[str]:
    """Non-blank, stripped lines of a UTF-8 text file.

    Only newlines end a line; form feeds, vertical tabs and Unicode line
    separators inside a line stay part of that document.
    """
    text = Path(path).read_text(encoding="utf-8")
    return [line.strip() for line in text.split("\n") if line.strip()]


def load_corpus(
    files: Mapping[str, str | Path] = DEFAULT_TRAINING_FILES,
    base_dir: Optional[str | Path] = None,
) -> list[TrainingGroup]:
    """Read one training file per label.

    Args:
        files: Mapping of label to file path. Relative paths are resolved
            against ``base_dir`` when given.
        base_dir: Directory holding the training files.

    Returns:
        Training groups in mapping order.

    Raises:
        FileNotFoundError: If any training file is missing.
    """
    groups: list[TrainingGroup] = []
    for label, name in files.items():
        path = Path(name)
        if base_dir is not None and not path.is_absolute():
            path = Path(base_dir) / path
        lines = read_lines(path)
        logger.info("Loaded %d training lines for %r from %s", len(lines), label, path)
        groups.append(TrainingGroup(label=label, lines=lines))
    return groups


def train_model(groups: Iterable[TrainingGroup]) -> Model:
    """Train a fresh model on every line of every group, in order."""
    model = Model()
    NaiveBayesClassifier(model).train(groups)
    return model
