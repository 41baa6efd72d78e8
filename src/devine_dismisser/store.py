"""JSON file storage for trained models.

Training state is a cache, not critical data: ``load_or_empty`` logs a
corrupt snapshot and hands back a fresh model instead of failing, so the
caller can retrain.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import codec
from .errors import DecodeError
from .model import Model

logger = logging.getLogger(__name__)


class ModelStore:
    """Reads and writes one model snapshot at a fixed path.

    Example::

        store = ModelStore("~/.local/share/devine-dismisser/classifier.json")
        model = store.load_or_empty()
        ...
        store.save(model)

    Args:
        path: Location of the JSON snapshot. ``~`` is expanded.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, model: Model) -> None:
        """Write the model snapshot, creating parent directories."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(codec.dumps(model), encoding="utf-8")
        logger.debug(
            "Saved model with %d documents and %d tokens to %s",
            model.total_documents, model.vocabulary_size, self.path,
        )

    def load(self) -> Model | None:
        """Read the stored model.

        Returns:
            The restored model, or ``None`` when nothing has been saved.

        Raises:
            DecodeError: If the file exists but holds an invalid snapshot.
        """
        if not self.exists():
            return None
        model = codec.loads(self.path.read_bytes())
        logger.debug("Loaded model with %d documents from %s", model.total_documents, self.path)
        return model

    def load_or_empty(self) -> Model:
        """Read the stored model, falling back to an empty one.

        A missing file or a corrupt snapshot both yield a new empty model; the
        latter is logged at WARNING.
        """
        try:
            model = self.load()
        except DecodeError as e:
            logger.warning("Discarding corrupt model at %s: %s", self.path, e)
            return Model()
        return model if model is not None else Model()

    def clear(self) -> None:
        """Delete the stored snapshot if there is one."""
        self.path.unlink(missing_ok=True)
