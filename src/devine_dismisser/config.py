"""Runtime settings.

Values come from the environment, optionally seeded from a ``.env`` file found from
the working directory upwards:

    DISMISSER_MODEL_PATH      where the trained model is cached
    DISMISSER_CORPUS_DIR      directory holding the training_*.txt files
    DISMISSER_BLOCKED_LABELS  comma-separated labels to hide
    DISMISSER_LOG_LEVEL       logging level name (DEBUG, INFO, ...)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .filtering import DEFAULT_BLOCKED_LABELS

logger = logging.getLogger(__name__)

APP_NAME = "devine-dismisser"


def default_model_path() -> Path:
    """``$XDG_DATA_HOME/devine-dismisser/classifier.json``."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / APP_NAME / "classifier.json"


@dataclass
class Settings:
    model_path: Path = field(default_factory=default_model_path)
    corpus_dir: Path = Path("training data")
    blocked_labels: tuple[str, ...] = DEFAULT_BLOCKED_LABELS
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from ``DISMISSER_*`` environment variables.

        Args:
            dotenv: Load a ``.env`` file first. Variables already set in the
                environment win over the file.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        settings = cls()
        model_path = os.getenv("DISMISSER_MODEL_PATH")
        if model_path:
            settings.model_path = Path(model_path).expanduser()
        corpus_dir = os.getenv("DISMISSER_CORPUS_DIR")
        if corpus_dir:
            settings.corpus_dir = Path(corpus_dir).expanduser()
        blocked = os.getenv("DISMISSER_BLOCKED_LABELS")
        if blocked:
            settings.blocked_labels = tuple(b.strip() for b in blocked.split(",") if b.strip())
        log_level = os.getenv("DISMISSER_LOG_LEVEL")
        if log_level:
            level = log_level.strip().upper()
            # getLevelName maps known names to ints and anything else to a str
            if isinstance(logging.getLevelName(level), int):
                settings.log_level = level
            else:
                logger.warning(
                    "Ignoring unknown DISMISSER_LOG_LEVEL %r, using %s",
                    log_level, settings.log_level,
                )
        return settings
