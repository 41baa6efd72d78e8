"""Bag-of-words tokenizer.

Text is lowercased and split on runs of non-word characters (anything other
than a letter, digit or underscore). Empty segments are dropped, so leading
and trailing punctuation never produce empty tokens.
"""

from __future__ import annotations

import re

from .errors import CallerContractError

_SEPARATOR_RE = re.compile(r"\W+")


def tokenize(text: str) -> list[str]:
    """Split text into lowercase word tokens, preserving order and repeats.

    Args:
        text: Raw text (a comment body, a video title, a training line).

    Returns:
        List of tokens. Empty for empty or punctuation-only input.

    Raises:
        CallerContractError: If ``text`` is not a string.
    """
    if not isinstance(text, str):
        raise CallerContractError(f"text must be a string, got {type(text).__name__}")
    return [token for token in _SEPARATOR_RE.split(text.lower()) if token]
