"""Snapshot encoding for trained models.

A snapshot is a plain, JSON-compatible dict::

    {
        "version": 1,
        "classes": {
            "theist": {"document_count": 2, "token_counts": {"god": 1, ...}},
            ...
        },
        "vocabulary": ["answers", "beautiful", ...],
        "total_documents": 3,
    }

``deserialize`` validates everything it reads and raises ``DecodeError``
rather than returning a model that would misbehave later (for instance a
label with zero documents, whose log prior would be ``-inf``).
"""

from __future__ import annotations

import json
from typing import Any

from .errors import DecodeError
from .model import ClassStats, Model

SNAPSHOT_VERSION = 1


def serialize(model: Model) -> dict:
    """Capture a model as a JSON-compatible snapshot."""
    return {
        "version": SNAPSHOT_VERSION,
        "classes": {
            label: {
                "document_count": stats.document_count,
                "token_counts": dict(stats.token_counts),
            }
            for label, stats in model.classes.items()
        },
        "vocabulary": sorted(model.vocabulary),
        "total_documents": model.total_documents,
    }


def deserialize(snapshot: Any) -> Model:
    """Rebuild a model from a snapshot produced by ``serialize``.

    Args:
        snapshot: Decoded snapshot mapping.

    Returns:
        A new, independent Model.

    Raises:
        DecodeError: If the snapshot is malformed or internally inconsistent.
    """
    if not isinstance(snapshot, dict):
        raise DecodeError(f"Snapshot must be a mapping, got {type(snapshot).__name__}")

    for key in ("classes", "vocabulary", "total_documents"):
        if key not in snapshot:
            raise DecodeError(f"Snapshot is missing {key!r}")

    version = snapshot.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise DecodeError(f"Unsupported snapshot version: {version!r}")

    raw_vocabulary = snapshot["vocabulary"]
    if not isinstance(raw_vocabulary, list) or not all(isinstance(t, str) for t in raw_vocabulary):
        raise DecodeError("'vocabulary' must be a list of strings")
    vocabulary = set(raw_vocabulary)

    raw_classes = snapshot["classes"]
    if not isinstance(raw_classes, dict):
        raise DecodeError("'classes' must be a mapping of label to class statistics")

    classes: dict[str, ClassStats] = {}
    seen_tokens: set[str] = set()
    for label, raw_stats in raw_classes.items():
        stats = _decode_class(label, raw_stats)
        unknown = stats.token_counts.keys() - vocabulary
        if unknown:
            raise DecodeError(
                f"Label {label!r} counts tokens missing from the vocabulary: {sorted(unknown)[:5]}"
            )
        seen_tokens.update(stats.token_counts)
        classes[label] = stats

    orphans = vocabulary - seen_tokens
    if orphans:
        raise DecodeError(f"Vocabulary has tokens seen under no label: {sorted(orphans)[:5]}")

    total = _decode_count(snapshot["total_documents"], "total_documents")
    expected = sum(stats.document_count for stats in classes.values())
    if total != expected:
        raise DecodeError(
            f"'total_documents' is {total} but class document counts sum to {expected}"
        )

    return Model(classes=classes, vocabulary=vocabulary, total_documents=total)


def dumps(model: Model, indent: int | None = None) -> str:
    """Serialize a model straight to JSON text."""
    return json.dumps(serialize(model), indent=indent, ensure_ascii=False)


def loads(text: str | bytes) -> Model:
    """Parse JSON text and rebuild the model it describes.

    Bytes are decoded as UTF-8.

    Raises:
        DecodeError: If the input is not valid UTF-8 JSON or not a valid
            snapshot.
    """
    try:
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Snapshot is not valid JSON: {e}") from e
    return deserialize(data)


def _decode_class(label: Any, raw: Any) -> ClassStats:
    if not isinstance(label, str) or not label:
        raise DecodeError(f"Invalid label: {label!r}")
    if not isinstance(raw, dict):
        raise DecodeError(f"Statistics for {label!r} must be a mapping")
    if "document_count" not in raw or "token_counts" not in raw:
        raise DecodeError(f"Statistics for {label!r} need 'document_count' and 'token_counts'")

    document_count = _decode_count(raw["document_count"], f"{label}.document_count")
    if document_count == 0:
        raise DecodeError(f"Label {label!r} has no training documents")

    raw_counts = raw["token_counts"]
    if not isinstance(raw_counts, dict):
        raise DecodeError(f"'token_counts' for {label!r} must be a mapping")

    token_counts: dict[str, int] = {}
    for token, value in raw_counts.items():
        count = _decode_count(value, f"{label}.token_counts[{token!r}]")
        if count == 0:
            raise DecodeError(f"Token {token!r} under {label!r} has a zero count")
        token_counts[token] = count

    return ClassStats(document_count=document_count, token_counts=token_counts)


def _decode_count(value: Any, where: str) -> int:
    # bool is an int subclass; a JSON true is never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{where} must be an integer, got {value!r}")
    if value < 0:
        raise DecodeError(f"{where} must not be negative, got {value}")
    return value
