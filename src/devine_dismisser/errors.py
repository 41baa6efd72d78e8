"""Exceptions raised by the classifier core.

Each error also subclasses the builtin exception a plain-Python caller would
expect (``RuntimeError`` for an unusable model, ``ValueError`` for bad input),
so existing ``except ValueError`` handlers keep working.
"""

from __future__ import annotations


class DismisserError(Exception):
    """Base class for all devine-dismisser errors."""


class UntrainedModelError(DismisserError, RuntimeError):
    """A probability was requested from a model with an empty vocabulary."""


class DecodeError(DismisserError, ValueError):
    """A persisted snapshot is structurally invalid."""


class CallerContractError(DismisserError, ValueError):
    """The caller passed an unlabeled document, a non-string, or an unknown label."""
