"""Devine Dismisser -- bag-of-words Naive Bayes text filtering."""

__version__ = "0.1.0"

from .classifier import ClassificationResult, NaiveBayesClassifier
from .codec import deserialize, dumps, loads, serialize
from .corpus import DEFAULT_TRAINING_FILES, TrainingGroup, load_corpus, read_lines, train_model
from .errors import CallerContractError, DecodeError, DismisserError, UntrainedModelError
from .evaluation import EvaluationReport, compute_metrics, cross_validate, stratified_k_fold
from .filtering import ContentFilter, FilterResult
from .model import ClassStats, Model
from .store import ModelStore
from .tokenizer import tokenize

__all__ = [
    # Core
    "tokenize",
    "Model",
    "ClassStats",
    "NaiveBayesClassifier",
    "ClassificationResult",
    # Persistence
    "serialize",
    "deserialize",
    "dumps",
    "loads",
    "ModelStore",
    # Training data
    "TrainingGroup",
    "DEFAULT_TRAINING_FILES",
    "load_corpus",
    "read_lines",
    "train_model",
    # Filtering
    "ContentFilter",
    "FilterResult",
    # Evaluation
    "EvaluationReport",
    "compute_metrics",
    "cross_validate",
    "stratified_k_fold",
    # Errors
    "DismisserError",
    "UntrainedModelError",
    "DecodeError",
    "CallerContractError",
]
