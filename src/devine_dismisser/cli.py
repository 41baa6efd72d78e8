"""Command-line interface for devine-dismisser.

Provides ``train``, ``classify``, ``filter``, ``info`` and ``evaluate``
commands with rich terminal output using the ``click`` and ``rich``
libraries.

Usage::

    devine-dismisser train --corpus-dir "training data"
    devine-dismisser classify "god answers prayer"
    devine-dismisser filter comments.txt --show-hidden
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .classifier import NaiveBayesClassifier
from .config import Settings
from .corpus import DEFAULT_TRAINING_FILES, load_corpus, train_model
from .errors import DismisserError
from .evaluation import cross_validate
from .filtering import ContentFilter
from .model import Model
from .store import ModelStore

console = Console()
logger = logging.getLogger(__name__)

NO_DECISION_TEXT = "no decision"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/] {error}")
    sys.exit(1)


def _store(ctx: click.Context, model_path: Path | None) -> ModelStore:
    settings: Settings = ctx.obj
    return ModelStore(model_path or settings.model_path)


def _model_path_option(func):
    return click.option(
        "--model", "-m", "model_path", type=click.Path(path_type=Path), default=None,
        help="Model file (defaults to DISMISSER_MODEL_PATH).",
    )(func)


@click.group()
@click.version_option(package_name="devine-dismisser")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Devine Dismisser: hide unwanted comments and titles.

    Trains a bag-of-words Naive Bayes classifier on labelled lines of text
    and decides which new texts to hide.
    """
    settings = Settings.from_env()
    _configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@main.command()
@click.option("--corpus-dir", "-c", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory with the training_*.txt files.")
@_model_path_option
@click.pass_context
def train(ctx: click.Context, corpus_dir: Path | None, model_path: Path | None) -> None:
    """Train a new model from the corpus files and save it.

    Example: devine-dismisser train --corpus-dir "training data"
    """
    settings: Settings = ctx.obj
    store = _store(ctx, model_path)

    try:
        groups = load_corpus(DEFAULT_TRAINING_FILES, base_dir=corpus_dir or settings.corpus_dir)
        model = train_model(groups)
        store.save(model)
    except (DismisserError, OSError) as e:
        _fail(e)

    logger.info("Trained new classifier and cached it at %s", store.path)
    _render_model(model, title=f"Trained model: {store.path}")


@main.command()
@click.argument("texts", nargs=-1, required=True)
@_model_path_option
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_context
def classify(ctx: click.Context, texts: tuple[str, ...], model_path: Path | None, output: str) -> None:
    """Predict a label for each TEXT.

    Example: devine-dismisser classify "god answers prayer"
    """
    classifier = NaiveBayesClassifier(_store(ctx, model_path).load_or_empty())
    results = [(text, classifier.classify_with_confidence(text)) for text in texts]

    if output == "json":
        click.echo(json.dumps([
            {"text": text, **(result.to_dict() if result else {"label": None})}
            for text, result in results
        ], indent=2))
        return

    table = Table(title="Classification", show_lines=False)
    table.add_column("Text", style="white", max_width=60)
    table.add_column("Label", style="cyan")
    table.add_column("Conf.", justify="center", width=6)
    for text, result in results:
        if result is None:
            table.add_row(text, f"[dim]{NO_DECISION_TEXT}[/]", "-")
        else:
            table.add_row(text, result.label, f"{result.confidence:.0%}")
    console.print(table)


@main.command(name="filter")
@click.argument("file", type=click.File("r", encoding="utf-8"))
@_model_path_option
@click.option("--block", "-b", "blocked", multiple=True,
              help="Label to hide (repeatable). Defaults to DISMISSER_BLOCKED_LABELS.")
@click.option("--show-hidden", is_flag=True, help="Print hidden lines instead of kept ones.")
@click.pass_context
def filter_command(ctx: click.Context, file, model_path: Path | None,
                   blocked: tuple[str, ...], show_hidden: bool) -> None:
    """Print the lines of FILE that survive filtering ('-' reads stdin).

    Example: devine-dismisser filter comments.txt --block theist
    """
    settings: Settings = ctx.obj
    classifier = NaiveBayesClassifier(_store(ctx, model_path).load_or_empty())
    content_filter = ContentFilter(classifier, blocked or settings.blocked_labels)

    lines = [line.strip() for line in file if line.strip()]
    result = content_filter.partition(lines)
    for line in result.hidden if show_hidden else result.kept:
        click.echo(line)


@main.command()
@_model_path_option
@click.pass_context
def info(ctx: click.Context, model_path: Path | None) -> None:
    """Show what the stored model has learned."""
    store = _store(ctx, model_path)
    try:
        model = store.load()
    except DismisserError as e:
        _fail(e)

    if model is None:
        console.print(f"[yellow]No model stored at {store.path}[/]")
        return
    _render_model(model, title=f"Model: {store.path}")


@main.command()
@click.option("--corpus-dir", "-c", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory with the training_*.txt files.")
@click.option("--folds", "-k", type=click.IntRange(min=2), default=5, help="Number of folds.")
@click.option("--seed", type=int, default=42, help="Shuffle seed.")
@click.pass_context
def evaluate(ctx: click.Context, corpus_dir: Path | None, folds: int, seed: int) -> None:
    """Cross-validate the classifier on the training corpus."""
    settings: Settings = ctx.obj
    try:
        groups = load_corpus(DEFAULT_TRAINING_FILES, base_dir=corpus_dir or settings.corpus_dir)
    except OSError as e:
        _fail(e)

    texts = [line for group in groups for line in group.lines]
    labels = [group.label for group in groups for _ in group.lines]
    reports = cross_validate(texts, labels, k=folds, seed=seed)

    table = Table(title=f"{folds}-fold cross-validation")
    table.add_column("Fold", justify="right", width=5)
    table.add_column("Accuracy", justify="right")
    table.add_column("Macro F1", justify="right")
    for i, report in enumerate(reports, 1):
        table.add_row(str(i), f"{report.accuracy:.2%}", f"{report.macro_f1:.4f}")
    mean_accuracy = sum(r.accuracy for r in reports) / len(reports)
    console.print(table)
    console.print(f"Mean accuracy: [bold]{mean_accuracy:.2%}[/]")


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_model(model: Model, title: str) -> None:
    table = Table(title=title)
    table.add_column("Label", style="cyan")
    table.add_column("Documents", justify="right")
    table.add_column("Prior", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Distinct", justify="right")

    for label, stats in model.classes.items():
        table.add_row(
            label,
            str(stats.document_count),
            f"{model.prior(label):.0%}",
            str(stats.total_tokens),
            str(len(stats.token_counts)),
        )

    console.print(table)
    console.print(
        f"Documents: [bold]{model.total_documents}[/] | "
        f"Vocabulary: [bold]{model.vocabulary_size}[/]"
    )


if __name__ == "__main__":
    main()
