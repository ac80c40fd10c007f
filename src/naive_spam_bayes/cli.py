"""Command-line interface for naive-spam-bayes.

Runs k-fold cross-validation of the Naive Bayes spam classifier over a
fold-partitioned corpus and reports mean spam recall and precision, with
rich terminal output using the ``click`` and ``rich`` libraries.

Usage::

    naive-spam-bayes PU1/
    naive-spam-bayes --output json PU1/
    naive-spam-bayes --top-tokens 15 PU1/
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .classifier import most_informative_tokens, train_documents
from .corpus import load_corpus
from .evaluation import cross_validate, usable
from .exceptions import CorpusNotFoundError, SpamBayesError
from .models import CrossValidationResult, Label, format_metric

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.command()
@click.argument("corpus", type=click.Path(path_type=Path))
@click.option("--folds", "-k", type=click.IntRange(min=1), default=10, show_default=True,
              help="Number of cross-validation folds.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.option("--top-tokens", type=click.IntRange(min=0), default=0,
              help="Also list the N tokens most indicative of spam. Trains one "
                   "more model on every usable document, so the corpus is read "
                   "again and unreadable files are reported twice.")
@click.option("--verbose", "-v", count=True, help="Increase log verbosity.")
@click.version_option(package_name="naive-spam-bayes")
def main(corpus: Path, folds: int, output: str, top_tokens: int, verbose: int) -> None:
    """Cross-validate a Naive Bayes spam filter on CORPUS.

    CORPUS is the root of a pre-tokenized corpus with part1..partN fold
    directories. Spam files contain "spmsg" in their name; anything
    under an "unused" directory is ignored.

    Example: naive-spam-bayes PU1/
    """
    _setup_logging(verbose)

    try:
        documents = load_corpus(corpus)
    except CorpusNotFoundError:
        err_console.print("[bold red]Error:[/] Directory not found!")
        sys.exit(1)

    def announce(fold: int, k: int) -> None:
        err_console.print(f"Now starting fold number {fold}")

    try:
        result = cross_validate(documents, k=folds, progress=announce)
        top = []
        if top_tokens:
            model, _ = train_documents(usable(documents))
            top = most_informative_tokens(model, Label.SPAM, top_tokens)
    except SpamBayesError as e:
        err_console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    if output == "json":
        data = result.to_dict()
        if top:
            data["top_spam_tokens"] = [{"token": t, "score": s} for t, s in top]
        click.echo(json.dumps(data, indent=2))
    else:
        _render_result(result, corpus)
        if top:
            _render_tokens(top)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _fmt(value: Optional[float]) -> str:
    return format_metric(value, undefined="[dim]undefined[/]")


def _render_result(result: CrossValidationResult, corpus: Path) -> None:
    """Render per-fold metrics and the averaged scores."""
    console.print()

    table = Table(title=f"Cross-validation: {corpus}", show_lines=False)
    table.add_column("Fold", justify="right", width=5)
    table.add_column("Train", justify="right")
    table.add_column("Test", justify="right")
    table.add_column("TP", justify="right", style="green")
    table.add_column("FP", justify="right", style="red")
    table.add_column("FN", justify="right", style="yellow")
    table.add_column("TN", justify="right")
    table.add_column("Recall", justify="right", style="cyan")
    table.add_column("Precision", justify="right", style="cyan")

    for f in result.folds:
        c = f.counts
        table.add_row(
            str(f.fold),
            str(f.train_size),
            str(f.test_size) + (f" ({len(f.skipped)} skipped)" if f.skipped else ""),
            str(c.true_positive),
            str(c.false_positive),
            str(c.false_negative),
            str(c.true_negative),
            _fmt(f.recall),
            _fmt(f.precision),
        )

    console.print(table)
    console.print(Panel(
        f"Spam recall: [bold]{_fmt(result.mean_recall)}[/]\n"
        f"Spam precision: [bold]{_fmt(result.mean_precision)}[/]",
        title=f"Mean over {result.k} folds",
        border_style="blue",
    ))
    console.print()


def _render_tokens(top: list[tuple[int, float]]) -> None:
    """Render the most spam-indicative tokens as a table."""
    table = Table(title="Most spam-indicative tokens")
    table.add_column("#", justify="right", width=4)
    table.add_column("Token", justify="right", style="cyan")
    table.add_column("log10 ratio", justify="right")

    for i, (token, score) in enumerate(top, 1):
        table.add_row(str(i), str(token), f"{score:+.4f}")

    console.print(table)
    console.print()


if __name__ == "__main__":
    main()
