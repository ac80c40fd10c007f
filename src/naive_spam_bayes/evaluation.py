"""K-fold cross-validation over a fold-partitioned document collection.

Each fold trains a fresh model on every usable document outside the fold
and tests on the documents inside it. Spam recall and precision are
computed per fold and averaged across folds.

When a fold has no actual spam (recall) or predicts no spam
(precision), that metric is undefined for the fold: it is reported as
``None`` and left out of the corresponding mean.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Optional

from .classifier import ProbabilityModel, classify, train_documents
from .exceptions import UnreadableDocumentError
from .models import CrossValidationResult, Document, FoldResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def usable(documents: Iterable[Document]) -> list[Document]:
    """Drop documents marked unused."""
    return [doc for doc in documents if not doc.unused]


def partition(
    documents: Sequence[Document],
    fold: int,
) -> tuple[list[Document], list[Document]]:
    """Split documents into ``(train, test)`` for one fold."""
    train: list[Document] = []
    test: list[Document] = []
    for doc in documents:
        (test if doc.fold == fold else train).append(doc)
    return train, test


def evaluate_fold(
    fold: int,
    model: ProbabilityModel,
    test: Iterable[Document],
) -> FoldResult:
    """Classify every test document and tally the confusion counts.

    Unreadable documents are logged and skipped; they count as no outcome
    and are left out of ``test_size``, matching ``train_size``.
    """
    result = FoldResult(fold=fold)
    for doc in test:
        try:
            tokens = doc.load_tokens()
        except UnreadableDocumentError as exc:
            logger.warning("Skipping test document %s: %s", doc.identifier, exc.cause)
            result.skipped.append(doc.identifier)
            continue
        result.test_size += 1
        result.counts.record(classify(tokens, model), doc.is_spam)
    return result


def _mean(values: Iterable[Optional[float]]) -> Optional[float]:
    defined = [v for v in values if v is not None]
    return sum(defined) / len(defined) if defined else None


def cross_validate(
    documents: Iterable[Document],
    k: int = 10,
    progress: Optional[ProgressCallback] = None,
) -> CrossValidationResult:
    """Run k-fold cross-validation with folds numbered ``1..k``.

    Args:
        documents: All documents, including unused ones (which are
            excluded here).
        k: Number of folds.
        progress: Optional callback invoked as ``progress(fold, k)``
            before each fold starts.

    Returns:
        Per-fold results plus mean spam recall and precision.

    Raises:
        ValueError: If ``k`` is less than 1.
        EmptyTrainingSetError: If a fold leaves nothing to train on.
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")

    docs = usable(documents)
    untested = sum(1 for doc in docs if doc.fold not in range(1, k + 1))
    if untested:
        logger.warning(
            "%d usable documents have no fold in 1..%d and will only be trained on",
            untested,
            k,
        )
    folds: list[FoldResult] = []

    for fold in range(1, k + 1):
        if progress is not None:
            progress(fold, k)

        train, test = partition(docs, fold)
        logger.debug("Fold %d: %d training, %d test documents", fold, len(train), len(test))
        model, skipped = train_documents(train)

        result = evaluate_fold(fold, model, test)
        result.train_size = len(train) - len(skipped)

        if result.recall is None:
            logger.warning("Fold %d: recall undefined (no spam in test set)", fold)
        if result.precision is None:
            logger.warning("Fold %d: precision undefined (no spam predicted)", fold)
        folds.append(result)

    return CrossValidationResult(
        folds=folds,
        mean_recall=_mean(f.recall for f in folds),
        mean_precision=_mean(f.precision for f in folds),
    )
