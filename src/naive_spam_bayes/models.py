"""Data models for spam classification and cross-validation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class Label(str, Enum):
    """The two document classes."""

    SPAM = "spam"
    LEGIT = "legit"

    @classmethod
    def from_bool(cls, is_spam: bool) -> "Label":
        return cls.SPAM if is_spam else cls.LEGIT


@dataclass(frozen=True)
class Document:
    """A labeled document, tokenized in memory or backed by a file.

    Fold membership and the true label are explicit fields. Documents
    built by :func:`naive_spam_bayes.corpus.load_corpus` carry a ``path``
    and are tokenized on demand; documents built in code usually carry
    ``tokens`` directly.

    Attributes:
        identifier: Human-readable name used in logs and results.
        is_spam: True label of the document.
        fold: Fold index (1-based) whose test set holds this document,
            or ``None`` if it never appears in a test set.
        unused: Excluded from every fold when set.
        tokens: Pre-tokenized content, if available.
        path: File to tokenize when ``tokens`` is ``None``.
    """

    identifier: str
    is_spam: bool
    fold: Optional[int] = None
    unused: bool = False
    tokens: Optional[tuple[int, ...]] = None
    path: Optional[Path] = None

    @property
    def label(self) -> Label:
        return Label.from_bool(self.is_spam)

    def load_tokens(self) -> tuple[int, ...]:
        """Return the document's token IDs.

        Raises:
            UnreadableDocumentError: If the backing file cannot be read,
                or the document has neither tokens nor a path.
        """
        if self.tokens is not None:
            return self.tokens

        from .corpus import read_tokens
        from .exceptions import UnreadableDocumentError

        if self.path is None:
            raise UnreadableDocumentError(self.identifier, "no tokens and no source path")
        return read_tokens(self.path)


@dataclass
class ConfusionCounts:
    """Spam-vs-legit confusion counts for one fold (spam is the positive class)."""

    true_positive: int = 0
    false_positive: int = 0
    false_negative: int = 0
    true_negative: int = 0

    def record(self, predicted_spam: bool, actual_spam: bool) -> None:
        """Increment the counter matching a single prediction."""
        if predicted_spam and actual_spam:
            self.true_positive += 1
        elif predicted_spam:
            self.false_positive += 1
        elif actual_spam:
            self.false_negative += 1
        else:
            self.true_negative += 1

    @property
    def total(self) -> int:
        return (
            self.true_positive + self.false_positive
            + self.false_negative + self.true_negative
        )

    @property
    def recall(self) -> Optional[float]:
        """Spam recall, or ``None`` if the fold holds no actual spam."""
        denominator = self.true_positive + self.false_negative
        return self.true_positive / denominator if denominator > 0 else None

    @property
    def precision(self) -> Optional[float]:
        """Spam precision, or ``None`` if nothing was predicted as spam."""
        denominator = self.true_positive + self.false_positive
        return self.true_positive / denominator if denominator > 0 else None

    def to_dict(self) -> dict:
        return {
            "true_positive": self.true_positive,
            "false_positive": self.false_positive,
            "false_negative": self.false_negative,
            "true_negative": self.true_negative,
        }


def _round(value: Optional[float]) -> Optional[float]:
    return round(value, 4) if value is not None else None


def format_metric(value: Optional[float], undefined: str = "undefined") -> str:
    """Format a recall or precision value, which may be undefined."""
    return f"{value:.4f}" if value is not None else undefined


@dataclass
class FoldResult:
    """Outcome of a single cross-validation fold."""

    fold: int
    counts: ConfusionCounts = field(default_factory=ConfusionCounts)
    train_size: int = 0
    test_size: int = 0
    skipped: list[str] = field(default_factory=list)  # unreadable test documents

    @property
    def recall(self) -> Optional[float]:
        return self.counts.recall

    @property
    def precision(self) -> Optional[float]:
        return self.counts.precision

    def to_dict(self) -> dict:
        return {
            "fold": self.fold,
            "train_size": self.train_size,
            "test_size": self.test_size,
            "recall": _round(self.recall),
            "precision": _round(self.precision),
            "counts": self.counts.to_dict(),
            "skipped": list(self.skipped),
        }


@dataclass
class CrossValidationResult:
    """Per-fold results plus the fold-averaged spam recall and precision.

    A mean is ``None`` when no fold defines the corresponding metric.
    """

    folds: list[FoldResult] = field(default_factory=list)
    mean_recall: Optional[float] = None
    mean_precision: Optional[float] = None

    @property
    def k(self) -> int:
        return len(self.folds)

    def as_tuple(self) -> tuple[Optional[float], Optional[float]]:
        """Return ``(mean_recall, mean_precision)``."""
        return self.mean_recall, self.mean_precision

    def to_dict(self) -> dict:
        return {
            "k": self.k,
            "mean_recall": _round(self.mean_recall),
            "mean_precision": _round(self.mean_precision),
            "folds": [f.to_dict() for f in self.folds],
        }

    def summary(self) -> str:
        """Human-readable summary of the run."""
        lines = [
            f"{'Fold':>4} {'Train':>7} {'Test':>6} {'Recall':>10} {'Precision':>10}",
            "-" * 41,
        ]
        for f in self.folds:
            lines.append(
                f"{f.fold:>4} {f.train_size:>7} {f.test_size:>6} "
                f"{format_metric(f.recall):>10} {format_metric(f.precision):>10}"
            )
        lines.append("")
        lines.append(f"Spam recall: {format_metric(self.mean_recall)}")
        lines.append(f"Spam precision: {format_metric(self.mean_precision)}")
        return "\n".join(lines)
