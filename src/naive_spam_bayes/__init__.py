"""Naive Bayes spam filtering with k-fold cross-validation."""

__version__ = "0.1.0"

from .classifier import (
    ProbabilityModel,
    classify,
    log_scores,
    most_informative_tokens,
    train,
    train_documents,
)
from .corpus import CorpusLayout, load_corpus, parse_tokens, read_tokens
from .evaluation import cross_validate, partition
from .exceptions import (
    CorpusNotFoundError,
    EmptyTrainingSetError,
    SpamBayesError,
    UnreadableDocumentError,
)
from .models import (
    ConfusionCounts,
    CrossValidationResult,
    Document,
    FoldResult,
    Label,
)

__all__ = [
    # Model
    "ProbabilityModel",
    "train",
    "train_documents",
    "classify",
    "log_scores",
    "most_informative_tokens",
    # Corpus
    "CorpusLayout",
    "load_corpus",
    "parse_tokens",
    "read_tokens",
    # Evaluation
    "cross_validate",
    "partition",
    "ConfusionCounts",
    "CrossValidationResult",
    "FoldResult",
    # Data
    "Document",
    "Label",
    # Errors
    "SpamBayesError",
    "CorpusNotFoundError",
    "UnreadableDocumentError",
    "EmptyTrainingSetError",
]
