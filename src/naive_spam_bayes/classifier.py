"""Two-class multinomial Naive Bayes over integer token IDs.

Training estimates class priors and Laplace-smoothed (add-one) token
likelihoods; classification compares log10 posterior scores. Working in
the log domain keeps long documents from underflowing to zero.

Example::

    model = train([([1, 2], True), ([4], False)])
    classify([1, 2, 7], model)   # True (spam)
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from .exceptions import EmptyTrainingSetError, UnreadableDocumentError
from .models import Document, Label

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Probability Model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProbabilityModel:
    """Class priors and per-token conditional probabilities.

    Every token of the training vocabulary has an entry in both
    ``word_spam`` and ``word_legit``, and every entry is strictly positive.

    Attributes:
        p_spam: Prior probability of spam.
        p_legit: Prior probability of legit.
        word_spam: ``P(token | spam)`` for each vocabulary token.
        word_legit: ``P(token | legit)`` for each vocabulary token.
    """

    p_spam: float
    p_legit: float
    word_spam: Mapping[int, float] = field(default_factory=dict, repr=False)
    word_legit: Mapping[int, float] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        # Read-only views over the probability maps
        for name in ("word_spam", "word_legit"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    @property
    def vocabulary(self) -> frozenset[int]:
        return frozenset(self.word_spam)

    def __len__(self) -> int:
        return len(self.word_spam)

    def prior(self, label: Label) -> float:
        return self.p_spam if label is Label.SPAM else self.p_legit

    def likelihoods(self, label: Label) -> Mapping[int, float]:
        return self.word_spam if label is Label.SPAM else self.word_legit

    def to_dict(self) -> dict:
        """Summarize the model for display."""
        return {
            "p_spam": self.p_spam,
            "p_legit": self.p_legit,
            "vocabulary_size": len(self),
        }


# ---------------------------------------------------------------------------
# Training
# ---------------------------------------------------------------------------

def train(examples: Iterable[tuple[Sequence[int], bool]]) -> ProbabilityModel:
    """Estimate a :class:`ProbabilityModel` from labeled token sequences.

    ``P(t|c) = (1 + occurrences of t in c) / (tokens in c + |V|)`` where
    ``V`` is the vocabulary of both classes combined.

    Args:
        examples: ``(tokens, is_spam)`` pairs. Repeated tokens count
            once per occurrence.

    Returns:
        The trained model.

    Raises:
        EmptyTrainingSetError: If ``examples`` is empty.
    """
    doc_counts: Counter[bool] = Counter()
    occurrences: dict[bool, Counter[int]] = {True: Counter(), False: Counter()}

    for tokens, is_spam in examples:
        is_spam = bool(is_spam)
        doc_counts[is_spam] += 1
        occurrences[is_spam].update(tokens)

    total = doc_counts[True] + doc_counts[False]
    if total == 0:
        raise EmptyTrainingSetError("Cannot train on an empty training set")

    vocabulary = occurrences[True].keys() | occurrences[False].keys()
    vocab_size = len(vocabulary)

    # Denominator includes |V| once per class (add-one smoothing)
    spam_divisor = sum(occurrences[True].values()) + vocab_size
    legit_divisor = sum(occurrences[False].values()) + vocab_size

    word_spam = {t: (1 + occurrences[True][t]) / spam_divisor for t in vocabulary}
    word_legit = {t: (1 + occurrences[False][t]) / legit_divisor for t in vocabulary}

    return ProbabilityModel(
        p_spam=doc_counts[True] / total,
        p_legit=doc_counts[False] / total,
        word_spam=MappingProxyType(word_spam),
        word_legit=MappingProxyType(word_legit),
    )


def train_documents(documents: Iterable[Document]) -> tuple[ProbabilityModel, list[str]]:
    """Train on :class:`Document` objects, skipping unreadable ones.

    Returns:
        The model and the identifiers of documents that were skipped.

    Raises:
        EmptyTrainingSetError: If no document could be read.
    """
    skipped: list[str] = []

    def readable() -> Iterable[tuple[Sequence[int], bool]]:
        for doc in documents:
            try:
                tokens = doc.load_tokens()
            except UnreadableDocumentError as exc:
                logger.warning("Skipping training document %s: %s", doc.identifier, exc.cause)
                skipped.append(doc.identifier)
                continue
            yield tokens, doc.is_spam

    model = train(readable())
    logger.debug(
        "Trained model: p_spam=%.4f, vocabulary=%d tokens", model.p_spam, len(model)
    )
    return model, skipped


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def _log10(p: float) -> float:
    # A class absent from training has prior 0
    return math.log10(p) if p > 0 else -math.inf


def log_scores(tokens: Iterable[int], model: ProbabilityModel) -> tuple[float, float]:
    """Return ``(score_spam, score_legit)`` in log10 space.

    Tokens outside the model's vocabulary contribute nothing.
    """
    spam = _log10(model.p_spam)
    legit = _log10(model.p_legit)
    for token in tokens:
        p = model.word_spam.get(token)
        if p is not None:
            spam += math.log10(p)
        p = model.word_legit.get(token)
        if p is not None:
            legit += math.log10(p)
    return spam, legit


def classify(tokens: Iterable[int], model: ProbabilityModel) -> bool:
    """Return True if the tokens classify as spam. Ties go to spam."""
    spam, legit = log_scores(tokens, model)
    return spam >= legit


def most_informative_tokens(
    model: ProbabilityModel,
    label: Label = Label.SPAM,
    top_n: int = 20,
) -> list[tuple[int, float]]:
    """Rank tokens by how strongly they indicate ``label``.

    The score is ``log10 P(t|label) - log10 P(t|other)``.

    Returns:
        Up to ``top_n`` ``(token, score)`` pairs, highest score first.
        Ties are broken by token ID.
    """
    target = model.likelihoods(label)
    other = model.likelihoods(Label.LEGIT if label is Label.SPAM else Label.SPAM)

    ratios = [
        (token, round(math.log10(p) - math.log10(other[token]), 4))
        for token, p in target.items()
    ]
    ratios.sort(key=lambda x: (-x[1], x[0]))
    return ratios[:top_n]
