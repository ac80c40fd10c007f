"""Exception types raised by the spam classifier pipeline."""

from __future__ import annotations


class SpamBayesError(Exception):
    """Base class for all naive-spam-bayes errors."""


class CorpusNotFoundError(SpamBayesError, FileNotFoundError):
    """The corpus root does not exist or is not a directory."""

    def __init__(self, root: object) -> None:
        super().__init__(f"Directory not found: {root}")
        self.root = root


class UnreadableDocumentError(SpamBayesError, OSError):
    """A document could not be read or tokenized.

    Recoverable: callers log it and skip the document.
    """

    def __init__(self, identifier: str, cause: BaseException | str) -> None:
        super().__init__(f"Cannot read {identifier}: {cause}")
        self.identifier = identifier
        self.cause = cause


class EmptyTrainingSetError(SpamBayesError, ValueError):
    """Training was requested on zero usable documents."""
