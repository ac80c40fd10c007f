"""Corpus reader for pre-tokenized, fold-partitioned spam corpora.

Expects the layout of the PU corpora: each message is a text file of
whitespace-separated integer token IDs, messages are grouped into
``part1`` .. ``partN`` directories, spam messages have ``spmsg`` in their
file name, and anything under an ``unused`` directory is held out of the
experiment entirely.

Example layout::

    PU1/
        bare/
            part1/
                3-1msg1.txt
                spmsga1.txt
            part2/
                ...
        unused/
            ...
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import CorpusNotFoundError, UnreadableDocumentError
from .models import Document

logger = logging.getLogger(__name__)


@dataclass
class CorpusLayout:
    """Naming conventions used to derive labels and folds from paths.

    Args:
        spam_marker: Substring of a relative path that marks spam.
        unused_marker: Substring of a path component that excludes a
            document from all folds.
        fold_pattern: Regex a directory name must match in full to
            assign a fold; group 1 is the fold number.
    """

    spam_marker: str = "spmsg"
    unused_marker: str = "unused"
    fold_pattern: str = r"part(\d+)"

    def __post_init__(self) -> None:
        self._fold_re = re.compile(self.fold_pattern)

    def is_spam(self, relative: Path) -> bool:
        return self.spam_marker in relative.as_posix()

    def is_unused(self, relative: Path) -> bool:
        return any(self.unused_marker in part for part in relative.parts)

    def fold_of(self, relative: Path) -> Optional[int]:
        """Return the fold number from the first matching directory name."""
        for part in relative.parts[:-1]:
            match = self._fold_re.fullmatch(part)
            if match:
                return int(match.group(1))
        return None


def iter_files(root: Path) -> Iterator[Path]:
    """Recursively yield every regular file below ``root`` in sorted order."""
    for path in sorted(root.rglob("*")):
        if path.is_file():
            yield path


_TOKEN_RE = re.compile(r"\+?[0-9]+")

MAX_TOKEN_ID = 2**32 - 1


def parse_tokens(text: str) -> tuple[int, ...]:
    """Extract integer token IDs from whitespace-separated text.

    A token ID is an unsigned 32-bit integer, optionally written with a
    leading ``+``. Anything else (e.g. ``Subject:``, ``-3``, ``2.5`` or
    values above ``MAX_TOKEN_ID``) is dropped.
    """
    tokens = (int(w) for w in text.split() if _TOKEN_RE.fullmatch(w))
    return tuple(t for t in tokens if t <= MAX_TOKEN_ID)


def read_tokens(path: Path) -> tuple[int, ...]:
    """Read a document file and return its token IDs.

    Raises:
        UnreadableDocumentError: If the file cannot be read as UTF-8 text.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableDocumentError(str(path), exc) from exc
    return parse_tokens(text)


def describe(path: Path, root: Path, layout: CorpusLayout | None = None) -> Document:
    """Build a lazily tokenized :class:`Document` for a file under ``root``."""
    layout = layout or CorpusLayout()
    relative = path.relative_to(root)
    return Document(
        identifier=relative.as_posix(),
        is_spam=layout.is_spam(relative),
        fold=layout.fold_of(relative),
        unused=layout.is_unused(relative),
        path=path,
    )


def load_corpus(root: str | Path, layout: CorpusLayout | None = None) -> list[Document]:
    """Enumerate every document under a corpus root.

    Files are only described here; their tokens are read when a
    document is trained on or classified.

    Args:
        root: Corpus root directory.
        layout: Naming conventions (defaults to the PU corpus layout).

    Returns:
        Documents in sorted path order, including ``unused`` ones.

    Raises:
        CorpusNotFoundError: If ``root`` is not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise CorpusNotFoundError(root)

    layout = layout or CorpusLayout()
    documents = [describe(path, root, layout) for path in iter_files(root)]

    logger.debug(
        "Loaded %d documents from %s (%d spam, %d unused)",
        len(documents),
        root,
        sum(1 for d in documents if d.is_spam),
        sum(1 for d in documents if d.unused),
    )
    return documents
