"""Shared test fixtures for naive-spam-bayes tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from naive_spam_bayes.models import Document


@pytest.fixture
def scenario_examples() -> list[tuple[list[int], bool]]:
    """Two spam and two legit token sequences with a small shared vocabulary."""
    return [
        ([1, 2], True),
        ([2, 3], True),
        ([4], False),
        ([4, 5], False),
    ]


@pytest.fixture
def folded_documents() -> list[Document]:
    """Two folds, each holding one spam and one legit document, plus an unused one."""
    return [
        Document("part1/spmsg1", is_spam=True, fold=1, tokens=(1, 2, 2)),
        Document("part1/legit1", is_spam=False, fold=1, tokens=(4, 5)),
        Document("part2/spmsg2", is_spam=True, fold=2, tokens=(1, 3)),
        Document("part2/legit2", is_spam=False, fold=2, tokens=(4, 4, 6)),
        Document("unused/spmsg9", is_spam=True, fold=None, unused=True, tokens=(4, 5, 6)),
    ]


def write_message(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """A two-fold PU-style corpus on disk, with a header line and an unused directory."""
    root = tmp_path / "PU1"
    write_message(root, "part1/spmsga1.txt", "Subject: 10 11\n\n10 11 12 10\n")
    write_message(root, "part1/3-1msg1.txt", "Subject: 20\n\n20 21 22\n")
    write_message(root, "part2/spmsga2.txt", "Subject: 11\n\n10 12 12\n")
    write_message(root, "part2/3-1msg2.txt", "Subject: 21\n\n20 22 22 21\n")
    write_message(root, "unused/spmsgz1.txt", "Subject: 20\n\n20 21 22 20 21\n")
    return root
