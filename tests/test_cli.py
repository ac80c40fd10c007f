"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from naive_spam_bayes.cli import main


class TestCli:
    """Tests for argument handling and output formats."""

    def test_missing_argument_prints_usage(self):
        result = CliRunner().invoke(main, [])
        assert result.exit_code == 2
        assert "Usage:" in result.output

    def test_extra_argument_prints_usage(self, corpus_dir: Path):
        result = CliRunner().invoke(main, [str(corpus_dir), "extra"])
        assert result.exit_code == 2
        assert "Usage:" in result.output

    def test_not_a_directory(self, tmp_path: Path):
        result = CliRunner().invoke(main, [str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Directory not found!" in result.output
        assert "Now starting fold" not in result.output

    def test_rich_output(self, corpus_dir: Path):
        result = CliRunner().invoke(main, ["--folds", "2", str(corpus_dir)])
        assert result.exit_code == 0, result.output
        assert "Now starting fold number 1" in result.output
        assert "Now starting fold number 2" in result.output
        assert "Spam recall: 1.0000" in result.output
        assert "Spam precision: 1.0000" in result.output

    def test_json_output(self, corpus_dir: Path):
        result = CliRunner().invoke(main, ["-k", "2", "-o", "json", str(corpus_dir)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["k"] == 2
        assert data["mean_recall"] == 1.0
        assert data["mean_precision"] == 1.0
        assert [f["fold"] for f in data["folds"]] == [1, 2]

    def test_default_ten_folds(self, corpus_dir: Path):
        result = CliRunner().invoke(main, ["-o", "json", str(corpus_dir)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["k"] == 10
        # Folds 3..10 are empty: both metrics undefined there
        assert data["folds"][2]["recall"] is None
        assert data["mean_recall"] == 1.0

    def test_top_tokens(self, corpus_dir: Path):
        result = CliRunner().invoke(
            main, ["-k", "2", "-o", "json", "--top-tokens", "3", str(corpus_dir)]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        tokens = [entry["token"] for entry in data["top_spam_tokens"]]
        assert len(tokens) == 3
        assert set(tokens) <= {10, 11, 12}

    def test_zero_folds_rejected(self, corpus_dir: Path):
        result = CliRunner().invoke(main, ["-k", "0", str(corpus_dir)])
        assert result.exit_code == 2

    def test_top_tokens_help_mentions_extra_pass(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "read again" in " ".join(result.output.split())
