"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from mdbundle.cli import main

GOOD_DOC = "# Closures\n\n## Contents\n\n- [Syntax](#syntax)\n\n## Syntax\n\n```swift\nlet f = { (x: Int) in x * 2 }\n```\n"
DANGLING_DOC = "# Operators\n\n## Contents\n\n- [Infix](#infix-operator)\n\n## Infix Operators\n"
BROKEN_DOC = "# Broken\n\n```\nnever closed\n"


@pytest.fixture
def docs(tmp_path: Path) -> Path:
    directory = tmp_path / "docs"
    directory.mkdir()
    (directory / "closures.md").write_text(GOOD_DOC, encoding="utf-8")
    (directory / "operators.md").write_text(DANGLING_DOC, encoding="utf-8")
    return directory


class TestMain:
    """Tests for the main entry point."""

    def test_writes_markdown_to_stdout(self, docs: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Default output is Markdown on stdout."""
        exit_code = main([str(docs), "-o", "-"])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert "let f = { (x: Int) in x * 2 }\n" in captured.out
        assert "## Contents\n- Closures\n" in captured.out
        assert "#infix-operator" in captured.err

    def test_writes_html_per_document(self, docs: Path, tmp_path: Path) -> None:
        """Per-document HTML lands in the output directory."""
        out = tmp_path / "site"

        exit_code = main([str(docs), "-o", str(out), "--format", "html", "--layout", "per-document", "-q"])

        assert exit_code == 0
        assert sorted(path.name for path in out.iterdir()) == ["closures.html", "operators.html"]

    def test_failure_writes_nothing(self, docs: Path, tmp_path: Path) -> None:
        """A broken document fails the run and blocks output."""
        (docs / "broken.md").write_text(BROKEN_DOC, encoding="utf-8")
        out = tmp_path / "bundle.md"

        exit_code = main([str(docs), "-o", str(out), "-q"])

        assert exit_code == 1
        assert not out.exists()

    def test_partial_writes_healthy_documents(self, docs: Path, tmp_path: Path) -> None:
        """--partial writes what rendered but still fails."""
        (docs / "broken.md").write_text(BROKEN_DOC, encoding="utf-8")
        out = tmp_path / "bundle.md"

        exit_code = main([str(docs), "-o", str(out), "--partial", "-q"])

        assert exit_code == 1
        content = out.read_text(encoding="utf-8")
        assert "# Closures" in content
        assert "# Broken" not in content

    def test_check_mode_writes_nothing(self, docs: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """--check validates without producing output."""
        exit_code = main([str(docs), "--check", "-o", "-"])

        assert exit_code == 0
        assert capsys.readouterr().out == ""

    def test_strict_toc_fails_dangling_links(self, docs: Path) -> None:
        """--strict-toc turns unresolved entries into failures."""
        assert main([str(docs), "--check", "--strict-toc", "-q"]) == 1

    def test_missing_input_fails(self, tmp_path: Path) -> None:
        """A missing path is reported with exit status 1."""
        assert main([str(tmp_path / "missing"), "-q"]) == 1

    def test_unwritable_output_fails(self, docs: Path, tmp_path: Path) -> None:
        """A RenderError maps to exit status 1."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file")

        assert main([str(docs), "-o", str(blocker / "out.md"), "-q"]) == 1

    def test_input_from_environment(self, docs: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """MDBUNDLE_INPUT_PATH is used when no paths are given."""
        with patch("mdbundle.cli.MDBUNDLE_INPUT_PATH", str(docs)):
            exit_code = main(["-o", "-", "-q"])

        assert exit_code == 0
        assert "# Closures" in capsys.readouterr().out

    def test_no_input_is_usage_error(self) -> None:
        """Without paths or environment the parser exits with status 2."""
        with patch("mdbundle.cli.MDBUNDLE_INPUT_PATH", None):
            with pytest.raises(SystemExit) as excinfo:
                main([])
        assert excinfo.value.code == 2

    def test_negative_heading_skip_is_usage_error(self, docs: Path) -> None:
        """--max-heading-skip must not be negative."""
        with pytest.raises(SystemExit) as excinfo:
            main([str(docs), "--max-heading-skip", "-1"])
        assert excinfo.value.code == 2

    def test_per_document_layout_to_stdout_is_usage_error(self, docs: Path) -> None:
        """Separate outputs cannot share standard output."""
        with pytest.raises(SystemExit) as excinfo:
            main([str(docs), "--format", "html", "--layout", "per-document", "-o", "-"])
        assert excinfo.value.code == 2

    def test_per_document_layout_with_check_needs_no_directory(self, docs: Path) -> None:
        """--check writes nothing, so stdout is accepted."""
        assert main([str(docs), "--layout", "per-document", "-o", "-", "--check", "-q"]) == 0
