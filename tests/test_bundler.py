"""Tests for the bundling pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mdbundle.bundler import BundleOptions, bundle_paths, bundle_texts, process_text
from mdbundle.exceptions import BundleError, SourceError

MISMATCHED_DOC = """\
# Functions

## Contents

- [Named Parameters](#named-arguments)

## Named Parameters

```swift
greet(person: "Bill", from: "Cupertino")
```
"""

UNTERMINATED_DOC = "# Broken\n\n```swift\nlet x = 1\n"

AMBIGUOUS_DOC = "# Dupes\n\n## Overview\n\n## Overview\n\n## Overview 1\n"


class TestProcessText:
    """Tests for process_text function."""

    def test_healthy_document(self, named_parameters_doc: str) -> None:
        """A well-formed document yields a document and a report."""
        outcome = process_text(named_parameters_doc, source="named.md")
        assert outcome.document is not None
        assert outcome.report is not None and outcome.report.ok
        assert outcome.failure is None

    def test_parse_error_becomes_failure(self) -> None:
        """ParseError is captured with its line."""
        outcome = process_text(UNTERMINATED_DOC, source="broken.md")
        assert outcome.document is None
        assert outcome.failure.kind == "parse"
        assert outcome.failure.document == "Broken"
        assert outcome.failure.line == 3

    def test_ambiguous_anchor_becomes_failure(self) -> None:
        """AmbiguousAnchorError is captured."""
        outcome = process_text(AMBIGUOUS_DOC, source="dupes.md")
        assert outcome.failure.kind == "ambiguous_anchor"
        assert "overview-1" in outcome.failure.message

    def test_unresolved_entries_are_not_failures_by_default(self) -> None:
        """Unresolved entries are warnings unless strict."""
        outcome = process_text(MISMATCHED_DOC)
        assert outcome.failure is None
        assert len(outcome.report.unresolved) == 1

    def test_strict_toc_fails_unresolved(self) -> None:
        """strict_toc turns unresolved entries into a failure."""
        outcome = process_text(MISMATCHED_DOC, options=BundleOptions(strict_toc=True))
        assert outcome.document is None
        assert outcome.failure.kind == "unresolved_toc"
        assert outcome.failure.line == 5


class TestBundleTexts:
    """Tests for bundle_texts function."""

    @pytest.mark.asyncio
    async def test_unresolved_entry_still_renders(self, caplog: pytest.LogCaptureFixture) -> None:
        """A dangling contents link is reported and the document rendered."""
        with caplog.at_level(logging.WARNING, logger="mdbundle"):
            report = await bundle_texts([("functions.md", MISMATCHED_DOC)])

        assert report.ok
        assert [entry.anchor for entry in report.warnings] == ["named-arguments"]
        assert "#named-arguments" in caplog.text
        assert len(report.result.outputs) == 1
        assert 'greet(person: "Bill", from: "Cupertino")\n' in report.result.outputs[0].content

    @pytest.mark.asyncio
    async def test_failures_do_not_block_other_documents(self, named_parameters_doc: str) -> None:
        """Broken documents are reported; healthy ones are rendered."""
        report = await bundle_texts(
            [
                ("named.md", named_parameters_doc),
                ("broken.md", UNTERMINATED_DOC),
                ("dupes.md", AMBIGUOUS_DOC),
            ]
        )

        assert not report.ok
        assert [failure.kind for failure in report.failures] == ["parse", "ambiguous_anchor"]
        assert [document.title for document in report.documents] == ["Named Parameters"]
        assert "# Named Parameters" in report.result.outputs[0].content

    @pytest.mark.asyncio
    async def test_raise_for_failures(self) -> None:
        """raise_for_failures raises BundleError with the failures."""
        report = await bundle_texts([("broken.md", UNTERMINATED_DOC)])

        with pytest.raises(BundleError) as excinfo:
            report.raise_for_failures()
        assert excinfo.value.failures == tuple(report.failures)

    @pytest.mark.asyncio
    async def test_keeps_input_order(self) -> None:
        """Concurrent processing preserves input order."""
        texts = [(f"doc{i}.md", f"# Doc {i}\n\nBody {i}.\n") for i in range(8)]
        report = await bundle_texts(texts, options=BundleOptions(layout="per-document"))

        assert [document.title for document in report.documents] == [f"Doc {i}" for i in range(8)]
        assert [output.name for output in report.result.outputs] == [f"doc{i}.md" for i in range(8)]

    @pytest.mark.asyncio
    async def test_html_output(self, named_parameters_doc: str) -> None:
        """Options select the rendered format."""
        report = await bundle_texts(
            [("named.md", named_parameters_doc)], options=BundleOptions(output_format="html", title="Tour")
        )
        assert report.result.outputs[0].name == "tour.html"
        assert report.result.outputs[0].content.startswith("<!DOCTYPE html>")


@pytest.mark.integration
class TestBundlePaths:
    """Tests for bundle_paths function."""

    @pytest.mark.asyncio
    async def test_bundles_directory(self, tmp_path: Path, named_parameters_doc: str) -> None:
        """Markdown files in a directory are bundled in sorted order."""
        docs = tmp_path / "docs"
        (docs / "nested").mkdir(parents=True)
        (docs / "b_named.md").write_text(named_parameters_doc, encoding="utf-8")
        (docs / "nested" / "a_enum.markdown").write_text("# Enums\n", encoding="utf-8")
        (docs / "notes.txt").write_text("# Ignored\n", encoding="utf-8")

        report = await bundle_paths([docs])

        assert report.ok
        assert [document.title for document in report.documents] == ["Named Parameters", "Enums"]

    @pytest.mark.asyncio
    async def test_missing_path_raises(self, tmp_path: Path) -> None:
        """A missing input aborts the run."""
        with pytest.raises(SourceError, match="not found"):
            await bundle_paths([tmp_path / "missing.md"])

