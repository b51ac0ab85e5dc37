"""
Unit tests for context building, truncation and the prompt template.
"""

import pytest

from filecontext.llm.prompts import (
    TRUNCATION_MARKER,
    build_context,
    build_prompt,
    format_context_prompt,
    truncate_context,
)
from filecontext.models.file_record import FileKind


class TestBuildContext:
    """Test cases for record filtering and concatenation."""

    def test_concatenates_in_input_order(self, make_record):
        records = [
            make_record("b.md", "second"),
            make_record("a.txt", "first"),
        ]
        assert build_context(records) == "File: b.md\nsecond\n\nFile: a.txt\nfirst"

    def test_unrecognized_extension_excluded_even_with_content(self, make_record):
        records = [
            make_record("image.bin", "looks like text"),
            make_record("notes.md", "kept"),
        ]
        assert build_context(records) == "File: notes.md\nkept"

    def test_records_without_content_excluded(self, make_record):
        records = [
            make_record("docs", None, kind=FileKind.DIRECTORY),
            make_record("empty.txt", ""),
            make_record("listed.py", None),
            make_record("main.py", "print(1)"),
        ]
        assert build_context(records) == "File: main.py\nprint(1)"

    def test_directory_with_text_like_name_excluded(self, make_record):
        records = [
            make_record("docs.md", "not file content", kind=FileKind.DIRECTORY),
            make_record("notes.md", "kept"),
        ]
        assert build_context(records) == "File: notes.md\nkept"

    def test_extension_match_is_case_insensitive(self, make_record):
        assert build_context([make_record("README.MD", "x")]) == "File: README.MD\nx"

    def test_empty_input(self):
        assert build_context([]) == ""


class TestTruncateContext:
    """Test cases for truncate_context."""

    def test_short_content_unchanged(self):
        assert truncate_context("short", 100) == "short"

    def test_exact_limit_unchanged(self):
        text = "x" * 100
        assert truncate_context(text, 100) == text

    def test_idempotent_within_limit(self):
        text = "line one\nline two"
        once = truncate_context(text, 50)
        assert truncate_context(once, 50) == once == text

    def test_cuts_at_late_newline(self):
        # newline at offset 90 of a 100-char budget
        text = "a" * 90 + "\n" + "b" * 50
        result = truncate_context(text, 100)
        assert result == "a" * 90 + TRUNCATION_MARKER

    def test_hard_cut_when_newline_is_early(self):
        # newline at offset 10, well before 80%
        text = "a" * 10 + "\n" + "b" * 200
        result = truncate_context(text, 100)
        assert result == text[:100] + TRUNCATION_MARKER

    def test_newline_exactly_at_threshold_is_not_used(self):
        text = "a" * 80 + "\n" + "b" * 100
        result = truncate_context(text, 100)
        assert result == text[:100] + TRUNCATION_MARKER

    def test_no_newline_hard_cut(self):
        result = truncate_context("z" * 5000)
        assert result == "z" * 4000 + TRUNCATION_MARKER

    @pytest.mark.parametrize("limit", [10, 64, 100, 1000])
    def test_bounds_on_long_content(self, limit):
        text = "\n".join("line %d %s" % (i, "x" * (i % 13)) for i in range(500))
        result = truncate_context(text, limit)

        assert result.endswith(TRUNCATION_MARKER)
        assert len(result) <= limit + len(TRUNCATION_MARKER)

        kept = result[: -len(TRUNCATION_MARKER)]
        assert text.startswith(kept)
        # Cut at the hard limit or at a newline past 80% of it
        assert len(kept) == limit or (
            len(kept) > limit * 0.8 and text[len(kept)] == "\n"
        )


class TestPromptTemplate:
    """Test cases for the prompt template and build_prompt."""

    def test_template_layout(self):
        prompt = format_context_prompt("CTX", "What is this?")

        assert "You are an AI assistant analyzing the following content:" in prompt
        assert "---BEGIN CONTEXT---\nCTX\n---END CONTEXT---" in prompt
        assert "Please respond to the following query:\nWhat is this?" in prompt
        assert prompt.rstrip().endswith(
            "Base your response only on the information provided in the context above."
        )

    def test_braces_in_content_are_literal(self):
        prompt = format_context_prompt("{query} {0}", "q")
        assert "---BEGIN CONTEXT---\n{query} {0}\n---END CONTEXT---" in prompt

    def test_build_prompt_returns_raw_and_truncated(self, make_record):
        long_content = "y" * 300
        built = build_prompt([make_record("big.txt", long_content)], "summarize", max_length=100)

        assert built.raw_context == "File: big.txt\n" + long_content
        assert TRUNCATION_MARKER in built.prompt
        assert long_content not in built.prompt
        assert "summarize" in built.prompt

    def test_build_prompt_empty_records(self):
        built = build_prompt([], "anything")
        assert built.raw_context == ""
        assert "---BEGIN CONTEXT---\n\n---END CONTEXT---" in built.prompt
