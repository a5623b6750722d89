"""Tests for vibe.llm.parsing module."""

from vibe.llm.parsing import (
    TITLE_RULES,
    PRContent,
    first_line_title,
    labelled_title,
    parse_commit_message,
    parse_description,
    parse_pr_content,
)


class TestParseCommitMessage:
    """Tests for parse_commit_message function."""

    def test_strips_whitespace_and_quotes(self):
        """Test that surrounding whitespace and quotes are removed."""
        assert parse_commit_message('  "Add x"  ') == "Add x"

    def test_strips_backticks_and_single_quotes(self):
        """Test that backticks and single quotes are removed too."""
        assert parse_commit_message("`Fix y`") == "Fix y"
        assert parse_commit_message("'Fix z'") == "Fix z"

    def test_unbalanced_quotes(self):
        """Test that each end is trimmed independently."""
        assert parse_commit_message('"Update docs') == "Update docs"

    def test_keeps_inner_text(self):
        """Test that quotes inside the message survive."""
        assert parse_commit_message('Rename "foo" to bar') == 'Rename "foo" to bar'

    def test_multiline_message(self):
        """Test that body lines are preserved."""
        text = "\nAdd parser\n\nHandles quoted titles.\n"
        assert parse_commit_message(text) == "Add parser\n\nHandles quoted titles."


class TestParsePRContent:
    """Tests for parse_pr_content function."""

    def test_labelled_reply(self):
        """Test the requested Title:/Description: format."""
        result = parse_pr_content("Title: Fix bug\n\nDescription:\nFixes it.")
        assert result == PRContent(title="Fix bug", description="Fixes it.")

    def test_unlabelled_reply(self):
        """Test that the first line is the title when there is no label."""
        result = parse_pr_content("Fix bug\n\nFixes it.")
        assert result == PRContent(title="Fix bug", description="Fixes it.")

    def test_label_is_case_insensitive(self):
        """Test lowercase and uppercase labels."""
        result = parse_pr_content("TITLE: Add cache\nDESCRIPTION: Speeds up reads.")
        assert result.title == "Add cache"
        assert result.description == "Speeds up reads."

    def test_quoted_title(self):
        """Test that quotes around the title are removed."""
        assert parse_pr_content('Title: "Add cache"\n\nBody').title == "Add cache"

    def test_markdown_heading_title(self):
        """Test that a markdown heading marker is removed from an unlabelled title."""
        result = parse_pr_content("## Add cache\n\nBody text")
        assert result.title == "Add cache"
        assert result.description == "Body text"

    def test_label_after_preamble(self):
        """Test that a Title: label on a later line is still found."""
        result = parse_pr_content("Here is your PR:\nTitle: Add cache\nDescription:\nBody")
        assert result == PRContent(title="Add cache", description="Body")

    def test_description_keeps_markdown(self):
        """Test that description lines are kept verbatim after the header."""
        text = "Title: Add cache\n\nDescription:\n## Changes\n- one\n  - nested\n\nDone."
        result = parse_pr_content(text)
        assert result.description == "## Changes\n- one\n  - nested\n\nDone."

    def test_title_only(self):
        """Test a reply with no description."""
        assert parse_pr_content("Title: Add cache") == PRContent(title="Add cache", description="")

    def test_blank_reply(self):
        """Test that a blank reply yields empty fields without raising."""
        assert parse_pr_content("   \n\n") == PRContent(title="", description="")

    def test_empty_label_takes_next_line(self):
        """Test that a bare Title: label uses the following line as the title."""
        result = parse_pr_content("Title:\nFix bug\n\nDescription:\nFixes it.")
        assert result == PRContent(title="Fix bug", description="Fixes it.")

    def test_empty_label_only(self):
        """Test that a label with nothing after it yields an empty result."""
        assert parse_pr_content("Title:\n\n") == PRContent(title="", description="")

    def test_fenced_reply(self):
        """Test that a code fence around the whole reply is removed."""
        result = parse_pr_content("```markdown\nTitle: Fix bug\n\nFixes it.\n```")
        assert result == PRContent(title="Fix bug", description="Fixes it.")

    def test_leading_fence_is_not_a_title(self):
        """Test that an unclosed fence line is skipped when looking for a title."""
        result = parse_pr_content("```\nFix bug\n\nFixes it.")
        assert result == PRContent(title="Fix bug", description="Fixes it.")

    def test_bare_heading_marker_is_not_a_title(self):
        """Test that a line holding only '#' is skipped."""
        assert parse_pr_content("#\nFix bug").title == "Fix bug"

    def test_fences_only(self):
        """Test that a reply of empty fences yields empty fields."""
        assert parse_pr_content("```\n```") == PRContent(title="", description="")


class TestTitleRules:
    """Tests for the individual title rules."""

    def test_rule_order(self):
        """Test that the labelled rule is tried before the first-line rule."""
        assert TITLE_RULES == (labelled_title, first_line_title)

    def test_labelled_title_tags_match(self):
        """Test that the labelled rule reports its name and remaining lines."""
        match = labelled_title(["Title: X", "", "body"])
        assert match.rule == "labelled_title"
        assert match.title == "X"
        assert match.rest == ["", "body"]

    def test_labelled_title_no_label(self):
        """Test that the labelled rule declines unlabelled text."""
        assert labelled_title(["Fix bug", "body"]) is None

    def test_first_line_title_skips_blank_lines(self):
        """Test that leading blank lines are skipped."""
        match = first_line_title(["", "  ", "Fix bug", "body"])
        assert match.rule == "first_line_title"
        assert match.title == "Fix bug"
        assert match.rest == ["body"]

    def test_labelled_title_empty_label(self):
        """Test that an empty label borrows the next line with text."""
        match = labelled_title(["Title:", "", "Fix bug", "body"])
        assert match.rule == "labelled_title"
        assert match.title == "Fix bug"
        assert match.rest == ["body"]

    def test_first_line_title_skips_markup_lines(self):
        """Test that fence and heading-only lines count as blank."""
        match = first_line_title(["```", "#", '""', "Fix bug"])
        assert match.title == "Fix bug"
        assert match.rest == []
        assert first_line_title(["```", "##"]) is None


class TestParseDescription:
    """Tests for parse_description function."""

    def test_header_only_honoured_before_content(self):
        """Test that a later 'Description:' line is kept as content."""
        lines = ["Intro", "Description: inline"]
        assert parse_description(lines) == "Intro\nDescription: inline"

    def test_inline_header_text(self):
        """Test that text on the header line becomes the first line."""
        assert parse_description(["Description: Does things", "More"]) == "Does things\nMore"

    def test_empty(self):
        """Test that no lines gives an empty description."""
        assert parse_description([]) == ""
