"""Tests for clarification item extraction."""

from prompt_optimizer.classification.extractor import (
    extract_clarifications,
    extract_from_prose,
    split_items,
)
from prompt_optimizer.classification.vocabulary import DEFAULT_VOCABULARY


class TestSplitItems:
    def test_three_dash_lines_trimmed_in_order(self):
        block = "\n-   What is the audience?   \n- What tone?\n-\tHow long?  \n"
        assert split_items(block) == ["What is the audience?", "What tone?", "How long?"]

    def test_numbered_list(self):
        assert split_items("\n1. Budget?\n2. Deadline?\n10. Owner?") == ["Budget?", "Deadline?", "Owner?"]

    def test_bullet_glyph_and_asterisk(self):
        assert split_items("\n• First\n* Second\n  - Third") == ["First", "Second", "Third"]

    def test_blank_fragments_are_dropped(self):
        assert split_items("\n- A\n-\n\n- B\n") == ["A", "B"]

    def test_leading_text_before_first_item_is_kept(self):
        assert split_items("To continue I need:\n- A\n- B") == ["To continue I need:", "A", "B"]

    def test_dash_inside_a_line_does_not_split(self):
        assert split_items("\n- Is it a long-form post?") == ["Is it a long-form post?"]

    def test_whitespace_only_block(self):
        assert split_items("  \n \n") == []


class TestExtractFromProse:
    def test_clause_followed_by_dash_list(self):
        text = "We need more details:\n- Budget\n- Deadline\n\nThanks!"
        assert extract_from_prose(text) == ["Budget", "Deadline"]

    def test_clause_spans_inflected_keyword(self):
        assert extract_from_prose("This request needs additional details: tone") == ["tone"]

    def test_capture_stops_at_blank_line(self):
        text = "The prompt lacks context about the audience.\n\nEverything else is fine."
        assert extract_from_prose(text) == ["about the audience."]

    def test_no_clause(self):
        assert extract_from_prose("Please provide the following: budget and timeline.") == []


class TestExtractClarifications:
    def test_block_is_preferred(self):
        completion = "We are missing details: - something else\n\n**Missing Context**\n- A"
        assert extract_clarifications("\n- A", completion) == ["A"]

    def test_empty_block_falls_back_to_prose(self):
        completion = "I need more information:\n- Who reads it?\n\n**Missing Context**"
        assert extract_clarifications("", completion) == ["Who reads it?"]

    def test_default_question_when_nothing_found(self):
        items = extract_clarifications(None, "Please provide the following: budget and timeline.")
        assert items == [DEFAULT_VOCABULARY.default_question]
        assert items == ["Please provide more context about your request"]

    def test_never_empty(self):
        for completion in ["", "   ", "x", "**Missing Context**"]:
            assert extract_clarifications(None, completion)
            assert extract_clarifications("", completion)
