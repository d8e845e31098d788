"""Unit tests for threatwatch.utils.text.

Covers:
- normalize_content: boilerplate removal, section labels, whitespace rules
- Idempotence, including spans spliced together by a removal
- Empty input
"""

from __future__ import annotations

import pytest

from threatwatch.utils.text import normalize_content


class TestBoilerplateRemoval:
    def test_navigation_phrase_removed(self):
        """Navigation boilerplate must be deleted, leaving the story text."""
        assert normalize_content("Skip to content\nTroops advance on the city") == (
            "Troops advance on the city"
        )

    def test_removal_is_case_insensitive(self):
        """Boilerplate matching must ignore case."""
        assert normalize_content("PRIVACY POLICY Flooding closes roads") == "Flooding closes roads"

    def test_multiple_patterns_removed(self):
        """Every matching pattern must be removed, not just the first."""
        text = "Sign in | Subscribe now\nShelling hits port city\nAll rights reserved"
        assert normalize_content(text) == "|\nShelling hits port city"

    def test_spans_are_deleted_not_replaced(self):
        """Removed spans must leave no placeholder behind."""
        result = normalize_content("Ceasefire holds. Click here for details.")
        assert result == "Ceasefire holds. for details."

    def test_meaningful_text_untouched(self):
        """Text matching no pattern must come back unchanged."""
        text = "Talks between the two governments resumed on Tuesday."
        assert normalize_content(text) == text


class TestSectionLabels:
    def test_standalone_label_lines_removed(self):
        """Labels alone on a line (menu, home, sports) must be removed."""
        text = "Menu\nHome\nTroops advance on the city\nSports"
        assert normalize_content(text) == "Troops advance on the city"

    def test_label_inside_sentence_kept(self):
        """A label word inside a sentence is content, not a section label."""
        assert normalize_content("Home ministry issues curfew") == "Home ministry issues curfew"

    def test_label_with_surrounding_spaces_removed(self):
        """Indented label lines must still be recognized."""
        assert normalize_content("   Video   \nProtest spreads") == "Protest spreads"


class TestWhitespace:
    def test_horizontal_runs_collapse(self):
        """Runs of spaces and tabs must collapse to a single space."""
        assert normalize_content("Troops   advance\t\ton city") == "Troops advance on city"

    def test_excess_newlines_collapse_to_two(self):
        """Three or more newlines must collapse to exactly two."""
        assert normalize_content("Para one\n\n\n\nPara two") == "Para one\n\nPara two"

    def test_double_newline_preserved(self):
        """Paragraph breaks of exactly two newlines must survive."""
        assert normalize_content("Para one\n\nPara two") == "Para one\n\nPara two"

    def test_lines_trimmed(self):
        """Leading and trailing whitespace must be trimmed per line."""
        assert normalize_content("  Line one  \n   Line two  ") == "Line one\nLine two"

    def test_carriage_returns_normalized(self):
        """Windows line endings must be treated as plain newlines."""
        assert normalize_content("Line one\r\n\r\n\r\nLine two") == "Line one\n\nLine two"


class TestIdempotence:
    @pytest.mark.parametrize(
        "text",
        [
            "Skip to main content\n\n\n\nMenu\n  Troops   advance  \nShare this\n\n\n",
            "Cookie settings    Newsletter\tBorder clash\n\n\n\nContinue reading",
            "sign sign inin",
            "  \n\n\n  ",
            "Plain sentence with no boilerplate.",
        ],
    )
    def test_normalize_twice_equals_once(self, text):
        """normalize(normalize(x)) must equal normalize(x)."""
        once = normalize_content(text)
        assert normalize_content(once) == once

    def test_spliced_match_removed(self):
        """A match formed by removing an inner span must also be removed."""
        assert normalize_content("sign sign inin") == ""


class TestEmptyInput:
    def test_empty_string(self):
        """Empty input must return an empty string."""
        assert normalize_content("") == ""

    def test_none_returns_empty(self):
        """None must be treated like empty input."""
        assert normalize_content(None) == ""  # type: ignore[arg-type]

    def test_only_boilerplate(self):
        """Text made entirely of boilerplate must normalize to empty."""
        assert normalize_content("Privacy Policy\nAbout Us\nContact Us") == ""
