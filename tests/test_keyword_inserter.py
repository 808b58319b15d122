"""Tests for deterministic keyword insertion."""

from collections import Counter

import pytest

from seo_text_analyzer.keyword_inserter import (
    find_insertion_index,
    insert_keyword,
    plan_insertion,
    score_sentence,
    segment_text,
)


class TestSegmentText:
    """Tests for sentence segmentation."""

    def test_keeps_delimiters(self):
        """Test bodies and delimiters alternate."""
        parts = segment_text("One here. Two there! Three now? Four.")

        assert parts == ["One here", ". ", "Two there", "! ", "Three now", "? ", "Four."]

    def test_terminal_period_stays_in_body(self):
        """Test a final period without trailing space is part of the last body."""
        assert segment_text("Only one sentence.") == ["Only one sentence."]

    def test_blank_fragments_dropped(self):
        """Test whitespace-only fragments are discarded."""
        assert segment_text("Ends here. ") == ["Ends here", ". "]


class TestScoreSentence:
    """Tests for sentence scoring."""

    def test_word_overlap(self):
        """Test 10 points per phrase word found as a substring."""
        assert score_sentence("We sell Machine tools", ["machine", "learning"], 0, 5) == 10

    def test_substring_match(self):
        """Test phrase words match inside longer words."""
        assert score_sentence("Learnings from the field", ["learning"], 0, 5) == 10

    @pytest.mark.parametrize("index,total,expected", [
        (0, 5, 0),
        (1, 5, 0),   # exactly 0.2
        (2, 5, 5),
        (4, 5, 0),   # exactly 0.8
    ])
    def test_middle_bonus(self, index, total, expected):
        """Test the middle bonus applies strictly between 20% and 80%."""
        assert score_sentence("nothing relevant", ["seo"], index, total) == expected


class TestFindInsertionIndex:
    """Tests for word position selection."""

    def test_thirty_percent_position(self):
        """Test the default position is floor(30%) of the words."""
        assert find_insertion_index("It helps businesses grow fast".split(" ")) == 1

    def test_moves_after_connective(self):
        """Test insertion moves to just after a nearby connective."""
        assert find_insertion_index(["I", "went", "to", "the", "store", "today"]) == 3

    def test_connective_punctuation_ignored(self):
        """Test non-word characters are stripped before the connective check."""
        assert find_insertion_index(["Visit", "us", "(in", "Paris", "today", "now"]) == 3

    def test_last_word_never_scanned(self):
        """Test a connective in the final position is not used."""
        assert find_insertion_index(["Go", "the"]) == 0

    def test_single_word(self):
        """Test a single word sentence inserts at the front."""
        assert find_insertion_index(["Hello"]) == 0


class TestPlanInsertion:
    """Tests for insertion planning."""

    def test_prefers_phrase_overlap(self):
        """Test the sentence sharing phrase words wins."""
        text = (
            "Marketing teams love dashboards. "
            "Our platform offers keyword research for marketing. "
            "Support is included for free."
        )

        point = plan_insertion(text, "keyword research")

        assert point.sentence_index == 2
        assert point.score == 25
        assert point.word_index == 2

    def test_defaults_to_first_part_without_positive_score(self):
        """Test with no positive score the first part of the text is used."""
        point = plan_insertion("Hi. Yo. This sentence is long enough.", "seo")

        assert point.sentence_index == 0
        assert point.word_index == 0
        assert point.score == 0

    def test_earliest_wins_ties(self):
        """Test equally scored sentences resolve to the earliest one."""
        text = "Start of text. Seo matters here. Seo matters there. Seo is done here too."

        point = plan_insertion(text, "seo")

        assert point.sentence_index == 2

    @pytest.mark.parametrize("text,phrase", [
        ("Hi. Yo.", "seo"),
        ("", "seo"),
        ("A perfectly normal sentence here.", "   "),
    ])
    def test_no_insertion_point(self, text, phrase):
        """Test cases where nothing can be inserted."""
        assert plan_insertion(text, phrase) is None


class TestInsertKeyword:
    """Tests for insert_keyword."""

    def test_worked_example(self):
        """Test insertion into the middle sentence."""
        text = "AI is powerful. It helps businesses grow fast. Many companies adopt it now."

        result = insert_keyword(text, "machine learning")

        assert result == "AI is powerful. It machine learning helps businesses grow fast. Many companies adopt it now."

    def test_inserts_after_connective(self):
        """Test the phrase lands after an article close to the 30% mark."""
        text = "Short one. We really need a better tool for teams. End here now."

        result = insert_keyword(text, "seo")

        assert result == "Short one. We really need a seo better tool for teams. End here now."

    def test_phrase_is_trimmed(self):
        """Test surrounding whitespace on the phrase is not inserted."""
        text = "AI is powerful. It helps businesses grow fast. Many companies adopt it now."

        result = insert_keyword(text, "  machine learning ")

        assert "It machine learning helps" in result

    @pytest.mark.parametrize("text,phrase", [
        ("Hi. Yo.", "seo"),
        ("", "seo"),
        ("A perfectly normal sentence here.", ""),
    ])
    def test_unchanged_when_nothing_fits(self, text, phrase):
        """Test the text is returned unchanged when no insertion point exists."""
        assert insert_keyword(text, phrase) == text

    @pytest.mark.parametrize("text", [
        "AI is powerful. It helps businesses grow fast. Many companies adopt it now.",
        "One single long sentence without any terminator at all",
        "Wow! Is this real? Yes it is. And it works for the whole team.",
        "Line one is here.\nLine two is here. And three.",
    ])
    def test_never_removes_words(self, text):
        """Test every original word survives and the phrase words are added."""
        result = insert_keyword(text, "content strategy")

        original = Counter(text.split())
        updated = Counter(result.split())

        assert updated - original == Counter({"content": 1, "strategy": 1})
        assert not original - updated
