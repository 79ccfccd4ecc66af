"""Tests for teamate/personality.py."""

import pytest

from teamate.personality import (
    CATEGORY_ORDER,
    category_of,
    classify_personality,
    personality_rank,
    score_survey,
)


class TestCategories:
    def test_canonical_names(self):
        assert category_of("Leader") == "Leader"
        assert category_of("Thinker") == "Thinker"
        assert category_of("Balanced") == "Balanced"

    def test_case_insensitive(self):
        assert category_of("leader") == "Leader"
        assert category_of(" BALANCED ") == "Balanced"

    def test_unknown_is_other(self):
        assert category_of("Creative") == "Other"
        assert category_of("") == "Other"

    def test_placement_order(self):
        assert CATEGORY_ORDER == ("Leader", "Thinker", "Balanced", "Other")

    def test_rank(self):
        assert personality_rank("Leader") == 1
        assert personality_rank("thinker") == 2
        assert personality_rank("Balanced") == 3
        assert personality_rank("Wildcard") == 4


class TestClassify:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [(100, "Leader"), (90, "Leader"), (89, "Balanced"), (70, "Balanced"), (69, "Thinker"), (0, "Thinker")],
    )
    def test_thresholds(self, score, expected):
        assert classify_personality(score) == expected


class TestSurvey:
    def test_scaled_sum(self):
        assert score_survey([5, 5, 5, 5, 5]) == 100
        assert score_survey([1, 1, 1, 1, 1]) == 20
        assert score_survey([4, 3, 5, 2, 4]) == 72

    def test_wrong_number_of_answers(self):
        with pytest.raises(ValueError, match="Expected 5"):
            score_survey([5, 5, 5])

    def test_answer_out_of_range(self):
        with pytest.raises(ValueError, match="Q3"):
            score_survey([3, 3, 6, 3, 3])
