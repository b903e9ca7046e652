"""
Tests for the Protection & Alignment Assessment scoring.
"""

from itertools import product

import pytest

from financekeem.services.quiz import (
    NEEDS_REVIEW,
    NOT_YET_PROTECTED,
    PARTIALLY_BUILT,
    PILLARS,
    PROTECTION_STATES,
    QUIZ_QUESTIONS,
    WELL_ALIGNED,
    classify,
    pillar_strength,
    public_questions,
    score,
)


def answers_for(**pillar_scores):
    """Answer sheet that produces the requested score for each pillar."""
    answers = {}
    for pillar, total in pillar_scores.items():
        remaining = total
        for question in (q for q in QUIZ_QUESTIONS if q["pillar"] == pillar):
            points = min(3, remaining)
            answers[question["id"]] = next(o["value"] for o in question["options"] if o["score"] == points)
            remaining -= points
    return answers


class TestRubric:
    """Tests for the fixed question set."""

    def test_twelve_questions_four_per_pillar(self):
        assert len(QUIZ_QUESTIONS) == 12
        for pillar in PILLARS:
            assert len([q for q in QUIZ_QUESTIONS if q["pillar"] == pillar]) == 4

    def test_option_weights_decrease_from_best_to_worst(self):
        for question in QUIZ_QUESTIONS:
            assert [o["score"] for o in question["options"]] == [3, 2, 1, 0]

    def test_public_questions_hide_weights(self):
        for question in public_questions():
            assert all("score" not in option for option in question["options"])


class TestPillarStrength:
    """Tests for per-pillar thresholds."""

    @pytest.mark.parametrize("value,expected", [
        (0, "weak"), (4, "weak"),
        (5, "moderate"), (8, "moderate"),
        (9, "strong"), (12, "strong"),
    ])
    def test_boundaries(self, value, expected):
        assert pillar_strength(value) == expected


class TestScore:
    """Tests for scoring whole answer sheets."""

    def test_best_answers(self, best_answers):
        result = score(best_answers)
        assert result["pillar_scores"] == {"protection": 12, "alignment": 12, "oversight": 12}
        assert result["protection_state"] == WELL_ALIGNED

    def test_worst_answers(self, worst_answers):
        result = score(worst_answers)
        assert result["pillar_scores"] == {"protection": 0, "alignment": 0, "oversight": 0}
        assert result["protection_state"] == NOT_YET_PROTECTED

    def test_empty_answers(self):
        """Test that unanswered questions contribute zero."""
        result = score({})
        assert result["pillar_scores"] == {"protection": 0, "alignment": 0, "oversight": 0}
        assert result["protection_state"] == NOT_YET_PROTECTED

    def test_unknown_answers_ignored(self):
        result = score({"p1": "intentional", "p2": "made-up", "zz": "whatever"})
        assert result["pillar_scores"]["protection"] == 3

    @pytest.mark.parametrize("scores,expected", [
        ({"protection": 9, "alignment": 9, "oversight": 5}, WELL_ALIGNED),
        ({"protection": 12, "alignment": 12, "oversight": 4}, PARTIALLY_BUILT),
        ({"protection": 5, "alignment": 5, "oversight": 5}, NEEDS_REVIEW),
        ({"protection": 9, "alignment": 8, "oversight": 8}, NEEDS_REVIEW),
        ({"protection": 4, "alignment": 12, "oversight": 12}, WELL_ALIGNED),
        ({"protection": 4, "alignment": 8, "oversight": 8}, PARTIALLY_BUILT),
        ({"protection": 4, "alignment": 4, "oversight": 12}, NOT_YET_PROTECTED),
    ])
    def test_classification_cases(self, scores, expected):
        result = score(answers_for(**scores))
        assert result["pillar_scores"] == scores
        assert result["protection_state"] == expected

    def test_description_matches_state(self, best_answers):
        result = score(best_answers)
        assert result["description"]
        assert result["strengths"] == {"protection": "strong", "alignment": "strong", "oversight": "strong"}


class TestClassify:
    """Tests that classification is total over every reachable pillar score triple."""

    def test_every_score_triple_has_one_state(self):
        for triple in product(range(13), repeat=3):
            strengths = {pillar: pillar_strength(value) for pillar, value in zip(PILLARS, triple)}
            state = classify(strengths)
            assert state in PROTECTION_STATES

            weak = list(strengths.values()).count("weak")
            strong = list(strengths.values()).count("strong")
            if strong >= 2 and strengths["oversight"] != "weak":
                assert state == WELL_ALIGNED
            elif weak == 0:
                assert state == NEEDS_REVIEW
            elif weak == 1:
                assert state == PARTIALLY_BUILT
            else:
                assert state == NOT_YET_PROTECTED
