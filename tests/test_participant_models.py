"""Tests for teamate/participant_models.py."""

from pydantic import ValidationError
import pytest

from teamate.participant_models import Participant, SurveySubmission


def _participant(**overrides) -> Participant:
    data = {
        "id": "P001", "name": "Ada", "email": "ada@example.com", "game": "Chess",
        "role": "Strategist", "skill": 7, "personality_score": 85, "personality_type": "Balanced",
    }
    data.update(overrides)
    return Participant(**data)


class TestParticipant:
    def test_category_resolved(self):
        assert _participant(personality_type="leader").category == "Leader"
        assert _participant(personality_type="Dreamer").category == "Other"

    def test_immutable(self):
        p = _participant()
        with pytest.raises(ValidationError):
            p.skill = 3  # type: ignore[misc]

    @pytest.mark.parametrize("skill", [0, 11])
    def test_skill_bounds(self, skill):
        with pytest.raises(ValidationError):
            _participant(skill=skill)

    @pytest.mark.parametrize("score", [-1, 101])
    def test_score_bounds(self, score):
        with pytest.raises(ValidationError):
            _participant(personality_score=score)

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            _participant(id="")

    def test_describe(self):
        assert _participant().describe() == "P001:Ada (Chess,Strategist,skill=7,Balanced)"


class TestSurveySubmission:
    def _submission(self, **overrides) -> SurveySubmission:
        data = {
            "id": "P200", "name": "Lin", "email": "lin@example.com", "game": "FIFA",
            "skill": 6, "role": "Defender", "answers": [5, 5, 4, 5, 4],
        }
        data.update(overrides)
        return SurveySubmission(**data)

    def test_to_participant_scores_and_classifies(self):
        participant = self._submission().to_participant()
        assert participant.personality_score == 92
        assert participant.personality_type == "Leader"
        assert participant.role == "Defender"

    def test_low_answers_give_thinker(self):
        participant = self._submission(answers=[2, 2, 2, 2, 2]).to_participant()
        assert participant.personality_score == 40
        assert participant.personality_type == "Thinker"

    def test_bad_email(self):
        with pytest.raises(ValidationError):
            self._submission(email="not-an-email")

    def test_unknown_role(self):
        with pytest.raises(ValidationError):
            self._submission(role="Goalkeeper")

    def test_wrong_answer_count(self):
        with pytest.raises(ValidationError):
            self._submission(answers=[1, 2, 3])

    def test_out_of_range_answer(self):
        with pytest.raises(ValueError):
            self._submission(answers=[1, 2, 3, 4, 9]).to_participant()
