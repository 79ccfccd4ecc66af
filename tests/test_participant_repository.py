"""Tests for teamate/participant_repository.py."""

from pathlib import Path

import pytest

from teamate.participant_models import Participant
from teamate.participant_repository import (
    MalformedRecordError,
    ParticipantRepository,
)


HEADER = "ID,Name,Email,PreferredGame,Skill,PreferredRole,PersonalityScore,PersonalityType\n"


def _write(path: Path, *lines: str) -> None:
    path.write_text(HEADER + "".join(f"{line}\n" for line in lines), encoding="utf-8")


def _participant(pid: str = "P900") -> Participant:
    return Participant(
        id=pid, name="New", email="new@example.com", game="Valorant", role="Attacker",
        skill=4, personality_score=76, personality_type="Balanced",
    )


class TestLoad:
    def test_missing_file_is_created_with_header(self, tmp_path):
        path = tmp_path / "data" / "participants.csv"
        repo = ParticipantRepository(str(path))

        assert repo.load_participants() == []
        assert path.read_text(encoding="utf-8").strip() == HEADER.strip()

    def test_loads_rows_and_trims_fields(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(
            path,
            "P001, Ada ,ada@example.com,Chess,7,Strategist,92,Leader",
            "",
            "P002,Bo,bo@example.com,FIFA,3,Defender,55,Thinker",
        )
        participants = ParticipantRepository(str(path)).load_participants()

        assert [p.id for p in participants] == ["P001", "P002"]
        assert participants[0].name == "Ada"
        assert participants[0].skill == 7
        assert participants[1].personality_type == "Thinker"

    def test_too_few_fields_reports_line(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(
            path,
            "P001,Ada,ada@example.com,Chess,7,Strategist,92,Leader",
            "P002,Bo,bo@example.com,FIFA,3",
        )
        with pytest.raises(MalformedRecordError, match="line 3") as exc_info:
            ParticipantRepository(str(path)).load_participants()
        assert exc_info.value.line_number == 3

    def test_non_numeric_skill(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(path, "P001,Ada,ada@example.com,Chess,high,Strategist,92,Leader")
        with pytest.raises(MalformedRecordError) as exc_info:
            ParticipantRepository(str(path)).load_participants()
        assert exc_info.value.line_number == 2

    def test_out_of_range_value(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(path, "P001,Ada,ada@example.com,Chess,42,Strategist,92,Leader")
        with pytest.raises(MalformedRecordError):
            ParticipantRepository(str(path)).load_participants()

    def test_malformed_record_is_value_error(self):
        assert issubclass(MalformedRecordError, ValueError)


class TestAppendAndRemove:
    def test_append_then_load(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(path, "P001,Ada,ada@example.com,Chess,7,Strategist,92,Leader")
        repo = ParticipantRepository(str(path))

        repo.append_participant(_participant())

        assert [p.id for p in repo.load_participants()] == ["P001", "P900"]

    def test_append_duplicate_id_fails(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(path, "P001,Ada,ada@example.com,Chess,7,Strategist,92,Leader")
        with pytest.raises(ValueError, match="already exists"):
            ParticipantRepository(str(path)).append_participant(_participant("p001"))

    def test_append_to_missing_file(self, tmp_path):
        repo = ParticipantRepository(str(tmp_path / "new.csv"))
        repo.append_participant(_participant())
        assert [p.id for p in repo.load_participants()] == ["P900"]

    def test_remove_existing(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(
            path,
            "P001,Ada,ada@example.com,Chess,7,Strategist,92,Leader",
            "P002,Bo,bo@example.com,FIFA,3,Defender,55,Thinker",
        )
        repo = ParticipantRepository(str(path))

        assert repo.remove_participant("P001") is True
        assert [p.id for p in repo.load_participants()] == ["P002"]
        assert not path.with_suffix(".tmp").exists()

    def test_remove_unknown(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(path, "P001,Ada,ada@example.com,Chess,7,Strategist,92,Leader")
        assert ParticipantRepository(str(path)).remove_participant("P404") is False

    def test_remove_from_missing_file(self, tmp_path):
        assert ParticipantRepository(str(tmp_path / "none.csv")).remove_participant("P001") is False

    def test_remove_is_case_insensitive(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(
            path,
            "P001,Ada,ada@example.com,Chess,7,Strategist,92,Leader",
            "P002,Bo,bo@example.com,FIFA,3,Defender,55,Thinker",
        )
        repo = ParticipantRepository(str(path))

        assert repo.remove_participant("p001") is True
        assert [p.id for p in repo.load_participants()] == ["P002"]

    def test_remove_never_drops_header(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(
            path,
            "P001,Ada,ada@example.com,Chess,7,Strategist,92,Leader",
            "P002,Bo,bo@example.com,FIFA,3,Defender,55,Thinker",
        )
        repo = ParticipantRepository(str(path))

        assert repo.remove_participant("ID") is False
        assert path.read_text(encoding="utf-8").startswith(HEADER)
        assert [p.id for p in repo.load_participants()] == ["P001", "P002"]


class TestMultilineFields:
    def test_name_with_newline_round_trips(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(path, "P001,Ada,ada@example.com,Chess,7,Strategist,92,Leader")
        repo = ParticipantRepository(str(path))
        participant = Participant(
            id="P002", name="Ann\nLee", email="ann@example.com", game="FIFA", role="Defender",
            skill=5, personality_score=80, personality_type="Balanced",
        )

        repo.append_participant(participant)
        repo.append_participant(_participant("P003"))
        loaded = repo.load_participants()

        assert [p.id for p in loaded] == ["P001", "P002", "P003"]
        assert loaded[1].name == "Ann\nLee"

    def test_error_after_multiline_record_reports_start_line(self, tmp_path):
        path = tmp_path / "p.csv"
        _write(
            path,
            'P001,"Ada\nLovelace",ada@example.com,Chess,7,Strategist,92,Leader',
            "P002,Bo,bo@example.com,FIFA,3",
        )
        with pytest.raises(MalformedRecordError) as exc_info:
            ParticipantRepository(str(path)).load_participants()
        assert exc_info.value.line_number == 4
