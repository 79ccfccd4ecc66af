"""Repository for the participant roster (CSV file)."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
import threading

from pydantic import ValidationError

from teamate.participant_models import Participant


logger = logging.getLogger(__name__)

PARTICIPANT_HEADER: list[str] = [
    "ID", "Name", "Email", "PreferredGame", "Skill",
    "PreferredRole", "PersonalityScore", "PersonalityType",
]

_DEFAULT_PATH = "data/participants_sample.csv"


class MalformedRecordError(ValueError):
    """A roster row failed schema validation."""

    def __init__(self, line_number: int, reason: str) -> None:
        super().__init__(f"Invalid CSV format at line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason


def parse_participant_row(fields: list[str], line_number: int) -> Participant:
    """Build a participant from one CSV row (8 ordered fields).

    Raises:
        MalformedRecordError: Too few fields, non-integer numbers, or
            values outside the participant model's bounds.
    """
    if len(fields) < len(PARTICIPANT_HEADER):
        raise MalformedRecordError(
            line_number, f"expected {len(PARTICIPANT_HEADER)} fields, got {len(fields)}"
        )
    parts = [f.strip() for f in fields]
    try:
        skill = int(parts[4])
        score = int(parts[6])
    except ValueError as exc:
        raise MalformedRecordError(line_number, "Skill and PersonalityScore must be integers") from exc
    try:
        return Participant(
            id=parts[0],
            name=parts[1],
            email=parts[2],
            game=parts[3],
            skill=skill,
            role=parts[5],
            personality_score=score,
            personality_type=parts[7],
        )
    except ValidationError as exc:
        raise MalformedRecordError(line_number, str(exc)) from exc


def participant_to_row(participant: Participant) -> list[str]:
    return [
        participant.id,
        participant.name,
        participant.email,
        participant.game,
        str(participant.skill),
        participant.role,
        str(participant.personality_score),
        participant.personality_type,
    ]


class ParticipantRepository:
    """Thread-safe persistence layer for the roster CSV."""

    def __init__(self, csv_path: str = _DEFAULT_PATH) -> None:
        self._path = Path(csv_path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def load_participants(self) -> list[Participant]:
        """Read every participant. Creates a header-only file when none exists."""
        with self._lock:
            return self._load_without_lock()

    def append_participant(self, participant: Participant) -> None:
        """Add *participant* to the roster, rejecting duplicate ids."""
        with self._lock:
            existing = self._load_without_lock()
            if any(p.id.lower() == participant.id.lower() for p in existing):
                raise ValueError(f"Participant with id '{participant.id}' already exists")
            try:
                with open(self._path, "a", newline="", encoding="utf-8") as fh:
                    csv.writer(fh).writerow(participant_to_row(participant))
            except OSError as exc:
                raise ValueError(f"Failed to append participant: {exc}") from exc
        logger.info("Participant %s added to %s", participant.id, self._path)

    def remove_participant(self, participant_id: str) -> bool:
        """Drop every row whose ID matches *participant_id* (case-insensitive).

        The header row is always kept. Returns whether any row was removed.
        """
        wanted = participant_id.strip().lower()
        with self._lock:
            if not self._path.exists():
                return False
            with open(self._path, newline="", encoding="utf-8") as fh:
                rows = list(csv.reader(fh))
            if not rows:
                return False
            header, records = rows[0], rows[1:]
            kept = [r for r in records if not (r and r[0].strip().lower() == wanted)]
            if len(kept) == len(records):
                return False
            self._atomic_write([header] + kept)
        logger.info("Participant %s removed from %s", participant_id, self._path)
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _load_without_lock(self) -> list[Participant]:
        if not self._path.exists():
            logger.info("Roster file %s not found, creating it", self._path)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._atomic_write([PARTICIPANT_HEADER])

        participants: list[Participant] = []
        with open(self._path, newline="", encoding="utf-8") as fh:
            reader = csv.reader(fh)
            last_line = 0
            for fields in reader:
                # Quoted fields may span several physical lines; report where the record starts.
                line_number, last_line = last_line + 1, reader.line_num
                if line_number == 1 or not any(f.strip() for f in fields):
                    continue
                participants.append(parse_participant_row(fields, line_number))

        logger.info("Loaded %d participants from %s", len(participants), self._path)
        return participants

    def _atomic_write(self, rows: list[list[str]]) -> None:
        tmp = self._path.with_suffix(".tmp")
        try:
            with open(tmp, "w", newline="", encoding="utf-8") as fh:
                csv.writer(fh).writerows(rows)
            tmp.replace(self._path)
        except Exception as exc:
            if tmp.exists():
                tmp.unlink()
            raise ValueError(f"Failed to save participants: {exc}") from exc
