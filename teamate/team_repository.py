"""Repository for formed teams (CSV file)."""

from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, Field

from teamate.engine.team import Team


logger = logging.getLogger(__name__)

TEAMS_HEADER: list[str] = ["TeamNo", "Members"]

_DEFAULT_PATH = "data/formed_teams.csv"


class FormedTeamRecord(BaseModel):
    """A team as read back from disk: label plus ordered member ids."""

    label: str = Field(..., min_length=1)
    member_ids: list[str] = Field(default_factory=list)


class TeamRepository:
    """Writes and reads back the formed-teams file."""

    def __init__(self, csv_path: str = _DEFAULT_PATH) -> None:
        self._path = Path(csv_path)

    @property
    def path(self) -> Path:
        return self._path

    def save_teams(self, teams: Sequence[Team]) -> None:
        """Write one ``Team N,<space-joined ids>`` row per team (atomic write)."""
        rows = [TEAMS_HEADER]
        rows.extend(
            [f"Team {n}", " ".join(team.member_ids())] for n, team in enumerate(teams, start=1)
        )
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        try:
            with open(tmp, "w", newline="", encoding="utf-8") as fh:
                csv.writer(fh).writerows(rows)
            tmp.replace(self._path)
        except Exception as exc:
            if tmp.exists():
                tmp.unlink()
            raise ValueError(f"Failed to save teams: {exc}") from exc
        logger.info("Generated teams saved to %s", self._path)

    def load_teams(self) -> list[FormedTeamRecord]:
        """Read teams back in file order. Returns ``[]`` when no file exists.

        Accepts both layouts: ids space-joined in the second column, or
        ids spread across the remaining columns.
        """
        if not self._path.exists():
            return []
        records: list[FormedTeamRecord] = []
        with open(self._path, newline="", encoding="utf-8") as fh:
            for row in csv.reader(fh):
                cells = [c.strip() for c in row]
                if not any(cells) or cells[:2] == TEAMS_HEADER:
                    continue
                ids = [i for cell in cells[1:] for i in cell.split()]
                records.append(FormedTeamRecord(label=cells[0], member_ids=ids))
        return records
