"""Runtime configuration loaded from ``TEAMATE_*`` environment variables.

A ``.env`` file in the working directory is honoured via python-dotenv.
"""

from __future__ import annotations

import logging
import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from teamate.engine.balancer import DEFAULT_MAX_PASSES
from teamate.engine.candidates import DEFAULT_AFFINITY_CAP


logger = logging.getLogger(__name__)

MIN_TEAM_SIZE = 3
MAX_TEAM_SIZE = 30


class FormationSettings(BaseModel):
    """Knobs for one formation run and where its files live."""

    team_size: int | None = Field(default=None, ge=MIN_TEAM_SIZE, le=MAX_TEAM_SIZE)
    affinity_cap: int = Field(default=DEFAULT_AFFINITY_CAP, ge=1)
    max_balance_passes: int = Field(default=DEFAULT_MAX_PASSES, ge=0, le=50)
    seed: int | None = None
    participants_csv: str = "data/participants_sample.csv"
    formed_teams_csv: str = "data/formed_teams.csv"
    log_file: str = "data/app_log.log"


_INT_VARS: dict[str, str] = {
    "team_size": "TEAMATE_TEAM_SIZE",
    "affinity_cap": "TEAMATE_AFFINITY_CAP",
    "max_balance_passes": "TEAMATE_MAX_BALANCE_PASSES",
    "seed": "TEAMATE_SEED",
}

_PATH_VARS: dict[str, str] = {
    "participants_csv": "TEAMATE_PARTICIPANTS_CSV",
    "formed_teams_csv": "TEAMATE_FORMED_TEAMS_CSV",
    "log_file": "TEAMATE_LOG_FILE",
}


def _read_int(var: str) -> int | None:
    raw = os.getenv(var, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from exc


def load_settings(use_dotenv: bool = True) -> FormationSettings:
    """Build settings from the environment, falling back to defaults.

    Raises:
        ValueError: A numeric variable is not an integer.
        pydantic.ValidationError: A value is out of range.
    """
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    values: dict[str, int | str] = {}
    for field_name, var in _INT_VARS.items():
        value = _read_int(var)
        if value is not None:
            values[field_name] = value
    for field_name, var in _PATH_VARS.items():
        value = os.getenv(var, "").strip()
        if value:
            values[field_name] = value

    settings = FormationSettings(**values)
    logger.debug("Settings loaded: %s", settings.model_dump())
    return settings
