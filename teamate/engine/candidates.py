"""Eligible-team selection with staged constraint relaxation.

Stages, each tried only when the previous one is empty:

1. ``STRICT``          – remaining category quota, spare capacity, game under cap
2. ``QUOTA_RELAXED``   – spare capacity, game under cap
3. ``FULLY_RELAXED``   – spare capacity only
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

from pydantic import BaseModel

from teamate.engine.team import Team
from teamate.participant_models import Participant


DEFAULT_AFFINITY_CAP = 2


class Stage(IntEnum):
    STRICT = 1
    QUOTA_RELAXED = 2
    FULLY_RELAXED = 3


class CandidateSelection(BaseModel):
    """Indices of teams that may take a participant, and the stage that produced them."""

    stage: Stage
    team_indices: list[int]

    @property
    def empty(self) -> bool:
        return not self.team_indices


def _eligible(
    participant: Participant,
    teams: Sequence[Team],
    stage: Stage,
    quota: Sequence[int] | None,
    affinity_cap: int,
) -> list[int]:
    indices: list[int] = []
    for i, team in enumerate(teams):
        if not team.can_add():
            continue
        if stage == Stage.STRICT and (quota is None or quota[i] <= 0):
            continue
        if stage < Stage.FULLY_RELAXED and team.game_count(participant.game) >= affinity_cap:
            continue
        indices.append(i)
    return indices


def select_candidates(
    participant: Participant,
    teams: Sequence[Team],
    quota: Sequence[int] | None = None,
    affinity_cap: int = DEFAULT_AFFINITY_CAP,
    max_stage: Stage = Stage.FULLY_RELAXED,
) -> CandidateSelection:
    """Find the teams that can currently accept *participant*.

    Args:
        participant: The participant to place.
        teams: Current team states, in index order.
        quota: Remaining per-team quota for the participant's category.
            ``None`` means quotas are not enforced, so selection starts
            at ``QUOTA_RELAXED``.
        affinity_cap: Maximum members sharing one game per team.
        max_stage: Last relaxation stage to try.

    Returns:
        The first non-empty stage's team indices, or an empty selection
        tagged with the last stage tried.
    """
    first = Stage.STRICT if quota is not None else Stage.QUOTA_RELAXED
    stages = [s for s in Stage if first <= s <= max_stage]
    for stage in stages:
        indices = _eligible(participant, teams, stage, quota, affinity_cap)
        if indices:
            return CandidateSelection(stage=stage, team_indices=indices)
    return CandidateSelection(stage=stages[-1] if stages else max_stage, team_indices=[])


def choose_lowest_average(team_indices: Sequence[int], teams: Sequence[Team]) -> int:
    """Pick the candidate with the lowest average skill; ties go to the lowest index."""
    if not team_indices:
        raise ValueError("No candidate teams to choose from")
    return min(team_indices, key=lambda i: (teams[i].average_skill(), i))
