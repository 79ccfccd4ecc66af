"""Quota and team-size arithmetic. All functions are *pure*."""

from __future__ import annotations


def compute_quotas(total: int, team_count: int) -> list[int]:
    """Split *total* items as evenly as possible over *team_count* slots.

    Every slot gets ``total // team_count``; the remainder goes one unit
    each to the lowest-index slots.

    Raises:
        ValueError: ``team_count < 1`` or ``total < 0``.
    """
    if team_count < 1:
        raise ValueError(f"team_count must be >= 1, got {team_count}")
    if total < 0:
        raise ValueError(f"total must be >= 0, got {total}")
    base, rem = divmod(total, team_count)
    return [base + (1 if i < rem else 0) for i in range(team_count)]


def team_count_for(participant_count: int, requested_size: int) -> int:
    """Number of teams: ``floor(participants / size)``, at least one."""
    return max(1, participant_count // requested_size)


def target_sizes_for(participant_count: int, requested_size: int) -> list[int]:
    """Per-team capacities summing to *participant_count*, differing by at most one."""
    return compute_quotas(participant_count, team_count_for(participant_count, requested_size))
