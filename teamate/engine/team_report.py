"""Team summaries: composition, skill and diversity per formed team.

All functions are *pure*; teams are never mutated.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from pydantic import BaseModel, Field

from teamate.engine.candidates import DEFAULT_AFFINITY_CAP
from teamate.engine.team import Team
from teamate.personality import BALANCED, CATEGORY_ORDER, LEADER, THINKER, personality_rank


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------
class TeamSummary(BaseModel):
    """Snapshot of one team's composition."""

    label: str
    size: int = Field(ge=0)
    target_size: int = Field(ge=1)
    average_skill: float = Field(ge=0.0)
    category_counts: dict[str, int]
    game_counts: dict[str, int]
    game_diversity: float = Field(ge=0.0, le=1.0, default=0.0)
    category_diversity: float = Field(ge=0.0, le=1.0, default=0.0)
    ordering_satisfied: bool
    member_ids: list[str]
    warnings: list[str]


# ---------------------------------------------------------------------------
# Blau's index of heterogeneity
# ---------------------------------------------------------------------------
def calculate_blau_index(values: Sequence[str]) -> float:
    """Calculate Blau's index for one categorical attribute.

    Blau = 1 - Σ(pᵢ²), where pᵢ is the proportion of category i.
    Range: [0, 1). Higher = more diverse.

    Args:
        values: One label per member (e.g. ["Chess", "Chess", "Valorant"]).

    Returns:
        Blau index, 0.0 for an empty list.
    """
    if not values:
        return 0.0
    n = len(values)
    counts = Counter(values)
    return 1.0 - sum((c / n) ** 2 for c in counts.values())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def summarize_team(team: Team, number: int, affinity_cap: int = DEFAULT_AFFINITY_CAP) -> TeamSummary:
    """Build a :class:`TeamSummary` for *team*, labelled ``Team <number>``."""
    categories = team.category_counts()
    games = team.game_counts()

    warnings: list[str] = []
    for game, count in sorted(games.items()):
        if count > affinity_cap:
            warnings.append(f"{count} members play {game} (cap is {affinity_cap})")
    ordered = team.ordering_satisfied()
    if not ordered:
        warnings.append(
            f"Category ordering violated: {categories[LEADER]} Leader, "
            f"{categories[THINKER]} Thinker, {categories[BALANCED]} Balanced"
        )
    if len(team) < team.target_size:
        warnings.append(f"Team is under-filled ({len(team)}/{team.target_size})")

    return TeamSummary(
        label=f"Team {number}",
        size=len(team),
        target_size=team.target_size,
        average_skill=round(team.average_skill(), 2),
        category_counts={c: categories.get(c, 0) for c in CATEGORY_ORDER},
        game_counts=dict(games),
        game_diversity=round(calculate_blau_index([m.game for m in team.members]), 4),
        category_diversity=round(calculate_blau_index([m.category for m in team.members]), 4),
        ordering_satisfied=ordered,
        member_ids=team.member_ids(),
        warnings=warnings,
    )


def summarize_teams(teams: Sequence[Team], affinity_cap: int = DEFAULT_AFFINITY_CAP) -> list[TeamSummary]:
    return [summarize_team(t, n, affinity_cap) for n, t in enumerate(teams, start=1)]


def format_team_lines(team: Team, number: int) -> list[str]:
    """Console view: heading, then members ordered Leader → Thinker → Balanced → other."""
    lines = [f"Team {number} (size={len(team)}, avgSkill={team.average_skill():.2f}):"]
    for member in sorted(team.members, key=lambda m: personality_rank(m.personality_type)):
        lines.append(f"  {member.describe()}")
    return lines
