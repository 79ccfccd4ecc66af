"""Corrective cross-team swaps for the Leader <= Thinker <= Balanced ordering.

Best-effort local search: a bounded number of passes, each applying at
most one swap per team. A swap never lets the incoming member's game go
above the affinity cap on either side, so the number of cap violations
can only stay equal or drop.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging

from teamate.engine.candidates import DEFAULT_AFFINITY_CAP
from teamate.engine.team import Team
from teamate.participant_models import Participant
from teamate.personality import BALANCED, LEADER, THINKER


logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 5


@dataclass
class BalanceOutcome:
    passes: int = 0
    swaps: int = 0


def _accepts(team: Team, outgoing: Participant, incoming: Participant, affinity_cap: int) -> bool:
    """Whether *team* stays within the cap for *incoming*'s game after the exchange."""
    count = team.game_count(incoming.game)
    if outgoing.game == incoming.game:
        count -= 1
    return count + 1 <= affinity_cap


def _try_swap(
    teams: Sequence[Team],
    i: int,
    give: str,
    take: Sequence[str],
    donor_ok: Callable[[Counter[str]], bool],
    affinity_cap: int,
    log: logging.Logger,
) -> bool:
    """Swap one *give* member of team *i* with a *take* member of some donor team.

    *take* lists partner categories in preference order; the first one the
    donor actually has is used.
    """
    team = teams[i]
    givers = [m for m in team.members if m.category == give]
    if not givers:
        return False

    for j, donor in enumerate(teams):
        if j == i or not donor_ok(donor.category_counts()):
            continue
        partners: list[Participant] = []
        for category in take:
            partners = [m for m in donor.members if m.category == category]
            if partners:
                break
        for out_i in givers:
            for out_j in partners:
                if _accepts(team, out_i, out_j, affinity_cap) and _accepts(donor, out_j, out_i, affinity_cap):
                    team.replace_member(out_i, out_j)
                    donor.replace_member(out_j, out_i)
                    log.debug(
                        "Swapped %s (team %d) with %s (team %d)",
                        out_i.id, i + 1, out_j.id, j + 1,
                    )
                    return True
    return False


def rebalance(
    teams: Sequence[Team],
    affinity_cap: int = DEFAULT_AFFINITY_CAP,
    max_passes: int = DEFAULT_MAX_PASSES,
    log: logging.Logger | None = None,
) -> BalanceOutcome:
    """Run up to *max_passes* swap passes over *teams* (mutated in place).

    Per team, in index order: with more Leaders than Thinkers, trade a
    Leader for a Thinker (or, failing that, a Balanced member) from a team
    that has fewer Leaders than Thinkers. If that did not happen and the
    team has more Thinkers than Balanced, trade a Thinker for a Balanced
    member from a team with fewer Thinkers than Balanced.

    Stops early after a pass with no swaps.
    """
    log = log or logger
    outcome = BalanceOutcome()

    for _ in range(max_passes):
        outcome.passes += 1
        changed = False
        for i, team in enumerate(teams):
            counts = team.category_counts()
            swapped = False
            if counts[LEADER] > counts[THINKER]:
                swapped = _try_swap(
                    teams, i, LEADER, (THINKER, BALANCED),
                    lambda c: c[LEADER] < c[THINKER],
                    affinity_cap, log,
                )
            if not swapped and counts[THINKER] > counts[BALANCED]:
                swapped = _try_swap(
                    teams, i, THINKER, (BALANCED,),
                    lambda c: c[THINKER] < c[BALANCED],
                    affinity_cap, log,
                )
            if swapped:
                outcome.swaps += 1
                changed = True
        if not changed:
            break

    log.info("Balancer finished: passes=%d swaps=%d", outcome.passes, outcome.swaps)
    return outcome
