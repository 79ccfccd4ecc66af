"""Greedy team allocator.

Places a roster into ``floor(n / requested_size)`` near-equal teams in
three phases, then hands the result to the corrective balancer:

1. Quota phase: per category (Leader → Thinker → Balanced → Other),
   highest skill first, each participant goes to the weakest team that
   still has quota for the category, room, and is under the game cap.
   Participants with no such team are deferred.
2. Leftover phase: deferred participants go to the weakest team with
   room, preferring teams under the game cap.
3. Safety phase: anything still unplaced goes to the first team with
   room, ignoring soft constraints.

Randomness only breaks ties between equal-skill participants; pass a
``seed`` or ``rng`` for reproducible runs.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
import random

from teamate.engine.balancer import DEFAULT_MAX_PASSES, BalanceOutcome, rebalance
from teamate.engine.candidates import (
    DEFAULT_AFFINITY_CAP,
    Stage,
    choose_lowest_average,
    select_candidates,
)
from teamate.engine.quotas import compute_quotas, target_sizes_for
from teamate.engine.team import Team
from teamate.participant_models import Participant
from teamate.personality import CATEGORY_ORDER


logger = logging.getLogger(__name__)


class InvalidConfigurationError(ValueError):
    """Formation parameters are unusable; raised before any placement."""


class AllocationInvariantError(RuntimeError):
    """The engine produced (or was about to produce) an invalid partition."""


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------
@dataclass
class FormationResult:
    """Teams from one formation run plus diagnostics."""

    teams: list[Team]
    target_sizes: list[int]
    placements_by_phase: dict[str, int] = field(default_factory=dict)
    balance: BalanceOutcome = field(default_factory=BalanceOutcome)
    # Teams still breaking Leader <= Thinker <= Balanced after balancing.
    residual_order_violations: int = 0
    # Sum over teams and games of members beyond the affinity cap.
    affinity_violations: int = 0


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------
class TeamBuilder:
    """One formation run over a fixed roster.

    Team state lives only inside a single :meth:`build` call, so a builder
    can be rebuilt (with a different shuffle) without leaking state.
    """

    def __init__(
        self,
        participants: Sequence[Participant],
        requested_size: int,
        affinity_cap: int = DEFAULT_AFFINITY_CAP,
        max_balance_passes: int = DEFAULT_MAX_PASSES,
        seed: int | None = None,
        rng: random.Random | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._participants = list(participants)
        self.requested_size = requested_size
        self.affinity_cap = affinity_cap
        self.max_balance_passes = max_balance_passes
        self._rng = rng if rng is not None else random.Random(seed)
        self._log = log or logger

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def form_teams(self) -> list[Team]:
        return self.build().teams

    def build(self) -> FormationResult:
        """Run all placement phases and the balancer.

        Raises:
            InvalidConfigurationError: Bad team size, cap, pass budget or
                an empty roster.
            AllocationInvariantError: A participant could not be placed or
                the final partition is inconsistent.
        """
        self._validate()

        participants = self._participants
        total = len(participants)
        target_sizes = target_sizes_for(total, self.requested_size)
        teams = [Team(size) for size in target_sizes]
        self._log.info(
            "Forming %d teams from %d participants (requested size=%d, sizes=%s)",
            len(teams), total, self.requested_size, target_sizes,
        )

        order = list(range(total))
        self._rng.shuffle(order)
        pools = self._split_by_category(order)

        placed: set[int] = set()
        counts = {"quota": 0, "leftover": 0, "safety": 0}

        deferred = self._quota_phase(teams, pools, placed)
        counts["quota"] = len(placed)

        unplaced = self._leftover_phase(teams, deferred, placed)
        counts["leftover"] = len(deferred) - len(unplaced)

        counts["safety"] = self._safety_phase(teams, unplaced, placed)

        balance = rebalance(teams, self.affinity_cap, self.max_balance_passes, self._log)
        self._check_partition(teams, placed, total)

        residual = sum(1 for t in teams if not t.ordering_satisfied())
        affinity = sum(t.affinity_excess(self.affinity_cap) for t in teams)
        if residual:
            self._log.info("Category ordering still violated in %d team(s)", residual)
        if affinity:
            self._log.warning("Affinity cap exceeded by %d member(s) overall", affinity)
        self._log.info(
            "Formation complete: quota=%d leftover=%d safety=%d",
            counts["quota"], counts["leftover"], counts["safety"],
        )

        return FormationResult(
            teams=teams,
            target_sizes=target_sizes,
            placements_by_phase=counts,
            balance=balance,
            residual_order_violations=residual,
            affinity_violations=affinity,
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def _quota_phase(
        self,
        teams: list[Team],
        pools: dict[str, list[int]],
        placed: set[int],
    ) -> list[int]:
        """Place each category against its quotas; return deferred indices."""
        deferred: list[int] = []
        for category in CATEGORY_ORDER:
            pool = pools[category]
            if not pool:
                continue
            quota = compute_quotas(len(pool), len(teams))
            self._log.debug("%s quotas: %s", category, quota)
            for idx in pool:
                participant = self._participants[idx]
                selection = select_candidates(
                    participant, teams, quota, self.affinity_cap, max_stage=Stage.STRICT,
                )
                if selection.empty:
                    self._log.debug("Deferring %s: no team with %s quota available", participant.id, category)
                    deferred.append(idx)
                    continue
                chosen = choose_lowest_average(selection.team_indices, teams)
                self._place(teams, chosen, idx, placed)
                if quota[chosen] > 0:
                    quota[chosen] -= 1
        return deferred

    def _leftover_phase(self, teams: list[Team], leftovers: list[int], placed: set[int]) -> list[int]:
        """Place deferred participants ignoring quotas; return any still unplaced."""
        unplaced: list[int] = []
        for idx in leftovers:
            participant = self._participants[idx]
            selection = select_candidates(participant, teams, None, self.affinity_cap)
            if selection.empty:
                self._log.warning("No team has room for %s in leftover phase", participant.id)
                unplaced.append(idx)
                continue
            if selection.stage == Stage.FULLY_RELAXED:
                self._log.warning(
                    "Relaxing affinity cap for %s (game=%s)", participant.id, participant.game,
                )
            chosen = choose_lowest_average(selection.team_indices, teams)
            self._place(teams, chosen, idx, placed)
        return unplaced

    def _safety_phase(self, teams: list[Team], unplaced: list[int], placed: set[int]) -> int:
        for idx in unplaced:
            chosen = next((i for i, t in enumerate(teams) if t.can_add()), None)
            if chosen is None:
                self._log.error("Participant %s cannot be placed", self._participants[idx].id)
                raise AllocationInvariantError(
                    f"Participant {self._participants[idx].id} cannot be placed: all teams are full"
                )
            self._place(teams, chosen, idx, placed)
        return len(unplaced)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _validate(self) -> None:
        size = self.requested_size
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise InvalidConfigurationError(f"Team size must be a positive integer, got {size!r}")
        if self.affinity_cap < 1:
            raise InvalidConfigurationError(f"Affinity cap must be >= 1, got {self.affinity_cap}")
        if self.max_balance_passes < 0:
            raise InvalidConfigurationError(
                f"Balancer pass budget must be >= 0, got {self.max_balance_passes}"
            )
        if not self._participants:
            raise InvalidConfigurationError("No participants to allocate")

    def _split_by_category(self, order: list[int]) -> dict[str, list[int]]:
        """Bucket shuffled indices by category, each bucket sorted by skill (desc, stable)."""
        pools: dict[str, list[int]] = {category: [] for category in CATEGORY_ORDER}
        for idx in order:
            pools[self._participants[idx].category].append(idx)
        for pool in pools.values():
            pool.sort(key=lambda i: self._participants[i].skill, reverse=True)
        return pools

    def _place(self, teams: list[Team], chosen: int, idx: int, placed: set[int]) -> None:
        if idx in placed or not teams[chosen].add_member(self._participants[idx]):
            raise AllocationInvariantError(
                f"Cannot place {self._participants[idx].id} into team {chosen + 1}"
            )
        placed.add(idx)

    @staticmethod
    def _check_partition(teams: list[Team], placed: set[int], total: int) -> None:
        if len(placed) != total:
            raise AllocationInvariantError(f"Placed {len(placed)} of {total} participants")
        if sum(len(t) for t in teams) != total:
            raise AllocationInvariantError("Team membership does not match the roster size")
        for number, team in enumerate(teams, start=1):
            if len(team) != team.target_size:
                raise AllocationInvariantError(
                    f"Team {number} has {len(team)} members, expected {team.target_size}"
                )
        sizes = [t.target_size for t in teams]
        if max(sizes) - min(sizes) > 1:
            raise AllocationInvariantError(f"Team sizes differ by more than one: {sizes}")


def form_teams(
    participants: Sequence[Participant],
    requested_size: int,
    affinity_cap: int = DEFAULT_AFFINITY_CAP,
    max_balance_passes: int = DEFAULT_MAX_PASSES,
    seed: int | None = None,
    rng: random.Random | None = None,
    log: logging.Logger | None = None,
) -> list[Team]:
    """Partition *participants* into teams of roughly *requested_size*."""
    return TeamBuilder(
        participants,
        requested_size,
        affinity_cap=affinity_cap,
        max_balance_passes=max_balance_passes,
        seed=seed,
        rng=rng,
        log=log,
    ).form_teams()
