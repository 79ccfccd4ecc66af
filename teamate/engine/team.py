"""Bounded team container.

Aggregates (average skill, game counts, category counts) are always
computed from the current member list; nothing is cached.
"""

from __future__ import annotations

from collections import Counter

from teamate.participant_models import Participant
from teamate.personality import BALANCED, LEADER, THINKER


class Team:
    """A partition bucket with a fixed capacity."""

    def __init__(self, target_size: int) -> None:
        if target_size <= 0:
            raise ValueError(f"Team target size must be > 0, got {target_size}")
        self.target_size = target_size
        self.members: list[Participant] = []

    # ------------------------------------------------------------------
    # Capacity
    # ------------------------------------------------------------------
    def can_add(self) -> bool:
        return len(self.members) < self.target_size

    def is_full(self) -> bool:
        return len(self.members) >= self.target_size

    def add_member(self, participant: Participant) -> bool:
        """Append *participant* if there is room. Returns whether it was accepted."""
        if not self.can_add():
            return False
        self.members.append(participant)
        return True

    def replace_member(self, outgoing: Participant, incoming: Participant) -> None:
        """Swap *outgoing* for *incoming* in place, keeping member order."""
        for i, member in enumerate(self.members):
            if member is outgoing:
                self.members[i] = incoming
                return
        raise ValueError(f"Participant {outgoing.id} is not a member of this team")

    def __len__(self) -> int:
        return len(self.members)

    @property
    def size(self) -> int:
        return len(self.members)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def average_skill(self) -> float:
        if not self.members:
            return 0.0
        return sum(m.skill for m in self.members) / len(self.members)

    def game_counts(self) -> Counter[str]:
        return Counter(m.game for m in self.members)

    def category_counts(self) -> Counter[str]:
        return Counter(m.category for m in self.members)

    def game_count(self, game: str) -> int:
        return sum(1 for m in self.members if m.game == game)

    def category_count(self, category: str) -> int:
        return sum(1 for m in self.members if m.category == category)

    def ordering_satisfied(self) -> bool:
        """Whether Leader <= Thinker <= Balanced holds for this team."""
        counts = self.category_counts()
        return counts[LEADER] <= counts[THINKER] <= counts[BALANCED]

    def affinity_excess(self, affinity_cap: int) -> int:
        """Members beyond *affinity_cap* summed over every game."""
        return sum(max(0, c - affinity_cap) for c in self.game_counts().values())

    def member_ids(self) -> list[str]:
        return [m.id for m in self.members]

    def __repr__(self) -> str:
        return f"Team(target_size={self.target_size}, members={self.member_ids()!r})"
