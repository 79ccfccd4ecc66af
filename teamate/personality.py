"""Personality categories used to diversify team composition.

Three canonical categories (Leader / Thinker / Balanced) plus a catch-all
``Other`` bucket for any unrecognised label. Also hosts the 5-question
survey scoring and the score → type classifier used when participants
register themselves.
"""

from __future__ import annotations

from collections.abc import Sequence


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
LEADER = "Leader"
THINKER = "Thinker"
BALANCED = "Balanced"
OTHER = "Other"

# Placement order for the allocator phases.
CATEGORY_ORDER: tuple[str, ...] = (LEADER, THINKER, BALANCED, OTHER)

_CANONICAL: dict[str, str] = {
    LEADER.lower(): LEADER,
    THINKER.lower(): THINKER,
    BALANCED.lower(): BALANCED,
}

_RANK: dict[str, int] = {LEADER: 1, THINKER: 2, BALANCED: 3}


def category_of(personality_type: str) -> str:
    """Resolve a free-form personality label to its canonical category.

    Matching is case-insensitive and ignores surrounding whitespace;
    anything else falls into ``Other``.
    """
    return _CANONICAL.get(personality_type.strip().lower(), OTHER)


def personality_rank(personality_type: str) -> int:
    """Display rank: Leader 1, Thinker 2, Balanced 3, anything else 4."""
    return _RANK.get(category_of(personality_type), 4)


# ---------------------------------------------------------------------------
# Survey scoring
# ---------------------------------------------------------------------------
SURVEY_QUESTIONS: tuple[str, ...] = (
    "I enjoy taking the lead",
    "I prefer analyzing situations",
    "I work well with others",
    "I stay calm under pressure",
    "I like making quick decisions",
)

_ANSWER_MIN = 1
_ANSWER_MAX = 5
_SCORE_SCALE = 4

_LEADER_THRESHOLD = 90
_BALANCED_THRESHOLD = 70


def score_survey(answers: Sequence[int]) -> int:
    """Turn five 1-5 answers into a 0-100 personality score.

    Args:
        answers: One answer per entry of ``SURVEY_QUESTIONS``.

    Returns:
        Sum of the answers scaled by 4 (range 20-100).

    Raises:
        ValueError: Wrong number of answers or an answer out of range.
    """
    if len(answers) != len(SURVEY_QUESTIONS):
        raise ValueError(
            f"Expected {len(SURVEY_QUESTIONS)} survey answers, got {len(answers)}"
        )
    for i, answer in enumerate(answers, start=1):
        if not _ANSWER_MIN <= answer <= _ANSWER_MAX:
            raise ValueError(
                f"Answer Q{i} must be between {_ANSWER_MIN} and {_ANSWER_MAX}, got {answer}"
            )
    return sum(answers) * _SCORE_SCALE


def classify_personality(score: int) -> str:
    """Map a personality score to a category label."""
    if score >= _LEADER_THRESHOLD:
        return LEADER
    if score >= _BALANCED_THRESHOLD:
        return BALANCED
    return THINKER
