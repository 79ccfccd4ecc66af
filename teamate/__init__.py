"""Team formation: balanced, personality-aware partitioning of a roster."""

from .engine.allocator import (
    AllocationInvariantError,
    FormationResult,
    InvalidConfigurationError,
    TeamBuilder,
    form_teams,
)
from .engine.team import Team
from .participant_models import Participant, SurveySubmission

__all__ = [
    "AllocationInvariantError",
    "FormationResult",
    "InvalidConfigurationError",
    "Participant",
    "SurveySubmission",
    "Team",
    "TeamBuilder",
    "form_teams",
]
