"""Run one team formation on a background worker and wait for it.

The engine is synchronous and pure; this is only a convenience wrapper
so callers can keep their own thread free while a run is in flight.
Runs cannot be cancelled once started.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
import logging

from teamate.engine.allocator import FormationResult, TeamBuilder
from teamate.participant_models import Participant


logger = logging.getLogger(__name__)


class FormationRunner:
    """Single-worker executor: at most one formation run at a time."""

    def __init__(self) -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="team-formation")

    def submit(self, builder: TeamBuilder) -> Future[FormationResult]:
        logger.info("Team formation dispatched to background worker")
        return self._executor.submit(builder.build)

    def run(self, builder: TeamBuilder) -> FormationResult:
        """Submit *builder* and block until its result (or exception) is available."""
        return self.submit(builder).result()

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> FormationRunner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


def form_teams_in_background(
    participants: Sequence[Participant],
    requested_size: int,
    **builder_kwargs,
) -> FormationResult:
    """One-shot helper: build a :class:`TeamBuilder` and run it on a worker thread."""
    builder = TeamBuilder(participants, requested_size, **builder_kwargs)
    with FormationRunner() as runner:
        return runner.run(builder)
