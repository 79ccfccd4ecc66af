"""Command-line entry point: ``python -m teamate <command>``.

Commands:
- form    – build teams from the roster CSV and save them
- show    – print the saved teams
- add     – register a participant from survey answers
- remove  – drop a participant from the roster
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys

from teamate.engine.allocator import AllocationInvariantError, TeamBuilder
from teamate.engine.team_report import format_team_lines, summarize_teams
from teamate.formation_runner import FormationRunner
from teamate.participant_models import SurveySubmission
from teamate.participant_repository import ParticipantRepository
from teamate.settings import MAX_TEAM_SIZE, MIN_TEAM_SIZE, FormationSettings, load_settings
from teamate.team_repository import TeamRepository


logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(log_file: str) -> None:
    """Append application events to *log_file*; echo warnings to stderr."""
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8", delay=True)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING)
    logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT, handlers=[file_handler, console])


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="teamate",
        description="Partition a roster into balanced, personality-aware teams.",
    )
    parser.add_argument("--log-file", help="Append-only application log (default from settings).")
    sub = parser.add_subparsers(dest="command", required=True)

    form = sub.add_parser("form", help="Form teams from the roster CSV.")
    form.add_argument("--team-size", type=int, help=f"Requested team size ({MIN_TEAM_SIZE}-{MAX_TEAM_SIZE}).")
    form.add_argument("--participants", help="Roster CSV path.")
    form.add_argument("--output", help="Formed-teams CSV path.")
    form.add_argument("--seed", type=int, help="Random seed for reproducible tie-breaking.")
    form.add_argument("--affinity-cap", type=int, help="Maximum members sharing one game per team.")

    show = sub.add_parser("show", help="Print the saved teams.")
    show.add_argument("--output", help="Formed-teams CSV path.")

    add = sub.add_parser("add", help="Register a participant from survey answers.")
    add.add_argument("--participants", help="Roster CSV path.")
    add.add_argument("--id", required=True)
    add.add_argument("--name", required=True)
    add.add_argument("--email", required=True)
    add.add_argument("--game", required=True)
    add.add_argument("--skill", type=int, required=True, help="Skill level (1-10).")
    add.add_argument("--role", required=True, choices=["Strategist", "Defender", "Attacker", "Coordinator"])
    add.add_argument("--answers", type=int, nargs=5, required=True, metavar="N", help="Five survey answers (1-5).")

    remove = sub.add_parser("remove", help="Remove a participant by id.")
    remove.add_argument("participant_id")
    remove.add_argument("--participants", help="Roster CSV path.")

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
def _cmd_form(args: argparse.Namespace, settings: FormationSettings) -> int:
    team_size = args.team_size if args.team_size is not None else settings.team_size
    if team_size is None:
        print("Team size not set. Pass --team-size or set TEAMATE_TEAM_SIZE.", file=sys.stderr)
        return 1
    if not MIN_TEAM_SIZE <= team_size <= MAX_TEAM_SIZE:
        logger.warning("Invalid team size requested: %d", team_size)
        print(f"Invalid team size. Must be between {MIN_TEAM_SIZE} and {MAX_TEAM_SIZE}.", file=sys.stderr)
        return 1

    roster = ParticipantRepository(args.participants or settings.participants_csv)
    participants = roster.load_participants()
    if not participants:
        print("No participants loaded. Add participants to the roster first.", file=sys.stderr)
        return 1

    affinity_cap = args.affinity_cap if args.affinity_cap is not None else settings.affinity_cap
    builder = TeamBuilder(
        participants,
        team_size,
        affinity_cap=affinity_cap,
        max_balance_passes=settings.max_balance_passes,
        seed=args.seed if args.seed is not None else settings.seed,
    )
    print("Initiating team formation...")
    logger.info("Team formation initiated: team_size=%d participants=%d", team_size, len(participants))
    with FormationRunner() as runner:
        result = runner.run(builder)

    store = TeamRepository(args.output or settings.formed_teams_csv)
    store.save_teams(result.teams)

    print(f"Team formation completed. Teams created: {len(result.teams)}")
    summaries = summarize_teams(result.teams, affinity_cap)
    for number, (team, summary) in enumerate(zip(result.teams, summaries), start=1):
        print()
        print("\n".join(format_team_lines(team, number)))
        print(f"  Diversity: games={summary.game_diversity:.2f} categories={summary.category_diversity:.2f}")
        for warning in summary.warnings:
            print(f"  ! {warning}")
    print()
    print(
        f"Balancer: {result.balance.swaps} swap(s) in {result.balance.passes} pass(es); "
        f"ordering violations: {result.residual_order_violations}; "
        f"affinity violations: {result.affinity_violations}"
    )
    print(f"Saved formed teams to: {store.path}")
    return 0


def _cmd_show(args: argparse.Namespace, settings: FormationSettings) -> int:
    records = TeamRepository(args.output or settings.formed_teams_csv).load_teams()
    if not records:
        print("No formed teams found.")
        return 0
    for record in records:
        print(f"{record.label}: {', '.join(record.member_ids)}")
    return 0


def _cmd_add(args: argparse.Namespace, settings: FormationSettings) -> int:
    submission = SurveySubmission(
        id=args.id,
        name=args.name,
        email=args.email,
        game=args.game,
        skill=args.skill,
        role=args.role,
        answers=args.answers,
    )
    participant = submission.to_participant()
    ParticipantRepository(args.participants or settings.participants_csv).append_participant(participant)
    print(f"Survey submitted. Personality score {participant.personality_score} ({participant.personality_type}).")
    return 0


def _cmd_remove(args: argparse.Namespace, settings: FormationSettings) -> int:
    removed = ParticipantRepository(args.participants or settings.participants_csv).remove_participant(
        args.participant_id
    )
    if not removed:
        print("Participant ID not found.", file=sys.stderr)
        return 1
    print("Participant removed successfully.")
    return 0


_COMMANDS = {
    "form": _cmd_form,
    "show": _cmd_show,
    "add": _cmd_add,
    "remove": _cmd_remove,
}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    configure_logging(args.log_file or settings.log_file)

    try:
        return _COMMANDS[args.command](args, settings)
    except (ValueError, OSError, AllocationInvariantError) as e:
        logger.error("Command %s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
