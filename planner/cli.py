"""Session planner CLI — seed the catalog, generate and manage sessions.

Usage:
    python -m planner.cli seed
    python -m planner.cli generate --focus forehand serve --intensity medium --minutes 60
    python -m planner.cli list
    python -m planner.cli show <session-id>
    python -m planner.cli duplicate <session-id>
    python -m planner.cli delete <session-id>
    python -m planner.cli favorite <drill-id>
    python -m planner.cli profile --rating 7.5
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import Sequence

from drill_store import DrillStore, DrillStoreError, load_catalog
from session_engine import (
    PartialWriteError,
    SessionEngineError,
    SessionGenerator,
)
from session_engine.models.enums import (
    MAX_SESSION_MINUTES,
    MIN_SESSION_MINUTES,
    Category,
    Environment,
    IntensityTier,
    Surface,
)
from session_engine.models.session import SessionRequest
from session_engine.serialization import to_session_json_string

from planner import config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="POACHED training session planner")
    parser.add_argument("--database-url", default=config.DATABASE_URL)
    parser.add_argument("--user", default=config.USER_ID, help="Owner id for session commands")
    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="Load the drill catalog into the database")
    seed.add_argument("--catalog", default=str(config.CATALOG_PATH))

    gen = sub.add_parser("generate", help="Generate and save a new session")
    gen.add_argument(
        "--focus", nargs="+", required=True, choices=[c.value for c in Category],
    )
    gen.add_argument(
        "--intensity", default=IntensityTier.MEDIUM.value,
        choices=[i.value for i in IntensityTier],
    )
    gen.add_argument(
        "--minutes", type=int, default=60,
        help=f"Session length ({MIN_SESSION_MINUTES}-{MAX_SESSION_MINUTES})",
    )
    gen.add_argument("--rating", type=float, default=None, help="UTR; defaults to the profile")
    gen.add_argument(
        "--environment", default=Environment.ALONE.value,
        choices=[e.value for e in Environment],
    )
    gen.add_argument("--surface", default=None, choices=[s.value for s in Surface])
    gen.add_argument("--seed", type=int, default=config.SEED)

    sub.add_parser("list", help="List your sessions, newest first")

    for name, text in (
        ("show", "Print a session as JSON"),
        ("duplicate", "Copy a session"),
        ("delete", "Delete a session"),
    ):
        cmd = sub.add_parser(name, help=text)
        cmd.add_argument("session_id")

    fav = sub.add_parser("favorite", help="Star or unstar a drill")
    fav.add_argument("drill_id")

    prof = sub.add_parser("profile", help="Show or update your profile")
    prof.add_argument("--rating", type=float)
    prof.add_argument("--handedness", choices=["right", "left"])
    prof.add_argument("--playstyle")
    prof.add_argument("--goals")
    return parser


def run(args: argparse.Namespace, store: DrillStore) -> int:
    """Execute one parsed command against *store*. Returns an exit code."""
    if args.command == "seed":
        count = store.add_drills(load_catalog(args.catalog))
        print(f"Seeded {count} drills")
        return 0

    if args.command == "generate":
        return _generate(args, store)

    if args.command == "list":
        for s in store.list_sessions(args.user):
            created = s.created_at.strftime("%b %d, %Y") if s.created_at else "--"
            print(f"{s.id}  {created}  {s.total_minutes:>3} min  {s.name}")
        return 0

    if args.command == "show":
        detail = store.get_session(args.session_id, args.user)
        print(to_session_json_string(
            detail, favorite_ids=store.favorite_drill_ids(args.user),
        ))
        return 0

    if args.command == "duplicate":
        detail = store.duplicate_session(args.session_id, args.user)
        print(detail.session.id)
        return 0

    if args.command == "delete":
        store.delete_session(args.session_id, args.user)
        print(f"Deleted {args.session_id}")
        return 0

    if args.command == "favorite":
        if store.get_drill(args.drill_id) is None:
            logger.error("Unknown drill %s", args.drill_id)
            return 1
        starred = store.toggle_favorite(args.user, args.drill_id)
        print(f"{args.drill_id} {'starred' if starred else 'unstarred'}")
        return 0

    if args.command == "profile":
        profile = store.get_profile(args.user)
        updates = {
            "rating": args.rating,
            "handedness": args.handedness,
            "playstyle": args.playstyle,
            "goals": args.goals,
        }
        updates = {k: v for k, v in updates.items() if v is not None}
        if updates:
            profile = store.save_profile(dataclasses.replace(profile, **updates))
        print(
            f"{profile.user_id}: UTR {profile.rating:.1f}, "
            f"{profile.handedness}-handed, {profile.playstyle}"
        )
        return 0

    raise ValueError(f"Unknown command {args.command!r}")


def _generate(args: argparse.Namespace, store: DrillStore) -> int:
    rating = args.rating
    if rating is None:
        rating = store.get_profile(args.user).rating

    request = SessionRequest.create(
        rating=rating,
        focus_areas=args.focus,
        intensity=args.intensity,
        total_minutes=args.minutes,
        environment=args.environment,
        surface=args.surface,
    )
    generator = SessionGenerator(store, store, seed=args.seed)
    try:
        result = generator.generate(request, args.user)
    except PartialWriteError as exc:
        generator.recover_partial_write(exc, retry=False)
        raise

    print(to_session_json_string(
        result.detail, favorite_ids=store.favorite_drill_ids(args.user),
    ))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        store = DrillStore.from_url(args.database_url)
        return run(args, store)
    except SessionEngineError as exc:
        logger.error("%s", exc)
        return 1
    except DrillStoreError as exc:
        logger.error("Store failure: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
