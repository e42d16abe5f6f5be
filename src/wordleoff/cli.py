"""
wordleoff.cli — Command-line interface
=======================================

Administrative commands over the persisted session store.

Usage:
    wordleoff list                       # Stored sessions, newest first
    wordleoff show SESSION_ID            # Roster, guesses and answer history
    wordleoff reset SESSION_ID           # Start a new round in a session
    wordleoff restart                    # Mark all players disconnected (after a restart)
    wordleoff sweep                      # Remove timed-out players and expired sessions

Every command accepts --config and --db; settings can also come from
WORDLEOFF_* environment variables or a .env file.
"""

import argparse
import json
import sys
from typing import List, Optional

from ._session.game_session import GameSession
from ._shared import log_error, setup_logging
from ._store import SessionStore, init_database, to_record
from .config import Settings, build_answer_source, load_settings
from .errors import WordleOffError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="wordleoff",
        description="WordleOff session store administration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wordleoff list
  wordleoff --db sessions.db show abc123
  WORDLEOFF_CONNECTION_EXPIRE_SECONDS=8 wordleoff sweep
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--db", type=str, help="Path to the SQLite session store")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List stored sessions")
    show = commands.add_parser("show", help="Show one session as JSON")
    show.add_argument("session_id")
    reset = commands.add_parser("reset", help="Start a new round in a session")
    reset.add_argument("session_id")
    commands.add_parser(
        "restart", help="Mark every connected player as disconnected (use at start-up)"
    )
    commands.add_parser(
        "sweep", help="Remove timed-out players and delete expired sessions"
    )

    return parser.parse_args(argv)


def build_store(settings: Settings) -> SessionStore:
    """Open (and initialize if needed) the configured session store."""
    init_database(settings.db_path)
    return SessionStore(
        settings.db_path,
        answer_source=build_answer_source(settings),
        policy=settings.policy,
    )


def _describe(session: GameSession) -> str:
    record = to_record(session)
    data = record.model_dump(mode="json")
    data["version"] = session.version
    data["session_expired"] = session.session_expired
    return json.dumps(data, indent=2)


def run_command(args: argparse.Namespace, store: SessionStore) -> int:
    """Execute one parsed command against ``store``."""
    if args.command == "list":
        for session_id in store.list_ids():
            session = store.load(session_id)
            if session is None:
                continue
            status = "expired" if session.session_expired else "live"
            print(f"{session_id}\t{len(session.players)} player(s)\t"
                  f"v{session.version}\t{status}")
        return 0

    if args.command == "show":
        print(_describe(store.get(args.session_id)))
        return 0

    if args.command == "reset":
        session, _ = store.update(
            args.session_id, lambda s: s.reset_game(), create=False
        )
        print(f"{session.session_id}: new round started (v{session.version})")
        return 0

    if args.command == "restart":
        written = store.for_each(lambda s: s.treat_all_players_as_disconnected())
        print(f"Marked players disconnected in {len(written)} session(s)")
        return 0

    if args.command == "sweep":
        changed = store.for_each(lambda s: s.remove_disconnected_player())
        deleted = store.delete_expired()
        print(f"Removed players from {len(changed)} session(s); "
              f"deleted {deleted} expired session(s)")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        settings = load_settings(args.config)
        if args.db:
            settings = settings.model_copy(update={"db_path": args.db})
        setup_logging(settings.log_file, settings.log_level_number)
        return run_command(args, build_store(settings))
    except WordleOffError as e:
        log_error(e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
