"""Remove rotation records that can no longer affect voice selection.

Intended to run from cron or a scheduler; installed as the
``voice-social-prune-history`` console script.
"""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from voice_social.core.settings import settings
from voice_social.db.session import Database
from voice_social.db.time import window_start
from voice_social.services.rotation import prune_history

logger = logging.getLogger("voice_social.scripts.prune_history")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Prune old voice rotation history")
    parser.add_argument(
        "--hours",
        type=int,
        default=settings.history_retention_hours,
        help="Delete records older than this many hours (default: %(default)s)",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args(argv)
    if args.hours < 1:
        parser.error("--hours must be at least 1")

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    database = Database(args.url or settings.effective_database_url, echo=settings.sql_debug)
    try:
        with database.session() as db:
            removed = prune_history(db, window_start(hours=args.hours))
    except SQLAlchemyError:
        logger.exception("Pruning voice history failed")
        return 1
    finally:
        database.dispose()
    print(f"[prune-history] removed {removed} rows")
    return 0


if __name__ == "__main__":
    sys.exit(main())
