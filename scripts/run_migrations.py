#!/usr/bin/env python3
"""Apply Quote Vote schema migrations.

Usage:
    python scripts/run_migrations.py [revision]

Upgrades to ``head`` unless a revision is given.
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from quotevote.config import Settings
from quotevote.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)

    revision = argv[1] if len(argv) > 1 else "head"
    alembic_cfg = Config("alembic.ini")

    with logfire.span(
        "migrations.upgrade", revision=revision, environment=settings.environment
    ):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Schema migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The app must not start against a half-migrated schema
            raise

    logfire.info("Schema is up to date", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
