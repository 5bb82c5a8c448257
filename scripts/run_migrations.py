#!/usr/bin/env python3
"""Apply Alembic migrations to the pairnotes database."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from pairnotes.config import Settings
from pairnotes.util.observability import configure_logfire


def main() -> int:
    """Upgrade to head, reporting failures to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    with logfire.span("run_migrations", environment=settings.environment):
        try:
            alembic_cfg = Config("alembic.ini")
            command.upgrade(alembic_cfg, "head")
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The app must not start against a half-migrated schema
            raise

    logfire.info("Database migrations completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
