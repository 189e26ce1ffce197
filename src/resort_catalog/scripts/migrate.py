# src/resort_catalog/scripts/migrate.py
"""Upgrade the configured database to the latest schema revision."""
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from resort_catalog.core.logging import setup_logging
from resort_catalog.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def build_config() -> Config:
    """Alembic config pointed at the repository migrations and DATABASE_URL."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    return cfg


def run_upgrade_head() -> None:
    setup_logging(settings.log_level)
    logger.info("Upgrading database schema to head")
    command.upgrade(build_config(), "head")


if __name__ == "__main__":
    run_upgrade_head()
