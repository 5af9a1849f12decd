from __future__ import annotations

import os

from alembic import command
from alembic.config import Config

from civic_commons.core.settings import settings

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))


def build_config() -> Config:
    cfg = Config()
    # Alembic runs synchronously, so async driver names are rewritten.
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    cfg.set_main_option("script_location", os.path.join(PROJECT_ROOT, "migrations"))
    return cfg


def run_upgrade_head() -> None:
    command.upgrade(build_config(), "head")


if __name__ == "__main__":
    run_upgrade_head()
