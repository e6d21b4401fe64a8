"""Применение миграций Alembic из кода приложения.

Ревизии лежат в app/db/migrations/versions, применённая версия хранится
в таблице alembic_version, поэтому повторный запуск ничего не делает.
"""

import logging
from pathlib import Path
from typing import List, Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Engine

logger = logging.getLogger("voting.storage")

MIGRATIONS_DIR = Path(__file__).resolve().parent / "db" / "migrations"


def alembic_config() -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    return cfg


def current_revision(engine: Engine) -> Optional[str]:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def _revision_chain(cfg: Config) -> List[str]:
    # От базовой ревизии к head
    script = ScriptDirectory.from_config(cfg)
    return [rev.revision for rev in reversed(list(script.walk_revisions()))]


def apply_migrations(engine: Engine) -> List[str]:
    """Поднимает схему до head и возвращает применённые ревизии по порядку"""
    cfg = alembic_config()
    chain = _revision_chain(cfg)
    before = current_revision(engine)

    with engine.begin() as conn:
        cfg.attributes["connection"] = conn
        command.upgrade(cfg, "head")

    after = current_revision(engine)
    start = chain.index(before) + 1 if before else 0
    applied = chain[start : chain.index(after) + 1] if after else []
    for revision in applied:
        logger.info("Applied migration %s", revision)
    return applied
