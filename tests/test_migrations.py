import os
import subprocess
import sys
from pathlib import Path

from sqlalchemy import create_engine, inspect

from app import models
from app.migrations import apply_migrations, current_revision
from app.seed import SAMPLE_SUMMER_HOUSES, seed_summer_houses

ROOT = Path(__file__).resolve().parents[1]


def test_migrations_are_idempotent(db_session, db_engine):
    # db_session уже применил миграции
    assert current_revision(db_engine) == "001"
    assert apply_migrations(db_engine) == []

    tables = set(inspect(db_engine).get_table_names())
    assert {"users", "summer_houses", "votes", "alembic_version"} <= tables


def test_fresh_database_migrates_to_head(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'fresh.db'}")
    try:
        assert current_revision(engine) is None
        assert apply_migrations(engine) == ["001"]
        assert current_revision(engine) == "001"

        indexes = {ix["name"] for ix in inspect(engine).get_indexes("users")}
        assert {"ix_users_email", "ix_users_session_id"} <= indexes
    finally:
        engine.dispose()


def test_seed_is_idempotent(db_session):
    assert seed_summer_houses(db_session) == len(SAMPLE_SUMMER_HOUSES)
    assert seed_summer_houses(db_session) == 0
    assert db_session.query(models.SummerHouse).count() == len(SAMPLE_SUMMER_HOUSES)


def test_seed_skips_non_empty_catalogue(db_session, houses):
    assert seed_summer_houses(db_session) == 0
    assert db_session.query(models.SummerHouse).count() == len(houses)


def _run_script(module, args, db_path):
    env = os.environ.copy()
    env["DATABASE_URL"] = f"sqlite:///{db_path}"
    cmd = [sys.executable, "-m", module] + args
    return subprocess.run(cmd, env=env, cwd=ROOT, capture_output=True, text=True)


def test_prestart_applies_migrations_then_runs_command(tmp_path):
    db_path = tmp_path / "voting.db"
    r = _run_script(
        "scripts.prestart", [sys.executable, "-c", "print('OK')"], db_path
    )
    assert r.returncode == 0, r.stderr
    assert "OK" in r.stdout

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        assert {"users", "summer_houses", "votes"} <= set(
            inspect(engine).get_table_names()
        )
    finally:
        engine.dispose()


def test_seed_script_twice(tmp_path):
    db_path = tmp_path / "voting.db"
    first = _run_script("scripts.seed", [], db_path)
    assert first.returncode == 0, first.stderr
    assert f"{len(SAMPLE_SUMMER_HOUSES)} summer houses created" in first.stdout

    second = _run_script("scripts.seed", [], db_path)
    assert second.returncode == 0, second.stderr
    assert "0 summer houses created" in second.stdout
