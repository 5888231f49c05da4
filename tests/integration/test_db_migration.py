from __future__ import annotations

import os
import sqlite3
import subprocess
import sys
from pathlib import Path

EXPECTED_TABLES = {
    "profiles",
    "onboarding_responses",
    "mentors",
    "curriculum_items",
    "user_curriculum",
    "user_mentor",
    "repair_audit_log",
}


def _tables(db_path: Path) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    finally:
        conn.close()
    return {row[0] for row in rows}


def test_alembic_upgrade_and_downgrade_initial_schema(tmp_path: Path) -> None:
    repo_root = Path(__file__).resolve().parents[2]
    db_path = tmp_path / "migration_test.db"
    env = os.environ.copy()
    env["DATABASE_URL"] = f"sqlite:///{db_path}"

    subprocess.run(
        [sys.executable, "-m", "alembic", "-c", "alembic.ini", "upgrade", "0001_initial_schema"],
        cwd=repo_root,
        env=env,
        check=True,
    )
    assert EXPECTED_TABLES <= _tables(db_path)

    conn = sqlite3.connect(db_path)
    profile_cols = {row[1] for row in conn.execute("PRAGMA table_info(profiles)").fetchall()}
    conn.close()
    assert {"inferred_skill_domain", "mentor_expertise", "onboarding_completed"} <= profile_cols

    subprocess.run(
        [sys.executable, "-m", "alembic", "-c", "alembic.ini", "downgrade", "base"],
        cwd=repo_root,
        env=env,
        check=True,
    )
    assert not EXPECTED_TABLES & _tables(db_path)
