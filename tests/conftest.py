from __future__ import annotations

import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="mentorpath-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DIR}/mentorpath-test.db")
os.environ.setdefault("DATA_DIR", _TEST_DIR)
os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402

from mentorpath.db.base import Base  # noqa: E402
from mentorpath.db import models  # noqa: E402,F401
from mentorpath.db.seed import seed_catalog  # noqa: E402
from mentorpath.db.session import SessionLocal, engine  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        seed_catalog(session)
    yield


@pytest.fixture()
def db():
    with SessionLocal() as session:
        yield session
