from __future__ import annotations

from mentorpath.config import get_settings
from mentorpath.db.base import Base
from mentorpath.db.session import SessionLocal, engine
from mentorpath.db import models  # noqa: F401
from mentorpath.db.seed import seed_catalog


def ensure_data_directories() -> None:
    settings = get_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def init_database(*, seed: bool | None = None) -> dict[str, int]:
    ensure_data_directories()
    Base.metadata.create_all(bind=engine)

    if seed is None:
        seed = get_settings().seed_catalog_on_init
    if not seed:
        return {"seeded_mentors": 0, "seeded_curriculum_items": 0}

    with SessionLocal() as session:
        return seed_catalog(session)
