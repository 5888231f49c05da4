from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from mentorpath.api import assign_mentor
from mentorpath.core.mentor_matching import FALLBACK_REASON, MentorMatchingEngine
from mentorpath.db.models import Mentor, UserMentorAssignment
from mentorpath.db.repositories import Repository


def _assignment_count(db, user_id: str) -> int:
    return db.scalar(
        select(func.count()).select_from(UserMentorAssignment).where(UserMentorAssignment.user_id == user_id)
    )


def test_assigns_best_scoring_mentor_by_catalog_order(db) -> None:
    Repository(db).upsert_profile(
        "u1",
        {"role": "student", "inferred_skill_domain": "Data Science", "motivation_type": "curiosity"},
    )

    result = MentorMatchingEngine(db).assign_mentor("u1")
    assert result is not None and result.success
    assert result.mentor_name == "Michael Zhang"
    assert result.score == 19
    assert result.reason == (
        "Specializes in Data Science; Direct domain match; Aligns with curiosity motivation; Versatile mentor"
    )
    assert not result.fallback


def test_assignment_is_idempotent(db) -> None:
    Repository(db).upsert_profile("u1", {"inferred_skill_domain": "Web Development"})
    engine = MentorMatchingEngine(db)

    first = engine.assign_mentor("u1")
    second = engine.assign_mentor("u1")

    assert first.mentor_id == second.mentor_id
    assert first.mentor_name == "Sarah Chen"
    assert _assignment_count(db, "u1") == 1
    assert engine.has_assigned_mentor("u1")
    assert engine.get_user_mentor("u1").mentor_name == "Sarah Chen"


def test_missing_profile_returns_none(db) -> None:
    assert MentorMatchingEngine(db).assign_mentor("ghost") is None
    assert assign_mentor("ghost", session=db) is None


def test_fallback_assignment_is_persisted(db) -> None:
    for mentor in db.scalars(select(Mentor)).all():
        mentor.is_active = mentor.name == "Ryan Cooper"
    db.commit()
    Repository(db).upsert_profile("u1", {"inferred_skill_domain": "Cybersecurity"})

    engine = MentorMatchingEngine(db)
    result = engine.assign_mentor("u1")
    assert result.mentor_name == "Ryan Cooper"
    assert result.fallback
    assert result.score == 0
    assert result.reason == FALLBACK_REASON
    assert engine.get_user_mentor("u1").fallback


def test_no_active_mentors_returns_none(db) -> None:
    for mentor in db.scalars(select(Mentor)).all():
        mentor.is_active = False
    db.commit()
    Repository(db).upsert_profile("u1", {"inferred_skill_domain": "Cybersecurity"})

    assert MentorMatchingEngine(db).assign_mentor("u1") is None


def test_persistence_failure_reports_error(db, monkeypatch) -> None:
    Repository(db).upsert_profile("u1", {"inferred_skill_domain": "Cybersecurity"})
    engine = MentorMatchingEngine(db)

    def broken(**kwargs):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(engine.repo, "upsert_user_mentor", broken)
    result = engine.assign_mentor("u1")
    assert not result.success
    assert "locked" in result.error


def test_retroactive_sweep_only_touches_completed_users(db) -> None:
    repo = Repository(db)
    repo.upsert_profile("done", {"onboarding_completed": True, "inferred_skill_domain": "Game Development"})
    repo.upsert_profile("pending", {"onboarding_completed": False})

    engine = MentorMatchingEngine(db)
    report = engine.retroactively_assign_mentors()
    assert report.processed == 1
    assert report.assigned == 1
    assert report.errors == []
    assert engine.get_user_mentor("done").mentor_name == "Ryan Cooper"
    assert not engine.has_assigned_mentor("pending")

    assert engine.retroactively_assign_mentors().processed == 0
