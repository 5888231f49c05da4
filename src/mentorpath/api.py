"""Public entry points for the UI and backend layers.

Every function accepts an optional SQLAlchemy session. When none is given a
short-lived session is opened from ``SessionLocal`` and closed afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy.orm import Session

from mentorpath.core import intent_classifier, skill_level
from mentorpath.core.curriculum import CurriculumEngine
from mentorpath.core.mentor_matching import MentorMatchingEngine
from mentorpath.core.onboarding_gate import OnboardingGate
from mentorpath.core.repair import RetroactiveRepairJob
from mentorpath.db.session import SessionLocal
from mentorpath.types import (
    ClassificationResult,
    CurriculumRecommendation,
    GateDecision,
    MentorAssignment,
    RepairReport,
    SkillAnalysis,
)

T = TypeVar("T")


@contextmanager
def _session_scope(session: Session | None) -> Iterator[Session]:
    if session is not None:
        yield session
        return
    with SessionLocal() as db:
        yield db


def _with_session(session: Session | None, call: Callable[[Session], T]) -> T:
    with _session_scope(session) as db:
        return call(db)


def classify_intent(text: str | None) -> ClassificationResult:
    return intent_classifier.classify_intent(text)


def analyze_skill_level(text: str | None, direction: str | None) -> SkillAnalysis:
    return skill_level.analyze_skill_level(text, direction)


def assign_mentor(user_id: str, *, session: Session | None = None) -> MentorAssignment | None:
    return _with_session(session, lambda db: MentorMatchingEngine(db).assign_mentor(user_id))


def generate_curriculum(user_id: str, *, session: Session | None = None) -> CurriculumRecommendation | None:
    return _with_session(session, lambda db: CurriculumEngine(db).generate_curriculum(user_id))


def check_onboarding_gate(
    user_id: str | None,
    current_path: str,
    *,
    session: Session | None = None,
) -> GateDecision:
    return _with_session(session, lambda db: OnboardingGate(db).check(user_id, current_path))


def run_retroactive_repair(*, session: Session | None = None) -> list[RepairReport]:
    return _with_session(session, lambda db: RetroactiveRepairJob(db).run())
