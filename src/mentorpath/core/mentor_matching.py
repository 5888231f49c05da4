from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentorpath.db.repositories import Repository
from mentorpath.types import MentorAssignment, SweepReport

logger = logging.getLogger(__name__)

SPECIALIZATION_MATCH_POINTS = 10
EXACT_DOMAIN_POINTS = 5
MOTIVATION_POINTS = 3
VERSATILITY_POINTS = 1

FALLBACK_REASON = "Default mentor assignment"

DOMAIN_TO_SPECIALIZATIONS: dict[str, tuple[str, ...]] = {
    "Web Development": ("Web Development", "Full Stack Development"),
    "Full Stack Development": ("Full Stack Development", "Web Development", "Backend Engineering"),
    "Mobile Development": ("Mobile Development",),
    "Backend Engineering": ("Backend Engineering", "Full Stack Development"),
    "Data Science": ("Data Science",),
    "Game Development": ("Game Development",),
    "UI/UX & Design": ("UI/UX & Design",),
    "DevOps & Cloud": ("DevOps & Cloud",),
    "Cybersecurity": ("Cybersecurity",),
    "Computer Science Fundamentals": ("Computer Science Fundamentals",),
    "Business & Startups": ("Business & Startups",),
    "General": ("General", "Web Development"),
}

MOTIVATION_SPECIALIZATIONS: dict[str, tuple[str, ...]] = {
    "career": ("Business & Startups", "Backend Engineering", "Full Stack Development"),
    "project": ("Web Development", "Mobile Development", "Game Development"),
    "curiosity": ("Computer Science Fundamentals", "Data Science", "General"),
    "other": (),
}


class MentorLike(Protocol):
    id: int
    name: str
    specializations: list[str]


@dataclass(slots=True)
class ScoredMentor:
    mentor: MentorLike
    score: int
    reasons: list[str] = field(default_factory=list)
    fallback: bool = False

    @property
    def reason(self) -> str:
        return "; ".join(self.reasons)


def score_mentor(
    specializations: Sequence[str],
    domain: str | None,
    motivation: str | None,
) -> tuple[int, list[str]]:
    held = set(specializations or [])
    target_domain = domain or "General"
    targets = DOMAIN_TO_SPECIALIZATIONS.get(target_domain, ("General",))

    score = 0
    reasons: list[str] = []

    if held.intersection(targets):
        score += SPECIALIZATION_MATCH_POINTS
        reasons.append(f"Specializes in {target_domain}")

    if domain and domain in held:
        score += EXACT_DOMAIN_POINTS
        reasons.append("Direct domain match")

    if motivation and held.intersection(MOTIVATION_SPECIALIZATIONS.get(motivation, ())):
        score += MOTIVATION_POINTS
        reasons.append(f"Aligns with {motivation} motivation")

    if len(held) >= 2:
        score += VERSATILITY_POINTS
        reasons.append("Versatile mentor")

    return score, reasons


def rank_mentors(
    mentors: Sequence[MentorLike],
    domain: str | None,
    motivation: str | None,
) -> list[ScoredMentor]:
    scored = []
    for mentor in mentors:
        score, reasons = score_mentor(mentor.specializations, domain, motivation)
        scored.append(ScoredMentor(mentor=mentor, score=score, reasons=reasons))
    # Stable sort keeps catalog order among equal scores.
    return sorted(scored, key=lambda item: item.score, reverse=True)


def select_mentor(
    mentors: Sequence[MentorLike],
    domain: str | None,
    motivation: str | None,
) -> ScoredMentor | None:
    if not mentors:
        return None

    ranked = rank_mentors(mentors, domain, motivation)
    best = ranked[0]
    if best.score > 0:
        return best

    fallback = next((mentor for mentor in mentors if "General" in (mentor.specializations or [])), mentors[0])
    return ScoredMentor(mentor=fallback, score=0, reasons=[FALLBACK_REASON], fallback=True)


class MentorMatchingEngine:
    def __init__(self, session: Session):
        self.session = session
        self.repo = Repository(session)

    def assign_mentor(self, user_id: str) -> MentorAssignment | None:
        try:
            profile = self.repo.get_profile(user_id)
            if profile is None:
                logger.warning("Mentor assignment skipped, profile not found user_id=%s", user_id)
                return None

            mentors = self.repo.list_active_mentors()
            selection = select_mentor(mentors, profile.inferred_skill_domain, profile.motivation_type)
            if selection is None:
                logger.warning("Mentor assignment skipped, no active mentors user_id=%s", user_id)
                return None

            self.repo.upsert_user_mentor(
                user_id=user_id,
                mentor_id=selection.mentor.id,
                reason=selection.reason,
                score=selection.score,
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Mentor assignment failed user_id=%s", user_id)
            return MentorAssignment(success=False, error=str(exc))

        logger.info(
            "Assigned mentor user_id=%s mentor_id=%s score=%s fallback=%s",
            user_id,
            selection.mentor.id,
            selection.score,
            selection.fallback,
        )
        return MentorAssignment(
            mentor_id=selection.mentor.id,
            mentor_name=selection.mentor.name,
            reason=selection.reason,
            score=selection.score,
            fallback=selection.fallback,
        )

    def get_user_mentor(self, user_id: str) -> MentorAssignment | None:
        assignment = self.repo.get_user_mentor(user_id)
        if assignment is None:
            return None
        mentor = self.repo.get_mentor(assignment.mentor_id)
        return MentorAssignment(
            mentor_id=assignment.mentor_id,
            mentor_name=mentor.name if mentor else "",
            reason=assignment.assignment_reason,
            score=assignment.score,
            fallback=assignment.assignment_reason == FALLBACK_REASON,
        )

    def has_assigned_mentor(self, user_id: str) -> bool:
        return self.repo.has_user_mentor(user_id)

    def retroactively_assign_mentors(self) -> SweepReport:
        report = SweepReport()
        pending = [
            profile.id
            for profile in self.repo.list_completed_profiles()
            if not self.repo.has_user_mentor(profile.id)
        ]
        logger.info("Retroactive mentor sweep found %s users without mentors", len(pending))

        for user_id in pending:
            report.processed += 1
            try:
                result = self.assign_mentor(user_id)
            except Exception as exc:
                logger.exception("Retroactive mentor assignment failed user_id=%s", user_id)
                report.errors.append(f"User {user_id}: {exc}")
                continue

            if result is None:
                report.skipped += 1
            elif not result.success:
                report.errors.append(f"User {user_id}: {result.error}")
            else:
                report.assigned += 1

        logger.info("Retroactive mentor sweep complete assigned=%s processed=%s", report.assigned, report.processed)
        return report
