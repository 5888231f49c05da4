from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import and_, func, not_, or_, select
from sqlalchemy.orm import Session

from mentorpath.db.models import (
    VALID_ROLES,
    CurriculumItem,
    Mentor,
    OnboardingResponse,
    Profile,
    RepairAuditEntry,
    UserCurriculumAssignment,
    UserMentorAssignment,
)
from mentorpath.types import AuditEntry

STATUS_RANK = {"assigned": 0, "in_progress": 1, "completed": 2}


def _blank(column):
    return or_(column.is_(None), func.trim(column) == "")


class Repository:
    def __init__(self, session: Session):
        self.session = session

    # Profiles

    def get_profile(self, user_id: str) -> Profile | None:
        return self.session.get(Profile, user_id)

    def upsert_profile(self, user_id: str, values: dict) -> Profile:
        profile = self.session.get(Profile, user_id)
        if profile:
            for key, value in values.items():
                setattr(profile, key, value)
        else:
            profile = Profile(id=user_id, **values)
            self.session.add(profile)

        self.session.commit()
        self.session.refresh(profile)
        return profile

    def update_profile(self, user_id: str, values: dict) -> Profile:
        profile = self.session.get(Profile, user_id)
        if not profile:
            raise ValueError(f"profile {user_id} not found")
        for key, value in values.items():
            setattr(profile, key, value)

        self.session.commit()
        self.session.refresh(profile)
        return profile

    def list_profiles_needing_repair(self, limit: int = 0) -> list[Profile]:
        statement = (
            select(Profile)
            .where(
                not_(and_(Profile.role == "mentor", Profile.mentor_onboarding_completed.is_(True))),
                or_(
                    Profile.onboarding_completed.is_(False),
                    _blank(Profile.full_name),
                    Profile.role.is_(None),
                    Profile.role.not_in(VALID_ROLES),
                    _blank(Profile.learning_direction),
                    _blank(Profile.inferred_skill_domain),
                    _blank(Profile.inferred_skill_level),
                ),
            )
            .order_by(Profile.created_at.asc(), Profile.id.asc())
        )
        if limit:
            statement = statement.limit(limit)
        return list(self.session.scalars(statement).all())

    def list_completed_profiles(self) -> list[Profile]:
        statement = (
            select(Profile)
            .where(Profile.onboarding_completed.is_(True))
            .order_by(Profile.created_at.asc(), Profile.id.asc())
        )
        return list(self.session.scalars(statement).all())

    # Onboarding answers

    def list_onboarding_responses(self, user_id: str) -> list[OnboardingResponse]:
        statement = (
            select(OnboardingResponse)
            .where(OnboardingResponse.user_id == user_id)
            .order_by(OnboardingResponse.id.asc())
        )
        return list(self.session.scalars(statement).all())

    def upsert_onboarding_response(
        self,
        *,
        user_id: str,
        step_key: str,
        response_value: str,
        question_key: str = "",
    ) -> OnboardingResponse:
        existing = self.session.scalar(
            select(OnboardingResponse).where(
                and_(
                    OnboardingResponse.user_id == user_id,
                    OnboardingResponse.step_key == step_key,
                )
            )
        )
        if existing:
            existing.response_value = response_value
            existing.question_key = question_key or existing.question_key
            obj = existing
        else:
            obj = OnboardingResponse(
                user_id=user_id,
                step_key=step_key,
                question_key=question_key,
                response_value=response_value,
            )
            self.session.add(obj)

        self.session.commit()
        self.session.refresh(obj)
        return obj

    # Mentors

    def list_active_mentors(self) -> list[Mentor]:
        statement = select(Mentor).where(Mentor.is_active.is_(True)).order_by(Mentor.id.asc())
        return list(self.session.scalars(statement).all())

    def get_mentor(self, mentor_id: int) -> Mentor | None:
        return self.session.get(Mentor, mentor_id)

    def get_mentor_for_user(self, user_id: str) -> Mentor | None:
        return self.session.scalar(select(Mentor).where(Mentor.user_id == user_id))

    def upsert_mentor_for_user(self, user_id: str, *, name: str, specializations: list[str]) -> Mentor:
        mentor = self.get_mentor_for_user(user_id)
        if mentor:
            mentor.name = name
            mentor.specializations = list(specializations)
            mentor.is_active = True
        else:
            mentor = Mentor(user_id=user_id, name=name, specializations=list(specializations), is_active=True)
            self.session.add(mentor)

        self.session.commit()
        self.session.refresh(mentor)
        return mentor

    # Mentor assignments

    def get_user_mentor(self, user_id: str) -> UserMentorAssignment | None:
        return self.session.scalar(select(UserMentorAssignment).where(UserMentorAssignment.user_id == user_id))

    def has_user_mentor(self, user_id: str) -> bool:
        return self.get_user_mentor(user_id) is not None

    def upsert_user_mentor(self, *, user_id: str, mentor_id: int, reason: str, score: int) -> UserMentorAssignment:
        existing = self.get_user_mentor(user_id)
        if existing:
            existing.mentor_id = mentor_id
            existing.assignment_reason = reason
            existing.score = score
            obj = existing
        else:
            obj = UserMentorAssignment(user_id=user_id, mentor_id=mentor_id, assignment_reason=reason, score=score)
            self.session.add(obj)

        self.session.commit()
        self.session.refresh(obj)
        return obj

    # Curriculum

    def list_curriculum_items(self, skill_domain: str) -> list[CurriculumItem]:
        statement = (
            select(CurriculumItem)
            .where(
                and_(
                    CurriculumItem.skill_domain == skill_domain,
                    CurriculumItem.is_active.is_(True),
                )
            )
            .order_by(CurriculumItem.display_order.asc(), CurriculumItem.id.asc())
        )
        return list(self.session.scalars(statement).all())

    def list_user_curriculum_item_ids(self, user_id: str) -> set[int]:
        statement = select(UserCurriculumAssignment.curriculum_item_id).where(
            UserCurriculumAssignment.user_id == user_id
        )
        return set(self.session.scalars(statement).all())

    def add_curriculum_assignments(self, user_id: str, item_ids: list[int]) -> list[UserCurriculumAssignment]:
        now = datetime.now(UTC)
        rows = [
            UserCurriculumAssignment(
                user_id=user_id,
                curriculum_item_id=item_id,
                status="assigned",
                assigned_at=now,
            )
            for item_id in item_ids
        ]
        self.session.add_all(rows)
        self.session.commit()
        return rows

    def list_user_curriculum(self, user_id: str) -> list[tuple[UserCurriculumAssignment, CurriculumItem]]:
        statement = (
            select(UserCurriculumAssignment, CurriculumItem)
            .join(CurriculumItem, CurriculumItem.id == UserCurriculumAssignment.curriculum_item_id)
            .where(UserCurriculumAssignment.user_id == user_id)
            .order_by(UserCurriculumAssignment.assigned_at.asc(), UserCurriculumAssignment.id.asc())
        )
        return [(row[0], row[1]) for row in self.session.execute(statement).all()]

    def advance_curriculum_status(self, user_id: str, item_id: int, status: str) -> bool:
        if status not in STATUS_RANK:
            raise ValueError(f"unsupported curriculum status '{status}'")

        row = self.session.scalar(
            select(UserCurriculumAssignment).where(
                and_(
                    UserCurriculumAssignment.user_id == user_id,
                    UserCurriculumAssignment.curriculum_item_id == item_id,
                )
            )
        )
        if not row or STATUS_RANK[status] <= STATUS_RANK.get(row.status, 0):
            return False

        now = datetime.now(UTC)
        row.status = status
        if status == "in_progress":
            row.started_at = now
        elif status == "completed":
            row.completed_at = now

        self.session.commit()
        return True

    # Audit

    def append_audit_entries(self, entries: list[AuditEntry]) -> None:
        for entry in entries:
            self.session.add(
                RepairAuditEntry(
                    user_id=entry.user_id,
                    field=entry.field,
                    source=entry.source,
                    value=entry.value,
                )
            )
        self.session.commit()

    def list_audit_entries(self, user_id: str) -> list[RepairAuditEntry]:
        statement = (
            select(RepairAuditEntry)
            .where(RepairAuditEntry.user_id == user_id)
            .order_by(RepairAuditEntry.id.asc())
        )
        return list(self.session.scalars(statement).all())
