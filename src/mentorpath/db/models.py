from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from mentorpath.db.base import Base, TimestampMixin

VALID_ROLES = ("student", "mentor")


def _filled(value: str | None) -> bool:
    return bool(value and value.strip())


def has_expertise(value) -> bool:
    return isinstance(value, list) and any(isinstance(item, str) and _filled(item) for item in value)


class Profile(TimestampMixin, Base):
    """Learner or mentor profile.

    ``onboarding_completed`` and ``mentor_onboarding_completed`` are advisory
    flags written by onboarding flows. Routing decisions use the derived
    ``is_*_onboarding_complete`` properties, which read the raw fields.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str | None] = mapped_column(String(20), nullable=True)
    role_selected: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    preferred_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    institution: Mapped[str | None] = mapped_column(String(255), nullable=True)

    learning_direction: Mapped[str | None] = mapped_column(Text, nullable=True)
    learning_goal: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_skill_level: Mapped[str | None] = mapped_column(String(40), nullable=True)
    time_commitment: Mapped[str | None] = mapped_column(String(40), nullable=True)
    motivation_type: Mapped[str | None] = mapped_column(String(40), nullable=True)

    inferred_skill_domain: Mapped[str | None] = mapped_column(String(80), nullable=True)
    inferred_skill_level: Mapped[str | None] = mapped_column(String(40), nullable=True)
    normalized_learning_goal: Mapped[str | None] = mapped_column(Text, nullable=True)
    onboarding_needs_clarification: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    onboarding_clarification_question: Mapped[str | None] = mapped_column(Text, nullable=True)

    mentor_expertise: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    mentor_experience_level: Mapped[str | None] = mapped_column(String(40), nullable=True)
    mentor_availability: Mapped[str | None] = mapped_column(String(40), nullable=True)
    mentor_motivation: Mapped[str | None] = mapped_column(Text, nullable=True)

    onboarding_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    onboarding_completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    mentor_onboarding_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    mentor_onboarding_completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @property
    def is_student_onboarding_complete(self) -> bool:
        if self.role != "student":
            return False
        return all(
            _filled(value)
            for value in (
                self.full_name,
                self.motivation_type,
                self.current_skill_level,
                self.time_commitment,
                self.institution,
            )
        )

    @property
    def is_mentor_onboarding_complete(self) -> bool:
        if self.role != "mentor":
            return False
        return (
            has_expertise(self.mentor_expertise)
            and _filled(self.mentor_experience_level)
            and _filled(self.mentor_availability)
        )


class OnboardingResponse(TimestampMixin, Base):
    __tablename__ = "onboarding_responses"
    __table_args__ = (UniqueConstraint("user_id", "step_key", name="uq_onboarding_response_step"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), index=True)
    step_key: Mapped[str] = mapped_column(String(80), nullable=False)
    question_key: Mapped[str] = mapped_column(String(120), default="", nullable=False)
    response_value: Mapped[str] = mapped_column(Text, default="", nullable=False)


class Mentor(TimestampMixin, Base):
    __tablename__ = "mentors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str] = mapped_column(Text, default="", nullable=False)
    specializations: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class CurriculumItem(TimestampMixin, Base):
    __tablename__ = "curriculum_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    item_type: Mapped[str] = mapped_column(String(40), default="reading", nullable=False)
    skill_domain: Mapped[str] = mapped_column(String(80), index=True, nullable=False)
    difficulty: Mapped[str] = mapped_column(String(20), default="Beginner", nullable=False)
    estimated_minutes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class UserCurriculumAssignment(TimestampMixin, Base):
    __tablename__ = "user_curriculum"
    __table_args__ = (UniqueConstraint("user_id", "curriculum_item_id", name="uq_user_curriculum_item"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), index=True)
    curriculum_item_id: Mapped[int] = mapped_column(
        ForeignKey("curriculum_items.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[str] = mapped_column(String(20), default="assigned", nullable=False)
    assigned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class UserMentorAssignment(TimestampMixin, Base):
    __tablename__ = "user_mentor"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), unique=True)
    mentor_id: Mapped[int] = mapped_column(ForeignKey("mentors.id", ondelete="CASCADE"), index=True)
    assignment_reason: Mapped[str] = mapped_column(Text, default="", nullable=False)
    score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class RepairAuditEntry(TimestampMixin, Base):
    __tablename__ = "repair_audit_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    field: Mapped[str] = mapped_column(String(80), nullable=False)
    source: Mapped[str] = mapped_column(String(80), nullable=False)
    value: Mapped[str] = mapped_column(Text, default="", nullable=False)
