from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentorpath.core.curriculum import CurriculumEngine
from mentorpath.core.domain_adapter import adapt_intent_to_domain, is_skill_domain
from mentorpath.core.intent_classifier import classify_intent
from mentorpath.core.mentor_matching import MentorMatchingEngine
from mentorpath.core.rate_limit import RateLimiter
from mentorpath.core.skill_level import analyze_skill_level
from mentorpath.db.models import Profile, has_expertise
from mentorpath.db.repositories import Repository
from mentorpath.types import (
    MentorField,
    MotivationType,
    OnboardingProgress,
    OnboardingStep,
    OperationResult,
    Role,
    TimeCommitment,
)

logger = logging.getLogger(__name__)

STEP_ORDER: tuple[OnboardingStep, ...] = (
    "full_name",
    "institution",
    "learning_direction",
    "skill_level",
    "time_commitment",
    "motivation",
    "role",
)
BASE_REQUIRED_STEPS = ("full_name", "role", "institution")
STUDENT_REQUIRED_STEPS = (
    "full_name",
    "role",
    "institution",
    "learning_direction",
    "skill_level",
    "time_commitment",
    "motivation",
)

SKILL_LEVEL_CHOICES = ("beginner", "intermediate", "advanced")
TIME_COMMITMENT_CHOICES: tuple[TimeCommitment, ...] = ("casual", "regular", "intensive")
MOTIVATION_CHOICES: tuple[MotivationType, ...] = ("career", "curiosity", "project", "other")
ROLE_CHOICES: tuple[Role, ...] = ("student", "mentor")

MENTOR_FIELDS: tuple[MentorField, ...] = (
    "full_name",
    "institution",
    "mentor_expertise",
    "mentor_experience_level",
    "mentor_availability",
    "mentor_motivation",
)
MENTOR_EXPERIENCE_LEVELS = ("beginner", "intermediate", "advanced")
MENTOR_AVAILABILITY_OPTIONS = ("casual", "regular", "fulltime")


def derive_learning_fields(text: str) -> dict[str, Any]:
    """Run the classifier chain over learning-direction text.

    Returns the derived profile columns; it never raises for unusable text.
    """
    classification = classify_intent(text)
    analysis = analyze_skill_level(text, classification.detected_domain or "Other")
    return {
        "inferred_skill_domain": adapt_intent_to_domain(classification),
        "inferred_skill_level": analysis.skill_level,
        "normalized_learning_goal": analysis.learning_goal,
        "onboarding_needs_clarification": analysis.needs_clarification,
        "onboarding_clarification_question": analysis.clarification_question,
    }


def profile_update_for_step(step_key: str, value: str) -> dict[str, Any] | None:
    if step_key == "full_name":
        return {"full_name": value}
    if step_key == "institution":
        return {"institution": value}
    if step_key == "learning_direction":
        return {"learning_direction": value, "learning_goal": value, **derive_learning_fields(value)}
    if step_key == "skill_level":
        return {"current_skill_level": value} if value in SKILL_LEVEL_CHOICES else None
    if step_key == "time_commitment":
        return {"time_commitment": value} if value in TIME_COMMITMENT_CHOICES else None
    if step_key == "motivation":
        return {"motivation_type": value} if value in MOTIVATION_CHOICES else None
    if step_key == "role":
        return {"role": value, "role_selected": True} if value in ROLE_CHOICES else None
    return None


def validate_mentor_field(field: str, value: Any) -> tuple[Any, str | None]:
    if field not in MENTOR_FIELDS:
        return None, f"Unknown mentor field '{field}'"

    if field == "full_name":
        if not isinstance(value, str) or len(value.strip()) < 2:
            return None, "Full name must be at least 2 characters"
        return value.strip(), None

    if field in {"institution", "mentor_motivation"}:
        if not isinstance(value, str):
            return None, f"{field} must be a string"
        return value.strip() or None, None

    if field == "mentor_expertise":
        if not isinstance(value, list):
            return None, "Expertise must be a list"
        if not value:
            return None, "Please select at least one area of expertise"
        valid = [item for item in dict.fromkeys(value) if is_skill_domain(item)]
        if not valid:
            return None, "Invalid expertise selection"
        return valid, None

    if field == "mentor_experience_level":
        if value not in MENTOR_EXPERIENCE_LEVELS:
            return None, "Invalid experience level"
        return value, None

    if value not in MENTOR_AVAILABILITY_OPTIONS:
        return None, "Invalid availability selection"
    return value, None


def mentor_missing_fields(profile: Profile | None) -> list[str]:
    if profile is None:
        return ["full_name", "mentor_expertise", "mentor_experience_level", "mentor_availability"]

    missing = []
    if not (profile.full_name or "").strip():
        missing.append("full_name")
    if not has_expertise(profile.mentor_expertise):
        missing.append("mentor_expertise")
    if not (profile.mentor_experience_level or "").strip():
        missing.append("mentor_experience_level")
    if not (profile.mentor_availability or "").strip():
        missing.append("mentor_availability")
    return missing


class OnboardingService:
    def __init__(self, session: Session, *, limiter: RateLimiter | None = None):
        self.session = session
        self.repo = Repository(session)
        self.limiter = limiter

    def save_response(
        self,
        user_id: str,
        step_key: str,
        value: str,
        *,
        question_key: str = "",
    ) -> OperationResult:
        if self.limiter is not None:
            decision = self.limiter.hit(f"onboarding:{user_id}")
            if not decision.allowed:
                return OperationResult(
                    success=False,
                    error=f"Too many requests, retry in {decision.retry_after:.0f}s",
                )

        if step_key not in STEP_ORDER:
            return OperationResult(success=False, error=f"Unknown onboarding step '{step_key}'")

        cleaned = (value or "").strip()
        if not cleaned:
            return OperationResult(success=False, error="Response cannot be empty")

        update = profile_update_for_step(step_key, cleaned)
        if update is None:
            return OperationResult(success=False, error=f"Invalid value for step '{step_key}'")

        try:
            self.repo.upsert_profile(user_id, update)
            self.repo.upsert_onboarding_response(
                user_id=user_id,
                step_key=step_key,
                question_key=question_key or step_key,
                response_value=cleaned,
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Saving onboarding response failed user_id=%s step=%s", user_id, step_key)
            return OperationResult(success=False, error=str(exc))

        logger.info("Saved onboarding step=%s user_id=%s", step_key, user_id)
        return OperationResult(success=True)

    def get_progress(self, user_id: str) -> OnboardingProgress:
        responses = {row.step_key: row.response_value for row in self.repo.list_onboarding_responses(user_id)}
        completed = [step for step in STEP_ORDER if step in responses]
        current = next((step for step in STEP_ORDER if step not in responses), None)
        return OnboardingProgress(completed_steps=completed, current_step=current, responses=responses)

    def complete_student_onboarding(self, user_id: str) -> OperationResult:
        progress = self.get_progress(user_id)
        role = progress.responses.get("role")
        required = STUDENT_REQUIRED_STEPS if role == "student" else BASE_REQUIRED_STEPS
        missing = [step for step in required if step not in progress.completed_steps]
        if missing:
            return OperationResult(success=False, error=f"Missing required steps: {', '.join(missing)}")

        values: dict[str, Any] = {
            "onboarding_completed": True,
            "onboarding_completed_at": datetime.now(UTC),
        }
        learning_text = progress.responses.get("learning_direction")
        if learning_text:
            values.update(derive_learning_fields(learning_text))

        try:
            profile = self.repo.upsert_profile(user_id, values)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Completing onboarding failed user_id=%s", user_id)
            return OperationResult(success=False, error=str(exc))

        logger.info(
            "Completed onboarding user_id=%s role=%s domain=%s",
            user_id,
            role,
            profile.inferred_skill_domain,
        )

        if role == "student":
            self._run_post_completion(user_id)
        return OperationResult(success=True)

    def _run_post_completion(self, user_id: str) -> None:
        mentor = MentorMatchingEngine(self.session).assign_mentor(user_id)
        if mentor is not None and not mentor.success:
            logger.warning("Mentor assignment after onboarding failed user_id=%s error=%s", user_id, mentor.error)

        curriculum = CurriculumEngine(self.session).generate_curriculum(user_id)
        if curriculum is not None and not curriculum.success:
            logger.warning(
                "Curriculum generation after onboarding failed user_id=%s error=%s", user_id, curriculum.error
            )

    def save_mentor_field(self, user_id: str, field: str, value: Any) -> OperationResult:
        cleaned, error = validate_mentor_field(field, value)
        if error:
            return OperationResult(success=False, error=error)

        try:
            self.repo.upsert_profile(user_id, {field: cleaned})
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Saving mentor field failed user_id=%s field=%s", user_id, field)
            return OperationResult(success=False, error=str(exc))

        logger.info("Saved mentor field=%s user_id=%s", field, user_id)
        return OperationResult(success=True)

    def get_mentor_missing_fields(self, user_id: str) -> list[str]:
        return mentor_missing_fields(self.repo.get_profile(user_id))

    def complete_mentor_onboarding(self, user_id: str) -> OperationResult:
        profile = self.repo.get_profile(user_id)
        missing = mentor_missing_fields(profile)
        if missing:
            return OperationResult(success=False, error=f"Missing required fields: {', '.join(missing)}")

        try:
            self.repo.update_profile(
                user_id,
                {
                    "role": "mentor",
                    "role_selected": True,
                    "mentor_onboarding_completed": True,
                    "mentor_onboarding_completed_at": datetime.now(UTC),
                },
            )
            mentor = self.repo.upsert_mentor_for_user(
                user_id,
                name=profile.full_name or "Mentor",
                specializations=list(profile.mentor_expertise or []),
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Completing mentor onboarding failed user_id=%s", user_id)
            return OperationResult(success=False, error=str(exc))

        logger.info("Completed mentor onboarding user_id=%s mentor_id=%s", user_id, mentor.id)
        return OperationResult(success=True, mentor_id=mentor.id)
