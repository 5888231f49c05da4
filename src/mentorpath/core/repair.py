"""Batch repair of historical profiles that are missing onboarding data.

Each user is repaired in two phases. The fill phase derives missing profile
fields and marks onboarding complete only when name, role and learning
direction are all present. The completion saga then runs mentor assignment
and curriculum generation as ordered steps; a failing step is recorded on the
report and the following steps still run.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentorpath.config import Settings, get_settings
from mentorpath.core.curriculum import CurriculumEngine
from mentorpath.core.mentor_matching import MentorMatchingEngine
from mentorpath.core.onboarding import derive_learning_fields
from mentorpath.core.rate_limit import KeyedLocks
from mentorpath.core.runtime import get_user_locks
from mentorpath.db.models import VALID_ROLES, OnboardingResponse, Profile
from mentorpath.db.repositories import Repository
from mentorpath.logging_config import get_audit_logger
from mentorpath.types import AuditEntry, RepairReport, RepairSummary, RetroactiveFixReport

logger = logging.getLogger(__name__)
audit_logger = get_audit_logger()

EMAIL_SEPARATORS = re.compile(r"[._-]")
DIGITS = re.compile(r"\d+")

# (field, source) pairs filled from the classifier chain, in write order.
DERIVED_FIELD_SOURCES = (
    ("inferred_skill_domain", "intent_classifier"),
    ("inferred_skill_level", "skill_level_classifier"),
    ("normalized_learning_goal", "skill_level_classifier"),
)

SagaStep = Callable[[str], AuditEntry | None]


def _filled(value: str | None) -> bool:
    return bool(value and value.strip())


def name_from_email(email: str | None) -> str | None:
    if not email:
        return None
    local_part = email.split("@")[0]
    if not local_part:
        return None

    cleaned = DIGITS.sub("", EMAIL_SEPARATORS.sub(" ", local_part))
    name = " ".join(word[0].upper() + word[1:].lower() for word in cleaned.split())
    return name if len(name) >= 2 else None


def infer_full_name(profile: Profile) -> tuple[str, str] | None:
    preferred = (profile.preferred_name or "").strip()
    if len(preferred) >= 2:
        return preferred, "preferred_name"

    from_email = name_from_email(profile.email)
    if from_email:
        return from_email, "email"
    return None


def infer_learning_direction(
    profile: Profile,
    responses: Sequence[OnboardingResponse],
) -> tuple[str, str] | None:
    for response in responses:
        if response.step_key == "learning_direction" and _filled(response.response_value):
            return response.response_value.strip(), "onboarding_responses"

    if _filled(profile.learning_goal):
        return profile.learning_goal.strip(), "learning_goal"
    return None


def is_repaired(profile: Profile) -> bool:
    if profile.role == "mentor" and profile.mentor_onboarding_completed:
        return True
    return (
        profile.onboarding_completed
        and _filled(profile.full_name)
        and profile.role in VALID_ROLES
        and _filled(profile.learning_direction)
        and _filled(profile.inferred_skill_domain)
        and _filled(profile.inferred_skill_level)
    )


def summarize(reports: Sequence[RepairReport]) -> RepairSummary:
    fields: Counter[str] = Counter()
    for report in reports:
        fields.update(report.filled_fields)

    statuses = Counter(report.status for report in reports)
    return RepairSummary(
        total=len(reports),
        completed=statuses["completed"],
        skipped=statuses["skipped"],
        errors=statuses["error"],
        fields_filled=dict(fields),
    )


class RetroactiveRepairJob:
    def __init__(
        self,
        session: Session,
        *,
        settings: Settings | None = None,
        locks: KeyedLocks | None = None,
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.repo = Repository(session)
        self.locks = locks or get_user_locks()
        self.mentors = MentorMatchingEngine(session)
        self.curriculum = CurriculumEngine(session, settings=self.settings)

    def run(self) -> list[RepairReport]:
        try:
            profiles = self.repo.list_profiles_needing_repair(limit=self.settings.repair_batch_limit)
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Repair run could not list profiles")
            return []

        user_ids = [profile.id for profile in profiles]
        logger.info("Repair run found %s profiles needing repair", len(user_ids))

        reports: list[RepairReport] = []
        for user_id in user_ids:
            try:
                report = self.repair_user(user_id)
            except Exception as exc:
                logger.exception("Repair failed user_id=%s", user_id)
                report = RepairReport(user_id=user_id, status="error", error=str(exc))
            reports.append(report)

        summary = summarize(reports)
        logger.info(
            "Repair run complete completed=%s skipped=%s errors=%s total=%s",
            summary.completed,
            summary.skipped,
            summary.errors,
            summary.total,
        )
        return reports

    def repair_user(self, user_id: str) -> RepairReport:
        with self.locks.hold(user_id):
            try:
                return self._repair_locked(user_id)
            except SQLAlchemyError as exc:
                self.session.rollback()
                logger.exception("Repair persistence failed user_id=%s", user_id)
                return RepairReport(user_id=user_id, status="error", error=str(exc))

    def retroactive_fix(self) -> RetroactiveFixReport:
        logger.info("Retroactive fix step 1: repairing profiles")
        onboarding = summarize(self.run())
        logger.info("Retroactive fix step 2: assigning mentors")
        mentor_report = self.mentors.retroactively_assign_mentors()
        logger.info("Retroactive fix step 3: generating curriculum")
        curriculum_report = self.curriculum.retroactively_generate_curriculum()
        return RetroactiveFixReport(
            onboarding=onboarding,
            mentor_assignment=mentor_report,
            curriculum_generation=curriculum_report,
            timestamp=datetime.now(UTC).isoformat(),
        )

    def _repair_locked(self, user_id: str) -> RepairReport:
        profile = self.repo.get_profile(user_id)
        if profile is None:
            return RepairReport(user_id=user_id, status="error", error="Profile not found")
        if is_repaired(profile):
            return RepairReport(user_id=user_id, status="skipped")

        updates, audit = self._fill_missing_fields(profile)

        full_name = updates.get("full_name", profile.full_name)
        role = updates.get("role", profile.role)
        direction = updates.get("learning_direction", profile.learning_direction)
        if not (_filled(full_name) and role in VALID_ROLES and _filled(direction)):
            logger.warning(
                "Repair skipped user_id=%s missing full_name=%s role=%s learning_direction=%s",
                user_id,
                not _filled(full_name),
                role not in VALID_ROLES,
                not _filled(direction),
            )
            return RepairReport(user_id=user_id, status="skipped")

        if not profile.onboarding_completed:
            updates["onboarding_completed"] = True
            updates["onboarding_completed_at"] = datetime.now(UTC)
        self.repo.update_profile(user_id, updates)
        self._record_audit(audit)

        report = RepairReport(user_id=user_id, status="completed", audit=list(audit))
        for name, step in self._completion_saga():
            try:
                entry = step(user_id)
            except Exception as exc:
                self.session.rollback()
                logger.exception("Repair step failed user_id=%s step=%s", user_id, name)
                report.step_errors[name] = str(exc)
                continue
            if entry is not None:
                self._record_audit([entry])
                report.audit.append(entry)

        report.filled_fields = [entry.field for entry in report.audit]
        logger.info("Repair completed user_id=%s filled=%s", user_id, len(report.filled_fields))
        return report

    def _fill_missing_fields(self, profile: Profile) -> tuple[dict[str, Any], list[AuditEntry]]:
        updates: dict[str, Any] = {}
        audit: list[AuditEntry] = []

        def fill(field: str, value: str, source: str) -> None:
            updates[field] = value
            audit.append(AuditEntry(user_id=profile.id, field=field, source=source, value=value))

        if not _filled(profile.full_name):
            inferred = infer_full_name(profile)
            if inferred:
                fill("full_name", *inferred)

        if profile.role not in VALID_ROLES:
            fill("role", "student", "default")
            updates["role_selected"] = True

        learning_text = profile.learning_direction
        if not _filled(learning_text):
            inferred = infer_learning_direction(profile, self.repo.list_onboarding_responses(profile.id))
            if inferred:
                learning_text = inferred[0]
                fill("learning_direction", *inferred)

        if _filled(learning_text):
            derived = derive_learning_fields(learning_text)
            for field, source in DERIVED_FIELD_SOURCES:
                if not _filled(getattr(profile, field)) and derived[field]:
                    fill(field, derived[field], source)
            if derived["onboarding_needs_clarification"]:
                updates["onboarding_needs_clarification"] = True
                updates["onboarding_clarification_question"] = derived["onboarding_clarification_question"]

        return updates, audit

    def _completion_saga(self) -> list[tuple[str, SagaStep]]:
        return [
            ("mentor_assignment", self._assign_mentor_step),
            ("curriculum_generated", self._generate_curriculum_step),
        ]

    def _assign_mentor_step(self, user_id: str) -> AuditEntry | None:
        if self.repo.has_user_mentor(user_id):
            return None
        result = self.mentors.assign_mentor(user_id)
        if result is None:
            return None
        if not result.success:
            raise RuntimeError(result.error or "mentor assignment failed")
        return AuditEntry(
            user_id=user_id,
            field="mentor_assignment",
            source="mentor_assignment",
            value=result.mentor_name,
        )

    def _generate_curriculum_step(self, user_id: str) -> AuditEntry | None:
        result = self.curriculum.generate_curriculum(user_id)
        if result is None:
            return None
        if not result.success:
            raise RuntimeError(result.error or "curriculum generation failed")
        if not result.new_item_ids:
            return None
        return AuditEntry(
            user_id=user_id,
            field="curriculum_generated",
            source="curriculum_recommendation",
            value=f"{len(result.new_item_ids)} items",
        )

    def _record_audit(self, entries: Sequence[AuditEntry]) -> None:
        if not entries:
            return
        for entry in entries:
            audit_logger.info(
                "AUDIT user=%s field=%s source=%s value=%r", entry.user_id, entry.field, entry.source, entry.value
            )
        self.repo.append_audit_entries(list(entries))
