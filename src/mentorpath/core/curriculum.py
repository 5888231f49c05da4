from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentorpath.config import Settings, get_settings
from mentorpath.db.models import CurriculumItem
from mentorpath.db.repositories import Repository
from mentorpath.types import (
    AssignedCurriculumItem,
    CurriculumItemView,
    CurriculumProgress,
    CurriculumRecommendation,
    SweepReport,
)

logger = logging.getLogger(__name__)

FALLBACK_DOMAIN = "General"
DEFAULT_ITEM_LIMIT = 5
ITEM_LIMITS = {"casual": 3, "regular": 5, "intensive": 8}
DIFFICULTY_RANK = {"Beginner": 0, "Intermediate": 1, "Advanced": 2}


def item_limit(time_commitment: str | None) -> int:
    return ITEM_LIMITS.get(time_commitment or "regular", DEFAULT_ITEM_LIMIT)


def order_items(items: Sequence[CurriculumItem]) -> list[CurriculumItem]:
    return sorted(items, key=lambda item: (DIFFICULTY_RANK.get(item.difficulty, 1), item.display_order))


def recommend_items(items: Sequence[CurriculumItem], time_commitment: str | None) -> list[CurriculumItem]:
    return order_items(items)[: item_limit(time_commitment)]


def to_view(item: CurriculumItem) -> CurriculumItemView:
    return CurriculumItemView(
        id=item.id,
        title=item.title,
        skill_domain=item.skill_domain,
        difficulty=item.difficulty,
        estimated_minutes=item.estimated_minutes,
        display_order=item.display_order,
    )


def _iso(value) -> str | None:
    return value.isoformat() if value else None


class CurriculumEngine:
    def __init__(self, session: Session, *, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.repo = Repository(session)

    def generate_curriculum(self, user_id: str) -> CurriculumRecommendation | None:
        try:
            profile = self.repo.get_profile(user_id)
            if profile is None:
                logger.warning("Curriculum generation skipped, profile not found user_id=%s", user_id)
                return None

            domain = profile.inferred_skill_domain or FALLBACK_DOMAIN
            items = self.repo.list_curriculum_items(domain)
            if not items and domain != FALLBACK_DOMAIN:
                logger.info("No curriculum for domain=%s, falling back to %s", domain, FALLBACK_DOMAIN)
                domain = FALLBACK_DOMAIN
                items = self.repo.list_curriculum_items(domain)

            time_commitment = profile.time_commitment or self.settings.default_time_commitment
            recommended = recommend_items(items, time_commitment)
            views = [to_view(item) for item in recommended]
            existing_ids = self.repo.list_user_curriculum_item_ids(user_id)
            new_ids = [item.id for item in recommended if item.id not in existing_ids]
            if new_ids:
                self.repo.add_curriculum_assignments(user_id, new_ids)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Curriculum generation failed user_id=%s", user_id)
            return CurriculumRecommendation(success=False, error=str(exc))

        logger.info(
            "Generated curriculum user_id=%s domain=%s items=%s new=%s",
            user_id,
            domain,
            len(recommended),
            len(new_ids),
        )
        return CurriculumRecommendation(
            domain=domain,
            items=views,
            total_minutes=sum(item.estimated_minutes for item in recommended),
            new_item_ids=new_ids,
        )

    def get_user_curriculum(self, user_id: str) -> list[AssignedCurriculumItem]:
        return [
            AssignedCurriculumItem(
                item=to_view(item),
                status=row.status,
                assigned_at=_iso(row.assigned_at),
                started_at=_iso(row.started_at),
                completed_at=_iso(row.completed_at),
            )
            for row, item in self.repo.list_user_curriculum(user_id)
        ]

    def get_next_item(self, user_id: str) -> CurriculumItemView | None:
        assigned = self.get_user_curriculum(user_id)
        for status in ("in_progress", "assigned"):
            for entry in assigned:
                if entry.status == status:
                    return entry.item
        return None

    def get_progress(self, user_id: str) -> CurriculumProgress:
        assigned = self.get_user_curriculum(user_id)
        total = len(assigned)
        completed = sum(1 for entry in assigned if entry.status == "completed")
        in_progress = sum(1 for entry in assigned if entry.status == "in_progress")
        percent = round(completed / total * 100) if total else 0
        return CurriculumProgress(
            total=total,
            completed=completed,
            in_progress=in_progress,
            percent_complete=percent,
        )

    def start_item(self, user_id: str, item_id: int) -> bool:
        return self._advance(user_id, item_id, "in_progress")

    def complete_item(self, user_id: str, item_id: int) -> bool:
        return self._advance(user_id, item_id, "completed")

    def _advance(self, user_id: str, item_id: int, status: str) -> bool:
        try:
            changed = self.repo.advance_curriculum_status(user_id, item_id, status)
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Curriculum status update failed user_id=%s item_id=%s", user_id, item_id)
            return False

        if not changed:
            logger.info(
                "Curriculum status unchanged user_id=%s item_id=%s requested=%s", user_id, item_id, status
            )
        return changed

    def retroactively_generate_curriculum(self) -> SweepReport:
        report = SweepReport()
        for profile in self.repo.list_completed_profiles():
            report.processed += 1
            if self.repo.list_user_curriculum_item_ids(profile.id):
                report.skipped += 1
                continue

            try:
                result = self.generate_curriculum(profile.id)
            except Exception as exc:
                logger.exception("Retroactive curriculum generation failed user_id=%s", profile.id)
                report.errors.append(f"User {profile.id}: {exc}")
                continue

            if result is not None and not result.success:
                report.errors.append(f"User {profile.id}: {result.error}")
            elif result is not None and result.items:
                report.assigned += 1
            else:
                report.skipped += 1

        logger.info(
            "Retroactive curriculum sweep complete assigned=%s processed=%s", report.assigned, report.processed
        )
        return report

