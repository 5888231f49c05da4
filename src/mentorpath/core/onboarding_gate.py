"""Navigation gate that routes users into or out of onboarding.

Completion is always derived from the profile's raw fields through the
``Profile.is_*_onboarding_complete`` properties. The stored
``onboarding_completed`` flags are never consulted here.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentorpath.db.models import Profile
from mentorpath.db.repositories import Repository
from mentorpath.types import GateDecision

logger = logging.getLogger(__name__)

AUTH_PATH = "/auth"
STUDENT_ONBOARDING_PATH = "/onboarding"
MENTOR_ONBOARDING_PATH = "/mentor-onboarding"
STUDENT_HOME_PATH = "/dashboard"
MENTOR_HOME_PATH = "/mentor-dashboard"

ONBOARDING_PREFIXES = (STUDENT_ONBOARDING_PATH, MENTOR_ONBOARDING_PATH)


def normalize_path(path: str | None) -> str:
    return (path or "").rstrip("/") or "/"


def is_onboarding_path(path: str | None) -> bool:
    normalized = normalize_path(path)
    return any(normalized == prefix or normalized.startswith(f"{prefix}/") for prefix in ONBOARDING_PREFIXES)


def is_student_onboarding_complete(profile: Profile | None) -> bool:
    return profile is not None and profile.is_student_onboarding_complete


def is_mentor_onboarding_complete(profile: Profile | None) -> bool:
    return profile is not None and profile.is_mentor_onboarding_complete


def target_path(profile: Profile | None, current_path: str, *, authenticated: bool = True) -> str | None:
    if not authenticated:
        return AUTH_PATH
    if profile is None or not profile.role:
        return STUDENT_ONBOARDING_PATH

    if profile.role == "mentor":
        if not is_mentor_onboarding_complete(profile):
            return MENTOR_ONBOARDING_PATH
        return MENTOR_HOME_PATH if is_onboarding_path(current_path) else None

    if profile.role == "student":
        if not is_student_onboarding_complete(profile):
            return STUDENT_ONBOARDING_PATH
        return STUDENT_HOME_PATH if is_onboarding_path(current_path) else None

    return STUDENT_ONBOARDING_PATH


def determine_redirect(profile: Profile | None, current_path: str, *, authenticated: bool = True) -> str | None:
    target = target_path(profile, current_path, authenticated=authenticated)
    # Last check before returning: never redirect to the page we are already on.
    if target is None or normalize_path(target) == normalize_path(current_path):
        return None
    return target


class OnboardingGate:
    def __init__(self, session: Session):
        self.session = session
        self.repo = Repository(session)

    def check(self, user_id: str | None, current_path: str) -> GateDecision:
        if not user_id:
            return GateDecision(redirect_to=determine_redirect(None, current_path, authenticated=False))

        try:
            profile = self.repo.get_profile(user_id)
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Gate profile read failed user_id=%s", user_id)
            profile = None

        return GateDecision(
            redirect_to=determine_redirect(profile, current_path),
            is_student_complete=is_student_onboarding_complete(profile),
            is_mentor_complete=is_mentor_onboarding_complete(profile),
        )
