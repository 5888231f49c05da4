import pytest

from mentorpath.core.onboarding import mentor_missing_fields
from mentorpath.core.onboarding_gate import (
    determine_redirect,
    is_onboarding_path,
    normalize_path,
)
from mentorpath.db.models import Profile


def _student(**overrides) -> Profile:
    values = {
        "id": "student-1",
        "role": "student",
        "full_name": "Ada Lovelace",
        "institution": "Analytical College",
        "current_skill_level": "beginner",
        "time_commitment": "regular",
        "motivation_type": "curiosity",
    }
    values.update(overrides)
    return Profile(**values)


def _mentor(**overrides) -> Profile:
    values = {
        "id": "mentor-1",
        "role": "mentor",
        "full_name": "Grace Hopper",
        "mentor_expertise": ["Backend Engineering"],
        "mentor_experience_level": "advanced",
        "mentor_availability": "regular",
    }
    values.update(overrides)
    return Profile(**values)


def test_normalize_path() -> None:
    assert normalize_path("/dashboard/") == "/dashboard"
    assert normalize_path("/") == "/"
    assert normalize_path("") == "/"
    assert normalize_path(None) == "/"


def test_onboarding_paths() -> None:
    assert is_onboarding_path("/onboarding")
    assert is_onboarding_path("/onboarding/step-2/")
    assert is_onboarding_path("/mentor-onboarding")
    assert not is_onboarding_path("/onboarding-help")
    assert not is_onboarding_path("/dashboard")


def test_unauthenticated_goes_to_auth() -> None:
    assert determine_redirect(None, "/dashboard", authenticated=False) == "/auth"
    assert determine_redirect(None, "/auth", authenticated=False) is None


def test_missing_profile_goes_to_onboarding() -> None:
    assert determine_redirect(None, "/dashboard") == "/onboarding"
    assert determine_redirect(None, "/onboarding/") is None


def test_incomplete_student_goes_to_onboarding() -> None:
    profile = _student(institution=None)
    assert determine_redirect(profile, "/dashboard") == "/onboarding"
    assert determine_redirect(profile, "/onboarding") is None


def test_whitespace_fields_count_as_missing() -> None:
    assert determine_redirect(_student(full_name="   "), "/dashboard") == "/onboarding"


def test_complete_student_leaves_onboarding() -> None:
    profile = _student()
    assert determine_redirect(profile, "/onboarding/step-2") == "/dashboard"
    assert determine_redirect(profile, "/dashboard") is None
    assert determine_redirect(profile, "/curriculum") is None


def test_stored_flag_is_not_consulted() -> None:
    profile = _student(institution="", onboarding_completed=True)
    assert determine_redirect(profile, "/dashboard") == "/onboarding"


def test_mentor_routing() -> None:
    assert determine_redirect(_mentor(mentor_expertise=[]), "/mentor-dashboard") == "/mentor-onboarding"
    assert determine_redirect(_mentor(), "/mentor-onboarding") == "/mentor-dashboard"
    assert determine_redirect(_mentor(), "/onboarding") == "/mentor-dashboard"
    assert determine_redirect(_mentor(), "/mentor-dashboard") is None


@pytest.mark.parametrize("expertise", [["  "], [""], [None], "Python", {"a": 1}])
def test_mentor_with_blank_or_malformed_expertise_is_incomplete(expertise) -> None:
    mentor = _mentor(mentor_expertise=expertise)
    assert not mentor.is_mentor_onboarding_complete
    assert determine_redirect(mentor, "/mentor-dashboard") == "/mentor-onboarding"
    assert "mentor_expertise" in mentor_missing_fields(mentor)


def test_missing_or_unknown_role_goes_to_onboarding() -> None:
    assert determine_redirect(_student(role=None), "/dashboard") == "/onboarding"
    assert determine_redirect(_student(role="admin"), "/dashboard") == "/onboarding"


def test_following_a_redirect_never_redirects_again() -> None:
    profiles = [
        None,
        _student(),
        _student(institution=None),
        _student(role=None),
        _student(role="admin"),
        _mentor(),
        _mentor(mentor_availability=None),
    ]
    paths = ["/", "/dashboard", "/onboarding", "/onboarding/", "/mentor-onboarding", "/mentor-dashboard", "/auth"]

    for authenticated in (True, False):
        for profile in profiles:
            for path in paths:
                target = determine_redirect(profile, path, authenticated=authenticated)
                if target is not None:
                    assert determine_redirect(profile, target, authenticated=authenticated) is None
