from mentorpath.core.repair import infer_full_name, infer_learning_direction, is_repaired, name_from_email, summarize
from mentorpath.db.models import OnboardingResponse, Profile
from mentorpath.types import RepairReport


def test_name_from_email() -> None:
    assert name_from_email("john.doe99@example.com") == "John Doe"
    assert name_from_email("mary_jane-smith@example.com") == "Mary Jane Smith"
    assert name_from_email("a1@example.com") is None
    assert name_from_email("@example.com") is None
    assert name_from_email(None) is None


def test_full_name_prefers_preferred_name() -> None:
    profile = Profile(id="u1", preferred_name="Sam", email="samuel.jones@example.com")
    assert infer_full_name(profile) == ("Sam", "preferred_name")

    profile.preferred_name = "S"
    assert infer_full_name(profile) == ("Samuel Jones", "email")

    profile.email = None
    assert infer_full_name(profile) is None


def test_learning_direction_prefers_responses() -> None:
    profile = Profile(id="u1", learning_goal="become a game developer")
    responses = [
        OnboardingResponse(user_id="u1", step_key="full_name", response_value="Ann"),
        OnboardingResponse(user_id="u1", step_key="learning_direction", response_value=" data science "),
    ]
    assert infer_learning_direction(profile, responses) == ("data science", "onboarding_responses")
    assert infer_learning_direction(profile, []) == ("become a game developer", "learning_goal")

    profile.learning_goal = "  "
    assert infer_learning_direction(profile, []) is None


def test_is_repaired() -> None:
    profile = Profile(
        id="u1",
        role="student",
        full_name="Ann Lee",
        learning_direction="web apps",
        inferred_skill_domain="Web Development",
        inferred_skill_level="Beginner",
        onboarding_completed=True,
    )
    assert is_repaired(profile)

    profile.inferred_skill_level = None
    assert not is_repaired(profile)

    mentor = Profile(id="m1", role="mentor", mentor_onboarding_completed=True)
    assert is_repaired(mentor)


def test_summarize_counts_statuses_and_fields() -> None:
    reports = [
        RepairReport(user_id="a", status="completed", filled_fields=["full_name", "role"]),
        RepairReport(user_id="b", status="completed", filled_fields=["role"]),
        RepairReport(user_id="c", status="skipped"),
        RepairReport(user_id="d", status="error", error="boom"),
    ]
    summary = summarize(reports)
    assert summary.total == 4
    assert summary.completed == 2
    assert summary.skipped == 1
    assert summary.errors == 1
    assert summary.fields_filled == {"full_name": 2, "role": 2}
