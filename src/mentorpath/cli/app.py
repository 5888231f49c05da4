from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from mentorpath.config import get_settings
from mentorpath.core.curriculum import CurriculumEngine
from mentorpath.core.domain_adapter import adapt_intent_to_domain, describe_skill_domain
from mentorpath.core.intent_classifier import classify_intent
from mentorpath.core.mentor_matching import MentorMatchingEngine
from mentorpath.core.onboarding import OnboardingService
from mentorpath.core.onboarding_gate import OnboardingGate
from mentorpath.core.repair import RetroactiveRepairJob, summarize
from mentorpath.core.runtime import get_rate_limiter
from mentorpath.core.skill_level import analyze_skill_level
from mentorpath.db.init import init_database
from mentorpath.db.models import Profile
from mentorpath.db.repositories import Repository
from mentorpath.db.session import SessionLocal
from mentorpath.logging_config import configure_logging

app = typer.Typer(help=f"{get_settings().app_name} onboarding CLI")
profile_app = typer.Typer(help="Import and inspect learner profiles")
onboarding_app = typer.Typer(help="Record onboarding answers")
mentor_app = typer.Typer(help="Mentor matching")
curriculum_app = typer.Typer(help="Curriculum recommendation and progress")
repair_app = typer.Typer(help="Batch repair jobs")

app.add_typer(profile_app, name="profile")
app.add_typer(onboarding_app, name="onboarding")
app.add_typer(mentor_app, name="mentor")
app.add_typer(curriculum_app, name="curriculum")
app.add_typer(repair_app, name="repair")

_INITIALIZED = False

PROFILE_IMPORT_FIELDS = (
    "email",
    "role",
    "full_name",
    "preferred_name",
    "institution",
    "learning_direction",
    "learning_goal",
    "current_skill_level",
    "time_commitment",
    "motivation_type",
    "mentor_expertise",
    "mentor_experience_level",
    "mentor_availability",
    "mentor_motivation",
)


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


def _echo(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


def serialize_profile(profile: Profile) -> dict[str, Any]:
    return {
        "id": profile.id,
        "email": profile.email,
        "role": profile.role,
        "full_name": profile.full_name,
        "institution": profile.institution,
        "learning_direction": profile.learning_direction,
        "current_skill_level": profile.current_skill_level,
        "time_commitment": profile.time_commitment,
        "motivation_type": profile.motivation_type,
        "inferred_skill_domain": profile.inferred_skill_domain,
        "inferred_skill_level": profile.inferred_skill_level,
        "normalized_learning_goal": profile.normalized_learning_goal,
        "onboarding_needs_clarification": profile.onboarding_needs_clarification,
        "onboarding_clarification_question": profile.onboarding_clarification_question,
        "mentor_expertise": profile.mentor_expertise or [],
        "onboarding_completed": profile.onboarding_completed,
        "is_student_onboarding_complete": profile.is_student_onboarding_complete,
        "is_mentor_onboarding_complete": profile.is_mentor_onboarding_complete,
    }


@app.command("init")
def init_cmd(no_seed: bool = typer.Option(False, "--no-seed")) -> None:
    """Create tables and seed the mentor and curriculum catalog."""
    configure_logging()
    result = init_database(seed=not no_seed)
    _echo({"ok": True, **result})


@app.command("classify")
def classify_cmd(text: str = typer.Argument(...)) -> None:
    configure_logging()
    result = classify_intent(text)
    domain = adapt_intent_to_domain(result)
    _echo(
        {
            **result.model_dump(),
            "skill_domain": domain,
            "skill_domain_description": describe_skill_domain(domain),
        }
    )


@app.command("analyze")
def analyze_cmd(
    text: str = typer.Argument(...),
    direction: str | None = typer.Option(None, "--direction"),
) -> None:
    configure_logging()
    if direction is None:
        direction = classify_intent(text).detected_domain or "Other"
    _echo(analyze_skill_level(text, direction).model_dump())


@app.command("gate")
def gate_cmd(
    path: str = typer.Option(..., "--path"),
    user_id: str | None = typer.Option(None, "--user-id"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        _echo(OnboardingGate(db).check(user_id, path).model_dump())


@profile_app.command("import")
def profile_import(file: Path = typer.Option(..., "--file", exists=True, readable=True)) -> None:
    configure_logging()
    ensure_initialized()
    payload = json.loads(file.read_text(encoding="utf-8"))
    items = payload if isinstance(payload, list) else [payload]

    with SessionLocal() as db:
        repo = Repository(db)
        imported = []
        for item in items:
            values = {key: item[key] for key in PROFILE_IMPORT_FIELDS if key in item}
            profile = repo.upsert_profile(str(item["id"]), values)
            for step_key, value in item.get("responses", {}).items():
                repo.upsert_onboarding_response(user_id=profile.id, step_key=step_key, response_value=str(value))
            imported.append({"id": profile.id, "full_name": profile.full_name})
        _echo({"imported": imported})


@profile_app.command("show")
def profile_show(user_id: str = typer.Option(..., "--user-id")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        repo = Repository(db)
        profile = repo.get_profile(user_id)
        if not profile:
            raise typer.BadParameter(f"profile {user_id} not found")

        mentor = MentorMatchingEngine(db).get_user_mentor(user_id)
        _echo(
            {
                "profile": serialize_profile(profile),
                "mentor": mentor.model_dump() if mentor else None,
                "curriculum": CurriculumEngine(db).get_progress(user_id).model_dump(),
                "audit": [
                    {"field": row.field, "source": row.source, "value": row.value}
                    for row in repo.list_audit_entries(user_id)
                ],
            }
        )


@onboarding_app.command("save")
def onboarding_save(
    user_id: str = typer.Option(..., "--user-id"),
    step: str = typer.Option(..., "--step"),
    value: str = typer.Option(..., "--value"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        service = OnboardingService(db, limiter=get_rate_limiter())
        result = service.save_response(user_id, step, value)
        _echo({**result.model_dump(), "progress": service.get_progress(user_id).model_dump()})


@onboarding_app.command("complete")
def onboarding_complete(user_id: str = typer.Option(..., "--user-id")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        _echo(OnboardingService(db).complete_student_onboarding(user_id).model_dump())


@onboarding_app.command("mentor-field")
def onboarding_mentor_field(
    user_id: str = typer.Option(..., "--user-id"),
    field: str = typer.Option(..., "--field"),
    value: list[str] = typer.Option(..., "--value"),
) -> None:
    configure_logging()
    ensure_initialized()
    payload: str | list[str] = value if field == "mentor_expertise" else value[0]
    with SessionLocal() as db:
        _echo(OnboardingService(db).save_mentor_field(user_id, field, payload).model_dump())


@onboarding_app.command("complete-mentor")
def onboarding_complete_mentor(user_id: str = typer.Option(..., "--user-id")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        _echo(OnboardingService(db).complete_mentor_onboarding(user_id).model_dump())


@mentor_app.command("assign")
def mentor_assign(user_id: str = typer.Option(..., "--user-id")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        result = MentorMatchingEngine(db).assign_mentor(user_id)
        _echo(result.model_dump() if result else None)


@curriculum_app.command("generate")
def curriculum_generate(user_id: str = typer.Option(..., "--user-id")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        result = CurriculumEngine(db).generate_curriculum(user_id)
        _echo(result.model_dump() if result else None)


@curriculum_app.command("progress")
def curriculum_progress(user_id: str = typer.Option(..., "--user-id")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        engine = CurriculumEngine(db)
        next_item = engine.get_next_item(user_id)
        _echo(
            {
                "progress": engine.get_progress(user_id).model_dump(),
                "next_item": next_item.model_dump() if next_item else None,
                "items": [entry.model_dump() for entry in engine.get_user_curriculum(user_id)],
            }
        )


@curriculum_app.command("start")
def curriculum_start(
    user_id: str = typer.Option(..., "--user-id"),
    item_id: int = typer.Option(..., "--item-id"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        _echo({"changed": CurriculumEngine(db).start_item(user_id, item_id)})


@curriculum_app.command("complete")
def curriculum_complete(
    user_id: str = typer.Option(..., "--user-id"),
    item_id: int = typer.Option(..., "--item-id"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        _echo({"changed": CurriculumEngine(db).complete_item(user_id, item_id)})


@repair_app.command("run")
def repair_run(log_level: str | None = typer.Option(None, "--log-level")) -> None:
    """Repair every profile with missing onboarding data."""
    configure_logging(log_level)
    ensure_initialized()
    with SessionLocal() as db:
        reports = RetroactiveRepairJob(db).run()
        _echo(
            {
                "summary": summarize(reports).model_dump(),
                "reports": [report.model_dump() for report in reports],
            }
        )


@repair_app.command("mentors")
def repair_mentors() -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        _echo(MentorMatchingEngine(db).retroactively_assign_mentors().model_dump())


@repair_app.command("curriculum")
def repair_curriculum() -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        _echo(CurriculumEngine(db).retroactively_generate_curriculum().model_dump())


@repair_app.command("fix")
def repair_fix(log_level: str | None = typer.Option(None, "--log-level")) -> None:
    """Repair profiles, then backfill mentors and curriculum."""
    configure_logging(log_level)
    ensure_initialized()
    with SessionLocal() as db:
        _echo(RetroactiveRepairJob(db).retroactive_fix().model_dump())
