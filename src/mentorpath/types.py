from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

SkillDirection = Literal[
    "Web Development",
    "Mobile App Development",
    "Backend Engineering",
    "Data Science & AI",
    "Cybersecurity",
    "UI/UX Design",
    "Game Development",
    "DevOps & Cloud",
    "Computer Science Fundamentals",
    "Business & Startups",
    "Other",
]
SkillDomain = Literal[
    "Web Development",
    "Full Stack Development",
    "Mobile Development",
    "Backend Engineering",
    "Data Science",
    "Game Development",
    "UI/UX & Design",
    "DevOps & Cloud",
    "Cybersecurity",
    "Computer Science Fundamentals",
    "Business & Startups",
    "General",
]
Confidence = Literal["high", "medium", "low"]
SkillLevel = Literal["Beginner", "Intermediate", "Advanced"]
Role = Literal["student", "mentor"]
TimeCommitment = Literal["casual", "regular", "intensive"]
MotivationType = Literal["career", "curiosity", "project", "other"]
AssignmentStatus = Literal["assigned", "in_progress", "completed"]
RepairStatus = Literal["completed", "skipped", "error"]
OnboardingStep = Literal[
    "full_name",
    "institution",
    "learning_direction",
    "skill_level",
    "time_commitment",
    "motivation",
    "role",
]
MentorField = Literal[
    "full_name",
    "institution",
    "mentor_expertise",
    "mentor_experience_level",
    "mentor_availability",
    "mentor_motivation",
]


class ClassificationResult(BaseModel):
    raw_input: str = ""
    detected_domain: SkillDirection | None = None
    confidence: Confidence = "low"
    needs_clarification: bool = False
    clarification_question: str | None = None


class SkillAnalysis(BaseModel):
    raw_input: str = ""
    skill_direction: SkillDirection = "Other"
    skill_level: SkillLevel = "Beginner"
    learning_goal: str = ""
    needs_clarification: bool = False
    clarification_question: str | None = None

    @field_validator("learning_goal")
    @classmethod
    def validate_goal_length(cls, value: str) -> str:
        if len(value.split()) > 12:
            raise ValueError("learning_goal must be at most 12 words")
        return value


class MentorAssignment(BaseModel):
    success: bool = True
    mentor_id: int | None = None
    mentor_name: str = ""
    reason: str = ""
    score: int = 0
    fallback: bool = False
    error: str | None = None


class CurriculumItemView(BaseModel):
    id: int
    title: str
    skill_domain: str
    difficulty: str
    estimated_minutes: int
    display_order: int


class CurriculumRecommendation(BaseModel):
    success: bool = True
    domain: str = "General"
    items: list[CurriculumItemView] = Field(default_factory=list)
    total_minutes: int = 0
    new_item_ids: list[int] = Field(default_factory=list)
    error: str | None = None


class AssignedCurriculumItem(BaseModel):
    item: CurriculumItemView
    status: AssignmentStatus
    assigned_at: str | None = None
    started_at: str | None = None
    completed_at: str | None = None


class CurriculumProgress(BaseModel):
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    percent_complete: int = 0


class GateDecision(BaseModel):
    redirect_to: str | None = None
    is_student_complete: bool = False
    is_mentor_complete: bool = False


class OperationResult(BaseModel):
    success: bool
    error: str | None = None
    mentor_id: int | None = None


class OnboardingProgress(BaseModel):
    completed_steps: list[str] = Field(default_factory=list)
    current_step: str | None = None
    responses: dict[str, str] = Field(default_factory=dict)


class AuditEntry(BaseModel):
    user_id: str
    field: str
    source: str
    value: str


class RepairReport(BaseModel):
    user_id: str
    status: RepairStatus
    filled_fields: list[str] = Field(default_factory=list)
    audit: list[AuditEntry] = Field(default_factory=list)
    step_errors: dict[str, str] = Field(default_factory=dict)
    error: str | None = None


class RepairSummary(BaseModel):
    total: int = 0
    completed: int = 0
    skipped: int = 0
    errors: int = 0
    fields_filled: dict[str, int] = Field(default_factory=dict)


class SweepReport(BaseModel):
    processed: int = 0
    assigned: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)


class RetroactiveFixReport(BaseModel):
    onboarding: RepairSummary
    mentor_assignment: SweepReport
    curriculum_generation: SweepReport
    timestamp: str
