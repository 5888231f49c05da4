from __future__ import annotations

from mentorpath.core.intent_classifier import all_skill_directions
from mentorpath.types import SkillAnalysis, SkillLevel

MAX_GOAL_WORDS = 12

BEGINNER_KEYWORDS = (
    "learn from scratch",
    "from scratch",
    "learn the basics",
    "beginner",
    "newbie",
    "new to",
    "just starting",
    "starting out",
    "first time",
    "never done",
    "no experience",
    "want to learn",
    "complete beginner",
    "absolute beginner",
    "getting started",
    "start learning",
    "interested in learning",
    "i'm new",
    "im new",
    "don't know",
    "dont know",
)

INTERMEDIATE_KEYWORDS = (
    "improve",
    "already know",
    "know the basics",
    "some experience",
    "familiar with",
    "work on",
    "get better",
    "level up",
    "enhance",
    "expand",
    "built some",
    "made some",
    "few projects",
    "small projects",
    "understand basics",
    "comfortable with",
)

ADVANCED_KEYWORDS = (
    "master",
    "advanced",
    "expert",
    "deep understanding",
    "deep dive",
    "professional",
    "years of experience",
    "senior",
    "complex",
    "architecture",
    "optimize",
    "scale",
    "production-level",
    "production level",
    "enterprise",
    "proficient",
)

# Checked in this order; the first hit wins.
LEVEL_PRECEDENCE: tuple[tuple[SkillLevel, tuple[str, ...]], ...] = (
    ("Advanced", ADVANCED_KEYWORDS),
    ("Intermediate", INTERMEDIATE_KEYWORDS),
    ("Beginner", BEGINNER_KEYWORDS),
)

FILLER_PHRASES = tuple(
    sorted(
        (
            "i would really like to",
            "i would like to",
            "i really want to",
            "i want to learn how to",
            "i want to learn to",
            "i want to learn",
            "i want to",
            "i'd like to",
            "i am interested in",
            "i'm interested in",
            "im interested in",
            "my goal is to",
            "my goal is",
            "i am looking to",
            "i'm looking to",
            "im looking to",
            "looking to",
            "hoping to",
            "i hope to",
            "planning to",
            "i plan to",
        ),
        key=len,
        reverse=True,
    )
)

VAGUE_PATTERNS = (
    "not sure",
    "not certain",
    "just exploring",
    "don't know",
    "dont know",
    "no idea",
    "unsure",
    "haven't decided",
    "havent decided",
    "figuring out",
    "trying to decide",
    "no clue",
    "anything",
    "whatever",
    "something",
)

DEFAULT_CLARIFICATION_QUESTION = "Which type of projects do you want to build first?"

CLARIFICATION_QUESTIONS: dict[str, str] = {
    "Web Development": "What type of web projects do you want to build first?",
    "Mobile App Development": "What kind of mobile app do you want to create?",
    "Backend Engineering": "What type of backend systems interest you most?",
    "Data Science & AI": "What data science or AI problems do you want to solve?",
    "Cybersecurity": "Which area of security do you want to focus on?",
    "UI/UX Design": "What type of designs do you want to create?",
    "Game Development": "What kind of games do you want to build?",
    "DevOps & Cloud": "Which cloud platform or DevOps practice interests you?",
    "Computer Science Fundamentals": "Which CS topic do you want to master first?",
    "Business & Startups": "What type of business or startup idea are you pursuing?",
    "Other": DEFAULT_CLARIFICATION_QUESTION,
}


def all_skill_levels() -> list[SkillLevel]:
    return ["Beginner", "Intermediate", "Advanced"]


def analyze_skill_level(text: str | None, direction: str | None) -> SkillAnalysis:
    skill_direction = direction if direction in all_skill_directions() else "Other"
    raw = (text or "").strip()

    if is_vague(raw):
        return SkillAnalysis(
            raw_input=raw,
            skill_direction=skill_direction,
            skill_level="Beginner",
            learning_goal="",
            needs_clarification=True,
            clarification_question=clarification_question_for(skill_direction),
        )

    return SkillAnalysis(
        raw_input=raw,
        skill_direction=skill_direction,
        skill_level=infer_skill_level(raw),
        learning_goal=extract_learning_goal(raw),
        needs_clarification=False,
    )


def infer_skill_level(text: str) -> SkillLevel:
    normalized = text.lower()
    for level, keywords in LEVEL_PRECEDENCE:
        if any(keyword in normalized for keyword in keywords):
            return level
    return "Beginner"


def extract_learning_goal(text: str) -> str:
    goal = text.strip()
    if not goal:
        return ""

    lowered = goal.lower()
    for filler in FILLER_PHRASES:
        if lowered.startswith(filler):
            goal = goal[len(filler):].strip()
            break

    if goal.lower().startswith("to "):
        goal = goal[3:]

    if goal:
        goal = goal[0].upper() + goal[1:]

    words = goal.split()
    if len(words) > MAX_GOAL_WORDS:
        goal = " ".join(words[:MAX_GOAL_WORDS])
    return goal


def is_vague(text: str) -> bool:
    normalized = text.lower().strip()
    if not normalized:
        return True

    meaningful = [word for word in normalized.split() if len(word) > 2]
    if len(meaningful) < 2:
        return True

    return any(pattern in normalized for pattern in VAGUE_PATTERNS)


def clarification_question_for(direction: str | None) -> str:
    return CLARIFICATION_QUESTIONS.get(direction or "Other", DEFAULT_CLARIFICATION_QUESTION)
