from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from mentorpath.types import ClassificationResult, Confidence, SkillDirection

MIN_SCORE = 2
HIGH_CONFIDENCE_THRESHOLD = 6
MEDIUM_CONFIDENCE_THRESHOLD = 3
AMBIGUITY_MARGIN = 2

EMPTY_INPUT_QUESTION = "What would you like to learn?"
EXPLORATORY_QUESTION = "What area of technology interests you most?"


@dataclass(frozen=True, slots=True)
class KeywordGroup:
    keywords: tuple[str, ...]
    weight: float


@dataclass(frozen=True, slots=True)
class AmbiguousKeyword:
    question: str
    contexts: tuple[str, ...]


DIRECTION_KEYWORDS: dict[SkillDirection, tuple[KeywordGroup, ...]] = {
    "Web Development": (
        KeywordGroup(("html", "css", "javascript", "js", "react", "vue", "angular", "svelte", "browser"), 2),
        KeywordGroup(("frontend", "front-end", "front end", "web dev", "web development", "web developer"), 3),
        KeywordGroup(("tailwind", "bootstrap", "sass", "scss", "webpack", "vite"), 1.5),
        KeywordGroup(("dom", "responsive", "website", "web page", "web design"), 1),
    ),
    "Mobile App Development": (
        KeywordGroup(("mobile", "ios", "android", "app development", "mobile app"), 3),
        KeywordGroup(("flutter", "react native", "reactnative", "swift", "kotlin", "dart"), 4),
        KeywordGroup(("xcode", "android studio", "native app", "cross-platform"), 2),
    ),
    "Backend Engineering": (
        KeywordGroup(("backend", "back-end", "back end", "server-side", "server side"), 4),
        KeywordGroup(("api", "rest", "graphql", "microservices", "authentication", "auth"), 3),
        KeywordGroup(("express", "fastapi", "django", "spring", "rails", "laravel", "nest"), 3),
        KeywordGroup(("database", "mongodb", "postgres", "mysql", "sql", "redis", "prisma"), 2),
    ),
    "Data Science & AI": (
        KeywordGroup(("data science", "machine learning", "ml", "ai", "artificial intelligence"), 4),
        KeywordGroup(("pandas", "numpy", "tensorflow", "pytorch", "keras", "scikit"), 3),
        KeywordGroup(("data analysis", "data analyst", "statistics", "visualization"), 3),
        KeywordGroup(("deep learning", "neural network", "nlp", "computer vision", "llm"), 3),
        KeywordGroup(("jupyter", "notebook", "matplotlib", "data engineering"), 2),
    ),
    "Cybersecurity": (
        KeywordGroup(("cybersecurity", "cyber security", "security", "infosec"), 4),
        KeywordGroup(("ethical hacking", "penetration testing", "pentest", "hacking"), 4),
        KeywordGroup(("network security", "cryptography", "encryption"), 3),
        KeywordGroup(("vulnerability", "exploit", "ctf", "kali", "burp", "oscp"), 2),
    ),
    "UI/UX Design": (
        KeywordGroup(
            ("ui/ux", "ui ux", "uiux", "ux design", "ui design", "user experience", "user interface"), 5
        ),
        KeywordGroup(("figma", "sketch", "adobe xd", "xd", "photoshop", "illustrator"), 4),
        KeywordGroup(("prototyping", "wireframe", "mockup", "design thinking", "user research"), 3),
        KeywordGroup(("graphic design", "visual design", "interaction design", "product design"), 3),
        KeywordGroup(("design system", "typography", "color theory", "branding"), 2),
    ),
    "Game Development": (
        KeywordGroup(("game dev", "game development", "gamedev", "game programming"), 5),
        KeywordGroup(("unity", "unreal", "godot", "game engine"), 4),
        KeywordGroup(("3d", "2d game", "game design", "vr", "ar", "vr/ar"), 2),
    ),
    "DevOps & Cloud": (
        KeywordGroup(("devops", "dev ops", "cicd", "ci/cd", "infrastructure"), 4),
        KeywordGroup(("aws", "azure", "gcp", "google cloud", "cloud computing", "cloud"), 3),
        KeywordGroup(("docker", "kubernetes", "k8s", "containerization"), 3),
        KeywordGroup(("terraform", "ansible", "jenkins", "github actions"), 3),
        KeywordGroup(("linux", "bash", "shell", "automation", "sre"), 1.5),
    ),
    "Computer Science Fundamentals": (
        KeywordGroup(("computer science", "cs fundamentals", "algorithms", "data structures"), 4),
        KeywordGroup(("dsa", "leetcode", "competitive programming", "problem solving"), 3),
        KeywordGroup(("big o", "complexity", "recursion", "sorting", "graphs", "trees"), 2),
        KeywordGroup(("operating systems", "networking", "compilers", "theory"), 2),
    ),
    "Business & Startups": (
        KeywordGroup(("startup", "startups", "saas", "entrepreneur", "entrepreneurship"), 4),
        KeywordGroup(("funding", "venture capital", "vc", "pitch", "mvp"), 3),
        KeywordGroup(("product management", "product manager", "business model", "growth"), 2),
        KeywordGroup(("marketing", "sales", "revenue", "monetization"), 1.5),
    ),
}

_JAVA = AmbiguousKeyword(
    question="Do you want to use Java for backend development or Android apps?",
    contexts=("backend", "android", "mobile", "server", "spring"),
)
_PYTHON = AmbiguousKeyword(
    question="Do you want to use Python for backend, data science, or automation?",
    contexts=("backend", "data", "ai", "ml", "automation", "scripting", "web"),
)
_NODE = AmbiguousKeyword(
    question="Do you want to use Node.js for backend APIs or full-stack development?",
    contexts=("backend", "api", "fullstack", "full-stack", "server"),
)
_CPP = AmbiguousKeyword(
    question=(
        "Do you want to learn C++ for game development, systems programming, or competitive programming?"
    ),
    contexts=("game", "systems", "competitive", "embedded", "performance"),
)
_CSHARP = AmbiguousKeyword(
    question="Do you want to use C# for game development with Unity or backend/.NET development?",
    contexts=("game", "unity", "backend", ".net", "dotnet"),
)
_RUST = AmbiguousKeyword(
    question="Do you want to learn Rust for systems programming, backend, or blockchain development?",
    contexts=("systems", "backend", "blockchain", "web3", "performance"),
)
_GO = AmbiguousKeyword(
    question="Do you want to use Go for backend APIs or DevOps/cloud tooling?",
    contexts=("backend", "api", "devops", "cloud", "microservices"),
)
_SQL = AmbiguousKeyword(
    question="Do you want to learn SQL for backend development or data analysis?",
    contexts=("backend", "data", "analytics", "database"),
)
_TYPESCRIPT = AmbiguousKeyword(
    question="Do you want to use TypeScript for frontend, backend, or full-stack development?",
    contexts=("frontend", "backend", "fullstack", "full-stack", "web"),
)

AMBIGUOUS_KEYWORDS: dict[str, AmbiguousKeyword] = {
    "java": _JAVA,
    "python": _PYTHON,
    "node": _NODE,
    "nodejs": _NODE,
    "c++": _CPP,
    "cpp": _CPP,
    "c#": _CSHARP,
    "csharp": _CSHARP,
    "rust": _RUST,
    "go": _GO,
    "golang": _GO,
    "sql": _SQL,
    "typescript": _TYPESCRIPT,
    "ts": _TYPESCRIPT,
}

EXPLORATORY_PHRASES = (
    "not sure",
    "not certain",
    "just exploring",
    "exploring",
    "don't know",
    "no idea",
    "unsure",
    "haven't decided",
    "figuring out",
    "trying to decide",
)

LEARN_PATTERN = re.compile(r"^(?:i want to learn|learn|i want|want to learn)\s+(\w+)$", re.IGNORECASE)


def all_skill_directions() -> list[SkillDirection]:
    return [*DIRECTION_KEYWORDS.keys(), "Other"]


def classify_intent(text: str | None) -> ClassificationResult:
    """Map free-text learning intent onto one skill direction.

    Insufficient input never raises; it comes back as a clarification request.
    """
    if not text or not text.strip():
        return _clarify(text or "", EMPTY_INPUT_QUESTION)

    raw = text.strip()
    normalized = raw.lower()

    if any(phrase in normalized for phrase in EXPLORATORY_PHRASES):
        return _clarify(raw, EXPLORATORY_QUESTION)

    question = _ambiguous_keyword_question(normalized)
    if question:
        return _clarify(raw, question)

    scores = score_directions(normalized)
    if not scores or scores[0][1] < MIN_SCORE:
        return ClassificationResult(raw_input=raw, detected_domain="Other", confidence="low")

    best_domain, best_score = scores[0]
    if len(scores) >= 2:
        runner_up, runner_up_score = scores[1]
        if runner_up_score >= MIN_SCORE and best_score - runner_up_score < AMBIGUITY_MARGIN:
            return _clarify(raw, f"Are you more interested in {best_domain} or {runner_up}?")

    return ClassificationResult(
        raw_input=raw,
        detected_domain=best_domain,
        confidence=_confidence_for(best_score),
        needs_clarification=False,
    )


def score_directions(text: str) -> list[tuple[SkillDirection, float]]:
    scores: list[tuple[SkillDirection, float]] = []
    for direction, groups in DIRECTION_KEYWORDS.items():
        score = 0.0
        for group in groups:
            for keyword in group.keywords:
                if _keyword_pattern(keyword).search(text):
                    score += group.weight
        if score > 0:
            scores.append((direction, score))

    # sorted() is stable, so table order breaks ties
    return sorted(scores, key=lambda item: item[1], reverse=True)


@lru_cache(maxsize=None)
def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)


def _ambiguous_keyword_question(normalized: str) -> str | None:
    words = normalized.split()
    target: str | None = None
    if len(words) == 1:
        target = words[0]
    else:
        match = LEARN_PATTERN.match(normalized)
        if match:
            target = match.group(1).lower()

    if not target:
        return None

    ambiguous = AMBIGUOUS_KEYWORDS.get(target)
    if not ambiguous:
        return None
    if any(context in normalized for context in ambiguous.contexts):
        return None
    return ambiguous.question


def _confidence_for(score: float) -> Confidence:
    if score >= HIGH_CONFIDENCE_THRESHOLD:
        return "high"
    if score >= MEDIUM_CONFIDENCE_THRESHOLD:
        return "medium"
    return "low"


def _clarify(raw: str, question: str) -> ClassificationResult:
    return ClassificationResult(
        raw_input=raw,
        detected_domain=None,
        confidence="low",
        needs_clarification=True,
        clarification_question=question,
    )
