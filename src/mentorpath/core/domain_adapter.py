from __future__ import annotations

from mentorpath.types import ClassificationResult, SkillDomain

FALLBACK_DOMAIN: SkillDomain = "General"

DIRECTION_TO_DOMAIN: dict[str, SkillDomain] = {
    "Web Development": "Web Development",
    "Mobile App Development": "Mobile Development",
    "Backend Engineering": "Backend Engineering",
    "Data Science & AI": "Data Science",
    "Cybersecurity": "Cybersecurity",
    "UI/UX Design": "UI/UX & Design",
    "Game Development": "Game Development",
    "DevOps & Cloud": "DevOps & Cloud",
    "Computer Science Fundamentals": "Computer Science Fundamentals",
    "Business & Startups": "Business & Startups",
    "Other": "General",
}

DOMAIN_DESCRIPTIONS: dict[SkillDomain, str] = {
    "Web Development": "Building modern websites and web applications with HTML, CSS, and JavaScript.",
    "Full Stack Development": "End-to-end development covering both frontend and backend technologies.",
    "Mobile Development": "Creating native and cross-platform mobile applications.",
    "Backend Engineering": "Building server-side APIs, databases, and system architecture.",
    "Data Science": "Analyzing data, building ML models, and deriving insights.",
    "Game Development": "Designing and programming interactive games and experiences.",
    "UI/UX & Design": "Crafting beautiful user interfaces and seamless user experiences.",
    "DevOps & Cloud": "Infrastructure, automation, and cloud platform management.",
    "Cybersecurity": "Protecting systems and networks from security threats.",
    "Computer Science Fundamentals": "Core CS concepts: algorithms, data structures, and problem solving.",
    "Business & Startups": "Building products, entrepreneurship, and startup fundamentals.",
    "General": "Exploring various programming concepts and finding your path.",
}


def all_skill_domains() -> list[SkillDomain]:
    return list(DOMAIN_DESCRIPTIONS.keys())


def direction_to_domain(direction: str | None) -> SkillDomain:
    if not direction:
        return FALLBACK_DOMAIN
    return DIRECTION_TO_DOMAIN.get(direction, FALLBACK_DOMAIN)


def adapt_intent_to_domain(result: ClassificationResult) -> SkillDomain:
    if not result.detected_domain or result.needs_clarification:
        return FALLBACK_DOMAIN
    return direction_to_domain(result.detected_domain)


def describe_skill_domain(domain: str) -> str:
    return DOMAIN_DESCRIPTIONS.get(domain, DOMAIN_DESCRIPTIONS[FALLBACK_DOMAIN])


def is_skill_domain(value: str | None) -> bool:
    return value in DOMAIN_DESCRIPTIONS
