from mentorpath.core.domain_adapter import (
    adapt_intent_to_domain,
    all_skill_domains,
    describe_skill_domain,
    direction_to_domain,
    is_skill_domain,
)
from mentorpath.core.intent_classifier import all_skill_directions, classify_intent
from mentorpath.types import ClassificationResult


def test_every_direction_maps_to_a_domain() -> None:
    domains = set(all_skill_domains())
    for direction in all_skill_directions():
        assert direction_to_domain(direction) in domains


def test_renamed_directions() -> None:
    assert direction_to_domain("Data Science & AI") == "Data Science"
    assert direction_to_domain("Mobile App Development") == "Mobile Development"
    assert direction_to_domain("UI/UX Design") == "UI/UX & Design"
    assert direction_to_domain("Other") == "General"
    assert direction_to_domain(None) == "General"
    assert direction_to_domain("Underwater Basketry") == "General"


def test_clarification_results_adapt_to_general() -> None:
    assert adapt_intent_to_domain(classify_intent("java")) == "General"
    assert adapt_intent_to_domain(ClassificationResult()) == "General"


def test_confident_result_adapts_to_domain() -> None:
    assert adapt_intent_to_domain(classify_intent("machine learning with pandas")) == "Data Science"


def test_domain_catalog() -> None:
    assert len(all_skill_domains()) == 12
    assert is_skill_domain("Full Stack Development")
    assert not is_skill_domain("Data Science & AI")
    assert describe_skill_domain("Nope") == describe_skill_domain("General")
