from mentorpath.core.intent_classifier import (
    EMPTY_INPUT_QUESTION,
    EXPLORATORY_QUESTION,
    all_skill_directions,
    classify_intent,
    score_directions,
)


def test_empty_input_asks_what_to_learn() -> None:
    for text in (None, "", "   "):
        result = classify_intent(text)
        assert result.needs_clarification
        assert result.detected_domain is None
        assert result.confidence == "low"
        assert result.clarification_question == EMPTY_INPUT_QUESTION


def test_exploratory_input_asks_for_area() -> None:
    result = classify_intent("I'm not sure yet, just exploring options")
    assert result.needs_clarification
    assert result.clarification_question == EXPLORATORY_QUESTION


def test_bare_ambiguous_language_needs_clarification() -> None:
    result = classify_intent("java")
    assert result.needs_clarification
    assert result.detected_domain is None
    assert "Android" in (result.clarification_question or "")


def test_learn_phrase_with_ambiguous_language_needs_clarification() -> None:
    result = classify_intent("I want to learn python")
    assert result.needs_clarification
    assert "Python" in (result.clarification_question or "")


def test_context_resolves_ambiguous_language() -> None:
    result = classify_intent("java for android")
    assert not result.needs_clarification
    assert result.detected_domain == "Mobile App Development"
    assert result.confidence == "medium"


def test_high_confidence_for_strong_signal() -> None:
    result = classify_intent("frontend web development with react")
    assert result.detected_domain == "Web Development"
    assert result.confidence == "high"
    assert result.clarification_question is None


def test_medium_confidence_for_single_keyword_group() -> None:
    result = classify_intent("python for data science")
    assert result.detected_domain == "Data Science & AI"
    assert result.confidence == "medium"


def test_unmatched_text_is_other_without_clarification() -> None:
    result = classify_intent("cooking recipes for my family")
    assert result.detected_domain == "Other"
    assert result.confidence == "low"
    assert not result.needs_clarification


def test_close_scores_ask_to_choose_between_directions() -> None:
    result = classify_intent("react and django")
    assert result.needs_clarification
    assert result.clarification_question == (
        "Are you more interested in Backend Engineering or Web Development?"
    )


def test_keywords_match_whole_words_only() -> None:
    scores = dict(score_directions("email marketing tips"))
    assert "Data Science & AI" not in scores
    assert scores["Business & Startups"] == 1.5


def test_classification_is_deterministic() -> None:
    text = "I want to build mobile apps with flutter and a backend api"
    assert classify_intent(text) == classify_intent(text)


def test_directions_end_with_other() -> None:
    directions = all_skill_directions()
    assert directions[-1] == "Other"
    assert len(directions) == 11
