from mentorpath.core.skill_level import (
    CLARIFICATION_QUESTIONS,
    all_skill_levels,
    analyze_skill_level,
    extract_learning_goal,
    infer_skill_level,
    is_vague,
)


def test_advanced_keywords_take_precedence() -> None:
    text = "I am a beginner but want to master distributed systems architecture"
    assert infer_skill_level(text) == "Advanced"


def test_intermediate_beats_beginner() -> None:
    assert infer_skill_level("I already know python and want to improve my backend skills") == "Intermediate"


def test_defaults_to_beginner() -> None:
    assert infer_skill_level("build a personal website") == "Beginner"


def test_goal_strips_longest_filler_phrase() -> None:
    assert extract_learning_goal("I want to learn how to build web apps from scratch") == (
        "Build web apps from scratch"
    )
    assert extract_learning_goal("My goal is to become a data engineer at a startup") == (
        "Become a data engineer at a startup"
    )


def test_goal_is_capped_at_twelve_words() -> None:
    text = (
        "I want to build a large distributed system that handles millions of requests "
        "every single day across many regions of the whole world"
    )
    goal = extract_learning_goal(text)
    assert len(goal.split()) == 12
    assert goal.startswith("Build a large distributed system")


def test_vague_input_requests_direction_specific_question() -> None:
    result = analyze_skill_level("web", "Web Development")
    assert result.needs_clarification
    assert result.learning_goal == ""
    assert result.skill_level == "Beginner"
    assert result.clarification_question == CLARIFICATION_QUESTIONS["Web Development"]


def test_vague_patterns_detected() -> None:
    assert is_vague("")
    assert is_vague("I don't know, maybe anything")
    assert not is_vague("build web apps with react")


def test_unknown_direction_becomes_other() -> None:
    result = analyze_skill_level("I want to learn basket weaving techniques", "Basket Weaving")
    assert result.skill_direction == "Other"
    assert not result.needs_clarification
    assert result.learning_goal == "Basket weaving techniques"


def test_full_analysis() -> None:
    result = analyze_skill_level("I want to learn how to build web apps from scratch", "Web Development")
    assert result.skill_direction == "Web Development"
    assert result.skill_level == "Beginner"
    assert result.learning_goal == "Build web apps from scratch"
    assert result.clarification_question is None


def test_inferred_levels_are_known_levels() -> None:
    texts = ["master kubernetes", "improve my css", "", "build a game"]
    assert {infer_skill_level(text) for text in texts} <= set(all_skill_levels())
