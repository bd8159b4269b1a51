import random

from backend.app.catalog import (
    DIFFICULTY_RULES,
    OP_RULES,
    THEMES,
    TOPIC_RULES,
    pick_theme,
    topic_rules,
)
from backend.app.prompts import RETRY_NUDGE, build_feedback_prompt, build_problem_prompt


def test_pick_theme_avoids_used_themes():
    recent = [f"A story about {t} and more." for t in THEMES if t != "pets"]
    for seed in range(20):
        assert pick_theme(recent, rng=random.Random(seed)) == "pets"


def test_pick_theme_ignores_case_and_punctuation():
    recent = ["At the ZOO-ANIMALS show, 5 lions ate."]
    themes = ["zoo animals", "oranges"]
    assert pick_theme(recent, themes, rng=random.Random(1)) == "oranges"


def test_pick_theme_falls_back_when_exhausted():
    recent = [" ".join(THEMES)]
    expected = random.Random(7).sample(THEMES, len(THEMES))[0]
    assert pick_theme(recent, rng=random.Random(7)) == expected


def test_pick_theme_with_no_history_returns_a_theme():
    assert pick_theme([]) in THEMES


def test_topic_rules_specific_and_any():
    assert topic_rules("ratio") == f"Topic: {TOPIC_RULES['ratio']}"
    listing = topic_rules("any")
    for text in TOPIC_RULES.values():
        assert text in listing
    assert topic_rules(None) == listing


def test_problem_prompt_embeds_inputs():
    prompt = build_problem_prompt("hard", "div", "rate", "bus rides", ["apples", "farm"])
    assert "Difficulty: HARD." in prompt
    assert "Theme: bus rides." in prompt
    assert OP_RULES["div"] in prompt
    assert DIFFICULTY_RULES["hard"] in prompt
    assert TOPIC_RULES["rate"] in prompt
    assert "apples, farm" in prompt
    assert prompt.startswith("Return ONLY JSON")


def test_problem_prompt_without_banned_words():
    prompt = build_problem_prompt("easy", "any", "any", "pets", [])
    assert "similar scenario: (none)." in prompt
    assert RETRY_NUDGE not in prompt


def test_feedback_prompt_formats_numbers():
    prompt = build_feedback_prompt("Sam has 3 pens.", 42.0, 41.5, False)
    assert "Correct numeric answer: 42\n" in prompt
    assert "Student answer: 41.5 (wrong)" in prompt
