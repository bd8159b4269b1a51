from __future__ import annotations
from typing import Sequence

from .catalog import DIFFICULTY_RULES, OP_RULES, topic_rules


RETRY_NUDGE = "\nRegenerate with a DIFFERENT scenario than before; do NOT reuse entities or phrasing.\n"


def build_problem_prompt(difficulty: str, op_type: str, topic: str, theme: str, banned: Sequence[str]) -> str:
	banned_text = ", ".join(banned) or "(none)"
	return (
		"Return ONLY JSON with keys: problem_text (string), final_answer (number), hint (string), steps (string[]).\n"
		f"Primary 5 Singapore Math. Difficulty: {difficulty.upper()}.\n"
		f"Theme: {theme}.\n"
		f"{OP_RULES[op_type]}\n"
		f"{DIFFICULTY_RULES[difficulty]}\n"
		f"{topic_rules(topic)}\n"
		"- Keep the word problem to ≤ 2 sentences.\n"
		"- Use a scenario consistent with the theme.\n"
		f"- Avoid using these words or an obviously similar scenario: {banned_text}.\n"
		"- final_answer must be numeric only (no units).\n"
		"- steps should be a short step-by-step solution a student can follow.\n"
	)


def build_feedback_prompt(problem_text: str, correct: float, user_value: float, is_correct: bool) -> str:
	return (
		f"Problem: {problem_text}\n"
		f"Correct numeric answer: {_fmt(correct)}\n"
		f"Student answer: {_fmt(user_value)} ({'correct' if is_correct else 'wrong'})\n"
		"Write friendly feedback in <=3 sentences. If wrong, hint the key step. Return plain text only."
	)


def _fmt(value: float) -> str:
	# 42.0 -> "42"
	return str(int(value)) if float(value).is_integer() else repr(float(value))
