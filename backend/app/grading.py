from __future__ import annotations
import logging
import math
from typing import Callable, Optional, Union

from .gemini_client import GeminiClient
from .prompts import build_feedback_prompt
from .settings import settings

logger = logging.getLogger(__name__)

CORRECT_FEEDBACK = "Great job — that's correct!"
INCORRECT_FEEDBACK = "Good try! Re-check your arithmetic and give it another go."


class AnswerFormatError(ValueError):
	pass


def parse_answer(value: Union[int, float, str, None]) -> float:
	"""Parse a user answer such as 42, "42.0" or " 1,250 " into a float."""
	if isinstance(value, bool) or value is None:
		raise AnswerFormatError("Answer must be a number")
	text = str(value).replace(",", "").strip()
	if "_" in text:
		raise AnswerFormatError("Answer must be a number")
	try:
		number = float(text)
	except ValueError:
		raise AnswerFormatError("Answer must be a number") from None
	if not math.isfinite(number):
		raise AnswerFormatError("Answer must be a number")
	return number


def is_correct(user_value: float, correct: float, tolerance: Optional[float] = None) -> bool:
	tolerance = settings.answer_tolerance if tolerance is None else tolerance
	return abs(user_value - float(correct)) < tolerance


def fallback_feedback(correct: bool) -> str:
	return CORRECT_FEEDBACK if correct else INCORRECT_FEEDBACK


async def build_feedback(
	problem_text: str,
	correct_answer: float,
	user_value: float,
	correct: bool,
	*,
	client_factory: Callable[[], GeminiClient] = GeminiClient,
) -> str:
	# Best effort: never let feedback generation block recording the submission
	try:
		client = client_factory()
	except Exception as exc:
		logger.info("feedback model unavailable, using fallback: %s", exc)
		return fallback_feedback(correct)
	try:
		text = await client.generate(build_feedback_prompt(problem_text, correct_answer, user_value, correct))
		text = (text or "").strip()
		if text:
			return text
		logger.warning("feedback model returned empty text, using fallback")
	except Exception as exc:
		logger.error("Gemini feedback failed: %s", exc)
	finally:
		await client.aclose()
	return fallback_feedback(correct)
