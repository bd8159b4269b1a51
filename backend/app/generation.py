from __future__ import annotations
import logging
from typing import AbstractSet, Any, Dict, Optional

from .gemini_client import GeminiClient, GeminiError
from .prompts import RETRY_NUDGE
from .schema import GeneratedProblem, parse_candidate
from .settings import settings
from .textnorm import normalize

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    pass


class InvalidGenerationOutput(GenerationError):
    def __init__(self, raw: str) -> None:
        super().__init__("Invalid AI JSON")
        self.raw = raw


class InsufficientDiversity(GenerationError):
    def __init__(self) -> None:
        super().__init__("Could not produce a sufficiently diverse problem.")


class GenerationRequestError(GenerationError):
    pass


def generation_config() -> Dict[str, Any]:
    return {
        "responseMimeType": "application/json",
        "temperature": settings.gemini_temperature,
        "topP": settings.gemini_top_p,
        "topK": settings.gemini_top_k,
    }


async def generate_problem(
    client: GeminiClient,
    prompt: str,
    seen: AbstractSet[str],
    *,
    attempts: Optional[int] = None,
) -> GeneratedProblem:
    """Ask the model for a problem until one is valid and not a recent duplicate.

    `seen` holds normalized texts of recent problems. Each attempt is a single
    sequential call; from the second attempt on, the prompt asks for a different
    scenario. Raises InvalidGenerationOutput when no reply was ever valid,
    InsufficientDiversity when valid replies were all duplicates, and
    GenerationRequestError when the completion call itself fails.
    """
    attempts = attempts or settings.generation_attempts
    saw_valid = False
    last_raw = ""
    for attempt in range(1, attempts + 1):
        text = prompt if attempt == 1 else prompt + RETRY_NUDGE
        try:
            raw = await client.generate(text, generation_config=generation_config())
        except GeminiError as exc:
            raise GenerationRequestError(str(exc)) from exc

        result = parse_candidate(raw)
        if not result.ok:
            last_raw = result.raw
            logger.warning("attempt %d/%d rejected: %s", attempt, attempts, result.error)
            continue

        saw_valid = True
        if normalize(result.problem.problem_text) in seen:
            logger.warning("attempt %d/%d rejected: duplicate of a recent problem", attempt, attempts)
            continue

        logger.info("accepted generated problem on attempt %d/%d", attempt, attempts)
        return result.problem

    if saw_valid:
        raise InsufficientDiversity()
    raise InvalidGenerationOutput(last_raw)
