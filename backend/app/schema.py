from __future__ import annotations
import json
import math
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .textnorm import unfence


_STEP_SPLIT = re.compile(r"\s*\n+\s*")


class GeneratedProblem(BaseModel):
    """One problem as returned by the model.

    Field constraints:
        problem_text  string, at least 10 characters
        final_answer  number, or a string that parses as a finite number
        hint          optional string, at least 5 characters
        steps         optional list of 1-10 strings; a newline-separated
                      string is split into a list
    """

    problem_text: str = Field(min_length=10)
    final_answer: float
    hint: Optional[str] = Field(default=None, min_length=5)
    steps: Optional[List[str]] = Field(default=None, min_length=1, max_length=10)

    @field_validator("final_answer", mode="before")
    @classmethod
    def _coerce_number(cls, v: Any) -> float:
        if isinstance(v, bool) or v is None:
            raise ValueError("final_answer must be a number")
        if isinstance(v, str):
            v = v.replace(",", "").strip()
        try:
            number = float(v)
        except (TypeError, ValueError):
            raise ValueError("final_answer must be a number") from None
        if not math.isfinite(number):
            raise ValueError("final_answer must be finite")
        return number

    @field_validator("steps", mode="before")
    @classmethod
    def _split_steps(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [part for part in _STEP_SPLIT.split(v) if part]
        return v


@dataclass
class CandidateResult:
    ok: bool
    raw: str
    problem: Optional[GeneratedProblem] = None
    error: Optional[str] = None


def parse_candidate(raw: str) -> CandidateResult:
    text = unfence(raw)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return CandidateResult(ok=False, raw=text, error=f"invalid JSON: {exc}")
    if not isinstance(data, dict):
        return CandidateResult(ok=False, raw=text, error="expected a JSON object")
    try:
        problem = GeneratedProblem.model_validate(data)
    except ValidationError as exc:
        return CandidateResult(ok=False, raw=text, error=str(exc))
    return CandidateResult(ok=True, raw=text, problem=problem)
