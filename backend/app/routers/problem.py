from __future__ import annotations
import json
import logging
import uuid
from typing import Any, List, Literal, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..catalog import pick_theme
from ..db import get_db
from ..gemini_client import GeminiClient, GeminiConfigError
from ..generation import GenerationRequestError, InsufficientDiversity, InvalidGenerationOutput, generate_problem
from ..grading import AnswerFormatError, build_feedback, is_correct, parse_answer
from ..history import DEFAULT_PAGE_SIZE, MAX_PAGE, history_page
from ..models import ProblemSession, ProblemSubmission
from ..prompts import build_problem_prompt
from ..settings import settings
from ..textnorm import banned_words, normalize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/problem", tags=["problem"])


Difficulty = Literal["easy", "medium", "hard"]
OpType = Literal["any", "add", "sub", "mul", "div"]
Topic = Literal[
	"any",
	"fractions-division",
	"percentage",
	"ratio",
	"rate",
	"area-triangle",
	"volume-cube-cuboid",
	"angles",
	"triangles",
	"quadrilaterals",
]


class GenerateProblemRequest(BaseModel):
	difficulty: Difficulty = "medium"
	opType: OpType = "any"
	topic: Topic = "any"


class SubmitAnswerRequest(BaseModel):
	sessionId: uuid.UUID
	userAnswer: Union[float, str]


def _datastore_error(exc: SQLAlchemyError, db: Session) -> HTTPException:
	logger.error("datastore error: %s", exc)
	db.rollback()
	return HTTPException(status_code=500, detail=str(exc))


def _recent_problem_texts(db: Session, limit: int) -> List[str]:
	return list(
		db.execute(
			select(ProblemSession.problem_text).order_by(ProblemSession.created_at.desc()).limit(limit)
		).scalars().all()
	)


def _steps_list(value: Any) -> List[str]:
	# Older rows may hold the steps as a JSON-encoded string
	if isinstance(value, list):
		return [str(s) for s in value]
	if isinstance(value, str):
		try:
			parsed = json.loads(value)
		except ValueError:
			return []
		if isinstance(parsed, list):
			return [str(s) for s in parsed]
	return []


@router.post("")
async def create_problem(req: Optional[GenerateProblemRequest] = None, db: Session = Depends(get_db)):
	req = req or GenerateProblemRequest()
	try:
		client = GeminiClient()
	except GeminiConfigError as e:
		raise HTTPException(status_code=500, detail=str(e))
	try:
		try:
			recent = _recent_problem_texts(db, settings.recent_window)
		except SQLAlchemyError as e:
			raise _datastore_error(e, db)
		theme = pick_theme(recent)
		prompt = build_problem_prompt(req.difficulty, req.opType, req.topic, theme, banned_words(recent))
		seen = {normalize(t) for t in recent}
		problem = await generate_problem(client, prompt, seen)
	except InvalidGenerationOutput as e:
		raise HTTPException(status_code=502, detail={"error": str(e), "raw": e.raw})
	except (InsufficientDiversity, GenerationRequestError) as e:
		raise HTTPException(status_code=502, detail={"error": str(e)})
	finally:
		await client.aclose()

	row = ProblemSession(
		problem_text=problem.problem_text,
		correct_answer=problem.final_answer,
		difficulty=req.difficulty,
		op_type=None if req.opType == "any" else req.opType,
		topic=None if req.topic == "any" else req.topic,
		hint=problem.hint,
		solution_steps=problem.steps,
	)
	try:
		db.add(row)
		db.commit()
		db.refresh(row)
	except SQLAlchemyError as e:
		raise _datastore_error(e, db)
	logger.info("created session %s (theme=%s, difficulty=%s)", row.id, theme, req.difficulty)

	return {
		"sessionId": row.id,
		"problem_text": row.problem_text,
		"difficulty": req.difficulty,
		"opType": req.opType,
		"topic": req.topic,
		"hint": row.hint,
		"steps": _steps_list(row.solution_steps),
	}


@router.post("/submit")
async def submit_answer(req: SubmitAnswerRequest, db: Session = Depends(get_db)):
	try:
		session = db.get(ProblemSession, str(req.sessionId))
	except SQLAlchemyError as e:
		raise _datastore_error(e, db)
	if session is None:
		raise HTTPException(status_code=404, detail="Session not found")

	try:
		user_value = parse_answer(req.userAnswer)
	except AnswerFormatError as e:
		raise HTTPException(status_code=400, detail=str(e))

	correct = is_correct(user_value, session.correct_answer)
	feedback = await build_feedback(
		session.problem_text,
		session.correct_answer,
		user_value,
		correct,
		client_factory=GeminiClient,
	)

	try:
		db.add(ProblemSubmission(
			session_id=session.id,
			user_answer=user_value,
			is_correct=correct,
			feedback_text=feedback,
		))
		db.commit()
	except SQLAlchemyError as e:
		raise _datastore_error(e, db)

	return {
		"is_correct": correct,
		"feedback": feedback,
		"hint": session.hint,
		"steps": _steps_list(session.solution_steps),
		"difficulty": session.difficulty,
		"opType": session.op_type,
	}


@router.get("/history")
def get_history(
	page: int = Query(default=1, le=MAX_PAGE),
	pageSize: int = Query(default=DEFAULT_PAGE_SIZE),
	db: Session = Depends(get_db),
):
	try:
		return history_page(db, page, pageSize, score_window=settings.score_window)
	except SQLAlchemyError as e:
		raise _datastore_error(e, db)
