from __future__ import annotations
import math
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .models import ProblemSession, ProblemSubmission

MIN_PAGE_SIZE = 5
MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 10
# Keeps the query offset inside a 64-bit integer
MAX_PAGE = 2**31


def clamp_page(page: Optional[int]) -> int:
	return min(MAX_PAGE, max(1, page or 1))


def clamp_page_size(page_size: Optional[int]) -> int:
	size = DEFAULT_PAGE_SIZE if page_size is None else page_size
	return min(MAX_PAGE_SIZE, max(MIN_PAGE_SIZE, size))


def latest_correct(db: Session, session_ids: Sequence[str]) -> Dict[str, Optional[bool]]:
	"""Correctness of the most recent submission for each session (None if never answered)."""
	result: Dict[str, Optional[bool]] = {sid: None for sid in session_ids}
	if not session_ids:
		return result
	rows = db.execute(
		select(ProblemSubmission.session_id, ProblemSubmission.is_correct)
		.where(ProblemSubmission.session_id.in_(list(session_ids)))
		.order_by(ProblemSubmission.created_at.desc())
	).all()
	answered = set()
	for session_id, correct in rows:
		if session_id in answered:
			continue
		answered.add(session_id)
		result[session_id] = bool(correct)
	return result


def score(db: Session, window: int) -> Dict[str, int]:
	ids = db.execute(
		select(ProblemSession.id).order_by(ProblemSession.created_at.desc()).limit(window)
	).scalars().all()
	outcomes = latest_correct(db, ids).values()
	return {
		"correct": sum(1 for o in outcomes if o is True),
		"total": sum(1 for o in outcomes if o is not None),
	}


def history_page(db: Session, page: Optional[int], page_size: Optional[int], *, score_window: int) -> Dict[str, Any]:
	page = clamp_page(page)
	page_size = clamp_page_size(page_size)

	total = db.execute(select(func.count()).select_from(ProblemSession)).scalar_one()
	sessions: List[ProblemSession] = db.execute(
		select(ProblemSession)
		.order_by(ProblemSession.created_at.desc())
		.offset((page - 1) * page_size)
		.limit(page_size)
	).scalars().all()
	latest = latest_correct(db, [s.id for s in sessions])

	items = [
		{
			"id": s.id,
			"created_at": s.created_at.isoformat() if s.created_at else None,
			"problem_text": s.problem_text,
			"difficulty": s.difficulty,
			"opType": s.op_type,
			"topic": s.topic,
			"latest_correct": latest[s.id],
		}
		for s in sessions
	]
	page_count = max(1, math.ceil(total / page_size))
	return {
		"items": items,
		"score": score(db, score_window),
		"page": page,
		"pageSize": page_size,
		"total": total,
		"pageCount": page_count,
		"hasMore": page < page_count,
	}
