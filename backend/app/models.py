from __future__ import annotations
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Float, Boolean, Text, JSON, ForeignKey
from .db import Base


def _new_id() -> str:
	return str(uuid.uuid4())


def _utcnow() -> datetime:
	# Stored naive, always UTC
	return datetime.now(timezone.utc).replace(tzinfo=None)


class ProblemSession(Base):
	__tablename__ = "math_problem_sessions"
	id = Column(String(36), primary_key=True, default=_new_id)
	created_at = Column(DateTime, default=_utcnow, nullable=False, index=True)
	problem_text = Column(Text, nullable=False)
	correct_answer = Column(Float, nullable=False)
	difficulty = Column(String(16), nullable=False)
	# Null when the request allowed any operation / any topic
	op_type = Column(String(8), nullable=True)
	topic = Column(String(32), nullable=True)
	hint = Column(Text, nullable=True)
	solution_steps = Column(JSON, nullable=True)


class ProblemSubmission(Base):
	__tablename__ = "math_problem_submissions"
	id = Column(String(36), primary_key=True, default=_new_id)
	session_id = Column(String(36), ForeignKey("math_problem_sessions.id"), nullable=False, index=True)
	created_at = Column(DateTime, default=_utcnow, nullable=False)
	user_answer = Column(Float, nullable=False)
	is_correct = Column(Boolean, nullable=False)
	feedback_text = Column(Text, nullable=False)
