"""Shared fixtures: an in-memory database and a scripted stand-in for Gemini."""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.app import models
from backend.app.db import Base, get_db
from backend.app.gemini_client import GeminiError
from backend.app.main import app
from backend.app.routers import gemini as gemini_router
from backend.app.routers import problem as problem_router


class FakeGemini:
    """Returns scripted replies in order; an Exception in the script is raised."""

    def __init__(self, replies=None, models=None, models_error=None):
        self.replies = list(replies or [])
        self.models = list(models or [])
        self.models_error = models_error
        self.prompts = []
        self.closed = 0

    async def generate(self, prompt, *, generation_config=None):
        self.prompts.append(prompt)
        if not self.replies:
            raise GeminiError("no scripted reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def list_models(self):
        if self.models_error is not None:
            raise self.models_error
        return self.models

    async def aclose(self):
        self.closed += 1


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(bind=engine, autoflush=False, future=True)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    Session = sessionmaker(bind=engine, autoflush=False, future=True)

    def override_get_db():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fake_gemini(monkeypatch):
    fake = FakeGemini()
    monkeypatch.setattr(problem_router, "GeminiClient", lambda *a, **k: fake)
    monkeypatch.setattr(gemini_router, "GeminiClient", lambda *a, **k: fake)
    return fake


@pytest.fixture
def add_session(db):
    base = datetime(2025, 1, 1, 8, 0, 0)

    def _add(index, text=None, correct_answer=42.0, **fields):
        row = models.ProblemSession(
            problem_text=text or f"Problem number {index} about sharing sweets",
            correct_answer=correct_answer,
            difficulty=fields.pop("difficulty", "medium"),
            created_at=base + timedelta(minutes=index),
            **fields,
        )
        db.add(row)
        db.commit()
        return row

    return _add


@pytest.fixture
def add_submission(db):
    base = datetime(2025, 6, 1, 8, 0, 0)

    def _add(session, is_correct, minute=0, user_answer=0.0):
        row = models.ProblemSubmission(
            session_id=session.id,
            user_answer=user_answer,
            is_correct=is_correct,
            feedback_text="ok",
            created_at=base + timedelta(minutes=minute),
        )
        db.add(row)
        db.commit()
        return row

    return _add
