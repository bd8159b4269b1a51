from __future__ import annotations
import threading
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .settings import settings


Base = declarative_base()

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None
_lock = threading.Lock()


class DatastoreConfigError(RuntimeError):
	pass


def get_engine() -> Engine:
	"""Return the process-wide engine, creating it on first use.

	The engine is built once from DATABASE_URL and reused for the lifetime of the
	process; there is no reset path.
	"""
	global _engine, _session_factory
	if _engine is not None:
		return _engine
	with _lock:
		if _engine is None:
			url = settings.database_url
			if not url:
				raise DatastoreConfigError("DATABASE_URL is not configured")
			connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
			engine = create_engine(url, connect_args=connect_args, future=True)
			_session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
			_engine = engine
	return _engine


def get_db():
	get_engine()
	db = _session_factory()
	try:
		yield db
	finally:
		db.close()


def init_schema() -> None:
	# Import models so their tables are registered on Base.metadata
	from . import models  # noqa: F401
	Base.metadata.create_all(bind=get_engine())
