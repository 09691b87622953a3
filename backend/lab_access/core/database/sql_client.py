"""
SQLAlchemy database client (SQLite by default, any SQLAlchemy URL works)
"""
import logging
import os
from typing import Any, Dict

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool


logger = logging.getLogger(__name__)

class SQLAlchemyClient:
    """Relational store behind the data access gateway"""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.is_connected = False
        self.url = make_url(config["url"])
        self.engine = None
        self.SessionLocal = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.get_backend_name() == "sqlite"

    def _engine_kwargs(self) -> Dict[str, Any]:
        if not self.is_sqlite:
            return {"pool_pre_ping": True}
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if not self.url.database or self.url.database == ":memory:":
            # A single shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        return kwargs

    def connect(self) -> bool:
        try:
            if self.is_sqlite and self.url.database and self.url.database != ":memory:":
                db_dir = os.path.dirname(os.path.abspath(self.url.database))
                os.makedirs(db_dir, exist_ok=True)
            self.engine = create_engine(self.url, **self._engine_kwargs())
            self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
            self.is_connected = True
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.error("[DB] Connection error for %s: %s", self.url.render_as_string(hide_password=True), e)
            self.is_connected = False
            return False

    def disconnect(self) -> bool:
        if self.engine:
            self.engine.dispose()
        self.is_connected = False
        return True

    def test_connection(self) -> bool:
        try:
            if not self.is_connected and not self.connect():
                return False
            with self.SessionLocal() as session:
                session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def get_session(self) -> Session:
        if not self.is_connected:
            self.connect()
        return self.SessionLocal()

    def health_check(self) -> Dict[str, Any]:
        return {
            "type": self.url.get_backend_name(),
            "connected": self.is_connected,
            "status": "healthy" if self.test_connection() else "unhealthy",
        }
