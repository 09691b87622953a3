"""
Database module - SQLAlchemy base, client singleton and session dependency
"""
from typing import Optional, Generator
from sqlalchemy.orm import Session, declarative_base
from lab_access.core.database.sql_client import SQLAlchemyClient
from lab_access.core.config import settings

# SQLAlchemy Base for models
Base = declarative_base()

_db_client: Optional[SQLAlchemyClient] = None

def get_db_client() -> SQLAlchemyClient:
    """Get or create database client singleton"""
    global _db_client
    if _db_client is None:
        _db_client = SQLAlchemyClient({"url": settings.DATABASE_URL})
        _db_client.connect()
    return _db_client

def get_db() -> Generator[Session, None, None]:
    """Get database session - FastAPI dependency"""
    from fastapi import HTTPException, status
    client = get_db_client()
    if not client.is_connected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not initialized. Please run the initialization script."
        )
    session = client.get_session()
    try:
        yield session
    finally:
        session.close()

def SessionLocal() -> Session:
    """
    Stand-alone session factory for use in non-FastAPI contexts (e.g. scripts).
    """
    return get_db_client().get_session()

def init_db() -> None:
    """Create all tables. Safe to call repeatedly."""
    import lab_access.models  # noqa: F401  registers the mappers on Base
    Base.metadata.create_all(bind=get_db_client().engine)

def reset_db_client():
    """Reset database client (for testing)"""
    global _db_client
    if _db_client:
        _db_client.disconnect()
    _db_client = None

__all__ = [
    "Base",
    "get_db",
    "SessionLocal",
    "init_db",
    "get_db_client",
    "reset_db_client",
    "SQLAlchemyClient",
]
