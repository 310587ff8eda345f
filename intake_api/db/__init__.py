# intake_api/db/__init__.py
"""
Database package for SQLAlchemy setup, session management, and base models.
"""

from intake_api.db.base import Base
from intake_api.db.session import create_database_engine, get_session, init_models

__all__ = [
    "Base",
    "create_database_engine",
    "get_session",
    "init_models",
]
