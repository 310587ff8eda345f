# intake_api/models/__init__.py
"""
SQLAlchemy ORM models for database entities.
"""

from intake_api.models.lead import Lead

__all__ = [
    "Lead",
]
