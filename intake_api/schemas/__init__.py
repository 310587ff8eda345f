# intake_api/schemas/__init__.py
"""
Pydantic schemas for request/response validation and serialization.
"""

from intake_api.schemas.common import ErrorResponse, PaginatedResponse
from intake_api.schemas.lead import LeadCreate, LeadRecord, LeadStats, LeadStatusUpdate, LeadUpdate

__all__ = [
    "ErrorResponse",
    "PaginatedResponse",
    "LeadCreate",
    "LeadRecord",
    "LeadStats",
    "LeadStatusUpdate",
    "LeadUpdate",
]
