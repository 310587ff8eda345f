# intake_api/routes/leads.py
from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from intake_api.core.logging import get_structlog_logger
from intake_api.db.session import get_session
from intake_api.schemas.common import PaginatedResponse, PaginationParams
from intake_api.schemas.lead import (
    LeadCreate,
    LeadRecord,
    LeadStats,
    LeadStatus,
    LeadStatusUpdate,
    LeadUpdate,
)
from intake_api.services import lead_service
from intake_api.services.scoring import summarize

logger = get_structlog_logger(__name__)

router = APIRouter(prefix="/leads", tags=["leads"])


@router.get("", response_model=PaginatedResponse[LeadRecord])
async def list_leads(
    session: AsyncSession = Depends(get_session),
    pagination: PaginationParams = Depends(),
    status_filter: Optional[LeadStatus] = Query(None, alias="status"),
    category: Optional[Literal["hot", "warm", "cold"]] = Query(None),
    search: Optional[str] = Query(None, min_length=1, max_length=100),
):
    """List stored leads, newest first.

    Records are returned raw; classification and masking are left to the
    presentation layer.
    """
    filters = lead_service.LeadFilters(status=status_filter, category=category, search=search)
    page = await lead_service.list_leads(
        session,
        filters,
        skip=pagination.skip,
        limit=pagination.limit,
    )

    logger.info(
        "leads.list",
        total=page.total,
        page=pagination.page,
        page_size=pagination.limit,
        filters={"status": status_filter, "category": category, "search": bool(search)},
    )

    return PaginatedResponse[LeadRecord].build(
        items=[LeadRecord.model_validate(lead) for lead in page.items],
        total=page.total,
        pagination=pagination,
    )


@router.post("", response_model=LeadRecord, status_code=status.HTTP_201_CREATED)
async def create_lead(
    lead_data: LeadCreate,
    session: AsyncSession = Depends(get_session),
):
    """Create a lead; the server assigns source, status and timestamps."""
    lead = await lead_service.create_lead(session, lead_data)
    return LeadRecord.model_validate(lead)


@router.get("/stats", response_model=LeadStats)
async def lead_stats(session: AsyncSession = Depends(get_session)):
    leads = await lead_service.all_leads(session)
    return LeadStats.model_validate(summarize(leads))


@router.get("/{lead_id}", response_model=LeadRecord)
async def get_lead(
    lead_id: int,
    session: AsyncSession = Depends(get_session),
):
    lead = await lead_service.get_lead(session, lead_id)
    return LeadRecord.model_validate(lead)


@router.patch("/{lead_id}", response_model=LeadRecord)
async def update_lead(
    lead_id: int,
    lead_data: LeadUpdate,
    session: AsyncSession = Depends(get_session),
):
    """Edit lead fields. Changing the debt category clears the debt types."""
    lead = await lead_service.update_lead(session, lead_id, lead_data)
    return LeadRecord.model_validate(lead)


@router.put("/{lead_id}/status", response_model=LeadRecord)
async def update_lead_status(
    lead_id: int,
    status_data: LeadStatusUpdate,
    session: AsyncSession = Depends(get_session),
):
    """Move a lead to any status; transitions are not restricted."""
    lead = await lead_service.change_status(session, lead_id, status_data)
    return LeadRecord.model_validate(lead)
