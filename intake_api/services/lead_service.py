# intake_api/services/lead_service.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from intake_api.core.exceptions import NotFoundError, ValidationError
from intake_api.core.logging import get_structlog_logger
from intake_api.db.base import utcnow
from intake_api.models.lead import Lead
from intake_api.schemas.lead import LeadCreate, LeadStatusUpdate, LeadUpdate
from intake_api.services.scoring import classify
from intake_api.services.taxonomy import invalid_debt_types, normalize_source

logger = get_structlog_logger(__name__)


@dataclass(frozen=True)
class LeadFilters:
    status: Optional[str] = None
    category: Optional[str] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class LeadPage:
    items: List[Lead]
    total: int


async def create_lead(session: AsyncSession, payload: LeadCreate) -> Lead:
    data = payload.model_dump(mode="json", exclude_none=True)
    lead = Lead(**data)
    lead.source = normalize_source(payload.debt_category, payload.debt_types)
    lead.status = "new"

    session.add(lead)
    await session.commit()
    await session.refresh(lead)

    logger.info(
        "lead.created",
        lead_id=lead.id,
        source=lead.source,
        debt_category=lead.debt_category,
    )
    return lead


async def get_lead(session: AsyncSession, lead_id: int) -> Lead:
    lead = await session.get(Lead, lead_id)
    if lead is None:
        raise NotFoundError(
            message="Lead not found",
            code="lead_not_found",
            details={"lead_id": lead_id},
        )
    return lead


def _filtered(filters: LeadFilters):
    stmt = select(Lead)
    if filters.status:
        stmt = stmt.where(Lead.status == filters.status)
    if filters.search:
        escaped = filters.search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        term = f"%{escaped}%"
        stmt = stmt.where(
            or_(
                Lead.name.ilike(term, escape="\\"),
                Lead.email.ilike(term, escape="\\"),
                Lead.phone.ilike(term, escape="\\"),
            )
        )
    return stmt.order_by(Lead.created_at.desc(), Lead.id.desc())


async def list_leads(
    session: AsyncSession,
    filters: LeadFilters,
    *,
    skip: int,
    limit: int,
) -> LeadPage:
    stmt = _filtered(filters)

    if filters.category:
        # Tiers are derived per read, so this filter cannot be pushed into SQL.
        rows = (await session.execute(stmt)).scalars().all()
        matching = [lead for lead in rows if classify(lead).category.value == filters.category]
        return LeadPage(items=matching[skip:skip + limit], total=len(matching))

    total = (await session.execute(select(func.count()).select_from(stmt.subquery()))).scalar_one()
    rows = (await session.execute(stmt.offset(skip).limit(limit))).scalars().all()
    return LeadPage(items=list(rows), total=total)


async def all_leads(session: AsyncSession) -> Sequence[Lead]:
    return (await session.execute(select(Lead))).scalars().all()


async def update_lead(session: AsyncSession, lead_id: int, payload: LeadUpdate) -> Lead:
    lead = await get_lead(session, lead_id)
    changes = payload.changes()
    for required in ("name", "debt_category"):
        if changes.get(required, "") is None:
            del changes[required]

    category = changes.get("debt_category", lead.debt_category)
    if "debt_category" in changes and changes["debt_category"] != lead.debt_category:
        # A new category invalidates the previous selection unless one is supplied.
        changes.setdefault("debt_types", [])
    if "debt_types" in changes:
        changes["debt_types"] = changes["debt_types"] or []
        invalid = invalid_debt_types(category, changes["debt_types"])
        if invalid:
            raise ValidationError(
                message="Debt types do not match the debt category",
                code="invalid_debt_types",
                details={"debt_category": category, "invalid": invalid},
            )

    for field, value in changes.items():
        setattr(lead, field, value)
    lead.source = normalize_source(lead.debt_category, lead.debt_types)

    await session.commit()
    await session.refresh(lead)

    logger.info("lead.updated", lead_id=lead.id, updated_fields=sorted(changes))
    return lead


async def change_status(session: AsyncSession, lead_id: int, payload: LeadStatusUpdate) -> Lead:
    lead = await get_lead(session, lead_id)
    previous = lead.status

    lead.status = payload.status
    if "follow_up_date" in payload.model_fields_set:
        lead.follow_up_date = payload.follow_up_date
    if "follow_up_notes" in payload.model_fields_set:
        lead.follow_up_notes = payload.follow_up_notes
    if payload.status == "successful" and lead.converted_at is None:
        lead.converted_at = utcnow()

    await session.commit()
    await session.refresh(lead)

    logger.info("lead.status_changed", lead_id=lead.id, previous=previous, status=lead.status)
    return lead
