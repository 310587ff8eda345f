# intake_api/models/lead.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import JSON, CheckConstraint, DateTime, Enum, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from intake_api.db.base import Base
from intake_api.services.scoring import LEAD_STATUSES
from intake_api.services.taxonomy import CREDIT_SCORE_RANGES, FALLBACK_SOURCE, DebtCategory


class Lead(Base):
    __tablename__ = "leads"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(254))
    phone: Mapped[Optional[str]] = mapped_column(String(32))
    alternate_phone: Mapped[Optional[str]] = mapped_column(String(32))

    # Debt profile. source is derived from debt_types/debt_category on every write.
    debt_category: Mapped[str] = mapped_column(
        Enum(*[c.value for c in DebtCategory], name="debt_category"),
        nullable=False,
        server_default=DebtCategory.UNSECURED.value,
    )
    debt_types: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    source: Mapped[str] = mapped_column(String(64), nullable=False, server_default=FALLBACK_SOURCE)
    total_debt_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    number_of_creditors: Mapped[Optional[int]] = mapped_column(Integer)
    monthly_debt_payment: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    credit_score_range: Mapped[Optional[str]] = mapped_column(
        Enum(*CREDIT_SCORE_RANGES, name="credit_score_range")
    )

    address: Mapped[Optional[str]] = mapped_column(String(200))
    city: Mapped[Optional[str]] = mapped_column(String(100))
    state: Mapped[Optional[str]] = mapped_column(String(50))
    zipcode: Mapped[Optional[str]] = mapped_column(String(20))
    notes: Mapped[Optional[str]] = mapped_column(Text)

    status: Mapped[str] = mapped_column(
        Enum(*LEAD_STATUSES, name="lead_status"),
        nullable=False,
        default="new",
        server_default="new",
    )
    follow_up_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    follow_up_notes: Mapped[Optional[str]] = mapped_column(String(500))
    converted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    __table_args__ = (
        Index("idx_leads_status", "status"),
        Index("idx_leads_source_created_at", "source", "created_at"),
        CheckConstraint("length(name) > 0", name="name_not_empty"),
        CheckConstraint("total_debt_amount IS NULL OR total_debt_amount >= 0", name="total_debt_non_negative"),
        CheckConstraint("number_of_creditors IS NULL OR number_of_creditors >= 0", name="creditors_non_negative"),
        CheckConstraint("monthly_debt_payment IS NULL OR monthly_debt_payment >= 0", name="monthly_payment_non_negative"),
    )
