# intake_cli/presentation.py
"""
Turns stored lead records into display rows.

Rows for viewers without the raw-PII capability go through the masking
layer. The unmasked path is a separate function that always writes an
audit event; the mask functions themselves have no bypass.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

import structlog

from intake_api.services.masking import mask_amount, mask_email, mask_phone
from intake_api.services.scoring import classify

logger = structlog.get_logger(__name__)

ROLES = ("agent1", "agent2", "admin", "superadmin")
RAW_PII_ROLES = frozenset({"admin", "superadmin"})


@dataclass(frozen=True)
class LeadRow:
    id: Optional[int]
    name: str
    email: str
    phone: str
    alternate_phone: str
    source: str
    debt_category: str
    total_debt_amount: str
    monthly_debt_payment: str
    credit_score_range: str
    status: str
    completion_percentage: int
    category: str
    priority: str
    masked: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def can_view_raw_pii(role: Optional[str]) -> bool:
    return role in RAW_PII_ROLES


def _text(value: Any) -> str:
    if value is None or value == "":
        return "—"
    return str(value)


def _row(lead: Mapping[str, Any], email: str, phone: str, alternate_phone: str,
         total: str, monthly: str, masked: bool) -> LeadRow:
    classification = classify(lead)
    return LeadRow(
        id=lead.get("id"),
        name=lead.get("name") or "",
        email=email,
        phone=phone,
        alternate_phone=alternate_phone,
        source=lead.get("source") or "",
        debt_category=lead.get("debtCategory") or "",
        total_debt_amount=total,
        monthly_debt_payment=monthly,
        credit_score_range=_text(lead.get("creditScoreRange")),
        status=lead.get("status") or "new",
        completion_percentage=classification.completion_percentage,
        category=classification.category.value,
        priority=classification.priority.value,
        masked=masked,
    )


def mask_lead(lead: Mapping[str, Any]) -> LeadRow:
    return _row(
        lead,
        email=mask_email(lead.get("email")),
        phone=mask_phone(lead.get("phone")),
        alternate_phone=mask_phone(lead.get("alternatePhone")),
        total=mask_amount(lead.get("totalDebtAmount")),
        monthly=mask_amount(lead.get("monthlyDebtPayment")),
        masked=True,
    )


def reveal_lead(lead: Mapping[str, Any], role: str) -> LeadRow:
    """Unmasked row for a viewer holding the raw-PII capability."""
    if not can_view_raw_pii(role):
        raise PermissionError(f"role {role!r} may not view unmasked lead data")

    logger.info("pii.revealed", lead_id=lead.get("id"), role=role)
    return _row(
        lead,
        email=_text(lead.get("email")),
        phone=_text(lead.get("phone")),
        alternate_phone=_text(lead.get("alternatePhone")),
        total=_text(lead.get("totalDebtAmount")),
        monthly=_text(lead.get("monthlyDebtPayment")),
        masked=False,
    )


def present_lead(lead: Mapping[str, Any], role: Optional[str]) -> LeadRow:
    if can_view_raw_pii(role):
        return reveal_lead(lead, role)
    return mask_lead(lead)
