from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Tuple


class LeadTier(str, Enum):
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


class LeadPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


LEAD_STATUSES = ("new", "interested", "not-interested", "successful", "follow-up")

# Bump when the checklist, weights or thresholds change.
CHECKLIST_VERSION = 1

COMPLETENESS_CHECKLIST: Tuple[Tuple[str, int], ...] = (
    ("email", 10),
    ("phone", 10),
    ("total_debt_amount", 10),
    ("number_of_creditors", 10),
    ("monthly_debt_payment", 10),
    ("credit_score_range", 10),
    ("address", 10),
    ("city", 10),
    ("state", 10),
    ("zipcode", 10),
)

HOT_THRESHOLD = 80
WARM_THRESHOLD = 50

_PRIORITY_BY_TIER = {
    LeadTier.HOT: LeadPriority.HIGH,
    LeadTier.WARM: LeadPriority.MEDIUM,
    LeadTier.COLD: LeadPriority.LOW,
}


@dataclass(frozen=True)
class Classification:
    completion_percentage: int
    category: LeadTier
    priority: LeadPriority

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completionPercentage": self.completion_percentage,
            "category": self.category.value,
            "priority": self.priority.value,
        }


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _field(lead: Any, name: str) -> Any:
    """Read a snake_case field from an ORM row, pydantic model or dict."""
    if isinstance(lead, Mapping):
        if name in lead:
            return lead[name]
        return lead.get(_camel(name))
    return getattr(lead, name, None)


def _is_present(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def completion_percentage(lead: Any) -> int:
    total = sum(weight for _, weight in COMPLETENESS_CHECKLIST)
    filled = sum(
        weight for name, weight in COMPLETENESS_CHECKLIST if _is_present(_field(lead, name))
    )
    return round(100 * filled / total)


def tier_for(percentage: int) -> LeadTier:
    if percentage >= HOT_THRESHOLD:
        return LeadTier.HOT
    if percentage >= WARM_THRESHOLD:
        return LeadTier.WARM
    return LeadTier.COLD


def classify(lead: Any) -> Classification:
    """Score a lead snapshot and bucket it into a priority tier.

    Zero values count as missing, in line with how the masking layer treats
    them. The lead is never modified.
    """
    percentage = completion_percentage(lead)
    tier = tier_for(percentage)
    return Classification(
        completion_percentage=percentage,
        category=tier,
        priority=_PRIORITY_BY_TIER[tier],
    )


def summarize(leads: Iterable[Any]) -> Dict[str, Any]:
    """Dashboard statistics over a collection of leads."""
    tiers: Counter = Counter()
    statuses: Counter = Counter()
    total = 0
    for lead in leads:
        total += 1
        tiers[classify(lead).category.value] += 1
        statuses[_field(lead, "status") or "new"] += 1

    successful = statuses.get("successful", 0)
    conversion_rate = round(successful / total * 100, 2) if total else 0.0

    return {
        "totalLeads": total,
        "byCategory": {tier.value: tiers.get(tier.value, 0) for tier in LeadTier},
        "byStatus": {status: statuses.get(status, 0) for status in LEAD_STATUSES},
        "conversionRate": conversion_rate,
        "checklistVersion": CHECKLIST_VERSION,
    }
