from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence


class DebtCategory(str, Enum):
    SECURED = "secured"
    UNSECURED = "unsecured"


FALLBACK_SOURCE = "Personal Debt"

SOURCE_LABELS = (
    "Personal Debt",
    "Secured Debt",
    "Unsecured Debt",
    "Revolving Debt",
    "Installment Debt",
    "Credit Card Debt",
    "Mortgage Debt",
    "Student Loans",
    "Auto Loans",
    "Personal Loans",
    "Medical Debt",
    "Home Equity Loans (HELOCs)",
    "Payday Loans",
    "Buy Now, Pay Later (BNPL) loans",
)

# Selection order matters: the form lists types in this order.
DEBT_TYPES_BY_CATEGORY: Dict[str, List[str]] = {
    DebtCategory.SECURED.value: [
        "Mortgage Loans",
        "Auto Loans",
        "Secured Personal Loans",
        "Home Equity Loans",
        "Title Loans",
    ],
    DebtCategory.UNSECURED.value: [
        "Credit Cards",
        "Instalment Loans (Unsecured)",
        "Medical Bills",
        "Utility Bills",
        "Payday Loans",
        "Student Loans (private loan)",
        "Store/Charge Cards",
        "Overdraft Balances",
        "Business Loans (unsecured)",
        "Collection Accounts",
    ],
}

# Many-to-one: several debt types share a reporting label.
DEBT_TYPE_TO_SOURCE: Dict[str, str] = {
    "Credit Cards": "Credit Card Debt",
    "Mortgage Loans": "Mortgage Debt",
    "Auto Loans": "Auto Loans",
    "Student Loans (private loan)": "Student Loans",
    "Medical Bills": "Medical Debt",
    "Personal Loans": "Personal Loans",
    "Payday Loans": "Payday Loans",
    "Secured Personal Loans": "Secured Debt",
    "Home Equity Loans": "Home Equity Loans (HELOCs)",
    "Title Loans": "Secured Debt",
    "Instalment Loans (Unsecured)": "Installment Debt",
    "Utility Bills": "Personal Debt",
    "Store/Charge Cards": "Credit Card Debt",
    "Overdraft Balances": "Personal Debt",
    "Business Loans (unsecured)": "Personal Debt",
    "Collection Accounts": "Personal Debt",
}

CATEGORY_TO_SOURCE: Dict[str, str] = {
    DebtCategory.SECURED.value: "Secured Debt",
    DebtCategory.UNSECURED.value: "Unsecured Debt",
}

# Largest values the lead columns hold: NUMERIC(12, 2) and a 32-bit INTEGER.
MAX_AMOUNT = 9_999_999_999.99
MAX_COUNT = 2_147_483_647

CREDIT_SCORE_RANGES: Dict[str, str] = {
    "300-549": "Poor",
    "550-649": "Fair",
    "650-699": "Good",
    "700-749": "Very Good",
    "750-850": "Excellent",
}

_OPTIONAL_TEXT_FIELDS = (
    "email",
    "phone",
    "alternatePhone",
    "creditScoreRange",
    "notes",
    "address",
    "city",
    "state",
    "zipcode",
)


def _category_value(debt_category: Any) -> Optional[str]:
    if isinstance(debt_category, DebtCategory):
        return debt_category.value
    return debt_category if isinstance(debt_category, str) else None


def allowed_debt_types(debt_category: Any) -> List[str]:
    return list(DEBT_TYPES_BY_CATEGORY.get(_category_value(debt_category), []))


def invalid_debt_types(debt_category: Any, debt_types: Optional[Sequence[str]]) -> List[str]:
    """Return the members of ``debt_types`` outside the category's vocabulary."""
    allowed = set(allowed_debt_types(debt_category))
    return [t for t in (debt_types or []) if t not in allowed]


def normalize_source(debt_category: Any, debt_types: Optional[Sequence[str]] = None) -> str:
    """
    Map a debt selection onto its canonical reporting source.

    The first selected debt type wins; with no selection the category alone
    decides. Anything unrecognised falls back to ``"Personal Debt"``.
    """
    if debt_types:
        return DEBT_TYPE_TO_SOURCE.get(debt_types[0], FALLBACK_SOURCE)
    return CATEGORY_TO_SOURCE.get(_category_value(debt_category), FALLBACK_SOURCE)


def parse_amount(value: Any) -> Optional[float]:
    """Parse a monetary form value; ``None`` when absent, invalid, negative or too large."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0 or number > MAX_AMOUNT:
        return None
    return number


def parse_count(value: Any) -> Optional[int]:
    """Parse a whole-number form value; ``None`` when absent, invalid, negative or too large."""
    number = parse_amount(value)
    if number is None or not number.is_integer() or number > MAX_COUNT:
        return None
    return int(number)


def clean_submission(form: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Build the outgoing create-lead payload from raw form fields.

    Optional fields that are blank or fail numeric parsing are left out of
    the payload entirely rather than sent as null or zero.
    """
    name = form.get("name") or ""
    payload: Dict[str, Any] = {"name": str(name).strip()}

    debt_category = _category_value(form.get("debtCategory"))
    debt_types = [t for t in (form.get("debtTypes") or []) if t]
    if debt_category:
        payload["debtCategory"] = debt_category
    if debt_types:
        payload["debtTypes"] = debt_types
    payload["source"] = normalize_source(debt_category, debt_types)

    for field in _OPTIONAL_TEXT_FIELDS:
        value = form.get(field)
        if isinstance(value, str) and value.strip():
            payload[field] = value.strip()

    total = parse_amount(form.get("totalDebtAmount"))
    if total is not None:
        payload["totalDebtAmount"] = total
    creditors = parse_count(form.get("numberOfCreditors"))
    if creditors is not None:
        payload["numberOfCreditors"] = creditors
    monthly = parse_amount(form.get("monthlyDebtPayment"))
    if monthly is not None:
        payload["monthlyDebtPayment"] = monthly

    return payload
