"""
Display masking for lead PII.

Every transform here is one-way: the masked string keeps only a short
prefix or suffix of the raw value and there is no unmasking counterpart.
Absent input (``None``, ``""``, ``0``, ``False``) renders as ``EMPTY``.
"""
from __future__ import annotations

import re
from decimal import Decimal
from enum import Enum
from typing import Any

EMPTY = "—"
MASKED_SHORT_PHONE = "***-****"
MASKED_SHORT_AMOUNT = "$***"

_NON_DIGITS = re.compile(r"\D")


class MaskKind(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    AMOUNT = "amount"


def mask_email(email: Any) -> str:
    if not email:
        return EMPTY
    local, _, domain = str(email).partition("@")
    if len(local) <= 2:
        return f"{local}***@{domain}"
    return f"{local[:2]}***@{domain}"


def mask_phone(phone: Any) -> str:
    if not phone:
        return EMPTY
    digits = _NON_DIGITS.sub("", str(phone))
    if len(digits) <= 4:
        return MASKED_SHORT_PHONE
    return f"***-***-{digits[-4:]}"


def _amount_text(amount: Any) -> str:
    # Whole numbers render without a fractional part: 5000.0 -> "5000".
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    if isinstance(amount, Decimal) and amount.is_finite():
        if amount == amount.to_integral_value():
            return str(int(amount))
        return format(amount.normalize(), "f")
    return str(amount)


def mask_amount(amount: Any) -> str:
    if not amount:
        return EMPTY
    text = _amount_text(amount)
    if len(text) <= 3:
        return MASKED_SHORT_AMOUNT
    return f"${text[0]}***"


_MASKERS = {
    MaskKind.EMAIL: mask_email,
    MaskKind.PHONE: mask_phone,
    MaskKind.AMOUNT: mask_amount,
}


def mask(value: Any, kind: "MaskKind | str") -> str:
    """Mask ``value`` as the given kind of field."""
    return _MASKERS[MaskKind(kind)](value)
