# intake_api/schemas/lead.py
from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator, model_validator

from intake_api.schemas.common import CamelModel
from intake_api.services.taxonomy import (
    CREDIT_SCORE_RANGES,
    DebtCategory,
    invalid_debt_types,
    parse_amount,
    parse_count,
)

LeadStatus = Literal["new", "interested", "not-interested", "successful", "follow-up"]

_PHONE_PATTERN = re.compile(r"^[\d+\-().\s]{5,20}$")

_OPTIONAL_TEXT = (
    "email",
    "phone",
    "alternate_phone",
    "credit_score_range",
    "address",
    "city",
    "state",
    "zipcode",
    "notes",
)


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class LeadFields(CamelModel):
    """Editable lead fields shared by create and update payloads."""

    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    alternate_phone: Optional[str] = Field(None, max_length=20)
    debt_types: Optional[List[str]] = None
    total_debt_amount: Optional[float] = None
    number_of_creditors: Optional[int] = None
    monthly_debt_payment: Optional[float] = None
    credit_score_range: Optional[str] = None
    address: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    zipcode: Optional[str] = Field(None, max_length=20)
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator(*_OPTIONAL_TEXT, mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        return _blank_to_none(v)

    @field_validator("total_debt_amount", "monthly_debt_payment", mode="before")
    @classmethod
    def parse_money(cls, v):
        # Unparseable or negative amounts are dropped, not rejected
        return parse_amount(v)

    @field_validator("number_of_creditors", mode="before")
    @classmethod
    def parse_creditors(cls, v):
        return parse_count(v)

    @field_validator("phone", "alternate_phone")
    @classmethod
    def validate_phone(cls, v):
        if v is not None and not _PHONE_PATTERN.match(v):
            raise ValueError("phone may contain only digits, spaces, +, -, (, ) and .")
        return v

    @field_validator("credit_score_range")
    @classmethod
    def validate_credit_score_range(cls, v):
        if v is not None and v not in CREDIT_SCORE_RANGES:
            raise ValueError(f"credit score range must be one of {list(CREDIT_SCORE_RANGES)}")
        return v

    @field_validator("debt_types", mode="before")
    @classmethod
    def clean_debt_types(cls, v):
        if v is None:
            return v
        if isinstance(v, str):
            v = [v]
        return list(dict.fromkeys(t.strip() for t in v if isinstance(t, str) and t.strip()))


class LeadCreate(LeadFields):
    name: str = Field(..., max_length=100)
    debt_category: DebtCategory = DebtCategory.UNSECURED
    debt_types: List[str] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def name_required(cls, v):
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("debt_types", mode="before")
    @classmethod
    def debt_types_default(cls, v):
        return [] if v is None else v

    @model_validator(mode="after")
    def debt_types_match_category(self):
        invalid = invalid_debt_types(self.debt_category, self.debt_types)
        if invalid:
            raise ValueError(f"debt types {invalid} are not valid for {self.debt_category.value} debt")
        return self


_NUMERIC_PARSERS = (
    ("total_debt_amount", "totalDebtAmount", parse_amount),
    ("monthly_debt_payment", "monthlyDebtPayment", parse_amount),
    ("number_of_creditors", "numberOfCreditors", parse_count),
)


class LeadUpdate(LeadFields):
    name: Optional[str] = Field(None, max_length=100)
    debt_category: Optional[DebtCategory] = None

    @model_validator(mode="before")
    @classmethod
    def drop_unparseable_numbers(cls, data):
        # A rejected number leaves the stored value alone; only null clears it.
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for name, alias, parse in _NUMERIC_PARSERS:
            for key in (name, alias):
                if key in data and data[key] is not None and parse(data[key]) is None:
                    del data[key]
        return data

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        if v is not None and not v:
            raise ValueError("name cannot be blank")
        return v

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class LeadStatusUpdate(CamelModel):
    status: LeadStatus
    follow_up_date: Optional[datetime] = None
    follow_up_notes: Optional[str] = Field(None, max_length=500)


class LeadRecord(CamelModel):
    """A stored lead exactly as persisted, PII unmasked."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    alternate_phone: Optional[str] = None
    debt_category: DebtCategory
    debt_types: List[str] = Field(default_factory=list)
    source: str
    total_debt_amount: Optional[float] = None
    number_of_creditors: Optional[int] = None
    monthly_debt_payment: Optional[float] = None
    credit_score_range: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    notes: Optional[str] = None
    status: LeadStatus
    follow_up_date: Optional[datetime] = None
    follow_up_notes: Optional[str] = None
    converted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class LeadStats(CamelModel):
    total_leads: int
    by_category: Dict[str, int]
    by_status: Dict[str, int]
    conversion_rate: float
    checklist_version: int
