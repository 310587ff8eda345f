# intake_cli/view_state.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from intake_api.services.taxonomy import allowed_debt_types


class _ViewModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LeadForm(_ViewModel):
    """Raw form fields as typed by the agent; everything is text."""

    name: str = ""
    email: str = ""
    phone: str = ""
    alternate_phone: str = ""
    debt_category: str = "unsecured"
    debt_types: List[str] = Field(default_factory=list)
    total_debt_amount: str = ""
    number_of_creditors: str = ""
    monthly_debt_payment: str = ""
    credit_score_range: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""
    notes: str = ""

    def select_category(self, debt_category: str) -> None:
        if debt_category != self.debt_category:
            self.debt_category = debt_category
            self.debt_types = []

    def toggle_debt_type(self, debt_type: str) -> None:
        if debt_type in self.debt_types:
            self.debt_types.remove(debt_type)
        elif debt_type in allowed_debt_types(self.debt_category):
            self.debt_types.append(debt_type)

    def as_submission(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class Notice(_ViewModel):
    level: Literal["info", "success", "error"]
    message: str


class DashboardState(_ViewModel):
    """Serializable dashboard view state. Holds no business rules."""

    form: LeadForm = Field(default_factory=LeadForm)
    show_form: bool = False
    submitting: bool = False
    loading: bool = False
    notice: Optional[Notice] = None
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0

    def open_form(self) -> None:
        self.show_form = True

    def close_form(self) -> None:
        self.show_form = False
        self.form = LeadForm()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DashboardState":
        return cls.model_validate(data)
