# intake_cli/dashboard.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog

from intake_api.services.taxonomy import clean_submission
from intake_cli.client import IntakeClient, IntakeClientError
from intake_cli.presentation import LeadRow, present_lead
from intake_cli.view_state import DashboardState, Notice

logger = structlog.get_logger(__name__)

NO_LEADS = "No leads found"
LOAD_FAILED = "Failed to load leads"
CREATE_FAILED = "Failed to create lead"

_COLUMNS = (
    ("ID", "id"),
    ("Name", "name"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("Source", "source"),
    ("Debt", "total_debt_amount"),
    ("Monthly", "monthly_debt_payment"),
    ("Credit", "credit_score_range"),
    ("Status", "status"),
    ("Tier", "category"),
    ("Complete", "completion_percentage"),
)


async def load_leads(
    client: IntakeClient,
    state: DashboardState,
    role: Optional[str],
    **filters: Any,
) -> DashboardState:
    """Fetch a page of leads and present them for ``role``.

    A failed request leaves an empty table and an error notice.
    """
    state.loading = True
    try:
        page = await client.list_leads(**filters)
    except IntakeClientError as e:
        logger.warning("dashboard.load_failed", error=e.message, status_code=e.status_code)
        state.rows = []
        state.total = 0
        state.notice = Notice(level="error", message=LOAD_FAILED)
        return state
    finally:
        state.loading = False

    state.rows = [present_lead(lead, role).to_dict() for lead in page.get("items", [])]
    state.total = page.get("total", len(state.rows))
    state.notice = None if state.rows else Notice(level="info", message=NO_LEADS)
    return state


async def submit_form(client: IntakeClient, state: DashboardState) -> Optional[Dict[str, Any]]:
    """Send the form as a new lead; returns the stored record or ``None``."""
    payload = clean_submission(state.form.as_submission())
    if not payload["name"]:
        state.notice = Notice(level="error", message="Name is required")
        return None

    state.submitting = True
    try:
        lead = await client.create_lead(payload)
    except IntakeClientError as e:
        logger.warning("dashboard.create_failed", error=e.message, status_code=e.status_code)
        state.notice = Notice(level="error", message=CREATE_FAILED)
        return None
    finally:
        state.submitting = False

    state.close_form()
    state.notice = Notice(level="success", message="Lead created successfully")
    return lead


def render_rows(rows: Iterable[Dict[str, Any]]) -> List[str]:
    rows = list(rows)
    if not rows:
        return [NO_LEADS]

    table = [[header for header, _ in _COLUMNS]]
    for row in rows:
        table.append([str(row.get(key, "")) for _, key in _COLUMNS])

    widths = [max(len(line[i]) for line in table) for i in range(len(_COLUMNS))]
    lines = ["  ".join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip() for line in table]
    lines.insert(1, "  ".join("-" * width for width in widths))
    return lines


def render_row(row: LeadRow) -> List[str]:
    return render_rows([row.to_dict()])
