import json

import httpx
import pytest

from intake_cli import cli
from intake_cli.client import IntakeClient, IntakeClientError
from intake_cli.dashboard import (
    CREATE_FAILED,
    LOAD_FAILED,
    NO_LEADS,
    load_leads,
    render_rows,
    submit_form,
)
from intake_cli.presentation import can_view_raw_pii, present_lead, reveal_lead
from intake_cli.view_state import DashboardState

STORED = {
    "id": 7,
    "name": "Jane Doe",
    "email": "jane.doe@example.com",
    "phone": "+1 512 555 0123",
    "alternatePhone": None,
    "debtCategory": "unsecured",
    "debtTypes": ["Credit Cards"],
    "source": "Credit Card Debt",
    "totalDebtAmount": 5000.0,
    "numberOfCreditors": None,
    "monthlyDebtPayment": None,
    "creditScoreRange": None,
    "status": "new",
}


def _client(handler):
    return IntakeClient(api_url="http://intake.test", transport=httpx.MockTransport(handler))


def _page(items):
    def handler(request):
        assert request.url.path == "/api/leads"
        return httpx.Response(200, json={"items": items, "page": 1, "limit": 10, "total": len(items), "pages": 1})

    return handler


def test_only_admin_roles_see_raw_pii():
    assert can_view_raw_pii("admin")
    assert can_view_raw_pii("superadmin")
    assert not can_view_raw_pii("agent1")
    assert not can_view_raw_pii(None)


def test_agents_get_masked_rows():
    row = present_lead(STORED, "agent2")

    assert row.masked
    assert row.email == "ja***@example.com"
    assert row.phone == "***-***-0123"
    assert row.alternate_phone == "—"
    assert row.total_debt_amount == "$5***"
    assert row.monthly_debt_payment == "—"
    assert row.category == "cold"


def test_admin_rows_are_unmasked():
    row = present_lead(STORED, "admin")
    assert not row.masked
    assert row.email == "jane.doe@example.com"
    assert row.total_debt_amount == "5000.0"


def test_reveal_requires_capability():
    with pytest.raises(PermissionError):
        reveal_lead(STORED, "agent1")


async def test_load_leads_presents_rows_for_role():
    state = DashboardState()
    async with _client(_page([STORED])) as client:
        await load_leads(client, state, "agent1")

    assert state.total == 1
    assert state.notice is None
    assert state.loading is False
    assert state.rows[0]["email"] == "ja***@example.com"


async def test_load_leads_empty_shows_no_leads_notice():
    state = DashboardState()
    async with _client(_page([])) as client:
        await load_leads(client, state, "agent1")

    assert state.rows == []
    assert state.notice.level == "info"
    assert state.notice.message == NO_LEADS
    assert render_rows(state.rows) == [NO_LEADS]


async def test_load_leads_transport_failure_falls_back_to_empty_state():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    state = DashboardState(rows=[{"id": 1}], total=1)
    async with _client(handler) as client:
        await load_leads(client, state, "agent1")

    assert state.rows == []
    assert state.total == 0
    assert state.notice.level == "error"
    assert state.notice.message == LOAD_FAILED


async def test_submit_form_sends_cleaned_payload():
    sent = {}

    def handler(request):
        sent.update(json.loads(request.content))
        return httpx.Response(201, json=dict(STORED, email=None, phone=None))

    state = DashboardState()
    state.open_form()
    state.form.name = "Jane Doe"
    state.form.toggle_debt_type("Credit Cards")
    state.form.total_debt_amount = "5000"
    state.form.number_of_creditors = "many"

    async with _client(handler) as client:
        lead = await submit_form(client, state)

    assert sent == {
        "name": "Jane Doe",
        "debtCategory": "unsecured",
        "debtTypes": ["Credit Cards"],
        "source": "Credit Card Debt",
        "totalDebtAmount": 5000.0,
    }
    assert state.show_form is False
    assert state.form.name == ""
    assert state.notice.level == "success"

    row = present_lead(lead, "agent1")
    assert row.email == "—"
    assert row.total_debt_amount == "$5***"


async def test_submit_form_without_name_makes_no_request():
    def handler(request):
        raise AssertionError("no request expected")

    state = DashboardState()
    async with _client(handler) as client:
        assert await submit_form(client, state) is None
    assert state.notice.level == "error"


async def test_submit_form_failure_keeps_form_open():
    def handler(request):
        return httpx.Response(500, json={"code": "internal_error", "message": "boom", "details": {}})

    state = DashboardState()
    state.open_form()
    state.form.name = "Jane Doe"
    async with _client(handler) as client:
        assert await submit_form(client, state) is None

    assert state.show_form is True
    assert state.form.name == "Jane Doe"
    assert state.notice.message == CREATE_FAILED


async def test_client_error_carries_api_code():
    def handler(request):
        return httpx.Response(404, json={"code": "lead_not_found", "message": "Lead not found", "details": {}})

    async with _client(handler) as client:
        with pytest.raises(IntakeClientError) as exc_info:
            await client.update_status(1, "interested")

    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "lead_not_found"


def test_form_category_switch_clears_debt_types():
    state = DashboardState()
    state.form.toggle_debt_type("Credit Cards")
    state.form.toggle_debt_type("Auto Loans")
    assert state.form.debt_types == ["Credit Cards"]

    state.form.select_category("secured")
    assert state.form.debt_types == []


def test_view_state_round_trips_through_dict():
    state = DashboardState()
    state.open_form()
    state.form.city = "Austin"
    assert DashboardState.from_dict(state.to_dict()) == state


def test_cli_without_command_prints_help(capsys):
    assert cli.main([]) == 1
    assert "Lead intake dashboard" in capsys.readouterr().out


async def test_load_leads_non_json_body_falls_back_to_empty_state():
    def handler(request):
        return httpx.Response(200, text="<html>proxy</html>", headers={"content-type": "text/html"})

    state = DashboardState()
    async with _client(handler) as client:
        await load_leads(client, state, "agent1")

    assert state.rows == []
    assert state.notice.level == "error"
    assert state.notice.message == LOAD_FAILED


def test_cli_status_command_updates_lead(monkeypatch, capsys):
    sent = {}

    def handler(request):
        assert request.method == "PUT"
        assert request.url.path == "/api/leads/7/status"
        sent.update(json.loads(request.content))
        return httpx.Response(200, json=dict(STORED, status="follow-up"))

    monkeypatch.setattr(cli, "_client", lambda args: _client(handler))

    code = cli.main(["--role", "agent1", "status", "7", "follow-up", "--follow-up-notes", "call Monday"])

    assert code == 0
    assert sent == {"status": "follow-up", "followUpNotes": "call Monday"}
    out = capsys.readouterr().out
    assert "follow-up" in out
    assert "jane.doe@example.com" not in out


def test_cli_status_command_reports_api_error(monkeypatch, capsys):
    def handler(request):
        return httpx.Response(404, json={"code": "lead_not_found", "message": "Lead not found", "details": {}})

    monkeypatch.setattr(cli, "_client", lambda args: _client(handler))

    assert cli.main(["status", "99", "successful"]) == 1
    assert "Lead not found" in capsys.readouterr().out
