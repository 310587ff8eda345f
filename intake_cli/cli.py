# intake_cli/cli.py
"""
Agent dashboard for the lead intake API.
"""
from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import Callable, Dict, Optional

from intake_api.services.scoring import LEAD_STATUSES
from intake_api.services.taxonomy import CREDIT_SCORE_RANGES, DEBT_TYPES_BY_CATEGORY
from intake_cli.client import IntakeClient, IntakeClientError
from intake_cli.config import CLISettings
from intake_cli.dashboard import load_leads, render_row, render_rows, submit_form
from intake_cli.presentation import ROLES, present_lead
from intake_cli.view_state import DashboardState


def _supports_color() -> bool:
    """Check if terminal supports ANSI color codes."""
    if sys.platform == "win32":
        return os.getenv("TERM") == "xterm" or os.getenv("ANSICON") is not None
    return sys.stdout.isatty()


SUPPORTS_COLOR = _supports_color()

GREEN = '\033[92m' if SUPPORTS_COLOR else ''
RED = '\033[91m' if SUPPORTS_COLOR else ''
BLUE = '\033[94m' if SUPPORTS_COLOR else ''
RESET = '\033[0m' if SUPPORTS_COLOR else ''


def print_success(message: str):
    print(f"{GREEN}[✓]{RESET} {message}")


def print_error(message: str):
    print(f"{RED}[✗]{RESET} {message}")


def print_info(message: str):
    print(f"{BLUE}[i]{RESET} {message}")


def _print_notice(state: DashboardState) -> None:
    if state.notice is None:
        return
    printer = {"success": print_success, "error": print_error}.get(state.notice.level, print_info)
    printer(state.notice.message)


def _client(args: argparse.Namespace) -> IntakeClient:
    return IntakeClient(api_url=args.api_url, timeout=args.timeout, api_prefix=args.api_prefix)


async def cmd_add(args: argparse.Namespace) -> int:
    """Command: register a new lead from form flags."""
    state = DashboardState()
    state.open_form()
    form = state.form
    form.select_category(args.debt_category)
    for debt_type in args.debt_type or []:
        form.toggle_debt_type(debt_type)
    for field in (
        "name", "email", "phone", "alternate_phone", "total_debt_amount",
        "number_of_creditors", "monthly_debt_payment", "credit_score_range",
        "address", "city", "state", "zipcode", "notes",
    ):
        value = getattr(args, field)
        if value is not None:
            setattr(form, field, value)

    async with _client(args) as client:
        lead = await submit_form(client, state)

    _print_notice(state)
    if lead is None:
        return 1
    for line in render_row(present_lead(lead, args.role)):
        print(line)
    return 0


async def cmd_list(args: argparse.Namespace) -> int:
    """Command: show a page of leads as the given role sees them."""
    state = DashboardState()
    async with _client(args) as client:
        await load_leads(
            client,
            state,
            args.role,
            page=args.page,
            limit=args.limit,
            status=args.status,
            category=args.category,
            search=args.search,
        )

    if state.rows:
        for line in render_rows(state.rows):
            print(line)
        print_info(f"Showing {len(state.rows)} of {state.total} leads")
    _print_notice(state)
    return 1 if state.notice and state.notice.level == "error" else 0


async def cmd_status(args: argparse.Namespace) -> int:
    """Command: move a lead to a new status."""
    follow_up = {}
    if args.follow_up_date:
        follow_up["followUpDate"] = args.follow_up_date
    if args.follow_up_notes:
        follow_up["followUpNotes"] = args.follow_up_notes

    async with _client(args) as client:
        try:
            lead = await client.update_status(args.lead_id, args.status, **follow_up)
        except IntakeClientError as e:
            print_error(f"Failed to update lead {args.lead_id}: {e.message}")
            return 1

    print_success(f"Lead {args.lead_id} is now {lead['status']}")
    for line in render_row(present_lead(lead, args.role)):
        print(line)
    return 0


async def cmd_stats(args: argparse.Namespace) -> int:
    """Command: dashboard statistics."""
    async with _client(args) as client:
        try:
            stats = await client.lead_stats()
        except IntakeClientError:
            print_error("Failed to load statistics")
            return 1

    print_info(f"Total leads: {stats['totalLeads']}")
    for tier, count in stats["byCategory"].items():
        print(f"  {tier:<15} {count}")
    for status, count in stats["byStatus"].items():
        print(f"  {status:<15} {count}")
    print_info(f"Conversion rate: {stats['conversionRate']}%")
    return 0


COMMANDS: Dict[str, Callable] = {
    'add': cmd_add,
    'list': cmd_list,
    'stats': cmd_stats,
    'status': cmd_status,
}


def create_parser(settings: Optional[CLISettings] = None) -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    settings = settings or CLISettings()
    parser = argparse.ArgumentParser(
        description='Lead intake dashboard',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--api-url', default=settings.api_url, help='API base URL')
    parser.add_argument('--api-prefix', default=settings.api_prefix, help='API path prefix')
    parser.add_argument('--timeout', type=float, default=settings.timeout, help='Request timeout in seconds')
    parser.add_argument('--role', choices=ROLES, default=settings.role, help='Viewer role')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    add_parser = subparsers.add_parser('add', help='Register a new lead')
    add_parser.add_argument('name')
    add_parser.add_argument('--email')
    add_parser.add_argument('--phone')
    add_parser.add_argument('--alternate-phone')
    add_parser.add_argument('--debt-category', choices=list(DEBT_TYPES_BY_CATEGORY), default='unsecured')
    add_parser.add_argument('--debt-type', action='append', help='Repeat in selection order')
    add_parser.add_argument('--total-debt-amount')
    add_parser.add_argument('--number-of-creditors')
    add_parser.add_argument('--monthly-debt-payment')
    add_parser.add_argument('--credit-score-range', choices=list(CREDIT_SCORE_RANGES))
    add_parser.add_argument('--address')
    add_parser.add_argument('--city')
    add_parser.add_argument('--state')
    add_parser.add_argument('--zipcode')
    add_parser.add_argument('--notes')

    list_parser = subparsers.add_parser('list', help='List leads')
    list_parser.add_argument('--page', type=int, default=1)
    list_parser.add_argument('--limit', type=int, default=10)
    list_parser.add_argument('--status', choices=LEAD_STATUSES)
    list_parser.add_argument('--category', choices=['hot', 'warm', 'cold'])
    list_parser.add_argument('--search')

    subparsers.add_parser('stats', help='Show dashboard statistics')

    status_parser = subparsers.add_parser('status', help='Change a lead status')
    status_parser.add_argument('lead_id', type=int)
    status_parser.add_argument('status', choices=LEAD_STATUSES)
    status_parser.add_argument('--follow-up-date', help='ISO 8601 date-time')
    status_parser.add_argument('--follow-up-notes')

    return parser


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    command_func = COMMANDS[parsed_args.command]
    try:
        return asyncio.run(command_func(parsed_args))
    except KeyboardInterrupt:
        print_error("\nInterrupted by user")
        return 130


if __name__ == '__main__':
    sys.exit(main())
