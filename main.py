"""
Command-line entry point for the availability planner.

Prints the bookable dates, a month calendar, the slot list for a date, or
the price list for a consultant described on the command line. With
--consultant-id and --fetch, the profile and booked slots are loaded from
API_BASE_URL instead.

Usage:
    python main.py dates --days Mon-Fri --hours "6-8 hours"
    python main.py calendar --days Mon,Wed,Fri --month 2026-11
    python main.py slots --days Mon-Fri --date 2026-10-21
    python main.py quote --fee 500
    python main.py slots --consultant-id 64f0c --fetch --date 2026-10-21
"""

import argparse
import asyncio
import logging
import sys
from datetime import date, datetime
from typing import Optional

from consult_booking.config import settings
from consult_booking.planner import AvailabilityPlanner
from consult_booking.planner.dates import GRID_WEEKDAY_HEADERS, month_title
from consult_booking.schemas.client_schema import ClientProfile
from consult_booking.schemas.consultant_schema import ConsultantAvailability
from consult_booking.services.api_client import ApiClient
from consult_booking.services.availability import fetch_booked_markers
from consult_booking.services.consultants import get_consultant_availability

logger = logging.getLogger(__name__)


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from None


def _year_month(value: str) -> tuple[int, int]:
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid month {value!r}, expected YYYY-MM") from None
    return parsed.year, parsed.month


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Consultation availability planner")
    parser.add_argument("command", choices=["dates", "calendar", "slots", "quote"])
    parser.add_argument("--consultant-id", default="local", help="Consultant id")
    parser.add_argument("--days", default="", help="Working days, e.g. 'Mon-Fri' or 'Mon,Wed'")
    parser.add_argument("--hours", default=None, help="Hours per day, e.g. '6' or '6-8 hours'")
    parser.add_argument("--fee", default=None, help="Base fee for a 30-minute session")
    parser.add_argument("--date", type=_iso_date, default=None, help="Date for 'slots' (YYYY-MM-DD)")
    parser.add_argument("--month", type=_year_month, default=None, help="Month for 'calendar' (YYYY-MM)")
    parser.add_argument("--window", type=int, default=None, help="Days ahead for 'dates'")
    parser.add_argument(
        "--fetch",
        action="store_true",
        help="Load the profile and booked slots from the backend.",
    )
    parser.add_argument("--token", default=None, help="Bearer token for the backend")
    return parser


def _print_dates(planner: AvailabilityPlanner, window: Optional[int]) -> None:
    snapshot = planner.snapshot()
    for candidate in planner.candidate_dates(snapshot, window):
        marker = " (today)" if candidate.is_today else ""
        print(f"{candidate.iso_date}  {candidate.day_name}  {candidate.display_date}{marker}")


def _print_calendar(planner: AvailabilityPlanner, month: Optional[tuple[int, int]]) -> None:
    snapshot = planner.snapshot()
    if month:
        year, month_num = month
    else:
        year, month_num = snapshot.today.year, snapshot.today.month

    print(month_title(year, month_num).center(7 * 4))
    print(" ".join(f"{h:>3}" for h in GRID_WEEKDAY_HEADERS))
    cells = planner.month_grid(year, month_num, snapshot)
    for row in range(0, len(cells), 7):
        line = []
        for cell in cells[row:row + 7]:
            if not cell.in_month:
                line.append("  .")
            elif cell.is_selectable:
                line.append(f"{cell.calendar_date.day:>3}")
            else:
                line.append(f"{'x':>3}")
        print(" ".join(line))


def _print_quote(planner: AvailabilityPlanner) -> None:
    for option in planner.fee_options(ClientProfile(user_id="preview")):
        print(f"{option['label']:<26} {settings.pricing.currency} {option['fee']}")


async def _print_slots(
    planner: AvailabilityPlanner, day: date, client: Optional[ApiClient]
) -> None:
    snapshot = planner.snapshot()
    booked: frozenset[str] = frozenset()
    if client is not None:
        booked = await fetch_booked_markers(client, planner.consultant_id, day)
    slots = planner.slots_for(day, snapshot, booked)
    if not slots:
        print(f"No slots available on {day.isoformat()}.")
        return
    for slot in slots:
        print(f"{slot.slot_id}  {slot.display_label}")


async def run(args: argparse.Namespace) -> int:
    client: Optional[ApiClient] = None
    if args.fetch:
        client = ApiClient(token=args.token)
    try:
        if client is not None:
            availability = await get_consultant_availability(client, args.consultant_id)
            if availability is None:
                print(f"Could not load consultant {args.consultant_id}.", file=sys.stderr)
                return 1
        else:
            availability = ConsultantAvailability(
                consultant_id=args.consultant_id,
                weekly_days=args.days.split(",") if args.days else [],
                available_hours_per_day=args.hours,
                session_fee_base=args.fee,
            )
        planner = AvailabilityPlanner(availability)
        logger.debug("Running %s for consultant %s", args.command, planner.consultant_id)

        if args.command == "dates":
            _print_dates(planner, args.window)
        elif args.command == "calendar":
            _print_calendar(planner, args.month)
        elif args.command == "quote":
            _print_quote(planner)
        else:
            day = args.date or planner.snapshot().today
            await _print_slots(planner, day, client)
        return 0
    finally:
        if client is not None:
            await client.close()


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
