#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP).

Usage:
  python3 scripts/bookings_local.py [email]

What it does:
- Logs in through the same wiring the API uses (in-memory demo API unless BOOKING_API_URL is set)
- Lists bookings with the actions offered to the logged-in role
- Books one or more services and runs transition actions
"""

from __future__ import annotations

import sys
from datetime import date, datetime, time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from barberbook.application.exceptions import (  # noqa: E402
    ActionInFlightError,
    ActionNotAllowedError,
    BookingApiContractError,
    BookingApiError,
    NotFoundError,
    SessionRequiredError,
)
from barberbook.application.use_cases.create_bookings import BookingRequest  # noqa: E402
from barberbook.domain.entities.session import Session  # noqa: E402
from barberbook.domain.policies.authorization import BookingAction  # noqa: E402
from barberbook.infrastructure.mock.demo_data import CUSTOMER, DEMO_PASSWORD, DEMO_SHOP  # noqa: E402
from barberbook.wiring.dependencies import (  # noqa: E402
    get_create_bookings_use_case,
    get_manage_bookings_use_case,
    get_session_use_case,
)

HELP = """Commands:
  /list                                  -> bookings with offered actions
  /book <service_id,...> <YYYY-MM-DD> <HH:MM>
  /do <booking_id> <action> [reason|new start ISO]
  /quit"""


def _print_bookings(session: Session) -> None:
    views = get_manage_bookings_use_case(session).list_bookings(session)
    if not views:
        print("(no bookings)")
    for view in views:
        b = view.booking
        actions = ", ".join(a.value for a in view.actions) or "-"
        print(f"{b.id}  {b.start_time.isoformat()}  {b.status.value:<11}  {b.service.name}  [{actions}]")


def _book(session: Session, args: list[str]) -> None:
    service_ids, day, at = args[0].split(","), date.fromisoformat(args[1]), time.fromisoformat(args[2])
    outcome = get_create_bookings_use_case(session).submit(
        session, BookingRequest(shop_id=DEMO_SHOP.id, service_ids=service_ids, day=day, at=at)
    )
    print(f"created: {[b.id for b in outcome.created]}  total: ${outcome.quote.total_price}")
    if not outcome.succeeded:
        print(f"failed at {outcome.failed_service.name}: {outcome.error}")


def _do(session: Session, args: list[str]) -> None:
    booking_id, action = args[0], BookingAction(args[1])
    extra = " ".join(args[2:]) or None
    uc = get_manage_bookings_use_case(session)
    if action is BookingAction.RESCHEDULE:
        outcome = uc.perform(session, booking_id, action, new_start_time=datetime.fromisoformat(extra or ""))
    else:
        outcome = uc.perform(session, booking_id, action, reason=extra)
    if outcome.succeeded:
        print(f"{booking_id} -> {outcome.booking.status.value}")
    else:
        print(f"ERROR: {outcome.error}")


def main() -> None:
    email = sys.argv[1] if len(sys.argv) > 1 else CUSTOMER.email
    session = get_session_use_case().login(email, DEMO_PASSWORD)
    print(f"\nLogged in as {session.first_name} {session.last_name} ({session.role.value})")
    print(HELP)

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return
        if not line:
            continue

        cmd, *args = line.split()
        try:
            if cmd in ("/quit", "/exit"):
                print("Bye!")
                return
            elif cmd == "/list":
                _print_bookings(session)
            elif cmd == "/book" and len(args) == 3:
                _book(session, args)
            elif cmd == "/do" and len(args) >= 2:
                _do(session, args)
            else:
                print(HELP)
        except (
            ValueError,
            ActionNotAllowedError,
            ActionInFlightError,
            NotFoundError,
            SessionRequiredError,
            BookingApiError,
            BookingApiContractError,
        ) as e:
            print(f"ERROR: {e}")


if __name__ == "__main__":
    main()
