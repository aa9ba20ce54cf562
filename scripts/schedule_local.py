#!/usr/bin/env python3
"""
Interactive local scheduling harness (no HTTP).

Usage:
  python3 scripts/schedule_local.py

Commands:
  add HH:MM MINUTES [TRAVEL]   create and confirm an appointment today
  check HH:MM SERVICE_ID [ADDRESS]
                              run the interactive conflict pre-check (travel on when ADDRESS given)
  del ID                      delete an appointment
  now [HH:MM]                 show current/next, optionally at another time today
  list                        list today's appointments
  /quit
"""

from __future__ import annotations

import asyncio
import sys
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.exceptions import AppointmentNotFoundError
from app.application.utils.duration import occupied_end
from app.domain.entities.appointment import Appointment, AppointmentStatus, ServiceSelection
from app.domain.entities.schedule_form import ScheduleForm
from app.domain.entities.validation import ValidationResult
from app.wiring.dependencies import (
    get_appointment_store,
    get_appointment_use_case,
    get_schedule_validation_service,
    get_timezone,
)


def _today_at(hhmm: str) -> datetime:
    hour, minute = (int(part) for part in hhmm.split(":", 1))
    return datetime.now(get_timezone()).replace(hour=hour, minute=minute, second=0, microsecond=0)


def _fmt(appointment: Appointment | None) -> str:
    if appointment is None:
        return "-"
    return (
        f"#{appointment.id} {appointment.scheduled_at:%H:%M}-{occupied_end(appointment):%H:%M} "
        f"({appointment.duration_minutes}m + {appointment.travel_minutes}m travel) {appointment.status.value}"
    )


def _print_result(result: ValidationResult) -> None:
    print(f"  [{result.sequence}] {result.state.value}" + (f": {result.conflict_message}" if result.conflict_message else ""))


async def _run() -> None:
    store = get_appointment_store()
    use_case = get_appointment_use_case()
    validation = get_schedule_validation_service(on_change=_print_result)

    print(__doc__)
    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not line:
            continue
        if line in {"/quit", "/exit"}:
            return

        cmd, *args = line.split(maxsplit=3)
        try:
            if cmd == "add" and len(args) >= 2:
                # Written straight to the store so past times are allowed here.
                appointment = store.create(
                    scheduled_at=_today_at(args[0]),
                    duration_minutes=int(args[1]),
                    travel_minutes=int(args[2]) if len(args) > 2 else 0,
                    client_id=1,
                    services=(),
                    status=AppointmentStatus.confirmed,
                )
                print(f"  added {_fmt(appointment)}")
            elif cmd == "check" and len(args) >= 2:
                address = args[2] if len(args) > 2 else None
                form = ScheduleForm(
                    scheduled_at=_today_at(args[0]),
                    client_id=1,
                    services=(ServiceSelection(service_id=int(args[1])),),
                    include_travel=address is not None,
                    address=address,
                )
                await validation.validate(form)
            elif cmd == "del" and args:
                use_case.delete(int(args[0]))
                print("  deleted")
            elif cmd == "now":
                at = _today_at(args[0]) if args else None
                selection = use_case.temporal_selection(at)
                print(f"  current: {_fmt(selection.current)}")
                print(f"  next:    {_fmt(selection.next)}")
            elif cmd == "list":
                for appointment in use_case.list_today():
                    print(f"  {_fmt(appointment)}")
            else:
                print("  unknown command")
        except (ValueError, AppointmentNotFoundError) as e:
            print(f"  error: {e}")


if __name__ == "__main__":
    asyncio.run(_run())
