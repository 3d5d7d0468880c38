# form_adapter.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from config import DEFAULT_RUN_DURATION_MINUTES
from models import ParsedRun, RunFormRecord
from patterns import patterns

logger = logging.getLogger("runintel.form_adapter")


def _to_24h(hours: str, minutes: str, period: str) -> str:
    hour24 = int(hours)
    if not 1 <= hour24 <= 12 or int(minutes) > 59:
        raise ValueError(f"{hours}:{minutes} {period} is not a 12-hour clock time")
    if period.upper() == "PM" and hour24 != 12:
        hour24 += 12
    elif period.upper() == "AM" and hour24 == 12:
        hour24 = 0
    return f"{hour24:02d}:{minutes}"


def _clean_price(price: str) -> str:
    # "$85.00" -> "85"
    m = patterns.PRICE_WHOLE.search(price or "")
    return m.group(1) if m else ""


def resolve_scheduled_time(time_str: str, on_date: str, now: Callable[[], datetime]) -> str:
    """
    Combine a normalized run time with a YYYY-MM-DD date.

    "ASAP" takes the clock's current HH:MM. Anything that is not a 12-hour
    time comes back as "" so the form asks for it instead of guessing.
    """
    if not time_str:
        return ""

    if time_str.strip().upper() == "ASAP":
        return f"{on_date}T{now().strftime('%H:%M')}"

    m = patterns.TIME_12H_STRICT.search(time_str)
    if not m:
        return ""

    try:
        return f"{on_date}T{_to_24h(*m.groups())}"
    except ValueError as e:
        logger.warning(f"Could not convert run time {time_str!r}: {e}")
        return ""


def convert_parsed_run_to_form(
    run: ParsedRun,
    base_date: str = "",
    now: Optional[Callable[[], datetime]] = None,
) -> RunFormRecord:
    clock = now or datetime.now

    detected = patterns.DETECTED_DATE.search(run.notes)
    if detected:
        use_date = detected.group(1)
    else:
        use_date = base_date or clock().date().isoformat()

    return RunFormRecord(
        flight_number=run.flight_number,
        airline=run.airline,
        departure=run.departure_airport,
        arrival=run.arrival_airport,
        pickup_location=run.pickup_location,
        dropoff_location=run.dropoff_location,
        scheduled_time=resolve_scheduled_time(run.time, use_date, clock),
        estimated_duration=DEFAULT_RUN_DURATION_MINUTES,
        type=run.type,
        price=_clean_price(run.price),
        notes=patterns.DETECTED_DATE_SEGMENT.sub("", run.notes, count=1),
        status="cancelled" if run.cancelled else "scheduled",
    )
