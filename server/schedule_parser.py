# schedule_parser.py
"""
Schedule-message parser for Run-Intel.

Turns a copy-pasted dispatch message (SMS, email, scheduling system export)
into ParsedRun records. There is no grammar: lines are grouped into blocks
at vehicle-class / ASAP markers, then each block is read positionally:

    0  run ID          "101*2 SUV"
    1  time            "11:00 AM" / "ASAP"
    2  flight or origin "AA123"    / "Teton Village Hotel"
    3  airport / flight "JAC"      / "AP DL1466"
    4  passenger info
    5  location
    6  passenger count
    7  price

Blocks that open with the time carry no run ID and shift up by one line.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional

from airlines import UNKNOWN_AIRLINE, airline_name_for, normalize_airport_code
from config import MIN_BLOCK_LINES
from logging_utils import log_event
from models import ParsedRun, ParseResult, RunType
from patterns import patterns

logger = logging.getLogger("runintel.parser")

Clock = Callable[[], datetime]

EMPTY_MESSAGE_ERROR = "Empty message provided"
NO_LINES_ERROR = "No valid lines found in message"
CANCELLED_MARKER = "CANCELLED"
NOTES_SEPARATOR = " | "

_MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}


# ---------------- segmentation ----------------

def split_lines(message: str) -> List[str]:
    return [line.strip() for line in message.split("\n") if line.strip()]


def is_block_start(line: str) -> bool:
    return bool(patterns.BLOCK_START.search(line) or patterns.ASAP.match(line))


def segment_lines(lines: List[str]) -> List[List[str]]:
    """
    Group lines into one block per run candidate.

    A marker line closes the open block and opens the next one, unless
    nothing has been collected yet. Marker detection is purely per line, so
    "SEDAN" inside a notes line also splits; short fragments that produces
    are caught by the minimum-length check downstream.
    """
    blocks: List[List[str]] = []
    current: List[str] = []

    for line in lines:
        if is_block_start(line) and current:
            blocks.append(current)
            current = [line]
        else:
            current.append(line)

    if current:
        blocks.append(current)

    return blocks


def segment(message: str) -> List[List[str]]:
    return segment_lines(split_lines(message))


# ---------------- field predicates / extractors ----------------

def normalize_time(raw: str) -> str:
    """
    "11am"     -> "11:00 AM"
    "1:30pm"   -> "01:30 PM"
    "asap"     -> "ASAP"
    "noonish"  -> unchanged
    """
    cleaned = raw.strip().upper()
    if cleaned == "ASAP":
        return "ASAP"

    m = patterns.TIME_12H.search(cleaned)
    if not m:
        return raw

    hours, minutes, period = m.group(1), m.group(2) or "00", m.group(3)
    return f"{hours.zfill(2)}:{minutes.zfill(2)} {period.upper()}"


def is_time_first(line: str) -> bool:
    return bool(patterns.TIME_ONLY_LINE.match(line.strip()))


def is_cancelled(lines: List[str]) -> bool:
    return any(patterns.CANCEL.search(line) for line in lines)


def extract_phone_number(text: str) -> Optional[str]:
    m = patterns.PHONE.search(text)
    return m.group(0) if m else None


def extract_price(lines: List[str], price_line: str = "") -> str:
    # Positional price line first, then anything in the block that looks like "$85"
    for line in [price_line, *lines]:
        m = patterns.PRICE.search(line)
        if m:
            return m.group(0)
    return price_line


def is_flight_number(text: str) -> bool:
    cleaned = text.strip()
    return any(p.match(cleaned) for p in patterns.FLIGHT_NO_STRICT)


def has_flight_in_line(text: str) -> bool:
    return bool(patterns.FLIGHT_NO_TRAILING.search(text.strip()))


def extract_flight_number(text: str) -> Optional[str]:
    """
    "aa 123"               -> "AA123"
    "JLL CABIN # 111-105"  -> "JLL111105"
    "WAS 12 NOON DL1466"   -> "DL1466"
    """
    cleaned = text.strip().upper()

    for pattern in (*patterns.FLIGHT_NO_STRICT, patterns.FLIGHT_NO_TRAILING):
        m = pattern.search(cleaned)
        if m:
            ident = patterns.WHITESPACE.sub("", m.group(0))
            ident = patterns.CABIN_MARKER.sub("", ident, count=1)
            return ident.replace("-", "")

    return None


def classify_run_type(third_line: str) -> RunType:
    # Pickups come from the airport, so the flight shows up early
    if is_flight_number(third_line):
        return "pickup"
    if has_flight_in_line(third_line):
        return "pickup"
    return "dropoff"


def compose_notes(
    passenger_info: str = "",
    passenger_count: str = "",
    price: str = "",
    phone: Optional[str] = None,
    cancelled: bool = False,
    source_id: str = "",
) -> str:
    segments = [
        f"Passenger: {passenger_info}" if passenger_info else "",
        f"Count: {passenger_count}" if passenger_count else "",
        f"Price: {price}" if price else "",
        f"Phone: {phone}" if phone else "",
        CANCELLED_MARKER if cancelled else "",
        f"Original ID: {source_id}" if source_id else "",
    ]
    return NOTES_SEPARATOR.join(s for s in segments if s)


# ---------------- block interpreter ----------------

def _line(lines: List[str], idx: int) -> str:
    return lines[idx].strip() if idx < len(lines) else ""


def interpret_block(
    lines: List[str],
    block_index: int,
    min_lines: int = MIN_BLOCK_LINES,
) -> Optional[ParsedRun]:
    """
    Read one block into a ParsedRun.

    Never raises: anything unexpected is logged and reported as None, which
    the caller records as a per-block error.
    """
    if len(lines) < min_lines:
        return None

    try:
        synthesized_id = f"run-{block_index}"
        # A block opened by its time line ("11:00 AM", or the "ASAP" boundary
        # marker) has no source ID: synthesize one and read every field one
        # line earlier.
        offset = 1 if is_time_first(_line(lines, 0)) else 0

        if offset:
            run_id = synthesized_id
            raw_time = _line(lines, 0)
        else:
            run_id = _line(lines, 0) or synthesized_id
            raw_time = _line(lines, 1)

        third_line = _line(lines, 2 - offset)
        fourth_line = _line(lines, 3 - offset)
        passenger_info = _line(lines, 4 - offset)
        location_info = _line(lines, 5 - offset)
        passenger_count = _line(lines, 6 - offset)
        price = extract_price(lines, _line(lines, 7 - offset))

        time = normalize_time(raw_time)
        cancelled = is_cancelled(lines)
        phone = extract_phone_number(" ".join(lines))
        run_type = classify_run_type(third_line)

        airport = normalize_airport_code(fourth_line)
        if run_type == "pickup":
            flight_number = extract_flight_number(third_line) or ""
            pickup_location = airport
            dropoff_location = location_info
        else:
            flight_number = extract_flight_number(fourth_line) or ""
            pickup_location = third_line
            dropoff_location = airport

        airline = airline_name_for(flight_number) if flight_number else UNKNOWN_AIRLINE

        notes = compose_notes(
            passenger_info=passenger_info,
            passenger_count=passenger_count,
            price=price,
            phone=phone,
            cancelled=cancelled,
            source_id=run_id,
        )

        return ParsedRun(
            id=run_id,
            time=time,
            flight_number=flight_number,
            airline=airline,
            departure_airport=airport,
            arrival_airport=airport,
            pickup_location=pickup_location,
            dropoff_location=dropoff_location,
            type=run_type,
            passenger_info=passenger_info,
            passenger_count=passenger_count,
            price=price,
            cancelled=cancelled,
            notes=notes,
        )
    except Exception as e:
        log_event(
            logger,
            "schedule_block_failed",
            level=logging.ERROR,
            exc_info=True,
            block_index=block_index,
            line_count=len(lines),
            error=str(e),
        )
        return None


# ---------------- message-level helpers ----------------

def _parse_date_match(pattern, match, today: date) -> date:
    if pattern is patterns.DATE_RELATIVE:
        word = match.group(1).lower()
        shift = {"yesterday": -1, "today": 0, "tomorrow": 1}[word]
        return today + timedelta(days=shift)

    if pattern is patterns.DATE_MDY:
        month, day, year = (int(g) for g in match.groups())
        if year < 100:
            year += 2000
    elif pattern is patterns.DATE_YMD:
        year, month, day = (int(g) for g in match.groups())
    elif pattern is patterns.DATE_MD:
        month, day = (int(g) for g in match.groups())
        year = today.year
    else:
        month = _MONTHS[match.group(1)[:3].lower()]
        day = int(match.group(2))
        year = today.year

    return date(year, month, day)


def extract_date_from_message(message: str, now: Optional[Clock] = None) -> Optional[str]:
    """Return the first date mentioned in the message as YYYY-MM-DD."""
    today = (now or datetime.now)().date()
    date_patterns = (
        patterns.DATE_MDY,
        patterns.DATE_YMD,
        patterns.DATE_RELATIVE,
        patterns.DATE_MD,
        patterns.DATE_MONTH_NAME,
    )

    for line in message.split("\n"):
        for pattern in date_patterns:
            m = pattern.search(line)
            if not m:
                continue
            try:
                return _parse_date_match(pattern, m, today).isoformat()
            except ValueError:
                # 13/45 and friends: keep looking
                continue

    return None


def parse_schedule_message(message: str, now: Optional[Clock] = None) -> ParseResult:
    if not message or not message.strip():
        return ParseResult(success=False, runs=[], errors=[EMPTY_MESSAGE_ERROR], warnings=[])

    runs: List[ParsedRun] = []
    errors: List[str] = []
    warnings: List[str] = []
    blocks: List[List[str]] = []
    detected_date: Optional[str] = None

    try:
        detected_date = extract_date_from_message(message, now)

        lines = split_lines(message)
        if not lines:
            return ParseResult(success=False, runs=[], errors=[NO_LINES_ERROR], warnings=[])

        blocks = segment_lines(lines)

        for index, block in enumerate(blocks):
            if len(block) < MIN_BLOCK_LINES:
                warnings.append(
                    f"Block {index + 1} has insufficient lines ({len(block)} < {MIN_BLOCK_LINES})"
                )
                continue

            run = interpret_block(block, index)
            if run is None:
                errors.append(f"Failed to parse block {index + 1}")
                continue

            if detected_date:
                run.notes = f"{run.notes}{NOTES_SEPARATOR}Detected date: {detected_date}"
            runs.append(run)
    except Exception as e:
        log_event(logger, "schedule_message_failed", level=logging.ERROR, exc_info=True, error=str(e))
        return ParseResult(success=False, runs=[], errors=[f"Parse error: {e}"], warnings=[])

    result = ParseResult(runs=runs, errors=errors, warnings=warnings)
    log_event(
        logger,
        "schedule_message_parsed",
        blocks=len(blocks),
        runs=len(runs),
        errors=len(errors),
        warnings=len(warnings),
        detected_date=detected_date,
    )
    return result


def is_schedule_message(text: str) -> bool:
    """Cheap check for paste handlers: does this look like a dispatch message at all?"""
    if not text or len(text) < 20:
        return False

    lines = [line for line in text.split("\n") if line.strip()]
    if len(lines) < 4:
        return False

    hints = [
        any(patterns.HINT_FLIGHT.search(line) for line in lines),
        any(patterns.HINT_TIME.search(line) for line in lines),
        any(patterns.HINT_VEHICLE.search(line) for line in lines),
        any(patterns.HINT_PRICE.search(line) for line in lines),
        any(patterns.HINT_RUN_ID.search(line) for line in lines),
        any(patterns.HINT_AIRPORT.search(line) for line in lines),
    ]
    return sum(hints) >= 2
