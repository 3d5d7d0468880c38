# airlines.py
# ---------------------------------------------------------------------
# Carrier and airport shorthand seen in dispatch messages for the Jackson
# Hole operation. Extend the tables; the parser never needs to change.

from types import MappingProxyType
from typing import Mapping, Optional

from config import HOME_AIRPORT
from patterns import patterns

UNKNOWN_AIRLINE = "Unknown Airline"

AIRLINE_CODES: Mapping[str, str] = MappingProxyType({
    "AA": "American Airlines",
    "UA": "United Airlines",
    "DL": "Delta Air Lines",
    "SK": "SkyWest",
    "JLL": "Jackson Hole Airlines",
})

# Local/ground codes dispatchers type in place of the real airport
AIRPORT_MAPPINGS: Mapping[str, str] = MappingProxyType({
    "AP": "JAC",  # "the airport" = Jackson Hole
    "JLL": "JAC",
    "SK": "SLC",
    "DL": "DEN",
})


def carrier_prefix(flight_number: str) -> Optional[str]:
    m = patterns.CARRIER_PREFIX.match(flight_number or "")
    return m.group(0) if m else None


def airline_name_for(flight_number: str) -> str:
    """
    DL1466   -> "Delta Air Lines"
    ZZ12     -> "ZZ Airlines"
    "" / 123 -> "Unknown Airline"
    """
    code = carrier_prefix(flight_number)
    if not code:
        return UNKNOWN_AIRLINE
    return AIRLINE_CODES.get(code, f"{code} Airlines")


def normalize_airport_code(text: str, home_airport: str = HOME_AIRPORT) -> str:
    code = (text or "").strip().upper()
    if patterns.AIRPORT_CODE.match(code):
        return AIRPORT_MAPPINGS.get(code, code)
    return home_airport
