from datetime import datetime

import pytest

PICKUP_BLOCK = [
    "101*2 SUV",
    "11:00 AM",
    "AA123",
    "JAC",
    "2 adults",
    "Teton Village Hotel",
    "2",
    "$85",
]

DROPOFF_BLOCK = [
    "102*1 EXEC",
    "2:30 PM",
    "Four Seasons Resort",
    "AP DL1466",
    "Smith party",
    "Jackson Hole Airport",
    "3",
    "$120.00",
]

ASAP_BLOCK = [
    "ASAP",
    "UA456",
    "AP",
    "Jones 307-555-1234",
    "Amangani",
    "1",
    "$95",
]


def as_message(*blocks):
    return "\n".join(line for block in blocks for line in block)


@pytest.fixture
def fixed_now():
    return lambda: datetime(2024, 1, 1, 14, 7)


@pytest.fixture
def pickup_message():
    return as_message(PICKUP_BLOCK)


@pytest.fixture
def multi_run_message():
    return as_message(PICKUP_BLOCK, DROPOFF_BLOCK, ASAP_BLOCK)
