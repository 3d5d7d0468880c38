import pytest

from conftest import ASAP_BLOCK, DROPOFF_BLOCK, PICKUP_BLOCK, as_message
from schedule_parser import is_block_start, segment, segment_lines, split_lines


def test_split_lines_trims_and_drops_blanks():
    assert split_lines("  a \n\n\t\n b\n") == ["a", "b"]
    assert split_lines("   \n  ") == []


@pytest.mark.parametrize(
    "line, expected",
    [
        ("101*2 SUV", True),
        ("7 suv", True),
        ("12 EXEC", True),
        ("Black SEDAN", True),
        ("ASAP", True),
        ("asap", True),
        ("SUV", False),
        ("ASAP please", False),
        ("Teton Village Hotel", False),
    ],
)
def test_is_block_start(line, expected):
    assert is_block_start(line) is expected


def test_single_run_is_one_block():
    assert segment(as_message(PICKUP_BLOCK)) == [PICKUP_BLOCK]


def test_first_line_marker_does_not_open_empty_block():
    blocks = segment_lines(["ASAP", "UA456", "AP"])
    assert blocks == [["ASAP", "UA456", "AP"]]


def test_markers_split_runs():
    blocks = segment(as_message(PICKUP_BLOCK, DROPOFF_BLOCK, ASAP_BLOCK))
    assert blocks == [PICKUP_BLOCK, DROPOFF_BLOCK, ASAP_BLOCK]


def test_leading_text_becomes_its_own_block():
    blocks = segment("Schedule for today\n" + as_message(PICKUP_BLOCK))
    assert blocks == [["Schedule for today"], PICKUP_BLOCK]


def test_vehicle_word_in_notes_splits_block():
    # Known limitation: marker detection is per line
    lines = PICKUP_BLOCK[:5] + ["Needs a SEDAN not SUV"] + PICKUP_BLOCK[5:]
    blocks = segment_lines(lines)
    assert len(blocks) == 2
    assert blocks[1][0] == "Needs a SEDAN not SUV"


def test_segmentation_keeps_every_line_in_order():
    message = "header\n\n" + as_message(PICKUP_BLOCK, ASAP_BLOCK, DROPOFF_BLOCK) + "\ntrailing note"
    lines = split_lines(message)
    blocks = segment_lines(lines)
    assert [line for block in blocks for line in block] == lines
