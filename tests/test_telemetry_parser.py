"""Mini README: Tests for the telemetry state parser.

Uses state lines captured from two firmware revisions plus a handful of
malformed fragments to confirm the parser stays lenient.
"""

from __future__ import annotations

import pytest

from tellodrone.telemetry import parse_datagram, parse_state

MISSION_PAD_STATE = (
    "mid:0;x:0;y:0;z:0;mpry:0,0,0;pitch:0;roll:0;yaw:0;vgx:0;vgy:0;vgz:0;templ:60;temph:62;"
    "tof:10;h:0;bat:94;baro:-16.92;time:0;agx:13.00;agy:-10.00;agz:-998.00;\r\n"
)
LEGACY_STATE = (
    "pitch:0;roll:0;yaw:0;vgx:0;vgy:0;vgz:0;templ:74;temph:76;tof:10;h:0;bat:81;baro:70.96;"
    "time:0;agx:3.00;agy:-3.00;agz:-1000.00;"
)


def test_parses_mission_pad_state() -> None:
    expected = {
        "mid": 0, "x": 0, "y": 0, "z": 0, "mpry": [0, 0, 0], "pitch": 0, "roll": 0, "yaw": 0,
        "vgx": 0, "vgy": 0, "vgz": 0, "templ": 60, "temph": 62, "tof": 10, "h": 0, "bat": 94,
        "baro": -16.92, "time": 0, "agx": 13.00, "agy": -10.00, "agz": -998.00,
    }
    record = parse_state(MISSION_PAD_STATE)
    assert record == expected
    assert all(isinstance(value, float) for value in record["mpry"])


def test_parses_legacy_state() -> None:
    expected = {
        "pitch": 0, "roll": 0, "yaw": 0, "vgx": 0, "vgy": 0, "vgz": 0, "templ": 74, "temph": 76,
        "tof": 10, "h": 0, "bat": 81, "baro": 70.96, "time": 0, "agx": 3.00, "agy": -3.00,
        "agz": -1000.00,
    }
    assert parse_state(LEGACY_STATE) == expected


def test_parsing_is_repeatable() -> None:
    assert parse_state(LEGACY_STATE) == parse_state(LEGACY_STATE)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("bat:60", 60.0),
        ("baro:-16.92", -16.92),
        ("flip:r", "r"),
        ("acc:+1.5e3", 1500.0),
        ("frac:.5", 0.5),
        ("ver:1.2.3", "1.2.3"),
        ("temp:12abc", "12abc"),
        ("mode:nan", "nan"),
        ("mode:inf", "inf"),
        ("empty:", ""),
    ],
)
def test_scalar_decoding(text: str, expected: object) -> None:
    key = text.split(":", 1)[0]
    assert parse_state(text) == {key: expected}


def test_extra_colons_stay_in_value() -> None:
    assert parse_state("a:b:c;") == {"a": "b:c"}
    assert parse_state("t:12:30;") == {"t": "12:30"}


def test_segments_without_colon_are_dropped() -> None:
    assert parse_state("nofield;") == {}
    assert parse_state("bat:50;garbage;h:10;") == {"bat": 50.0, "h": 10.0}


def test_comma_values_become_lists() -> None:
    assert parse_state("mpry:1,-2,x;") == {"mpry": [1.0, -2.0, "x"]}
    assert parse_state("gap:1,,2") == {"gap": [1.0, "", 2.0]}


def test_last_duplicate_key_wins() -> None:
    assert parse_state("bat:10;bat:20;") == {"bat": 20.0}


def test_empty_input_yields_empty_record() -> None:
    assert parse_state("") == {}
    assert parse_state(";;\r\n") == {}


def test_parse_datagram_decodes_bytes() -> None:
    assert parse_datagram(LEGACY_STATE.encode("ascii")) == parse_state(LEGACY_STATE)
    assert parse_datagram(b"bat:5;name:\xff;") == {"bat": 5.0, "name": "\ufffd"}
