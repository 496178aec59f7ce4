"""Mini README: Parser for Tello state telemetry lines.

Structure:
    * TelemetryValue / TelemetryRecord - type aliases for parsed output.
    * parse_state - decode a ``key:value;key:value;`` text line.
    * parse_datagram - decode raw UDP bytes, then ``parse_state``.

The drone broadcasts lines such as
``pitch:0;roll:0;yaw:0;mpry:0,0,0;templ:60;baro:-16.92;\\r\\n``. Each field is
turned into a float when its text is a plain decimal literal, a list when it
holds comma-separated values, and is otherwise kept as the original text.

Telemetry is a best-effort stream, so parsing never raises on content:
segments without a ``:`` are dropped and unparseable numbers stay as strings.
"""

from __future__ import annotations

import re
from typing import Dict, List, Union

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

Scalar = Union[float, str]
TelemetryValue = Union[Scalar, List[Scalar]]
TelemetryRecord = Dict[str, TelemetryValue]

_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _decode_scalar(text: str) -> Scalar:
    """Return ``text`` as a float when it is entirely a decimal literal."""

    if _DECIMAL.fullmatch(text):
        return float(text)
    return text


def parse_state(text: str) -> TelemetryRecord:
    """Parse one telemetry line into a mapping of field name to value."""

    record: TelemetryRecord = {}
    for segment in text.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        key, separator, value = segment.partition(":")
        if not separator:
            LOGGER.debug("Dropping telemetry segment without a key: %r", segment)
            continue
        if "," in value:
            record[key] = [_decode_scalar(item) for item in value.split(",")]
        else:
            record[key] = _decode_scalar(value)
    return record


def parse_datagram(data: bytes, encoding: str = "utf-8") -> TelemetryRecord:
    """Decode a raw state datagram and parse it; undecodable bytes are replaced."""

    return parse_state(data.decode(encoding, errors="replace"))
