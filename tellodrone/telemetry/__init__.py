"""Mini README: Telemetry parsing package for Tellodrone.

The ``parser`` module turns state datagrams into plain dictionaries that
application callbacks receive through the connection's ``state`` event.
"""

from .parser import TelemetryRecord, TelemetryValue, parse_datagram, parse_state

__all__ = ["TelemetryRecord", "TelemetryValue", "parse_datagram", "parse_state"]
