"""Mini README: Core package initializer for Tellodrone.

This module exposes the pure command validator and telemetry parser so that
scripts can check commands or decode state lines without touching sockets.
The UDP transport lives in ``tellodrone.drone_control``.
"""

from .commands import CommandValidationError, ValidationResult, format_command, verify
from .logging_utils import get_logger
from .telemetry import parse_datagram, parse_state

__all__ = [
    "CommandValidationError",
    "ValidationResult",
    "format_command",
    "get_logger",
    "parse_datagram",
    "parse_state",
    "verify",
]
