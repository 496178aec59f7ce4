"""Mini README: Command validation package for Tellodrone.

Re-exports ``verify`` and ``format_command`` together with the result and
error types so transports can import everything from one place.
"""

from .validator import (
    CommandParameters,
    CommandValidationError,
    ValidationResult,
    ViolationKind,
    format_command,
    verify,
)

__all__ = [
    "CommandParameters",
    "CommandValidationError",
    "ValidationResult",
    "ViolationKind",
    "format_command",
    "verify",
]
