"""Mini README: Schema-driven command validation and wire formatting.

Structure:
    * ViolationKind - enum naming each way a command can be rejected.
    * ValidationResult - outcome of ``verify`` with a readable reason.
    * CommandValidationError - raised at the send boundary for rejected commands.
    * verify - check a command and its parameters against the schema.
    * format_command - render a command and its parameters as wire text.

Both functions are pure: they read the static schema and nothing else, so the
transport can call them from any thread. ``verify`` reports user mistakes as a
failed ``ValidationResult`` and only raises for programming errors (a
non-string command name) or a corrupt schema (``SchemaIntegrityError``).

Wire formatting is positional. ``format_command`` emits parameter values in
the order the caller inserted them, not the order the schema declares them,
so ``{"x": 1, "y": 2, "z": 3, "speed": 10}`` must be supplied in firmware
order. Reordering here would change what real drones receive.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Union

from ..logging_utils import get_logger
from ..schema import CommandSchema, EnumConstraint, RangeConstraint, SchemaIntegrityError, default_schema

LOGGER = get_logger(__name__)

ParameterValue = Union[int, float, str]
CommandParameters = Mapping[str, ParameterValue]


class ViolationKind(str, Enum):
    """Reasons a command can fail validation."""

    UNKNOWN_COMMAND = "unknown command"
    MISSING_OPTIONS = "missing options"
    MISSING_PARAMETER = "missing parameter"
    UNEXPECTED_PARAMETER = "unexpected parameter"
    OUT_OF_RANGE = "out of range"
    NOT_ALLOWED = "not an allowed value"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating a single command invocation."""

    command: str
    violation: Optional[ViolationKind] = None
    parameter: Optional[str] = None
    detail: str = ""

    @property
    def valid(self) -> bool:
        return self.violation is None

    @property
    def reason(self) -> Optional[str]:
        """Readable explanation such as ``"missing parameter speed"``."""

        if self.violation is None:
            return None
        if self.violation in (ViolationKind.MISSING_PARAMETER, ViolationKind.UNEXPECTED_PARAMETER):
            return f"{self.violation.value} {self.parameter}"
        return self.violation.value

    def __bool__(self) -> bool:
        return self.valid

    def raise_for_violation(self) -> None:
        """Raise ``CommandValidationError`` when the command was rejected."""

        if not self.valid:
            raise CommandValidationError(self)


class CommandValidationError(ValueError):
    """Raised when a command is rejected and the caller did not force it."""

    def __init__(self, result: ValidationResult) -> None:
        message = f"Invalid command '{result.command}': {result.reason}"
        if result.detail:
            message = f"{message} ({result.detail})"
        super().__init__(message)
        self.result = result


def _reject(
    command: str,
    violation: ViolationKind,
    *,
    parameter: Optional[str] = None,
    detail: str = "",
) -> ValidationResult:
    result = ValidationResult(command=command, violation=violation, parameter=parameter, detail=detail)
    LOGGER.debug("Rejected command '%s': %s %s", command, result.reason, detail)
    return result


def verify(
    command: str,
    params: Optional[CommandParameters] = None,
    *,
    schema: Optional[CommandSchema] = None,
) -> ValidationResult:
    """Check ``command`` and ``params`` against the command schema.

    Checks run in order and stop at the first failure: unknown command,
    missing parameter set, missing or unexpected parameter names, then each
    value against its range or enumeration. Commands that take no parameters
    accept (and ignore) any parameters supplied.
    """

    if not isinstance(command, str):
        raise TypeError(f"Command name must be a string, received {type(command).__name__}")

    if schema is None:
        schema = default_schema()

    if not schema.is_known(command):
        return _reject(command, ViolationKind.UNKNOWN_COMMAND, detail=f"'{command}'")

    spec = schema.parameter_spec(command)
    if spec is not None and not params:
        return _reject(
            command,
            ViolationKind.MISSING_OPTIONS,
            detail=f"expected {', '.join(spec)}",
        )

    if spec is None:
        return ValidationResult(command=command)

    for name in spec:
        if name not in params:
            return _reject(command, ViolationKind.MISSING_PARAMETER, parameter=name)

    for name in params:
        if name not in spec:
            return _reject(command, ViolationKind.UNEXPECTED_PARAMETER, parameter=name)

    for name, value in params.items():
        constraint = spec[name]
        if isinstance(constraint, RangeConstraint):
            if not constraint.contains(value):
                return _reject(
                    command,
                    ViolationKind.OUT_OF_RANGE,
                    parameter=name,
                    detail=f"{name}={value!r}, expected {constraint.describe()}",
                )
        elif isinstance(constraint, EnumConstraint):
            if not constraint.contains(value):
                return _reject(
                    command,
                    ViolationKind.NOT_ALLOWED,
                    parameter=name,
                    detail=f"{name}={value!r}, expected one of [{constraint.describe()}]",
                )
        else:
            raise SchemaIntegrityError(
                f"Unsupported constraint {constraint!r} for '{command}.{name}'"
            )

    return ValidationResult(command=command)


def format_command(command: str, params: Optional[CommandParameters] = None) -> str:
    """Render ``command`` followed by each parameter value in insertion order."""

    if not params:
        return command
    return " ".join([command, *(str(value) for value in params.values())])
