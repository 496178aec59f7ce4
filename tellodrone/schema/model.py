"""Mini README: In-memory representation of the Tello command schema.

Structure:
    * SchemaIntegrityError - raised when schema data itself is malformed.
    * RangeConstraint - inclusive numeric bound for a parameter.
    * EnumConstraint - fixed ordered set of permitted literal values.
    * CommandSchema - valid command groups, parameter limits and delays.

The schema is leaf data: it is built once from the bundled JSON resource (see
``loader``) and treated as read-only afterwards, which is what lets the
validator be called from any thread without locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Dict, FrozenSet, Mapping, Optional, Tuple, Union


class SchemaIntegrityError(RuntimeError):
    """Raised when the command schema resource is corrupt or inconsistent."""


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class RangeConstraint:
    """Inclusive ``[minimum, maximum]`` bound on a numeric parameter."""

    minimum: float
    maximum: float

    def contains(self, value: object) -> bool:
        """Return ``True`` when ``value`` is a real number within the bounds."""

        if not _is_number(value):
            return False
        return self.minimum <= value <= self.maximum

    def describe(self) -> str:
        return f"{self.minimum}..{self.maximum}"


@dataclass(frozen=True, slots=True)
class EnumConstraint:
    """Fixed, ordered sequence of literal values a parameter may take."""

    allowed: Tuple[Union[float, str], ...]

    def contains(self, value: object) -> bool:
        """Exact membership test.

        Strings only match strings and numbers only match numbers, so ``"1"``
        is not accepted for ``1`` and ``True`` is not accepted for ``1``.
        """

        for candidate in self.allowed:
            if isinstance(candidate, str) or isinstance(value, str):
                if isinstance(candidate, str) and isinstance(value, str) and candidate == value:
                    return True
            elif _is_number(candidate) and _is_number(value) and candidate == value:
                return True
        return False

    def describe(self) -> str:
        return ", ".join(str(item) for item in self.allowed)


Constraint = Union[RangeConstraint, EnumConstraint]
ParameterSpec = Mapping[str, Constraint]


@dataclass(frozen=True, slots=True)
class CommandSchema:
    """Static table of valid commands, their parameter limits and pacing delays."""

    command_groups: Mapping[str, Tuple[str, ...]]
    limits: Mapping[str, ParameterSpec] = field(default_factory=dict)
    delays: Mapping[str, int] = field(default_factory=dict)
    _all_commands: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        union = frozenset(name for group in self.command_groups.values() for name in group)
        object.__setattr__(self, "_all_commands", union)

    @property
    def all_commands(self) -> FrozenSet[str]:
        """Union of every command group, computed once at construction."""

        return self._all_commands

    def is_known(self, command: str) -> bool:
        return command in self.all_commands

    def requires_parameters(self, command: str) -> bool:
        return command in self.limits

    def parameter_spec(self, command: str) -> Optional[ParameterSpec]:
        """Return the parameter spec for ``command`` or ``None`` when it takes none."""

        return self.limits.get(command)

    def delay_for(self, command: str) -> float:
        """Return the pacing delay for ``command`` in seconds (``0.0`` if unlisted)."""

        return self.delays.get(command, 0) / 1000.0

    def describe(self) -> Dict[str, Dict[str, str]]:
        """Summarise limits as printable strings, e.g. for CLI help output."""

        return {
            command: {name: constraint.describe() for name, constraint in spec.items()}
            for command, spec in self.limits.items()
        }
