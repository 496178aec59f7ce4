"""Mini README: Loading and integrity checks for the command schema resource.

Structure:
    * SchemaDocument - Pydantic model of the raw JSON document.
    * build_schema - convert a raw mapping into a ``CommandSchema``.
    * load_schema - read a JSON file (the bundled resource by default).
    * default_schema - cached schema honouring the configured override path.

The JSON resource keeps the layout used by the Tello SDK tables:
``validCommands`` (grouped command lists), ``commandLimits`` (parameter
constraints) and ``delays`` (milliseconds). Anything that does not fit that
layout is a deployment error and raises ``SchemaIntegrityError``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from ..configuration import get_settings
from ..logging_utils import get_logger
from .model import CommandSchema, Constraint, EnumConstraint, RangeConstraint, SchemaIntegrityError

LOGGER = get_logger(__name__)

BUNDLED_SCHEMA = "tello_data.json"


class SchemaDocument(BaseModel):
    """Raw shape of the schema JSON document."""

    valid_commands: Dict[str, List[str]] = Field(..., alias="validCommands")
    command_limits: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="commandLimits")
    delays: Dict[str, int] = Field(default_factory=dict)


def _build_constraint(command: str, parameter: str, raw: Any) -> Constraint:
    if isinstance(raw, list):
        if not raw:
            raise SchemaIntegrityError(f"Empty value list for '{command}.{parameter}'")
        for item in raw:
            if isinstance(item, bool) or not isinstance(item, (int, float, str)):
                raise SchemaIntegrityError(
                    f"Unsupported enumeration value {item!r} for '{command}.{parameter}'"
                )
        return EnumConstraint(allowed=tuple(raw))

    if isinstance(raw, dict) and "min" in raw and "max" in raw:
        minimum, maximum = raw["min"], raw["max"]
        for bound in (minimum, maximum):
            if isinstance(bound, bool) or not isinstance(bound, (int, float)):
                raise SchemaIntegrityError(
                    f"Range bounds for '{command}.{parameter}' must be numbers, got {raw!r}"
                )
        if minimum > maximum:
            raise SchemaIntegrityError(
                f"Range for '{command}.{parameter}' has min {minimum} above max {maximum}"
            )
        return RangeConstraint(minimum=minimum, maximum=maximum)

    raise SchemaIntegrityError(
        f"Constraint for '{command}.{parameter}' is neither a range nor a value list: {raw!r}"
    )


def build_schema(data: Mapping[str, Any]) -> CommandSchema:
    """Validate a raw schema mapping and return the immutable ``CommandSchema``."""

    try:
        document = SchemaDocument.model_validate(data)
    except ValidationError as error:
        raise SchemaIntegrityError(f"Schema document is malformed: {error}") from error

    groups = {name: tuple(commands) for name, commands in document.valid_commands.items()}
    known = {command for commands in groups.values() for command in commands}

    limits: Dict[str, Dict[str, Constraint]] = {}
    for command, parameters in document.command_limits.items():
        if command not in known:
            raise SchemaIntegrityError(f"Limits given for unknown command '{command}'")
        limits[command] = {
            parameter: _build_constraint(command, parameter, raw)
            for parameter, raw in parameters.items()
        }

    LOGGER.debug(
        "Built command schema with %s commands, %s parameterised", len(known), len(limits)
    )
    return CommandSchema(command_groups=groups, limits=limits, delays=dict(document.delays))


def load_schema(path: Optional[Union[str, Path]] = None) -> CommandSchema:
    """Load a schema JSON file, defaulting to the resource shipped with the package."""

    try:
        if path is None:
            resource = resources.files(__package__) / "data" / BUNDLED_SCHEMA
            text = resource.read_text(encoding="utf-8")
            source = BUNDLED_SCHEMA
        else:
            text = Path(path).read_text(encoding="utf-8")
            source = str(path)
        data = json.loads(text)
    except (OSError, json.JSONDecodeError) as error:
        raise SchemaIntegrityError(f"Unable to read command schema: {error}") from error

    if not isinstance(data, dict):
        raise SchemaIntegrityError("Command schema must be a JSON object")
    LOGGER.info("Loading command schema from %s", source)
    return build_schema(data)


@lru_cache()
def default_schema() -> CommandSchema:
    """Return the process-wide schema, loaded once."""

    return load_schema(get_settings().schema_path)
