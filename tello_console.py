"""Mini README: Entry point CLI for checking and sending Tello commands.

This script exposes a Typer CLI with offline helpers (``verify``, ``limits``
and ``parse-state``) that only use the command schema and telemetry parser,
plus ``send`` which connects to a drone over UDP. Settings such as the drone
address come from ``TELLODRONE_`` environment variables when available.

Parameters are given as ``KEY=VALUE`` pairs in firmware order, for example
``python tello_console.py verify go x=20 y=20 z=20 speed=50``.
"""

from __future__ import annotations

import json
import re
import time
from typing import Dict, List, Optional, Union

import typer

from tellodrone.commands import CommandValidationError, format_command, verify
from tellodrone.configuration import get_settings
from tellodrone.drone_control import (
    REGISTRY,
    AcknowledgementTimeout,
    CommandInvocation,
    CommandRejectedError,
)
from tellodrone.logging_utils import configure_root_logger
from tellodrone.schema import default_schema
from tellodrone.telemetry import parse_state

cli = typer.Typer(help="Validate, inspect and send Tello SDK commands.")

_INTEGER = re.compile(r"[+-]?\d+")


def _coerce(text: str) -> Union[int, float, str]:
    if _INTEGER.fullmatch(text):
        return int(text)
    try:
        return float(text)
    except ValueError:
        return text


def parse_parameters(pairs: Optional[List[str]]) -> Optional[Dict[str, Union[int, float, str]]]:
    """Turn ``KEY=VALUE`` arguments into an ordered parameter mapping."""

    if not pairs:
        return None
    parameters: Dict[str, Union[int, float, str]] = {}
    for pair in pairs:
        key, separator, value = pair.partition("=")
        if not separator or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, received '{pair}'")
        parameters[key] = _coerce(value)
    return parameters


@cli.command("verify")
def verify_command(
    command: str = typer.Argument(..., help="SDK command name, e.g. 'cw'."),
    params: Optional[List[str]] = typer.Argument(None, help="Parameters as KEY=VALUE."),
) -> None:
    """Check a command against the schema and print its wire text."""

    parameters = parse_parameters(params)
    result = verify(command, parameters)
    if not result.valid:
        detail = f" ({result.detail})" if result.detail else ""
        typer.echo(f"invalid: {result.reason}{detail}", err=True)
        raise typer.Exit(code=1)
    typer.echo(format_command(command, parameters))


@cli.command("limits")
def limits_command() -> None:
    """List every command and its parameter limits."""

    schema = default_schema()
    described = schema.describe()
    for group, commands in schema.command_groups.items():
        typer.echo(f"[{group}]")
        for command in commands:
            limits = described.get(command)
            if limits:
                rendered = " ".join(f"{name}={bounds}" for name, bounds in limits.items())
                typer.echo(f"  {command} {rendered}")
            else:
                typer.echo(f"  {command}")


@cli.command("parse-state")
def parse_state_command(
    line: str = typer.Argument(..., help="Raw telemetry line, e.g. 'pitch:0;roll:0;'."),
) -> None:
    """Parse a telemetry line and print it as JSON."""

    typer.echo(json.dumps(parse_state(line)))


@cli.command("send")
def send_command(
    command: str = typer.Argument(..., help="SDK command name, e.g. 'takeoff'."),
    params: Optional[List[str]] = typer.Argument(None, help="Parameters as KEY=VALUE."),
    host: Optional[str] = typer.Option(None, help="Drone address as host or host:port."),
    force: bool = typer.Option(False, help="Send even if the command fails validation."),
    listen: float = typer.Option(1.0, help="Seconds to print responses after sending."),
) -> None:
    """Connect to the drone, send one command and print its responses."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    parameters = parse_parameters(params)

    try:
        provider = REGISTRY.create("tello", connection_string=host)
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="--host")
    try:
        provider.connect()
        connection = provider.connection
        connection.on("message", lambda message, address: typer.echo(message))
        if force:
            connection.force_send(command, parameters)
        else:
            provider.send_commands([CommandInvocation(name=command, parameters=parameters)])
        time.sleep(listen)
    except CommandValidationError as error:
        typer.echo(str(error), err=True)
        raise typer.Exit(code=1)
    except (AcknowledgementTimeout, CommandRejectedError) as error:
        typer.echo(f"send failed: {error}", err=True)
        raise typer.Exit(code=2)
    finally:
        provider.disconnect()


if __name__ == "__main__":
    cli()
