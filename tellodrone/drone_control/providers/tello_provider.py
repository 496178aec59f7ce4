"""Mini README: Tello drone provider integration.

Structure:
    * TelloProvider - ``DroneControlProvider`` backed by a ``TelloConnection``.

The provider runs command sequences through the validating connection. When
acknowledgement waiting is switched off it falls back to pacing commands
with the delay table bundled in the command schema.
"""

from __future__ import annotations

import time
from typing import Dict, Iterable, Optional

from ..base import CommandInvocation, DroneControlProvider
from ..registry import REGISTRY
from ..tello import TelloConnection
from ...configuration import TelloSettings, get_settings
from ...logging_utils import get_logger

LOGGER = get_logger(__name__)


def _settings_for(connection_string: Optional[str], settings: TelloSettings) -> TelloSettings:
    """Apply a ``host`` or ``host:port`` connection string on top of ``settings``."""

    if not connection_string:
        return settings
    host, _, port = connection_string.partition(":")
    update: Dict[str, object] = {"drone_host": host}
    if port:
        if not port.isdigit():
            raise ValueError(f"Invalid port '{port}' in connection string '{connection_string}'")
        update["command_port"] = int(port)
    return settings.model_copy(update=update)


class TelloProvider(DroneControlProvider):
    """Provider driving a Tello over its UDP text SDK."""

    provider_name = "tello"

    def __init__(
        self,
        connection_string: Optional[str] = None,
        *,
        settings: Optional[TelloSettings] = None,
        connection: Optional[TelloConnection] = None,
    ) -> None:
        super().__init__(connection_string)
        self.settings = _settings_for(connection_string, settings or get_settings())
        self._connection = connection

    @property
    def connection(self) -> TelloConnection:
        """The underlying connection, bound lazily on first use."""

        if self._connection is None:
            self._connection = TelloConnection(self.settings)
        return self._connection

    def connect(self) -> None:
        LOGGER.info("Connecting to Tello with connection '%s'", self.connection_string)
        self.connection.connect()

    def disconnect(self) -> None:
        if self._connection is None:
            return
        LOGGER.info("Disconnecting Tello")
        self._connection.close()
        self._connection = None

    def send_commands(self, commands: Iterable[CommandInvocation]) -> None:
        for command in commands:
            LOGGER.info("Tello command: %s -> %s", command.name, command.parameters)
            self.connection.send(command.name, command.parameters)
            pause = command.duration_seconds
            if pause is None and not self.settings.await_acknowledgement:
                pause = self.connection.schema.delay_for(command.name)
            if pause:
                time.sleep(pause)

    def emergency_land(self) -> None:
        super().emergency_land()
        self.connection.force_send("emergency")

    def metadata(self) -> Dict[str, str]:
        details = super().metadata()
        details["address"] = f"{self.settings.drone_host}:{self.settings.command_port}"
        details["environment"] = self.settings.environment
        details["connected"] = str(self._connection is not None and self._connection.connected)
        return details


REGISTRY.register(TelloProvider)
