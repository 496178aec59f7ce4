"""Mini README: UDP connection to a Tello drone.

Structure:
    * AcknowledgementTimeout / CommandRejectedError / NotConnectedError -
      transport failures raised from ``send``.
    * TelloConnection - binds the command and state sockets, runs one listener
      thread per socket, validates and sends commands and re-emits responses
      and telemetry through an ``EventDispatcher``.

Events fired by a connection:
    * ``connection`` - first ``ok`` received, no arguments.
    * ``state`` - ``(record, address)`` for every telemetry datagram.
    * ``send`` - ``(wire_text, byte_count)`` after a command is transmitted.
    * ``message`` - ``(text, address)`` for responses (``ok`` only when
      ``skip_ok`` is disabled).
    * ``_ok`` - every ``ok`` acknowledgement, no arguments.

Only one command waits for its acknowledgement at a time; concurrent callers
of ``send`` queue on a lock. Read commands (``battery?`` and friends) never
wait, their answers arrive through the ``message`` event.
"""

from __future__ import annotations

import socket
import threading
from typing import Callable, List, Optional, Tuple

from ..commands import CommandParameters, CommandValidationError, format_command, verify
from ..configuration import TelloSettings, get_settings
from ..logging_utils import get_logger
from ..schema import CommandSchema, default_schema
from ..telemetry import parse_datagram
from .events import Callback, EventDispatcher

LOGGER = get_logger(__name__)

RECEIVE_BUFFER_BYTES = 2048
ACKNOWLEDGEMENT = "ok"
HANDSHAKE_COMMAND = "command"

Address = Tuple[str, int]


class AcknowledgementTimeout(TimeoutError):
    """Raised when the drone does not acknowledge a command in time."""


class CommandRejectedError(RuntimeError):
    """Raised when the drone answers a command with an error response."""

    def __init__(self, command: str, response: str) -> None:
        super().__init__(f"Drone rejected '{command}': {response}")
        self.command = command
        self.response = response


class NotConnectedError(RuntimeError):
    """Raised when sending on a connection that has been closed."""


class TelloConnection:
    """Command and telemetry link to a single drone."""

    def __init__(
        self,
        settings: Optional[TelloSettings] = None,
        schema: Optional[CommandSchema] = None,
        *,
        command_socket: Optional[socket.socket] = None,
        state_socket: Optional[socket.socket] = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.schema = schema if schema is not None else default_schema()
        self.address: Address = (self.settings.drone_host, self.settings.command_port)
        self.events = EventDispatcher()
        self.connected = False

        self._command_socket = command_socket or self._bind(self.settings.command_port)
        self._state_socket = state_socket or self._bind(self.settings.state_port)

        self._send_lock = threading.Lock()
        self._acknowledged = threading.Event()
        self._awaiting: Optional[str] = None
        self._rejection: Optional[str] = None
        self._running = False
        self._closed = False
        self._threads: List[threading.Thread] = []
        LOGGER.debug("Created Tello connection to %s:%s", *self.address)

    def _bind(self, port: int) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((self.settings.local_host, port))
        LOGGER.debug("Bound UDP socket on %s:%s", self.settings.local_host, port)
        return sock

    # -- events -------------------------------------------------------------

    def on(self, event: str, callback: Callback) -> None:
        """Attach ``callback`` to ``event``."""

        self.events.attach(event, callback)

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Start the listener threads; called by ``connect``."""

        if self._closed:
            raise NotConnectedError("Connection has been closed")
        if self._running:
            return
        self._running = True
        for name, sock, handler in (
            ("tello-command", self._command_socket, self.handle_command_datagram),
            ("tello-state", self._state_socket, self.handle_state_datagram),
        ):
            sock.settimeout(self.settings.socket_timeout_seconds)
            thread = threading.Thread(target=self._listen, args=(sock, handler), name=name, daemon=True)
            thread.start()
            self._threads.append(thread)

    def connect(self, timeout: Optional[float] = None) -> None:
        """Enter SDK mode: send ``command`` and wait for the first ``ok``."""

        self.start()
        LOGGER.info("Connecting to Tello at %s:%s", *self.address)
        with self._send_lock:
            self._transmit_and_wait(HANDSHAKE_COMMAND, timeout)

    def close(self) -> None:
        """Stop the listeners and release both sockets."""

        if self._closed:
            return
        self._closed = True
        self._running = False
        for sock in (self._command_socket, self._state_socket):
            sock.close()
        for thread in self._threads:
            if thread is not threading.current_thread():
                thread.join(timeout=self.settings.socket_timeout_seconds * 2)
        self._threads.clear()
        self.connected = False
        LOGGER.info("Closed Tello connection to %s:%s", *self.address)

    def __enter__(self) -> "TelloConnection":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- sending ------------------------------------------------------------

    def send(
        self,
        command: str,
        params: Optional[CommandParameters] = None,
        *,
        force: bool = False,
    ) -> str:
        """Validate, render and transmit a command; return the wire text.

        Invalid commands raise ``CommandValidationError`` and nothing is sent
        unless ``force`` is set. Non-read commands block until acknowledged
        when ``await_acknowledgement`` is enabled.
        """

        if self._closed:
            raise NotConnectedError("Connection has been closed")

        result = verify(command, params, schema=self.schema)
        if not result.valid:
            if not force:
                raise CommandValidationError(result)
            LOGGER.warning("Forcing rejected command '%s' (%s)", command, result.reason)

        wire = format_command(command, params)
        if "?" in wire or not self.settings.await_acknowledgement:
            self._transmit(wire)
            return wire

        with self._send_lock:
            self._transmit_and_wait(wire, None)
        return wire

    def force_send(self, command: str, params: Optional[CommandParameters] = None) -> str:
        """Send ``command`` even when it fails validation."""

        return self.send(command, params, force=True)

    def _transmit(self, wire: str) -> int:
        sent = self._command_socket.sendto(wire.encode("utf-8"), self.address)
        LOGGER.debug("Sent '%s' (%s bytes)", wire, sent)
        self.events.fire("send", wire, sent)
        return sent

    def _transmit_and_wait(self, wire: str, timeout: Optional[float]) -> None:
        """Send ``wire`` and block until acknowledged; caller holds ``_send_lock``."""

        if timeout is None:
            timeout = self.settings.acknowledgement_timeout_seconds
        release: Callable[[], None] = self._acknowledged.set
        self._acknowledged.clear()
        self._rejection = None
        self._awaiting = wire
        self.events.attach("_ok", release, once=True)
        try:
            self._transmit(wire)
            if not self._acknowledged.wait(timeout):
                raise AcknowledgementTimeout(f"No acknowledgement for '{wire}' within {timeout}s")
        finally:
            self._awaiting = None
            self.events.detach("_ok", release)

        if self._rejection is not None:
            raise CommandRejectedError(wire, self._rejection)

    # -- receiving ----------------------------------------------------------

    def _listen(self, sock: socket.socket, handler: Callable[[bytes, Address], None]) -> None:
        while self._running:
            try:
                data, address = sock.recvfrom(RECEIVE_BUFFER_BYTES)
            except socket.timeout:
                continue
            except OSError:
                if self._running:
                    LOGGER.exception("Listener socket failed")
                break
            try:
                handler(data, address)
            except Exception:
                LOGGER.exception("Handling datagram from %s failed", address)
        LOGGER.debug("Listener stopped")

    def handle_command_datagram(self, data: bytes, address: Address) -> None:
        """Process a response from the command socket."""

        message = data.decode("utf-8", errors="replace").strip()
        if message == ACKNOWLEDGEMENT:
            self.events.fire("_ok")
            if not self.connected:
                self.connected = True
                LOGGER.info("Tello at %s:%s entered SDK mode", *self.address)
                self.events.fire("connection")
            if not self.settings.skip_ok:
                self.events.fire("message", message, address)
            return

        if self._awaiting is not None and message.lower().startswith("error"):
            LOGGER.warning("Drone answered '%s' with '%s'", self._awaiting, message)
            self._rejection = message
            self._acknowledged.set()
        self.events.fire("message", message, address)

    def handle_state_datagram(self, data: bytes, address: Address) -> None:
        """Parse a telemetry datagram and fire the ``state`` event."""

        self.events.fire("state", parse_datagram(data), address)
