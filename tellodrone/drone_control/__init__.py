"""Mini README: Drone control subsystem package initialiser.

Re-exports key abstractions to simplify imports for scripts and the CLI. The
package is divided into ``base`` for abstract classes, ``registry`` for plugin
management, ``events`` and ``tello`` for the UDP transport, and ``providers``
for concrete vendor implementations.
"""

from .base import CommandInvocation, DroneControlProvider
from .events import DEFAULT_EVENTS, EventDispatcher
from .registry import DroneProviderRegistry, REGISTRY
from .tello import AcknowledgementTimeout, CommandRejectedError, NotConnectedError, TelloConnection
from . import providers  # noqa: F401  # ensure built-in providers register on import

__all__ = [
    "AcknowledgementTimeout",
    "CommandInvocation",
    "CommandRejectedError",
    "DEFAULT_EVENTS",
    "DroneControlProvider",
    "DroneProviderRegistry",
    "EventDispatcher",
    "NotConnectedError",
    "REGISTRY",
    "TelloConnection",
]
