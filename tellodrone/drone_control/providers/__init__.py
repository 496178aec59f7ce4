"""Mini README: Concrete drone provider implementations.

New providers should export a subclass of ``DroneControlProvider`` and call
``REGISTRY.register`` during module import to keep the system discoverable.
"""

from .tello_provider import TelloProvider

__all__ = ["TelloProvider"]
