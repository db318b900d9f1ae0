"""Service locator / dependency container.

The application owns exactly one tutorial service, one progress store and one
viewport service. `gui.app.bootstrap.create_app` constructs them explicitly
and registers them here so that views can reach the shared instances without
module-level singletons in the services themselves.

Usage pattern:
    from gui.services.service_locator import services
    tutorial = services.get_typed("tutorial_service", TutorialService)

In tests:
    services.override("tutorial_service", fake)
"""

from __future__ import annotations

from threading import RLock
from typing import Any, Dict, Iterable, Type, TypeVar

T = TypeVar("T")

__all__ = ["ServiceLocator", "services", "ServiceAlreadyRegisteredError", "ServiceNotFoundError"]


class ServiceAlreadyRegisteredError(RuntimeError):
    """Raised when attempting to register an existing key without allow_override."""


class ServiceNotFoundError(KeyError):
    """Raised when a requested service key is not present."""


class ServiceLocator:
    """Thread-safe service registry keyed by semantic names."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._services: Dict[str, Any] = {}

    def register(self, key: str, value: Any, *, allow_override: bool = False) -> None:
        with self._lock:
            if key in self._services and not allow_override:
                raise ServiceAlreadyRegisteredError(f"Service '{key}' already registered")
            self._services[key] = value

    def get(self, key: str) -> Any:
        with self._lock:
            if key not in self._services:
                raise ServiceNotFoundError(key)
            return self._services[key]

    def get_typed(self, key: str, expected_type: Type[T]) -> T:
        """Retrieve a service and assert it matches expected_type."""
        value = self.get(key)
        if not isinstance(value, expected_type):
            raise TypeError(
                f"Service '{key}' expected type {expected_type!r} but got {type(value)!r}"
            )
        return value

    def try_get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._services.get(key, default)

    def override(self, key: str, value: Any) -> None:
        with self._lock:
            if key not in self._services:
                raise ServiceNotFoundError(key)
            self._services[key] = value

    def unregister(self, key: str) -> None:
        with self._lock:
            self._services.pop(key, None)

    def list_keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._services.keys())

    def clear(self) -> None:
        with self._lock:
            self._services.clear()


services = ServiceLocator()
