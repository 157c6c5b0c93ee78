"""Dependency injection container.

Stores are handed to callers explicitly instead of living in a process-wide
guarded singleton; the container is the one place that wires configuration
and metrics into them.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from record_store.infrastructure.config import Config
from record_store.infrastructure.metrics import MetricsRegistry

T = TypeVar("T")


class Container:
    """
    Simple dependency injection container.

    Supports singleton and factory registrations with lazy initialization.
    """

    def __init__(self) -> None:
        """Initialize the container."""
        self._factories: dict[type, Callable[[Container], Any]] = {}
        self._instances: dict[type, Any] = {}

    def register_singleton(self, interface: type[T], instance: T) -> None:
        """
        Register a singleton instance.

        Args:
            interface: The interface/type to register
            instance: The singleton instance
        """
        self._instances[interface] = instance

    def register_factory(
        self,
        interface: type[T],
        factory: Callable[[Container], T],
    ) -> None:
        """
        Register a factory function for lazy instantiation.

        The factory runs once, on first resolve; its result is cached.

        Args:
            interface: The interface/type to register
            factory: Factory function that takes the container and returns an instance
        """
        self._factories[interface] = factory
        self._instances.pop(interface, None)

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a dependency.

        Raises:
            KeyError: If no registration exists for the interface
        """
        if interface in self._instances:
            return self._instances[interface]

        if interface in self._factories:
            instance = self._factories[interface](self)
            self._instances[interface] = instance
            return instance

        raise KeyError(f"No registration found for {interface}")

    def has(self, interface: type) -> bool:
        """Check if an interface is registered."""
        return interface in self._factories or interface in self._instances

    def clear(self) -> None:
        """Clear all registrations and instances."""
        self._factories.clear()
        self._instances.clear()


def build_container(
    config: Config | None = None,
    metrics: MetricsRegistry | None = None,
) -> Container:
    """Create a container wired with configuration and metrics.

    Args:
        config: Configuration to register; loaded from the environment if None.
        metrics: Metrics registry to register; a default one is created lazily if None.

    Returns:
        A ready-to-use container.
    """
    container = Container()
    if config is not None:
        container.register_singleton(Config, config)
    else:
        container.register_factory(Config, lambda _: Config())

    if metrics is not None:
        container.register_singleton(MetricsRegistry, metrics)
    else:
        from record_store.infrastructure.metrics import get_metrics

        container.register_factory(MetricsRegistry, lambda _: get_metrics())

    return container
