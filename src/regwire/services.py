from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from regwire.lifecycle import Lifecycle


@runtime_checkable
class HostContainer(Protocol):
    """Registration primitives a host container exposes to ``LifetimeBinder``."""

    def add_transient(self, service_type: Any, implementation_type: type[Any]) -> Any: ...

    def add_scoped(self, service_type: Any, implementation_type: type[Any]) -> Any: ...

    def add_singleton(self, service_type: Any, implementation_type: type[Any]) -> Any: ...


@dataclass(frozen=True, slots=True)
class ServiceDescriptor:
    """A registration recorded by ``ServiceCollection``.

    Exactly one of ``implementation_type`` and ``factory`` is set.
    """

    service_type: Any
    lifecycle: Lifecycle
    implementation_type: type[Any] | None = None
    factory: Callable[[], Any] | None = None


class ServiceCollection:
    """Ordered table of service descriptors handed to a container at start-up.

    The collection only records registrations. Construction, scope tracking
    and disposal belong to the container that consumes it.
    """

    def __init__(self) -> None:
        self._descriptors: list[ServiceDescriptor] = []

    def add(
        self,
        service_type: Any,
        implementation_type: type[Any],
        lifecycle: Lifecycle,
    ) -> ServiceCollection:
        """Record ``implementation_type`` under ``service_type`` with ``lifecycle``."""
        self._descriptors.append(
            ServiceDescriptor(
                service_type=service_type,
                lifecycle=lifecycle,
                implementation_type=implementation_type,
            ),
        )
        return self

    def add_transient(self, service_type: Any, implementation_type: type[Any]) -> ServiceCollection:
        return self.add(service_type, implementation_type, Lifecycle.TRANSIENT)

    def add_scoped(self, service_type: Any, implementation_type: type[Any]) -> ServiceCollection:
        return self.add(service_type, implementation_type, Lifecycle.SCOPED)

    def add_singleton(self, service_type: Any, implementation_type: type[Any]) -> ServiceCollection:
        return self.add(service_type, implementation_type, Lifecycle.SINGLETON)

    def add_factory(
        self,
        service_type: Any,
        factory: Callable[[], Any],
        lifecycle: Lifecycle,
    ) -> ServiceCollection:
        """Record a factory-built service."""
        self._descriptors.append(
            ServiceDescriptor(service_type=service_type, lifecycle=lifecycle, factory=factory),
        )
        return self

    def get_descriptors(self, service_type: Any) -> list[ServiceDescriptor]:
        """Return descriptors registered for ``service_type`` in registration order."""
        return [d for d in self._descriptors if d.service_type == service_type]

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(tuple(self._descriptors))

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, service_type: object) -> bool:
        return any(d.service_type == service_type for d in self._descriptors)

    def __repr__(self) -> str:
        return f"ServiceCollection(descriptors={len(self._descriptors)})"


__all__ = ["HostContainer", "ServiceCollection", "ServiceDescriptor"]
