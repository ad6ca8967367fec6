from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from regwire.lifecycle import Lifecycle
from regwire.services import ServiceCollection

TResource = TypeVar("TResource")


@dataclass(slots=True)
class ResourceOptions(Generic[TResource]):
    """Options built for one resource type by its configure callback."""

    resource_type: type[Any]
    settings: dict[str, Any] = field(default_factory=dict)


def add_resource(
    services: ServiceCollection,
    resource_type: type[TResource],
    configure: Callable[[ResourceOptions[TResource]], None] | None = None,
    resource_lifetime: Lifecycle = Lifecycle.SCOPED,
    options_lifetime: Lifecycle = Lifecycle.SCOPED,
) -> ServiceCollection:
    """Register a resource type and its options factory.

    The resource is registered under itself with ``resource_lifetime``. The
    ``ResourceOptions[resource_type]`` key is registered with
    ``options_lifetime`` and built by running ``configure`` on fresh options.

    Args:
        services: Collection receiving the registrations.
        resource_type: Resource class, for example a data-access context.
        configure: Callback that fills in the options.
        resource_lifetime: Lifecycle of the resource itself.
        options_lifetime: Lifecycle of the options object.

    Returns:
        ``services`` for chaining.

    """

    def build_options() -> ResourceOptions[TResource]:
        options: ResourceOptions[TResource] = ResourceOptions(resource_type=resource_type)
        if configure is not None:
            configure(options)
        return options

    services.add_factory(ResourceOptions[resource_type], build_options, options_lifetime)  # type: ignore[valid-type]
    services.add(resource_type, resource_type, resource_lifetime)
    return services


__all__ = ["ResourceOptions", "add_resource"]
