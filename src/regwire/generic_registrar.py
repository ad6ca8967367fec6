from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from types import ModuleType
from typing import Any, TypeVar, get_args, get_origin, get_type_hints

from regwire import resources
from regwire.exceptions import RegWireAmbiguousEntryPointError
from regwire.lifecycle import Lifecycle
from regwire.services import ServiceCollection

logger = logging.getLogger(__name__)

ResourceRegistration = Callable[[Any], Any]


def _configure_nothing(_options: Any) -> None:
    return None


class GenericRegistrar:
    """Register resource types through a host entry point generic over the resource type.

    The entry point is located once, on first use, among the public functions
    of ``owner``. It must take the collection as its first parameter, take
    ``type[T]`` as its second parameter, and use exactly one ``TypeVar``.
    Each resource type is then specialised once into a bound registration
    callable kept in the registrar's dispatch table.

    Args:
        owner: Module or class exposing the generic entry point. Defaults to
            ``regwire.resources``.
        collection_type: Type annotated on the entry point's first parameter.
        name: Optional function name restricting the search.

    """

    def __init__(
        self,
        owner: ModuleType | type[Any] | None = None,
        *,
        collection_type: type[Any] = ServiceCollection,
        name: str | None = None,
    ) -> None:
        self._owner = owner if owner is not None else resources
        self._collection_type = collection_type
        self._name = name
        self._entry_point: Callable[..., Any] | None = None
        self._dispatch: dict[type[Any], ResourceRegistration] = {}

    @property
    def entry_point(self) -> Callable[..., Any]:
        """Return the located entry point, locating it on first access.

        Raises:
            RegWireAmbiguousEntryPointError: If zero or several functions match.

        """
        if self._entry_point is None:
            self._entry_point = self._locate_entry_point()
        return self._entry_point

    def register(self, services: Any, resource_type: type[Any]) -> None:
        """Register ``resource_type`` with scoped resource and options lifetimes."""
        registration = self._dispatch.get(resource_type)
        if registration is None:
            registration = self._specialise(resource_type)
            self._dispatch[resource_type] = registration
        registration(services)
        logger.debug("Registered resource %s", resource_type.__qualname__)

    def _specialise(self, resource_type: type[Any]) -> ResourceRegistration:
        entry_point = self.entry_point

        def registration(services: Any) -> Any:
            return entry_point(
                services,
                resource_type,
                _configure_nothing,
                Lifecycle.SCOPED,
                Lifecycle.SCOPED,
            )

        return registration

    def _locate_entry_point(self) -> Callable[..., Any]:
        matches = [
            function
            for name, function in inspect.getmembers(self._owner, inspect.isfunction)
            if not name.startswith("_")
            and (self._name is None or name == self._name)
            and self._defined_on_owner(function)
            and self._is_generic_entry_point(function)
        ]
        if len(matches) != 1:
            raise RegWireAmbiguousEntryPointError(
                self._owner,
                [function.__qualname__ for function in matches],
            )
        logger.debug("Located generic registration entry point %s", matches[0].__qualname__)
        return matches[0]

    def _defined_on_owner(self, function: Callable[..., Any]) -> bool:
        if isinstance(self._owner, ModuleType):
            return function.__module__ == self._owner.__name__
        return function.__qualname__.startswith(f"{self._owner.__qualname__}.")

    def _is_generic_entry_point(self, function: Callable[..., Any]) -> bool:
        try:
            hints = get_type_hints(function)
        except (AttributeError, NameError, TypeError) as error:
            logger.debug("Skipping %s: unresolved annotations (%s)", function.__qualname__, error)
            return False

        parameters = list(inspect.signature(function).parameters.values())
        if len(parameters) < 2:  # noqa: PLR2004
            return False
        collection_hint = hints.get(parameters[0].name)
        if (get_origin(collection_hint) or collection_hint) is not self._collection_type:
            return False

        type_parameter = hints.get(parameters[1].name)
        if get_origin(type_parameter) is not type:
            return False
        type_arguments = get_args(type_parameter)
        if len(type_arguments) != 1 or not isinstance(type_arguments[0], TypeVar):
            return False

        hints.pop("return", None)
        typevars: dict[TypeVar, None] = {}
        for hint in hints.values():
            _collect_typevars_into(value=hint, found=typevars)
        return len(typevars) == 1


def _collect_typevars_into(*, value: Any, found: dict[TypeVar, None]) -> None:
    if isinstance(value, TypeVar):
        found[value] = None
        return

    if isinstance(value, (list, tuple)):
        for item in value:
            _collect_typevars_into(value=item, found=found)
        return

    origin = get_origin(value)
    if origin is not None:
        for argument in get_args(value):
            _collect_typevars_into(value=argument, found=found)
        return

    for parameter in getattr(value, "__parameters__", ()):
        if isinstance(parameter, TypeVar):
            found[parameter] = None


__all__ = ["GenericRegistrar"]
