from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Literal, TypeVar, overload

from regwire._internal.type_checks import is_runtime_class
from regwire.exceptions import RegWireInvalidRegistrationError
from regwire.lifecycle import InterfaceStrategy, Lifecycle

C = TypeVar("C", bound=type[Any])

REGISTRATION_METADATA_ATTR = "__regwire_registration__"
RESOURCE_TARGET_ATTR = "__regwire_resource__"


@dataclass(frozen=True, slots=True)
class RegistrationMetadata:
    """Declarative registration settings attached to exactly one class.

    Attributes:
        lifecycle: Lifecycle used for every entry derived from the class.
        strategy: Selection applied to the class's declared contracts.
        contracts: Explicit contract keys. When non-empty they replace the
            declared contracts and ``strategy`` is ignored.

    """

    lifecycle: Lifecycle = Lifecycle.TRANSIENT
    strategy: InterfaceStrategy = InterfaceStrategy.FIRST_ONLY
    contracts: tuple[type[Any], ...] = ()


@dataclass(frozen=True, slots=True)
class GenericRegistrationTarget:
    """Marks a resource class registered through the generic resource entry point.

    Resources are always registered with ``Lifecycle.SCOPED``.
    """


def get_registration_metadata(cls: type[Any]) -> RegistrationMetadata | None:
    """Return metadata declared on ``cls`` itself, ignoring base classes."""
    metadata = vars(cls).get(REGISTRATION_METADATA_ATTR)
    if isinstance(metadata, RegistrationMetadata):
        return metadata
    return None


def is_resource_target(cls: type[Any]) -> bool:
    """Return true when ``cls`` itself is marked with ``register_resource``."""
    return isinstance(vars(cls).get(RESOURCE_TARGET_ATTR), GenericRegistrationTarget)


def _attach(cls: Any, attr: str, marker: object) -> None:
    if not is_runtime_class(cls):
        msg = f"Registration annotations apply to classes only, got {cls!r}."
        raise RegWireInvalidRegistrationError(msg)
    if attr in vars(cls):
        msg = f"Class '{cls.__qualname__}' is already annotated for registration."
        raise RegWireInvalidRegistrationError(msg)
    setattr(cls, attr, marker)


def _build_metadata(
    *,
    lifecycle: Lifecycle,
    strategy: InterfaceStrategy,
    contracts: Iterable[Any],
) -> RegistrationMetadata:
    if not isinstance(lifecycle, Lifecycle):
        msg = f"Lifecycle must be a Lifecycle member, got {lifecycle!r}."
        raise RegWireInvalidRegistrationError(msg)
    if not isinstance(strategy, InterfaceStrategy):
        msg = f"Strategy must be an InterfaceStrategy member, got {strategy!r}."
        raise RegWireInvalidRegistrationError(msg)
    explicit = tuple(contracts)
    for contract in explicit:
        if not is_runtime_class(contract):
            msg = f"Explicit contract must be a class, got {contract!r}."
            raise RegWireInvalidRegistrationError(msg)
    return RegistrationMetadata(lifecycle=lifecycle, strategy=strategy, contracts=explicit)


def _annotate_service(
    cls: C | Literal["from_decorator"],
    metadata: RegistrationMetadata,
) -> C | Callable[[C], C]:
    if cls == "from_decorator":

        def decorator(decorated: C) -> C:
            _attach(decorated, REGISTRATION_METADATA_ATTR, metadata)
            return decorated

        return decorator

    _attach(cls, REGISTRATION_METADATA_ATTR, metadata)
    return cls


@overload
def register_service(
    cls: C,
    *,
    lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    strategy: InterfaceStrategy = InterfaceStrategy.FIRST_ONLY,
    contracts: Iterable[type[Any]] = (),
) -> C: ...


@overload
def register_service(
    cls: Literal["from_decorator"] = "from_decorator",
    *,
    lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    strategy: InterfaceStrategy = InterfaceStrategy.FIRST_ONLY,
    contracts: Iterable[type[Any]] = (),
) -> Callable[[C], C]: ...


def register_service(
    cls: C | Literal["from_decorator"] = "from_decorator",
    *,
    lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    strategy: InterfaceStrategy = InterfaceStrategy.FIRST_ONLY,
    contracts: Iterable[type[Any]] = (),
) -> C | Callable[[C], C]:
    """Mark a class for registration by the next registration pass.

    Nothing is registered at decoration time. ``register_services`` later
    finds the class while scanning its module and derives the contract keys.

    Args:
        cls: Class to annotate, or ``"from_decorator"`` to use decorator form.
        lifecycle: Lifecycle of every entry produced for the class.
        strategy: Which declared contracts to register under.
        contracts: Explicit contract keys overriding the declared contracts.

    Returns:
        The class in direct form, or a decorator callable in decorator form.

    Raises:
        RegWireInvalidRegistrationError: If the class is already annotated or
            an explicit contract is not a class.

    Examples:
        .. code-block:: python

            @register_service(lifecycle=Lifecycle.SINGLETON)
            class SqlUserRepository(UserRepository): ...

    """
    metadata = _build_metadata(lifecycle=lifecycle, strategy=strategy, contracts=contracts)
    return _annotate_service(cls, metadata)


@overload
def service(
    cls: C,
    *,
    lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    contracts: Iterable[type[Any]] = (),
) -> C: ...


@overload
def service(
    cls: Literal["from_decorator"] = "from_decorator",
    *,
    lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    contracts: Iterable[type[Any]] = (),
) -> Callable[[C], C]: ...


def service(
    cls: C | Literal["from_decorator"] = "from_decorator",
    *,
    lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    contracts: Iterable[type[Any]] = (),
) -> C | Callable[[C], C]:
    """Mark a class as a service registered under all of its contracts.

    Shorthand for ``register_service`` with
    ``strategy=InterfaceStrategy.ALL_INTERFACES``.
    """
    metadata = _build_metadata(
        lifecycle=lifecycle,
        strategy=InterfaceStrategy.ALL_INTERFACES,
        contracts=contracts,
    )
    return _annotate_service(cls, metadata)


def register_resource(cls: C) -> C:
    """Mark a resource class for ``register_resources``.

    Examples:
        .. code-block:: python

            @register_resource
            class DataContext: ...

    """
    _attach(cls, RESOURCE_TARGET_ATTR, GenericRegistrationTarget())
    return cls


__all__ = [
    "GenericRegistrationTarget",
    "RegistrationMetadata",
    "get_registration_metadata",
    "is_resource_target",
    "register_resource",
    "register_service",
    "service",
]
