from __future__ import annotations

import types
from typing import Any, TypeGuard, TypeVar, get_args, get_origin

from typing_extensions import is_protocol


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_contract_type(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate can serve as a contract key for other classes.

    Contracts are ``typing.Protocol`` classes and abstract classes.

    Args:
        candidate: Base class taken from an implementation's MRO.

    """
    if not is_runtime_class(candidate):
        return False
    if is_protocol(candidate):
        return True
    return bool(getattr(candidate, "__abstractmethods__", None))


def _substitute(argument: Any, bindings: dict[TypeVar, Any]) -> Any:
    if isinstance(argument, TypeVar):
        return bindings.get(argument, argument)
    parameters = getattr(argument, "__parameters__", ())
    if parameters and all(parameter in bindings for parameter in parameters):
        return argument[tuple(bindings[parameter] for parameter in parameters)]
    return argument


def _has_typevars(arguments: tuple[Any, ...]) -> bool:
    return any(
        isinstance(argument, TypeVar) or getattr(argument, "__parameters__", ())
        for argument in arguments
    )


def _closed_bases(implementation: type[Any]) -> dict[type[Any], Any]:
    """Map generic contract bases of ``implementation`` to their closed aliases.

    Type arguments are carried down the MRO, so ``class Impl(Base[int])``
    with ``class Base(Repo[T])`` maps ``Repo`` to ``Repo[int]``. Bases whose
    arguments stay open are left out.
    """
    bindings_by_class: dict[type[Any], dict[TypeVar, Any]] = {implementation: {}}
    closed: dict[type[Any], Any] = {}
    for klass in implementation.__mro__:
        bindings = bindings_by_class.get(klass, {})
        for alias in vars(klass).get("__orig_bases__", ()):
            origin = get_origin(alias)
            if not is_runtime_class(origin) or origin in bindings_by_class:
                continue
            arguments = tuple(_substitute(argument, bindings) for argument in get_args(alias))
            parameters = getattr(origin, "__parameters__", ())
            if len(parameters) == len(arguments):
                bindings_by_class[origin] = dict(zip(parameters, arguments, strict=True))
            if is_contract_type(origin) and arguments and not _has_typevars(arguments):
                closed[origin] = origin[arguments]
    return closed


def declared_contracts(implementation: type[Any]) -> tuple[Any, ...]:
    """Return contract keys implemented by a class, in MRO order.

    Generic contracts are keyed by their closed alias, for example
    ``Repo[int]``, when the class binds all of their type arguments.
    """
    closed = _closed_bases(implementation)
    return tuple(
        closed.get(base, base) for base in implementation.__mro__[1:] if is_contract_type(base)
    )


__all__ = ["declared_contracts", "is_contract_type", "is_runtime_class"]
