"""Annotation-driven registration with regwire.

This module demonstrates:

1. ``@register_service`` with ``FIRST_ONLY`` registering under one contract.
2. ``@register_service`` with ``ALL_INTERFACES`` registering under every contract.
3. ``@register_resource`` registering a scoped resource and its options.
4. Classes without annotations being skipped by the scan.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Protocol

from regwire import (
    InterfaceStrategy,
    Lifecycle,
    ResourceOptions,
    ScanConfig,
    ServiceCollection,
    register_resource,
    register_resources,
    register_service,
    register_services,
)


class IRepo(Protocol):
    def get_messages(self) -> list[str]: ...


class ISvc(ABC):
    @abstractmethod
    def get_hello_message(self) -> str: ...


class ITestable(Protocol):
    def is_this_a_test(self) -> bool: ...


@register_service(lifecycle=Lifecycle.SINGLETON)
class Repo(IRepo):
    def get_messages(self) -> list[str]:
        return ["first", "second"]


@register_service(lifecycle=Lifecycle.TRANSIENT, strategy=InterfaceStrategy.ALL_INTERFACES)
class Svc(ISvc, ITestable):
    def __init__(self, repo: IRepo) -> None:
        self.repo = repo

    def get_hello_message(self) -> str:
        return "Hello World!"

    def is_this_a_test(self) -> bool:
        return True


@register_resource
class DataContext:
    pass


class Unregistered:
    pass


def main() -> None:
    services = ServiceCollection()
    config = ScanConfig(modules=(sys.modules[__name__],))

    for entry in register_services(services, config=config):
        contract = entry.contract.__name__
        implementation = entry.implementation.__name__
        print(f"{contract} -> {implementation} ({entry.lifecycle.name})")
    # => IRepo -> Repo (SINGLETON)
    # => ISvc -> Svc (TRANSIENT)
    # => ITestable -> Svc (TRANSIENT)

    register_resources(services, config=config)
    print(f"resource_registered={DataContext in services}")  # => resource_registered=True
    options_registered = ResourceOptions[DataContext] in services
    print(f"options_registered={options_registered}")  # => options_registered=True
    print(f"unregistered_skipped={Unregistered not in services}")  # => unregistered_skipped=True


if __name__ == "__main__":
    main()
