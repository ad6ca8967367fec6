from __future__ import annotations

import dataclasses
import logging
from types import ModuleType
from typing import Any

from regwire.binder import LifetimeBinder
from regwire.config import ScanConfig
from regwire.contracts import ContractResolver, RegistrationEntry
from regwire.generic_registrar import GenericRegistrar
from regwire.scanner import ModuleScanner
from regwire.services import HostContainer

logger = logging.getLogger(__name__)


def _effective_config(modules: tuple[ModuleType | str, ...], config: ScanConfig | None) -> ScanConfig:
    config = config or ScanConfig()
    if modules:
        config = dataclasses.replace(config, modules=config.modules + modules)
    return config


def build_registration_table(config: ScanConfig | None = None) -> tuple[RegistrationEntry, ...]:
    """Scan the configured modules and return every registration entry.

    Nothing is written to a container. Entries follow module order, then
    declaration order, then contract order.

    Raises:
        RegWireModuleLoadError: If any configured module fails to import.

    """
    scanner = ModuleScanner(config)
    resolver = ContractResolver()
    modules = scanner.load_modules()

    entries: list[RegistrationEntry] = []
    candidate_count = 0
    for candidate in scanner.iter_candidates(modules):
        if candidate.metadata is None:
            continue
        candidate_count += 1
        entries.extend(resolver.resolve(candidate))

    logger.info(
        "Service registration pass: modules=%d candidates=%d entries=%d",
        len(modules),
        candidate_count,
        len(entries),
    )
    return tuple(entries)


def register_services(
    services: HostContainer,
    *modules: ModuleType | str,
    config: ScanConfig | None = None,
) -> tuple[RegistrationEntry, ...]:
    """Register every annotated service found in first-party modules.

    The full table is built and checked before the first write, so a module
    that fails to load or an unknown lifecycle leaves ``services`` untouched.

    Args:
        services: Host container receiving the registrations.
        *modules: Extra modules to scan, as module objects or dotted names.
        config: Scan configuration. When neither ``modules`` nor a config is
            given, installed first-party packages are scanned.

    Returns:
        The entries written, in registration order.

    Raises:
        RegWireModuleLoadError: If a module cannot be imported.
        RegWireUnknownLifecycleError: If an entry carries an unknown lifecycle.

    Examples:
        .. code-block:: python

            services = ServiceCollection()
            register_services(services, "myapp.services", "myapp.repositories")

    """
    entries = build_registration_table(_effective_config(modules, config))
    binder = LifetimeBinder()
    for entry in entries:
        binder.check(entry)
    for entry in entries:
        binder.bind(services, entry)
    return entries


def register_resources(
    services: Any,
    *modules: ModuleType | str,
    config: ScanConfig | None = None,
    registrar: GenericRegistrar | None = None,
) -> tuple[type[Any], ...]:
    """Register every class marked with ``register_resource``.

    Args:
        services: Collection passed as the entry point's first argument.
        *modules: Extra modules to scan, as module objects or dotted names.
        config: Scan configuration.
        registrar: Registrar owning the generic entry point. Defaults to one
            bound to ``regwire.resources.add_resource``.

    Returns:
        The registered resource types, in scan order.

    Raises:
        RegWireModuleLoadError: If a module cannot be imported.
        RegWireAmbiguousEntryPointError: If the entry point is not unique.

    """
    scanner = ModuleScanner(_effective_config(modules, config))
    registrar = registrar or GenericRegistrar()

    loaded = scanner.load_modules()
    resource_types = tuple(
        candidate.implementation for candidate in scanner.iter_candidates(loaded) if candidate.is_resource
    )
    if resource_types:
        # Locate before the first write so an ambiguous owner registers nothing.
        _ = registrar.entry_point
    for resource_type in resource_types:
        registrar.register(services, resource_type)

    logger.info(
        "Resource registration pass: modules=%d resources=%d",
        len(loaded),
        len(resource_types),
    )
    return resource_types


__all__ = ["build_registration_table", "register_resources", "register_services"]
